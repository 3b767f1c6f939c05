"""Host platform detection."""

import sys
from enum import Enum


class Platform(str, Enum):
    """Platform families that change default behaviour."""

    MACOS = "macos"
    WINDOWS = "windows"
    LINUX = "linux"

    @property
    def uses_cmd_as_secondary(self) -> bool:
        """macOS and Windows map the secondary modifier to cmd."""
        return self in (Platform.MACOS, Platform.WINDOWS)


def detect_platform() -> Platform:
    """Map sys.platform onto a platform family (BSDs count as linux)."""
    if sys.platform == "darwin":
        return Platform.MACOS
    if sys.platform.startswith("win"):
        return Platform.WINDOWS
    return Platform.LINUX


# Resolved once at startup
HOST_PLATFORM = detect_platform()
