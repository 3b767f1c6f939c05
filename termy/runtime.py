"""Load a config once and resolve it into an immutable runtime snapshot."""

import logging
import threading
from pathlib import Path
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field

from .colors import PaletteResolution, resolve_palette
from .config import ParsedConfig, config_path, parse_config_file
from .config.models import ConfigOptions
from .diagnostics import Diagnostic
from .host import HOST_PLATFORM, Platform
from .keybinds import KeybindResolution, resolve_keybinds

logger = logging.getLogger(__name__)


class RuntimeSnapshot(BaseModel):
    """Everything the terminal needs from one config load."""

    model_config = ConfigDict(frozen=True)

    parsed: ParsedConfig
    colors: PaletteResolution
    keybinds: KeybindResolution
    diagnostics: tuple[Diagnostic, ...] = Field(
        default=(), description="Parser, color and keybind diagnostics in that order"
    )

    @property
    def path(self) -> Optional[str]:
        return self.parsed.path

    @property
    def options(self) -> ConfigOptions:
        return self.parsed.options


def build_snapshot(
    parsed: ParsedConfig,
    platform: Optional[Platform] = None,
    imported: Optional[dict[str, Any]] = None,
) -> RuntimeSnapshot:
    """Run the color and keybind resolvers over a parsed config."""
    colors = resolve_palette(parsed.options.theme, parsed.colors, imported)
    keybinds = resolve_keybinds(parsed.keybinds, platform or HOST_PLATFORM)
    diagnostics = parsed.diagnostics + colors.diagnostics + keybinds.diagnostics

    for diagnostic in diagnostics:
        logger.warning("%s: %s", parsed.path or "config", diagnostic)

    return RuntimeSnapshot(
        parsed=parsed, colors=colors, keybinds=keybinds, diagnostics=diagnostics
    )


def load_snapshot(
    path: Optional[Path] = None,
    platform: Optional[Platform] = None,
    imported: Optional[dict[str, Any]] = None,
) -> RuntimeSnapshot:
    """Read, parse and resolve the config file.

    Args:
        path: Config file. Defaults to the per-user location
        platform: Platform for keybind defaults. Defaults to the host
        imported: Decoded color import to layer over ``[colors]``

    Returns:
        RuntimeSnapshot; problems are in ``diagnostics``, never raised
    """
    parsed = parse_config_file(Path(path) if path else config_path())
    return build_snapshot(parsed, platform, imported)


class ConfigStore:
    """Holds the current snapshot and swaps it wholesale on reload."""

    def __init__(
        self,
        path: Optional[Path] = None,
        platform: Optional[Platform] = None,
    ):
        self.path = Path(path) if path else config_path()
        self.platform = platform or HOST_PLATFORM
        self._lock = threading.Lock()
        self._listeners: list[Callable[[RuntimeSnapshot], None]] = []
        self._snapshot = load_snapshot(self.path, self.platform)

    @property
    def current(self) -> RuntimeSnapshot:
        return self._snapshot

    def subscribe(self, listener: Callable[[RuntimeSnapshot], None]) -> None:
        """Register a callback run with each new snapshot after reload."""
        self._listeners.append(listener)

    def reload(self, imported: Optional[dict[str, Any]] = None) -> RuntimeSnapshot:
        """Load the file again and replace the current snapshot."""
        snapshot = load_snapshot(self.path, self.platform, imported)
        with self._lock:
            self._snapshot = snapshot
        logger.info(
            "Reloaded %s (%d diagnostics)", self.path, len(snapshot.diagnostics)
        )

        for listener in self._listeners:
            listener(snapshot)
        return snapshot
