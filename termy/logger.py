"""Logging configuration for the termy config tools."""

import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional


def setup_logging(log_level: str = "WARNING", log_file: bool = False) -> Optional[Path]:
    """Configure application logging.

    Console output goes to stderr so that command output on stdout stays clean.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: If True, also log everything at DEBUG to a file

    Returns:
        Path of the log file, if one was opened
    """
    root = logging.getLogger()
    level = getattr(logging, log_level.upper(), logging.WARNING)
    root.setLevel(logging.DEBUG if log_file else level)
    root.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root.addHandler(console_handler)

    if not log_file:
        return None

    log_dir = get_log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file_path = log_dir / f"termy_{timestamp}.log"

    file_handler = logging.FileHandler(log_file_path)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    root.addHandler(file_handler)

    root.info("Logging to file: %s", log_file_path)
    return log_file_path


def get_log_dir() -> Path:
    """Platform-specific log directory."""
    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA", os.path.expanduser("~"))
    else:
        base = os.environ.get("XDG_CACHE_HOME", os.path.expanduser("~/.cache"))
    return Path(base) / "termy" / "logs"
