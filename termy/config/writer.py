"""Rewrite termy config files for theme switches, color imports and single values."""

import logging
import shutil
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from ..colors.palette import SLOT_NAMES, Rgb, canonical_slot
from ..colors.resolver import load_color_import
from ..colors.themes import canonical_theme_id, normalize_theme_id
from .defaults import config_path as default_config_path
from .defaults import ensure_config_file
from .models import (
    BindDirective,
    ClearDirective,
    ConfigOptions,
    KeybindDirective,
    ParsedConfig,
    UnbindDirective,
)

logger = logging.getLogger(__name__)

# Optional string options whose unset state is spelled "none"
_NONE_SPELLED_OPTIONS = {"colorterm", "shell"}


class ConfigWriteError(Exception):
    """Raised when a requested config change cannot be written."""


def _is_section_header(line: str) -> bool:
    stripped = line.strip()
    return stripped.startswith("[") and stripped.endswith("]")


def _is_colors_header(line: str) -> bool:
    return _is_section_header(line) and line.strip()[1:-1].strip().lower() == "colors"


def _line_key(line: str) -> str:
    return line.strip().partition("=")[0].strip()


def upsert_config_value(contents: str, key: str, value: str) -> str:
    """Set ``key = value`` among the top-level options of a config.

    Only ``[colors]`` ends the option region; lines under any other header
    are still read as options. The first matching assignment is replaced and
    later duplicates dropped. A missing key goes right before ``[colors]``,
    or at the end when there is none. Commented-out assignments are left
    alone.
    """
    assignment = f"{key} = {value}"
    lines: list[str] = []
    replaced = False
    in_root_section = True

    for line in contents.splitlines():
        if _is_colors_header(line):
            if in_root_section and not replaced:
                lines.append(assignment)
                replaced = True
            in_root_section = False

        if in_root_section and not line.strip().startswith("#"):
            if _line_key(line).lower() == key.lower():
                if not replaced:
                    lines.append(assignment)
                    replaced = True
                continue

        lines.append(line)

    if not replaced:
        lines.append(assignment)

    return "\n".join(lines) + "\n"


def upsert_theme_assignment(contents: str, theme_id: str) -> str:
    """Point ``theme`` at a new theme id, keeping everything else in place."""
    return upsert_config_value(contents, "theme", theme_id)


def replace_or_insert_section(contents: str, section: str, section_lines: list[str]) -> str:
    """Replace the body of ``[section]`` or append the section at the end.

    Args:
        contents: Existing config text
        section: Section name without brackets (matched case-insensitively)
        section_lines: New body lines

    Returns:
        Updated config text
    """
    header = f"[{section}]"
    lines: list[str] = []
    in_target = False
    found = False

    for line in contents.splitlines():
        if _is_section_header(line):
            in_target = False
            if line.strip().lower() == header.lower():
                found = in_target = True
                lines.append(line)
                lines.extend(section_lines)
                continue

        if in_target:
            continue

        lines.append(line)

    if not found:
        if lines:
            lines.append("")
        lines.append(header)
        lines.extend(section_lines)

    return "\n".join(lines) + "\n"


def _format_string(value: str) -> str:
    # keep a value that is itself quoted from being unquoted on the next parse
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        quote = "'" if value[0] == '"' else '"'
        return f"{quote}{value}{quote}"
    return value


def _format_value(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, tuple):
        return ", ".join(item.value for item in value)
    if hasattr(value, "value"):
        return value.value
    if isinstance(value, str):
        return _format_string(value)
    return str(value)


def serialize_options(options: ConfigOptions) -> list[str]:
    """Render options as ``key = value`` lines that parse back to equal options."""
    lines = []
    for name, value in options.model_dump(exclude={"extra"}).items():
        if value is None:
            if name in _NONE_SPELLED_OPTIONS:
                lines.append(f"{name} = none")
            continue
        lines.append(f"{name} = {_format_value(value)}")

    for key, value in options.extra.items():
        lines.append(f"{key} = {value}")
    return lines


def serialize_directive(directive: KeybindDirective) -> str:
    if isinstance(directive, ClearDirective):
        return "keybind = clear"
    if isinstance(directive, UnbindDirective):
        return f"keybind = {directive.trigger}=unbind"
    if isinstance(directive, BindDirective):
        return f"keybind = {directive.trigger}={directive.action}"
    raise TypeError(f"not a keybind directive: {directive!r}")


def serialize_config(parsed: ParsedConfig) -> str:
    """Canonical text form of a parsed config: options, keybinds, then colors."""
    lines = serialize_options(parsed.options)
    lines.extend(serialize_directive(directive) for directive in parsed.keybinds)
    if parsed.colors is not None:
        lines.append("")
        lines.append("[colors]")
        lines.extend(f"{slot} = {value}" for slot, value in parsed.colors.items())
    return "\n".join(lines) + "\n"


def color_section_lines(entries: dict) -> list[str]:
    """Turn imported color entries into ``[colors]`` body lines.

    Keys starting with ``$`` and unknown keys are skipped.

    Raises:
        ConfigWriteError: If a value is not a ``#RRGGBB`` string or nothing is left
    """
    colors: dict[str, str] = {}
    for key, value in entries.items():
        if key.startswith("$"):
            continue
        slot = canonical_slot(key)
        if slot is None:
            logger.warning("Skipping unknown color key '%s'", key)
            continue
        if not isinstance(value, str) or Rgb.from_hex(value) is None:
            raise ConfigWriteError(f"Invalid hex color for '{key}': {value!r}")
        colors[slot] = value.strip()

    if not colors:
        raise ConfigWriteError("No valid colors found in import")

    return [f"{slot} = {colors[slot]}" for slot in SLOT_NAMES if slot in colors]


class ConfigWriter:
    """Apply user-requested edits to the termy config file."""

    def __init__(self, config_path: Optional[Path] = None, backup_dir: Optional[Path] = None):
        """Initialize the writer.

        Args:
            config_path: Path to config.txt. Defaults to the per-user location
            backup_dir: Where backups go. Defaults to ``backups/`` beside the config
        """
        self.config_path = Path(config_path) if config_path else default_config_path()
        self.backup_dir = Path(backup_dir) if backup_dir else self.config_path.parent / "backups"

    def backup_config(self) -> Path:
        """Create a backup of the current config.

        Returns:
            Path to the backup file
        """
        if not self.config_path.exists():
            raise FileNotFoundError(f"Config not found: {self.config_path}")

        self.backup_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        backup_path = self.backup_dir / f"{self.config_path.name}.{timestamp}.bak"
        shutil.copy2(self.config_path, backup_path)
        logger.info("Backed up %s to %s", self.config_path, backup_path)

        return backup_path

    def restore_backup(self, backup_path: Path) -> None:
        """Restore a backup.

        Args:
            backup_path: Path to the backup file
        """
        if not backup_path.exists():
            raise FileNotFoundError(f"Backup not found: {backup_path}")

        shutil.copy2(backup_path, self.config_path)

    def list_backups(self) -> list[Path]:
        """List all available backups.

        Returns:
            List of backup file paths, newest first
        """
        backups = list(self.backup_dir.glob(f"{self.config_path.name}.*.bak"))
        return sorted(backups, reverse=True)

    def _update(self, updater: Callable[[str], str], create_backup: bool) -> None:
        try:
            ensure_config_file(self.config_path)
            if create_backup:
                self.backup_config()
            existing = self.config_path.read_text(encoding="utf-8")
            self.config_path.write_text(updater(existing), encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigWriteError(f"Failed to update config {self.config_path}: {e}") from e

    def set_theme(self, theme: str, create_backup: bool = True) -> str:
        """Switch the configured theme.

        Returns:
            Status message for the user
        """
        theme_id = canonical_theme_id(theme) or normalize_theme_id(theme)
        if not theme_id:
            raise ConfigWriteError(f"Invalid theme id: {theme!r}")

        self._update(lambda existing: upsert_theme_assignment(existing, theme_id), create_backup)
        logger.info("Theme set to %s", theme_id)
        return f"Theme set to {theme_id}"

    def set_value(self, key: str, value: str, create_backup: bool = True) -> str:
        """Set a single root option, e.g. ``font_size = 16``."""
        key = key.strip()
        if not key or key.lower() == "keybind":
            raise ConfigWriteError(f"Cannot set {key!r} as a single value")

        self._update(lambda existing: upsert_config_value(existing, key, value.strip()), create_backup)
        return f"Set {key} = {value.strip()}"

    def import_colors(self, json_path: Path, create_backup: bool = True) -> str:
        """Replace the ``[colors]`` section with colors read from a JSON file.

        Returns:
            Status message with the number of imported colors
        """
        entries, problems = load_color_import(json_path)
        if problems:
            raise ConfigWriteError(str(problems[0]))

        section_lines = color_section_lines(entries)
        self._update(
            lambda existing: replace_or_insert_section(existing, "colors", section_lines),
            create_backup,
        )
        logger.info("Imported %d colors from %s", len(section_lines), json_path)
        return f"Imported {len(section_lines)} colors"
