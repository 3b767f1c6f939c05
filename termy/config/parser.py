"""Parser for termy configuration files."""

import logging
import math
import re
from pathlib import Path
from typing import Any, Callable, Optional

from ..colors.palette import canonical_slot
from ..colors.themes import canonical_theme_id, normalize_theme_id
from ..diagnostics import Diagnostic, DiagnosticKind, parse_warning
from ..keybinds.triggers import InvalidTrigger, canonicalize_trigger
from .models import (
    BindDirective,
    ClearDirective,
    ConfigOptions,
    CursorStyle,
    KeybindDirective,
    ParsedConfig,
    ScrollbarStyle,
    ScrollbarVisibility,
    TabTitleMode,
    TabTitleSource,
    UnbindDirective,
    WorkingDirFallback,
)

logger = logging.getLogger(__name__)

MAX_TABS_LIMIT = 100
MAX_SCROLLBACK_HISTORY = 100_000
MIN_MOUSE_SCROLL_MULTIPLIER = 0.1
MAX_MOUSE_SCROLL_MULTIPLIER = 1_000.0

_SECTION_HEADER = re.compile(r"^\[(.*)\]$")


class OptionError(ValueError):
    """A value that cannot be used for its option; the previous value stays."""


# Value converters. Each returns the typed value or raises OptionError.


def _parse_bool(value: str) -> bool:
    if value == "true":
        return True
    if value == "false":
        return False
    raise OptionError(f"expected `true` or `false`, got `{value}`")


def _parse_string(value: str) -> str:
    """Strip matching surrounding quotes; empty strings are rejected."""
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        value = value[1:-1].strip()
    if not value:
        raise OptionError("expected a non-empty value")
    return value


def _parse_optional_string(value: str) -> Optional[str]:
    parsed = _parse_string(value)
    if parsed.lower() in ("none", "unset", "default", "auto"):
        return None
    return parsed


def _expand_home(value: str) -> str:
    if value == "~":
        return str(Path.home())
    if value.startswith("~/"):
        return str(Path.home() / value[2:])
    return value


def _parse_path(value: str) -> str:
    return _expand_home(_parse_string(value))


def _parse_optional_path(value: str) -> Optional[str]:
    parsed = _parse_optional_string(value)
    return _expand_home(parsed) if parsed is not None else None


def _parse_int(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise OptionError(f"expected a whole number, got `{value}`") from None


def _parse_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise OptionError(f"expected a number, got `{value}`") from None
    if not math.isfinite(number):
        raise OptionError(f"expected a finite number, got `{value}`")
    return number


def _positive_float(value: str) -> float:
    number = _parse_float(value)
    if number <= 0:
        raise OptionError(f"expected a positive number, got `{value}`")
    return number


def _non_negative_float(value: str) -> float:
    number = _parse_float(value)
    if number < 0:
        raise OptionError(f"expected a number >= 0, got `{value}`")
    return number


def _non_negative_int(value: str) -> int:
    number = _parse_int(value)
    if number < 0:
        raise OptionError(f"expected a number >= 0, got `{value}`")
    return number


def _clamped(parse: Callable[[str], Any], low: Any, high: Any) -> Callable[[str], Any]:
    def parse_clamped(value: str) -> Any:
        return min(max(parse(value), low), high)

    return parse_clamped


def _enum(choices: dict[str, Any]) -> Callable[[str], Any]:
    def parse_enum(value: str) -> Any:
        choice = choices.get(value.strip().lower())
        if choice is None:
            raise OptionError(f"expected one of {', '.join(choices)}, got `{value}`")
        return choice

    return parse_enum


def _parse_theme(value: str) -> str:
    value = _parse_string(value)
    theme = canonical_theme_id(value) or normalize_theme_id(value)
    if not theme:
        raise OptionError(f"invalid theme name `{value}`")
    return theme


TAB_TITLE_SOURCE_ALIASES = {
    "manual": TabTitleSource.MANUAL,
    "explicit": TabTitleSource.EXPLICIT,
    "shell": TabTitleSource.SHELL,
    "app": TabTitleSource.SHELL,
    "terminal": TabTitleSource.SHELL,
    "fallback": TabTitleSource.FALLBACK,
    "default": TabTitleSource.FALLBACK,
}


def _parse_priority(value: str) -> tuple[TabTitleSource, ...]:
    priority: list[TabTitleSource] = []
    for token in value.split(","):
        source = TAB_TITLE_SOURCE_ALIASES.get(token.strip().lower())
        if source is not None and source not in priority:
            priority.append(source)
    if not priority:
        raise OptionError(f"no known tab title sources in `{value}`")
    return tuple(priority)


# option name -> (field name, converter)
OPTION_PARSERS: dict[str, tuple[str, Callable[[str], Any]]] = {
    "theme": ("theme", _parse_theme),
    "term": ("term", _parse_string),
    "colorterm": ("colorterm", _parse_optional_string),
    "shell": ("shell", _parse_optional_path),
    "working_dir": ("working_dir", _parse_path),
    "working_dir_fallback": (
        "working_dir_fallback",
        _enum(
            {
                "home": WorkingDirFallback.HOME,
                "user": WorkingDirFallback.HOME,
                "process": WorkingDirFallback.PROCESS,
                "cwd": WorkingDirFallback.PROCESS,
            }
        ),
    ),
    "use_tabs": ("use_tabs", _parse_bool),
    "max_tabs": ("max_tabs", _clamped(_parse_int, 1, MAX_TABS_LIMIT)),
    "hide_titlebar_buttons": ("hide_titlebar_buttons", _parse_bool),
    "warn_on_quit_with_running_process": ("warn_on_quit_with_running_process", _parse_bool),
    "tab_title_mode": ("tab_title_mode", _enum({m.value: m for m in TabTitleMode})),
    "tab_title_priority": ("tab_title_priority", _parse_priority),
    "tab_title_fallback": ("tab_title_fallback", _parse_string),
    "tab_title_explicit_prefix": ("tab_title_explicit_prefix", _parse_string),
    "tab_title_shell_integration": ("tab_title_shell_integration", _parse_bool),
    "tab_title_prompt_format": ("tab_title_prompt_format", _parse_string),
    "tab_title_command_format": ("tab_title_command_format", _parse_string),
    "window_width": ("window_width", _positive_float),
    "window_height": ("window_height", _positive_float),
    "font_family": ("font_family", _parse_string),
    "font_size": ("font_size", _positive_float),
    "cursor_style": (
        "cursor_style",
        _enum(
            {
                "line": CursorStyle.LINE,
                "bar": CursorStyle.LINE,
                "beam": CursorStyle.LINE,
                "ibeam": CursorStyle.LINE,
                "block": CursorStyle.BLOCK,
                "box": CursorStyle.BLOCK,
            }
        ),
    ),
    "cursor_blink": ("cursor_blink", _parse_bool),
    "background_opacity": ("background_opacity", _clamped(_parse_float, 0.0, 1.0)),
    "background_blur": ("background_blur", _parse_bool),
    "padding_x": ("padding_x", _non_negative_float),
    "padding_y": ("padding_y", _non_negative_float),
    "mouse_scroll_multiplier": (
        "mouse_scroll_multiplier",
        _clamped(_parse_float, MIN_MOUSE_SCROLL_MULTIPLIER, MAX_MOUSE_SCROLL_MULTIPLIER),
    ),
    "scrollbar_visibility": (
        "scrollbar_visibility",
        _enum(
            {
                "off": ScrollbarVisibility.OFF,
                "always": ScrollbarVisibility.ALWAYS,
                "on_scroll": ScrollbarVisibility.ON_SCROLL,
                "onscroll": ScrollbarVisibility.ON_SCROLL,
            }
        ),
    ),
    "scrollbar_style": (
        "scrollbar_style",
        _enum(
            {
                "neutral": ScrollbarStyle.NEUTRAL,
                "muted_theme": ScrollbarStyle.MUTED_THEME,
                "mutedtheme": ScrollbarStyle.MUTED_THEME,
                "theme": ScrollbarStyle.THEME,
            }
        ),
    ),
    "scrollback_history": (
        "scrollback_history",
        _clamped(_non_negative_int, 0, MAX_SCROLLBACK_HISTORY),
    ),
    "inactive_tab_scrollback": (
        "inactive_tab_scrollback",
        _clamped(_non_negative_int, 0, MAX_SCROLLBACK_HISTORY),
    ),
    "command_palette_show_keybinds": ("command_palette_show_keybinds", _parse_bool),
}

OPTION_ALIASES = {
    "default_working_dir": "working_dir_fallback",
    "scrollback": "scrollback_history",
}

KNOWN_KEYS = frozenset(OPTION_PARSERS) | frozenset(OPTION_ALIASES) | {"keybind"}


def _treat_trailing_dash_as_equal_key(trigger: str) -> bool:
    """``cmd-=zoom_in`` means the ``=`` key; ``cmd--`` stays the minus key."""
    return trigger.endswith("-") and not trigger.endswith("--")


def parse_keybind_value(
    value: str, line_number: Optional[int] = None
) -> tuple[Optional[KeybindDirective], Optional[Diagnostic]]:
    """Parse the value of one ``keybind = ...`` line.

    Returns:
        Tuple of (directive, diagnostic); exactly one of them is set
    """
    value = value.strip()
    if not value:
        return None, parse_warning("empty keybind value", line_number)

    if value.lower() == "clear":
        return ClearDirective(line_number=line_number), None

    trigger_raw, sep, action_raw = value.rpartition("=")
    if not sep:
        return None, parse_warning(
            "expected `keybind = <trigger>=<action>` or `keybind = clear`", line_number
        )

    trigger_raw = trigger_raw.strip()
    action_raw = action_raw.strip()
    if not trigger_raw or not action_raw:
        return None, parse_warning(
            "keybind trigger and action must both be non-empty", line_number
        )

    if _treat_trailing_dash_as_equal_key(trigger_raw):
        trigger_raw += "="

    try:
        trigger = canonicalize_trigger(trigger_raw)
    except InvalidTrigger as e:
        return None, Diagnostic(
            kind=DiagnosticKind.UNKNOWN_TRIGGER, message=str(e), line_number=line_number
        )

    if action_raw.lower() == "unbind":
        return UnbindDirective(trigger=trigger, line_number=line_number), None

    action = action_raw.lower().replace("-", "_")
    return BindDirective(trigger=trigger, action=action, line_number=line_number), None


def parse_config_text(text: str, path: Optional[str] = None) -> ParsedConfig:
    """Parse config file contents.

    Never raises on bad input: malformed lines and values are skipped and
    reported in ``ParsedConfig.diagnostics``.

    Args:
        text: Raw config file contents
        path: Where the text came from, for display only

    Returns:
        ParsedConfig with options, keybind directives and raw colors
    """
    values: dict[str, Any] = {}
    extra: dict[str, str] = {}
    keybinds: list[KeybindDirective] = []
    colors: Optional[dict[str, str]] = None
    diagnostics: list[Diagnostic] = []

    for index, raw_line in enumerate(text.splitlines()):
        line_number = index + 1
        line = raw_line.strip()

        # Skip comments and empty lines
        if not line or line.startswith("#"):
            continue

        if header := _SECTION_HEADER.match(line):
            section = header.group(1).strip().lower()
            if section == "colors" and colors is None:
                colors = {}
            elif section != "colors":
                diagnostics.append(
                    parse_warning(f"unknown section [{header.group(1).strip()}]", line_number)
                )
            continue

        key, sep, value = line.partition("=")
        key = key.strip()
        value = value.strip()
        if not sep or not key:
            diagnostics.append(parse_warning("expected `key = value`", line_number))
            continue

        if colors is not None:
            slot = canonical_slot(key)
            if slot is None:
                diagnostics.append(parse_warning(f"unknown color key '{key}'", line_number))
                continue
            colors[slot] = value
            continue

        name = key.lower()
        name = OPTION_ALIASES.get(name, name)

        if name == "keybind":
            directive, problem = parse_keybind_value(value, line_number)
            if directive is not None:
                keybinds.append(directive)
            else:
                diagnostics.append(problem)
            continue

        if name not in OPTION_PARSERS:
            extra[key] = value
            continue

        field, convert = OPTION_PARSERS[name]
        try:
            values[field] = convert(value)
        except OptionError as e:
            diagnostics.append(parse_warning(f"{name}: {e}", line_number))

    options = ConfigOptions(**values, extra=extra)
    logger.debug(
        "Parsed config %s: %d options, %d keybinds, %d diagnostics",
        path or "<text>",
        len(values),
        len(keybinds),
        len(diagnostics),
    )
    return ParsedConfig(
        path=path,
        options=options,
        keybinds=tuple(keybinds),
        colors=colors,
        diagnostics=tuple(diagnostics),
    )


def parse_config_file(path: Path) -> ParsedConfig:
    """Parse a config file; a missing or unreadable file yields defaults."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.info("No config file at %s, using defaults", path)
        return ParsedConfig(path=str(path))
    except OSError as e:
        logger.error("Failed to read config %s: %s", path, e)
        return ParsedConfig(
            path=str(path), diagnostics=(parse_warning(f"failed to read config: {e}"),)
        )
    except UnicodeDecodeError as e:
        logger.error("Config %s is not valid UTF-8: %s", path, e)
        return ParsedConfig(
            path=str(path),
            diagnostics=(parse_warning(f"config is not valid UTF-8, using defaults: {e}"),),
        )

    return parse_config_text(text, path=str(path))
