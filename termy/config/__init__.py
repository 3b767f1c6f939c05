"""Config parsing and management."""

from .defaults import config_path, ensure_config_file, generate_default_config
from .models import (
    BindDirective,
    ClearDirective,
    ConfigOptions,
    CursorStyle,
    KeybindDirective,
    ParsedConfig,
    ScrollbarStyle,
    ScrollbarVisibility,
    TabTitleConfig,
    TabTitleMode,
    TabTitleSource,
    UnbindDirective,
    WorkingDirFallback,
)
from .parser import parse_config_file, parse_config_text, parse_keybind_value
from .writer import ConfigWriteError, ConfigWriter, serialize_config, serialize_options

__all__ = [
    "BindDirective",
    "ClearDirective",
    "ConfigOptions",
    "ConfigWriteError",
    "ConfigWriter",
    "CursorStyle",
    "KeybindDirective",
    "ParsedConfig",
    "ScrollbarStyle",
    "ScrollbarVisibility",
    "TabTitleConfig",
    "TabTitleMode",
    "TabTitleSource",
    "UnbindDirective",
    "WorkingDirFallback",
    "config_path",
    "ensure_config_file",
    "generate_default_config",
    "parse_config_file",
    "parse_config_text",
    "parse_keybind_value",
    "serialize_config",
    "serialize_options",
]
