"""Config file location and the default config written on first run."""

import logging
import os
from pathlib import Path
from typing import Optional

from ..host import HOST_PLATFORM, Platform

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = "termy"
CONFIG_FILE_NAME = "config.txt"


def _env(name: str) -> Optional[str]:
    value = os.environ.get(name, "")
    return value if value.strip() else None


def config_path(platform: Optional[Platform] = None) -> Path:
    """Locate the per-user config file.

    Windows prefers ``%APPDATA%\\termy\\config.txt``; everything else uses
    ``$XDG_CONFIG_HOME/termy/config.txt`` or ``~/.config/termy/config.txt``.

    Args:
        platform: Platform to resolve for. Defaults to the host

    Returns:
        Path to config.txt (the file may not exist yet)
    """
    platform = platform or HOST_PLATFORM

    if platform is Platform.WINDOWS:
        if app_data := _env("APPDATA"):
            return Path(app_data) / CONFIG_DIR_NAME / CONFIG_FILE_NAME
        if user_profile := _env("USERPROFILE"):
            return Path(user_profile) / ".config" / CONFIG_DIR_NAME / CONFIG_FILE_NAME

    if xdg_config_home := _env("XDG_CONFIG_HOME"):
        return Path(xdg_config_home) / CONFIG_DIR_NAME / CONFIG_FILE_NAME

    if home := _env("HOME"):
        return Path(home) / ".config" / CONFIG_DIR_NAME / CONFIG_FILE_NAME

    return Path.cwd() / ".config" / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def ensure_config_file(path: Optional[Path] = None) -> Path:
    """Write the default config if none exists yet and return its path."""
    path = Path(path) if path else config_path()
    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(generate_default_config())
        logger.info("Wrote default config to %s", path)
    return path


def generate_default_config() -> str:
    """Generate the commented default termy configuration."""
    return """\
# termy configuration

theme = termy
# TERM exported to child shells
term = xterm-256color
# Directory new sessions start in (~ is expanded)
# working_dir = ~/Documents

# Tabs
# use_tabs = true
# max_tabs = 10
# hide_titlebar_buttons = false
# warn_on_quit_with_running_process = true

# Tab titles. Modes: smart, shell, explicit, static
# smart = manual rename > explicit title > shell title > fallback
tab_title_mode = smart
# Export TERMY_* variables so shells can report prompt/command titles
tab_title_shell_integration = true
# tab_title_fallback = Terminal
# tab_title_priority = manual, explicit, shell, fallback
# tab_title_explicit_prefix = termy:tab:
# tab_title_prompt_format = {cwd}
# tab_title_command_format = {command}

# Window and font
window_width = 1280
window_height = 820
font_family = JetBrains Mono
font_size = 14
# cursor_style = block
# cursor_blink = true
# background_opacity = 1.0
# background_blur = false
padding_x = 12
padding_y = 8

# Scrolling
# mouse_scroll_multiplier = 3
# scrollbar_visibility = on_scroll
# scrollbar_style = neutral
# scrollback_history = 2000
# inactive_tab_scrollback = 500

# Advanced
# shell = /bin/zsh
# working_dir_fallback = home
# colorterm = truecolor

# Keybindings
# keybind = cmd-p=toggle_command_palette
# keybind = cmd-c=unbind
# keybind = clear
# command_palette_show_keybinds = true

# Color overrides go last; everything after [colors] is a color entry
# [colors]
# foreground = #e7ebf5
# background = #0b1020
"""
