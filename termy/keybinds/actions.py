"""The closed set of actions a keybind can trigger."""

from enum import Enum
from typing import Optional


class KeybindAction(str, Enum):
    """Actions addressable from ``keybind = <trigger>=<action>``."""

    QUIT = "quit"
    OPEN_CONFIG = "open_config"
    TOGGLE_COMMAND_PALETTE = "toggle_command_palette"
    NEW_TAB = "new_tab"
    CLOSE_TAB = "close_tab"
    COPY = "copy"
    PASTE = "paste"
    ZOOM_IN = "zoom_in"
    ZOOM_OUT = "zoom_out"
    ZOOM_RESET = "zoom_reset"
    OPEN_SEARCH = "open_search"
    CLOSE_SEARCH = "close_search"
    SEARCH_NEXT = "search_next"
    SEARCH_PREVIOUS = "search_previous"
    TOGGLE_SEARCH_CASE_SENSITIVE = "toggle_search_case_sensitive"
    TOGGLE_SEARCH_REGEX = "toggle_search_regex"
    IMPORT_COLORS = "import_colors"
    SWITCH_THEME = "switch_theme"
    APP_INFO = "app_info"
    RESTART_APP = "restart_app"
    RENAME_TAB = "rename_tab"
    CHECK_FOR_UPDATES = "check_for_updates"
    MINIMIZE_WINDOW = "minimize_window"

    @classmethod
    def from_config_name(cls, name: str) -> Optional["KeybindAction"]:
        """Look up an action by config name; ``Zoom-In`` matches ``zoom_in``."""
        try:
            return cls(normalize_action_name(name))
        except ValueError:
            return None

    @property
    def palette_title(self) -> str:
        """Command palette title."""
        return ACTION_TITLES.get(self, self.value.replace("_", " ").title())


def normalize_action_name(name: str) -> str:
    return name.strip().lower().replace("-", "_")


ACTION_TITLES = {
    KeybindAction.QUIT: "Quit Termy",
    KeybindAction.OPEN_CONFIG: "Open Config",
    KeybindAction.ZOOM_RESET: "Reset Zoom",
    KeybindAction.OPEN_SEARCH: "Find",
    KeybindAction.APP_INFO: "App Info",
}


def all_action_names() -> list[str]:
    return [action.value for action in KeybindAction]
