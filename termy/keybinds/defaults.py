"""Built-in keybindings, before any user directives are applied."""

from ..host import Platform
from .actions import KeybindAction


_COMMON_DEFAULTS = (
    ("secondary-q", KeybindAction.QUIT),
    ("secondary-,", KeybindAction.OPEN_CONFIG),
    ("secondary-p", KeybindAction.TOGGLE_COMMAND_PALETTE),
    ("secondary-t", KeybindAction.NEW_TAB),
    ("secondary-w", KeybindAction.CLOSE_TAB),
    ("secondary-=", KeybindAction.ZOOM_IN),
    ("secondary-+", KeybindAction.ZOOM_IN),
    ("secondary--", KeybindAction.ZOOM_OUT),
    ("secondary-0", KeybindAction.ZOOM_RESET),
    # Search
    ("secondary-f", KeybindAction.OPEN_SEARCH),
    ("secondary-g", KeybindAction.SEARCH_NEXT),
    ("secondary-shift-g", KeybindAction.SEARCH_PREVIOUS),
)


def default_keybinds(platform: Platform) -> list[tuple[str, KeybindAction]]:
    """Return a fresh list of (trigger, action) defaults for a platform.

    Triggers still use ``secondary``; the resolver maps it per platform.
    """
    bindings = list(_COMMON_DEFAULTS)

    if platform is Platform.MACOS:
        bindings.append(("secondary-m", KeybindAction.MINIMIZE_WINDOW))

    if platform.uses_cmd_as_secondary:
        bindings.append(("secondary-c", KeybindAction.COPY))
        bindings.append(("secondary-v", KeybindAction.PASTE))
    else:
        # ctrl-c / ctrl-v belong to the shell on Linux
        bindings.append(("ctrl-shift-c", KeybindAction.COPY))
        bindings.append(("ctrl-shift-v", KeybindAction.PASTE))

    return bindings
