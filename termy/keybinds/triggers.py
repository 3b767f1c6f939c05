"""Parse and normalize keybind trigger strings."""

import re
from enum import Enum

from ..host import Platform


class KeyModifier(str, Enum):
    """Modifiers accepted in triggers, in canonical output order."""

    SECONDARY = "secondary"  # cmd on macOS/Windows, ctrl elsewhere
    CMD = "cmd"
    CTRL = "ctrl"
    ALT = "alt"
    SHIFT = "shift"
    FN = "fn"


MODIFIER_ORDER = tuple(KeyModifier)

MODIFIER_ALIASES = {
    "secondary": KeyModifier.SECONDARY,
    "cmd": KeyModifier.CMD,
    "command": KeyModifier.CMD,
    "super": KeyModifier.CMD,
    "win": KeyModifier.CMD,
    "platform": KeyModifier.CMD,
    "ctrl": KeyModifier.CTRL,
    "control": KeyModifier.CTRL,
    "alt": KeyModifier.ALT,
    "option": KeyModifier.ALT,
    "opt": KeyModifier.ALT,
    "meta": KeyModifier.ALT,
    "shift": KeyModifier.SHIFT,
    "fn": KeyModifier.FN,
}

NAMED_KEYS = {
    "space",
    "enter",
    "tab",
    "backspace",
    "delete",
    "insert",
    "escape",
    "up",
    "down",
    "left",
    "right",
    "home",
    "end",
    "pageup",
    "pagedown",
}

_KEY_ALIASES = {
    "esc": "escape",
    "return": "enter",
    "del": "delete",
    "pgup": "pageup",
    "pgdn": "pagedown",
}

_FUNCTION_KEY = re.compile(r"^f([1-9]|1[0-9]|2[0-4])$")
_MODIFIER_PREFIX = re.compile(r"^([a-z]+)-(.+)$")


class InvalidTrigger(ValueError):
    """Raised when a trigger string cannot be normalized."""


def _parse_keystroke(component: str) -> tuple[list[KeyModifier], str]:
    """Split one keystroke like ``cmd-shift-g`` into modifiers and key."""
    modifiers: list[KeyModifier] = []
    key = component.lower()

    while match := _MODIFIER_PREFIX.match(key):
        modifier = MODIFIER_ALIASES.get(match.group(1))
        if modifier is None:
            break
        if modifier not in modifiers:
            modifiers.append(modifier)
        key = match.group(2)

    # a bare modifier name such as "shift" is a modifier with no key
    if key in MODIFIER_ALIASES:
        raise InvalidTrigger(f"trigger `{component}` has modifiers but no key")

    key = _KEY_ALIASES.get(key, key)
    if len(key) == 1 and key.isprintable() and not key.isspace():
        return modifiers, key
    if key in NAMED_KEYS or _FUNCTION_KEY.match(key):
        return modifiers, key
    raise InvalidTrigger(f"unknown key `{key}` in trigger `{component}`")


def _format_keystroke(modifiers: list[KeyModifier], key: str) -> str:
    ordered = [m.value for m in MODIFIER_ORDER if m in modifiers]
    return "-".join(ordered + [key])


def canonicalize_trigger(trigger: str) -> str:
    """Normalize a trigger: lower-case, aliases folded, modifiers ordered.

    ``secondary`` is kept as written; it is only resolved against a platform
    by :func:`resolve_secondary`.

    Raises:
        InvalidTrigger: If any keystroke is malformed
    """
    parts = [_format_keystroke(*_parse_keystroke(c)) for c in trigger.split()]
    if not parts:
        raise InvalidTrigger("empty keybind trigger")
    return " ".join(parts)


def resolve_secondary(trigger: str, platform: Platform) -> str:
    """Replace the secondary modifier with cmd or ctrl for a platform."""
    target = KeyModifier.CMD if platform.uses_cmd_as_secondary else KeyModifier.CTRL
    resolved = []
    for component in trigger.split():
        modifiers, key = _parse_keystroke(component)
        modifiers = [target if m is KeyModifier.SECONDARY else m for m in modifiers]
        resolved.append(_format_keystroke(modifiers, key))
    return " ".join(resolved)


def display_trigger(trigger: str) -> str:
    """Human-readable form, e.g. ``ctrl-shift-c`` -> ``Ctrl + Shift + C``."""
    labels = {"cmd": "Cmd", "ctrl": "Ctrl", "alt": "Alt", "shift": "Shift", "fn": "Fn"}
    strokes = []
    for component in trigger.split():
        modifiers, key = _parse_keystroke(component)
        parts = [labels.get(m.value, m.value.title()) for m in MODIFIER_ORDER if m in modifiers]
        parts.append(key.upper() if len(key) == 1 else key.title())
        strokes.append(" + ".join(parts))
    return ", ".join(strokes)
