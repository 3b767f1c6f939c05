"""Keybind actions, triggers and resolution."""

from .actions import KeybindAction, all_action_names
from .defaults import default_keybinds
from .resolver import KeybindResolution, resolve_keybinds
from .triggers import (
    InvalidTrigger,
    KeyModifier,
    canonicalize_trigger,
    display_trigger,
    resolve_secondary,
)

__all__ = [
    "InvalidTrigger",
    "KeyModifier",
    "KeybindAction",
    "KeybindResolution",
    "all_action_names",
    "canonicalize_trigger",
    "default_keybinds",
    "display_trigger",
    "resolve_keybinds",
    "resolve_secondary",
]
