"""Plain-text listings shared by the CLI and the TUI."""

from .colors import BUILTIN_THEME_IDS
from .config.writer import serialize_options
from .keybinds import KeybindAction, display_trigger
from .runtime import RuntimeSnapshot


def config_report(snapshot: RuntimeSnapshot) -> list[str]:
    """Effective options, one ``key = value`` per line."""
    lines = [f"# Config file: {snapshot.path or '(defaults)'}", ""]
    lines.extend(serialize_options(snapshot.options))
    return lines


def themes_report(current: str) -> list[str]:
    return [f"{'*' if theme == current else ' '} {theme}" for theme in BUILTIN_THEME_IDS]


def colors_report(snapshot: RuntimeSnapshot) -> list[str]:
    lines = [f"# Theme: {snapshot.colors.theme}"]
    lines.extend(f"{slot} = {color.hex}" for slot, color in snapshot.colors.palette.items())
    return lines


def keybinds_report(snapshot: RuntimeSnapshot, pretty: bool = False) -> list[str]:
    """Resolved bindings in listing order."""
    lines = []
    for trigger, action in snapshot.keybinds.bindings.items():
        shown = display_trigger(trigger) if pretty else trigger
        lines.append(f"{shown} = {action.value}")
    return lines


def actions_report() -> list[str]:
    width = max(len(action.value) for action in KeybindAction)
    return [f"{action.value:<{width}}  {action.palette_title}" for action in KeybindAction]


def validation_report(snapshot: RuntimeSnapshot) -> list[str]:
    """Diagnostics plus unrecognized keys; empty when the config is clean."""
    lines = [f"{d.kind.value}: {d}" for d in snapshot.diagnostics]
    lines.extend(f"unknown_key: '{key}' is not used" for key in snapshot.options.extra)
    return lines
