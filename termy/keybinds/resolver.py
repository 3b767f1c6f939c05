"""Replay keybind directives over the built-in defaults."""

import logging
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..config.models import BindDirective, ClearDirective, KeybindDirective, UnbindDirective
from ..diagnostics import Diagnostic, DiagnosticKind
from ..host import HOST_PLATFORM, Platform
from .actions import KeybindAction, all_action_names
from .defaults import default_keybinds
from .triggers import InvalidTrigger, resolve_secondary

logger = logging.getLogger(__name__)


class KeybindResolution(BaseModel):
    """Final trigger -> action table for one platform."""

    model_config = ConfigDict(frozen=True)

    platform: Platform
    bindings: dict[str, KeybindAction] = Field(
        default_factory=dict, description="Resolved trigger -> action, in listing order"
    )
    diagnostics: tuple[Diagnostic, ...] = Field(default=())

    def action_for(self, trigger: str) -> Optional[KeybindAction]:
        return self.bindings.get(trigger)

    def triggers_for(self, action: KeybindAction) -> list[str]:
        return [trigger for trigger, bound in self.bindings.items() if bound is action]


def resolve_keybinds(
    directives: Iterable[KeybindDirective],
    platform: Optional[Platform] = None,
) -> KeybindResolution:
    """Fold directives, in order, over a fresh copy of the defaults.

    ``clear`` empties the table, ``bind`` overwrites the trigger's entry and
    ``unbind`` removes it (a missing trigger is a no-op). Rebinding a
    trigger moves it to the end of the listing order.

    Args:
        directives: Parsed directives in file order
        platform: Platform used to resolve ``secondary``; defaults to the host

    Returns:
        KeybindResolution with the final table and any skipped directives
    """
    platform = platform or HOST_PLATFORM
    diagnostics: list[Diagnostic] = []

    bindings: dict[str, KeybindAction] = {}
    for trigger, action in default_keybinds(platform):
        bindings[resolve_secondary(trigger, platform)] = action

    for directive in directives:
        if isinstance(directive, ClearDirective):
            bindings.clear()
            continue

        try:
            trigger = resolve_secondary(directive.trigger, platform)
        except InvalidTrigger as e:
            diagnostics.append(
                Diagnostic(
                    kind=DiagnosticKind.UNKNOWN_TRIGGER,
                    message=str(e),
                    line_number=directive.line_number,
                )
            )
            continue

        if isinstance(directive, UnbindDirective):
            bindings.pop(trigger, None)
            continue

        if isinstance(directive, BindDirective):
            action = KeybindAction.from_config_name(directive.action)
            if action is None:
                diagnostics.append(
                    Diagnostic(
                        kind=DiagnosticKind.UNKNOWN_ACTION,
                        message=(
                            f"unknown keybind action `{directive.action}`; expected one of: "
                            + ", ".join(all_action_names())
                        ),
                        line_number=directive.line_number,
                    )
                )
                continue
            bindings.pop(trigger, None)
            bindings[trigger] = action

    logger.debug("Resolved %d keybindings for %s", len(bindings), platform.value)
    return KeybindResolution(
        platform=platform, bindings=bindings, diagnostics=tuple(diagnostics)
    )
