"""Tab title sources, events and the per-tab title engine."""

from .engine import (
    COMMAND_TITLE_DELAY,
    MAX_TAB_TITLE_CHARS,
    TabTitleEngine,
    TabTitleState,
    predicted_prompt_title,
    resolve_template,
    truncate_title,
)
from .models import (
    ExplicitKind,
    ExplicitPayload,
    ManualRename,
    ResetTitle,
    ShellCommand,
    ShellPrompt,
    ShellTitle,
    SourceValue,
    TitleEvent,
)
from .osc import (
    MAX_PENDING_OSC_CHARS,
    OscTitleScanner,
    decode_title,
    extract_osc_titles,
    shell_integration_env,
)

__all__ = [
    "COMMAND_TITLE_DELAY",
    "MAX_PENDING_OSC_CHARS",
    "MAX_TAB_TITLE_CHARS",
    "ExplicitKind",
    "ExplicitPayload",
    "ManualRename",
    "OscTitleScanner",
    "ResetTitle",
    "ShellCommand",
    "ShellPrompt",
    "ShellTitle",
    "SourceValue",
    "TabTitleEngine",
    "TabTitleState",
    "TitleEvent",
    "decode_title",
    "extract_osc_titles",
    "predicted_prompt_title",
    "resolve_template",
    "shell_integration_env",
    "truncate_title",
]
