"""Events and per-source values for tab titles."""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ExplicitKind(str, Enum):
    """Kinds of ``<prefix><kind>:<payload>`` title payloads."""

    PROMPT = "prompt"
    COMMAND = "command"
    TITLE = "title"


class _Event(BaseModel):
    model_config = ConfigDict(frozen=True)


class ManualRename(_Event):
    """User renamed the tab; an empty text clears the manual title."""

    text: str


class ExplicitPayload(_Event):
    """Prefixed title sent by the shell integration scripts."""

    kind: ExplicitKind
    payload: str


class ShellPrompt(_Event):
    """The shell is back at a prompt in ``cwd``."""

    cwd: str


class ShellCommand(_Event):
    """The shell started running ``cmdline``."""

    cmdline: str


class ShellTitle(_Event):
    """A plain OSC title set by the shell or a running program."""

    text: str


class ResetTitle(_Event):
    """The terminal reset its title; shell and explicit titles are dropped."""


TitleEvent = Union[
    ManualRename, ExplicitPayload, ShellPrompt, ShellCommand, ShellTitle, ResetTitle
]


class SourceValue(BaseModel):
    """Current text of one title source and when it last changed."""

    text: Optional[str] = Field(default=None)
    updated_at: Optional[float] = Field(default=None, description="Clock reading of last update")

    @property
    def is_set(self) -> bool:
        return bool(self.text and self.text.strip())
