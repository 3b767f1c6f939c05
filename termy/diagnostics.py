"""Non-fatal diagnostics collected while loading configuration."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class DiagnosticKind(str, Enum):
    """Categories of problems found in user configuration."""

    PARSE_WARNING = "parse_warning"
    UNKNOWN_THEME = "unknown_theme"
    INVALID_COLOR_VALUE = "invalid_color_value"
    UNKNOWN_ACTION = "unknown_action"
    UNKNOWN_TRIGGER = "unknown_trigger"


class Diagnostic(BaseModel):
    """A single problem that was skipped over while loading."""

    model_config = ConfigDict(frozen=True)

    kind: DiagnosticKind
    message: str
    line_number: Optional[int] = Field(default=None, description="1-based config line")

    def __str__(self) -> str:
        if self.line_number is not None:
            return f"line {self.line_number}: {self.message}"
        return self.message


def parse_warning(message: str, line_number: Optional[int] = None) -> Diagnostic:
    return Diagnostic(kind=DiagnosticKind.PARSE_WARNING, message=message, line_number=line_number)
