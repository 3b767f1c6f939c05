"""Pydantic models for the termy configuration file."""

from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from ..diagnostics import Diagnostic
from ..host import HOST_PLATFORM


DEFAULT_THEME_ID = "termy"
DEFAULT_TAB_TITLE_FALLBACK = "Terminal"
DEFAULT_TAB_TITLE_EXPLICIT_PREFIX = "termy:tab:"
DEFAULT_TAB_TITLE_PROMPT_FORMAT = "{cwd}"
DEFAULT_TAB_TITLE_COMMAND_FORMAT = "{command}"


def _read_only(value: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType(dict(value))


class TabTitleSource(str, Enum):
    """Where a tab title can come from."""

    MANUAL = "manual"
    EXPLICIT = "explicit"
    SHELL = "shell"
    FALLBACK = "fallback"


class TabTitleMode(str, Enum):
    """Preset priority orders for tab titles."""

    SMART = "smart"
    SHELL = "shell"
    EXPLICIT = "explicit"
    STATIC = "static"

    def default_priority(self) -> tuple[TabTitleSource, ...]:
        return _MODE_PRIORITIES[self]


_MODE_PRIORITIES = {
    TabTitleMode.SMART: (
        TabTitleSource.MANUAL,
        TabTitleSource.EXPLICIT,
        TabTitleSource.SHELL,
        TabTitleSource.FALLBACK,
    ),
    TabTitleMode.SHELL: (TabTitleSource.MANUAL, TabTitleSource.SHELL, TabTitleSource.FALLBACK),
    TabTitleMode.EXPLICIT: (
        TabTitleSource.MANUAL,
        TabTitleSource.EXPLICIT,
        TabTitleSource.FALLBACK,
    ),
    TabTitleMode.STATIC: (TabTitleSource.MANUAL, TabTitleSource.FALLBACK),
}


class CursorStyle(str, Enum):
    """Cursor shape shared by the terminal and inline inputs."""

    LINE = "line"
    BLOCK = "block"


class ScrollbarVisibility(str, Enum):
    """When the terminal scrollbar is shown."""

    OFF = "off"
    ALWAYS = "always"
    ON_SCROLL = "on_scroll"


class ScrollbarStyle(str, Enum):
    """How the terminal scrollbar is colored."""

    NEUTRAL = "neutral"
    MUTED_THEME = "muted_theme"
    THEME = "theme"


class WorkingDirFallback(str, Enum):
    """Startup directory used when working_dir is unset."""

    HOME = "home"
    PROCESS = "process"


def _default_working_dir_fallback() -> WorkingDirFallback:
    if HOST_PLATFORM.uses_cmd_as_secondary:
        return WorkingDirFallback.HOME
    return WorkingDirFallback.PROCESS


class TabTitleConfig(BaseModel):
    """Tab title settings handed to the title engine."""

    model_config = ConfigDict(frozen=True)

    mode: TabTitleMode = Field(default=TabTitleMode.SMART)
    priority: tuple[TabTitleSource, ...] = Field(
        default=TabTitleMode.SMART.default_priority(),
        description="Sources consulted in order when resolving a title",
    )
    fallback: str = Field(default=DEFAULT_TAB_TITLE_FALLBACK)
    explicit_prefix: str = Field(default=DEFAULT_TAB_TITLE_EXPLICIT_PREFIX)
    shell_integration: bool = Field(default=True)
    prompt_format: str = Field(default=DEFAULT_TAB_TITLE_PROMPT_FORMAT)
    command_format: str = Field(default=DEFAULT_TAB_TITLE_COMMAND_FORMAT)


class ConfigOptions(BaseModel):
    """Every known option with its typed value.

    Built once per load and never mutated; a reload builds a new instance.
    Keys the parser does not recognize are kept verbatim in ``extra``.
    """

    model_config = ConfigDict(frozen=True)

    theme: str = Field(default=DEFAULT_THEME_ID)
    term: str = Field(default="xterm-256color")
    colorterm: Optional[str] = Field(default="truecolor")
    shell: Optional[str] = Field(default=None, description="Preferred shell, ~ expanded")
    working_dir: Optional[str] = Field(default=None, description="Startup dir, ~ expanded")
    working_dir_fallback: WorkingDirFallback = Field(default_factory=_default_working_dir_fallback)
    use_tabs: bool = Field(default=True)
    max_tabs: int = Field(default=10)
    hide_titlebar_buttons: bool = Field(default=False)
    warn_on_quit_with_running_process: bool = Field(default=True)

    tab_title_mode: TabTitleMode = Field(default=TabTitleMode.SMART)
    tab_title_priority: Optional[tuple[TabTitleSource, ...]] = Field(
        default=None, description="Explicit priority; overrides the mode preset when set"
    )
    tab_title_fallback: str = Field(default=DEFAULT_TAB_TITLE_FALLBACK)
    tab_title_explicit_prefix: str = Field(default=DEFAULT_TAB_TITLE_EXPLICIT_PREFIX)
    tab_title_shell_integration: bool = Field(default=True)
    tab_title_prompt_format: str = Field(default=DEFAULT_TAB_TITLE_PROMPT_FORMAT)
    tab_title_command_format: str = Field(default=DEFAULT_TAB_TITLE_COMMAND_FORMAT)

    window_width: float = Field(default=1280.0)
    window_height: float = Field(default=820.0)
    font_family: str = Field(default="JetBrains Mono")
    font_size: float = Field(default=14.0)
    cursor_style: CursorStyle = Field(default=CursorStyle.BLOCK)
    cursor_blink: bool = Field(default=True)
    background_opacity: float = Field(default=1.0)
    background_blur: bool = Field(default=False)
    padding_x: float = Field(default=12.0)
    padding_y: float = Field(default=8.0)
    mouse_scroll_multiplier: float = Field(default=3.0)
    scrollbar_visibility: ScrollbarVisibility = Field(default=ScrollbarVisibility.ON_SCROLL)
    scrollbar_style: ScrollbarStyle = Field(default=ScrollbarStyle.NEUTRAL)
    scrollback_history: int = Field(default=2000)
    inactive_tab_scrollback: Optional[int] = Field(default=None)
    command_palette_show_keybinds: bool = Field(default=True)

    extra: Mapping[str, str] = Field(
        default_factory=dict,
        validate_default=True,
        description="Unrecognized keys, kept for forward compatibility",
    )

    @field_validator("extra", mode="after")
    @classmethod
    def _freeze_extra(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return _read_only(value)

    @field_serializer("extra")
    def _dump_extra(self, value: Mapping[str, str]) -> dict[str, str]:
        return dict(value)

    @property
    def effective_tab_title_priority(self) -> tuple[TabTitleSource, ...]:
        if self.tab_title_priority:
            return self.tab_title_priority
        return self.tab_title_mode.default_priority()

    def tab_title_config(self) -> TabTitleConfig:
        return TabTitleConfig(
            mode=self.tab_title_mode,
            priority=self.effective_tab_title_priority,
            fallback=self.tab_title_fallback,
            explicit_prefix=self.tab_title_explicit_prefix,
            shell_integration=self.tab_title_shell_integration,
            prompt_format=self.tab_title_prompt_format,
            command_format=self.tab_title_command_format,
        )


class ClearDirective(BaseModel):
    """Drop every binding collected so far, defaults included."""

    model_config = ConfigDict(frozen=True)

    line_number: Optional[int] = Field(default=None)


class BindDirective(BaseModel):
    """Bind a trigger to a named action."""

    model_config = ConfigDict(frozen=True)

    trigger: str = Field(description="Normalized trigger, secondary left unresolved")
    action: str = Field(description="Action name as written, normalized to snake_case")
    line_number: Optional[int] = Field(default=None)


class UnbindDirective(BaseModel):
    """Remove whatever is bound to a trigger."""

    model_config = ConfigDict(frozen=True)

    trigger: str
    line_number: Optional[int] = Field(default=None)


KeybindDirective = Union[ClearDirective, BindDirective, UnbindDirective]


class ParsedConfig(BaseModel):
    """Everything read out of one config file."""

    model_config = ConfigDict(frozen=True)

    path: Optional[str] = Field(default=None, description="Source file, if read from disk")
    options: ConfigOptions = Field(default_factory=ConfigOptions)
    keybinds: tuple[KeybindDirective, ...] = Field(default=())
    colors: Optional[Mapping[str, str]] = Field(
        default=None, description="Raw [colors] entries keyed by canonical slot name"
    )
    diagnostics: tuple[Diagnostic, ...] = Field(default=())

    @field_validator("colors", mode="after")
    @classmethod
    def _freeze_colors(cls, value: Optional[Mapping[str, str]]) -> Optional[Mapping[str, str]]:
        return None if value is None else _read_only(value)

    @field_serializer("colors")
    def _dump_colors(self, value: Optional[Mapping[str, str]]) -> Optional[dict[str, str]]:
        return None if value is None else dict(value)
