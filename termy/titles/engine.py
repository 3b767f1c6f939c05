"""Per-tab title state machines.

Each tab records every title source (manual, explicit, shell, fallback) and
shows the first non-empty one in priority order. Command titles are held
back for ``COMMAND_TITLE_DELAY`` seconds so that short commands never flash
in the tab bar; a prompt arriving first cancels them.
"""

import asyncio
import logging
import re
import time
from itertools import count
from typing import Callable, Optional

from ..config.models import DEFAULT_TAB_TITLE_FALLBACK, TabTitleConfig, TabTitleSource
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
from .osc import OscTitleScanner, decode_title

logger = logging.getLogger(__name__)

COMMAND_TITLE_DELAY = 0.25  # seconds
MAX_TAB_TITLE_CHARS = 96

_WHITESPACE = re.compile(r"\s+")


def truncate_title(title: str) -> str:
    """Collapse whitespace onto one line and cap the length."""
    normalized = _WHITESPACE.sub(" ", title).strip()
    return normalized[:MAX_TAB_TITLE_CHARS]


def resolve_template(template: str, cwd: Optional[str] = None, command: Optional[str] = None) -> str:
    return template.replace("{cwd}", cwd or "").replace("{command}", command or "")


def predicted_prompt_title(config: TabTitleConfig, cwd: Optional[str]) -> Optional[str]:
    """Title a new tab shows before its shell reports a prompt.

    Only used when explicit titles take part in the priority, since that is
    where the shell integration's first prompt title will land.
    """
    if TabTitleSource.EXPLICIT not in config.priority:
        return None
    title = truncate_title(resolve_template(config.prompt_format, cwd=cwd))
    return title or None


class TabTitleState:
    """Title sources, priority and pending command title for one tab."""

    def __init__(
        self,
        config: TabTitleConfig,
        on_change: Optional[Callable[[str], None]] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
        clock: Callable[[], float] = time.monotonic,
        seed_title: Optional[str] = None,
    ):
        """Initialize the tab state.

        Args:
            config: Tab title settings
            on_change: Called with the new title whenever a delayed promotion changes it
            loop: Event loop for the debounce timer. Defaults to the running loop
            clock: Source of ``updated_at`` timestamps
            seed_title: Initial explicit title, see ``predicted_prompt_title``
        """
        self.config = config
        self.on_change = on_change
        self._loop = loop
        self._clock = clock

        self.sources = {source: SourceValue() for source in TabTitleSource}
        self.sources[TabTitleSource.FALLBACK] = SourceValue(text=self.fallback_title)
        if seed_title:
            self.sources[TabTitleSource.EXPLICIT] = SourceValue(text=seed_title, updated_at=clock())
        self.last_prompt_cwd: Optional[str] = None
        self.running_process = False

        self.pending_title: Optional[str] = None
        self.pending_source: Optional[TabTitleSource] = None
        self.pending_token = 0
        self._timer: Optional[asyncio.TimerHandle] = None

        self.title = self.resolve()

    @property
    def fallback_title(self) -> str:
        return self.config.fallback.strip() or DEFAULT_TAB_TITLE_FALLBACK

    @property
    def has_pending(self) -> bool:
        return self.pending_title is not None

    def resolve(self) -> str:
        """First non-empty source in priority order."""
        for source in self.config.priority:
            if source is TabTitleSource.FALLBACK:
                return truncate_title(self.fallback_title)
            value = self.sources[source]
            if value.is_set:
                return truncate_title(value.text)
        return truncate_title(self.fallback_title)

    def refresh(self) -> bool:
        """Recompute the displayed title; True if it changed."""
        title = self.resolve()
        if title == self.title:
            return False
        self.title = title
        return True

    def set_config(self, config: TabTitleConfig) -> bool:
        self.config = config
        self.sources[TabTitleSource.FALLBACK] = SourceValue(
            text=self.fallback_title, updated_at=self._clock()
        )
        return self.refresh()

    def _record(self, source: TabTitleSource, text: Optional[str]) -> bool:
        changed = self.sources[source].text != text
        self.sources[source] = SourceValue(text=text, updated_at=self._clock())
        return self.refresh() if changed else False

    def apply(self, event: TitleEvent) -> bool:
        """Apply one event in arrival order.

        Returns:
            True if the displayed title changed right away
        """
        if isinstance(event, ManualRename):
            return self._record(TabTitleSource.MANUAL, truncate_title(event.text) or None)

        if isinstance(event, ShellTitle):
            title = truncate_title(event.text)
            return self._record(TabTitleSource.SHELL, title) if title else False

        if isinstance(event, ResetTitle):
            return self.clear_terminal_titles()

        if isinstance(event, ShellPrompt):
            return self._prompt(TabTitleSource.SHELL, event.cwd)

        if isinstance(event, ShellCommand):
            return self._command(TabTitleSource.SHELL, event.cmdline)

        if isinstance(event, ExplicitPayload):
            if event.kind is ExplicitKind.PROMPT:
                return self._prompt(TabTitleSource.EXPLICIT, event.payload)
            if event.kind is ExplicitKind.COMMAND:
                return self._command(TabTitleSource.EXPLICIT, event.payload)
            title = truncate_title(event.payload)
            if not title:
                return False
            self.cancel_pending()
            return self._record(TabTitleSource.EXPLICIT, title)

        raise TypeError(f"unsupported title event: {event!r}")

    def _prompt(self, source: TabTitleSource, cwd: str) -> bool:
        cwd = cwd.strip()
        if not cwd:
            return False
        self.running_process = False
        self.last_prompt_cwd = cwd
        self.cancel_pending()
        title = truncate_title(resolve_template(self.config.prompt_format, cwd=cwd))
        return self._record(source, title) if title else False

    def _command(self, source: TabTitleSource, cmdline: str) -> bool:
        cmdline = cmdline.strip()
        if not cmdline:
            return False
        self.running_process = True
        title = truncate_title(
            resolve_template(self.config.command_format, cwd=self.last_prompt_cwd, command=cmdline)
        )
        if title:
            self.schedule_pending(source, title)
        return False

    def schedule_pending(self, source: TabTitleSource, title: str) -> int:
        """Hold a command title back for the debounce delay.

        A newer command supersedes an older pending one.

        Returns:
            Generation token of the new pending promotion
        """
        self._cancel_timer()
        self.pending_token += 1
        self.pending_title = title
        self.pending_source = source
        token = self.pending_token

        loop = self._loop
        if loop is None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                logger.debug("No running event loop, command title waits for flush_pending()")
                return token

        self._timer = loop.call_later(COMMAND_TITLE_DELAY, self._on_timer, token)
        return token

    def _on_timer(self, token: int) -> None:
        if self.promote_pending(token) and self.on_change is not None:
            self.on_change(self.title)

    def promote_pending(self, token: int) -> bool:
        """Apply the pending title if ``token`` is still current.

        Returns:
            True if the displayed title changed
        """
        if token != self.pending_token or self.pending_title is None:
            return False

        title, source = self.pending_title, self.pending_source
        self.pending_title = None
        self.pending_source = None
        self._timer = None
        return self._record(source, title)

    def flush_pending(self) -> bool:
        """Promote the pending title now, without waiting for the timer."""
        self._cancel_timer()
        return self.promote_pending(self.pending_token)

    def cancel_pending(self) -> None:
        # bumping the token neutralizes a timer callback that is already queued
        self.pending_token += 1
        self.pending_title = None
        self.pending_source = None
        self._cancel_timer()

    def clear_terminal_titles(self) -> bool:
        """Forget shell and explicit titles after a terminal title reset.

        Returns:
            True if the displayed title changed
        """
        self.cancel_pending()
        self.running_process = False
        had_title = any(
            self.sources[source].text is not None
            for source in (TabTitleSource.SHELL, TabTitleSource.EXPLICIT)
        )
        if not had_title:
            return False
        self.sources[TabTitleSource.SHELL] = SourceValue(updated_at=self._clock())
        self.sources[TabTitleSource.EXPLICIT] = SourceValue(updated_at=self._clock())
        return self.refresh()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None


class TabTitleEngine:
    """Arena of independent tab title states keyed by tab id."""

    def __init__(
        self,
        config: Optional[TabTitleConfig] = None,
        on_change: Optional[Callable[[int, str], None]] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.config = config or TabTitleConfig()
        self.on_change = on_change
        self._loop = loop
        self._clock = clock
        self._tabs: dict[int, TabTitleState] = {}
        self._scanners: dict[int, OscTitleScanner] = {}
        self._ids = count(1)

    def open_tab(self, tab_id: Optional[int] = None, predicted_cwd: Optional[str] = None) -> int:
        """Create state for a new tab and return its id.

        Args:
            tab_id: Id to use. Defaults to the next free id
            predicted_cwd: Directory the shell is expected to start in
        """
        if tab_id is None:
            tab_id = next(self._ids)
            while tab_id in self._tabs:
                tab_id = next(self._ids)
        elif tab_id in self._tabs:
            raise ValueError(f"Tab {tab_id} is already open")

        self._tabs[tab_id] = TabTitleState(
            self.config,
            on_change=lambda title: self._notify(tab_id, title),
            loop=self._loop,
            clock=self._clock,
            seed_title=predicted_prompt_title(self.config, predicted_cwd),
        )
        self._scanners[tab_id] = OscTitleScanner()
        return tab_id

    def close_tab(self, tab_id: int) -> None:
        self._scanners.pop(tab_id, None)
        state = self._tabs.pop(tab_id, None)
        if state is not None:
            state.cancel_pending()

    def state(self, tab_id: int) -> TabTitleState:
        return self._tabs[tab_id]

    def title(self, tab_id: int) -> str:
        return self._tabs[tab_id].title

    @property
    def tab_ids(self) -> list[int]:
        return list(self._tabs)

    def running_process(self, tab_id: int) -> bool:
        """Whether the tab's shell last reported a command rather than a prompt."""
        return self._tabs[tab_id].running_process

    @property
    def running_tabs(self) -> list[int]:
        return [tab_id for tab_id, state in self._tabs.items() if state.running_process]

    def reset_title(self, tab_id: int) -> str:
        """Handle a terminal title reset for one tab."""
        return self.dispatch(tab_id, ResetTitle())

    def dispatch(self, tab_id: int, event: TitleEvent) -> str:
        """Apply an event to one tab and return its current title."""
        state = self._tabs[tab_id]
        if state.apply(event):
            self._notify(tab_id, state.title)
        return state.title

    def handle_terminal_title(self, tab_id: int, raw_title: str) -> str:
        """Dispatch a title set by the terminal (OSC 0/2 payload)."""
        event = decode_title(raw_title, self.config.explicit_prefix)
        if event is None:
            return self.title(tab_id)
        return self.dispatch(tab_id, event)

    def feed(self, tab_id: int, data: str) -> str:
        """Scan terminal output for title sequences and apply them in order.

        A sequence split across calls is completed by a later call.
        """
        for raw_title in self._scanners[tab_id].feed(data):
            self.handle_terminal_title(tab_id, raw_title)
        return self.title(tab_id)

    def set_config(self, config: TabTitleConfig) -> None:
        """Swap in reloaded settings; recorded sources are kept."""
        self.config = config
        for tab_id, state in self._tabs.items():
            if state.set_config(config):
                self._notify(tab_id, state.title)

    def _notify(self, tab_id: int, title: str) -> None:
        logger.debug("Tab %d title -> %r", tab_id, title)
        if self.on_change is not None:
            self.on_change(tab_id, title)
