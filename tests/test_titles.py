"""Tests for the tab title engine."""

import asyncio

import pytest

from termy.config import TabTitleConfig, TabTitleMode, TabTitleSource
from termy.titles import (
    COMMAND_TITLE_DELAY,
    MAX_TAB_TITLE_CHARS,
    ExplicitKind,
    ExplicitPayload,
    ManualRename,
    ResetTitle,
    ShellCommand,
    ShellPrompt,
    ShellTitle,
    TabTitleEngine,
    TabTitleState,
)


def _prompt(cwd):
    return ExplicitPayload(kind=ExplicitKind.PROMPT, payload=cwd)


def _command(cmdline):
    return ExplicitPayload(kind=ExplicitKind.COMMAND, payload=cmdline)


def _title(text):
    return ExplicitPayload(kind=ExplicitKind.TITLE, payload=text)


def _mode(mode: TabTitleMode, **kwargs) -> TabTitleConfig:
    return TabTitleConfig(mode=mode, priority=mode.default_priority(), **kwargs)


# ---------------------------------------------------------------------------
# Priority resolution
# ---------------------------------------------------------------------------

class TestPriority:
    """First non-empty source wins."""

    def test_explicit_beats_shell_in_smart_mode(self):
        state = TabTitleState(TabTitleConfig())
        state.apply(ManualRename(text=""))
        state.apply(_title("X"))
        state.apply(ShellTitle(text="Y"))
        assert state.title == "X"

    def test_shell_when_explicit_is_empty(self):
        state = TabTitleState(TabTitleConfig())
        state.apply(ShellTitle(text="Y"))
        assert state.title == "Y"

    def test_fallback_when_everything_is_empty(self):
        state = TabTitleState(TabTitleConfig(fallback="shell"))
        assert state.title == "shell"

    def test_blank_fallback_uses_default(self):
        state = TabTitleState(TabTitleConfig(fallback="   "))
        assert state.title == "Terminal"

    def test_manual_rename_wins_and_can_be_cleared(self):
        state = TabTitleState(TabTitleConfig())
        state.apply(_title("X"))
        assert state.apply(ManualRename(text="work")) is True
        assert state.title == "work"
        state.apply(ManualRename(text=""))
        assert state.title == "X"

    def test_static_mode_records_but_does_not_show_sources(self):
        state = TabTitleState(_mode(TabTitleMode.STATIC))
        state.apply(ShellTitle(text="vim"))
        state.apply(_title("X"))
        assert state.title == "Terminal"
        assert state.sources[TabTitleSource.SHELL].text == "vim"
        assert state.sources[TabTitleSource.EXPLICIT].text == "X"

    def test_shell_mode_ignores_explicit(self):
        state = TabTitleState(_mode(TabTitleMode.SHELL))
        state.apply(_title("X"))
        state.apply(ShellTitle(text="Y"))
        assert state.title == "Y"

    def test_priority_without_fallback_still_has_a_title(self):
        state = TabTitleState(TabTitleConfig(priority=(TabTitleSource.SHELL,)))
        assert state.title == "Terminal"

    def test_update_timestamps_come_from_clock(self):
        state = TabTitleState(TabTitleConfig(), clock=lambda: 42.0)
        state.apply(ManualRename(text="work"))
        assert state.sources[TabTitleSource.MANUAL].updated_at == 42.0

    def test_repeated_event_still_updates_timestamp(self):
        ticks = iter([1.0, 2.0])
        state = TabTitleState(TabTitleConfig(), clock=lambda: next(ticks))
        assert state.apply(ShellPrompt(cwd="~")) is True
        assert state.apply(ShellPrompt(cwd="~")) is False
        assert state.sources[TabTitleSource.SHELL].text == "~"
        assert state.sources[TabTitleSource.SHELL].updated_at == 2.0


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

class TestFormatting:
    """Templates, whitespace and truncation."""

    def test_prompt_format(self):
        state = TabTitleState(TabTitleConfig(prompt_format="dir: {cwd}"))
        state.apply(_prompt("~/src"))
        assert state.title == "dir: ~/src"

    def test_command_format_uses_last_prompt_cwd(self):
        state = TabTitleState(TabTitleConfig(command_format="{cwd} > {command}"))
        state.apply(_prompt("~/src"))
        state.apply(_command("make"))
        assert state.title == "~/src"
        assert state.flush_pending() is True
        assert state.title == "~/src > make"

    def test_titles_are_single_line_and_truncated(self):
        state = TabTitleState(TabTitleConfig())
        state.apply(ShellTitle(text="a\n\tb   c"))
        assert state.title == "a b c"
        state.apply(ShellTitle(text="x" * 200))
        assert len(state.title) == MAX_TAB_TITLE_CHARS

    def test_empty_payloads_are_ignored(self):
        state = TabTitleState(TabTitleConfig())
        state.apply(_title("X"))
        assert state.apply(_title("   ")) is False
        assert state.apply(_prompt("")) is False
        assert state.apply(_command("")) is False
        assert not state.has_pending
        assert state.title == "X"


# ---------------------------------------------------------------------------
# Pending command titles without an event loop
# ---------------------------------------------------------------------------

class TestPendingCommand:
    """Generation tokens guard delayed promotions."""

    def test_command_is_not_shown_immediately(self):
        state = TabTitleState(TabTitleConfig())
        state.apply(_prompt("~"))
        assert state.apply(_command("ls")) is False
        assert state.title == "~"
        assert state.has_pending

    def test_stale_token_does_not_apply(self):
        state = TabTitleState(TabTitleConfig())
        token = state.schedule_pending(TabTitleSource.EXPLICIT, "ls")
        state.cancel_pending()
        assert state.promote_pending(token) is False
        assert state.title == "Terminal"

    def test_prompt_cancels_pending_command(self):
        state = TabTitleState(TabTitleConfig())
        state.apply(_command("ls"))
        state.apply(_prompt("~/x"))
        assert state.flush_pending() is False
        assert state.title == "~/x"

    def test_title_payload_cancels_pending_command(self):
        state = TabTitleState(TabTitleConfig())
        state.apply(_command("ls"))
        state.apply(_title("editing"))
        assert not state.has_pending
        assert state.title == "editing"

    def test_newer_command_supersedes(self):
        state = TabTitleState(TabTitleConfig())
        first = state.schedule_pending(TabTitleSource.EXPLICIT, "make")
        state.apply(_command("ls"))
        assert state.promote_pending(first) is False
        state.flush_pending()
        assert state.title == "ls"


# ---------------------------------------------------------------------------
# Engine with a real event loop
# ---------------------------------------------------------------------------

class TestEngineDebounce:
    """Debounce timing on the asyncio loop."""

    def test_prompt_within_delay_hides_command(self):
        seen = []

        async def _run():
            engine = TabTitleEngine(TabTitleConfig(), on_change=lambda tab, title: seen.append(title))
            tab = engine.open_tab()
            engine.dispatch(tab, _prompt("~"))
            engine.dispatch(tab, _command("ls"))
            await asyncio.sleep(COMMAND_TITLE_DELAY / 5)
            engine.dispatch(tab, _prompt("~/x"))
            await asyncio.sleep(COMMAND_TITLE_DELAY * 2)
            return engine.title(tab)

        assert asyncio.run(_run()) == "~/x"
        assert "ls" not in seen
        assert seen == ["~", "~/x"]

    def test_command_is_promoted_after_delay(self):
        seen = []

        async def _run():
            engine = TabTitleEngine(TabTitleConfig(), on_change=lambda tab, title: seen.append((tab, title)))
            tab = engine.open_tab()
            engine.dispatch(tab, _command("htop"))
            assert engine.title(tab) == "Terminal"
            await asyncio.sleep(COMMAND_TITLE_DELAY * 2)
            return tab, engine.title(tab)

        tab, title = asyncio.run(_run())
        assert title == "htop"
        assert seen == [(tab, "htop")]

    def test_newer_command_supersedes_pending(self):
        seen = []

        async def _run():
            engine = TabTitleEngine(TabTitleConfig(), on_change=lambda tab, title: seen.append(title))
            tab = engine.open_tab()
            engine.dispatch(tab, _command("make"))
            engine.dispatch(tab, _command("ls"))
            await asyncio.sleep(COMMAND_TITLE_DELAY * 2)
            return engine.title(tab)

        assert asyncio.run(_run()) == "ls"
        assert seen == ["ls"]

    def test_shell_command_is_debounced(self):
        async def _run():
            engine = TabTitleEngine(_mode(TabTitleMode.SHELL))
            tab = engine.open_tab()
            engine.dispatch(tab, ShellPrompt(cwd="~"))
            engine.dispatch(tab, ShellCommand(cmdline="vim notes.md"))
            before = engine.title(tab)
            await asyncio.sleep(COMMAND_TITLE_DELAY * 2)
            return before, engine.title(tab)

        assert asyncio.run(_run()) == ("~", "vim notes.md")

    def test_tabs_are_independent(self):
        async def _run():
            engine = TabTitleEngine(TabTitleConfig())
            first = engine.open_tab()
            second = engine.open_tab()
            engine.dispatch(first, _command("cargo build"))
            engine.dispatch(second, _prompt("~/other"))
            await asyncio.sleep(COMMAND_TITLE_DELAY * 2)
            return engine.title(first), engine.title(second)

        assert asyncio.run(_run()) == ("cargo build", "~/other")

    def test_closed_tab_never_promotes(self):
        seen = []

        async def _run():
            engine = TabTitleEngine(TabTitleConfig(), on_change=lambda tab, title: seen.append(title))
            tab = engine.open_tab()
            engine.dispatch(tab, _command("ls"))
            engine.close_tab(tab)
            await asyncio.sleep(COMMAND_TITLE_DELAY * 2)
            return engine

        engine = asyncio.run(_run())
        assert seen == []
        assert engine.tab_ids == []


# ---------------------------------------------------------------------------
# Engine bookkeeping
# ---------------------------------------------------------------------------

class TestEngine:
    """Tab arena and terminal title handling."""

    def test_open_tab_ids(self):
        engine = TabTitleEngine()
        assert engine.open_tab() == 1
        assert engine.open_tab(5) == 5
        with pytest.raises(ValueError):
            engine.open_tab(5)
        assert engine.tab_ids == [1, 5]

    def test_unknown_tab(self):
        with pytest.raises(KeyError):
            TabTitleEngine().title(3)

    def test_handle_terminal_title(self):
        engine = TabTitleEngine()
        tab = engine.open_tab()
        assert engine.handle_terminal_title(tab, "vim") == "vim"
        assert engine.handle_terminal_title(tab, "termy:tab:title:notes") == "notes"
        assert engine.handle_terminal_title(tab, "   ") == "notes"

    def test_feed_applies_sequences_in_order(self):
        engine = TabTitleEngine()
        tab = engine.open_tab()
        data = "\x1b]2;termy:tab:prompt:~/a\x07 some output \x1b]0;htop\x1b\\"
        assert engine.feed(tab, data) == "~/a"
        assert engine.state(tab).sources[TabTitleSource.SHELL].text == "htop"

    def test_set_config_refreshes_titles(self):
        seen = []
        engine = TabTitleEngine(on_change=lambda tab, title: seen.append(title))
        tab = engine.open_tab()
        engine.set_config(TabTitleConfig(fallback="zsh"))
        assert engine.title(tab) == "zsh"
        assert seen == ["zsh"]

    def test_feed_joins_sequence_split_across_reads(self):
        engine = TabTitleEngine()
        tab = engine.open_tab()
        assert engine.feed(tab, "\x1b]2;termy:tab:title:Hel") == "Terminal"
        assert engine.feed(tab, "lo\x07") == "Hello"

    def test_feed_joins_split_string_terminator(self):
        engine = TabTitleEngine()
        tab = engine.open_tab()
        engine.feed(tab, "\x1b]0;vim\x1b")
        assert engine.feed(tab, "\\$ ") == "vim"

    def test_feed_skips_unterminated_sequence(self):
        engine = TabTitleEngine()
        tab = engine.open_tab()
        data = "\x1b]2;broken\r\n\x1b]2;termy:tab:title:Good\x07"
        assert engine.feed(tab, data) == "Good"
        assert engine.state(tab).sources[TabTitleSource.SHELL].text is None

    def test_reset_title_through_engine(self):
        engine = TabTitleEngine()
        tab = engine.open_tab()
        engine.handle_terminal_title(tab, "vim")
        assert engine.reset_title(tab) == "Terminal"


# ---------------------------------------------------------------------------
# Title resets, predicted titles and running processes
# ---------------------------------------------------------------------------

class TestTerminalReset:
    """A title reset drops shell and explicit titles."""

    def test_reset_clears_terminal_sources_and_pending(self):
        state = TabTitleState(TabTitleConfig())
        state.apply(ShellTitle(text="vim"))
        state.apply(_title("X"))
        state.apply(_command("make"))
        assert state.running_process

        assert state.apply(ResetTitle()) is True
        assert state.title == "Terminal"
        assert not state.has_pending
        assert not state.running_process
        assert state.sources[TabTitleSource.SHELL].text is None
        assert state.sources[TabTitleSource.EXPLICIT].text is None

    def test_reset_keeps_manual_title(self):
        state = TabTitleState(TabTitleConfig())
        state.apply(ManualRename(text="work"))
        state.apply(ShellTitle(text="vim"))
        assert state.apply(ResetTitle()) is False
        assert state.title == "work"
        assert state.sources[TabTitleSource.SHELL].text is None

    def test_reset_with_nothing_to_clear(self):
        state = TabTitleState(TabTitleConfig())
        assert state.clear_terminal_titles() is False
        assert state.title == "Terminal"


class TestPredictedTitle:
    """New tabs show the expected prompt title before the shell reports one."""

    def test_new_tab_is_seeded_from_prompt_format(self):
        engine = TabTitleEngine(TabTitleConfig(prompt_format="in {cwd}"))
        tab = engine.open_tab(predicted_cwd="~/proj")
        assert engine.title(tab) == "in ~/proj"
        assert engine.state(tab).sources[TabTitleSource.EXPLICIT].text == "in ~/proj"

    def test_no_seed_without_explicit_in_priority(self):
        engine = TabTitleEngine(_mode(TabTitleMode.SHELL))
        tab = engine.open_tab(predicted_cwd="~/proj")
        assert engine.title(tab) == "Terminal"

    def test_no_seed_when_template_is_empty(self):
        engine = TabTitleEngine()
        tab = engine.open_tab()
        assert engine.state(tab).sources[TabTitleSource.EXPLICIT].text is None

    def test_first_prompt_replaces_seed(self):
        engine = TabTitleEngine()
        tab = engine.open_tab(predicted_cwd="~")
        assert engine.title(tab) == "~"
        assert engine.dispatch(tab, _prompt("~/src")) == "~/src"


class TestRunningProcess:
    """Commands mark a tab busy until the next prompt."""

    def test_command_sets_and_prompt_clears(self):
        state = TabTitleState(TabTitleConfig())
        assert not state.running_process
        state.apply(_command("sleep 10"))
        assert state.running_process
        state.apply(_prompt("~"))
        assert not state.running_process

    def test_title_payload_leaves_flag_alone(self):
        state = TabTitleState(TabTitleConfig())
        state.apply(ShellCommand(cmdline="vim"))
        state.apply(_title("editing"))
        assert state.running_process

    def test_running_tabs(self):
        engine = TabTitleEngine()
        first = engine.open_tab()
        second = engine.open_tab()
        engine.dispatch(first, _command("cargo build"))
        assert engine.running_process(first)
        assert not engine.running_process(second)
        assert engine.running_tabs == [first]

        engine.dispatch(first, _prompt("~"))
        assert engine.running_tabs == []
