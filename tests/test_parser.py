"""Tests for the config file parser."""

from pathlib import Path

import pytest

from termy.config import (
    BindDirective,
    ClearDirective,
    CursorStyle,
    TabTitleMode,
    TabTitleSource,
    UnbindDirective,
    WorkingDirFallback,
    parse_config_file,
    parse_config_text,
    parse_keybind_value,
)
from termy.diagnostics import DiagnosticKind


def _kinds(parsed):
    return [d.kind for d in parsed.diagnostics]


# ---------------------------------------------------------------------------
# Lines and sections
# ---------------------------------------------------------------------------

class TestLines:
    """Comments, blank lines, malformed lines and unknown keys."""

    def test_comments_and_blank_lines_are_ignored(self):
        parsed = parse_config_text("   # a comment\n\n\ttheme = dracula\n")
        assert parsed.options.theme == "dracula"
        assert parsed.diagnostics == ()

    def test_line_without_equals_is_dropped_with_line_number(self):
        parsed = parse_config_text("theme = nord\njust some words\nfont_size = 16\n")
        assert parsed.options.theme == "nord"
        assert parsed.options.font_size == 16.0
        assert _kinds(parsed) == [DiagnosticKind.PARSE_WARNING]
        assert parsed.diagnostics[0].line_number == 2

    def test_last_occurrence_wins(self):
        parsed = parse_config_text("theme = nord\ntheme = dracula\n")
        assert parsed.options.theme == "dracula"

    def test_keys_are_case_insensitive(self):
        parsed = parse_config_text("Font_Size = 18\n")
        assert parsed.options.font_size == 18.0

    def test_unknown_keys_are_kept_but_not_errors(self):
        parsed = parse_config_text("future_option = 1\n")
        assert parsed.options.extra == {"future_option": "1"}
        assert parsed.diagnostics == ()

    def test_unknown_section_warns_and_keeps_root_mode(self):
        parsed = parse_config_text("[window]\nfont_size = 16\n")
        assert parsed.options.font_size == 16.0
        assert parsed.colors is None
        assert _kinds(parsed) == [DiagnosticKind.PARSE_WARNING]


# ---------------------------------------------------------------------------
# Option values
# ---------------------------------------------------------------------------

class TestOptionValues:
    """Typed option parsing, clamping and aliases."""

    def test_booleans_are_case_sensitive(self):
        parsed = parse_config_text("use_tabs = True\ncursor_blink = false\n")
        assert parsed.options.use_tabs is True  # default kept
        assert parsed.options.cursor_blink is False
        assert _kinds(parsed) == [DiagnosticKind.PARSE_WARNING]
        assert parsed.diagnostics[0].line_number == 1

    def test_bad_number_keeps_default(self):
        parsed = parse_config_text("font_size = big\n")
        assert parsed.options.font_size == 14.0
        assert _kinds(parsed) == [DiagnosticKind.PARSE_WARNING]

    def test_bad_number_keeps_previous_value(self):
        parsed = parse_config_text("font_size = 20\nfont_size = big\n")
        assert parsed.options.font_size == 20.0

    def test_positive_numbers_reject_zero_and_negative(self):
        parsed = parse_config_text("font_size = -2\nwindow_width = 0\n")
        assert parsed.options.font_size == 14.0
        assert parsed.options.window_width == 1280.0
        assert len(parsed.diagnostics) == 2

    def test_clamped_values_are_clamped_silently(self):
        parsed = parse_config_text(
            "mouse_scroll_multiplier = 5000\n"
            "max_tabs = 0\n"
            "background_opacity = 1.5\n"
            "scrollback_history = 999999\n"
        )
        assert parsed.options.mouse_scroll_multiplier == 1000.0
        assert parsed.options.max_tabs == 1
        assert parsed.options.background_opacity == 1.0
        assert parsed.options.scrollback_history == 100_000
        assert parsed.diagnostics == ()

    def test_scroll_multiplier_lower_clamp(self):
        parsed = parse_config_text("mouse_scroll_multiplier = 0.01\n")
        assert parsed.options.mouse_scroll_multiplier == 0.1

    def test_non_finite_numbers_are_rejected(self):
        parsed = parse_config_text("mouse_scroll_multiplier = inf\nfont_size = nan\n")
        assert parsed.options.mouse_scroll_multiplier == 3.0
        assert parsed.options.font_size == 14.0
        assert len(parsed.diagnostics) == 2

    def test_home_is_expanded_in_path_options(self):
        parsed = parse_config_text("working_dir = ~/projects\nshell = ~/bin/fish\n")
        assert parsed.options.working_dir == str(Path.home() / "projects")
        assert parsed.options.shell == str(Path.home() / "bin/fish")

    def test_home_is_not_expanded_elsewhere(self):
        parsed = parse_config_text("tab_title_fallback = ~\n")
        assert parsed.options.tab_title_fallback == "~"

    def test_quotes_are_stripped(self):
        parsed = parse_config_text('font_family = "Fira Code"\nterm = \'xterm\'\n')
        assert parsed.options.font_family == "Fira Code"
        assert parsed.options.term == "xterm"

    def test_empty_string_is_rejected(self):
        parsed = parse_config_text("font_family =\n")
        assert parsed.options.font_family == "JetBrains Mono"
        assert _kinds(parsed) == [DiagnosticKind.PARSE_WARNING]

    def test_optional_string_can_be_unset(self):
        parsed = parse_config_text("colorterm = none\n")
        assert parsed.options.colorterm is None

    def test_theme_is_normalized(self):
        assert parse_config_text("theme = Tokyo Night\n").options.theme == "tokyo-night"
        assert parse_config_text("theme = My Custom\n").options.theme == "my-custom"

    def test_enum_aliases(self):
        parsed = parse_config_text(
            "cursor_style = beam\n"
            "scrollbar_visibility = onscroll\n"
            "default_working_dir = cwd\n"
        )
        assert parsed.options.cursor_style is CursorStyle.LINE
        assert parsed.options.scrollbar_visibility.value == "on_scroll"
        assert parsed.options.working_dir_fallback is WorkingDirFallback.PROCESS

    def test_unknown_enum_value_warns(self):
        parsed = parse_config_text("cursor_style = triangle\n")
        assert parsed.options.cursor_style is CursorStyle.BLOCK
        assert _kinds(parsed) == [DiagnosticKind.PARSE_WARNING]

    def test_scrollback_alias(self):
        parsed = parse_config_text("scrollback = 500\n")
        assert parsed.options.scrollback_history == 500


# ---------------------------------------------------------------------------
# Tab title options
# ---------------------------------------------------------------------------

class TestTabTitleOptions:
    """tab_title_mode and tab_title_priority."""

    def test_priority_defaults_to_mode_preset(self):
        parsed = parse_config_text("tab_title_mode = shell\n")
        assert parsed.options.tab_title_mode is TabTitleMode.SHELL
        assert parsed.options.effective_tab_title_priority == (
            TabTitleSource.MANUAL,
            TabTitleSource.SHELL,
            TabTitleSource.FALLBACK,
        )

    def test_priority_aliases_and_duplicates(self):
        parsed = parse_config_text("tab_title_priority = app, manual, terminal, default\n")
        assert parsed.options.tab_title_priority == (
            TabTitleSource.SHELL,
            TabTitleSource.MANUAL,
            TabTitleSource.FALLBACK,
        )

    def test_priority_overrides_mode(self):
        parsed = parse_config_text(
            "tab_title_mode = static\ntab_title_priority = explicit, fallback\n"
        )
        config = parsed.options.tab_title_config()
        assert config.priority == (TabTitleSource.EXPLICIT, TabTitleSource.FALLBACK)

    def test_priority_without_known_sources_warns(self):
        parsed = parse_config_text("tab_title_priority = nope, nada\n")
        assert parsed.options.tab_title_priority is None
        assert _kinds(parsed) == [DiagnosticKind.PARSE_WARNING]


# ---------------------------------------------------------------------------
# Keybind directives
# ---------------------------------------------------------------------------

class TestKeybindDirectives:
    """keybind lines become ordered directives."""

    def test_keybind_is_repeatable_and_ordered(self):
        parsed = parse_config_text(
            "keybind = clear\n"
            "keybind = cmd-p=toggle_command_palette\n"
            "keybind = cmd-c=unbind\n"
        )
        assert parsed.keybinds == (
            ClearDirective(line_number=1),
            BindDirective(trigger="cmd-p", action="toggle_command_palette", line_number=2),
            UnbindDirective(trigger="cmd-c", line_number=3),
        )

    def test_clear_is_case_insensitive(self):
        directive, problem = parse_keybind_value("CLEAR")
        assert isinstance(directive, ClearDirective)
        assert problem is None

    def test_trigger_and_action_are_normalized(self):
        directive, _ = parse_keybind_value("Shift-Secondary-P=Toggle-Command-Palette")
        assert directive == BindDirective(trigger="secondary-shift-p", action="toggle_command_palette")

    def test_equals_key_trigger(self):
        directive, _ = parse_keybind_value("cmd-=zoom_in")
        assert directive.trigger == "cmd-="
        assert directive.action == "zoom_in"

    def test_minus_key_trigger(self):
        directive, _ = parse_keybind_value("cmd--=zoom_out")
        assert directive.trigger == "cmd--"

    def test_missing_action_is_dropped(self):
        parsed = parse_config_text("keybind = cmd-p=\nkeybind = nonsense\n")
        assert parsed.keybinds == ()
        assert _kinds(parsed) == [DiagnosticKind.PARSE_WARNING, DiagnosticKind.PARSE_WARNING]

    def test_unknown_trigger_is_dropped(self):
        parsed = parse_config_text("keybind = cmd-banana=quit\n")
        assert parsed.keybinds == ()
        assert _kinds(parsed) == [DiagnosticKind.UNKNOWN_TRIGGER]

    def test_unknown_action_is_left_for_the_resolver(self):
        parsed = parse_config_text("keybind = cmd-k=make_coffee\n")
        assert parsed.keybinds[0].action == "make_coffee"
        assert parsed.diagnostics == ()


# ---------------------------------------------------------------------------
# [colors]
# ---------------------------------------------------------------------------

class TestColorsSection:
    """Color-entry mode after [colors]."""

    def test_color_entries_use_canonical_slots(self):
        parsed = parse_config_text(
            "theme = nord\n[colors]\nfg = #ffffff\ncolor1 = #FF0000\nbrightred = #aa0000\n"
        )
        assert parsed.colors == {
            "foreground": "#ffffff",
            "red": "#FF0000",
            "bright_red": "#aa0000",
        }

    def test_values_are_stored_raw(self):
        parsed = parse_config_text("[colors]\nbackground = zzzzzz\n")
        assert parsed.colors == {"background": "zzzzzz"}
        assert parsed.diagnostics == ()

    def test_unknown_color_key_warns(self):
        parsed = parse_config_text("[colors]\nbogus = #000000\n")
        assert parsed.colors == {}
        assert _kinds(parsed) == [DiagnosticKind.PARSE_WARNING]

    def test_colors_mode_lasts_until_end_of_file(self):
        parsed = parse_config_text("[colors]\nfg = #ffffff\ntheme = dracula\n")
        assert parsed.options.theme == "termy"
        assert _kinds(parsed) == [DiagnosticKind.PARSE_WARNING]

    def test_header_is_case_insensitive(self):
        parsed = parse_config_text("[ Colors ]\nbg = #000000\n")
        assert parsed.colors == {"background": "#000000"}

    def test_no_section_means_no_color_table(self):
        assert parse_config_text("theme = nord\n").colors is None


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------

def test_missing_file_gives_defaults(tmp_path):
    parsed = parse_config_file(tmp_path / "missing.txt")
    assert parsed.options.theme == "termy"
    assert parsed.diagnostics == ()
    assert parsed.path == str(tmp_path / "missing.txt")


def test_parse_config_file(write_config):
    path = write_config("theme = dracula\nkeybind = cmd-k=clear\n")
    parsed = parse_config_file(path)
    assert parsed.path == str(path)
    assert parsed.options.theme == "dracula"
    assert parsed.keybinds == (BindDirective(trigger="cmd-k", action="clear", line_number=2),)


def test_non_utf8_file_gives_defaults_and_a_warning(tmp_path):
    path = tmp_path / "config.txt"
    path.write_bytes(b"theme = nord\nfont_family = \xff\xfe\n")
    parsed = parse_config_file(path)
    assert parsed.options.theme == "termy"
    assert _kinds(parsed) == [DiagnosticKind.PARSE_WARNING]
    assert "UTF-8" in parsed.diagnostics[0].message


def test_parsed_mappings_are_read_only():
    parsed = parse_config_text("future_option = 1\n[colors]\nfg = #ffffff\n")
    with pytest.raises(TypeError):
        parsed.options.extra["other"] = "2"
    with pytest.raises(TypeError):
        parsed.colors["background"] = "#000000"
    assert parsed.colors == {"foreground": "#ffffff"}
