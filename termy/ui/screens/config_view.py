"""Screen for viewing the resolved termy configuration."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, ScrollableContainer
from textual.screen import Screen
from textual.widgets import (
    Button,
    DataTable,
    Label,
    ListItem,
    ListView,
    Static,
    TabbedContent,
    TabPane,
)

from ...colors import BUILTIN_THEME_IDS
from ...config import ConfigWriteError, ConfigWriter
from ...reports import config_report, validation_report


class ConfigViewScreen(Screen):
    """Keybindings, colors, themes, options and problems in tabs."""

    CSS = """
    #bindings-table, #colors-table, #themes-list {
        height: 1fr;
    }

    #options-container, #problems-container {
        height: 1fr;
    }

    #config-actions {
        height: auto;
        padding: 1 0;
    }

    #config-actions Button {
        margin-right: 1;
    }

    DataTable > .datatable--cursor {
        background: $primary;
    }
    """

    BINDINGS = [
        Binding("h", "prev_tab", "Prev Tab", show=False),
        Binding("l", "next_tab", "Next Tab", show=False),
    ]

    def action_prev_tab(self) -> None:
        self.query_one(TabbedContent).action_previous_tab()

    def action_next_tab(self) -> None:
        self.query_one(TabbedContent).action_next_tab()

    def compose(self) -> ComposeResult:
        """Compose the config view screen."""
        with Container(id="main-content"):
            yield Static("Your termy Configuration", classes="title")

            with TabbedContent():
                with TabPane("Keybindings", id="tab-bindings"):
                    yield DataTable(id="bindings-table")

                with TabPane("Colors", id="tab-colors"):
                    yield DataTable(id="colors-table")

                with TabPane("Themes", id="tab-themes"):
                    yield ListView(
                        *[ListItem(Label(theme), name=theme) for theme in BUILTIN_THEME_IDS],
                        id="themes-list",
                    )

                with TabPane("Options", id="tab-options"):
                    yield ScrollableContainer(
                        Static("", id="options-text", markup=False),
                        id="options-container",
                    )

                with TabPane("Problems", id="tab-problems"):
                    yield ScrollableContainer(
                        Static("", id="problems-text", markup=False),
                        id="problems-container",
                    )

            with Horizontal(id="config-actions"):
                yield Button("Back to Home", id="btn-back", variant="default")
                yield Button("Reload", id="btn-reload", variant="primary")

    def on_mount(self) -> None:
        self.refresh_snapshot()

    def refresh_snapshot(self) -> None:
        """Fill every tab from the current snapshot."""
        snapshot = self.app.store.current

        table = self.query_one("#bindings-table", DataTable)
        table.clear(columns=True)
        table.add_columns("Trigger", "Action", "Palette title")
        for trigger, action in snapshot.keybinds.bindings.items():
            table.add_row(trigger, action.value, action.palette_title)

        colors = self.query_one("#colors-table", DataTable)
        colors.clear(columns=True)
        colors.add_columns("Slot", "Color")
        for slot, color in snapshot.colors.palette.items():
            colors.add_row(slot, color.hex)

        self.query_one("#options-text", Static).update("\n".join(config_report(snapshot)))

        problems = validation_report(snapshot)
        self.query_one("#problems-text", Static).update(
            "\n".join(problems) if problems else "No problems found."
        )

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        """Switch to the selected theme."""
        theme = event.item.name
        if not theme:
            return
        try:
            message = ConfigWriter(self.app.store.path).set_theme(theme)
        except ConfigWriteError as e:
            self.app.notify(str(e), title="Theme", severity="error")
            return
        self.app.notify(message, title="Theme")
        self.app.action_reload()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        if event.button.id == "btn-back":
            self.app.switch_screen("home")
        elif event.button.id == "btn-reload":
            self.app.action_reload()
