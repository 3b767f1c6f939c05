"""Home screen with config status and quick actions."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Vertical
from textual.screen import Screen
from textual.widgets import Button, Label, Static

from ...config import ConfigWriter, ensure_config_file


class HomeScreen(Screen):
    """Overview of the loaded config file."""

    CSS = """
    #status-section {
        height: auto;
        margin: 1 0;
        padding: 1;
        background: $surface-darken-1;
        border: solid $primary;
    }

    #actions {
        height: auto;
        margin: 1 0;
    }

    #actions Button {
        width: 100%;
        margin: 1 0;
    }
    """

    BINDINGS = [
        Binding("enter", "press_button", "Select", show=False),
        Binding("o", "press_button", "Open", show=False),
    ]

    def action_press_button(self) -> None:
        """Press the focused button."""
        focused = self.focused
        if isinstance(focused, Button):
            focused.press()

    def compose(self) -> ComposeResult:
        """Compose the home screen."""
        with Container(id="main-content"):
            yield Static("termy", classes="title")
            yield Static("Options, keybindings and colors as termy sees them", classes="subtitle")

            with Vertical(id="status-section"):
                yield Label("", id="config-status")
                yield Label("", id="config-problems")

            with Vertical(id="actions"):
                yield Button("View Config", id="btn-config", variant="primary")
                yield Button("Create Default Config", id="btn-create", variant="success")
                yield Button("Restore Latest Backup", id="btn-restore", variant="warning")

            yield Static("Press ? for keyboard shortcuts", classes="hint")

    def on_mount(self) -> None:
        self.refresh_snapshot()

    def refresh_snapshot(self) -> None:
        """Update the status labels from the current snapshot."""
        store = self.app.store
        snapshot = store.current
        status = self.query_one("#config-status", Label)
        problems = self.query_one("#config-problems", Label)

        if store.path.exists():
            status.update(
                f"{store.path}: theme {snapshot.colors.theme}, "
                f"{len(snapshot.keybinds.bindings)} keybindings"
            )
        else:
            status.update(f"No config at {store.path} - using defaults")

        count = len(snapshot.diagnostics)
        problems.update(f"{count} problem(s), see Config > Problems" if count else "No problems")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        button_id = event.button.id

        if button_id == "btn-config":
            self.app.switch_screen("config")
        elif button_id == "btn-create":
            ensure_config_file(self.app.store.path)
            self.app.action_reload()
        elif button_id == "btn-restore":
            self._restore_latest_backup()

    def _restore_latest_backup(self) -> None:
        writer = ConfigWriter(self.app.store.path)
        backups = writer.list_backups()
        if not backups:
            self.app.notify("No backups yet", title="Restore")
            return
        try:
            writer.restore_backup(backups[0])
        except OSError as e:
            self.app.notify(str(e), title="Restore failed", severity="error")
            return
        self.app.action_reload()
