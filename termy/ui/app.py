"""Main Textual application."""

from pathlib import Path
from typing import Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from ..host import Platform
from ..runtime import ConfigStore
from .screens.config_view import ConfigViewScreen
from .screens.home import HomeScreen


class TermyConfigApp(App):
    """Browse the termy configuration: options, keybinds, colors and problems."""

    TITLE = "termy"
    SUB_TITLE = "Terminal configuration"

    CSS = """
    Screen {
        background: $surface;
    }

    #main-content {
        width: 100%;
        height: 100%;
        padding: 1 2;
    }

    .title {
        text-style: bold;
        color: $text;
        margin-bottom: 1;
    }

    .subtitle {
        color: $text-muted;
        margin-bottom: 2;
    }

    .hint {
        color: $text-muted;
        text-style: italic;
    }

    *:focus {
        border: solid $success;
    }

    ListView > ListItem.--highlight {
        background: $primary-darken-2;
    }
    """

    BINDINGS = [
        Binding("1", "go_home", "1:Home", show=True),
        Binding("2", "view_config", "2:Config", show=True),
        Binding("j", "focus_next", "j:Down", show=True),
        Binding("k", "focus_previous", "k:Up", show=True),
        Binding("r", "reload", "r:Reload", show=True),
        Binding("q", "quit", "q:Quit", show=True),
        Binding("?", "help", "?:Help", show=True),
        Binding("escape", "go_back", "Esc:Back", show=False),
    ]

    SCREENS = {
        "home": HomeScreen,
        "config": ConfigViewScreen,
    }

    def __init__(self, config_path: Optional[Path] = None, platform: Optional[Platform] = None):
        super().__init__()
        self.store = ConfigStore(config_path, platform)

    def compose(self) -> ComposeResult:
        """Compose the app layout."""
        yield Header()
        yield Footer()

    def on_mount(self) -> None:
        self.push_screen("home")

    def action_go_home(self) -> None:
        self.switch_screen("home")

    def action_view_config(self) -> None:
        self.switch_screen("config")

    def action_go_back(self) -> None:
        """Go back to previous screen or home."""
        if len(self.screen_stack) > 2:
            self.pop_screen()
        else:
            self.switch_screen("home")

    def action_focus_next(self) -> None:
        self.screen.focus_next()

    def action_focus_previous(self) -> None:
        self.screen.focus_previous()

    def action_reload(self) -> None:
        """Re-read the config file and refresh the visible screen."""
        snapshot = self.store.reload()
        refresh = getattr(self.screen, "refresh_snapshot", None)
        if refresh is not None:
            refresh()
        self.notify(
            f"{len(snapshot.diagnostics)} problem(s) found" if snapshot.diagnostics else "No problems",
            title="Config reloaded",
        )

    def action_help(self) -> None:
        """Show help."""
        self.notify(
            "Screens: 1=Home, 2=Config\n"
            "Navigation: j/k=Down/Up, h/l=Prev/Next tab\n"
            "Other: r=Reload, Esc=Back, q=Quit",
            title="Keys",
            timeout=10,
        )
