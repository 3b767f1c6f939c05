"""Smoke tests for the textual config browser."""

import asyncio

from textual.widgets import DataTable

from termy.host import Platform
from termy.ui.app import TermyConfigApp
from termy.ui.screens import ConfigViewScreen, HomeScreen


def test_config_screen_lists_resolved_keybinds(write_config):
    path = write_config("keybind = clear\nkeybind = cmd-p=close_tab\nkeybind = cmd-t=new_tab\n")
    app = TermyConfigApp(config_path=path, platform=Platform.MACOS)

    async def _run():
        async with app.run_test() as pilot:
            await pilot.pause()
            assert isinstance(app.screen, HomeScreen)

            app.action_view_config()
            await pilot.pause()
            assert isinstance(app.screen, ConfigViewScreen)
            return app.screen.query_one("#bindings-table", DataTable).row_count

    assert asyncio.run(_run()) == 2


def test_reload_picks_up_file_changes(write_config):
    path = write_config("theme = nord\n")
    app = TermyConfigApp(config_path=path, platform=Platform.LINUX)

    async def _run():
        async with app.run_test() as pilot:
            await pilot.pause()
            path.write_text("theme = dracula\n")
            app.action_reload()
            await pilot.pause()
            return app.store.current.colors.theme

    assert asyncio.run(_run()) == "dracula"
