"""Entry point for the termy config tools.

Usage:
    termy-config show-config
    termy-config list-keybinds --pretty
    termy-config set-theme "Tokyo Night"
    termy-config import-colors ~/Downloads/colors.json
    termy-config tui

Exit codes:
    0 = success
    1 = config problems found, or a config change failed
"""

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .colors import load_color_import
from .config import ConfigWriteError, ConfigWriter, config_path
from .host import HOST_PLATFORM, Platform
from .logger import setup_logging
from .reports import (
    actions_report,
    colors_report,
    config_report,
    keybinds_report,
    themes_report,
    validation_report,
)
from .runtime import load_snapshot

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="termy-config", description="Inspect and edit the termy configuration"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Config file to use (default: per-user config.txt)",
    )
    parser.add_argument(
        "--platform",
        choices=[p.value for p in Platform],
        default=HOST_PLATFORM.value,
        help="Platform used to resolve secondary-* keybinds",
    )
    parser.add_argument("--log-level", default="WARNING", help="Console log level")
    parser.add_argument("--log-file", action="store_true", help="Also write a debug log file")

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("show-config", help="Show the effective configuration")
    commands.add_parser("list-themes", help="List built-in themes")

    colors = commands.add_parser("list-colors", help="Show the resolved color palette")
    colors.add_argument("--import", dest="import_path", type=Path, help="JSON colors to layer on top")

    keybinds = commands.add_parser("list-keybinds", help="List resolved keybindings")
    keybinds.add_argument("--pretty", action="store_true", help="Show triggers as Ctrl + Shift + C")

    commands.add_parser("list-actions", help="List keybind actions")
    commands.add_parser("validate-config", help="Report problems in the config file")

    theme = commands.add_parser("set-theme", help="Switch the configured theme")
    theme.add_argument("theme", help="Theme id or name, e.g. tokyo-night")

    import_colors = commands.add_parser("import-colors", help="Replace [colors] from a JSON file")
    import_colors.add_argument("path", type=Path, help="JSON object of slot -> #RRGGBB")

    for command in (theme, import_colors):
        command.add_argument("--no-backup", action="store_true", help="Skip the backup copy")

    commands.add_parser("tui", help="Browse the configuration interactively")
    return parser


def _print_lines(lines: list[str]) -> None:
    for line in lines:
        print(line)


def main(argv=None) -> int:
    """Run the termy config CLI."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, log_file=args.log_file)

    path = args.config or config_path()
    platform = Platform(args.platform)

    if args.command == "tui":
        from .ui.app import TermyConfigApp

        TermyConfigApp(config_path=path, platform=platform).run()
        return 0

    if args.command in ("set-theme", "import-colors"):
        writer = ConfigWriter(path)
        try:
            if args.command == "set-theme":
                message = writer.set_theme(args.theme, create_backup=not args.no_backup)
            else:
                message = writer.import_colors(args.path, create_backup=not args.no_backup)
        except ConfigWriteError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        print(message)
        return 0

    if args.command == "list-actions":
        _print_lines(actions_report())
        return 0

    imported = None
    if args.command == "list-colors" and args.import_path:
        imported, problems = load_color_import(args.import_path)
        for problem in problems:
            logger.warning("%s", problem)

    snapshot = load_snapshot(path, platform, imported)

    if args.command == "show-config":
        _print_lines(config_report(snapshot))
    elif args.command == "list-themes":
        _print_lines(themes_report(snapshot.colors.theme))
    elif args.command == "list-colors":
        _print_lines(colors_report(snapshot))
    elif args.command == "list-keybinds":
        _print_lines(keybinds_report(snapshot, pretty=args.pretty))
    elif args.command == "validate-config":
        problems = validation_report(snapshot)
        if problems:
            _print_lines(problems)
            return 1
        print(f"{path}: OK")
    return 0


if __name__ == "__main__":
    sys.exit(main())
