"""Command line access to the installed game integrations.

Examples::

    game-integrations games
    game-integrations editions genshin
    game-integrations --config ~/.game_integrations/config.json check-addons --strict
    game-integrations -v styles
"""

from __future__ import annotations

import argparse
import logging
import sys
import textwrap
from pathlib import Path
from typing import Optional, Sequence

from .app import AppContext
from .config import IntegrationsConfig
from .exceptions import IntegrationError
from .scan import check_addons, collect_details_styles, get_games_list


class HelpOnErrorArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        sys.stderr.write(f"Error: {message}\n\n")
        self.print_help(sys.stderr)
        raise SystemExit(2)


def build_parser() -> argparse.ArgumentParser:
    parser = HelpOnErrorArgumentParser(
        prog="game-integrations",
        formatter_class=argparse.RawTextHelpFormatter,
        description=textwrap.dedent(__doc__ or "").strip(),
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log output (-v for info, -vv for debug).",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="JSON configuration file. Without it GAME_INTEGRATIONS_* environment variables are used.",
    )

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("games", help="List installed and available game editions.")
    editions = commands.add_parser("editions", help="List the editions of one game.")
    editions.add_argument("game", help="Game identifier (integration directory name).")
    addons = commands.add_parser("check-addons", help="List enabled addons that need installing or updating.")
    addons.add_argument(
        "--strict",
        action="store_true",
        help="Exit with an error if any integration call failed during the scan.",
    )
    commands.add_parser("styles", help="Print the combined details background stylesheet.")
    return parser


def configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def load_config(path: Optional[str]) -> IntegrationsConfig:
    if path is not None:
        return IntegrationsConfig.load(Path(path).expanduser())
    return IntegrationsConfig.from_env()


def _games(context: AppContext) -> int:
    games = get_games_list(context.registry, context.settings, workers=context.config.workers)
    for heading, entries in (("Installed", games.installed), ("Available", games.available)):
        print(f"{heading}:")
        for entry in entries:
            print(f"  {entry.game_name}/{entry.edition.name}  {entry.game_title} ({entry.edition.title})")
    return 1 if games.failures else 0


def _editions(context: AppContext, game_name: str) -> int:
    game = context.registry.get(game_name)
    if game is None:
        sys.stderr.write(f"Error: unknown game '{game_name}'\n")
        return 1
    for edition in game.get_editions_list():
        print(f"{edition.name}\t{edition.title}")
    return 0


def _check_addons(context: AppContext, strict: bool) -> int:
    result = check_addons(
        context.registry,
        context.settings,
        workers=context.config.workers,
        strict=strict,
    )
    entries = sorted(
        result.entries,
        key=lambda entry: (entry.game_info.game_name, entry.game_info.edition, entry.group.name, entry.addon.name),
    )
    for entry in entries:
        info = entry.game_info
        print(f"{info.game_name}/{info.edition}: {entry.group.name}/{entry.addon.name} ({entry.addon.version})")
    if not entries:
        print("All enabled addons are up to date.")
    return 1 if result.failures else 0


def _styles(context: AppContext) -> int:
    print(collect_details_styles(context.registry, workers=context.config.workers))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        context = AppContext.from_config(load_config(args.config))
        if args.command == "games":
            return _games(context)
        if args.command == "editions":
            return _editions(context, args.game)
        if args.command == "check-addons":
            return _check_addons(context, args.strict)
        return _styles(context)
    except (IntegrationError, FileNotFoundError) as exc:
        sys.stderr.write(f"Error: {exc}\n")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
