"""Allow running as: python -m weatherdash

Usage:
  python -m weatherdash                      # Device location, else the default place
  python -m weatherdash search "Pune"        # One place
  python -m weatherdash locate --lat 18.52 --lon 73.86
  python -m weatherdash shell                # Interactive dashboard
  python -m weatherdash favorites add Pune   # Manage favorites offline
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from weatherdash.config.settings import get_config
from weatherdash.core.favorites import FavoritesStore
from weatherdash.core.geolocation import Geolocator, StaticGeolocator
from weatherdash.core.models import UnitSystem
from weatherdash.core.theme import ThemeStore
from weatherdash.dashboard.app import build_controller
from weatherdash.dashboard.cli_dashboard import CLIDashboard
from weatherdash.dashboard.controller import ActionResult, DashboardController
from weatherdash.storage import JsonFileStorage
from weatherdash.utils.logger import get_logger, setup_logging

logger = get_logger("cli")

SHELL_HELP = """\
  search <place>   show weather for a place
  open <name>      show weather for a favorite
  locate           show weather for your location
  units            toggle metric / imperial
  fav              toggle the current place as favorite
  remove <name>    remove a favorite
  favs             list favorites
  theme            toggle dark / light
  help             this message
  quit             exit"""


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Terminal weather dashboard (Open-Meteo)")
    parser.add_argument("--units", choices=[u.value for u in UnitSystem], default=None)
    parser.add_argument("--log-level", default=None)
    parser.add_argument("--storage", default=None, help="Path of the favorites/theme JSON file")
    parser.add_argument("--lat", type=float, default=None, help="Device latitude")
    parser.add_argument("--lon", type=float, default=None, help="Device longitude")

    sub = parser.add_subparsers(dest="command")
    sub.add_parser("startup", help="Device location, else the default place (default)")
    search = sub.add_parser("search", help="Show weather for a place name")
    search.add_argument("query", nargs="+")
    sub.add_parser("locate", help="Show weather for the device location")
    sub.add_parser("shell", help="Interactive dashboard")
    sub.add_parser("theme", help="Toggle dark/light theme")

    favorites = sub.add_parser("favorites", help="Manage favorite places")
    favorites.add_argument("action", choices=["list", "add", "remove"], nargs="?", default="list")
    favorites.add_argument("name", nargs="*")
    return parser


async def _shell(controller: DashboardController) -> None:
    renderer = CLIDashboard()
    await controller.startup()
    print(SHELL_HELP)

    while True:
        try:
            line = await asyncio.to_thread(input, "weather> ")
        except (EOFError, KeyboardInterrupt):
            print()
            return

        command, _, arg = line.strip().partition(" ")
        arg = arg.strip()
        command = command.lower()

        if command in ("quit", "exit", "q"):
            return
        if command == "search":
            await controller.search(arg)
        elif command == "open":
            await controller.select_favorite(arg)
        elif command == "locate":
            await controller.locate()
        elif command == "units":
            await controller.toggle_unit()
        elif command == "fav":
            controller.toggle_favorite()
        elif command == "remove":
            controller.remove_favorite(arg)
        elif command == "favs":
            print(renderer.format_favorites(controller.view.favorites))
        elif command == "theme":
            controller.toggle_theme()
        elif command in ("help", "?"):
            print(SHELL_HELP)
        elif command:
            print(f"  Unknown command: {command}\n{SHELL_HELP}")


async def _run(args: argparse.Namespace, geolocator: Geolocator | None) -> int:
    config = get_config()
    storage = JsonFileStorage(args.storage) if args.storage else None
    unit = UnitSystem(args.units) if args.units else None

    controller = build_controller(
        config,
        storage=storage,
        geolocator=geolocator,
        renderer=CLIDashboard(),
        unit=unit,
    )
    async with controller:
        if args.command == "shell":
            await _shell(controller)
            return 0

        result: ActionResult
        if args.command == "search":
            controller.load_preferences()
            result = await controller.search(" ".join(args.query))
        elif args.command == "locate":
            controller.load_preferences()
            result = await controller.locate()
        else:
            result = await controller.startup()
        return 0 if result.ok else 1


def _favorites_command(args: argparse.Namespace) -> int:
    config = get_config()
    store = FavoritesStore(JsonFileStorage(args.storage or config.storage_path))
    store.load()
    name = " ".join(args.name).strip()

    if args.action in ("add", "remove") and not name:
        print("A place name is required", file=sys.stderr)
        return 2
    if args.action == "add":
        store.add(name)
    elif args.action == "remove":
        store.remove(name)

    print(CLIDashboard().format_favorites(store.list()))
    return 0


def _theme_command(args: argparse.Namespace) -> int:
    config = get_config()
    store = ThemeStore(JsonFileStorage(args.storage or config.storage_path))
    store.load()
    print(f"Theme: {store.toggle()}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point with command routing."""
    args = _parser().parse_args(argv)
    config = get_config()
    setup_logging(log_level=args.log_level or config.log_level)
    logger.debug("cli_command", command=args.command or "startup")

    if args.command == "favorites":
        return _favorites_command(args)
    if args.command == "theme":
        return _theme_command(args)

    geolocator: Geolocator | None = None
    if (args.lat is None) != (args.lon is None):
        print("--lat and --lon must be given together", file=sys.stderr)
        return 2
    if args.lat is not None and args.lon is not None:
        try:
            geolocator = StaticGeolocator(args.lat, args.lon)
        except ValueError as e:
            print(str(e), file=sys.stderr)
            return 2

    try:
        return asyncio.run(_run(args, geolocator))
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
