"""Command-line interface for Weatherify."""

import argparse
import asyncio
import logging
import sys

from weatherify import __version__
from weatherify.client import BrowserNavigator, WeatherifyApp, render_text
from weatherify.config import Settings, get_settings
from weatherify.models.location import Coordinates

logger = logging.getLogger(__name__)

COMMANDS_HELP = "Commands: login, generate, logout, refresh, view, quit"


def _position(value: str) -> Coordinates:
    """argparse type for a 'latitude,longitude' pair."""
    try:
        return Coordinates.from_string(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _with_position(settings: Settings, position: Coordinates | None) -> Settings:
    """Pin the client to a fixed position given on the command line."""
    if position is None:
        return settings
    return settings.model_copy(
        update={
            "geolocation_mode": "fixed",
            "latitude": position.latitude,
            "longitude": position.longitude,
        }
    )


def _build_app(settings: Settings, url: str | None) -> WeatherifyApp:
    navigator = BrowserNavigator(url or settings.app_url)
    return WeatherifyApp.from_settings(settings, navigator=navigator)


async def _status(settings: Settings, url: str | None) -> int:
    app = _build_app(settings, url)
    try:
        await app.mount()
        print(render_text(app.view()))
    finally:
        await app.aclose()
    return 0


async def _run(settings: Settings, url: str | None) -> int:
    app = _build_app(settings, url)
    try:
        await app.mount()
        print(render_text(app.view()))
        print(COMMANDS_HELP)

        while True:
            try:
                line = await asyncio.to_thread(input, "> ")
            except EOFError:
                break
            command = line.strip().lower()

            if command in ("quit", "exit"):
                break
            elif command == "login":
                app.login()
                print("Finish logging in in the browser, then restart with the URL it returns to:")
                print(f"  weatherify run --url '{settings.app_url}?login_success=true'")
                break
            elif command == "generate":
                await app.generate()
            elif command == "logout":
                await app.logout()
            elif command == "refresh":
                await app.refresh_weather()
            elif command in ("view", ""):
                pass
            else:
                print(COMMANDS_HELP)
                continue

            print(render_text(app.view()))
    finally:
        await app.aclose()
    return 0


def _serve(settings: Settings, host: str | None, port: int | None) -> int:
    import uvicorn

    from weatherify.api import create_app

    uvicorn.run(
        create_app(),
        host=host or settings.host,
        port=port or settings.port,
        log_level=settings.log_level.lower(),
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Weatherify - Generate a playlist based on the weather where you are"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    status_parser = subparsers.add_parser(
        "status", help="Show the current weather mood and login state"
    )
    status_parser.add_argument(
        "--url",
        help="Page URL to load (may carry login_success/login_error)",
    )
    status_parser.add_argument(
        "--position",
        type=_position,
        metavar="LAT,LON",
        help="Use this position instead of GEOLOCATION_MODE",
    )

    run_parser = subparsers.add_parser("run", help="Run the interactive client")
    run_parser.add_argument(
        "--url",
        help="Page URL to load (may carry login_success/login_error)",
    )
    run_parser.add_argument(
        "--position",
        type=_position,
        metavar="LAT,LON",
        help="Use this position instead of GEOLOCATION_MODE",
    )

    serve_parser = subparsers.add_parser("serve", help="Run the weather proxy server")
    serve_parser.add_argument("--host", help="Bind address")
    serve_parser.add_argument("--port", type=int, help="Bind port")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "status":
        return asyncio.run(_status(_with_position(settings, args.position), args.url))
    if args.command == "run":
        return asyncio.run(_run(_with_position(settings, args.position), args.url))
    if args.command == "serve":
        return _serve(settings, args.host, args.port)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
