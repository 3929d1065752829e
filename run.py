"""Delver CLI entry point.

Provides subcommands for running the web server and for generating a single
layout to stdout. Accepts configuration via flags and environment variables,
with .env loading.

Run `python run.py --help` for details.
"""

import argparse
import os
import signal
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

_color_init(strip=False)

# Disable colors if output is not a real terminal (e.g., during pytest capture)
try:
    _COLOR_ENABLED = sys.stdout.isatty()
except (AttributeError, ValueError):  # pragma: no cover - closed or replaced stdout
    _COLOR_ENABLED = False


def _load_version() -> str:
    try:
        with open("VERSION", "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Delver dungeon generator

    Run the HTTP API server or generate one layout and print it. Configuration
    can be provided via CLI flags or environment variables. If both are
    present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST               Bind address for the web server (default: 0.0.0.0)
          PORT               Port for the web server (default: 5000)
          DELVER_WIDTH       Grid width for `generate` (default: 50)
          DELVER_HEIGHT      Grid height for `generate` (default: 30)
          DELVER_ROOM_COUNT  Rooms per layout (default: 5)
          DELVER_SEED        Seed for `generate` (default: random)
          DELVER_LOG_LEVEL   debug | info | warn | error (default: info)

        Examples:
          # Run the server on the default host and port
          python run.py server

          # Run the server on a custom port
          python run.py server --port 8080

          # Print a seeded layout
          python run.py generate --seed 42

          # Print the same layout as JSON
          python run.py generate --seed 42 --json
        """
    )

    parser = argparse.ArgumentParser(
        prog="Delver",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Delver {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    # server subcommand
    server_parser = subparsers.add_parser(
        "server",
        help="Run the HTTP API server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask development server with the dungeon API",
    )
    server_parser.add_argument(
        "--host",
        default=None,
        help="Host interface to bind (default: env HOST or 0.0.0.0)",
    )
    server_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: env PORT or 5000)",
    )
    server_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable Flask debug mode with verbose error pages",
    )
    server_parser.set_defaults(command="server")

    # generate subcommand
    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate one layout and print it",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate a layout and print it as ASCII (or JSON with --json)",
    )
    gen_parser.add_argument("--seed", type=int, default=None, help="RNG seed (default: env DELVER_SEED or random)")
    gen_parser.add_argument("--width", type=int, default=None, help="Grid width (default: 50)")
    gen_parser.add_argument("--height", type=int, default=None, help="Grid height (default: 30)")
    gen_parser.add_argument("--rooms", type=int, default=None, help="Number of rooms (default: 5)")
    gen_parser.add_argument("--json", action="store_true", help="Print JSON instead of ASCII")
    gen_parser.set_defaults(command="generate")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    args = parser.parse_args(argv)
    return args


def _banner(mode: str, rows: list) -> str:
    title = f"{Fore.CYAN}{Style.BRIGHT}Delver{Style.RESET_ALL}" if _COLOR_ENABLED else "Delver"

    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text

    def value(val: str | int) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)

    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    lines = [divider, f"  {title}", divider, f"  {label('Mode:'):12} {value(mode.upper())}"]
    lines += [f"  {label(k + ':'):12} {value(v)}" for k, v in rows]
    lines += [divider, ""]
    return "\n".join(lines)


def _run_generate(args) -> int:
    from delver.dungeon import Dungeon, DungeonError, GeneratorConfig

    try:
        config = GeneratorConfig.from_env(
            seed=args.seed,
            width=args.width,
            height=args.height,
            room_count=args.rooms,
        )
        dungeon = Dungeon(config)
    except (ValueError, DungeonError) as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1
    if args.json:
        print(dungeon.to_json())
    else:
        print(dungeon.to_ascii())
        print(f"seed={dungeon.seed} rooms={len(dungeon.rooms)} attempts={dungeon.attempts}")
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()
    if mode == "generate":
        return _run_generate(args)

    env_host = os.getenv("HOST", "0.0.0.0")
    env_port = int(os.getenv("PORT", "5000"))
    host = getattr(args, "host", None) or env_host
    port = int(getattr(args, "port", None) or env_port)

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoints only after environment is ready
    from delver.logging_utils import log
    from delver.server import start_server

    print(_banner(mode, [("Host", host), ("Port", port), ("Debug", "YES" if args.debug else "NO")]))
    log.info(event="startup", mode=mode, host=host, port=port)
    start_server(host=host, port=port, debug=bool(getattr(args, "debug", False)))
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main(sys.argv[1:]))
