"""podstakes CLI entry point."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

env_file = Path(__file__).parent.parent / ".env"
load_dotenv(env_file)

from podstakes import __version__
from podstakes.calculator import (
    SimulationError,
    calculate_brackets,
    simulate_pool,
    simulate_tournament,
)
from podstakes.config import Settings, get_settings
from podstakes.exceptions import PlayerNotFoundError
from podstakes.models import Player
from podstakes.services.topdeck import (
    TopdeckAPIError,
    TopdeckClient,
    TopdeckConfig,
    create_topdeck_client,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


def _build_client(settings: Settings) -> TopdeckClient:
    return create_topdeck_client(
        api_key=settings.topdeck_api_key,
        config=TopdeckConfig(**settings.topdeck.model_dump()),
    )


def _print_json(payload: object) -> None:
    print(json.dumps(payload, indent=2))


def parse_player_arg(value: str) -> Player:
    """Parse a NAME=POINTS argument."""
    username, sep, points = value.rpartition("=")
    if not sep or not username:
        raise argparse.ArgumentTypeError(f"Expected NAME=POINTS, got {value!r}")
    try:
        return Player(username=username, points=float(points))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid points in {value!r}")


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the API server with uvicorn."""
    import uvicorn

    settings = get_settings()
    host = args.host or settings.server.host
    port = args.port or settings.server.port

    logger.info(f"Starting podstakes API on http://{host}:{port}")
    uvicorn.run(
        "podstakes.api.server:create_app",
        factory=True,
        host=host,
        port=port,
        reload=args.reload,
        log_level=settings.server.log_level.lower(),
    )
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    """Display merged configuration."""
    settings = get_settings()

    print("\n=== podstakes Configuration ===\n")
    print(f"Data Directory: {settings.data_dir}\n")

    print("Server:")
    print(f"  Host: {settings.server.host}")
    print(f"  Port: {settings.server.port}")
    print(f"  Allowed Origins: {', '.join(settings.server.allowed_origins)}\n")

    print("Stakes:")
    print(f"  Stake Rate: {settings.stakes.stake_rate:.0%}")
    print(f"  Draw Split: {settings.stakes.draw_split}")
    print(f"  Pod Size: {settings.stakes.pod_size}\n")

    print("Topdeck API:")
    print(f"  Base URL: {settings.topdeck.base_url}")
    print(f"  Timeout: {settings.topdeck.timeout_seconds}s")
    print(f"  Max Attempts: {settings.topdeck.max_retries}\n")

    print("API Keys:")
    print(f"  Topdeck: {'✓ Set' if settings.topdeck_api_key else '✗ Not set'}")
    print(f"  Logfire: {'✓ Set' if settings.logfire_token else '✗ Not set'}\n")
    return 0


def cmd_calc(args: argparse.Namespace) -> int:
    """Price the user's pod in each bracket URL."""
    settings = get_settings()

    async def run() -> list:
        async with _build_client(settings) as client:
            return await calculate_brackets(
                client, args.urls, args.username, stakes=settings.stakes
            )

    try:
        results = asyncio.run(run())
    except TopdeckAPIError as e:
        logger.error(f"Failed to fetch bracket data: {e}")
        return 1
    except Exception:
        logger.exception(f"Bracket calculation failed for {args.username}")
        return 1

    _print_json([r.model_dump(exclude_none=True) for r in results])
    return 0


def cmd_simulate(args: argparse.Namespace) -> int:
    """Price a four-player group from the command line or a tournament."""
    settings = get_settings()

    try:
        if args.tournament:

            async def run():
                async with _build_client(settings) as client:
                    return await simulate_tournament(
                        client, args.tournament, args.players, stakes=settings.stakes
                    )

            result = asyncio.run(run())
        else:
            players = [parse_player_arg(p) for p in args.players]
            result = simulate_pool(players, stakes=settings.stakes)
    except (argparse.ArgumentTypeError, SimulationError, PlayerNotFoundError) as e:
        print(f"\n{e}\n")
        return 1
    except TopdeckAPIError as e:
        logger.error(f"Failed to fetch tournament {args.tournament}: {e}")
        return 1

    _print_json(result.model_dump(exclude_none=True))
    return 0


def main() -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="podstakes: pod wager calculator for Topdeck.gg brackets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"podstakes {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parser_serve = subparsers.add_parser("serve", help="Run the HTTP API server")
    parser_serve.add_argument("--host", default=None, help="Bind address")
    parser_serve.add_argument("--port", type=int, default=None, help="Bind port")
    parser_serve.add_argument(
        "--reload",
        action="store_true",
        help="Reload on code changes (development)",
    )
    parser_serve.set_defaults(func=cmd_serve)

    parser_config = subparsers.add_parser("config", help="Display merged configuration")
    parser_config.set_defaults(func=cmd_config)

    parser_calc = subparsers.add_parser(
        "calc",
        help="Calculate outcomes for your pod in one or more brackets",
    )
    parser_calc.add_argument("--username", required=True, help="Your Topdeck username")
    parser_calc.add_argument("urls", nargs="+", help="Bracket URLs")
    parser_calc.set_defaults(func=cmd_calc)

    parser_simulate = subparsers.add_parser(
        "simulate",
        help="Simulate outcomes for a four-player pod",
    )
    parser_simulate.add_argument(
        "--tournament",
        default=None,
        help="Tournament id; players are then looked up by username",
    )
    parser_simulate.add_argument(
        "players",
        nargs="+",
        help="NAME=POINTS entries, or usernames with --tournament",
    )
    parser_simulate.set_defaults(func=cmd_simulate)

    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
