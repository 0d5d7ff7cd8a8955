"""Query the active media provider from the command line.

Usage:
    python -m moviestream status
    python -m moviestream trending --media-type movie --window day
    python -m moviestream search "The Matrix" --provider omdb
    python -m moviestream details movie 603
    python -m moviestream discover movie KR --year 2020
"""

import argparse
import asyncio
import json
import sys
from collections.abc import Awaitable, Callable
from typing import Any

from pydantic import BaseModel

from moviestream.errors import MediaProviderError
from moviestream.providers import MediaProviderAdapter, ProviderName, ProviderRegistry
from moviestream.schemas import DiscoverOptions
from moviestream.settings import print_providers_status
from moviestream.utils import setup_logger, setup_logging

Command = Callable[[MediaProviderAdapter, argparse.Namespace], Awaitable[Any]]


def _add_media_target(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("media_type", choices=["movie", "tv"])
    parser.add_argument("media_id", type=int)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Arguments, ``sys.argv`` when omitted.

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        prog="moviestream",
        description="Query movie and TV metadata providers",
    )
    parser.add_argument(
        "--provider",
        choices=[name.value for name in ProviderName],
        help="Provider to use (default: API_PROVIDER)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("status", help="Show provider configuration status")

    trending = sub.add_parser("trending", help="Trending titles")
    trending.add_argument("--media-type", choices=["all", "movie", "tv"], default="all")
    trending.add_argument("--window", choices=["day", "week"], default="week")
    trending.add_argument("--page", type=int, default=1)

    search = sub.add_parser("search", help="Search movies and TV shows")
    search.add_argument("query")
    search.add_argument("--page", type=int, default=1)

    for command in ("details", "credits", "trailer"):
        _add_media_target(sub.add_parser(command, help=f"Title {command}"))

    providers = sub.add_parser("providers", help="Streaming providers")
    _add_media_target(providers)
    providers.add_argument("--region", default="US")

    recommendations = sub.add_parser("recommendations", help="Related titles")
    _add_media_target(recommendations)
    recommendations.add_argument("--page", type=int, default=1)

    discover = sub.add_parser("discover", help="Discover titles by country")
    discover.add_argument("media_type", choices=["movie", "tv"])
    discover.add_argument("country", help="ISO 3166-1 alpha-2 code")
    discover.add_argument("--page", type=int, default=1)
    discover.add_argument("--genre", type=int)
    discover.add_argument("--year", type=int)

    return parser.parse_args(argv)


# =============================================================================
# COMMANDS
# =============================================================================


COMMANDS: dict[str, Command] = {
    "trending": lambda api, args: api.get_trending(args.media_type, args.window, args.page),
    "search": lambda api, args: api.search_multi(args.query, args.page),
    "details": lambda api, args: api.get_details(args.media_type, args.media_id),
    "credits": lambda api, args: api.get_credits(args.media_type, args.media_id),
    "providers": lambda api, args: api.get_watch_providers(
        args.media_type, args.media_id, args.region
    ),
    "trailer": lambda api, args: api.get_trailer_key(args.media_type, args.media_id),
    "recommendations": lambda api, args: api.get_recommendations(
        args.media_type, args.media_id, args.page
    ),
    "discover": lambda api, args: api.discover_by_country(
        args.media_type,
        args.country,
        DiscoverOptions(page=args.page, genre=args.genre, year=args.year),
    ),
}


def _to_jsonable(result: Any) -> Any:
    if isinstance(result, BaseModel):
        return result.model_dump(mode="json")
    if isinstance(result, list):
        return [_to_jsonable(item) for item in result]
    return result


async def run_command(args: argparse.Namespace) -> Any:
    """Execute a query command against the selected provider.

    Args:
        args: Parsed command line arguments.

    Returns:
        JSON-compatible command result.
    """
    async with ProviderRegistry() as registry:
        api = registry.get(args.provider)
        result = await COMMANDS[args.command](api, args)
    return _to_jsonable(result)


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    args = parse_args(argv)

    if args.command == "status":
        print_providers_status()
        return 0

    setup_logger()
    setup_logging()

    try:
        result = asyncio.run(run_command(args))
    except MediaProviderError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
