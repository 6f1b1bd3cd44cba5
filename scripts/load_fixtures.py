"""Load, clear, or reload fixture data against the configured database.

Usage:
    python scripts/load_fixtures.py load            # all fixtures
    python scripts/load_fixtures.py clear user
    python scripts/load_fixtures.py reload user
"""

import argparse
import asyncio
import logging
import sys

from user_service.config import get_settings
from user_service.fixtures.loader import FIXTURES, clear_fixtures, load_fixtures
from user_service.infrastructure.database import DatabaseSessionManager
from user_service.infrastructure.observability import setup_logging

logger = logging.getLogger("load_fixtures")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage fixture data.")
    parser.add_argument("command", choices=["load", "clear", "reload"])
    parser.add_argument(
        "fixtures",
        nargs="*",
        help=f"Fixture names (default: all of {', '.join(FIXTURES)})",
    )
    return parser.parse_args(argv)


async def run(command: str, names: list[str]) -> None:
    settings = get_settings()
    manager = DatabaseSessionManager(settings.database_url, ssl=settings.is_production)
    try:
        # load also clears first so it can be re-run against a seeded database
        await clear_fixtures(manager.session_factory, names)
        if command in ("load", "reload"):
            await load_fixtures(manager.session_factory, names)
    finally:
        await manager.close()


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    setup_logging(settings.log_level, "text")
    try:
        asyncio.run(run(args.command, args.fixtures))
    except Exception:
        logger.exception(f"Fixture {args.command} failed")
        return 1
    logger.info(f"Fixture {args.command} finished")
    return 0


if __name__ == "__main__":
    sys.exit(main())
