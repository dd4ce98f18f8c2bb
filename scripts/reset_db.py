"""Drop and recreate all agent market tables."""

from __future__ import annotations

import argparse
import asyncio
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from agent_market.config import settings
from agent_market.database import Database
from agent_market.models import *  # noqa: F401, F403


async def _reset_db(create_only: bool) -> None:
    database = Database.from_settings(settings)
    try:
        print("Connecting to database...")
        await database.ping()
        if not create_only:
            print("Dropping all tables...")
            await database.drop_all()
        print("Creating all tables...")
        await database.create_all()
        print("Database setup complete.")
    finally:
        await database.dispose()


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reset (or create) the agent market schema.")
    parser.add_argument(
        "--create-only",
        action="store_true",
        help="Create missing tables without dropping existing data.",
    )
    return parser.parse_args()


def main() -> int:
    args = _parse_args()
    asyncio.run(_reset_db(args.create_only))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
