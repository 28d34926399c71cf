"""``page-pipeline-seed`` — seed the demo users into the SQLite store."""

from __future__ import annotations

import argparse
import asyncio
import sys

from page_pipeline.config import Settings
from page_pipeline.demo.sqlite import SqliteDataStore
from page_pipeline.demo.users import get_all_users, seed_users
from page_pipeline.log import configure_logging


async def _seed(path: str, force: bool) -> int:
    store = SqliteDataStore(path)
    try:
        await seed_users(store, force=force)
        users = await get_all_users(store)
    finally:
        await store.close()
    for user in users:
        print(f"{user.id}\t{user.username}\t{user.created_at}")
    return len(users)


def main(argv: list[str] | None = None) -> int:
    settings = Settings()
    parser = argparse.ArgumentParser(
        prog="page-pipeline-seed",
        description="Seed the demo users into the app's SQLite database.",
    )
    parser.add_argument(
        "--database",
        default=settings.database_path,
        help="SQLite file (default: PAGE_PIPELINE_DATABASE_PATH)",
    )
    parser.add_argument(
        "--force", action="store_true", help="replace existing users"
    )
    parser.add_argument("--log-level", default=settings.log_level)
    args = parser.parse_args(argv)

    if not args.database:
        parser.error("no database: pass --database or set PAGE_PIPELINE_DATABASE_PATH")

    configure_logging(args.log_level)
    count = asyncio.run(_seed(args.database, args.force))
    return 0 if count else 1


if __name__ == "__main__":
    sys.exit(main())
