"""User queries and the seeding action."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from page_pipeline.context import User
from page_pipeline.demo.store import DataStore

logger = logging.getLogger(__name__)

SEED_USERS: tuple[tuple[str, str], ...] = (
    ("u_123", "John"),
    ("u_456", "Sue"),
    ("u_789", "Thandi"),
)


def _to_user(row: dict[str, object]) -> User:
    return User(
        id=str(row["id"]),
        username=str(row["username"]),
        created_at=str(row.get("created_at", "")),
    )


async def get_all_users(store: DataStore) -> list[User]:
    return [_to_user(row) for row in await store.select("users")]


async def has_users(store: DataStore) -> bool:
    return await store.count("users") > 0


async def find_user(store: DataStore, user_id: str) -> User | None:
    rows = await store.select("users", id=user_id)
    return _to_user(rows[0]) if rows else None


async def seed_users(store: DataStore, *, force: bool = False) -> int:
    """Replace the users table with the demo users.

    Skipped when users already exist unless ``force`` is set, so a populated
    store is left alone. Returns the number of users inserted.
    """
    if not force and await has_users(store):
        logger.info("users already present, skipping seed")
        return 0

    await store.delete("users")
    created_at = datetime.now(UTC).isoformat()
    inserted = await store.insert(
        "users",
        [
            {"id": user_id, "username": username, "created_at": created_at}
            for user_id, username in SEED_USERS
        ],
    )
    logger.info("Finished seeding %d users", inserted)
    return inserted
