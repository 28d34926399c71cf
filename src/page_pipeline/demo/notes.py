"""Note queries scoped to their owning user."""

from __future__ import annotations

from dataclasses import dataclass
from uuid import uuid4

from page_pipeline.demo.store import DataStore


@dataclass(frozen=True)
class Note:
    id: str
    user_id: str
    title: str
    content: str = ""


async def list_notes(store: DataStore, user_id: str) -> list[Note]:
    rows = await store.select("notes", user_id=user_id)
    return [
        Note(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            title=str(row["title"]),
            content=str(row.get("content") or ""),
        )
        for row in rows
    ]


async def add_note(
    store: DataStore, user_id: str, title: str, content: str = ""
) -> Note | None:
    """Insert a note for ``user_id``. Blank titles are ignored."""
    title = title.strip()
    if not title:
        return None
    note = Note(id=uuid4().hex, user_id=user_id, title=title, content=content.strip())
    await store.insert(
        "notes",
        [
            {
                "id": note.id,
                "user_id": note.user_id,
                "title": note.title,
                "content": note.content,
            }
        ],
    )
    return note
