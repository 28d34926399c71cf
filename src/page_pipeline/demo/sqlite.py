"""SQLite-backed DataStore for a demo whose data outlives the process.

Uses stdlib ``sqlite3``; every blocking call runs in an anyio worker thread.
One connection is shared and serialised with a lock, so each operation
(including a multi-row insert) is atomic.
"""

from __future__ import annotations

import sqlite3
import threading
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from anyio import to_thread

from page_pipeline.demo.store import DataStoreError

COLUMNS: dict[str, tuple[str, ...]] = {
    "users": ("id", "username", "created_at"),
    "notes": ("id", "user_id", "title", "content"),
}

_DDL = """
CREATE TABLE IF NOT EXISTS users (
    id TEXT PRIMARY KEY NOT NULL,
    username TEXT NOT NULL DEFAULT '',
    created_at TEXT NOT NULL DEFAULT ''
);
CREATE TABLE IF NOT EXISTS notes (
    id TEXT PRIMARY KEY NOT NULL,
    user_id TEXT NOT NULL DEFAULT '',
    title TEXT NOT NULL DEFAULT '',
    content TEXT NOT NULL DEFAULT ''
);
CREATE INDEX IF NOT EXISTS notes_user_id ON notes (user_id);
"""


def _check_columns(table: str, columns: Iterable[str]) -> None:
    known = COLUMNS.get(table)
    if known is None:
        raise DataStoreError(f"Unknown table {table!r}")
    for column in columns:
        if column not in known:
            raise DataStoreError(f"Unknown column {table}.{column}")


def _where_clause(where: Mapping[str, Any]) -> tuple[str, tuple[Any, ...]]:
    if not where:
        return "", ()
    clause = " AND ".join(f"{column} = ?" for column in where)
    return f" WHERE {clause}", tuple(where.values())


class SqliteDataStore:
    """Table store over a single SQLite file (or ``":memory:"``).

    Usage::

        store = SqliteDataStore("demo.db")
        await seed_users(store)
        await store.close()
    """

    def __init__(self, path: str) -> None:
        self.path = path
        self._lock = threading.Lock()
        self._conn = sqlite3.connect(
            path, isolation_level=None, check_same_thread=False
        )
        self._conn.row_factory = sqlite3.Row
        self._conn.executescript(_DDL)

    async def insert(self, table: str, rows: Iterable[Mapping[str, Any]]) -> int:
        new_rows = [dict(row) for row in rows]
        for row in new_rows:
            _check_columns(table, row)
            if row.get("id") is None:
                raise DataStoreError(f"{table}.id is required")
        return await to_thread.run_sync(self._insert, table, new_rows)

    async def select(self, table: str, **where: Any) -> list[dict[str, Any]]:
        _check_columns(table, where)
        clause, params = _where_clause(where)
        sql = f"SELECT * FROM {table}{clause} ORDER BY rowid"
        return await to_thread.run_sync(self._fetch_all, sql, params)

    async def delete(self, table: str, **where: Any) -> int:
        _check_columns(table, where)
        clause, params = _where_clause(where)
        return await to_thread.run_sync(
            self._execute, f"DELETE FROM {table}{clause}", params
        )

    async def count(self, table: str, **where: Any) -> int:
        _check_columns(table, where)
        clause, params = _where_clause(where)
        rows = await to_thread.run_sync(
            self._fetch_all, f"SELECT COUNT(*) AS n FROM {table}{clause}", params
        )
        return int(rows[0]["n"])

    async def close(self) -> None:
        await to_thread.run_sync(self._close)

    def _insert(self, table: str, rows: Sequence[dict[str, Any]]) -> int:
        with self._lock:
            self._conn.execute("BEGIN")
            try:
                for row in rows:
                    columns = ", ".join(row)
                    marks = ", ".join("?" for _ in row)
                    self._conn.execute(
                        f"INSERT INTO {table} ({columns}) VALUES ({marks})",
                        tuple(row.values()),
                    )
            except sqlite3.IntegrityError as exc:
                self._conn.execute("ROLLBACK")
                raise DataStoreError(f"Cannot insert into {table}: {exc}") from exc
            except BaseException:
                self._conn.execute("ROLLBACK")
                raise
            self._conn.execute("COMMIT")
        return len(rows)

    def _fetch_all(self, sql: str, params: tuple[Any, ...]) -> list[dict[str, Any]]:
        with self._lock:
            return [dict(row) for row in self._conn.execute(sql, params).fetchall()]

    def _execute(self, sql: str, params: tuple[Any, ...]) -> int:
        with self._lock:
            return self._conn.execute(sql, params).rowcount

    def _close(self) -> None:
        with self._lock:
            self._conn.close()
