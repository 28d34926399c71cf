"""DataStore protocol and the default in-memory table store."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Protocol, runtime_checkable

# Primary key column per table
SCHEMA: dict[str, str] = {
    "users": "id",
    "notes": "id",
}


class DataStoreError(Exception):
    """Invalid table or constraint violation."""


@runtime_checkable
class DataStore(Protocol):
    """Table-qualified insert/select/delete with equality predicates."""

    async def insert(self, table: str, rows: Iterable[Mapping[str, Any]]) -> int: ...
    async def select(self, table: str, **where: Any) -> list[dict[str, Any]]: ...
    async def delete(self, table: str, **where: Any) -> int: ...
    async def count(self, table: str, **where: Any) -> int: ...


def _matches(row: Mapping[str, Any], where: Mapping[str, Any]) -> bool:
    return all(row.get(column) == value for column, value in where.items())


class InMemoryDataStore:
    """Default in-memory data store. Single-process only.

    Rows are kept in insertion order; selects return copies.
    """

    def __init__(self, schema: Mapping[str, str] | None = None) -> None:
        self._keys = dict(schema or SCHEMA)
        self._tables: dict[str, list[dict[str, Any]]] = {t: [] for t in self._keys}

    def _table(self, table: str) -> list[dict[str, Any]]:
        try:
            return self._tables[table]
        except KeyError:
            raise DataStoreError(f"Unknown table {table!r}") from None

    async def insert(self, table: str, rows: Iterable[Mapping[str, Any]]) -> int:
        existing = self._table(table)
        key = self._keys[table]
        taken = {row[key] for row in existing}
        new_rows = [dict(row) for row in rows]
        for row in new_rows:
            if key not in row:
                raise DataStoreError(f"{table}.{key} is required")
            if row[key] in taken:
                raise DataStoreError(f"Duplicate {table}.{key} {row[key]!r}")
            taken.add(row[key])
        existing.extend(new_rows)
        return len(new_rows)

    async def select(self, table: str, **where: Any) -> list[dict[str, Any]]:
        return [dict(row) for row in self._table(table) if _matches(row, where)]

    async def delete(self, table: str, **where: Any) -> int:
        rows = self._table(table)
        kept = [row for row in rows if not _matches(row, where)]
        removed = len(rows) - len(kept)
        rows[:] = kept
        return removed

    async def count(self, table: str, **where: Any) -> int:
        return sum(1 for row in self._table(table) if _matches(row, where))
