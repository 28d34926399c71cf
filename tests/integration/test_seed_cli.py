"""Tests for the page-pipeline-seed console script."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from page_pipeline.demo.seed import main
from page_pipeline.demo.sqlite import SqliteDataStore


@pytest.fixture(autouse=True)
def _quiet(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        "page_pipeline.demo.seed.configure_logging", lambda level: None
    )
    monkeypatch.delenv("PAGE_PIPELINE_DATABASE_PATH", raising=False)


def _usernames(path: Path) -> list[str]:
    async def read() -> list[str]:
        store = SqliteDataStore(str(path))
        try:
            return [row["username"] for row in await store.select("users")]
        finally:
            await store.close()

    return asyncio.run(read())


def _add_user(path: Path, user_id: str, username: str) -> None:
    async def write() -> None:
        store = SqliteDataStore(str(path))
        try:
            await store.insert("users", [{"id": user_id, "username": username}])
        finally:
            await store.close()

    asyncio.run(write())


class TestSeedCli:
    def test_seeds_database_file(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        db = tmp_path / "demo.db"
        assert main(["--database", str(db)]) == 0

        out = capsys.readouterr().out.splitlines()
        assert [line.split("\t")[:2] for line in out] == [
            ["u_123", "John"],
            ["u_456", "Sue"],
            ["u_789", "Thandi"],
        ]
        assert _usernames(db) == ["John", "Sue", "Thandi"]

    def test_database_from_env(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        db = tmp_path / "env.db"
        monkeypatch.setenv("PAGE_PIPELINE_DATABASE_PATH", str(db))
        assert main([]) == 0
        assert _usernames(db) == ["John", "Sue", "Thandi"]

    def test_populated_database_left_alone(self, tmp_path: Path) -> None:
        db = tmp_path / "demo.db"
        _add_user(db, "u_001", "Existing")
        assert main(["--database", str(db)]) == 0
        assert _usernames(db) == ["Existing"]

    def test_force_replaces_users(self, tmp_path: Path) -> None:
        db = tmp_path / "demo.db"
        _add_user(db, "u_001", "Existing")
        assert main(["--database", str(db), "--force"]) == 0
        assert _usernames(db) == ["John", "Sue", "Thandi"]

    def test_requires_database(self) -> None:
        with pytest.raises(SystemExit) as excinfo:
            main([])
        assert excinfo.value.code == 2
