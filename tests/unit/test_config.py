"""Tests for Settings."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from page_pipeline.config import Settings, get_settings


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("PAGE_PIPELINE_DEBUG", raising=False)
        monkeypatch.delenv("PAGE_PIPELINE_DATABASE_PATH", raising=False)
        settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.session_cookie == "session"
        assert settings.seed_on_first_request is True
        assert settings.debug is False
        assert settings.database_path is None
        assert settings.log_level == "INFO"

    def test_reads_prefixed_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PAGE_PIPELINE_DEBUG", "true")
        monkeypatch.setenv("PAGE_PIPELINE_SESSION_COOKIE", "sid")
        settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.debug is True
        assert settings.session_cookie == "sid"

    def test_database_path_from_env(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        path = str(tmp_path / "demo.db")
        monkeypatch.setenv("PAGE_PIPELINE_DATABASE_PATH", path)
        settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.database_path == path

    def test_log_level_normalised(self) -> None:
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(log_level="loud")

    def test_get_settings_is_cached(self) -> None:
        get_settings.cache_clear()
        assert get_settings() is get_settings()
