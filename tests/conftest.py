"""Shared pytest fixtures for page-pipeline tests."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock

import pytest
from starlette.requests import Request

from page_pipeline.context import RequestContext, Session, User


@pytest.fixture
def make_request() -> Any:
    """Factory for creating Starlette Request objects without a server."""

    def _make(
        method: str = "GET",
        path: str = "/",
        headers: dict[str, str] | None = None,
        cookies: dict[str, str] | None = None,
        query_string: str = "",
    ) -> Request:
        raw_headers = [
            (k.lower().encode(), v.encode()) for k, v in (headers or {}).items()
        ]
        if cookies:
            cookie = "; ".join(f"{k}={v}" for k, v in cookies.items())
            raw_headers.append((b"cookie", cookie.encode()))
        scope: dict[str, Any] = {
            "type": "http",
            "method": method,
            "path": path,
            "query_string": query_string.encode(),
            "headers": raw_headers,
            "root_path": "",
        }
        return Request(scope)

    return _make


@pytest.fixture
def make_ctx(make_request: Any) -> Any:
    """Factory for a fresh RequestContext around a request."""

    def _make(path: str = "/", **kwargs: Any) -> RequestContext:
        return RequestContext(request=make_request(path=path, **kwargs))

    return _make


@pytest.fixture
def sample_user() -> User:
    return User(id="u_123", username="John", created_at="2026-01-01T00:00:00+00:00")


@pytest.fixture
def sample_session() -> Session:
    return Session(id="sess-1", user_id="u_123")


@pytest.fixture
def mock_session_lookup(sample_session: Session) -> AsyncMock:
    """Mock async session lookup callback."""
    return AsyncMock(return_value=sample_session)


@pytest.fixture
def mock_user_lookup(sample_user: User) -> AsyncMock:
    """Mock async user lookup callback."""
    return AsyncMock(return_value=sample_user)
