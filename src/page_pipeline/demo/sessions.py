"""In-memory cookie sessions."""

from __future__ import annotations

import secrets

from starlette.requests import Request

from page_pipeline.context import Session


class SessionStore:
    """Maps opaque session ids, carried in a cookie, to user ids."""

    def __init__(self, cookie_name: str = "session") -> None:
        self.cookie_name = cookie_name
        self._sessions: dict[str, str] = {}

    def create(self, user_id: str) -> Session:
        session = Session(id=secrets.token_urlsafe(16), user_id=user_id)
        self._sessions[session.id] = user_id
        return session

    def revoke(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    async def lookup(self, request: Request) -> Session | None:
        session_id = request.cookies.get(self.cookie_name)
        if not session_id:
            return None
        user_id = self._sessions.get(session_id)
        if user_id is None:
            return None
        return Session(id=session_id, user_id=user_id)
