"""RequestContext — per-request state container."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from starlette.requests import Request

_SLOTS = frozenset({"session", "user"})


@dataclass(frozen=True)
class Session:
    """Opaque session descriptor resolved from a request."""

    id: str
    user_id: str


@dataclass(frozen=True)
class User:
    """Hydrated identity of the requesting user."""

    id: str
    username: str
    created_at: str = ""


@dataclass
class RequestContext:
    """Per-request state threaded through every step of one request.

    ``session`` and ``user`` are typed optional slots; anything else goes
    into ``state``. A context is never reused across requests.
    """

    request: Request
    session: Session | None = None
    user: User | None = None
    path_params: dict[str, str] = field(default_factory=dict)
    state: dict[str, Any] = field(default_factory=dict)

    def get(self, slot: str, default: Any = None) -> Any:
        if slot in _SLOTS:
            value = getattr(self, slot)
            return default if value is None else value
        return self.state.get(slot, default)

    def set(self, slot: str, value: Any) -> None:
        if slot in _SLOTS:
            setattr(self, slot, value)
        else:
            self.state[slot] = value
