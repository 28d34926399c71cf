"""Shared type aliases and protocols."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from starlette.requests import Request
from starlette.responses import Response

if TYPE_CHECKING:
    from page_pipeline.context import RequestContext, Session, User

# Collaborator callbacks consumed by the built-in steps
SessionLookup = Callable[[Request], Awaitable["Session | None"]]
UserLookup = Callable[[str], Awaitable["User | None"]]

# Terminal handler: produces page content, never a Continue
Handler = Callable[["RequestContext"], Awaitable[str]]

# Wraps handler content in the document shell
RenderCallback = Callable[["RequestContext", str], Response]

# Seeding action launched by the initialization gate
InitAction = Callable[[], Awaitable[Any]]
