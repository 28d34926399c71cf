"""Built-in steps — session loading, user hydration, auth interrupter."""

from __future__ import annotations

import logging

from starlette.responses import PlainTextResponse

from page_pipeline._types import SessionLookup, UserLookup
from page_pipeline.context import RequestContext
from page_pipeline.outcome import CONTINUE, Outcome, Terminate
from page_pipeline.step import PipelineStep

logger = logging.getLogger(__name__)


class LoadSession(PipelineStep):
    """Populates ``ctx.session`` from the session collaborator.

    A missing session is not an error; the slot simply stays empty.
    """

    def __init__(self, lookup: SessionLookup) -> None:
        self._lookup = lookup

    async def run(self, ctx: RequestContext) -> Outcome:
        ctx.session = await self._lookup(ctx.request)
        return CONTINUE


class HydrateUser(PipelineStep):
    """Populates ``ctx.user`` from ``ctx.session.user_id``."""

    def __init__(self, lookup: UserLookup) -> None:
        self._lookup = lookup

    async def run(self, ctx: RequestContext) -> Outcome:
        if ctx.session is None:
            return CONTINUE
        ctx.user = await self._lookup(ctx.session.user_id)
        if ctx.user is None:
            logger.debug("session %s has no matching user", ctx.session.id)
        return CONTINUE


class RequireAuth(PipelineStep):
    """Interrupter that answers 401 unless a user has been hydrated."""

    def __init__(self, detail: str = "Unauthorized") -> None:
        self._detail = detail

    async def run(self, ctx: RequestContext) -> Outcome:
        if ctx.user is None:
            return Terminate(PlainTextResponse(self._detail, status_code=401))
        return CONTINUE
