"""Sign-in and sign-out for the demo.

``GET /login?user=<id>`` starts a cookie session for an existing user and
redirects to ``/me``. ``GET /login`` without a user lists who can sign in.
``GET /logout`` revokes the current session.
"""

from __future__ import annotations

import logging
from html import escape
from urllib.parse import quote

from starlette.responses import RedirectResponse

from page_pipeline.context import RequestContext
from page_pipeline.demo.sessions import SessionStore
from page_pipeline.demo.store import DataStore
from page_pipeline.demo.users import find_user, get_all_users
from page_pipeline.exceptions import StepAbort
from page_pipeline.outcome import CONTINUE, Outcome, Terminate
from page_pipeline.step import PipelineStep

logger = logging.getLogger(__name__)


class SignIn(PipelineStep):
    """Interrupter that signs in the user named by the ``user`` query param.

    Without the param the request continues to the sign-in page. An unknown
    user id is answered with 400.
    """

    def __init__(
        self, store: DataStore, sessions: SessionStore, *, redirect_to: str = "/me"
    ) -> None:
        self._store = store
        self._sessions = sessions
        self._redirect_to = redirect_to

    async def run(self, ctx: RequestContext) -> Outcome:
        user_id = ctx.request.query_params.get("user")
        if not user_id:
            return CONTINUE

        user = await find_user(self._store, user_id)
        if user is None:
            raise StepAbort("Unknown user", status_code=400)

        if ctx.session is not None:
            self._sessions.revoke(ctx.session.id)
        session = self._sessions.create(user.id)
        logger.info("signed in %s", user.id)

        response = RedirectResponse(self._redirect_to, status_code=303)
        response.set_cookie(
            self._sessions.cookie_name, session.id, httponly=True, samesite="lax"
        )
        return Terminate(response)


class SignOut(PipelineStep):
    """Interrupter that revokes the current session and clears its cookie."""

    def __init__(self, sessions: SessionStore, *, redirect_to: str = "/") -> None:
        self._sessions = sessions
        self._redirect_to = redirect_to

    async def run(self, ctx: RequestContext) -> Outcome:
        if ctx.session is not None:
            self._sessions.revoke(ctx.session.id)
        response = RedirectResponse(self._redirect_to, status_code=303)
        response.delete_cookie(self._sessions.cookie_name)
        return Terminate(response)


class LoginPage:
    """Lists the known users as sign-in links."""

    def __init__(self, store: DataStore) -> None:
        self._store = store

    async def __call__(self, ctx: RequestContext) -> str:
        users = await get_all_users(self._store)
        if not users:
            return "<h1>Sign in</h1>\n<p>No users yet.</p>"
        items = "\n".join(
            f'<li><a href="/login?user={escape(quote(user.id))}">'
            f"{escape(user.username)}</a></li>"
            for user in users
        )
        return f"<h1>Sign in</h1>\n<ul>\n{items}\n</ul>"
