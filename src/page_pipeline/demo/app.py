"""Application factory — wires store, sessions, gate, routes and dispatcher."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from functools import partial

from fastapi import FastAPI
from starlette.requests import Request
from starlette.responses import Response

from page_pipeline.config import Settings, get_settings
from page_pipeline.demo.login import LoginPage, SignIn, SignOut
from page_pipeline.demo.pages import NotesPage, home, me, ping
from page_pipeline.demo.sessions import SessionStore
from page_pipeline.demo.sqlite import SqliteDataStore
from page_pipeline.demo.store import DataStore, InMemoryDataStore
from page_pipeline.demo.users import find_user, seed_users
from page_pipeline.dispatcher import Dispatcher, Pipeline
from page_pipeline.gate import InitializationGate
from page_pipeline.log import configure_logging
from page_pipeline.render import make_renderer
from page_pipeline.router import Router
from page_pipeline.steps import HydrateUser, LoadSession, RequireAuth

logger = logging.getLogger(__name__)


def open_store(settings: Settings) -> DataStore:
    """SQLite store at ``settings.database_path``, else an in-memory one."""
    if settings.database_path:
        logger.info("using SQLite store at %s", settings.database_path)
        return SqliteDataStore(settings.database_path)
    return InMemoryDataStore()


def build_router(store: DataStore, sessions: SessionStore) -> Router:
    router = Router()
    router.register("/", home)
    router.register("/ping", ping)
    router.register("/me", RequireAuth(), me)
    router.register("/notes", NotesPage(store))
    router.register("/login", SignIn(store, sessions), LoginPage(store))
    router.register("/logout", SignOut(sessions), home)
    return router


def build_dispatcher(
    settings: Settings, store: DataStore, sessions: SessionStore
) -> Dispatcher:
    gate = None
    if settings.seed_on_first_request:
        gate = InitializationGate(partial(seed_users, store), name="user seeding")

    pipeline = Pipeline.build(
        LoadSession(sessions.lookup),
        HydrateUser(partial(find_user, store)),
        router=build_router(store, sessions),
        debug=settings.debug,
    )
    return Dispatcher(pipeline, gate=gate, render=make_renderer(settings.app_title))


def create_app(
    settings: Settings | None = None,
    *,
    store: DataStore | None = None,
    sessions: SessionStore | None = None,
) -> FastAPI:
    """Build the FastAPI application. Every GET/POST goes through the dispatcher.

    Without an explicit ``store`` one is opened from ``settings`` and closed
    again on shutdown.
    """
    settings = settings or get_settings()
    owned_store = store is None
    store = store if store is not None else open_store(settings)
    sessions = sessions or SessionStore(settings.session_cookie)
    dispatcher = build_dispatcher(settings, store, sessions)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configure_logging(settings.log_level)
        yield
        if dispatcher.gate is not None:
            await dispatcher.gate.wait()
        if owned_store and isinstance(store, SqliteDataStore):
            await store.close()

    app = FastAPI(
        title=settings.app_title,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.dispatcher = dispatcher
    app.state.store = store
    app.state.sessions = sessions

    async def forward(request: Request) -> Response:
        return await dispatcher.dispatch(request)

    app.add_api_route(
        "/{path:path}", forward, methods=["GET", "POST"], include_in_schema=False
    )
    return app
