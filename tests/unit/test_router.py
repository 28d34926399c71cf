"""Tests for Route, RouteMatch and Router."""

from __future__ import annotations

import pytest

from page_pipeline.context import RequestContext
from page_pipeline.router import Router, split_path
from page_pipeline.steps import RequireAuth


async def _home(ctx: RequestContext) -> str:
    return "home"


async def _other(ctx: RequestContext) -> str:
    return "other"


class TestSplitPath:
    def test_root(self) -> None:
        assert split_path("/") == ()

    def test_trailing_slash_ignored(self) -> None:
        assert split_path("/notes/") == ("notes",)

    def test_nested(self) -> None:
        assert split_path("/notes/42") == ("notes", "42")

    def test_empty_interior_segments_kept(self) -> None:
        assert split_path("//notes") == ("", "notes")
        assert split_path("/notes//") == ("notes", "")
        assert split_path("/a//b") == ("a", "", "b")


class TestRegister:
    def test_last_step_is_handler(self) -> None:
        router = Router()
        guard = RequireAuth()
        route = router.register("/me", guard, _home)
        assert route.handler is _home
        assert route.interrupters.steps == (guard,)

    def test_handler_only_route_has_no_interrupters(self) -> None:
        route = Router().register("/ping", _home)
        assert route.interrupters.steps == ()

    def test_requires_handler(self) -> None:
        with pytest.raises(ValueError):
            Router().register("/empty")

    def test_register_after_compile_fails(self) -> None:
        router = Router()
        router.compile()
        assert router.compiled
        with pytest.raises(RuntimeError):
            router.register("/late", _home)

    def test_decorator_registers(self) -> None:
        router = Router()

        @router.route("/deco", RequireAuth())
        async def page(ctx: RequestContext) -> str:
            return "deco"

        match = router.resolve("/deco")
        assert match is not None
        assert match.route.handler is page
        assert len(match.route.interrupters) == 1

    def test_routes_preserve_registration_order(self) -> None:
        router = Router()
        router.register("/b", _home)
        router.register("/a", _home)
        assert [r.pattern for r in router.routes] == ["/b", "/a"]


class TestResolve:
    def test_exact_match(self) -> None:
        router = Router()
        router.register("/", _home)
        router.register("/ping", _other)
        match = router.resolve("/ping")
        assert match is not None
        assert match.route.handler is _other
        assert match.params == {}

    def test_root_matches_root_only(self) -> None:
        router = Router()
        router.register("/", _home)
        assert router.resolve("/") is not None
        assert router.resolve("/ping") is None

    def test_not_found_returns_none(self) -> None:
        router = Router()
        router.register("/ping", _home)
        assert router.resolve("/pong") is None
        assert router.resolve("/ping/extra") is None

    def test_trailing_slash_matches(self) -> None:
        router = Router()
        router.register("/notes", _home)
        assert router.resolve("/notes/") is not None

    def test_first_registered_wins(self) -> None:
        router = Router()
        router.register("/notes", _home)
        router.register("/notes", _other)
        match = router.resolve("/notes")
        assert match is not None
        assert match.route.handler is _home

    def test_literal_registered_before_param_wins(self) -> None:
        router = Router()
        router.register("/notes/new", _home)
        router.register("/notes/{note_id}", _other)
        match = router.resolve("/notes/new")
        assert match is not None
        assert match.route.handler is _home

    def test_param_segment_captured(self) -> None:
        router = Router()
        router.register("/notes/{note_id}", _other)
        match = router.resolve("/notes/42")
        assert match is not None
        assert match.params == {"note_id": "42"}

    def test_param_does_not_match_empty_segment(self) -> None:
        router = Router()
        router.register("/notes/{note_id}", _other)
        assert router.resolve("/notes/") is None

    def test_repeated_slashes_do_not_match(self) -> None:
        router = Router()
        router.register("/notes", _home)
        assert router.resolve("//notes") is None
        assert router.resolve("/notes//") is None

    def test_param_does_not_capture_empty_interior_segment(self) -> None:
        router = Router()
        router.register("/notes/{note_id}/edit", _other)
        assert router.resolve("/notes//edit") is None
        assert router.resolve("/notes/7/edit") is not None
