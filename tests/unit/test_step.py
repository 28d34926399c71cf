"""Tests for PipelineStep, FunctionStep and the outcome adapter."""

from __future__ import annotations

from typing import Any

import pytest
from starlette.responses import PlainTextResponse

from page_pipeline.context import RequestContext
from page_pipeline.outcome import CONTINUE, Continue, Terminate
from page_pipeline.step import FunctionStep, PipelineStep, as_step, to_outcome


class _Marker(PipelineStep):
    async def run(self, ctx: RequestContext) -> Continue:
        ctx.state["marked"] = True
        return CONTINUE


class TestPipelineStep:
    def test_is_abstract(self) -> None:
        with pytest.raises(TypeError):
            PipelineStep()  # type: ignore[abstract]

    def test_name_is_class_name(self) -> None:
        assert _Marker().name == "_Marker"

    async def test_run_mutates_ctx(self, make_ctx: Any) -> None:
        ctx = make_ctx()
        outcome = await _Marker().run(ctx)
        assert outcome == CONTINUE
        assert ctx.state["marked"] is True


class TestToOutcome:
    def test_none_continues(self) -> None:
        assert isinstance(to_outcome(None), Continue)

    def test_response_terminates(self) -> None:
        response = PlainTextResponse("no", status_code=401)
        outcome = to_outcome(response)
        assert isinstance(outcome, Terminate)
        assert outcome.response is response

    def test_outcome_passes_through(self) -> None:
        outcome = Terminate(PlainTextResponse("x"))
        assert to_outcome(outcome) is outcome

    def test_unsupported_value_raises(self) -> None:
        with pytest.raises(TypeError):
            to_outcome("page content")


class TestFunctionStep:
    async def test_sync_function(self, make_ctx: Any) -> None:
        def mark(ctx: RequestContext) -> None:
            ctx.state["sync"] = True

        ctx = make_ctx()
        outcome = await FunctionStep(mark).run(ctx)
        assert isinstance(outcome, Continue)
        assert ctx.state["sync"] is True

    async def test_async_function_returning_response(self, make_ctx: Any) -> None:
        async def deny(ctx: RequestContext) -> PlainTextResponse:
            return PlainTextResponse("Unauthorized", status_code=401)

        outcome = await FunctionStep(deny).run(make_ctx())
        assert isinstance(outcome, Terminate)
        assert outcome.response.status_code == 401

    def test_name_is_function_name(self) -> None:
        def session_middleware(ctx: RequestContext) -> None:
            return None

        assert FunctionStep(session_middleware).name == "session_middleware"


class TestAsStep:
    def test_step_returned_unchanged(self) -> None:
        step = _Marker()
        assert as_step(step) is step

    def test_callable_wrapped(self) -> None:
        assert isinstance(as_step(lambda ctx: None), FunctionStep)

    def test_non_callable_rejected(self) -> None:
        with pytest.raises(TypeError):
            as_step(42)  # type: ignore[arg-type]
