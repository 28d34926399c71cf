"""Dispatcher — drives one request through the whole pipeline."""

from __future__ import annotations

import inspect
import logging
import time
from dataclasses import dataclass

from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.types import Receive, Scope, Send

from page_pipeline._types import RenderCallback
from page_pipeline.chain import Chain, ChainItem, ResolvedChain, run_chain
from page_pipeline.context import RequestContext
from page_pipeline.exceptions import PipelineInternalError, RouteNotFound, StepAbort
from page_pipeline.gate import InitializationGate
from page_pipeline.outcome import Terminate
from page_pipeline.render import render_document
from page_pipeline.router import RouteMatch, Router
from page_pipeline.trace import PipelineTrace

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Pipeline:
    """Global middleware plus route table. Read-only once constructed."""

    middleware: ResolvedChain
    router: Router
    debug: bool = False

    def __post_init__(self) -> None:
        self.router.compile()

    @classmethod
    def build(
        cls, *middleware: ChainItem, router: Router, debug: bool = False
    ) -> Pipeline:
        return cls(middleware=Chain(*middleware).resolve(), router=router, debug=debug)


class Dispatcher:
    """Runs middleware, the initialization gate, routing, interrupters and the
    terminal handler for each request, then renders the handler's content.

    Every unexpected exception is caught here and answered with a generic 500.
    The dispatcher is itself an ASGI application.
    """

    def __init__(
        self,
        pipeline: Pipeline,
        *,
        gate: InitializationGate | None = None,
        render: RenderCallback = render_document,
    ) -> None:
        self._pipeline = pipeline
        self._gate = gate
        self._render = render

    @property
    def pipeline(self) -> Pipeline:
        return self._pipeline

    @property
    def gate(self) -> InitializationGate | None:
        return self._gate

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            msg = f"Unsupported ASGI scope type {scope['type']!r}"
            raise RuntimeError(msg)
        response = await self.dispatch(Request(scope, receive))
        await response(scope, receive, send)

    async def dispatch(self, request: Request) -> Response:
        ctx = RequestContext(request=request)
        trace = PipelineTrace() if self._pipeline.debug else None
        started = time.perf_counter()

        try:
            response = await self._handle(ctx, trace)
        except Exception as exc:
            wrapped = PipelineInternalError("Internal Server Error", cause=exc)
            logger.exception("500 %s %s", request.method, request.url.path)
            if trace is not None:
                trace.outcome = "ERROR"
                trace.error = wrapped
            response = PlainTextResponse(wrapped.detail, status_code=500)

        if trace is not None:
            trace.total_duration_ms = (time.perf_counter() - started) * 1000
            ctx.state["trace"] = trace
            response.headers["X-Pipeline-Trace"] = trace.header_value()

        return response

    async def _handle(
        self, ctx: RequestContext, trace: PipelineTrace | None
    ) -> Response:
        outcome = await run_chain(
            self._pipeline.middleware, ctx, stage="middleware", trace=trace
        )
        if isinstance(outcome, Terminate):
            if trace is not None:
                trace.outcome = "TERMINATED"
            return outcome.response

        if self._gate is not None:
            gate_started = time.perf_counter()
            launched = self._gate.ensure_initialized()
            if trace is not None:
                trace.record(
                    "InitializationGate",
                    "init",
                    (time.perf_counter() - gate_started) * 1000,
                    "CONTINUE",
                    "launched" if launched else None,
                )

        path = ctx.request.url.path
        match = self._pipeline.router.resolve(path)
        if match is None:
            not_found = RouteNotFound(path)
            logger.debug("404 %s %s", ctx.request.method, path)
            if trace is not None:
                trace.outcome = "NOT_FOUND"
            return PlainTextResponse(
                not_found.detail, status_code=not_found.status_code
            )

        ctx.path_params = dict(match.params)
        outcome = await run_chain(
            match.route.interrupters, ctx, stage="interrupter", trace=trace
        )
        if isinstance(outcome, Terminate):
            if trace is not None:
                trace.outcome = "TERMINATED"
            return outcome.response

        try:
            content = await self._run_handler(match, ctx, trace)
        except StepAbort as exc:
            if trace is not None:
                trace.outcome = "TERMINATED"
            return PlainTextResponse(exc.detail, status_code=exc.status_code)
        return self._render(ctx, content)

    @staticmethod
    async def _run_handler(
        match: RouteMatch, ctx: RequestContext, trace: PipelineTrace | None
    ) -> str:
        handler = match.route.handler
        name = getattr(handler, "__name__", type(handler).__name__)
        started = time.perf_counter()
        try:
            content = handler(ctx)
            if inspect.isawaitable(content):
                content = await content
            if not isinstance(content, str):
                kind = type(content).__name__
                msg = f"Handler {name} returned {kind}, expected str"
                raise TypeError(msg)
        except StepAbort as exc:
            if trace is not None:
                elapsed = (time.perf_counter() - started) * 1000
                trace.record(name, "handler", elapsed, "TERMINATED", exc.detail)
            raise
        except Exception as exc:
            if trace is not None:
                elapsed = (time.perf_counter() - started) * 1000
                trace.record(name, "handler", elapsed, "FAILED", str(exc))
            raise
        if trace is not None:
            elapsed = (time.perf_counter() - started) * 1000
            trace.record(name, "handler", elapsed, "CONTINUE")
        return content
