"""ChainHook base and convenience hook classes."""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from page_pipeline.context import RequestContext
from page_pipeline.outcome import Outcome
from page_pipeline.step import PipelineStep


class ChainHook:
    """Base abstraction for lifecycle hooks. All methods are no-op by default."""

    async def on_chain_start(self, ctx: RequestContext) -> None:
        pass

    async def on_chain_end(self, ctx: RequestContext) -> None:
        pass

    async def on_step(
        self,
        ctx: RequestContext,
        step: PipelineStep,
        outcome: Outcome | None,
        error: Exception | None,
    ) -> None:
        pass


class BeforeChain(ChainHook):
    """Convenience hook that only fires on chain start."""

    def __init__(self, callback: Callable[[RequestContext], Awaitable[None]]) -> None:
        self._callback = callback

    async def on_chain_start(self, ctx: RequestContext) -> None:
        await self._callback(ctx)


class AfterChain(ChainHook):
    """Convenience hook that fires when the chain exits, on every path."""

    def __init__(self, callback: Callable[[RequestContext], Awaitable[None]]) -> None:
        self._callback = callback

    async def on_chain_end(self, ctx: RequestContext) -> None:
        await self._callback(ctx)


class AfterStep(ChainHook):
    """Convenience hook that fires after each step."""

    def __init__(
        self,
        callback: Callable[
            [RequestContext, PipelineStep, Outcome | None, Exception | None],
            Awaitable[None],
        ],
    ) -> None:
        self._callback = callback

    async def on_step(
        self,
        ctx: RequestContext,
        step: PipelineStep,
        outcome: Outcome | None,
        error: Exception | None,
    ) -> None:
        await self._callback(ctx, step, outcome, error)
