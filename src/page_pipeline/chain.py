"""Chain class — ordered container and execution engine for pipeline steps."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union

from starlette.responses import PlainTextResponse

from page_pipeline.context import RequestContext
from page_pipeline.exceptions import StepAbort
from page_pipeline.outcome import CONTINUE, Outcome, Terminate
from page_pipeline.step import PipelineStep, as_step
from page_pipeline.trace import PipelineTrace, Stage

if TYPE_CHECKING:
    from page_pipeline.hooks import ChainHook

logger = logging.getLogger(__name__)

ChainItem = Union[PipelineStep, "Chain", Callable[[RequestContext], Any]]


@dataclass(frozen=True)
class ResolvedChain:
    """Immutable, pre-computed execution plan."""

    steps: tuple[PipelineStep, ...]
    hooks: tuple[ChainHook, ...] = ()

    def __len__(self) -> int:
        return len(self.steps)


class Chain:
    """Ordered container of steps. Registration order is execution order."""

    def __init__(self, *steps: ChainItem) -> None:
        self._items: list[ChainItem] = list(steps)
        self._hooks: list[ChainHook] = []
        self._resolved: ResolvedChain | None = None

    def add(self, *steps: ChainItem) -> Chain:
        self._items.extend(steps)
        self._resolved = None
        return self

    def add_hook(self, hook: ChainHook) -> Chain:
        self._hooks.append(hook)
        self._resolved = None
        return self

    def resolve(self) -> ResolvedChain:
        if self._resolved is not None:
            return self._resolved

        flat: list[PipelineStep] = []
        self._flatten(self._items, flat)

        self._resolved = ResolvedChain(steps=tuple(flat), hooks=tuple(self._hooks))
        return self._resolved

    @staticmethod
    def _flatten(items: list[ChainItem], out: list[PipelineStep]) -> None:
        for item in items:
            if isinstance(item, Chain):
                Chain._flatten(item._items, out)
            else:
                out.append(as_step(item))


async def run_chain(
    resolved: ResolvedChain,
    ctx: RequestContext,
    *,
    stage: Stage = "middleware",
    trace: PipelineTrace | None = None,
) -> Outcome:
    """Run every step in order until one terminates.

    ``StepAbort`` raised by a step becomes a ``Terminate`` carrying a plain-text
    response with the abort's status. Any other exception propagates and the
    remaining steps are skipped.
    """
    for hook in resolved.hooks:
        await hook.on_chain_start(ctx)

    try:
        for step in resolved.steps:
            started = time.perf_counter()
            try:
                outcome = await step.run(ctx)
            except StepAbort as exc:
                if trace is not None:
                    trace.record(
                        step.name, stage, _elapsed(started), "TERMINATED", exc.detail
                    )
                logger.debug("%s %s aborted: %s", stage, step.name, exc.detail)
                outcome = Terminate(
                    PlainTextResponse(exc.detail, status_code=exc.status_code)
                )
                for hook in resolved.hooks:
                    await hook.on_step(ctx, step, outcome, exc)
                return outcome
            except Exception as exc:
                if trace is not None:
                    trace.record(
                        step.name, stage, _elapsed(started), "FAILED", str(exc)
                    )
                for hook in resolved.hooks:
                    await hook.on_step(ctx, step, None, exc)
                raise

            if isinstance(outcome, Terminate):
                if trace is not None:
                    trace.record(step.name, stage, _elapsed(started), "TERMINATED")
                logger.debug(
                    "%s %s terminated with %d",
                    stage,
                    step.name,
                    outcome.response.status_code,
                )
                for hook in resolved.hooks:
                    await hook.on_step(ctx, step, outcome, None)
                return outcome

            if trace is not None:
                trace.record(step.name, stage, _elapsed(started), "CONTINUE")
            for hook in resolved.hooks:
                await hook.on_step(ctx, step, outcome, None)
    finally:
        for hook in resolved.hooks:
            await hook.on_chain_end(ctx)

    return CONTINUE


def _elapsed(started: float) -> float:
    return (time.perf_counter() - started) * 1000
