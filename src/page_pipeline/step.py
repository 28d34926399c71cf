"""PipelineStep abstract base class and the plain-callable adapter."""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from starlette.responses import Response

from page_pipeline.context import RequestContext
from page_pipeline.outcome import CONTINUE, Continue, Outcome, Terminate


class PipelineStep(ABC):
    """Base abstraction for every unit of pipeline logic.

    A step may mutate the context and either continue or terminate the chain.
    """

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    async def run(self, ctx: RequestContext) -> Outcome: ...


class FunctionStep(PipelineStep):
    """Adapts a plain sync or async callable taking the context.

    Returning ``None`` continues, returning a ``Response`` terminates,
    returning an ``Outcome`` is passed through.
    """

    def __init__(self, func: Callable[[RequestContext], Any]) -> None:
        self._func = func

    @property
    def name(self) -> str:
        return getattr(self._func, "__name__", type(self._func).__name__)

    async def run(self, ctx: RequestContext) -> Outcome:
        result = self._func(ctx)
        if inspect.isawaitable(result):
            result = await result
        return to_outcome(result)


def to_outcome(result: Any) -> Outcome:
    if result is None:
        return CONTINUE
    if isinstance(result, (Continue, Terminate)):
        return result
    if isinstance(result, Response):
        return Terminate(result)
    msg = f"Step returned unsupported value of type {type(result).__name__}"
    raise TypeError(msg)


def as_step(item: PipelineStep | Callable[[RequestContext], Any]) -> PipelineStep:
    if isinstance(item, PipelineStep):
        return item
    if callable(item):
        return FunctionStep(item)
    msg = f"{item!r} is not a pipeline step"
    raise TypeError(msg)
