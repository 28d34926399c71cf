"""Page Pipeline - middleware, routing and interrupters for page-serving apps."""

from page_pipeline.chain import Chain, ResolvedChain, run_chain
from page_pipeline.context import RequestContext, Session, User
from page_pipeline.dispatcher import Dispatcher, Pipeline
from page_pipeline.exceptions import (
    PipelineException,
    PipelineInternalError,
    RouteNotFound,
    StepAbort,
    Unauthorized,
)
from page_pipeline.gate import InitializationGate
from page_pipeline.hooks import AfterChain, AfterStep, BeforeChain, ChainHook
from page_pipeline.outcome import CONTINUE, Continue, Outcome, Terminate
from page_pipeline.render import make_renderer, render_document
from page_pipeline.router import Route, RouteMatch, Router
from page_pipeline.step import FunctionStep, PipelineStep, as_step
from page_pipeline.steps import HydrateUser, LoadSession, RequireAuth
from page_pipeline.trace import PipelineTrace, TraceEntry

__all__ = [
    "CONTINUE",
    "AfterChain",
    "AfterStep",
    "BeforeChain",
    "Chain",
    "ChainHook",
    "Continue",
    "Dispatcher",
    "FunctionStep",
    "HydrateUser",
    "InitializationGate",
    "LoadSession",
    "Outcome",
    "Pipeline",
    "PipelineException",
    "PipelineInternalError",
    "PipelineStep",
    "PipelineTrace",
    "RequestContext",
    "RequireAuth",
    "ResolvedChain",
    "Route",
    "RouteMatch",
    "RouteNotFound",
    "Router",
    "Session",
    "StepAbort",
    "Terminate",
    "TraceEntry",
    "Unauthorized",
    "User",
    "as_step",
    "make_renderer",
    "render_document",
    "run_chain",
]
