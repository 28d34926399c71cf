"""
Custom step examples.

Demonstrates:
- Writing steps as PipelineStep subclasses and as plain functions
- Short-circuiting with Terminate or by raising StepAbort
- Lifecycle hooks and the debug trace
- One-shot initialization with InitializationGate
"""

import logging
import time

from starlette.responses import PlainTextResponse

from page_pipeline import (
    CONTINUE,
    AfterStep,
    Chain,
    Dispatcher,
    InitializationGate,
    Outcome,
    Pipeline,
    PipelineStep,
    RequestContext,
    Router,
    StepAbort,
    Terminate,
)

logger = logging.getLogger("example")


# ========== Request ID step (class form) ==========


class RequestID(PipelineStep):
    """Stores the client's X-Request-ID, or generates one."""

    async def run(self, ctx: RequestContext) -> Outcome:
        request_id = ctx.request.headers.get("X-Request-ID")
        if not request_id:
            request_id = f"req_{int(time.time() * 1000)}"
        ctx.state["request_id"] = request_id
        return CONTINUE


# ========== Maintenance switch (function form) ==========

MAINTENANCE = False


def maintenance_mode(ctx: RequestContext) -> PlainTextResponse | None:
    if MAINTENANCE:
        return PlainTextResponse("Down for maintenance", status_code=503)
    return None


# ========== Interrupters ==========


async def require_admin_header(ctx: RequestContext) -> None:
    if ctx.request.headers.get("X-Admin") != "yes":
        raise StepAbort("Admins only", status_code=403)


class BlockBots(PipelineStep):
    async def run(self, ctx: RequestContext) -> Outcome:
        agent = ctx.request.headers.get("user-agent", "")
        if "bot" in agent.lower():
            return Terminate(PlainTextResponse("Go away", status_code=403))
        return CONTINUE


# ========== Hooks ==========


async def log_step(ctx, step, outcome, error) -> None:
    logger.info("%s %s -> %s", ctx.state.get("request_id"), step.name, outcome)


middleware = Chain(RequestID(), maintenance_mode).add_hook(AfterStep(log_step))


# ========== Routes ==========

router = Router()
router.register("/", lambda ctx: f"<p>request {ctx.state['request_id']}</p>")
router.register("/admin", BlockBots(), require_admin_header, lambda ctx: "<p>admin</p>")
router.register("/notes/{note_id}", lambda ctx: f"<p>note {ctx.path_params['note_id']}</p>")


async def warm_cache() -> None:
    logger.info("warming caches once")


app = Dispatcher(
    Pipeline(middleware=middleware.resolve(), router=router, debug=True),
    gate=InitializationGate(warm_cache, name="cache warmup"),
)


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host="127.0.0.1", port=8000)

    # Test with:
    # curl -i http://localhost:8000/                 -> X-Pipeline-Trace header
    # curl -i -H "X-Admin: yes" http://localhost:8000/admin
    # curl -i http://localhost:8000/notes/42
