"""
Basic usage example of page-pipeline.

Demonstrates:
- Global middleware that loads a session and hydrates the user
- Public routes and a route guarded by the RequireAuth interrupter
- Serving the dispatcher directly as an ASGI app
"""

from starlette.requests import Request

from page_pipeline import (
    Dispatcher,
    HydrateUser,
    LoadSession,
    Pipeline,
    RequestContext,
    RequireAuth,
    Router,
    Session,
    User,
)

USERS = {"u_123": User(id="u_123", username="John")}


# Mock session lookup (replace with a real session backend)
async def lookup_session(request: Request) -> Session | None:
    token = request.cookies.get("session")
    if token == "valid-session":
        return Session(id=token, user_id="u_123")
    return None


async def lookup_user(user_id: str) -> User | None:
    return USERS.get(user_id)


router = Router()


@router.route("/")
async def home(ctx: RequestContext) -> str:
    return "<p>Home (public)</p>"


@router.route("/ping")
async def ping(ctx: RequestContext) -> str:
    return "<p>Pong (public)</p>"


@router.route("/me", RequireAuth())
async def me(ctx: RequestContext) -> str:
    return f"<p>Hello {ctx.user.username} user page</p>"


app = Dispatcher(
    Pipeline.build(
        LoadSession(lookup_session),
        HydrateUser(lookup_user),
        router=router,
    )
)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=8000)

    # Test with:
    # curl http://localhost:8000/ping
    # curl http://localhost:8000/me                                   -> 401
    # curl --cookie "session=valid-session" http://localhost:8000/me
