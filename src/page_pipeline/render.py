"""Document shell — wraps handler page content in a full HTML document."""

from __future__ import annotations

from html import escape

from starlette.responses import HTMLResponse

from page_pipeline._types import RenderCallback
from page_pipeline.context import RequestContext

NAV_LINKS: tuple[tuple[str, str], ...] = (
    ("/", "Home"),
    ("/ping", "Ping"),
    ("/me", "Me"),
    ("/notes", "Notes"),
    ("/login", "Sign in"),
)

_SHELL = """<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>{title}</title>
  </head>
  <body>
    <header>{nav}{account}</header>
    <div id="root">{content}</div>
  </body>
</html>
"""


def make_renderer(title: str = "page-pipeline") -> RenderCallback:
    """Return a render callback bound to a document ``title``."""

    def render(ctx: RequestContext, content: str) -> HTMLResponse:
        return render_document(ctx, content, title=title)

    return render


def render_document(
    ctx: RequestContext, content: str, *, title: str = "page-pipeline"
) -> HTMLResponse:
    """Render ``content`` inside the document shell.

    ``content`` is trusted page markup produced by a terminal handler; any
    user-supplied text must already be escaped by the handler.
    """
    nav = " · ".join(f'<a href="{href}">{label}</a>' for href, label in NAV_LINKS)
    account = ""
    if ctx.user is not None:
        account = f' <span class="account">{escape(ctx.user.username)}</span>'
    return HTMLResponse(
        _SHELL.format(title=escape(title), nav=nav, account=account, content=content)
    )
