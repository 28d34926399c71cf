"""Terminal handlers for the demo routes."""

from __future__ import annotations

from html import escape

from page_pipeline.context import RequestContext
from page_pipeline.demo.notes import Note, add_note, list_notes
from page_pipeline.demo.store import DataStore
from page_pipeline.exceptions import Unauthorized


async def home(ctx: RequestContext) -> str:
    return "<p>Home (public)</p>"


async def ping(ctx: RequestContext) -> str:
    return "<p>Pong (public)</p>"


async def me(ctx: RequestContext) -> str:
    if ctx.user is None:
        raise Unauthorized()
    return f"<p>Hello {escape(ctx.user.username)} user page</p>"


def _note_item(note: Note) -> str:
    body = f"<strong>{escape(note.title)}</strong>"
    if note.content:
        body += f" {escape(note.content)}"
    return f'<li data-note-id="{escape(note.id)}">{body}</li>'


_FORM = """<form method="post" action="/notes">
  <input name="title" placeholder="Title" />
  <textarea name="content" placeholder="Write a note…"></textarea>
  <button type="submit">Add</button>
</form>"""


class NotesPage:
    """Lists the signed-in user's notes; a POST adds one first."""

    def __init__(self, store: DataStore) -> None:
        self._store = store

    async def __call__(self, ctx: RequestContext) -> str:
        if ctx.user is None:
            return "<h1>Notes</h1>\n<p>Sign in to see your notes.</p>"

        if ctx.request.method == "POST":
            form = await ctx.request.form()
            await add_note(
                self._store,
                ctx.user.id,
                str(form.get("title") or ""),
                str(form.get("content") or ""),
            )

        notes = await list_notes(self._store, ctx.user.id)
        items = "\n".join(_note_item(note) for note in notes)
        return f"<h1>Notes</h1>\n{_FORM}\n<ul>\n{items}\n</ul>"
