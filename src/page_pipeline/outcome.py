"""Continue / Terminate — the two possible results of a pipeline step."""

from __future__ import annotations

from dataclasses import dataclass

from starlette.responses import Response


@dataclass(frozen=True)
class Continue:
    """The chain proceeds to the next step."""


@dataclass(frozen=True)
class Terminate:
    """The chain stops and ``response`` is returned to the client."""

    response: Response


Outcome = Continue | Terminate

CONTINUE = Continue()
