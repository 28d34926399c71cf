"""PipelineTrace and TraceEntry — debug execution recording."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal
from urllib.parse import quote

Stage = Literal["middleware", "init", "interrupter", "handler"]


@dataclass(frozen=True)
class TraceEntry:
    """Single step execution record."""

    step_name: str
    stage: Stage
    duration_ms: float
    outcome: Literal["CONTINUE", "TERMINATED", "FAILED"]
    reason: str | None = None


@dataclass
class PipelineTrace:
    """Structured record of one request's trip through the pipeline."""

    entries: list[TraceEntry] = field(default_factory=list)
    total_duration_ms: float = 0.0
    outcome: Literal["OK", "TERMINATED", "NOT_FOUND", "ERROR"] = "OK"
    error: Exception | None = None

    def record(
        self,
        step_name: str,
        stage: Stage,
        duration_ms: float,
        outcome: Literal["CONTINUE", "TERMINATED", "FAILED"],
        reason: str | None = None,
    ) -> None:
        self.entries.append(
            TraceEntry(
                step_name=step_name,
                stage=stage,
                duration_ms=duration_ms,
                outcome=outcome,
                reason=reason,
            )
        )

    def summary(self) -> str:
        """Compact ``stage:name=OUTCOME`` list, used for the debug header."""
        return ", ".join(f"{e.stage}:{e.step_name}={e.outcome}" for e in self.entries)

    def header_value(self) -> str:
        """``summary()`` percent-encoded so it always fits a latin-1 header."""
        return quote(self.summary(), safe=" ,:=")
