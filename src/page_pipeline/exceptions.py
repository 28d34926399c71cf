"""PipelineException hierarchy for controlled aborts and internal faults."""

from __future__ import annotations


class PipelineException(Exception):
    """Base for all pipeline exceptions."""


class StepAbort(PipelineException):
    """Controlled short-circuit with HTTP status code and detail."""

    def __init__(self, detail: str, *, status_code: int = 400) -> None:
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail


class Unauthorized(StepAbort):
    """No authenticated user where one is required (401)."""

    def __init__(self, detail: str = "Unauthorized") -> None:
        super().__init__(detail, status_code=401)


class RouteNotFound(PipelineException):
    """No registered route matches the request path (404)."""

    status_code = 404

    def __init__(self, path: str) -> None:
        super().__init__(f"No route matches {path!r}")
        self.path = path
        self.detail = "Not Found"


class PipelineInternalError(PipelineException):
    """Dispatcher-level error wrapping unexpected exceptions."""

    def __init__(self, detail: str, *, cause: Exception | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.cause = cause
