"""Router — maps request paths to route-local step sequences.

Routes are registered at startup and frozen with ``compile()``; after that
the router is read-only and safe to share between concurrent requests.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from page_pipeline._types import Handler
from page_pipeline.chain import Chain, ChainItem, ResolvedChain


def split_path(path: str) -> tuple[str, ...]:
    """``"/notes/"`` -> ``("notes",)``; ``"/"`` -> ``()``.

    Only one trailing slash is dropped. Empty interior segments are kept, so
    ``"//notes"`` and ``"/notes//"`` do not match ``"/notes"``.
    """
    if path.endswith("/"):
        path = path[:-1]
    path = path.removeprefix("/")
    if not path:
        return ()
    return tuple(path.split("/"))


def _is_param(segment: str) -> bool:
    return len(segment) > 2 and segment.startswith("{") and segment.endswith("}")


@dataclass(frozen=True)
class Route:
    """A path pattern, its interrupters, and the terminal handler."""

    pattern: str
    interrupters: ResolvedChain
    handler: Handler
    segments: tuple[str, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "segments", split_path(self.pattern))

    def match(self, parts: tuple[str, ...]) -> dict[str, str] | None:
        """Return captured ``{name}`` segments, or ``None`` if ``parts`` differ."""
        if len(parts) != len(self.segments):
            return None
        params: dict[str, str] = {}
        for segment, part in zip(self.segments, parts, strict=True):
            if _is_param(segment):
                if not part:
                    return None
                params[segment[1:-1]] = part
            elif segment != part:
                return None
        return params


@dataclass(frozen=True)
class RouteMatch:
    """Result of a successful ``Router.resolve``."""

    route: Route
    params: dict[str, str]


class Router:
    """Ordered route table. The first registered matching pattern wins.

    Usage::

        router = Router()
        router.register("/ping", ping)
        router.register("/me", RequireAuth(), me)
        router.compile()
        match = router.resolve("/me")
    """

    __slots__ = ("_compiled", "_routes")

    def __init__(self) -> None:
        self._routes: list[Route] = []
        self._compiled = False

    def register(self, pattern: str, *steps: ChainItem | Handler) -> Route:
        """Register ``pattern``; the last step is the terminal handler."""
        if self._compiled:
            msg = "Cannot register routes after compilation."
            raise RuntimeError(msg)
        if not steps:
            msg = f"Route {pattern!r} needs a terminal handler."
            raise ValueError(msg)

        *interrupters, handler = steps
        route = Route(
            pattern=pattern,
            interrupters=Chain(*interrupters).resolve(),
            handler=handler,  # type: ignore[arg-type]
        )
        self._routes.append(route)
        return route

    def route(
        self, pattern: str, *interrupters: ChainItem
    ) -> Callable[[Handler], Handler]:
        """Decorator form of ``register``."""

        def decorator(handler: Handler) -> Handler:
            self.register(pattern, *interrupters, handler)
            return handler

        return decorator

    @property
    def routes(self) -> tuple[Route, ...]:
        return tuple(self._routes)

    @property
    def compiled(self) -> bool:
        return self._compiled

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    def resolve(self, path: str) -> RouteMatch | None:
        """Return the first route matching ``path``, or ``None`` (not found)."""
        parts = split_path(path)
        for route in self._routes:
            params = route.match(parts)
            if params is not None:
                return RouteMatch(route=route, params=params)
        return None
