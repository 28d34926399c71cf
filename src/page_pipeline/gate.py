"""InitializationGate — process-wide one-shot bootstrap latch."""

from __future__ import annotations

import asyncio
import logging
import threading

from page_pipeline._types import InitAction

logger = logging.getLogger(__name__)


class InitializationGate:
    """Launches ``action`` at most once for the lifetime of the gate.

    ``ensure_initialized()`` is called on every request. The latch is flipped
    under a lock before the action is scheduled, so concurrent first requests
    elect exactly one launcher. The action runs as a background task; the
    calling request never waits for it, and its failures are logged here
    instead of reaching the request.
    """

    def __init__(self, action: InitAction, *, name: str = "initialization") -> None:
        self._action = action
        self._name = name
        self._lock = threading.Lock()
        self._initialized = False
        self._task: asyncio.Task[None] | None = None

    @property
    def initialized(self) -> bool:
        return self._initialized

    def ensure_initialized(self) -> bool:
        """Launch the action if nobody has yet. Returns True for the launcher."""
        if self._initialized:
            return False

        with self._lock:
            if self._initialized:
                return False
            self._initialized = True

        logger.info("launching %s", self._name)
        self._task = asyncio.get_running_loop().create_task(self._run())
        return True

    async def _run(self) -> None:
        try:
            await self._action()
        except Exception:
            logger.exception("%s failed", self._name)

    async def wait(self) -> None:
        """Wait for a launched action to finish. No-op if none was launched."""
        if self._task is not None:
            await asyncio.shield(self._task)
