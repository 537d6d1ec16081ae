"""Single-flight lazy initialization.

Concurrent callers of `SingleFlight.run()` share one in-flight task instead of starting a second
one. After success every further call is a no-op; after failure the state falls back to
`uninitialized` so the next call retries.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from enum import Enum


class InitState(Enum):
    """Lifecycle of a lazily initialized resource."""

    uninitialized = "uninitialized"
    initializing = "initializing"
    ready = "ready"


class SingleFlight:
    """Run an async initializer at most once at a time and remember its success."""

    def __init__(self, initializer: Callable[[], Awaitable[None]]) -> None:
        self._initializer = initializer
        self._state = InitState.uninitialized
        self._task: asyncio.Task[None] | None = None

    @property
    def state(self) -> InitState:
        return self._state

    async def _run_once(self) -> None:
        try:
            await self._initializer()
        except BaseException:
            self._state = InitState.uninitialized
            self._task = None
            raise
        self._state = InitState.ready
        self._task = None

    async def run(self) -> None:
        """Run the initializer, or await the attempt already in flight."""

        if self._state is InitState.ready:
            return

        if self._task is None:
            self._state = InitState.initializing
            self._task = asyncio.create_task(self._run_once())

        # A cancelled waiter must not cancel the shared attempt for the others.
        await asyncio.shield(self._task)
