"""Embedding backend adapter.

Wraps an `EmbeddingBackend` behind a single-flight warm-up and turns its raw output into a unit
vector. The adapter is created once at startup and injected into the command parser.
"""

from __future__ import annotations

import logging

from src.intent.backend import EmbeddingBackend
from src.intent.errors import BackendUnavailable, EmbeddingFailed
from src.intent.singleflight import InitState, SingleFlight
from src.intent.vectors import Vector, empty_vector, flatten, normalize

logger = logging.getLogger(__name__)


class Embedder:
    """Embedding capability with explicit lifecycle (`uninitialized -> initializing -> ready`)."""

    def __init__(self, backend: EmbeddingBackend) -> None:
        self._backend = backend
        self._warmup = SingleFlight(self._warm_up)
        self._warmup_count = 0

    @property
    def backend(self) -> EmbeddingBackend:
        return self._backend

    @property
    def state(self) -> InitState:
        return self._warmup.state

    @property
    def warmup_count(self) -> int:
        """Number of backend warm-ups actually started."""

        return self._warmup_count

    @property
    def is_ready(self) -> bool:
        return self._warmup.state is InitState.ready

    async def _warm_up(self) -> None:
        self._warmup_count += 1
        try:
            await self._backend.load()
        except Exception as exc:  # noqa: BLE001 - any load failure means the backend is unavailable
            model_name = self._backend.model_name
            logger.error("embedding backend failed to load model=%s error=%s", model_name, exc)
            raise BackendUnavailable(f"embedding backend {model_name!r} failed to load") from exc

    async def initialize(self) -> None:
        """Warm up the backend once; concurrent callers await the same attempt.

        Raises:
            BackendUnavailable: If the backend failed to load (a later call retries).
        """

        await self._warmup.run()

    async def embed(self, text: str) -> Vector:
        """Embed text into a unit vector.

        Empty or whitespace-only text yields an empty vector without calling the backend.

        Raises:
            BackendUnavailable: If `initialize()` has not completed.
            EmbeddingFailed: If the backend failed or returned a malformed tensor.
        """

        if not text or not text.strip():
            return empty_vector()

        if not self.is_ready:
            raise BackendUnavailable("embedder is not initialized")

        try:
            raw = await self._backend.embed(text)
            return normalize(flatten(raw))
        except Exception as exc:  # noqa: BLE001 - backend errors are reported per call, never fatal
            logger.warning("embedding failed text_len=%d error=%s", len(text), exc)
            raise EmbeddingFailed(str(exc)) from exc
