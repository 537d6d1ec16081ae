"""Command parser orchestration (embedding match + rules-based slots)."""

from __future__ import annotations

import logging
from collections.abc import Collection, Iterable

from src.intent.cache import EmbeddingCache
from src.intent.catalogue import CATALOGUE, CommandIntent
from src.intent.dictionaries import SERIES_VOCABULARY
from src.intent.embedder import Embedder
from src.intent.errors import BackendUnavailable, EmbeddingFailed
from src.intent.matcher import DEFAULT_THRESHOLD, match
from src.intent.schema import MatchResult
from src.intent.singleflight import InitState, SingleFlight
from src.intent.slots import extract_slots

logger = logging.getLogger(__name__)


class CommandParser:
    """Turn free-form text into a `MatchResult`.

    The parser owns the catalogue embedding cache. The `Embedder` is injected and warmed up by
    `init()` together with the cache build, exactly once per parser, however many callers race.
    """

    def __init__(
            self,
            embedder: Embedder,
            *,
            catalogue: Iterable[CommandIntent] = CATALOGUE,
            threshold: float = DEFAULT_THRESHOLD,
            vocabulary: Collection[str] = SERIES_VOCABULARY,
    ) -> None:
        self._embedder = embedder
        self._catalogue = tuple(catalogue)
        self._threshold = threshold
        self._vocabulary = vocabulary
        self._cache = EmbeddingCache()
        self._startup = SingleFlight(self._build)

    @property
    def threshold(self) -> float:
        return self._threshold

    @property
    def is_ready(self) -> bool:
        return self._startup.state is InitState.ready

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    async def _build(self) -> None:
        await self._embedder.initialize()

        cache = await EmbeddingCache.build(self._catalogue, self._embedder)
        if cache.is_empty:
            # Every future match would silently be "no intent"; make it visible instead.
            raise BackendUnavailable("no catalogue phrase could be embedded")
        self._cache = cache

    async def init(self) -> None:
        """Warm up the embedder and precompute catalogue embeddings (single-flight).

        Raises:
            BackendUnavailable: If the backend failed to load or the catalogue cache is empty.
        """

        await self._startup.run()

    async def parse_command(self, text: str) -> MatchResult:
        """Parse text into the best-matching command plus extracted slots.

        Slots never depend on the embedding: if the input cannot be embedded the result has no
        intent but still carries the slots found in the raw text.

        Raises:
            BackendUnavailable: If initialization fails.
            DimensionMismatch: If the input and catalogue embeddings disagree in length.
        """

        await self.init()

        slots = extract_slots(text, vocabulary=self._vocabulary)

        try:
            vector = await self._embedder.embed(text)
        except EmbeddingFailed:
            logger.info("input embedding failed; returning slots only")
            return MatchResult(intent=None, score=0.0, slots=slots)

        outcome = match(vector, self._cache, self._threshold)
        logger.debug("best match intent=%s score=%.3f", outcome.intent, outcome.score)
        return MatchResult(intent=outcome.intent, score=outcome.score, slots=slots)
