"""Precomputed catalogue embeddings.

The cache is a sequence (not a mapping): every example phrase gets its own entry, so several
entries share one intent tag. Entry order is catalogue order, then example order within an intent;
the matcher relies on it for deterministic tie-breaking.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from src.intent.catalogue import CommandIntent
from src.intent.embedder import Embedder
from src.intent.errors import EmbeddingFailed
from src.intent.schema import IntentTag
from src.intent.vectors import Vector, normalize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogueEntry:
    """One example phrase of an intent with its normalized embedding."""

    tag: IntentTag
    phrase: str
    vector: Vector


class EmbeddingCache:
    """Immutable, ordered collection of catalogue entries."""

    def __init__(self, entries: Iterable[CatalogueEntry] = ()) -> None:
        self._entries = tuple(entries)

    @property
    def entries(self) -> tuple[CatalogueEntry, ...]:
        return self._entries

    @property
    def is_empty(self) -> bool:
        return not self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CatalogueEntry]:
        return iter(self._entries)

    @classmethod
    async def build(cls, catalogue: Iterable[CommandIntent], embedder: Embedder) -> EmbeddingCache:
        """Embed every example phrase of the catalogue.

        A phrase whose embedding fails (or is empty) is skipped with a warning; it never aborts
        the build. Callers must check `is_empty`.
        """

        entries: list[CatalogueEntry] = []
        skipped = 0
        for intent in catalogue:
            for phrase in intent.phrases():
                try:
                    vector = await embedder.embed(phrase)
                except EmbeddingFailed as exc:
                    logger.warning(
                        "skipping catalogue phrase intent=%s phrase=%r: %s", intent.tag, phrase, exc
                    )
                    skipped += 1
                    continue

                if len(vector) == 0:
                    logger.warning("skipping empty catalogue embedding intent=%s", intent.tag)
                    skipped += 1
                    continue

                entries.append(CatalogueEntry(tag=intent.tag, phrase=phrase, vector=normalize(vector)))

        logger.info("catalogue embeddings built entries=%d skipped=%d", len(entries), skipped)
        return cls(entries)
