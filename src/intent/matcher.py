"""Nearest-neighbour intent matching with a rejection threshold."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from src.intent.cache import CatalogueEntry
from src.intent.schema import IntentTag
from src.intent.vectors import Vector, cosine_similarity

DEFAULT_THRESHOLD = 0.7


@dataclass(frozen=True)
class MatchOutcome:
    """Best intent (or `None` when rejected) and the best similarity seen."""

    intent: IntentTag | None
    score: float


def match(
        vector: Vector,
        entries: Iterable[CatalogueEntry],
        threshold: float = DEFAULT_THRESHOLD,
) -> MatchOutcome:
    """Find the catalogue entry most similar to `vector`.

    Linear scan over all entries; on ties the first entry in catalogue order wins. The intent is
    rejected (`None`) when the vector is empty, the cache is empty, or the best score is strictly
    below `threshold`.

    Raises:
        DimensionMismatch: If the input and catalogue vectors have different lengths.
    """

    if len(vector) == 0:
        return MatchOutcome(intent=None, score=0.0)

    best: CatalogueEntry | None = None
    best_score = -1.0
    for entry in entries:
        score = cosine_similarity(vector, entry.vector)
        if best is None or score > best_score:
            best = entry
            best_score = score

    if best is None:
        return MatchOutcome(intent=None, score=0.0)

    if best_score < threshold:
        return MatchOutcome(intent=None, score=best_score)

    return MatchOutcome(intent=best.tag, score=best_score)
