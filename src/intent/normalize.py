"""Text normalization for deterministic slot extraction."""

from __future__ import annotations

import re

_NON_WORD_RE = re.compile(r"[^\w\s]+")
_MULTISPACE_RE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Normalize user text for word-level matching.

    Normalization is intentionally conservative:
        - Case-fold (works for accented Italian/French letters too).
        - Replace punctuation, dashes and apostrophes with spaces ("l'unità" -> "l unità").
        - Collapse whitespace.

    The goal is deterministic tokenization, not linguistic lemmatization.
    """

    value = (text or "").strip().casefold()
    value = value.replace("_", " ")
    value = _NON_WORD_RE.sub(" ", value)
    value = _MULTISPACE_RE.sub(" ", value).strip()
    return value


def tokenize(text: str) -> list[str]:
    """Split normalized text into word tokens."""

    return normalize_text(text).split()
