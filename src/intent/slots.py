"""Rules-based slot extraction.

Slots are extracted from the raw input text only, independently of the embedding match, so callers
get them even when no intent was accepted. Ambiguity is surfaced, never guessed away: several
numeric ids are returned as an ordered list.
"""

from __future__ import annotations

import re
from collections.abc import Collection

from src.intent.dictionaries import SERIES_ANCHORS, SERIES_VOCABULARY, is_qualifier_candidate
from src.intent.normalize import tokenize
from src.intent.schema import SlotName, SlotValue

_NUMBER_RE = re.compile(r"\b\d+\b")

# Longer digit runs are serial numbers or noise, never a battery id.
MAX_ID_DIGITS = 18


def _parse_id(digits: str) -> int | None:
    if len(digits) > MAX_ID_DIGITS:
        return None
    return int(digits)


def extract_battery_id(text: str) -> int | list[int]:
    """Collect standalone digit runs in order of appearance.

    Runs longer than `MAX_ID_DIGITS` are skipped.

    Returns:
        The single number when exactly one is present; otherwise the ordered list (possibly empty).
    """

    numbers: list[int] = []
    for m in _NUMBER_RE.finditer(text or ""):
        value = _parse_id(m.group(0))
        if value is not None:
            numbers.append(value)
    if len(numbers) == 1:
        return numbers[0]
    return numbers


def _find_vocabulary_word(tokens: list[str], vocabulary: Collection[str]) -> str | None:
    for token in tokens:
        if token in vocabulary:
            return token
    return None


def _find_anchored_word(tokens: list[str]) -> str | None:
    """Word next to a "series" anchor; the following word wins over the preceding one."""

    for idx, token in enumerate(tokens):
        if token not in SERIES_ANCHORS:
            continue
        if idx + 1 < len(tokens) and is_qualifier_candidate(tokens[idx + 1]):
            return tokens[idx + 1]
        if idx > 0 and is_qualifier_candidate(tokens[idx - 1]):
            return tokens[idx - 1]
    return None


def _find_word_after_id(tokens: list[str], battery_id: int) -> str | None:
    for idx, token in enumerate(tokens):
        # isdigit() also accepts "²", which int() rejects; only real digit runs are ids.
        if _NUMBER_RE.fullmatch(token) and _parse_id(token) == battery_id:
            if idx + 1 < len(tokens) and is_qualifier_candidate(tokens[idx + 1]):
                return tokens[idx + 1]
            return None
    return None


def extract_series(
        text: str,
        *,
        battery_id: int | list[int] | None = None,
        vocabulary: Collection[str] = SERIES_VOCABULARY,
) -> str | None:
    """Extract the series qualifier.

    Strategy:
        1) A known qualifier word anywhere in the text (case-insensitive, whole word).
        2) The word next to a "series" anchor ("serie B", "B series").
        3) The word right after the battery id, when exactly one id was found.
        4) Otherwise `None`.
    """

    tokens = tokenize(text)
    if not tokens:
        return None

    word = _find_vocabulary_word(tokens, vocabulary)
    if word is not None:
        return word

    word = _find_anchored_word(tokens)
    if word is not None:
        return word

    if isinstance(battery_id, int):
        return _find_word_after_id(tokens, battery_id)
    return None


def extract_slots(
        text: str,
        *,
        vocabulary: Collection[str] = SERIES_VOCABULARY,
) -> dict[str, SlotValue]:
    """Extract all slots from raw text (every slot key is always present)."""

    battery_id = extract_battery_id(text)
    series = extract_series(text, battery_id=battery_id, vocabulary=vocabulary)
    return {
        SlotName.battery_id.value: battery_id,
        SlotName.series.value: series,
    }
