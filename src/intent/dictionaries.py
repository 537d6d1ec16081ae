"""Italian/English dictionaries for slot extraction.

These vocabularies are used by the slot extractor and should remain small and deterministic. All
words are stored case-folded; matching is whole-word only.
"""

from __future__ import annotations

from collections.abc import Iterable

# Words meaning "series"; the qualifier sits right after ("serie gialla") or right before
# ("yellow series") them.
SERIES_ANCHORS: frozenset[str] = frozenset({"serie", "series", "série"})

SERIES_SYNONYMS: dict[str, tuple[str, ...]] = {
    "yellow": ("yellow", "giallo", "gialla", "gialli", "gialle"),
    "red": ("red", "rosso", "rossa", "rossi", "rosse"),
    "blue": ("blue", "blu", "azzurro", "azzurra"),
    "green": ("green", "verde", "verdi"),
    "black": ("black", "nero", "nera", "neri", "nere"),
    "white": ("white", "bianco", "bianca", "bianchi", "bianche"),
    "orange": ("orange", "arancione", "arancioni"),
    "grey": ("grey", "gray", "grigio", "grigia", "grigi", "grigie"),
    "silver": ("silver", "argento"),
    "gold": ("gold", "oro"),
}

SERIES_VOCABULARY: frozenset[str] = frozenset(
    term for terms in SERIES_SYNONYMS.values() for term in terms
)

# Words that can follow an id or an anchor but are never a series qualifier.
NON_QUALIFIER_WORDS: frozenset[str] = frozenset(
    {
        # Command words (e.g. "Battery 12 charging").
        "battery", "batteria", "batterie", "charge", "charging", "carica", "caricare",
        "discharge", "discharging", "scarica", "scaricare", "check", "controlla", "resistance",
        "resistenza", "store", "deposito", "start", "inizia", "now", "ora", "please",
        # Function words.
        "a", "an", "the", "and", "of", "for", "with", "in", "to", "on",
        "e", "ed", "di", "del", "della", "da", "per", "con", "il", "lo", "la", "le", "gli", "i",
        "un", "una", "uno", "al", "alla", "su", "numero", "number", "n", "no",
    }
)


def build_vocabulary(terms: Iterable[str]) -> frozenset[str]:
    """Build a qualifier vocabulary from user-provided terms (blank terms are dropped)."""

    return frozenset(term.strip().casefold() for term in terms if term and term.strip())


def is_qualifier_candidate(token: str) -> bool:
    """Whether a token may be used as a best-effort series qualifier."""

    if not token or token.isdigit():
        return False
    if token in SERIES_ANCHORS or token in NON_QUALIFIER_WORDS:
        return False
    return any(ch.isalpha() for ch in token)
