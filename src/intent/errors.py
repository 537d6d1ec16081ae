"""Error taxonomy of the intent engine.

Only `BackendUnavailable` and `DimensionMismatch` are expected to reach callers; the other errors
are recovered locally (a failed embedding is treated as an empty vector and is rejected by the
matcher).
"""

from __future__ import annotations


class IntentEngineError(RuntimeError):
    """Base class for all intent engine errors."""


class MalformedEmbeddingOutput(IntentEngineError, ValueError):
    """Raised when the backend returns a tensor shape that cannot be reduced to one vector."""


class DimensionMismatch(IntentEngineError, ValueError):
    """Raised when comparing vectors of different lengths.

    This indicates a catalogue/backend version mismatch and silently breaks every match if ignored,
    so it is never swallowed.
    """


class EmbeddingFailed(IntentEngineError):
    """Raised when the backend fails to embed a single text."""


class BackendUnavailable(IntentEngineError):
    """Raised when the embedding backend (or the catalogue built on it) never became ready."""
