"""Pytest configuration.

The repository uses a flat `src/` layout without an installed package. This conftest ensures tests
can import from the `src.*` namespace when running `pytest` locally, and provides an in-process
embedding backend so no model is ever downloaded.
"""

from __future__ import annotations

import asyncio
import re
import sys
from collections.abc import Callable
from pathlib import Path

import pytest

# Ensure `import src...` works when running pytest without installing the package.
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from src.intent.backend import EmbeddingBackend  # noqa: E402
from src.intent.vectors import Flat, RawTensor  # noqa: E402

# Keyword -> dimension. Texts sharing concepts get similar bag-of-words vectors.
_CONCEPTS: dict[str, int] = {
    "charge": 0, "charging": 0, "carica": 0, "caricare": 0,
    "discharge": 1, "discharging": 1, "scarica": 1,
    "resistance": 2, "resistenza": 2, "check": 2, "controlla": 2,
    "store": 3, "deposito": 3,
    "battery": 4, "batteria": 4,
}
_WORD_RE = re.compile(r"\w+")


class FakeBackend(EmbeddingBackend):
    """Deterministic keyword embedding backend with call counters."""

    def __init__(
            self,
            *,
            load_failures: int = 0,
            fail_words: frozenset[str] = frozenset(),
            load_delay: float = 0.01,
    ) -> None:
        self.load_calls = 0
        self.embed_calls: list[str] = []
        self._load_failures = load_failures
        self._fail_words = fail_words
        self._load_delay = load_delay

    @property
    def model_name(self) -> str:
        return "fake-keywords"

    async def load(self) -> None:
        self.load_calls += 1
        await asyncio.sleep(self._load_delay)
        if self.load_calls <= self._load_failures:
            raise OSError("model weights not found")

    async def embed(self, text: str) -> RawTensor:
        self.embed_calls.append(text)
        words = _WORD_RE.findall(text.lower())
        if any(w in self._fail_words for w in words):
            raise RuntimeError("inference failed")

        vector = [0.0] * 5
        for word in words:
            if word in _CONCEPTS:
                vector[_CONCEPTS[word]] += 1.0
        return Flat(vector)


@pytest.fixture
def backend_factory() -> Callable[..., FakeBackend]:
    return FakeBackend


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()
