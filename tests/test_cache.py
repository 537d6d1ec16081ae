"""Tests for catalogue embedding cache construction."""

from __future__ import annotations

import numpy as np
import pytest

from src.intent.cache import EmbeddingCache
from src.intent.catalogue import CATALOGUE, CommandIntent, strip_placeholders
from src.intent.embedder import Embedder
from src.intent.schema import IntentTag, SlotName


def test_strip_placeholders() -> None:
    assert strip_placeholders("Carica batteria {battery_id} serie {series}") == "Carica batteria serie"
    assert strip_placeholders("Battery {battery_id} charging") == "Battery charging"


def test_catalogue_covers_every_intent_in_both_languages() -> None:
    assert [intent.tag for intent in CATALOGUE] == list(IntentTag)
    charge = CATALOGUE[0]
    assert charge.slots == (SlotName.battery_id, SlotName.series)
    assert "Carica batteria {battery_id}" in charge.examples
    assert "Charge battery {battery_id}" in charge.examples


@pytest.mark.asyncio
async def test_build_keeps_catalogue_then_example_order(fake_backend) -> None:
    embedder = Embedder(fake_backend)
    await embedder.initialize()

    cache = await EmbeddingCache.build(CATALOGUE, embedder)

    expected = [(intent.tag, phrase) for intent in CATALOGUE for phrase in intent.phrases()]
    assert [(entry.tag, entry.phrase) for entry in cache] == expected
    assert len(cache) == sum(len(intent.examples) for intent in CATALOGUE)
    for entry in cache:
        assert float(np.linalg.norm(entry.vector)) == pytest.approx(1.0)


@pytest.mark.asyncio
async def test_build_skips_failing_phrases(backend_factory) -> None:
    embedder = Embedder(backend_factory(fail_words=frozenset({"scarica"})))
    await embedder.initialize()

    cache = await EmbeddingCache.build(CATALOGUE, embedder)

    phrases = [entry.phrase for entry in cache.entries]
    assert "Scarica batteria" not in phrases
    assert "Discharge battery" in phrases
    assert not cache.is_empty


@pytest.mark.asyncio
async def test_build_with_every_phrase_failing_is_empty(backend_factory) -> None:
    embedder = Embedder(backend_factory(fail_words=frozenset({"battery", "batteria"})))
    await embedder.initialize()

    catalogue = (
        CommandIntent(tag=IntentTag.store_battery, examples=("Store battery {battery_id}",)),
    )
    cache = await EmbeddingCache.build(catalogue, embedder)
    assert cache.is_empty
    assert len(cache) == 0
