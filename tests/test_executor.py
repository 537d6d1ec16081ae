"""Tests for dispatching matched commands to their actions."""

from __future__ import annotations

import pytest

from src.intent.executor import NO_COMMAND_MESSAGE, CommandExecutor, CommandOutcome
from src.intent.schema import IntentTag, MatchResult


@pytest.mark.asyncio
async def test_charge_message_includes_series() -> None:
    result = MatchResult(
        intent=IntentTag.charge_battery,
        score=0.92,
        slots={"battery_id": 12, "series": "yellow"},
    )
    outcome = await CommandExecutor().execute(result)
    assert outcome == CommandOutcome(executed=True, message="Charging battery 12 (series yellow)")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("intent", "message"),
    [
        (IntentTag.discharge_battery, "Discharging battery 3, 7"),
        (IntentTag.check_resistance, "Checking resistance of battery 3, 7"),
        (IntentTag.store_battery, "Storing battery 3, 7"),
    ],
)
async def test_actions_list_ambiguous_ids(intent: IntentTag, message: str) -> None:
    result = MatchResult(intent=intent, score=0.8, slots={"battery_id": [3, 7], "series": None})
    outcome = await CommandExecutor().execute(result)
    assert outcome.executed
    assert outcome.message == message


@pytest.mark.asyncio
async def test_missing_id_is_shown_as_unknown() -> None:
    result = MatchResult(intent=IntentTag.store_battery, score=0.8, slots={"battery_id": []})
    assert (await CommandExecutor().execute(result)).message == "Storing battery ?"


@pytest.mark.asyncio
async def test_no_intent_is_not_executed() -> None:
    outcome = await CommandExecutor().execute(MatchResult(intent=None, score=0.3))
    assert outcome == CommandOutcome(executed=False, message=NO_COMMAND_MESSAGE)


@pytest.mark.asyncio
async def test_custom_actions_replace_defaults() -> None:
    calls: list[MatchResult] = []

    async def _store(result: MatchResult) -> CommandOutcome:
        calls.append(result)
        return CommandOutcome(executed=True, message="stored")

    executor = CommandExecutor({IntentTag.store_battery: _store})

    stored = await executor.execute(MatchResult(intent=IntentTag.store_battery, score=0.9))
    assert stored.message == "stored"
    assert len(calls) == 1

    unknown = await executor.execute(MatchResult(intent=IntentTag.charge_battery, score=0.9))
    assert not unknown.executed
