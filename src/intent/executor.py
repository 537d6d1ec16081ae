"""Command execution.

Maps each matched intent to an async action. The default actions only log and describe what would
be done; deployments register their own actions (e.g. a call to the battery station controller).
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass

from src.intent.schema import IntentTag, MatchResult, SlotName, SlotValue

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandOutcome:
    """Whether a command was executed, with a human-readable message."""

    executed: bool
    message: str


CommandAction = Callable[[MatchResult], Awaitable[CommandOutcome]]


def _format_battery_id(value: SlotValue) -> str:
    if isinstance(value, list):
        return ", ".join(str(v) for v in value) if value else "?"
    if value is None:
        return "?"
    return str(value)


def _slot(result: MatchResult, name: SlotName) -> SlotValue:
    return result.slots.get(name.value)


async def _charge(result: MatchResult) -> CommandOutcome:
    battery_id = _format_battery_id(_slot(result, SlotName.battery_id))
    series = _slot(result, SlotName.series)
    logger.info("charging battery=%s series=%s", battery_id, series or "-")
    message = f"Charging battery {battery_id}"
    if series:
        message += f" (series {series})"
    return CommandOutcome(executed=True, message=message)


async def _discharge(result: MatchResult) -> CommandOutcome:
    battery_id = _format_battery_id(_slot(result, SlotName.battery_id))
    logger.info("discharging battery=%s", battery_id)
    return CommandOutcome(executed=True, message=f"Discharging battery {battery_id}")


async def _check_resistance(result: MatchResult) -> CommandOutcome:
    battery_id = _format_battery_id(_slot(result, SlotName.battery_id))
    logger.info("checking resistance battery=%s", battery_id)
    return CommandOutcome(executed=True, message=f"Checking resistance of battery {battery_id}")


async def _store(result: MatchResult) -> CommandOutcome:
    battery_id = _format_battery_id(_slot(result, SlotName.battery_id))
    logger.info("storing battery=%s", battery_id)
    return CommandOutcome(executed=True, message=f"Storing battery {battery_id}")


DEFAULT_ACTIONS: Mapping[IntentTag, CommandAction] = {
    IntentTag.charge_battery: _charge,
    IntentTag.discharge_battery: _discharge,
    IntentTag.check_resistance: _check_resistance,
    IntentTag.store_battery: _store,
}

NO_COMMAND_MESSAGE = "No command recognized"


class CommandExecutor:
    """Dispatch a `MatchResult` to the action registered for its intent."""

    def __init__(self, actions: Mapping[IntentTag, CommandAction] | None = None) -> None:
        self._actions = dict(DEFAULT_ACTIONS if actions is None else actions)

    async def execute(self, result: MatchResult) -> CommandOutcome:
        if result.intent is None:
            logger.warning("no command matched score=%.3f", result.score)
            return CommandOutcome(executed=False, message=NO_COMMAND_MESSAGE)

        action = self._actions.get(result.intent)
        if action is None:
            logger.warning("no action registered intent=%s", result.intent)
            return CommandOutcome(executed=False, message=f"Unknown command {result.intent}")

        return await action(result)
