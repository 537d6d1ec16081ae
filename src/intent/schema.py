"""Command match schema (Pydantic models).

`MatchResult` is the contract between the command parser and its callers (bot handler, CLI,
command executor). It is produced for every input, matched or not.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TypeAlias

from pydantic import BaseModel, ConfigDict, Field


class IntentTag(StrEnum):
    """Supported command intents."""

    charge_battery = "charge_battery"
    discharge_battery = "discharge_battery"
    check_resistance = "check_resistance"
    store_battery = "store_battery"


class SlotName(StrEnum):
    """Named slots a command may carry."""

    battery_id = "battery_id"
    series = "series"


# A single id, an ordered list of ids (ambiguous input), a qualifier word, or absent.
SlotValue: TypeAlias = int | list[int] | str | None


class MatchResult(BaseModel):
    """Best-matching intent (or none), its similarity score and the extracted slots."""

    model_config = ConfigDict(extra="forbid")

    intent: IntentTag | None = None
    score: float = Field(default=0.0, ge=-1.0, le=1.0)
    slots: dict[str, SlotValue] = Field(default_factory=dict)

    @property
    def matched(self) -> bool:
        """Whether an intent was accepted above the rejection threshold."""

        return self.intent is not None
