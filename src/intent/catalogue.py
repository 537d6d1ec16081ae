"""Static command catalogue.

Each intent lists example phrases (Italian and English) that are embedded once at startup. The
phrases keep `{slot}` placeholders for readability; placeholders are stripped before embedding.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from src.intent.schema import IntentTag, SlotName

_PLACEHOLDER_RE = re.compile(r"\{[a-z_]+\}")
_MULTISPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class CommandIntent:
    """A recognizable command: its tag, example phrases and the slots it may carry."""

    tag: IntentTag
    examples: tuple[str, ...]
    slots: tuple[SlotName, ...] = ()

    def phrases(self) -> list[str]:
        """Example phrases with slot placeholders removed, in declaration order."""

        return [strip_placeholders(example) for example in self.examples]


def strip_placeholders(phrase: str) -> str:
    """Remove `{slot}` placeholders and collapse the leftover whitespace."""

    return _MULTISPACE_RE.sub(" ", _PLACEHOLDER_RE.sub(" ", phrase)).strip()


CATALOGUE: tuple[CommandIntent, ...] = (
    CommandIntent(
        tag=IntentTag.charge_battery,
        examples=(
            "Carica batteria {battery_id}",
            "Carica batteria {battery_id} serie {series}",
            "Inizia a caricare batteria {battery_id}",
            "Charge battery {battery_id}",
            "Start charging battery {battery_id}",
            "Battery {battery_id} charging",
        ),
        slots=(SlotName.battery_id, SlotName.series),
    ),
    CommandIntent(
        tag=IntentTag.discharge_battery,
        examples=(
            "Scarica batteria {battery_id}",
            "Discharge battery {battery_id}",
            "Start discharging battery {battery_id}",
            "Battery {battery_id} discharging",
        ),
        slots=(SlotName.battery_id,),
    ),
    CommandIntent(
        tag=IntentTag.check_resistance,
        examples=(
            "Controlla resistenza batteria {battery_id}",
            "Check resistance battery {battery_id}",
        ),
        slots=(SlotName.battery_id,),
    ),
    CommandIntent(
        tag=IntentTag.store_battery,
        examples=(
            "Metti in deposito batteria {battery_id}",
            "Store battery {battery_id}",
        ),
        slots=(SlotName.battery_id,),
    ),
)
