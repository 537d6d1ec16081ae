"""aiogram message handlers.

Hard contract: every incoming message produces exactly one reply. Unrecognized input gets the
"no command" text; internal errors get a fixed fallback text and are logged internally only.
"""

from __future__ import annotations

import logging
from time import monotonic

from aiogram.types import Message

from src.app import App
from src.intent.errors import BackendUnavailable
from src.intent.executor import NO_COMMAND_MESSAGE

logger = logging.getLogger(__name__)

UNAVAILABLE_REPLY = "Command recognition is not available right now"
ERROR_REPLY = "Something went wrong"


def _is_command_text(text: str) -> bool:
    return text.lstrip().startswith("/")


async def handle_message(message: Message, app: App) -> None:
    """Handle any incoming Telegram message: parse, execute and reply with the outcome."""

    started = monotonic()
    reply = NO_COMMAND_MESSAGE

    # noinspection PyBroadException
    try:
        raw_text = (message.text or message.caption or "")
        if not raw_text.strip() or _is_command_text(raw_text):
            await message.answer(reply)
            return

        result = await app.parser.parse_command(raw_text)
        outcome = await app.executor.execute(result)
        reply = outcome.message

        latency_ms = int((monotonic() - started) * 1000)
        logger.info(
            "handled intent=%s score=%.3f executed=%s latency_ms=%d",
            result.intent,
            result.score,
            outcome.executed,
            latency_ms,
        )
    except BackendUnavailable as exc:
        reply = UNAVAILABLE_REPLY
        logger.warning("backend unavailable reason=%s", exc)
    except Exception:
        # Handler boundary: any internal error must still produce one reply, without leaking
        # details.
        reply = ERROR_REPLY
        logger.exception("handler failed")

    await message.answer(reply)
