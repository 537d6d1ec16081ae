"""Logging configuration for the bot and CLI processes."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable

# Model loading and polling libraries log every download/request at INFO.
QUIET_LOGGERS: tuple[str, ...] = (
    "aiogram.event",
    "sentence_transformers",
    "transformers",
    "huggingface_hub",
    "httpx",
    "urllib3",
)


def configure_logging(level: str | None = None, *, quiet: Iterable[str] = QUIET_LOGGERS) -> None:
    """Configure process logging once, at startup.

    Command texts may contain operator names or ids; they are logged by length and match outcome
    only, and nothing logged here is ever sent back to a chat.
    """

    log_level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)
