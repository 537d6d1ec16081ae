"""Parse a single command from the command line and print the match as JSON."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from src.app import create_app
from src.config.logging import configure_logging
from src.config.settings import load_settings
from src.intent.errors import BackendUnavailable

logger = logging.getLogger(__name__)


async def run(text: str, *, threshold: float | None, execute: bool) -> int:
    """Parse (and optionally execute) one command; return the process exit status."""

    settings = load_settings()
    if threshold is not None:
        settings = settings.model_copy(update={"match_threshold": threshold})

    app = create_app(settings)
    try:
        result = await app.parser.parse_command(text)
    except BackendUnavailable as exc:
        logger.error("command parser unavailable: %s", exc)
        return 1

    print(json.dumps(result.model_dump(mode="json"), ensure_ascii=False))

    if execute:
        outcome = await app.executor.execute(result)
        print(outcome.message)
    return 0


def main() -> None:
    """CLI entry point for parsing one voice/typed command."""

    parser = argparse.ArgumentParser(description="Match a text against the command catalogue.")
    parser.add_argument("text", help='Command text, e.g. "Carica batteria 12 serie gialla".')
    parser.add_argument(
        "--threshold",
        type=float,
        default=None,
        help="Override MATCH_THRESHOLD (cosine similarity below which no intent is returned).",
    )
    parser.add_argument(
        "--execute",
        action="store_true",
        help="Also dispatch the matched command and print its outcome.",
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL.")
    args = parser.parse_args()

    if args.threshold is not None and not -1.0 <= args.threshold <= 1.0:
        parser.error("--threshold must be within [-1, 1]")

    configure_logging(args.log_level)
    sys.exit(asyncio.run(run(args.text, threshold=args.threshold, execute=args.execute)))


if __name__ == "__main__":
    main()
