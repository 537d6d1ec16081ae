"""Bot process entrypoint: warm up the command parser, then poll Telegram for messages."""

from __future__ import annotations

import asyncio
import logging
from time import monotonic

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties

from src.app import App, create_app
from src.bot.router import router
from src.config.logging import configure_logging
from src.config.settings import Settings, load_settings

logger = logging.getLogger(__name__)


def create_bot(settings: Settings) -> Bot:
    """Create the Telegram client; replies are plain text (no Markdown/HTML parsing)."""

    if not settings.telegram_bot_token:
        raise RuntimeError("TELEGRAM_BOT_TOKEN is required to run the bot")
    return Bot(token=settings.telegram_bot_token, default=DefaultBotProperties(parse_mode=None))


async def warm_up_parser(app: App) -> None:
    """Load the embedding model and embed the command catalogue before serving messages.

    Raises:
        BackendUnavailable: If the model cannot be loaded or no catalogue phrase was embedded.
    """

    started = monotonic()
    logger.info(
        "warming up command parser model=%s threshold=%.2f",
        app.settings.embedding_model,
        app.parser.threshold,
    )
    await app.parser.init()
    logger.info(
        "command parser ready entries=%d warmup_ms=%d",
        app.parser.cache_size,
        int((monotonic() - started) * 1000),
    )


async def main() -> None:
    """Run the voice-command bot."""

    settings = load_settings()
    configure_logging()

    bot = create_bot(settings)
    app = create_app(settings)
    try:
        # A bot that can never match a command is useless: refuse to start instead.
        await warm_up_parser(app)

        dp = Dispatcher()
        dp.include_router(router)
        await dp.start_polling(bot, app=app)
    finally:
        logger.info("shutting down")
        await bot.session.close()


if __name__ == "__main__":
    asyncio.run(main())
