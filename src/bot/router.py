"""Bot router composition: every message goes through the command handler."""

from __future__ import annotations

from aiogram import Router

from src.bot.handlers import handle_message

router = Router(name="commands")
router.message.register(handle_message)
