"""Tests for the aiogram message handler reply contract.

Every incoming message must result in exactly one reply: the executed command's description, the
"no command" text for unrecognized input, or a fixed fallback text on internal errors.
"""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest

from src.bot.handlers import ERROR_REPLY, UNAVAILABLE_REPLY, handle_message
from src.intent.embedder import Embedder
from src.intent.executor import NO_COMMAND_MESSAGE, CommandExecutor
from src.intent.parser import CommandParser


class _FakeMessage:
    def __init__(self, text: str | None) -> None:
        self.text = text
        self.caption = None
        self.answers: list[str] = []

    async def answer(self, text: str) -> None:
        """Record the outgoing bot reply (aiogram's `Message.answer` substitute)."""
        self.answers.append(text)


def _make_app(backend: Any) -> Any:
    return SimpleNamespace(
        parser=CommandParser(Embedder(backend)),
        executor=CommandExecutor(),
    )


@pytest.mark.asyncio
@pytest.mark.parametrize("text", [None, "", "/start"])
async def test_handler_replies_no_command_for_empty_or_slash_command(fake_backend, text) -> None:
    message = _FakeMessage(text=text)

    await handle_message(message, _make_app(fake_backend))  # type: ignore[arg-type]

    assert message.answers == [NO_COMMAND_MESSAGE]
    assert fake_backend.load_calls == 0


@pytest.mark.asyncio
async def test_handler_executes_matched_command(fake_backend) -> None:
    message = _FakeMessage(text="Carica batteria 12 serie gialla")

    await handle_message(message, _make_app(fake_backend))  # type: ignore[arg-type]

    assert message.answers == ["Charging battery 12 (series gialla)"]


@pytest.mark.asyncio
async def test_handler_replies_no_command_for_unrelated_text(fake_backend) -> None:
    message = _FakeMessage(text="good morning")

    await handle_message(message, _make_app(fake_backend))  # type: ignore[arg-type]

    assert message.answers == [NO_COMMAND_MESSAGE]


@pytest.mark.asyncio
async def test_handler_replies_unavailable_when_backend_cannot_load(backend_factory) -> None:
    app = _make_app(backend_factory(load_failures=1))
    message = _FakeMessage(text="Charge battery 1")

    await handle_message(message, app)  # type: ignore[arg-type]

    assert message.answers == [UNAVAILABLE_REPLY]


@pytest.mark.asyncio
async def test_handler_replies_fallback_on_internal_error(fake_backend) -> None:
    app = _make_app(fake_backend)

    async def _broken(_result: Any) -> Any:
        raise RuntimeError("controller offline")

    app.executor = SimpleNamespace(execute=_broken)
    message = _FakeMessage(text="Store battery 4")

    await handle_message(message, app)  # type: ignore[arg-type]

    assert message.answers == [ERROR_REPLY]
