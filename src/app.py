"""Application composition root.

This module wires together configuration, the embedding backend, the command parser and the
command executor for the bot and CLI runtimes.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.config.settings import Settings
from src.intent.backend import EmbeddingBackend, SentenceTransformerBackend
from src.intent.embedder import Embedder
from src.intent.executor import CommandExecutor
from src.intent.parser import CommandParser


@dataclass(frozen=True)
class App:
    """Shared application dependencies for handlers."""

    settings: Settings
    parser: CommandParser
    executor: CommandExecutor


def create_backend(settings: Settings) -> EmbeddingBackend:
    """Create the configured embedding backend (the model is not loaded yet)."""

    return SentenceTransformerBackend(
        settings.embedding_model,
        device=settings.embedding_device,
        local_files_only=settings.embedding_local_files_only,
    )


def create_app(settings: Settings, backend: EmbeddingBackend | None = None) -> App:
    """Create the application container.

    Note:
        The embedding model is not loaded. Call `await app.parser.init()` at startup.
    """

    embedder = Embedder(backend or create_backend(settings))
    parser = CommandParser(
        embedder,
        threshold=settings.match_threshold,
        vocabulary=settings.vocabulary(),
    )
    return App(settings=settings, parser=parser, executor=CommandExecutor())
