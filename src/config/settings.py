"""Environment configuration and validation.

This module defines strongly-typed application settings loaded from environment variables
(optionally via a local `.env` file): the embedding model, the rejection threshold and the series
vocabulary are configuration, not code.
"""

from __future__ import annotations

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.intent.backend import DEFAULT_MODEL
from src.intent.dictionaries import SERIES_VOCABULARY, build_vocabulary
from src.intent.matcher import DEFAULT_THRESHOLD


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    telegram_bot_token: str | None = Field(default=None, alias="TELEGRAM_BOT_TOKEN")

    embedding_model: str = Field(default=DEFAULT_MODEL, alias="EMBEDDING_MODEL")
    embedding_device: str = Field(default="cpu", alias="EMBEDDING_DEVICE")
    embedding_local_files_only: bool = Field(default=False, alias="EMBEDDING_LOCAL_FILES_ONLY")

    match_threshold: float = Field(default=DEFAULT_THRESHOLD, alias="MATCH_THRESHOLD")
    series_vocabulary: str | None = Field(default=None, alias="SERIES_VOCABULARY")

    @field_validator("match_threshold")
    @classmethod
    def validate_threshold_range(cls, value: float) -> float:
        """Validate that the threshold is a reachable cosine similarity (`-1 <= t <= 1`)."""

        if not -1.0 <= value <= 1.0:
            raise ValueError("MATCH_THRESHOLD must be within [-1, 1]")
        return value

    @field_validator("embedding_model")
    @classmethod
    def validate_model_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("EMBEDDING_MODEL must not be empty")
        return value

    def vocabulary(self) -> frozenset[str]:
        """Series qualifier vocabulary (comma-separated override or the built-in one)."""

        if not self.series_vocabulary:
            return SERIES_VOCABULARY
        vocabulary = build_vocabulary(self.series_vocabulary.split(","))
        return vocabulary or SERIES_VOCABULARY


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Raises:
        RuntimeError: If the environment configuration is missing or invalid.
    """

    try:
        return Settings()
    except ValidationError as exc:
        # Raising here is fine: caller can decide how to handle startup errors.
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc
