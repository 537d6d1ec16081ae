"""Embedding backends.

A backend turns text into a raw tensor (`Flat`, `Nested` or `RowMajor2D`). Shape reduction and
normalization are done by the `Embedder` adapter, so backends declare their output shape explicitly
and never pool or normalize themselves.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any

from src.intent.vectors import RawTensor, RowMajor2D

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "sentence-transformers/paraphrase-multilingual-MiniLM-L12-v2"


class EmbeddingBackend(ABC):
    """Abstract text embedding backend.

    Lifecycle:
        1. Create instance
        2. `await load()` once (may be slow: model download, weights load)
        3. `await embed(text)` as needed
    """

    @abstractmethod
    async def load(self) -> None:
        """Load the model. Raises on any failure (missing dependency, model not found, ...)."""

    @abstractmethod
    async def embed(self, text: str) -> RawTensor:
        """Embed one text and return the raw model output."""

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Human-readable model identifier."""


class SentenceTransformerBackend(EmbeddingBackend):
    """Local sentence-transformers model returning per-token embeddings.

    The model and every encode call run in a worker thread so the event loop stays responsive.
    Per-token output (`[seq_len, hidden]`) is returned as `RowMajor2D` and mean-pooled by the
    adapter.
    """

    def __init__(
            self,
            model_name: str = DEFAULT_MODEL,
            *,
            device: str = "cpu",
            local_files_only: bool = False,
    ) -> None:
        self._model_name = model_name
        self._device = device
        self._local_files_only = local_files_only
        self._model: Any | None = None

    @property
    def model_name(self) -> str:
        return self._model_name

    def _load_model(self) -> Any:
        from sentence_transformers import SentenceTransformer

        return SentenceTransformer(
            self._model_name,
            device=self._device,
            local_files_only=self._local_files_only,
        )

    async def load(self) -> None:
        if self._model is not None:
            return
        logger.info("loading embedding model=%s device=%s", self._model_name, self._device)
        self._model = await asyncio.to_thread(self._load_model)
        logger.info("embedding model ready model=%s", self._model_name)

    @staticmethod
    def _encode(model: Any, text: str) -> RowMajor2D:
        tokens = model.encode(
            text,
            output_value="token_embeddings",
            show_progress_bar=False,
        )
        matrix = tokens.detach().cpu().numpy()
        rows, cols = matrix.shape
        return RowMajor2D(data=matrix.reshape(-1), rows=rows, cols=cols)

    async def embed(self, text: str) -> RawTensor:
        if self._model is None:
            raise RuntimeError("embedding model is not loaded")
        return await asyncio.to_thread(self._encode, self._model, text)
