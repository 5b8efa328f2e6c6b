"""Embedding providers - single place to swap the text → vector backend.

Two backends ship:

1. **HuggingFace** (default) - a local sentence-transformer model via
   ``langchain-huggingface``.
2. **HTTP** - a remote endpoint that answers ``POST {"text": ...}`` with
   ``{"embedding_values": [...]}``.

Whatever the backend returns passes through
:func:`~webpage_rag.vectors.coerce_embedding` before anyone else sees it.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

import requests

from webpage_rag.errors import InvalidEmbeddingError, InvalidInputError
from webpage_rag.vectors import coerce_embedding

if TYPE_CHECKING:
    from langchain_huggingface import HuggingFaceEmbeddings

logger = logging.getLogger(__name__)


class Embedder(ABC):
    """Turns text into a fixed-length vector.

    Parameters
    ----------
    dimension:
        Expected vector length.  ``None`` accepts whatever length the
        backend produces (still validated element by element).
    """

    def __init__(self, dimension: int | None = None) -> None:
        self.dimension = dimension

    def embed(self, text: str) -> list[float]:
        """Embed *text* and return a validated vector.

        Raises
        ------
        InvalidInputError
            If *text* is empty or whitespace.
        InvalidEmbeddingError
            If the backend fails or returns anything but finite numbers.
        """
        if not isinstance(text, str) or not text.strip():
            raise InvalidInputError("Text to embed is required")
        raw = self._embed_raw(text)
        return coerce_embedding(raw, dimension=self.dimension)

    @abstractmethod
    def _embed_raw(self, text: str) -> Any:
        """Call the backend; the return value is validated by :meth:`embed`."""
        ...


class HuggingFaceEmbedder(Embedder):
    """Sentence-transformer embeddings, loaded on first use."""

    def __init__(self, model_name: str, *, dimension: int | None = None) -> None:
        super().__init__(dimension)
        self.model_name = model_name
        self._model: HuggingFaceEmbeddings | None = None

    def _embed_raw(self, text: str) -> Any:
        if self._model is None:
            from langchain_huggingface import HuggingFaceEmbeddings

            logger.info("Loading embedding model %s", self.model_name)
            self._model = HuggingFaceEmbeddings(model_name=self.model_name)
        try:
            return self._model.embed_query(text)
        except Exception as exc:
            raise InvalidEmbeddingError(f"Error generating embeddings: {exc}") from exc


class HttpEmbedder(Embedder):
    """Client for a remote ``embed`` endpoint."""

    def __init__(self, endpoint: str, *, timeout: float = 30.0, dimension: int | None = None) -> None:
        super().__init__(dimension)
        if not endpoint:
            raise ValueError("HttpEmbedder requires an endpoint URL")
        self.endpoint = endpoint
        self.timeout = timeout

    def _embed_raw(self, text: str) -> Any:
        logger.debug("Sending text to %s: %s", self.endpoint, text[:200])
        try:
            resp = requests.post(self.endpoint, json={"text": text}, timeout=self.timeout)
        except requests.RequestException as exc:
            raise InvalidEmbeddingError(f"Failed to generate embedding: {exc}") from exc
        if not resp.ok:
            raise InvalidEmbeddingError(f"Failed to generate embedding: status {resp.status_code}")

        try:
            data = resp.json()
        except ValueError as exc:
            raise InvalidEmbeddingError("Embedding response is not valid JSON") from exc
        if not isinstance(data, dict) or not data:
            raise InvalidEmbeddingError("Either the API response is empty or not of object (json) type")
        values = data.get("embedding_values")
        if not isinstance(values, list):
            raise InvalidEmbeddingError("embedding_values field is missing or not an array in API response")
        return values
