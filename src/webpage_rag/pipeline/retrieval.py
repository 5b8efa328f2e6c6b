"""Retrieval: embed the query → similarity search → shape results."""

from __future__ import annotations

import logging

from webpage_rag.embedding import Embedder
from webpage_rag.errors import InvalidInputError
from webpage_rag.models import SimilarityMatch
from webpage_rag.storage.base import VectorStoreBase

logger = logging.getLogger(__name__)


class RetrievalPipeline:
    """Threshold-filtered top-*k* search over ingested pages.

    Parameters
    ----------
    embedder:
        Embeds the query text.
    store:
        Backend queried with the query vector.
    default_k:
        Result count used when :meth:`retrieve` is called without *k*.
    default_threshold:
        Minimum cosine similarity used when no *threshold* is passed.
    """

    def __init__(
        self,
        embedder: Embedder,
        store: VectorStoreBase,
        *,
        default_k: int = 3,
        default_threshold: float = 0.75,
    ) -> None:
        self.embedder = embedder
        self.store = store
        self.default_k = default_k
        self.default_threshold = default_threshold

    def retrieve(
        self,
        query_text: str,
        *,
        k: int | None = None,
        threshold: float | None = None,
    ) -> list[SimilarityMatch]:
        """Return up to *k* matches with ``similarity >= threshold``, best first.

        An empty list means nothing was relevant enough; it is not an error.
        """
        if not isinstance(query_text, str) or not query_text.strip():
            raise InvalidInputError("Query is required")
        k = self.default_k if k is None else k
        threshold = self.default_threshold if threshold is None else threshold
        if k < 1:
            raise InvalidInputError(f"k must be at least 1, got {k}")
        if not 0.0 <= threshold <= 1.0:
            raise InvalidInputError(f"threshold must be within [0, 1], got {threshold}")

        query_embedding = self.embedder.embed(query_text)
        hits = self.store.similarity_search(query_embedding, k=k, threshold=threshold)

        # Backends may be approximate; the contract is enforced here.
        matches = sorted(
            (m for m in hits if m.similarity >= threshold),
            key=lambda m: m.similarity,
            reverse=True,
        )[:k]
        logger.debug("Retrieved %d matches (k=%d, threshold=%.2f)", len(matches), k, threshold)
        return matches
