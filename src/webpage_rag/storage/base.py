"""Abstract base class for vector-store backends.

Adding a new backend (pgvector, Qdrant, …) only requires subclassing
:class:`VectorStoreBase` and implementing the abstract methods.  The
pipelines are backend-agnostic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from webpage_rag.models import Page, SimilarityMatch


class VectorStoreBase(ABC):
    """Backend-agnostic store of ``(url, content, embedding)`` records.

    Implementations must raise :class:`~webpage_rag.errors.StorageError`
    for backend failures, and :class:`~webpage_rag.errors.DuplicatePageError`
    when the URL uniqueness constraint rejects an insert.

    Parameters
    ----------
    collection_name:
        Logical name of the table / collection.
    """

    def __init__(self, collection_name: str) -> None:
        self.collection_name = collection_name

    # -- required overrides ---------------------------------------------------

    @abstractmethod
    def find_by_url(self, url: str) -> Page | None:
        """Return the page stored under exactly *url*, or ``None``."""
        ...

    @abstractmethod
    def insert(self, page: Page) -> None:
        """Persist *page* in one write.  Never updates an existing URL."""
        ...

    @abstractmethod
    def similarity_search(
        self,
        query_embedding: list[float],
        *,
        k: int = 3,
        threshold: float = 0.75,
    ) -> list[SimilarityMatch]:
        """Return up to *k* pages with cosine similarity ``>= threshold``.

        Results are ordered by similarity, highest first.
        """
        ...

    @abstractmethod
    def health_check(self) -> bool:
        """Return ``True`` when the backend is reachable and ready."""
        ...
