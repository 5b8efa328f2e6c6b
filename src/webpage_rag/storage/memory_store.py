"""Process-local vector store with exact cosine search (numpy)."""

from __future__ import annotations

import threading

import numpy as np

from webpage_rag.errors import DuplicatePageError, StorageError
from webpage_rag.models import Page, SimilarityMatch
from webpage_rag.storage.base import VectorStoreBase
from webpage_rag.vectors import clamp_similarity


class InMemoryVectorStore(VectorStoreBase):
    """Dict-backed store for local development and tests.

    Inserts hold a lock, so the URL uniqueness check and the write are
    atomic within the process. Reads take a snapshot under the same lock.
    """

    def __init__(self, collection_name: str = "webpages") -> None:
        super().__init__(collection_name)
        self._pages: dict[str, Page] = {}
        self._unit: dict[str, np.ndarray] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._pages)

    def find_by_url(self, url: str) -> Page | None:
        with self._lock:
            return self._pages.get(url)

    def insert(self, page: Page) -> None:
        vector = np.asarray(page.embedding, dtype=float)
        with self._lock:
            if page.url in self._pages:
                raise DuplicatePageError(page.url)
            if self._unit:
                dim = next(iter(self._unit.values())).shape
                if vector.shape != dim:
                    raise StorageError(
                        f"Embedding dimension {vector.shape[0]} does not match collection dimension {dim[0]}"
                    )
            norm = np.linalg.norm(vector)
            self._pages[page.url] = page
            self._unit[page.url] = vector / norm if norm > 0 else vector

    def similarity_search(
        self,
        query_embedding: list[float],
        *,
        k: int = 3,
        threshold: float = 0.75,
    ) -> list[SimilarityMatch]:
        with self._lock:
            entries = [(url, unit, self._pages[url].content) for url, unit in self._unit.items()]
        if not entries:
            return []
        query = np.asarray(query_embedding, dtype=float)
        norm = np.linalg.norm(query)
        if norm == 0:
            return []
        query = query / norm

        scored: list[tuple[float, str, str]] = []
        for url, unit, content in entries:
            if unit.shape != query.shape:
                raise StorageError(
                    f"Query dimension {query.shape[0]} does not match stored dimension {unit.shape[0]}"
                )
            score = float(np.dot(unit, query))
            if score >= threshold:
                scored.append((score, url, content))

        scored.sort(key=lambda item: item[0], reverse=True)
        return [
            SimilarityMatch(
                url=url,
                content=content,
                similarity=clamp_similarity(score),
            )
            for score, url, content in scored[:k]
        ]

    def health_check(self) -> bool:
        return True
