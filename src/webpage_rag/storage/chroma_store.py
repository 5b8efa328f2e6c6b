"""Chroma implementation of the vector-store abstraction."""

from __future__ import annotations

import logging
import uuid
from typing import Any

import chromadb
from chromadb.errors import DuplicateIDError

from webpage_rag.config import settings
from webpage_rag.errors import DuplicatePageError, StorageError
from webpage_rag.models import Page, SimilarityMatch
from webpage_rag.storage.base import VectorStoreBase
from webpage_rag.vectors import clamp_similarity

logger = logging.getLogger(__name__)


def _first(results: dict[str, Any], key: str) -> list[Any]:
    """Unwrap the per-query list Chroma nests query results in."""
    outer = results.get(key)
    if outer is None or len(outer) == 0:
        return []
    return list(outer[0])


class ChromaVectorStore(VectorStoreBase):
    """Chroma-backed page store using the cosine HNSW space.

    The page URL is the Chroma record id, so the collection itself keeps
    at most one record per URL.

    Parameters
    ----------
    collection_name:
        Name of the Chroma collection.
    host:
        Chroma server hostname.
    port:
        Chroma server port.
    client:
        Pre-built Chroma client (``host``/``port`` are ignored when given).
    """

    def __init__(
        self,
        collection_name: str = settings.chroma_collection,
        *,
        host: str = settings.chroma_host,
        port: int = settings.chroma_port,
        client: Any = None,
    ) -> None:
        super().__init__(collection_name)
        try:
            self._client = client if client is not None else chromadb.HttpClient(host=host, port=port)
            self._collection = self._client.get_or_create_collection(
                name=collection_name,
                metadata={"hnsw:space": "cosine"},
            )
        except Exception as exc:
            raise StorageError(f"Could not open Chroma collection {collection_name!r}: {exc}") from exc

    # -- VectorStoreBase overrides --------------------------------------------

    def find_by_url(self, url: str) -> Page | None:
        try:
            result = self._collection.get(ids=[url], include=["documents", "embeddings"])
        except Exception as exc:
            raise StorageError(f"Database error looking up {url}: {exc}") from exc

        ids = result.get("ids") or []
        if len(ids) == 0:
            return None
        documents = result.get("documents")
        embeddings = result.get("embeddings")
        embedding = embeddings[0] if embeddings is not None and len(embeddings) else []
        return Page(
            url=ids[0],
            content=(documents[0] if documents else "") or "",
            embedding=[float(v) for v in embedding],
        )

    def insert(self, page: Page) -> None:
        # Chroma silently ignores an add for an id it already holds, so each
        # write is tagged and read back to learn whether it won.
        write_id = uuid.uuid4().hex
        try:
            self._collection.add(
                ids=[page.url],
                embeddings=[page.embedding],
                documents=[page.content],
                metadatas=[{"url": page.url, "content_chars": len(page.content), "write_id": write_id}],
            )
            stored = self._collection.get(ids=[page.url], include=["metadatas"])
        except DuplicateIDError as exc:
            raise DuplicatePageError(page.url) from exc
        except Exception as exc:
            raise StorageError(f"Vector storage failed for {page.url}: {exc}") from exc

        metadatas = stored.get("metadatas") or []
        if len(metadatas) == 0:
            raise StorageError(f"Vector storage failed for {page.url}: record missing after write")
        if (metadatas[0] or {}).get("write_id") != write_id:
            logger.info("Page %s was already stored; keeping the existing record", page.url)
            raise DuplicatePageError(page.url)

    def similarity_search(
        self,
        query_embedding: list[float],
        *,
        k: int = 3,
        threshold: float = 0.75,
    ) -> list[SimilarityMatch]:
        try:
            count = self._collection.count()
            if count == 0:
                return []
            results = self._collection.query(
                query_embeddings=[query_embedding],
                n_results=min(k, count),
                include=["documents", "metadatas", "distances"],
            )
        except Exception as exc:
            raise StorageError(f"Search error: {exc}") from exc

        matches: list[SimilarityMatch] = []
        for page_id, content, dist in zip(
            _first(results, "ids"), _first(results, "documents"), _first(results, "distances")
        ):
            # Cosine space: distance = 1 - cosine similarity.
            similarity = 1.0 - float(dist)
            if similarity < threshold:
                continue
            matches.append(
                SimilarityMatch(url=page_id, content=content or "", similarity=clamp_similarity(similarity))
            )
        matches.sort(key=lambda m: m.similarity, reverse=True)
        return matches

    def health_check(self) -> bool:
        try:
            self._client.heartbeat()
            return True
        except Exception:
            logger.warning("Chroma health-check failed", exc_info=True)
            return False
