"""
Storage - persistence and similarity search for ingested pages.

This module wraps the vector database behind a clean interface so that
the pipelines never need to know which DB is backing them.

Public surface
--------------
- :class:`VectorStoreBase` - abstract backend (subclass for pgvector, etc.).
- :class:`ChromaVectorStore` - default Chroma backend.
- :class:`InMemoryVectorStore` - exact-search store for development and tests.
"""

from webpage_rag.storage.base import VectorStoreBase
from webpage_rag.storage.memory_store import InMemoryVectorStore

__all__ = [
    "ChromaVectorStore",
    "InMemoryVectorStore",
    "VectorStoreBase",
]


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import ChromaVectorStore to avoid pulling in chromadb at import time."""
    if name == "ChromaVectorStore":
        from webpage_rag.storage.chroma_store import ChromaVectorStore

        return ChromaVectorStore
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
