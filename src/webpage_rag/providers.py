"""Process-wide collaborators, built once from settings.

The serving layer, the KServe runtime, and the KFP component all obtain
their store / embedder / generator here and pass them explicitly into
the pipelines.  Each getter is cached, so there is one instance per
process.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from webpage_rag.config import settings
from webpage_rag.embedding import Embedder, HttpEmbedder, HuggingFaceEmbedder
from webpage_rag.generation import ChatModelGenerator, Generator
from webpage_rag.pipeline import ConversationOrchestrator, IngestionPipeline, RetrievalPipeline
from webpage_rag.storage.base import VectorStoreBase

if TYPE_CHECKING:
    from webpage_rag.extraction.extractor import ContentExtractor

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_vector_store() -> VectorStoreBase:
    if settings.vector_store_backend == "memory":
        from webpage_rag.storage.memory_store import InMemoryVectorStore

        logger.warning("Using the in-memory vector store; pages are lost on restart")
        return InMemoryVectorStore(settings.chroma_collection)

    from webpage_rag.storage.chroma_store import ChromaVectorStore

    return ChromaVectorStore(
        settings.chroma_collection,
        host=settings.chroma_host,
        port=settings.chroma_port,
    )


@lru_cache(maxsize=1)
def get_embedder() -> Embedder:
    if settings.embedding_backend == "http":
        return HttpEmbedder(
            settings.embedding_endpoint,
            timeout=settings.request_timeout,
            dimension=settings.embedding_dimension,
        )
    return HuggingFaceEmbedder(settings.embedding_model, dimension=settings.embedding_dimension)


@lru_cache(maxsize=1)
def get_generator() -> Generator:
    return ChatModelGenerator(settings=settings)


@lru_cache(maxsize=1)
def get_extractor() -> ContentExtractor:
    """Extractor used for ingestion (``settings.html_mode``)."""
    from webpage_rag.extraction.extractor import ContentExtractor

    return ContentExtractor.from_settings(settings)


@lru_cache(maxsize=1)
def get_display_extractor() -> ContentExtractor:
    """Extractor for showing a page to the user (``settings.display_html_mode``)."""
    from webpage_rag.extraction.extractor import ContentExtractor

    return ContentExtractor.from_settings(settings, html_mode=settings.display_html_mode)


def get_ingestion_pipeline() -> IngestionPipeline:
    return IngestionPipeline(
        get_extractor(),
        get_embedder(),
        get_vector_store(),
        embed_char_limit=settings.embed_char_limit,
    )


def get_retrieval_pipeline() -> RetrievalPipeline:
    return RetrievalPipeline(
        get_embedder(),
        get_vector_store(),
        default_k=settings.match_count,
        default_threshold=settings.match_threshold,
    )


def get_orchestrator() -> ConversationOrchestrator:
    return ConversationOrchestrator(
        get_retrieval_pipeline(),
        get_generator(),
        placeholder=settings.empty_reply_placeholder,
    )
