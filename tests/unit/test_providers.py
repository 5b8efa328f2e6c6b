"""Unit tests for the settings-driven collaborator factories."""

from __future__ import annotations

from unittest.mock import patch

from webpage_rag import providers
from webpage_rag.config import Settings
from webpage_rag.embedding import HttpEmbedder, HuggingFaceEmbedder
from webpage_rag.extraction.static import StaticHtmlExtractor
from webpage_rag.storage.memory_store import InMemoryVectorStore


def test_memory_backend_store_is_built_once() -> None:
    with patch.object(providers, "settings", Settings(vector_store_backend="memory")):
        first = providers.get_vector_store()
        assert isinstance(first, InMemoryVectorStore)
        assert providers.get_vector_store() is first


def test_embedder_backend_selection() -> None:
    with patch.object(providers, "settings", Settings(embedding_backend="huggingface", embedding_dimension=384)):
        embedder = providers.get_embedder()
    assert isinstance(embedder, HuggingFaceEmbedder)
    assert embedder.dimension == 384

    providers.get_embedder.cache_clear()
    cfg = Settings(embedding_backend="http", embedding_endpoint="http://embed.local/api/embed")
    with patch.object(providers, "settings", cfg):
        assert isinstance(providers.get_embedder(), HttpEmbedder)


def test_ingestion_and_display_extractors_differ_in_html_mode() -> None:
    with patch.object(providers, "settings", Settings(html_mode="text", display_html_mode="raw")):
        ingest_html = providers.get_extractor().select("text/html")
        display_html = providers.get_display_extractor().select("text/html")
    assert isinstance(ingest_html, StaticHtmlExtractor)
    assert (ingest_html.mode, display_html.mode) == ("text", "raw")


def test_pipelines_share_configured_limits() -> None:
    cfg = Settings(vector_store_backend="memory", embed_char_limit=500, match_count=5, match_threshold=0.6)
    with patch.object(providers, "settings", cfg):
        ingestion = providers.get_ingestion_pipeline()
        retrieval = providers.get_retrieval_pipeline()
    assert ingestion.embed_char_limit == 500
    assert (retrieval.default_k, retrieval.default_threshold) == (5, 0.6)
    assert ingestion.store is retrieval.store
