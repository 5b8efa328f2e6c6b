"""Ingestion: check for duplicate → extract → truncate → embed → store."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from webpage_rag.errors import DuplicatePageError
from webpage_rag.extraction.base import validate_url
from webpage_rag.models import IngestResult, Page

if TYPE_CHECKING:
    from webpage_rag.embedding import Embedder
    from webpage_rag.extraction.extractor import ContentExtractor
    from webpage_rag.storage.base import VectorStoreBase

logger = logging.getLogger(__name__)

DEFAULT_EMBED_CHAR_LIMIT = 9000


class IngestionPipeline:
    """Write-once ingestion of a single URL.

    A URL already present in the store is never re-scraped, re-embedded,
    or updated.  The full extracted text is stored, but only its first
    *embed_char_limit* characters are sent to the embedder.

    The existence check and the insert are two separate store calls, so
    two concurrent ingestions of a new URL can both pass the check.  The
    store's uniqueness constraint decides; a
    :class:`~webpage_rag.errors.DuplicatePageError` from ``insert`` is
    reported as ``already_exists``.
    """

    def __init__(
        self,
        extractor: ContentExtractor,
        embedder: Embedder,
        store: VectorStoreBase,
        *,
        embed_char_limit: int = DEFAULT_EMBED_CHAR_LIMIT,
    ) -> None:
        self.extractor = extractor
        self.embedder = embedder
        self.store = store
        self.embed_char_limit = embed_char_limit

    def ingest(self, url: str) -> IngestResult:
        """Ingest *url*; see the class docstring for the guarantees.

        Raises
        ------
        InvalidInputError
            Malformed URL.
        StorageError
            Lookup or insert failure.
        UnreachableResourceError, UnsupportedContentTypeError, EmptyContentError, ExtractionQualityError
            Propagated unchanged from the extractor.
        InvalidEmbeddingError
            Malformed embedding; nothing is stored.
        """
        validate_url(url)

        if self.store.find_by_url(url) is not None:
            logger.info("Skipping %s: already stored", url)
            return IngestResult.already_exists(url)

        content = self.extractor.extract(url)

        embed_input = content[: self.embed_char_limit]
        if len(embed_input) < len(content):
            logger.info(
                "Truncating %s from %d to %d chars for embedding",
                url, len(content), len(embed_input),
            )
        embedding = self.embedder.embed(embed_input)

        try:
            self.store.insert(Page(url=url, content=content, embedding=embedding))
        except DuplicatePageError:
            logger.info("Concurrent ingestion of %s won the write; keeping the stored page", url)
            return IngestResult.already_exists(url)

        logger.info("Stored %s (%d chars, dim=%d)", url, len(content), len(embedding))
        return IngestResult.stored(url)
