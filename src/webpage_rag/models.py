"""Domain models for stored pages, retrieval matches, and pipeline results."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class Page(BaseModel):
    """One ingested web page.

    Attributes
    ----------
    url:
        Unique key; compared by exact string equality.
    content:
        The full extracted text (never truncated).
    embedding:
        Vector of the (possibly truncated) text sent to the embedder.
    """

    model_config = ConfigDict(frozen=True)

    url: str
    content: str
    embedding: list[float]

    @property
    def dimension(self) -> int:
        return len(self.embedding)


class SimilarityMatch(BaseModel):
    """A stored page returned by a similarity search, with its cosine score."""

    url: str
    content: str
    similarity: float = Field(ge=0.0, le=1.0)

    def __str__(self) -> str:  # noqa: D105
        return f"[{self.url} {self.similarity:.2f}] {self.content[:120]}…"


class IngestResult(BaseModel):
    """Outcome of one ``IngestionPipeline.ingest`` call."""

    status: Literal["stored", "already_exists"]
    url: str
    message: str
    ingested_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def stored(cls, url: str) -> IngestResult:
        return cls(status="stored", url=url, message="Scraped, embedded and stored successfully")

    @classmethod
    def already_exists(cls, url: str) -> IngestResult:
        return cls(status="already_exists", url=url, message="URL already exists in the database")


class ChatTurn(BaseModel):
    """A single message of a chat session (held by the UI, not the core)."""

    role: Literal["user", "assistant"]
    text: str
