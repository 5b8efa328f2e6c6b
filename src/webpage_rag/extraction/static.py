"""Static extractors working on an already-downloaded response body."""

from __future__ import annotations

import logging
from typing import Literal

from bs4 import BeautifulSoup

from webpage_rag.errors import EmptyContentError, ExtractionQualityError
from webpage_rag.extraction.base import ExtractionStrategy, FetchedPage
from webpage_rag.vectors import truncate_bytes

logger = logging.getLogger(__name__)

# Elements whose text is never part of the visible page content.
NON_CONTENT_TAGS = ["script", "style", "meta", "link", "head"]

HTML_MEDIA_TYPES = ("text/html", "application/xhtml+xml")


def collapse_whitespace(text: str) -> str:
    return " ".join(text.split())


class StaticTextExtractor(ExtractionStrategy):
    """Return a ``text/plain`` body as-is, capped at *max_bytes*."""

    name = "static-text"

    def __init__(self, max_bytes: int = 8192) -> None:
        self.max_bytes = max_bytes

    def supports(self, media_type: str) -> bool:
        return media_type == "text/plain"

    def extract(self, source: FetchedPage) -> str:
        text = truncate_bytes(source.text, self.max_bytes)
        if not text.strip():
            raise EmptyContentError(f"Scraped content is empty for: {source.url}")
        return text


class StaticHtmlExtractor(ExtractionStrategy):
    """Parse HTML with BeautifulSoup and return its visible body text.

    Parameters
    ----------
    mode:
        ``"text"`` returns the body text joined with single spaces;
        ``"raw"`` returns the whole HTML document once the body text
        check has passed (used when the page is shown to a user).
    """

    name = "static-html"

    def __init__(self, mode: Literal["text", "raw"] = "text") -> None:
        if mode not in ("text", "raw"):
            raise ValueError(f"Unsupported html mode: {mode!r}")
        self.mode = mode

    def supports(self, media_type: str) -> bool:
        return media_type in HTML_MEDIA_TYPES

    def extract(self, source: FetchedPage) -> str:
        html = source.text
        text = self.visible_text(html)
        if not text:
            raise ExtractionQualityError(
                f"Static parsing found no text in {source.url}; "
                "a rendering extractor may be required"
            )
        logger.debug("Extracted %d chars of body text from %s", len(text), source.url)
        return html if self.mode == "raw" else text

    @staticmethod
    def visible_text(html: str) -> str:
        soup = BeautifulSoup(html, "html.parser")
        for tag in soup(NON_CONTENT_TAGS):
            tag.decompose()
        root = soup.body or soup
        return collapse_whitespace(root.get_text(separator=" ", strip=True))
