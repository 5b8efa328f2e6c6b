"""
Extraction - fetch a URL and turn it into plain text.

Public surface
--------------
- :class:`ContentExtractor` - fetch + content-type dispatch + optional fallback.
- :class:`ExtractionStrategy` - strategy interface.
- :class:`StaticTextExtractor`, :class:`StaticHtmlExtractor` - requests/BeautifulSoup path.
- :class:`RenderedDomExtractor` - headless-browser path (imported lazily, pulls in Playwright).
- :func:`validate_url` - absolute HTTP(S) URL check.
"""

from webpage_rag.extraction.base import ExtractionStrategy, FetchedPage, validate_url
from webpage_rag.extraction.static import StaticHtmlExtractor, StaticTextExtractor

__all__ = [
    "ContentExtractor",
    "ExtractionStrategy",
    "FetchedPage",
    "RenderedDomExtractor",
    "StaticHtmlExtractor",
    "StaticTextExtractor",
    "validate_url",
]


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import the browser-backed classes to avoid loading Playwright at import time."""
    if name == "ContentExtractor":
        from webpage_rag.extraction.extractor import ContentExtractor

        return ContentExtractor
    if name == "RenderedDomExtractor":
        from webpage_rag.extraction.rendered import RenderedDomExtractor

        return RenderedDomExtractor
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
