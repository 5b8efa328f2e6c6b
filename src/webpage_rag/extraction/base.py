"""Strategy interface for turning a fetched resource into plain text."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from urllib.parse import urlparse

from webpage_rag.errors import InvalidInputError

_ALLOWED_SCHEMES = ("http", "https")


def validate_url(url: object) -> str:
    """Return *url* unchanged if it is an absolute HTTP(S) URL.

    Raises
    ------
    InvalidInputError
        For non-strings, blanks, relative URLs, other schemes, or an
        unparseable host/port.
    """
    if not isinstance(url, str) or not url.strip():
        raise InvalidInputError("Invalid URL format")
    try:
        parsed = urlparse(url)
        # Accessing .port validates it; a bad port raises ValueError.
        parsed.port  # noqa: B018
    except ValueError as exc:
        raise InvalidInputError(f"Invalid URL format: {url!r}") from exc
    if parsed.scheme.lower() not in _ALLOWED_SCHEMES or not parsed.hostname:
        raise InvalidInputError(f"Invalid URL format: {url!r}")
    if any(ch.isspace() for ch in url):
        raise InvalidInputError(f"Invalid URL format: {url!r}")
    return url


@dataclass(frozen=True)
class FetchedPage:
    """A successful HTTP response reduced to what the strategies need."""

    url: str
    status: int
    content_type: str
    body: bytes

    @property
    def media_type(self) -> str:
        """``content_type`` without parameters, lower-cased."""
        return self.content_type.split(";", 1)[0].strip().lower()

    @property
    def charset(self) -> str | None:
        for param in self.content_type.split(";")[1:]:
            key, _, value = param.partition("=")
            if key.strip().lower() == "charset" and value.strip():
                return value.strip().strip('"')
        return None

    @property
    def text(self) -> str:
        try:
            return self.body.decode(self.charset or "utf-8", errors="replace")
        except LookupError:
            return self.body.decode("utf-8", errors="replace")


class ExtractionStrategy(ABC):
    """One way of extracting text from a page.

    Subclasses declare which media types they handle through
    :meth:`supports`; :class:`~webpage_rag.extraction.extractor.ContentExtractor`
    dispatches on that.
    """

    name: str = "strategy"

    @abstractmethod
    def supports(self, media_type: str) -> bool:
        """Return ``True`` when this strategy can handle *media_type*."""
        ...

    @abstractmethod
    def extract(self, source: FetchedPage) -> str:
        """Return the text of *source*.

        Raises a subclass of :class:`~webpage_rag.errors.WebpageRagError`
        when nothing usable can be extracted.
        """
        ...
