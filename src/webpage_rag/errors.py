"""Typed failures raised by every pipeline stage.

Each kind carries the HTTP-equivalent ``status_code`` the serving layer
uses when translating it into a response.  Adapters wrap third-party
exceptions into one of these with ``raise ... from exc`` so callers only
ever have to handle this hierarchy.
"""

from __future__ import annotations


class WebpageRagError(Exception):
    """Base class for all errors surfaced to the boundary layer."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(WebpageRagError):
    """Malformed or missing caller input (URL, query, message)."""

    status_code = 400


class UnreachableResourceError(WebpageRagError):
    """The target URL could not be fetched.

    ``status`` is the remote HTTP status when a response was received and
    ``None`` for connection-level failures.
    """

    status_code = 502

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status
        if status == 404:
            self.status_code = 404


class UnsupportedContentTypeError(WebpageRagError):
    status_code = 415

    def __init__(self, content_type: str) -> None:
        super().__init__(f"Unsupported content type: {content_type or '<missing>'}")
        self.content_type = content_type


class EmptyContentError(WebpageRagError):
    status_code = 422


class ExtractionQualityError(WebpageRagError):
    """Static parsing produced no text; a rendering extractor is needed."""

    status_code = 422


class InvalidEmbeddingError(WebpageRagError):
    status_code = 502


class StorageError(WebpageRagError):
    status_code = 503


class DuplicatePageError(StorageError):
    """The store's uniqueness constraint rejected a second write for a URL."""

    status_code = 409

    def __init__(self, url: str) -> None:
        super().__init__(f"A page for {url!r} is already stored")
        self.url = url


class GenerationError(WebpageRagError):
    status_code = 502
