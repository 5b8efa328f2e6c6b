"""Fetch a URL and dispatch to the extraction strategy for its content type."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

import requests

from webpage_rag.errors import ExtractionQualityError, UnreachableResourceError, UnsupportedContentTypeError
from webpage_rag.extraction.base import ExtractionStrategy, FetchedPage, validate_url
from webpage_rag.extraction.rendered import RenderedDomExtractor
from webpage_rag.extraction.static import StaticHtmlExtractor, StaticTextExtractor

if TYPE_CHECKING:
    from webpage_rag.config import Settings

logger = logging.getLogger(__name__)


class ContentExtractor:
    """``extract(url) -> text`` with content-type strategy dispatch.

    Parameters
    ----------
    strategies:
        Ordered strategies; the first whose ``supports`` accepts the
        response media type wins.
    renderer:
        Rendering strategy used by :meth:`extract_rendered` and, when
        *auto_fallback* is set, after an :class:`ExtractionQualityError`.
    auto_fallback:
        Chain to *renderer* automatically instead of surfacing the
        quality error to the caller.
    timeout:
        HTTP timeout in seconds for the initial fetch.
    user_agent:
        ``User-Agent`` header for the initial fetch.
    """

    def __init__(
        self,
        strategies: Sequence[ExtractionStrategy] | None = None,
        *,
        renderer: RenderedDomExtractor | None = None,
        auto_fallback: bool = False,
        timeout: float = 30.0,
        user_agent: str | None = None,
    ) -> None:
        self.strategies = list(strategies) if strategies is not None else [
            StaticTextExtractor(),
            StaticHtmlExtractor(),
        ]
        self.renderer = renderer or RenderedDomExtractor(user_agent=user_agent)
        self.auto_fallback = auto_fallback
        self.timeout = timeout
        self.user_agent = user_agent

    @classmethod
    def from_settings(cls, settings: Settings, *, html_mode: str | None = None) -> ContentExtractor:
        """Build an extractor; *html_mode* overrides ``settings.html_mode``."""
        return cls(
            [
                StaticTextExtractor(max_bytes=settings.plain_text_max_bytes),
                StaticHtmlExtractor(mode=html_mode or settings.html_mode),
            ],
            renderer=RenderedDomExtractor(
                max_bytes=settings.plain_text_max_bytes,
                timeout_ms=settings.browser_timeout_ms,
                user_agent=settings.user_agent,
            ),
            auto_fallback=settings.rendered_fallback,
            timeout=settings.request_timeout,
            user_agent=settings.user_agent,
        )

    # -- public API -----------------------------------------------------------

    def extract(self, url: str) -> str:
        """Return the text content of *url*.

        Raises
        ------
        InvalidInputError
            Before any network call, when *url* is not absolute HTTP(S).
        UnreachableResourceError
            On connection failure or a non-success status.
        UnsupportedContentTypeError
            When no strategy handles the response media type.
        EmptyContentError, ExtractionQualityError
            When the selected strategy finds nothing to return.
        """
        validate_url(url)
        page = self.fetch(url)
        strategy = self.select(page.media_type)
        try:
            return strategy.extract(page)
        except ExtractionQualityError:
            if not self.auto_fallback:
                raise
            logger.warning("Static extraction failed for %s, switching to %s", url, self.renderer.name)
            return self.renderer.extract(page)

    def extract_rendered(self, url: str) -> str:
        """Skip static parsing and extract *url* with the rendering strategy."""
        validate_url(url)
        return self.renderer.render(url)

    def select(self, media_type: str) -> ExtractionStrategy:
        for strategy in self.strategies:
            if strategy.supports(media_type):
                return strategy
        raise UnsupportedContentTypeError(media_type)

    def fetch(self, url: str) -> FetchedPage:
        headers = {"User-Agent": self.user_agent} if self.user_agent else {}
        try:
            resp = requests.get(url, headers=headers, timeout=self.timeout)
        except requests.RequestException as exc:
            raise UnreachableResourceError(f"Failed to fetch the URL: {url}: {exc}") from exc

        if not resp.ok:
            raise UnreachableResourceError(
                f"Failed to fetch the URL: {url} with status: {resp.status_code}",
                status=resp.status_code,
            )
        return FetchedPage(
            url=url,
            status=resp.status_code,
            content_type=resp.headers.get("content-type", ""),
            body=resp.content,
        )
