"""Headless-browser extraction for pages that only render client-side.

A fresh Chromium process is launched for every call and torn down on
every exit path; nothing is shared between calls.
"""

from __future__ import annotations

import logging

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from playwright.sync_api import sync_playwright

from webpage_rag.errors import EmptyContentError, UnreachableResourceError
from webpage_rag.extraction.base import ExtractionStrategy, FetchedPage
from webpage_rag.extraction.static import HTML_MEDIA_TYPES, NON_CONTENT_TAGS, collapse_whitespace
from webpage_rag.vectors import truncate_bytes

logger = logging.getLogger(__name__)

# Collects every text node outside the skipped elements, in document order.
_COLLECT_TEXT_JS = """
(skipTags) => {
  const skip = new Set(skipTags.map((t) => t.toUpperCase()));
  const walker = document.createTreeWalker(document.documentElement, NodeFilter.SHOW_TEXT);
  const parts = [];
  while (walker.nextNode()) {
    const node = walker.currentNode;
    let el = node.parentElement;
    let hidden = false;
    while (el) {
      if (skip.has(el.tagName)) { hidden = true; break; }
      el = el.parentElement;
    }
    const text = (node.textContent || "").trim();
    if (!hidden && text) parts.push(text);
  }
  return parts.join(" ");
}
"""


class RenderedDomExtractor(ExtractionStrategy):
    """Load the page in headless Chromium and read the settled DOM.

    Parameters
    ----------
    max_bytes:
        Cap on the returned text, in UTF-8 bytes.
    timeout_ms:
        Navigation / load-state timeout.
    user_agent:
        Optional UA string for the browser context.
    """

    name = "rendered-dom"

    def __init__(
        self,
        *,
        max_bytes: int = 8192,
        timeout_ms: int = 30_000,
        user_agent: str | None = None,
    ) -> None:
        self.max_bytes = max_bytes
        self.timeout_ms = timeout_ms
        self.user_agent = user_agent

    def supports(self, media_type: str) -> bool:
        return media_type in HTML_MEDIA_TYPES

    def extract(self, source: FetchedPage) -> str:
        return self.render(source.url)

    def render(self, url: str) -> str:
        """Render *url* and return its visible text."""
        try:
            with sync_playwright() as pw:
                browser = pw.chromium.launch(headless=True)
                try:
                    context = browser.new_context(user_agent=self.user_agent)
                    page = context.new_page()
                    response = page.goto(url, wait_until="domcontentloaded", timeout=self.timeout_ms)
                    if response is not None and not response.ok:
                        raise UnreachableResourceError(
                            f"Failed to fetch the URL: {url} with status: {response.status}",
                            status=response.status,
                        )
                    page.wait_for_load_state("load", timeout=self.timeout_ms)
                    raw = page.evaluate(_COLLECT_TEXT_JS, NON_CONTENT_TAGS)
                finally:
                    browser.close()
        except PlaywrightTimeoutError as exc:
            raise UnreachableResourceError(f"Timed out rendering {url}: {exc}") from exc
        except PlaywrightError as exc:
            raise UnreachableResourceError(f"Browser rendering failed for {url}: {exc}") from exc

        text = truncate_bytes(collapse_whitespace(raw or ""), self.max_bytes)
        if not text:
            raise EmptyContentError(f"Rendered page has no text content: {url}")
        logger.info("Rendered %s (%d chars)", url, len(text))
        return text
