"""Shared pytest configuration and fixtures."""

from collections.abc import Iterator

import pytest

from webpage_rag import providers


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests requiring a Chroma server, a model download, or a browser"
    )


@pytest.fixture(autouse=True)
def _fresh_providers() -> Iterator[None]:
    """Drop process-wide collaborators so no test sees another's instances."""
    yield
    for getter in (
        providers.get_vector_store,
        providers.get_embedder,
        providers.get_generator,
        providers.get_extractor,
        providers.get_display_extractor,
    ):
        getter.cache_clear()
