"""KFP v2 components - each file exports one @dsl.component."""

from pipelines.components.ingest import ingest_urls

__all__ = [
    "ingest_urls",
]
