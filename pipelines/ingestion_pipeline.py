"""KFP v2 pipeline - Batch web-page ingestion.

Wraps :func:`pipelines.components.ingest.ingest_urls` so a list of URLs
can be scraped, embedded, and stored as a scheduled or one-off run.

Compile
-------
    python -m pipelines.ingestion_pipeline --compile
"""

from kfp import compiler, dsl

from pipelines.components.ingest import ingest_urls


@dsl.pipeline(
    name="webpage-ingestion-pipeline",
    description="Scrape, embed, and store a list of web pages (write-once per URL).",
)
def ingestion_pipeline(
    urls: str = '["https://example.com/"]',
    chroma_host: str = "chroma.kubeflow.svc.cluster.local",
    chroma_port: int = 8000,
    collection_name: str = "webpages",
    embedding_model: str = "sentence-transformers/all-MiniLM-L6-v2",
    embed_char_limit: int = 9000,
    rendered_fallback: bool = False,
    request_timeout: int = 30,
) -> None:
    """Single-step ingestion over a JSON list of URLs.

    Parameters
    ----------
    urls:
        JSON list of absolute HTTP(S) URLs.
    chroma_host / chroma_port / collection_name:
        Chroma connection details.
    embedding_model:
        HuggingFace model identifier for embedding.
    embed_char_limit:
        Characters of page text sent to the embedder.
    rendered_fallback:
        Retry pages with no static text in a headless browser.
    request_timeout:
        Per-request timeout in seconds.
    """
    ingest_urls(
        urls=urls,
        vector_store_backend="chroma",
        chroma_host=chroma_host,
        chroma_port=chroma_port,
        collection_name=collection_name,
        embedding_model=embedding_model,
        embed_char_limit=embed_char_limit,
        rendered_fallback=rendered_fallback,
        request_timeout=request_timeout,
    )


# ──────────────────────────────────────────────────────────────────────
# CLI
# ──────────────────────────────────────────────────────────────────────


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Web-page ingestion pipeline")
    parser.add_argument(
        "--compile",
        action="store_true",
        help="Compile pipeline to YAML",
    )
    parser.add_argument(
        "--output",
        default="pipelines/compiled/ingestion_pipeline.yaml",
        help="Output path for compiled YAML",
    )
    args = parser.parse_args()

    if args.compile:
        compiler.Compiler().compile(ingestion_pipeline, args.output)
        print(f"Pipeline compiled → {args.output}")
