"""KFP v2 component - Batch-ingest a list of URLs into the vector store.

Runs every URL through :class:`webpage_rag.pipeline.IngestionPipeline`
one after another.  A failing URL is recorded and the batch moves on;
the component only fails when *every* URL failed.

Structured output contract (one JSON object per line)::

    {
      "url":     "<submitted URL>",
      "status":  "stored" | "already_exists" | "failed",
      "message": "<pipeline message or error text>",
      "error":   "<error class name, failed rows only>"
    }

Local testing
-------------
    from pipelines.components.ingest import ingest_urls
    ingest_urls.python_func(
        urls='["https://example.com/"]',
        ingest_results=_FakeArtifact("/tmp/out.jsonl"),
        metrics=_FakeArtifact("/tmp/metrics"),
        vector_store_backend="memory",
    )
"""

from kfp import dsl


@dsl.component(
    base_image="python:3.11-slim",
    packages_to_install=["webpage-rag"],
)
def ingest_urls(
    urls: str,
    ingest_results: dsl.Output[dsl.Dataset],
    metrics: dsl.Output[dsl.Metrics],
    vector_store_backend: str = "chroma",
    chroma_host: str = "localhost",
    chroma_port: int = 8000,
    collection_name: str = "webpages",
    embedding_model: str = "sentence-transformers/all-MiniLM-L6-v2",
    embed_char_limit: int = 9000,
    rendered_fallback: bool = False,
    request_timeout: int = 30,
) -> str:
    """Ingest each URL in *urls* and emit one JSON-Lines record per URL.

    Parameters
    ----------
    urls:
        JSON-encoded **list** of absolute HTTP(S) URLs.
    ingest_results:
        Output Dataset - one JSON object per line (see module docstring).
    metrics:
        Output Metrics artifact with per-status counts.
    vector_store_backend:
        ``"chroma"`` or ``"memory"`` (the latter is for local runs only).
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

    Returns
    -------
    str
        Human-readable summary.
    """
    import json
    import logging
    from pathlib import Path

    from webpage_rag.config import Settings
    from webpage_rag.embedding import HuggingFaceEmbedder
    from webpage_rag.errors import WebpageRagError
    from webpage_rag.extraction.extractor import ContentExtractor
    from webpage_rag.pipeline import IngestionPipeline

    logging.basicConfig(level=logging.INFO)
    log = logging.getLogger("ingest_urls")

    url_list = json.loads(urls) if isinstance(urls, str) else urls
    if not isinstance(url_list, list) or not url_list:
        raise ValueError(f"'urls' must be a non-empty JSON list, got: {urls!r}")

    cfg = Settings(
        vector_store_backend=vector_store_backend,
        chroma_host=chroma_host,
        chroma_port=chroma_port,
        chroma_collection=collection_name,
        embedding_model=embedding_model,
        embed_char_limit=embed_char_limit,
        rendered_fallback=rendered_fallback,
        request_timeout=request_timeout,
    )

    if cfg.vector_store_backend == "memory":
        from webpage_rag.storage.memory_store import InMemoryVectorStore

        store = InMemoryVectorStore(cfg.chroma_collection)
    else:
        from webpage_rag.storage.chroma_store import ChromaVectorStore

        store = ChromaVectorStore(cfg.chroma_collection, host=cfg.chroma_host, port=cfg.chroma_port)

    pipeline = IngestionPipeline(
        ContentExtractor.from_settings(cfg),
        HuggingFaceEmbedder(cfg.embedding_model, dimension=cfg.embedding_dimension),
        store,
        embed_char_limit=cfg.embed_char_limit,
    )

    # ── ingest, one URL at a time ─────────────────────────────────
    records: list[dict] = []
    for url in url_list:
        try:
            result = pipeline.ingest(url)
            records.append({"url": url, "status": result.status, "message": result.message})
            log.info("✓ %s (%s)", url, result.status)
        except WebpageRagError as exc:
            records.append(
                {"url": url, "status": "failed", "message": exc.message, "error": type(exc).__name__}
            )
            log.error("✗ %s: %s", url, exc)

    counts = {status: sum(1 for r in records if r["status"] == status)
              for status in ("stored", "already_exists", "failed")}
    if counts["failed"] == len(records):
        raise RuntimeError(
            "All URLs failed:\n" + "\n".join(f"{r['url']}: {r['message']}" for r in records)
        )

    # ── persist ───────────────────────────────────────────────────
    out_path = Path(ingest_results.path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with open(out_path, "w") as fh:
        for rec in records:
            fh.write(json.dumps(rec, ensure_ascii=False) + "\n")

    ingest_results.metadata["num_urls"] = len(records)
    ingest_results.metadata["collection_name"] = collection_name

    # KFP Metrics
    metrics.log_metric("urls_stored", counts["stored"])
    metrics.log_metric("urls_already_stored", counts["already_exists"])
    metrics.log_metric("urls_failed", counts["failed"])

    msg = (f"Ingested {len(records)} URLs: {counts['stored']} stored, "
           f"{counts['already_exists']} already stored, {counts['failed']} failed")
    log.info(msg)
    return msg
