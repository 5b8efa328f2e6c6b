"""FastAPI application exposing the ingestion and chat pipelines as a REST API."""

from __future__ import annotations

import logging
import traceback
from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from webpage_rag.config import settings
from webpage_rag.embedding import Embedder
from webpage_rag.errors import WebpageRagError
from webpage_rag.pipeline import ConversationOrchestrator, IngestionPipeline, RetrievalPipeline
from webpage_rag.providers import (
    get_display_extractor,
    get_embedder,
    get_ingestion_pipeline,
    get_orchestrator,
    get_retrieval_pipeline,
    get_vector_store,
)
from webpage_rag.storage.base import VectorStoreBase

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

NO_MATCHES_PLACEHOLDER = "No relevant data found."

app = FastAPI(
    title="Webpage RAG API",
    version="0.1.0",
    description="Scrape web pages into a vector store and chat with an LLM grounded in them.",
)


# ── Request / Response schemas ────────────────────────────────────────
class UrlRequest(BaseModel):
    """A page to scrape."""

    url: str = ""


class EmbedRequest(BaseModel):
    text: str = ""


class ChatRequest(BaseModel):
    """Incoming message from the user."""

    userMessage: str = ""  # noqa: N815


class LlmRequest(ChatRequest):
    context: Any = None


class IngestResponse(BaseModel):
    message: str
    url: str


class ExtractResponse(BaseModel):
    message: str
    content: str


class EmbedResponse(BaseModel):
    embedding_values: list[float]


class LlmResponse(BaseModel):
    llm_reply: str


# ── Error translation ─────────────────────────────────────────────────
def _error_body(exc: BaseException, message: str) -> dict[str, Any]:
    body: dict[str, Any] = {"error": message}
    if settings.is_development:
        body["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return body


@app.exception_handler(WebpageRagError)
async def handle_pipeline_error(request: Request, exc: WebpageRagError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc, exc.message))


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content=_error_body(exc, "Malformed request body"))


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content=_error_body(exc, str(exc) or "Internal server error"))


# ── Routes ────────────────────────────────────────────────────────────
@app.get("/health")
def health(store: VectorStoreBase = Depends(get_vector_store)) -> dict[str, Any]:
    """Liveness probe; also reports whether the vector store answers."""
    return {"status": "ok", "vector_store": store.health_check()}


@app.get("/health/ready")
def ready(store: VectorStoreBase = Depends(get_vector_store)) -> JSONResponse:
    """Readiness probe - reports whether the vector store answers."""
    healthy = store.health_check()
    return JSONResponse(
        status_code=200 if healthy else 503,
        content={"status": "ok" if healthy else "unavailable", "vector_store": healthy},
    )


@app.post("/scrape", response_model=IngestResponse)
def scrape(
    request: UrlRequest,
    pipeline: IngestionPipeline = Depends(get_ingestion_pipeline),
) -> IngestResponse:
    """Scrape, embed, and store a URL (no-op when it is already stored)."""
    result = pipeline.ingest(request.url)
    return IngestResponse(message=result.message, url=result.url)


@app.post("/fullscraper", response_model=ExtractResponse)
def fullscraper(request: UrlRequest, extractor=Depends(get_display_extractor)) -> ExtractResponse:  # noqa: ANN001
    """Extract a page for display without storing anything."""
    content = extractor.extract(request.url)
    return ExtractResponse(message="Scraped successfully", content=content)


@app.post("/embed", response_model=EmbedResponse)
def embed(request: EmbedRequest, embedder: Embedder = Depends(get_embedder)) -> EmbedResponse:
    return EmbedResponse(embedding_values=embedder.embed(request.text))


@app.post("/chat")
def chat(
    request: ChatRequest,
    retrieval: RetrievalPipeline = Depends(get_retrieval_pipeline),
) -> dict[str, list]:
    """Raw similarity search over stored pages."""
    matches = retrieval.retrieve(request.userMessage)
    if not matches:
        return {"matches": [NO_MATCHES_PLACEHOLDER]}
    return {"matches": [m.model_dump() for m in matches]}


@app.post("/llm", response_model=LlmResponse)
def llm(
    request: LlmRequest,
    orchestrator: ConversationOrchestrator = Depends(get_orchestrator),
) -> LlmResponse:
    """Generate a reply from a message and caller-supplied context."""
    return LlmResponse(llm_reply=orchestrator.generate(request.userMessage, request.context))


@app.post("/respond", response_model=LlmResponse)
def respond(
    request: ChatRequest,
    orchestrator: ConversationOrchestrator = Depends(get_orchestrator),
) -> LlmResponse:
    """Retrieve grounding context for the message and generate a reply."""
    return LlmResponse(llm_reply=orchestrator.respond(request.userMessage))
