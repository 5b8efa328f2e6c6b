"""
Pipeline - the request-scoped units of work.

Each call runs its stages strictly in sequence; collaborators are passed
in by the caller and never created here.
"""

from webpage_rag.pipeline.conversation import ConversationOrchestrator, build_context
from webpage_rag.pipeline.ingestion import IngestionPipeline
from webpage_rag.pipeline.retrieval import RetrievalPipeline

__all__ = [
    "ConversationOrchestrator",
    "IngestionPipeline",
    "RetrievalPipeline",
    "build_context",
]
