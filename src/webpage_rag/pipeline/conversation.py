"""One chat turn: retrieve grounding context, then generate a reply."""

from __future__ import annotations

from webpage_rag.errors import InvalidInputError
from webpage_rag.generation import Generator
from webpage_rag.models import SimilarityMatch
from webpage_rag.pipeline.retrieval import RetrievalPipeline

DEFAULT_PLACEHOLDER = "No response."


def build_context(matches: list[SimilarityMatch]) -> str | None:
    """Newline-join match contents; ``None`` when there is nothing to join."""
    context = "\n".join(m.content for m in matches)
    return context or None


class ConversationOrchestrator:
    def __init__(
        self,
        retrieval: RetrievalPipeline,
        generator: Generator,
        *,
        placeholder: str = DEFAULT_PLACEHOLDER,
    ) -> None:
        self.retrieval = retrieval
        self.generator = generator
        self.placeholder = placeholder

    def respond(self, user_message: str) -> str:
        """Answer *user_message*, grounded in retrieved pages when any match.

        Generator failures surface as :class:`~webpage_rag.errors.GenerationError`.
        """
        if not isinstance(user_message, str) or not user_message.strip():
            raise InvalidInputError("Query is required")
        matches = self.retrieval.retrieve(user_message)
        return self.generate(user_message, build_context(matches))

    def generate(self, user_message: str, context: str | None = None) -> str:
        """Call the generator directly with caller-supplied *context*."""
        if not isinstance(user_message, str) or not user_message.strip():
            raise InvalidInputError("Query is required")
        if context is not None and not isinstance(context, str):
            raise InvalidInputError("Context is not being passed properly")
        reply = self.generator.generate(user_message, context or None)
        return reply or self.placeholder
