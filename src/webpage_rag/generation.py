"""LLM generation - single place to swap providers.

Supports two modes:

1. **OpenAI cloud** (default) - set ``OPENAI_API_KEY``.
2. **OpenAI-compatible endpoint** - set ``LLM_BASE_URL`` to e.g. a vLLM
   server exposing ``/v1/chat/completions``; ``ChatOpenAI`` works unchanged.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from langchain_core.messages import HumanMessage

from webpage_rag.errors import GenerationError

if TYPE_CHECKING:
    from langchain_openai import ChatOpenAI

    from webpage_rag.config import Settings

logger = logging.getLogger(__name__)


def build_prompt(user_message: str, context: str | None = None) -> str:
    """Frame *user_message* with retrieved *context*; the bare message when absent."""
    if not context:
        return user_message
    return f"User's message to assistant: {user_message}\n\nContext: {context}"


class Generator(ABC):
    """Produces a natural-language answer for a message and optional context."""

    @abstractmethod
    def generate(self, prompt: str, context: str | None = None) -> str:
        """Return the model's reply text (possibly empty).

        Raises
        ------
        GenerationError
            When the provider call fails.
        """
        ...


class ChatModelGenerator(Generator):
    """Generator backed by a LangChain ``ChatOpenAI`` model.

    Parameters
    ----------
    llm:
        Pre-built chat model; when *None* one is created from settings on
        first use.
    """

    def __init__(self, llm: Any = None, *, settings: Settings | None = None) -> None:
        self._llm = llm
        self._settings = settings

    @property
    def llm(self) -> ChatOpenAI:
        if self._llm is None:
            self._llm = get_llm(self._settings)
        return self._llm

    def generate(self, prompt: str, context: str | None = None) -> str:
        message = HumanMessage(content=build_prompt(prompt, context))
        try:
            result = self.llm.invoke([message])
        except Exception as exc:
            logger.error("Generation failed: %s", exc)
            raise GenerationError(str(exc)) from exc
        content = result.content
        if isinstance(content, list):
            # Multi-part responses: keep only the text parts.
            content = "".join(
                part if isinstance(part, str) else str(part.get("text", "")) for part in content
            )
        return content or ""


def get_llm(settings: Settings | None = None) -> ChatOpenAI:
    """Return the configured chat model.

    When ``settings.llm_base_url`` is set the client is pointed at that
    OpenAI-compatible server instead of the OpenAI cloud API.  A dummy
    API key (``"EMPTY"``) is used because local servers usually do not
    require authentication.
    """
    from langchain_openai import ChatOpenAI

    if settings is None:
        from webpage_rag.config import settings

    kwargs: dict = {
        "model": settings.llm_model_name,
        "temperature": settings.llm_temperature,
        "top_p": settings.llm_top_p,
        "max_tokens": settings.llm_max_tokens,
    }

    if settings.llm_base_url:
        logger.info("Using OpenAI-compatible endpoint: %s", settings.llm_base_url)
        kwargs["base_url"] = settings.llm_base_url
        # LangChain requires a non-empty key even when the server ignores it.
        kwargs["api_key"] = settings.openai_api_key or "EMPTY"
    else:
        kwargs["api_key"] = settings.openai_api_key

    return ChatOpenAI(**kwargs)
