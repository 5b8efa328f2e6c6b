"""KServe custom model runtime answering chat turns."""

from __future__ import annotations

import logging
from typing import Any

import kserve

from webpage_rag.errors import WebpageRagError
from webpage_rag.pipeline import ConversationOrchestrator

logger = logging.getLogger(__name__)


class WebpageChatModel(kserve.Model):
    """KServe-compatible model that wraps :class:`ConversationOrchestrator`.

    This class implements the ``predict`` interface expected by KServe
    so chat can be deployed as an ``InferenceService``.
    """

    def __init__(self, name: str = "webpage-rag", orchestrator: ConversationOrchestrator | None = None) -> None:
        super().__init__(name)
        self.orchestrator = orchestrator
        self.ready = orchestrator is not None

    def load(self) -> None:
        """Build the orchestrator from settings (called once at startup)."""
        from webpage_rag.providers import get_orchestrator

        self.orchestrator = get_orchestrator()
        self.ready = True

    def predict(self, payload: dict[str, Any], headers: dict[str, str] | None = None) -> dict:
        """Run one chat turn per instance.

        Parameters
        ----------
        payload:
            ``{"instances": [{"userMessage": "..."}]}``.
        headers:
            Optional HTTP headers.

        Returns
        -------
        dict
            ``{"predictions": [{"llm_reply": "..."} | {"error": "..."}]}``;
            a failing instance does not abort the others.
        """
        instances = payload.get("instances", [])
        predictions = []

        for instance in instances:
            try:
                reply = self.orchestrator.respond(instance.get("userMessage", ""))
                predictions.append({"llm_reply": reply})
            except WebpageRagError as exc:
                logger.warning("Chat turn failed: %s", exc)
                predictions.append({"error": exc.message})

        return {"predictions": predictions}


if __name__ == "__main__":
    model = WebpageChatModel()
    model.load()
    kserve.ModelServer().start([model])
