"""Unit tests for the embedding backends (HuggingFace and remote HTTP)."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from webpage_rag.embedding import Embedder, HttpEmbedder, HuggingFaceEmbedder
from webpage_rag.errors import InvalidEmbeddingError, InvalidInputError


class _StaticEmbedder(Embedder):
    def __init__(self, raw: object, dimension: int | None = None) -> None:
        super().__init__(dimension)
        self.raw = raw

    def _embed_raw(self, text: str) -> object:
        return self.raw


class TestEmbedderContract:
    def test_valid_output_passes_through(self) -> None:
        assert _StaticEmbedder([0.1, 0.2, 0.3], dimension=3).embed("hello") == [0.1, 0.2, 0.3]

    @pytest.mark.parametrize("text", ["", "   ", None])
    def test_blank_text_rejected(self, text: object) -> None:
        with pytest.raises(InvalidInputError):
            _StaticEmbedder([0.1]).embed(text)  # type: ignore[arg-type]

    def test_non_numeric_output_rejected(self) -> None:
        with pytest.raises(InvalidEmbeddingError):
            _StaticEmbedder([0.1, "oops", 0.3]).embed("hello")

    def test_wrong_dimension_rejected(self) -> None:
        with pytest.raises(InvalidEmbeddingError):
            _StaticEmbedder([0.1, 0.2], dimension=3).embed("hello")


class TestHuggingFaceEmbedder:
    def test_model_loaded_once_and_used_for_queries(self) -> None:
        with patch("langchain_huggingface.HuggingFaceEmbeddings") as mock_cls:
            mock_cls.return_value.embed_query.return_value = [0.5, 0.5]
            embedder = HuggingFaceEmbedder("sentence-transformers/all-MiniLM-L6-v2")
            assert embedder.embed("first") == [0.5, 0.5]
            assert embedder.embed("second") == [0.5, 0.5]

        mock_cls.assert_called_once_with(model_name="sentence-transformers/all-MiniLM-L6-v2")
        assert mock_cls.return_value.embed_query.call_count == 2

    def test_backend_failure_wrapped(self) -> None:
        with patch("langchain_huggingface.HuggingFaceEmbeddings") as mock_cls:
            mock_cls.return_value.embed_query.side_effect = RuntimeError("CUDA out of memory")
            with pytest.raises(InvalidEmbeddingError, match="CUDA"):
                HuggingFaceEmbedder("m").embed("text")


class TestHttpEmbedder:
    def _reply(self, payload: object, status: int = 200) -> MagicMock:
        resp = MagicMock(ok=status < 400, status_code=status)
        resp.json.return_value = payload
        return resp

    def test_posts_text_and_returns_values(self) -> None:
        with patch("webpage_rag.embedding.requests.post") as mock_post:
            mock_post.return_value = self._reply({"embedding_values": [0.1, 0.2]})
            vector = HttpEmbedder("http://embed.local/api/embed").embed("hello")

        assert vector == [0.1, 0.2]
        assert mock_post.call_args.kwargs["json"] == {"text": "hello"}

    @pytest.mark.parametrize(
        "payload",
        [[], None, {}, {"embedding_values": "0.1,0.2"}, {"other": [0.1]}, {"embedding_values": [0.1, "x"]}],
    )
    def test_malformed_payloads_rejected(self, payload: object) -> None:
        with patch("webpage_rag.embedding.requests.post") as mock_post:
            mock_post.return_value = self._reply(payload)
            with pytest.raises(InvalidEmbeddingError):
                HttpEmbedder("http://embed.local/api/embed").embed("hello")

    def test_error_status_rejected(self) -> None:
        with patch("webpage_rag.embedding.requests.post") as mock_post:
            mock_post.return_value = self._reply({"error": "boom"}, status=500)
            with pytest.raises(InvalidEmbeddingError, match="500"):
                HttpEmbedder("http://embed.local/api/embed").embed("hello")

    def test_connection_error_wrapped(self) -> None:
        with patch("webpage_rag.embedding.requests.post") as mock_post:
            mock_post.side_effect = requests.ConnectionError("refused")
            with pytest.raises(InvalidEmbeddingError):
                HttpEmbedder("http://embed.local/api/embed").embed("hello")

    def test_invalid_json_rejected(self) -> None:
        with patch("webpage_rag.embedding.requests.post") as mock_post:
            resp = self._reply(None)
            resp.json.side_effect = ValueError("Expecting value")
            mock_post.return_value = resp
            with pytest.raises(InvalidEmbeddingError, match="JSON"):
                HttpEmbedder("http://embed.local/api/embed").embed("hello")

    def test_endpoint_required(self) -> None:
        with pytest.raises(ValueError):
            HttpEmbedder("")
