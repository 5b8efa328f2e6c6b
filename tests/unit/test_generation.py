"""Unit tests for prompt framing and the ChatOpenAI-backed generator."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from langchain_core.messages import AIMessage, HumanMessage

from webpage_rag.config import Settings
from webpage_rag.errors import GenerationError
from webpage_rag.generation import ChatModelGenerator, build_prompt, get_llm


class TestBuildPrompt:
    def test_without_context_sends_raw_message(self) -> None:
        assert build_prompt("hi") == "hi"
        assert build_prompt("hi", None) == "hi"
        assert build_prompt("hi", "") == "hi"

    def test_with_context_frames_message(self) -> None:
        prompt = build_prompt("What is on the page?", "Hello world")
        assert prompt == "User's message to assistant: What is on the page?\n\nContext: Hello world"


class TestChatModelGenerator:
    def test_invokes_llm_with_framed_prompt(self) -> None:
        llm = MagicMock()
        llm.invoke.return_value = AIMessage(content="An answer.")
        reply = ChatModelGenerator(llm).generate("question", "ctx")

        assert reply == "An answer."
        (messages,), _ = llm.invoke.call_args
        assert isinstance(messages[0], HumanMessage)
        assert messages[0].content == "User's message to assistant: question\n\nContext: ctx"

    def test_empty_model_output_returns_empty_string(self) -> None:
        llm = MagicMock()
        llm.invoke.return_value = AIMessage(content="")
        assert ChatModelGenerator(llm).generate("question") == ""

    def test_multipart_content_is_joined(self) -> None:
        llm = MagicMock()
        llm.invoke.return_value = AIMessage(content=[{"type": "text", "text": "Part one. "}, "Part two."])
        assert ChatModelGenerator(llm).generate("question") == "Part one. Part two."

    def test_provider_failure_wrapped(self) -> None:
        llm = MagicMock()
        llm.invoke.side_effect = RuntimeError("rate limited")
        with pytest.raises(GenerationError, match="rate limited"):
            ChatModelGenerator(llm).generate("question")


class TestGetLlm:
    def test_cloud_configuration(self) -> None:
        cfg = Settings(openai_api_key="sk-test", llm_model_name="gpt-4o-mini", llm_base_url="")
        with patch("langchain_openai.ChatOpenAI") as mock_cls:
            get_llm(cfg)
        kwargs = mock_cls.call_args.kwargs
        assert kwargs["api_key"] == "sk-test"
        assert kwargs["temperature"] == 1.0
        assert kwargs["top_p"] == 0.95
        assert kwargs["max_tokens"] == 8192
        assert "base_url" not in kwargs

    def test_compatible_endpoint_uses_dummy_key(self) -> None:
        cfg = Settings(openai_api_key="", llm_base_url="http://vllm.local/v1")
        with patch("langchain_openai.ChatOpenAI") as mock_cls:
            get_llm(cfg)
        kwargs = mock_cls.call_args.kwargs
        assert kwargs["base_url"] == "http://vllm.local/v1"
        assert kwargs["api_key"] == "EMPTY"
