"""Shared configuration loaded from environment / ``.env``."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings, populated from env vars or .env file."""

    # LLM
    openai_api_key: str = Field(default="", description="OpenAI API key (or dummy value for local vLLM)")
    llm_model_name: str = Field(default="gpt-4o-mini", description="LLM model identifier")
    llm_base_url: str = Field(
        default="",
        description=(
            "Base URL for an OpenAI-compatible chat API. Leave empty to use "
            "OpenAI cloud, e.g. 'http://llm-server.local/v1' for vLLM."
        ),
    )
    llm_temperature: float = 1.0
    llm_top_p: float = 0.95
    llm_max_tokens: int = 8192

    # Vector store
    vector_store_backend: Literal["chroma", "memory"] = "chroma"
    chroma_host: str = "localhost"
    chroma_port: int = 8000
    chroma_collection: str = "webpages"

    # Embedding
    embedding_backend: Literal["huggingface", "http"] = "huggingface"
    embedding_model: str = "sentence-transformers/all-MiniLM-L6-v2"
    embedding_endpoint: str = Field(
        default="",
        description="URL of a remote embed endpoint returning {'embedding_values': [...]}",
    )
    embedding_dimension: int | None = Field(
        default=None,
        description="Expected vector length; vectors of any other length are rejected when set",
    )

    # Extraction
    request_timeout: float = 30.0
    user_agent: str = "webpage-rag/0.1 (+https://github.com)"
    plain_text_max_bytes: int = 8192
    html_mode: Literal["text", "raw"] = "text"
    display_html_mode: Literal["text", "raw"] = "raw"
    rendered_fallback: bool = False
    browser_timeout_ms: int = 30_000

    # Pipelines
    embed_char_limit: int = 9000
    match_count: int = 3
    match_threshold: float = 0.75
    empty_reply_placeholder: str = "No response."

    # Application
    environment: Literal["development", "production"] = "production"
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


# Singleton - import `settings` wherever needed.
settings = Settings()
