"""Configuration helpers for API keys and environment variables."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from src.core.errors import ConfigurationError

DEFAULT_GATEWAY_BASE_URL = "https://ai.gateway.lovable.dev/v1"
DEFAULT_GATEWAY_MODEL = "google/gemini-2.5-flash"
DEFAULT_GATEWAY_TIMEOUT_S = 60.0


@dataclass(slots=True)
class ApiSettings:
    """Centralised container for the model gateway credentials and tuning."""

    ai_gateway_api_key: Optional[str] = None
    ai_gateway_base_url: str = DEFAULT_GATEWAY_BASE_URL
    ai_gateway_model: str = DEFAULT_GATEWAY_MODEL
    ai_gateway_timeout_s: float = DEFAULT_GATEWAY_TIMEOUT_S
    langsmith_api_key: Optional[str] = None

    @classmethod
    def from_env(cls) -> "ApiSettings":
        """Load settings from environment variables."""

        return cls(
            ai_gateway_api_key=os.getenv("AI_GATEWAY_API_KEY"),
            ai_gateway_base_url=os.getenv("AI_GATEWAY_BASE_URL", DEFAULT_GATEWAY_BASE_URL),
            ai_gateway_model=os.getenv("AI_GATEWAY_MODEL", DEFAULT_GATEWAY_MODEL),
            ai_gateway_timeout_s=float(
                os.getenv("AI_GATEWAY_TIMEOUT_S", str(DEFAULT_GATEWAY_TIMEOUT_S))
            ),
            langsmith_api_key=os.getenv("LANGSMITH_API_KEY"),
        )

    def ensure(self, field: str) -> str:
        """Return the requested field and fail fast if it is missing."""

        value = getattr(self, field)
        if not value:
            raise ConfigurationError(f"{field.upper()} is not configured")
        return value

    def apply_langsmith_tracing(self) -> None:
        """Turn on LangChain tracing when a LangSmith key is available."""

        if not self.langsmith_api_key:
            return
        os.environ.setdefault("LANGCHAIN_TRACING_V2", "true")
        os.environ.setdefault("LANGCHAIN_ENDPOINT", "https://api.smith.langchain.com")
        os.environ.setdefault("LANGSMITH_API_KEY", self.langsmith_api_key)
