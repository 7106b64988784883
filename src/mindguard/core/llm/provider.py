"""LLM provider protocol — abstract interface for model oracle calls."""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from typing import Any, Literal, Protocol, Union, runtime_checkable

TurnRole = Literal["user", "model"]


@dataclass(frozen=True)
class TextPart:
    """A plain-text content part."""

    text: str


@dataclass(frozen=True)
class MediaPart:
    """An inline media content part (audio or image bytes)."""

    mime_type: str
    data: bytes

    @property
    def base64_data(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    @property
    def is_audio(self) -> bool:
        return self.mime_type.startswith("audio/")

    @property
    def is_image(self) -> bool:
        return self.mime_type.startswith("image/")


ContentPart = Union[TextPart, MediaPart]


@dataclass(frozen=True)
class Turn:
    """One conversational turn sent to the oracle."""

    role: TurnRole
    parts: tuple[ContentPart, ...]


@dataclass(frozen=True)
class OracleRequest:
    """Everything a provider needs for one structured generation call.

    ``response_schema`` is a JSON schema (camelCase property names) that the
    reply text is expected to satisfy. ``schema_name`` labels it for providers
    that require a named schema.
    """

    contents: tuple[Turn, ...]
    response_schema: dict[str, Any]
    schema_name: str = "analysis"
    system_instruction: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def media_parts(self) -> list[MediaPart]:
        return [p for turn in self.contents for p in turn.parts if isinstance(p, MediaPart)]


@dataclass
class ProviderResponse:
    """Response from an LLM provider."""

    content: str
    input_tokens: int
    output_tokens: int
    model: str
    latency_ms: float


class UnsupportedMediaError(Exception):
    """The provider cannot carry a media part of this type."""


@runtime_checkable
class LLMProvider(Protocol):
    """Abstract interface for model oracle calls."""

    async def generate(
        self,
        request: OracleRequest,
        max_tokens: int = 2048,
        temperature: float = 0.3,
    ) -> ProviderResponse: ...


def create_provider(
    provider_name: str,
    api_key: str = "",
    model: str = "",
) -> LLMProvider:
    """Factory function to create an LLM provider by name.

    Args:
        provider_name: "gemini", "anthropic", "openai", or "mock"
        api_key: API key for the provider.
        model: Model identifier override.

    Returns:
        An LLMProvider instance.
    """
    if provider_name == "gemini":
        from mindguard.core.llm.providers.gemini import GeminiProvider

        return GeminiProvider(api_key=api_key, model=model or "gemini-2.5-flash")
    elif provider_name == "anthropic":
        from mindguard.core.llm.providers.anthropic import AnthropicProvider

        return AnthropicProvider(api_key=api_key, model=model or "claude-sonnet-4-5-20250929")
    elif provider_name == "openai":
        from mindguard.core.llm.providers.openai import OpenAIProvider

        return OpenAIProvider(api_key=api_key, model=model or "gpt-4o")
    elif provider_name == "mock":
        from mindguard.core.llm.providers.mock import MockProvider

        return MockProvider()
    else:
        raise ValueError(f"Unknown LLM provider: {provider_name}")
