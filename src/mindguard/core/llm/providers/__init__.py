"""LLM provider implementations."""

from mindguard.core.llm.providers.anthropic import AnthropicProvider
from mindguard.core.llm.providers.gemini import GeminiProvider
from mindguard.core.llm.providers.mock import MockProvider
from mindguard.core.llm.providers.openai import OpenAIProvider

__all__ = ["AnthropicProvider", "GeminiProvider", "MockProvider", "OpenAIProvider"]
