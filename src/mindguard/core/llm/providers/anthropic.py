"""Anthropic Claude provider."""

from __future__ import annotations

import json
import time
from typing import Any

from mindguard.core.llm.provider import (
    MediaPart,
    OracleRequest,
    ProviderResponse,
    UnsupportedMediaError,
)

_IMAGE_TYPES = frozenset({"image/jpeg", "image/png", "image/gif", "image/webp"})


def _schema_instruction(request: OracleRequest) -> str:
    return (
        "Respond with a single JSON object and nothing else. "
        "It must validate against this JSON schema:\n"
        + json.dumps(request.response_schema, indent=2)
    )


def _content_block(part: Any) -> dict[str, Any]:
    if isinstance(part, MediaPart):
        if part.mime_type not in _IMAGE_TYPES:
            raise UnsupportedMediaError(
                f"Anthropic provider cannot accept inline media of type {part.mime_type!r}"
            )
        return {
            "type": "image",
            "source": {
                "type": "base64",
                "media_type": part.mime_type,
                "data": part.base64_data,
            },
        }
    return {"type": "text", "text": part.text}


class AnthropicProvider:
    """Claude provider using the Anthropic SDK.

    Claude has no response-schema parameter, so the schema travels in the
    system prompt and the reply is validated client-side like any other.
    Audio input is not supported.
    """

    def __init__(self, api_key: str, model: str = "claude-sonnet-4-5-20250929") -> None:
        import anthropic

        self.client = anthropic.AsyncAnthropic(api_key=api_key)
        self.model = model

    async def generate(
        self,
        request: OracleRequest,
        max_tokens: int = 2048,
        temperature: float = 0.3,
    ) -> ProviderResponse:
        messages = [
            {
                "role": "assistant" if turn.role == "model" else "user",
                "content": [_content_block(p) for p in turn.parts],
            }
            for turn in request.contents
        ]
        system = "\n\n".join(
            s for s in (request.system_instruction, _schema_instruction(request)) if s
        )

        start = time.monotonic()
        response = await self.client.messages.create(
            model=self.model,
            max_tokens=max_tokens,
            temperature=temperature,
            system=system,
            messages=messages,
        )
        elapsed_ms = (time.monotonic() - start) * 1000

        content = response.content[0].text if response.content else ""
        return ProviderResponse(
            content=content,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
            model=self.model,
            latency_ms=elapsed_ms,
        )
