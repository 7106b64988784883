"""OpenAI GPT provider."""

from __future__ import annotations

import time
from typing import Any

from mindguard.core.llm.provider import (
    MediaPart,
    OracleRequest,
    ProviderResponse,
    TextPart,
    UnsupportedMediaError,
)

# Chat Completions only takes input audio as wav or mp3.
_AUDIO_FORMATS = {
    "audio/wav": "wav",
    "audio/x-wav": "wav",
    "audio/wave": "wav",
    "audio/mpeg": "mp3",
    "audio/mp3": "mp3",
}


def _user_content(parts: tuple[Any, ...]) -> list[dict[str, Any]]:
    content: list[dict[str, Any]] = []
    for part in parts:
        if isinstance(part, TextPart):
            content.append({"type": "text", "text": part.text})
        elif part.is_image:
            content.append({
                "type": "image_url",
                "image_url": {"url": f"data:{part.mime_type};base64,{part.base64_data}"},
            })
        elif part.mime_type in _AUDIO_FORMATS:
            content.append({
                "type": "input_audio",
                "input_audio": {
                    "data": part.base64_data,
                    "format": _AUDIO_FORMATS[part.mime_type],
                },
            })
        else:
            raise UnsupportedMediaError(
                f"OpenAI provider cannot accept inline media of type {part.mime_type!r}"
            )
    return content


class OpenAIProvider:
    """OpenAI provider using the OpenAI SDK."""

    def __init__(self, api_key: str, model: str = "gpt-4o") -> None:
        import openai

        self.client = openai.AsyncOpenAI(api_key=api_key)
        self.model = model

    async def generate(
        self,
        request: OracleRequest,
        max_tokens: int = 2048,
        temperature: float = 0.3,
    ) -> ProviderResponse:
        messages: list[dict[str, Any]] = []
        if request.system_instruction:
            messages.append({"role": "system", "content": request.system_instruction})
        for turn in request.contents:
            if turn.role == "model":
                text = "\n".join(p.text for p in turn.parts if isinstance(p, TextPart))
                messages.append({"role": "assistant", "content": text})
            else:
                messages.append({"role": "user", "content": _user_content(turn.parts)})

        start = time.monotonic()
        response = await self.client.chat.completions.create(
            model=self.model,
            max_tokens=max_tokens,
            temperature=temperature,
            messages=messages,
            response_format={
                "type": "json_schema",
                "json_schema": {
                    "name": request.schema_name,
                    "schema": request.response_schema,
                },
            },
        )
        elapsed_ms = (time.monotonic() - start) * 1000

        choice = response.choices[0] if response.choices else None
        content = choice.message.content or "" if choice else ""
        usage = response.usage
        return ProviderResponse(
            content=content,
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
            model=self.model,
            latency_ms=elapsed_ms,
        )
