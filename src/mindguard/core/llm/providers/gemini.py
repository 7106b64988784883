"""Google Gemini provider."""

from __future__ import annotations

import time

from mindguard.core.llm.provider import MediaPart, OracleRequest, ProviderResponse


class GeminiProvider:
    """Gemini provider using the google-genai SDK.

    Gemini accepts inline audio and images and enforces the response schema
    server-side, so every analysis kind runs without adaptation.
    """

    def __init__(self, api_key: str, model: str = "gemini-2.5-flash") -> None:
        from google import genai

        self.client = genai.Client(api_key=api_key)
        self.model = model

    async def generate(
        self,
        request: OracleRequest,
        max_tokens: int = 2048,
        temperature: float = 0.3,
    ) -> ProviderResponse:
        from google.genai import types

        contents = [
            types.Content(
                role=turn.role,
                parts=[
                    types.Part.from_bytes(data=part.data, mime_type=part.mime_type)
                    if isinstance(part, MediaPart)
                    else types.Part.from_text(text=part.text)
                    for part in turn.parts
                ],
            )
            for turn in request.contents
        ]

        start = time.monotonic()
        response = await self.client.aio.models.generate_content(
            model=self.model,
            contents=contents,
            config=types.GenerateContentConfig(
                system_instruction=request.system_instruction,
                response_mime_type="application/json",
                response_json_schema=request.response_schema,
                max_output_tokens=max_tokens,
                temperature=temperature,
            ),
        )
        elapsed_ms = (time.monotonic() - start) * 1000

        usage = response.usage_metadata
        return ProviderResponse(
            content=response.text or "",
            input_tokens=(usage.prompt_token_count or 0) if usage else 0,
            output_tokens=(usage.candidates_token_count or 0) if usage else 0,
            model=self.model,
            latency_ms=elapsed_ms,
        )
