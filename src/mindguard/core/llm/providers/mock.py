"""Mock LLM provider for testing."""

from __future__ import annotations

import json
from typing import Any

from mindguard.core.llm.provider import OracleRequest, ProviderResponse

_BASE_ANALYSIS: dict[str, Any] = {
    "wellnessScore": 74,
    "riskLevel": "low",
    "indicators": [
        {
            "name": "Mock indicator",
            "value": "steady",
            "description": "Canned observation from the mock provider.",
            "severity": "low",
        }
    ],
    "summary": "Mock analysis summary.",
    "recommendation": "Mock recommendation: take a short mindful break.",
    "isCrisis": False,
}

# Canned replies keyed by OracleRequest.schema_name.
CANNED_REPLIES: dict[str, dict[str, Any]] = {
    "voice": {**_BASE_ANALYSIS, "tone": "calm", "pace": "steady", "energy": "moderate"},
    "face": {**_BASE_ANALYSIS, "expression": "neutral", "eyeContact": "steady"},
    "fusion": dict(_BASE_ANALYSIS),
    "chat": {"text": "Mock companion reply. I'm here to listen.", "isCrisis": False},
}


class MockProvider:
    """Mock provider for testing — returns canned responses.

    With no arguments it answers each analysis kind with a schema-valid
    canned payload. ``response_content`` pins a single reply for every call;
    ``responses`` is consumed in order, one per call. ``raise_on_call`` makes
    every call fail with the given exception.
    """

    def __init__(
        self,
        response_content: str | None = None,
        responses: list[str] | None = None,
    ) -> None:
        self.response_content = response_content
        self.responses: list[str] = list(responses or [])
        self.requests: list[OracleRequest] = []
        self.call_count: int = 0
        self._raise_on_call: Exception | None = None

    @property
    def last_request(self) -> OracleRequest | None:
        return self.requests[-1] if self.requests else None

    def raise_on_call(self, exc: Exception | None) -> None:
        self._raise_on_call = exc

    async def generate(
        self,
        request: OracleRequest,
        max_tokens: int = 2048,
        temperature: float = 0.3,
    ) -> ProviderResponse:
        self.requests.append(request)
        self.call_count += 1

        if self._raise_on_call is not None:
            raise self._raise_on_call

        if self.responses:
            content = self.responses.pop(0)
        elif self.response_content is not None:
            content = self.response_content
        else:
            content = json.dumps(CANNED_REPLIES.get(request.schema_name, _BASE_ANALYSIS))

        text_words = sum(
            len(getattr(p, "text", "").split()) for turn in request.contents for p in turn.parts
        )
        return ProviderResponse(
            content=content,
            input_tokens=text_words,
            output_tokens=len(content.split()),
            model="mock",
            latency_ms=0.0,
        )
