"""Model oracle client — the bridge between analysis requests and LLM calls."""

from __future__ import annotations

import logging
from typing import TypeVar

from pydantic import BaseModel

from mindguard.core.llm.errors import OracleTransportError
from mindguard.core.llm.provider import LLMProvider, OracleRequest, ProviderResponse
from mindguard.core.llm.response import validate_response

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class OracleClient:
    """Sends structured requests to the model oracle and validates replies.

    Constructed once at server start with an explicit provider and handed to
    whatever issues requests. Every failure surfaces as an
    ``AnalysisFailedError`` subclass; nothing is retried here.
    """

    def __init__(
        self,
        provider: LLMProvider,
        max_tokens: int = 2048,
        temperature: float = 0.3,
    ) -> None:
        self.provider = provider
        self.max_tokens = max_tokens
        self.temperature = temperature

    async def request(self, request: OracleRequest, response_model: type[ModelT]) -> ModelT:
        """Call the oracle and return the reply validated as ``response_model``."""
        kind = request.schema_name
        try:
            provider_response: ProviderResponse = await self.provider.generate(
                request,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except Exception as exc:
            logger.exception("Oracle call failed: kind=%s", kind)
            raise OracleTransportError(
                f"Oracle call failed for {kind} request: {type(exc).__name__}", kind=kind
            ) from exc

        logger.info(
            "Oracle call: kind=%s, model=%s, tokens=%d+%d, latency=%.0fms",
            kind,
            provider_response.model,
            provider_response.input_tokens,
            provider_response.output_tokens,
            provider_response.latency_ms,
        )

        return validate_response(provider_response.content, response_model, kind=kind)
