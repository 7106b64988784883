"""Wellness analyzer — one oracle round-trip per analysis kind."""

from __future__ import annotations

import logging
from typing import Sequence

from mindguard.core.instructions.registry import InstructionRegistry
from mindguard.core.llm.client import OracleClient
from mindguard.domains.wellness.connectors.media import MediaPayload
from mindguard.domains.wellness.domain_logic.analysis_models import (
    AnalysisResult,
    ChatMessage,
    ChatReply,
    FaceAnalysisData,
    VoiceAnalysisData,
)
from mindguard.domains.wellness.domain_logic.request_builder import (
    build_chat_request,
    build_face_request,
    build_fusion_request,
    build_voice_request,
)

logger = logging.getLogger(__name__)


class WellnessAnalyzer:
    """Builds a request, sends it, and returns the typed result.

    Stateless apart from its collaborators: results are returned, never
    stored. Failures propagate as ``AnalysisFailedError``.
    """

    def __init__(self, oracle: OracleClient, instructions: InstructionRegistry) -> None:
        self.oracle = oracle
        self.instructions = instructions

    async def analyze_voice(self, audio: MediaPayload) -> VoiceAnalysisData:
        logger.debug("Voice analysis: %d bytes (%s)", audio.size, audio.mime_type)
        request = build_voice_request(audio, self.instructions)
        return await self.oracle.request(request, VoiceAnalysisData)

    async def analyze_face(self, image: MediaPayload) -> FaceAnalysisData:
        logger.debug("Face analysis: %d bytes (%s)", image.size, image.mime_type)
        request = build_face_request(image, self.instructions)
        return await self.oracle.request(request, FaceAnalysisData)

    async def chat(self, history: Sequence[ChatMessage], new_message: str) -> ChatReply:
        request = build_chat_request(history, new_message, self.instructions)
        return await self.oracle.request(request, ChatReply)

    async def fuse(
        self,
        voice: VoiceAnalysisData | None,
        face: FaceAnalysisData | None,
        chat_history: Sequence[ChatMessage],
    ) -> AnalysisResult:
        request = build_fusion_request(voice, face, chat_history, self.instructions)
        logger.info("Fusion report requested: modalities=%s", request.metadata["modalities"])
        return await self.oracle.request(request, AnalysisResult)
