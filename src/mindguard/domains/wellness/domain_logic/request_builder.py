"""Analysis request builder — pure construction of oracle requests.

Nothing here reads or writes session state: each builder maps
(kind, payload, prior context) to an ``OracleRequest``.
"""

from __future__ import annotations

import json
from typing import Any, Sequence

from mindguard.core.instructions.registry import InstructionRegistry
from mindguard.core.llm.provider import ContentPart, OracleRequest, TextPart, Turn
from mindguard.core.llm.system_prompt import build_full_system_prompt
from mindguard.domains.wellness.connectors.media import MediaPayload
from mindguard.domains.wellness.domain_logic.analysis_models import (
    AnalysisKind,
    ChatMessage,
    FaceAnalysisData,
    VoiceAnalysisData,
    response_schema_for,
)


def _single_turn(
    kind: AnalysisKind,
    parts: list[ContentPart],
    metadata: dict[str, Any] | None = None,
) -> OracleRequest:
    return OracleRequest(
        contents=(Turn(role="user", parts=tuple(parts)),),
        response_schema=response_schema_for(kind),
        schema_name=kind.value,
        metadata=metadata or {},
    )


def build_voice_request(audio: MediaPayload, instructions: InstructionRegistry) -> OracleRequest:
    """Instruction text followed by the inline audio clip."""
    template = instructions.for_kind(AnalysisKind.VOICE.value)
    return _single_turn(AnalysisKind.VOICE, [TextPart(template.instruction), audio.to_part()])


def build_face_request(image: MediaPayload, instructions: InstructionRegistry) -> OracleRequest:
    """Instruction text followed by the inline still image."""
    template = instructions.for_kind(AnalysisKind.FACE.value)
    return _single_turn(AnalysisKind.FACE, [TextPart(template.instruction), image.to_part()])


def build_chat_request(
    history: Sequence[ChatMessage],
    new_message: str,
    instructions: InstructionRegistry,
) -> OracleRequest:
    """Replay the prior transcript in order, then the new user text."""
    template = instructions.for_kind(AnalysisKind.CHAT.value)
    turns = [Turn(role=msg.role, parts=(TextPart(msg.text),)) for msg in history]
    turns.append(Turn(role="user", parts=(TextPart(new_message),)))
    return OracleRequest(
        contents=tuple(turns),
        response_schema=response_schema_for(AnalysisKind.CHAT),
        schema_name=AnalysisKind.CHAT.value,
        system_instruction=build_full_system_prompt(template.system_instruction),
    )


def format_chat_summary(history: Sequence[ChatMessage]) -> str:
    return "\n".join(f"{msg.role}: {msg.text}" for msg in history)


def build_fusion_request(
    voice: VoiceAnalysisData | None,
    face: FaceAnalysisData | None,
    chat_history: Sequence[ChatMessage],
    instructions: InstructionRegistry,
) -> OracleRequest:
    """Combine whichever modalities are present into one report request.

    Raises:
        ValueError: if no voice result, face result, or chat message is given.
    """
    if voice is None and face is None and not chat_history:
        raise ValueError("Fusion requires at least one of voice, face, or chat data")

    template = instructions.for_kind(AnalysisKind.FUSION.value)
    parts: list[ContentPart] = [TextPart(template.instruction)]
    if voice is not None:
        parts.append(TextPart(f"VOICE ANALYSIS DATA: {json.dumps(voice.to_wire())}"))
    if face is not None:
        parts.append(TextPart(f"FACIAL ANALYSIS DATA: {json.dumps(face.to_wire())}"))
    if chat_history:
        parts.append(TextPart(f"CHAT HISTORY SUMMARY: {format_chat_summary(chat_history)}"))
    if template.closing:
        parts.append(TextPart(template.closing))

    modalities = [
        name
        for name, present in (
            ("voice", voice is not None),
            ("face", face is not None),
            ("chat", bool(chat_history)),
        )
        if present
    ]
    return _single_turn(AnalysisKind.FUSION, parts, {"modalities": modalities})
