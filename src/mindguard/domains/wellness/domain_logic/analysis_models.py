"""Typed response contracts for each analysis kind.

The same pydantic model that validates an oracle reply also produces the JSON
schema sent with the request, so the two cannot drift. Field names are
snake_case in Python and camelCase on the wire (``wellnessScore``,
``riskLevel``, ``isCrisis``, ``eyeContact``).
"""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

RiskLevel = Literal["low", "moderate", "high", "severe"]
Severity = Literal["low", "medium", "high"]
ChatRole = Literal["user", "model"]

# Ordered from least to most severe.
RISK_LEVELS: tuple[str, ...] = ("low", "moderate", "high", "severe")
SEVERITIES: tuple[str, ...] = ("low", "medium", "high")


class AnalysisKind(str, Enum):
    """The four request kinds sent to the model oracle."""

    VOICE = "voice"
    FACE = "face"
    CHAT = "chat"
    FUSION = "fusion"


class _WireContract(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_wire(self) -> dict[str, Any]:
        """Serialize with camelCase keys, as the oracle and clients see it."""
        return self.model_dump(by_alias=True, mode="json")


class Indicator(_WireContract):
    """One named, severity-tagged observation within an analysis result."""

    name: str
    value: str
    description: str
    severity: Severity


class AnalysisResult(_WireContract):
    """Base wellness report shared by voice, face, and fusion analyses.

    The score and crisis flag are validated strictly: "82", 82.0, "false"
    or 0 from the oracle are rejected rather than coerced.
    """

    wellness_score: int = Field(
        ge=0, le=100, strict=True, description="0-100 score, higher is better"
    )
    risk_level: RiskLevel
    indicators: tuple[Indicator, ...]
    summary: str
    recommendation: str
    is_crisis: bool = Field(
        strict=True,
        description="True if immediate intervention is needed (suicide, self-harm)",
    )


class VoiceAnalysisData(AnalysisResult):
    tone: str
    pace: str
    energy: str


class FaceAnalysisData(AnalysisResult):
    expression: str
    eye_contact: str


class ChatReply(_WireContract):
    """Narrow schema for a single companion chat turn."""

    text: str
    is_crisis: bool = Field(strict=True)


RESPONSE_CONTRACTS: dict[AnalysisKind, type[_WireContract]] = {
    AnalysisKind.VOICE: VoiceAnalysisData,
    AnalysisKind.FACE: FaceAnalysisData,
    AnalysisKind.CHAT: ChatReply,
    AnalysisKind.FUSION: AnalysisResult,
}


def response_schema_for(kind: AnalysisKind) -> dict[str, Any]:
    """JSON schema (camelCase) the oracle reply for ``kind`` must satisfy."""
    return RESPONSE_CONTRACTS[kind].model_json_schema(by_alias=True)


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class ChatMessage:
    """One entry in the session's append-only chat transcript."""

    role: ChatRole
    text: str
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: int = field(default_factory=_now_ms)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "role": self.role,
            "text": self.text,
            "timestamp": self.timestamp,
        }
