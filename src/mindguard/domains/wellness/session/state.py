"""Session state — the in-memory result store for one user session."""

from __future__ import annotations

from typing import Any

from mindguard.domains.wellness.domain_logic.analysis_models import (
    AnalysisResult,
    ChatMessage,
    FaceAnalysisData,
    VoiceAnalysisData,
)

# More than this many chat messages counts as enough data for a report.
CHAT_MESSAGES_BEFORE_REPORT = 2


class SessionState:
    """Latest voice/face results, chat transcript, fused report, crisis flag.

    Each write replaces a single field in one assignment, so a reader never
    sees a half-applied result. ``append_chat_message`` is the only append;
    everything else is last-write-wins. Nothing here is persisted.
    """

    def __init__(self) -> None:
        self._voice_result: VoiceAnalysisData | None = None
        self._face_result: FaceAnalysisData | None = None
        self._chat_history: list[ChatMessage] = []
        self._fused_report: AnalysisResult | None = None
        self._is_crisis_mode: bool = False

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def voice_result(self) -> VoiceAnalysisData | None:
        return self._voice_result

    @property
    def face_result(self) -> FaceAnalysisData | None:
        return self._face_result

    @property
    def chat_history(self) -> tuple[ChatMessage, ...]:
        return tuple(self._chat_history)

    @property
    def fused_report(self) -> AnalysisResult | None:
        return self._fused_report

    @property
    def is_crisis_mode(self) -> bool:
        return self._is_crisis_mode

    @property
    def has_report_data(self) -> bool:
        """Whether the report view may request a fusion report."""
        return (
            self._voice_result is not None
            or self._face_result is not None
            or len(self._chat_history) > CHAT_MESSAGES_BEFORE_REPORT
        )

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def set_voice_result(self, result: VoiceAnalysisData) -> None:
        self._voice_result = result

    def set_face_result(self, result: FaceAnalysisData) -> None:
        self._face_result = result

    def append_chat_message(self, message: ChatMessage) -> None:
        if any(m.id == message.id for m in self._chat_history):
            raise ValueError(f"Duplicate chat message id: {message.id!r}")
        self._chat_history.append(message)

    def set_fused_report(self, report: AnalysisResult) -> None:
        self._fused_report = report

    def set_crisis_mode(self, active: bool) -> None:
        self._is_crisis_mode = active

    def snapshot(self) -> dict[str, Any]:
        """JSON-friendly view of the whole session (camelCase result fields)."""
        return {
            "voiceResult": self._voice_result.to_wire() if self._voice_result else None,
            "faceResult": self._face_result.to_wire() if self._face_result else None,
            "chatHistory": [m.to_dict() for m in self._chat_history],
            "finalReport": self._fused_report.to_wire() if self._fused_report else None,
            "isCrisisMode": self._is_crisis_mode,
        }
