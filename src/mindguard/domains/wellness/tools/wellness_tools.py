"""MCP tools for voice, face, and chat check-ins and the fused report."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fastmcp import FastMCP

from mindguard.domains.wellness.connectors.media import CaptureError, decode_base64_media
from mindguard.domains.wellness.session.controller import (
    AnalysisOutcome,
    SubmissionInProgressError,
)
from mindguard.domains.wellness.session.crisis import DISCLAIMER

if TYPE_CHECKING:
    from mindguard.core.config.settings import Settings
    from mindguard.domains.wellness.session.controller import WellnessSession

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Response helpers
# ---------------------------------------------------------------------------

def _error(message: str) -> dict[str, Any]:
    return {"status": "error", "error": message}


def _render_analysis(session: WellnessSession, outcome: AnalysisOutcome) -> dict[str, Any]:
    if not outcome.ok:
        return _error(outcome.error or "Analysis failed. Please try again.")
    assert outcome.result is not None
    return {
        "status": "ok",
        "kind": outcome.kind,
        "result": outcome.result.to_wire(),
        "results_ready": session.results_ready,
        "crisis": session.crisis.banner(),
        "disclaimer": DISCLAIMER,
    }


def register_wellness_tools(mcp: FastMCP, session: WellnessSession, settings: Settings) -> None:
    """Register the wellness check-in tools on the MCP server.

    All tools share one in-memory session; nothing is persisted.
    """

    @mcp.tool
    async def analyze_voice(audio_base64: str, mime_type: str | None = None) -> dict:
        """Analyze a short voice recording for mental wellness indicators.

        Assesses tone, pace, energy, and emotional markers. Returns a wellness
        score (0-100, higher is better), a risk level, indicators, a summary,
        and a recommendation.

        Args:
            audio_base64: Recorded or uploaded audio as base64, or a
                ``data:audio/...;base64,`` URL.
            mime_type: Audio MIME type when not given by a data URL
                (defaults to audio/webm).
        """
        try:
            audio = decode_base64_media(
                audio_base64,
                kind="audio",
                default_mime_type=settings.default_audio_mime_type,
                mime_type=mime_type,
                max_bytes=settings.max_media_bytes,
            )
            outcome = await session.analyze_voice(audio)
        except (CaptureError, SubmissionInProgressError) as exc:
            return _error(str(exc))
        return _render_analysis(session, outcome)

    @mcp.tool
    async def analyze_face(image_base64: str, mime_type: str | None = None) -> dict:
        """Analyze a still photo of the user's face for wellness indicators.

        Looks at tension, eye contact, and micro-expressions of sadness or
        anxiety. Indicators only, no diagnosis.

        Args:
            image_base64: Captured frame or uploaded image as base64, or a
                ``data:image/...;base64,`` URL.
            mime_type: Image MIME type when not given by a data URL
                (defaults to image/jpeg).
        """
        try:
            image = decode_base64_media(
                image_base64,
                kind="image",
                default_mime_type=settings.default_image_mime_type,
                mime_type=mime_type,
                max_bytes=settings.max_media_bytes,
            )
            outcome = await session.analyze_face(image)
        except (CaptureError, SubmissionInProgressError) as exc:
            return _error(str(exc))
        return _render_analysis(session, outcome)

    @mcp.tool
    async def chat(message: str) -> dict:
        """Talk with the MindGuard companion, a supportive (non-clinical) listener.

        The whole conversation so far is sent as context.

        Args:
            message: What the user wants to say.
        """
        try:
            outcome = await session.send_chat_message(message)
        except (ValueError, SubmissionInProgressError) as exc:
            return _error(str(exc))
        return {
            "status": "ok" if outcome.ok else "degraded",
            "reply": outcome.reply.to_dict(),
            "message_count": len(session.state.chat_history),
            "results_ready": session.results_ready,
            "crisis": session.crisis.banner(),
        }

    @mcp.tool
    async def wellness_report() -> dict:
        """Get the comprehensive report combining voice, face, and chat data.

        Generated once from whatever is available, then reused. Requires at
        least one voice or face analysis, or more than two chat messages.
        """
        outcome = await session.wellness_report()
        if outcome.status == "no_data":
            return {
                "status": "no_data",
                "title": "No Data to Analyze Yet",
                "message": outcome.message,
            }
        if outcome.status == "error":
            return _error(outcome.message or "Analysis failed. Please try again.")
        assert outcome.report is not None
        return {
            "status": "ok",
            "report": outcome.report.to_wire(),
            "sources": {
                "voice": session.state.voice_result is not None,
                "face": session.state.face_result is not None,
                "chat_messages": len(session.state.chat_history),
            },
            "crisis": session.crisis.banner(),
            "disclaimer": DISCLAIMER,
        }

    @mcp.tool
    def session_overview() -> dict:
        """Show everything collected in this session so far."""
        return session.overview()

    @mcp.tool
    def dismiss_crisis() -> dict:
        """Hide the crisis resources after the user confirms they are safe.

        Any later result flagged as a crisis shows them again.
        """
        session.dismiss_crisis()
        return {"status": "ok", "crisis_visible": session.crisis.visible}

    @mcp.tool
    def reset_session() -> dict:
        """Discard all results, the chat transcript, and the cached report."""
        session.reset()
        return {"status": "ok", "session": session.overview()}
