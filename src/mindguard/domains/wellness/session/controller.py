"""Wellness session — commits analysis results and drives the crisis flow.

This is the caller side of the analysis contract: the analyzer only returns
results, and everything that changes what the user sees happens here.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterator, Literal

from mindguard.core.llm.errors import AnalysisFailedError
from mindguard.domains.wellness.connectors.capture import capture_media
from mindguard.domains.wellness.connectors.media import CaptureError, MediaPayload
from mindguard.domains.wellness.domain_logic.analysis_models import (
    AnalysisKind,
    AnalysisResult,
    ChatMessage,
)
from mindguard.domains.wellness.session.crisis import CrisisMonitor
from mindguard.domains.wellness.session.state import SessionState

if TYPE_CHECKING:
    from mindguard.domains.wellness.connectors import CaptureDevice
    from mindguard.domains.wellness.domain_logic.analyzer import WellnessAnalyzer

logger = logging.getLogger(__name__)

ANALYSIS_FAILED_MESSAGE = "Analysis failed. Please try again."
CHAT_FALLBACK_MESSAGE = (
    "I'm having a little trouble connecting right now. "
    "Please check your internet connection."
)
NO_DATA_MESSAGE = (
    "Please complete at least one analysis (Voice, Face, or Chat) to generate "
    "your comprehensive mental wellness report."
)
REPORT_INTERRUPTED_MESSAGE = "The session was reset before the report was ready."


class SubmissionInProgressError(Exception):
    """A request of the same kind is still in flight."""


@dataclass
class AnalysisOutcome:
    """Result of one voice or face submission."""

    kind: str
    result: AnalysisResult | None = None
    error: str | None = None
    crisis: bool = False

    @property
    def ok(self) -> bool:
        return self.result is not None


@dataclass
class ChatOutcome:
    """Result of one chat turn; ``reply`` is always appended to the transcript."""

    reply: ChatMessage
    ok: bool
    crisis: bool = False


@dataclass
class ReportOutcome:
    """Result of asking for the fused report."""

    status: Literal["ready", "no_data", "error"]
    report: AnalysisResult | None = None
    message: str | None = None
    generated: bool = False


class WellnessSession:
    """One user's check-in session.

    Submissions of different kinds run concurrently and write disjoint
    fields; resubmitting a kind that is still in flight is rejected. The fused
    report is generated at most once per session (shared in-flight task) and
    then served from the cache until ``reset``.
    """

    def __init__(self, analyzer: WellnessAnalyzer) -> None:
        self.analyzer = analyzer
        self.state = SessionState()
        self.crisis = CrisisMonitor(self.state)
        self._in_flight: set[str] = set()
        self._fusion_task: asyncio.Task[AnalysisResult] | None = None

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    @property
    def results_ready(self) -> bool:
        return self.state.has_report_data

    @property
    def in_flight(self) -> list[str]:
        return sorted(self._in_flight)

    def overview(self) -> dict[str, Any]:
        return {
            **self.state.snapshot(),
            "resultsReady": self.results_ready,
            "inFlight": self.in_flight,
            "crisis": self.crisis.banner(),
        }

    @contextmanager
    def _submission(self, kind: str) -> Iterator[None]:
        # Bound to the set current at submission time; reset swaps in a new one.
        in_flight = self._in_flight
        if kind in in_flight:
            raise SubmissionInProgressError(f"A {kind} request is already in progress")
        in_flight.add(kind)
        try:
            yield
        finally:
            in_flight.discard(kind)

    # ------------------------------------------------------------------
    # Voice / face
    # ------------------------------------------------------------------

    async def analyze_voice(self, audio: MediaPayload) -> AnalysisOutcome:
        kind = AnalysisKind.VOICE.value
        state, crisis = self.state, self.crisis
        with self._submission(kind):
            try:
                result = await self.analyzer.analyze_voice(audio)
            except AnalysisFailedError as exc:
                logger.warning("Voice analysis failed: %s", exc)
                return AnalysisOutcome(kind=kind, error=ANALYSIS_FAILED_MESSAGE)

        state.set_voice_result(result)
        return AnalysisOutcome(kind=kind, result=result, crisis=crisis.check(kind, result.is_crisis))

    async def analyze_face(self, image: MediaPayload) -> AnalysisOutcome:
        kind = AnalysisKind.FACE.value
        state, crisis = self.state, self.crisis
        with self._submission(kind):
            try:
                result = await self.analyzer.analyze_face(image)
            except AnalysisFailedError as exc:
                logger.warning("Face analysis failed: %s", exc)
                return AnalysisOutcome(kind=kind, error=ANALYSIS_FAILED_MESSAGE)

        state.set_face_result(result)
        return AnalysisOutcome(kind=kind, result=result, crisis=crisis.check(kind, result.is_crisis))

    async def record_voice(self, microphone: CaptureDevice) -> AnalysisOutcome:
        """Record from a live microphone, release it, then analyze the clip."""
        try:
            audio = await capture_media(microphone)
        except CaptureError as exc:
            return AnalysisOutcome(kind=AnalysisKind.VOICE.value, error=str(exc))
        return await self.analyze_voice(audio)

    async def capture_face(self, camera: CaptureDevice) -> AnalysisOutcome:
        """Grab one frame from a live camera, release it, then analyze it."""
        try:
            image = await capture_media(camera)
        except CaptureError as exc:
            return AnalysisOutcome(kind=AnalysisKind.FACE.value, error=str(exc))
        return await self.analyze_face(image)

    # ------------------------------------------------------------------
    # Chat
    # ------------------------------------------------------------------

    async def send_chat_message(self, text: str) -> ChatOutcome:
        """Append the user's message, ask the companion, append its reply.

        On any oracle failure a fixed fallback reply is appended instead, so
        the turn is never silently dropped.
        """
        if not text or not text.strip():
            raise ValueError("Chat message must not be empty")

        kind = AnalysisKind.CHAT.value
        state, crisis = self.state, self.crisis
        with self._submission(kind):
            prior = state.chat_history
            state.append_chat_message(ChatMessage(role="user", text=text))
            try:
                reply = await self.analyzer.chat(prior, text)
            except AnalysisFailedError as exc:
                logger.warning("Chat turn failed: %s", exc)
                fallback = ChatMessage(role="model", text=CHAT_FALLBACK_MESSAGE)
                state.append_chat_message(fallback)
                return ChatOutcome(reply=fallback, ok=False)

        is_crisis = crisis.check(kind, reply.is_crisis)
        message = ChatMessage(role="model", text=reply.text)
        state.append_chat_message(message)
        return ChatOutcome(reply=message, ok=True, crisis=is_crisis)

    # ------------------------------------------------------------------
    # Fused report
    # ------------------------------------------------------------------

    async def wellness_report(self) -> ReportOutcome:
        """Return the fused report, generating it on first request."""
        state = self.state
        if state.fused_report is not None:
            return ReportOutcome(status="ready", report=state.fused_report)
        if not state.has_report_data:
            return ReportOutcome(status="no_data", message=NO_DATA_MESSAGE)

        task = self._fusion_task
        created = task is None
        if task is None:
            task = asyncio.get_running_loop().create_task(self._generate_report(state, self.crisis))
            self._fusion_task = task

        try:
            # Shielded so one caller going away does not cancel the shared call.
            report = await asyncio.shield(task)
        except AnalysisFailedError as exc:
            logger.warning("Fusion report failed: %s", exc)
            return ReportOutcome(status="error", message=ANALYSIS_FAILED_MESSAGE)
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if not task.cancelled() or (current is not None and current.cancelling()):
                raise
            logger.info("Fusion report abandoned by session reset")
            return ReportOutcome(status="error", message=REPORT_INTERRUPTED_MESSAGE)
        finally:
            if self._fusion_task is task and task.done():
                self._fusion_task = None

        return ReportOutcome(status="ready", report=report, generated=created)

    async def _generate_report(self, state: SessionState, crisis: CrisisMonitor) -> AnalysisResult:
        report = await self.analyzer.fuse(state.voice_result, state.face_result, state.chat_history)
        state.set_fused_report(report)
        crisis.check(AnalysisKind.FUSION.value, report.is_crisis)
        return report

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def dismiss_crisis(self) -> None:
        self.crisis.dismiss()

    def reset(self) -> None:
        """Start over with empty state, as a full reload would."""
        if self._fusion_task is not None and not self._fusion_task.done():
            self._fusion_task.cancel()
        self._fusion_task = None
        self._in_flight = set()
        self.state = SessionState()
        self.crisis = CrisisMonitor(self.state)
        logger.info("Wellness session reset")
