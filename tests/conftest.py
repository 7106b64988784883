"""Shared test fixtures for MindGuard tests."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import pytest

# ---------------------------------------------------------------------------
# Test hermeticity
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _force_hermetic_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LLM_PROVIDER", "mock")
    monkeypatch.setenv("GEMINI_API_KEY", "")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "")
    monkeypatch.setenv("OPENAI_API_KEY", "")
    monkeypatch.setenv("INSTRUCTIONS_DIR", "")

# Allow running tests without `pip install -e .` by making `src/` importable.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_SRC_DIR = _PROJECT_ROOT / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from mindguard.core.instructions.loader import load_instruction_directory  # noqa: E402
from mindguard.core.instructions.registry import InstructionRegistry  # noqa: E402
from mindguard.core.llm.client import OracleClient  # noqa: E402
from mindguard.core.llm.providers.mock import MockProvider  # noqa: E402
from mindguard.domains.wellness.connectors.media import MediaPayload  # noqa: E402
from mindguard.domains.wellness.domain_logic.analyzer import WellnessAnalyzer  # noqa: E402
from mindguard.domains.wellness.session.controller import WellnessSession  # noqa: E402

INSTRUCTION_DIR = _SRC_DIR / "mindguard" / "domains" / "wellness" / "instructions"


# ---------------------------------------------------------------------------
# Canned oracle replies (camelCase, as the model returns them)
# ---------------------------------------------------------------------------

def make_analysis_payload(**overrides: Any) -> dict[str, Any]:
    """A valid base AnalysisResult payload with optional overrides."""
    payload: dict[str, Any] = {
        "wellnessScore": 82,
        "riskLevel": "low",
        "indicators": [],
        "summary": "You sound settled and steady today.",
        "recommendation": "Keep up your evening walks.",
        "isCrisis": False,
    }
    payload.update(overrides)
    return payload


def make_voice_payload(**overrides: Any) -> dict[str, Any]:
    payload = make_analysis_payload(tone="calm", pace="steady", energy="moderate")
    payload.update(overrides)
    return payload


def make_face_payload(**overrides: Any) -> dict[str, Any]:
    payload = make_analysis_payload(
        wellnessScore=64,
        riskLevel="moderate",
        indicators=[
            {
                "name": "Brow tension",
                "value": "elevated",
                "description": "Furrowed brow held through the frame.",
                "severity": "medium",
            }
        ],
        expression="tense",
        eyeContact="averted",
    )
    payload.update(overrides)
    return payload


def make_chat_payload(text: str = "That sounds like a lot. I'm here with you.", is_crisis: bool = False) -> dict[str, Any]:
    return {"text": text, "isCrisis": is_crisis}


def as_reply(payload: dict[str, Any]) -> str:
    return json.dumps(payload)


# ---------------------------------------------------------------------------
# Core fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def instruction_registry() -> InstructionRegistry:
    """Registry loaded with the bundled wellness instruction templates."""
    registry = InstructionRegistry()
    load_instruction_directory(INSTRUCTION_DIR, registry)
    return registry


@pytest.fixture
def mock_provider() -> MockProvider:
    """Mock provider answering every kind with a canned valid payload."""
    return MockProvider()


@pytest.fixture
def oracle(mock_provider: MockProvider) -> OracleClient:
    return OracleClient(mock_provider)


@pytest.fixture
def analyzer(oracle: OracleClient, instruction_registry: InstructionRegistry) -> WellnessAnalyzer:
    return WellnessAnalyzer(oracle, instruction_registry)


@pytest.fixture
def session(analyzer: WellnessAnalyzer) -> WellnessSession:
    return WellnessSession(analyzer)


@pytest.fixture
def audio_payload() -> MediaPayload:
    return MediaPayload(data=b"\x1aE\xdf\xa3fake-webm-audio", mime_type="audio/webm")


@pytest.fixture
def image_payload() -> MediaPayload:
    return MediaPayload(data=b"\xff\xd8\xff\xe0fake-jpeg", mime_type="image/jpeg")
