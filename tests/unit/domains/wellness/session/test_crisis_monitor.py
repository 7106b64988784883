"""Tests for the crisis interstitial flow."""

from __future__ import annotations

from mindguard.domains.wellness.session.crisis import CRISIS_RESOURCES, CrisisMonitor
from mindguard.domains.wellness.session.state import SessionState


def test_non_crisis_result_keeps_interstitial_hidden():
    monitor = CrisisMonitor(SessionState())
    assert monitor.check("voice", False) is False
    assert monitor.visible is False
    assert monitor.banner() is None


def test_trigger_shows_interstitial_and_counts():
    state = SessionState()
    monitor = CrisisMonitor(state)

    monitor.check("face", True)

    assert state.is_crisis_mode is True
    assert monitor.trigger_count == 1
    assert monitor.sources == ["face"]
    assert monitor.banner()["contacts"][0]["href"] == "tel:988"


def test_dismissal_does_not_suppress_later_triggers():
    monitor = CrisisMonitor(SessionState())
    monitor.trigger("chat")
    monitor.dismiss()
    assert monitor.visible is False

    monitor.trigger("fusion")

    assert monitor.visible is True
    assert monitor.trigger_count == 2
    assert monitor.sources == ["chat", "fusion"]


def test_resources_include_text_line_and_emergency():
    labels = [c["label"] for c in CRISIS_RESOURCES["contacts"]]
    assert "Text HOME to 741741" in labels
    assert "911" in CRISIS_RESOURCES["emergency"]
