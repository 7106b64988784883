"""Crisis monitor — raises the session-wide crisis interstitial."""

from __future__ import annotations

import logging
from typing import Any

from mindguard.domains.wellness.session.state import SessionState

logger = logging.getLogger(__name__)

DISCLAIMER = "AI indicators only. Not a medical diagnosis. In crisis? Call 988."

CRISIS_RESOURCES: dict[str, Any] = {
    "headline": "You Are Not Alone",
    "message": (
        "It seems like you might be going through a difficult time. Please reach out "
        "for support immediately. There are people who care and want to help."
    ),
    "contacts": [
        {"label": "Call 988 (Suicide & Crisis Lifeline)", "href": "tel:988"},
        {"label": "Text HOME to 741741", "href": "sms:741741"},
    ],
    "emergency": (
        "If you are in immediate danger, please call 911 or go to the nearest "
        "emergency room."
    ),
    "dismiss_label": "I am safe now, return to app",
}


class CrisisMonitor:
    """Shows the interstitial once per crisis-flagged result.

    Dismissal only hides the interstitial; every later result is checked on
    its own, so a new crisis flag shows it again.
    """

    def __init__(self, state: SessionState) -> None:
        self._state = state
        self.trigger_count = 0
        self.sources: list[str] = []

    @property
    def visible(self) -> bool:
        return self._state.is_crisis_mode

    def check(self, source: str, is_crisis: bool) -> bool:
        """Trigger the interstitial if ``is_crisis``; return whether it did."""
        if is_crisis:
            self.trigger(source)
        return is_crisis

    def trigger(self, source: str) -> None:
        self._state.set_crisis_mode(True)
        self.trigger_count += 1
        self.sources.append(source)
        logger.warning("Crisis flag raised by %s result (trigger #%d)", source, self.trigger_count)

    def dismiss(self) -> None:
        self._state.set_crisis_mode(False)
        logger.info("Crisis interstitial dismissed")

    def banner(self) -> dict[str, Any] | None:
        """Crisis resources to render, or None when the interstitial is hidden."""
        if not self.visible:
            return None
        return dict(CRISIS_RESOURCES)
