"""Media capture connectors — abstraction layer for audio and image input."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from mindguard.domains.wellness.connectors.media import CaptureError, MediaPayload


@runtime_checkable
class CaptureDevice(Protocol):
    """Abstract interface for a microphone or camera.

    The session never touches hardware directly: an MCP host or a local
    adapter implements this, and ``scoped_capture`` guarantees ``release``
    runs on every exit path.
    """

    async def acquire(self) -> None:
        """Open the device stream; raise CaptureError if unavailable or denied."""
        ...

    async def capture(self) -> MediaPayload:
        """Record audio or grab a single frame from the open stream."""
        ...

    async def release(self) -> None:
        """Stop all tracks and free the device. Must be safe to call twice."""
        ...

    @property
    def device_kind(self) -> str:
        """'microphone' or 'camera'."""
        ...


__all__ = ["CaptureDevice", "CaptureError", "MediaPayload"]
