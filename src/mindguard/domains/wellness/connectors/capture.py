"""Scoped device capture — acquire, capture, and always release."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, AsyncIterator

from mindguard.domains.wellness.connectors.media import CaptureError, MediaPayload

if TYPE_CHECKING:
    from mindguard.domains.wellness.connectors import CaptureDevice

logger = logging.getLogger(__name__)


def _access_message(device: CaptureDevice) -> str:
    return f"Could not access {device.device_kind}. Please check permissions."


async def _release(device: CaptureDevice) -> None:
    try:
        await device.release()
    except Exception:
        # Never let a failed release mask the capture outcome.
        logger.exception("Failed to release %s", device.device_kind)


@asynccontextmanager
async def scoped_capture(device: CaptureDevice) -> AsyncIterator[CaptureDevice]:
    """Hold a capture device open for the duration of the block.

    The device is released when the block exits normally, raises, or is
    cancelled, and also when ``acquire`` itself fails part-way.
    """
    try:
        await device.acquire()
    except CaptureError:
        await _release(device)
        raise
    except Exception as exc:
        await _release(device)
        raise CaptureError(_access_message(device)) from exc

    logger.debug("Acquired %s", device.device_kind)
    try:
        yield device
    finally:
        await _release(device)
        logger.debug("Released %s", device.device_kind)


async def capture_media(device: CaptureDevice) -> MediaPayload:
    """Acquire ``device``, take one recording or frame, and release it."""
    async with scoped_capture(device) as active:
        try:
            payload = await active.capture()
        except CaptureError:
            raise
        except Exception as exc:
            raise CaptureError(f"Capture from {device.device_kind} failed") from exc

    if not payload.data:
        raise CaptureError(f"Nothing was captured from {device.device_kind}")
    return payload
