"""Media payloads and decoding of uploaded / captured audio and images."""

from __future__ import annotations

import base64
import binascii
import logging
import mimetypes
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from mindguard.core.llm.provider import MediaPart

logger = logging.getLogger(__name__)

MediaKind = Literal["audio", "image"]

_DATA_URL = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?:;[\w=.+-]+)*;base64,", re.IGNORECASE)

# mimetypes maps container extensions to video/*; a recorded clip is audio.
_AUDIO_CONTAINER_ALIASES = {
    "video/webm": "audio/webm",
    "video/ogg": "audio/ogg",
    "video/mp4": "audio/mp4",
}


class CaptureError(Exception):
    """Media could not be captured or decoded (permission, device, bad upload)."""


@dataclass(frozen=True)
class MediaPayload:
    """Opaque media bytes plus their MIME type."""

    data: bytes
    mime_type: str
    source: str = "upload"

    @property
    def size(self) -> int:
        return len(self.data)

    def to_part(self) -> MediaPart:
        return MediaPart(mime_type=self.mime_type, data=self.data)


def _normalize_mime(mime_type: str, kind: MediaKind) -> str:
    mime_type = mime_type.strip().lower()
    if kind == "audio":
        mime_type = _AUDIO_CONTAINER_ALIASES.get(mime_type, mime_type)
    if not mime_type.startswith(f"{kind}/"):
        raise CaptureError(f"Expected {kind} media, got {mime_type!r}")
    return mime_type


def _check_size(data: bytes, max_bytes: int | None) -> None:
    if not data:
        raise CaptureError("Media payload is empty")
    if max_bytes is not None and len(data) > max_bytes:
        raise CaptureError(
            f"Media payload is {len(data)} bytes; the limit is {max_bytes} bytes"
        )


def decode_base64_media(
    value: str,
    *,
    kind: MediaKind,
    default_mime_type: str,
    mime_type: str | None = None,
    max_bytes: int | None = None,
) -> MediaPayload:
    """Decode raw base64 or a ``data:<mime>;base64,`` URL into a MediaPayload.

    MIME type precedence: the data URL, then ``mime_type``, then the default.
    """
    value = (value or "").strip()
    url_match = _DATA_URL.match(value)
    if url_match:
        value = value[url_match.end():]
        mime_type = url_match.group("mime") or mime_type

    try:
        data = base64.b64decode("".join(value.split()), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise CaptureError(f"Media payload is not valid base64: {exc}") from exc

    _check_size(data, max_bytes)
    return MediaPayload(
        data=data,
        mime_type=_normalize_mime(mime_type or default_mime_type, kind),
        source="upload",
    )


def load_media_file(
    path: str | Path,
    *,
    kind: MediaKind,
    default_mime_type: str,
    max_bytes: int | None = None,
) -> MediaPayload:
    """Read a user-selected file; the MIME type is guessed from its name."""
    path = Path(path).expanduser()
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise CaptureError(f"Could not read media file {path.name}: {exc.strerror}") from exc

    _check_size(data, max_bytes)
    guessed, _ = mimetypes.guess_type(path.name)
    logger.debug("Loaded %s file %s (%d bytes, %s)", kind, path.name, len(data), guessed)
    return MediaPayload(
        data=data,
        mime_type=_normalize_mime(guessed or default_mime_type, kind),
        source="file",
    )
