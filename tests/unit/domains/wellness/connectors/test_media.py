"""Tests for media decoding — base64 uploads, data URLs, and files."""

from __future__ import annotations

import base64

import pytest

from mindguard.core.llm.provider import MediaPart
from mindguard.domains.wellness.connectors.media import (
    CaptureError,
    MediaPayload,
    decode_base64_media,
    load_media_file,
)

AUDIO_BYTES = b"\x1aE\xdf\xa3opus-frames"
IMAGE_BYTES = b"\xff\xd8\xff\xe0jfif-frame"


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


class TestDecodeBase64Media:
    def test_raw_base64_uses_default_mime(self):
        payload = decode_base64_media(
            _b64(AUDIO_BYTES), kind="audio", default_mime_type="audio/webm"
        )
        assert payload.data == AUDIO_BYTES
        assert payload.mime_type == "audio/webm"
        assert payload.source == "upload"

    def test_data_url_mime_wins(self):
        value = f"data:audio/wav;base64,{_b64(AUDIO_BYTES)}"
        payload = decode_base64_media(
            value, kind="audio", default_mime_type="audio/webm", mime_type="audio/mpeg"
        )
        assert payload.mime_type == "audio/wav"
        assert payload.data == AUDIO_BYTES

    def test_data_url_with_codec_parameter(self):
        value = f"data:audio/webm;codecs=opus;base64,{_b64(AUDIO_BYTES)}"
        payload = decode_base64_media(value, kind="audio", default_mime_type="audio/ogg")
        assert payload.mime_type == "audio/webm"

    def test_explicit_mime_beats_default(self):
        payload = decode_base64_media(
            _b64(IMAGE_BYTES), kind="image", default_mime_type="image/jpeg", mime_type="IMAGE/PNG"
        )
        assert payload.mime_type == "image/png"

    def test_video_container_treated_as_audio(self):
        payload = decode_base64_media(
            _b64(AUDIO_BYTES), kind="audio", default_mime_type="audio/webm", mime_type="video/webm"
        )
        assert payload.mime_type == "audio/webm"

    def test_line_wrapped_base64_accepted(self):
        encoded = _b64(IMAGE_BYTES * 8)
        wrapped = "\n".join(encoded[i:i + 16] for i in range(0, len(encoded), 16))
        payload = decode_base64_media(wrapped, kind="image", default_mime_type="image/jpeg")
        assert payload.data == IMAGE_BYTES * 8

    def test_invalid_base64_rejected(self):
        with pytest.raises(CaptureError, match="not valid base64"):
            decode_base64_media("not*base64!", kind="audio", default_mime_type="audio/webm")

    def test_empty_payload_rejected(self):
        with pytest.raises(CaptureError, match="empty"):
            decode_base64_media("", kind="image", default_mime_type="image/jpeg")

    def test_size_limit_enforced(self):
        with pytest.raises(CaptureError, match="limit"):
            decode_base64_media(
                _b64(b"x" * 64), kind="image", default_mime_type="image/jpeg", max_bytes=32
            )

    def test_wrong_media_kind_rejected(self):
        with pytest.raises(CaptureError, match="Expected image media"):
            decode_base64_media(
                f"data:audio/wav;base64,{_b64(AUDIO_BYTES)}",
                kind="image",
                default_mime_type="image/jpeg",
            )


class TestLoadMediaFile:
    def test_mime_guessed_from_extension(self, tmp_path):
        path = tmp_path / "selfie.png"
        path.write_bytes(IMAGE_BYTES)

        payload = load_media_file(path, kind="image", default_mime_type="image/jpeg")

        assert payload.mime_type == "image/png"
        assert payload.source == "file"
        assert payload.size == len(IMAGE_BYTES)

    def test_webm_recording_loaded_as_audio(self, tmp_path):
        path = tmp_path / "check-in.webm"
        path.write_bytes(AUDIO_BYTES)

        payload = load_media_file(path, kind="audio", default_mime_type="audio/webm")

        assert payload.mime_type == "audio/webm"

    def test_missing_file_raises_capture_error(self, tmp_path):
        with pytest.raises(CaptureError, match="Could not read media file"):
            load_media_file(tmp_path / "gone.wav", kind="audio", default_mime_type="audio/webm")

    def test_non_media_file_rejected(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("dear diary")
        with pytest.raises(CaptureError):
            load_media_file(path, kind="image", default_mime_type="image/jpeg")


def test_payload_converts_to_media_part():
    part = MediaPayload(data=IMAGE_BYTES, mime_type="image/jpeg").to_part()
    assert isinstance(part, MediaPart)
    assert part.is_image
    assert part.base64_data == _b64(IMAGE_BYTES)
