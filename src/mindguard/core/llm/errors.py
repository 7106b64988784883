"""Exceptions raised by the model oracle client."""

from __future__ import annotations


class AnalysisFailedError(Exception):
    """Base exception: an oracle request did not produce a usable result.

    Transport and validation failures share this base so callers can treat
    them identically at the UI boundary.
    """

    def __init__(self, message: str, *, kind: str = "") -> None:
        super().__init__(message)
        self.kind = kind


class OracleTransportError(AnalysisFailedError):
    """The provider call itself failed (network, auth, unsupported media)."""


class InvalidResponseShapeError(AnalysisFailedError):
    """The oracle replied, but the reply is empty, not JSON, or off-schema."""

    def __init__(self, message: str, *, kind: str = "", details: list[str] | None = None) -> None:
        super().__init__(message, kind=kind)
        self.details = details or []
