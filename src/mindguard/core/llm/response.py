"""Response parsing and schema validation for oracle output."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from mindguard.core.llm.errors import InvalidResponseShapeError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_CODE_FENCE = re.compile(r"^```(?:json)?\s*\n?(.*?)\n?```$", re.DOTALL | re.IGNORECASE)


def strip_code_fence(content: str) -> str:
    """Remove a surrounding Markdown code fence, if any.

    Providers without server-side schema enforcement sometimes wrap the JSON
    object in a ```json block.
    """
    stripped = content.strip()
    match = _CODE_FENCE.match(stripped)
    if match:
        return match.group(1).strip()
    return stripped


def parse_json_object(content: str, *, kind: str = "") -> dict[str, Any]:
    """Parse oracle text into a JSON object, or raise InvalidResponseShapeError."""
    text = strip_code_fence(content or "")
    if not text:
        raise InvalidResponseShapeError(f"Empty response from oracle ({kind})", kind=kind)

    try:
        parsed: Any = json.loads(text)
    except (json.JSONDecodeError, TypeError) as exc:
        raise InvalidResponseShapeError(
            f"Invalid JSON from oracle ({kind}): {exc}", kind=kind
        ) from exc

    if not isinstance(parsed, dict):
        raise InvalidResponseShapeError(
            f"Expected JSON object from oracle ({kind}), got {type(parsed).__name__}",
            kind=kind,
        )
    return parsed


def _format_validation_errors(exc: ValidationError) -> list[str]:
    details: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "<root>"
        details.append(f"{loc}: {err.get('msg', 'invalid')}")
    return details


def validate_response(content: str, model: type[ModelT], *, kind: str = "") -> ModelT:
    """Parse oracle text and validate it against the declared response model.

    Out-of-range scores and unknown enum tokens are rejected, not coerced.
    """
    payload = parse_json_object(content, kind=kind)
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        details = _format_validation_errors(exc)
        logger.warning(
            "Oracle response failed %s validation (%d errors): %s",
            model.__name__,
            len(details),
            "; ".join(details),
        )
        raise InvalidResponseShapeError(
            f"Oracle response does not match {model.__name__} ({kind})",
            kind=kind,
            details=details,
        ) from exc
