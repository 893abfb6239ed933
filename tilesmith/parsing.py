"""Helpers for turning raw LLM output into layout payloads."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from pydantic import ValidationError

from tilesmith.logging_utils import log_error


class LayoutParseError(ValueError):
    """Raised when LLM output cannot be read as a JSON object.

    This is the only error the fill engine raises for bad LLM data;
    callers fall back to another layout strategy or report the failure.
    """

    def __init__(self, message: str, *, raw_text: str) -> None:
        self.raw_text = raw_text
        super().__init__(message)


def _truncate_preview(value: Any, *, limit: int = 80) -> str:
    """Return a compact preview of the offending input value."""

    if value is None:
        return "null"
    text = repr(value)
    if len(text) > limit:
        return text[: limit - 3] + "..."
    return text


def describe_validation_error(error: ValidationError) -> List[str]:
    """Convert a pydantic ValidationError into one readable line per issue.

    Each line carries the dotted field path, the message, the error type
    and a short preview of the offending value, e.g.
    ``width: Input should be greater than 0 [type=greater_than] | received=-6``.
    """

    issues: List[str] = []
    for err in error.errors(include_url=False):
        loc = ".".join(str(part) for part in err.get("loc", [])) or "root"
        details = f"{loc}: {err.get('msg', 'validation error')}"
        err_type = err.get("type")
        if err_type:
            details += f" [type={err_type}]"
        if "input" in err:
            details += f" | received={_truncate_preview(err.get('input'))}"
        issues.append(details)

    if not issues:
        issues.append("root: value did not match the expected schema")
    return issues


def strip_code_fences(text: str) -> str:
    """Remove a surrounding Markdown code fence (```json ... ```) if present."""

    cleaned = text.strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[len("```json"):]
    elif cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    return cleaned.strip()


def parse_json_object(text: str) -> Dict[str, Any]:
    """Decode LLM text into a JSON object.

    Raises:
        LayoutParseError: If the text (after fence stripping) is not valid
            JSON or does not decode to an object.
    """

    cleaned = strip_code_fences(text)
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        log_error(f"Failed to parse LLM response: {_truncate_preview(text)}")
        raise LayoutParseError(
            f"LLM response is not valid JSON: {exc.msg} (line {exc.lineno}, column {exc.colno})",
            raw_text=text,
        ) from exc

    if not isinstance(payload, dict):
        log_error(f"LLM response is not a JSON object: {_truncate_preview(payload)}")
        raise LayoutParseError(
            f"LLM response must be a JSON object, got {type(payload).__name__}",
            raw_text=text,
        )
    return payload


__all__ = [
    "LayoutParseError",
    "describe_validation_error",
    "strip_code_fences",
    "parse_json_object",
]
