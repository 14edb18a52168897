"""JSON parsing helpers for generator output with schema validation and retry."""

from __future__ import annotations

import json
import logging
import re
from typing import Callable, Type, TypeVar

from pydantic import BaseModel, ValidationError

T = TypeVar("T", bound=BaseModel)

logger = logging.getLogger(__name__)


def parse_json_with_schema(raw: str, schema: Type[T]) -> T:
    data = json.loads(raw, strict=False)
    return schema.model_validate(data)


def _sanitize_invalid_escapes(raw: str) -> str:
    return re.sub(r'\\([^"\\/bfnrtu])', r"\1", raw)


def _extract_json_object(raw: str) -> str | None:
    if not raw:
        return None
    start = raw.find("{")
    if start == -1:
        return None
    depth = 0
    in_string = False
    escaped = False
    for idx in range(start, len(raw)):
        char = raw[idx]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return raw[start : idx + 1]
    return None


def _parse_candidates(raw: str, schema: Type[T]) -> T:
    """Try the raw text, its sanitized form, then the embedded object."""
    candidates = [raw, _sanitize_invalid_escapes(raw)]
    extracted = _extract_json_object(raw)
    if extracted:
        candidates.append(_sanitize_invalid_escapes(extracted))

    last_error: Exception | None = None
    for candidate in candidates:
        try:
            return parse_json_with_schema(candidate, schema)
        except (json.JSONDecodeError, ValidationError) as exc:
            last_error = exc
    raise ValueError("Unable to parse generator JSON.") from last_error


def parse_with_retry(
    raw: str,
    schema: Type[T],
    retry_fn: Callable[[str], str] | None = None,
) -> T:
    """Parse JSON with schema; retry once using retry_fn if invalid.

    Raises
    ------
    ValueError
        When neither the raw text nor the retried text yields a valid object.
    """
    if raw and raw.strip():
        try:
            return _parse_candidates(raw, schema)
        except ValueError:
            if retry_fn is None:
                raise
            logger.warning("Generator JSON invalid, retrying once")
    elif retry_fn is None:
        raise ValueError("Generator output is empty.")

    corrected = retry_fn(raw)
    if not corrected or not corrected.strip():
        raise ValueError("Unable to parse generator JSON after retry.")
    return _parse_candidates(corrected, schema)
