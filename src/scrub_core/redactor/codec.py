"""JSON adapter around the structural walker."""
from __future__ import annotations

import json
import math
from typing import Any, NoReturn

import structlog

from ..errors import InvalidInputError, ParseError
from .walker import Walker

logger = structlog.get_logger(__name__)


def decode(data: bytes | bytearray | str) -> Any:
    if not isinstance(data, (bytes, bytearray, str)):
        raise InvalidInputError(f"Expected JSON bytes or text, got {type(data).__name__}")
    try:
        return json.loads(data, parse_constant=_reject_constant, parse_float=_parse_float)
    except RecursionError as exc:
        logger.debug("redactor.json.parse_error", error="nesting too deep")
        raise ParseError("JSON document is nested too deeply") from exc
    except ValueError as exc:
        logger.debug("redactor.json.parse_error", error=str(exc))
        raise ParseError(f"Malformed JSON: {exc}") from exc


def encode(tree: Any) -> bytes:
    text = json.dumps(tree, sort_keys=True, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    # line and paragraph separators only occur inside strings; keep them escaped
    text = text.replace("\u2028", "\\u2028").replace("\u2029", "\\u2029")
    # lone surrogates survive decoding; write them back as \uXXXX escapes
    return text.encode("utf-8", errors="backslashreplace")


def redact_json(data: bytes | bytearray | str, walker: Walker) -> bytes:
    tree = decode(data)
    try:
        return encode(walker.walk(tree))
    except RecursionError as exc:
        logger.debug("redactor.json.parse_error", error="nesting too deep")
        raise ParseError("JSON document is nested too deeply") from exc


def _reject_constant(token: str) -> NoReturn:
    raise ValueError(f"{token} is not valid JSON")


def _parse_float(token: str) -> float:
    value = float(token)
    if math.isinf(value):
        raise ValueError(f"{token} is out of range for a float")
    return value


__all__ = ["decode", "encode", "redact_json"]
