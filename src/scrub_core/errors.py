"""Exceptions raised by the redaction engine."""
from __future__ import annotations


class ScrubError(Exception):
    """Base class for every error raised by scrub_core."""


class InvalidInputError(ScrubError, TypeError):
    """Raised when a value cannot be traversed or mutated in place."""


class ParseError(ScrubError, ValueError):
    """Raised when a JSON document is not well formed."""


__all__ = ["ScrubError", "InvalidInputError", "ParseError"]
