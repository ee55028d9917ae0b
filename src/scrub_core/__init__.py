"""scrub_core: redact identifying and secret-bearing values from data.

Module-level helpers run against a process-wide engine built from the
built-in rules; build a :class:`RedactionEngine` for anything else.
"""
from __future__ import annotations

from typing import TypeVar

from .classifier import NameClassifier
from .errors import InvalidInputError, ParseError, ScrubError
from .models import REDACTED, Action, Strategy
from .redactor import RedactionEngine, Scrubbable, default_engine, scrub_field
from .scanner import Detector, DetectorRegistry, Scanner
from .version import __version__

T = TypeVar("T")


def scan_text(text: str) -> str:
    return default_engine().scan_text(text)


def classify_keyed(key: str, value: str) -> str:
    return default_engine().classify_keyed(key, value)


def redact_record(record: T) -> T:
    return default_engine().redact_record(record)


def redact_copy(value: T) -> T:
    return default_engine().redact_copy(value)


def redact_json_bytes(data: bytes | bytearray | str) -> bytes:
    return default_engine().redact_json_bytes(data)


__all__ = [
    "REDACTED",
    "Action",
    "Detector",
    "DetectorRegistry",
    "InvalidInputError",
    "NameClassifier",
    "ParseError",
    "RedactionEngine",
    "Scanner",
    "ScrubError",
    "Scrubbable",
    "Strategy",
    "__version__",
    "classify_keyed",
    "default_engine",
    "redact_copy",
    "redact_json_bytes",
    "redact_record",
    "scan_text",
    "scrub_field",
]
