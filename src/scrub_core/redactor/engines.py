"""Redaction engine facade."""
from __future__ import annotations

import copy
from collections.abc import MutableMapping, MutableSequence, MutableSet
from enum import Enum
from typing import TYPE_CHECKING, Any, NoReturn, TypeVar

import structlog

from ..classifier import NameClassifier
from ..errors import InvalidInputError
from ..scanner import Scanner
from .codec import redact_json
from .records import is_frozen, record_fields
from .walker import Walker

if TYPE_CHECKING:
    from ..config import AppConfig

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class RedactionEngine:
    """Entry point tying together the classifier, the scanner and the walker.

    An engine holds no per-call state; one instance can serve concurrent
    callers as long as they do not hand it the same data at the same time.
    """

    def __init__(self, scanner: Scanner | None = None, classifier: NameClassifier | None = None) -> None:
        self.scanner = scanner or Scanner()
        self.classifier = classifier or NameClassifier()
        self.walker = Walker(self.classifier, self.scanner)

    @classmethod
    def from_config(cls, config: "AppConfig") -> "RedactionEngine":
        return cls(scanner=config.rules.build_scanner(), classifier=config.rules.build_classifier())

    def scan_text(self, text: str) -> str:
        return self.scanner.redact(text)

    def classify_keyed(self, key: str, value: str) -> str:
        return self.walker.redact_string(value, key)

    def redact_record(self, record: T) -> T:
        """Redact ``record`` in place and return it."""

        _ensure_mutable(record)
        return self._walk(record)

    def redact_copy(self, value: T) -> T:
        """Return a redacted deep copy of ``value``; the original is untouched."""

        try:
            duplicate = copy.deepcopy(value)
        except (TypeError, copy.Error, RecursionError) as exc:
            raise InvalidInputError(f"Cannot copy {type(value).__name__}: {exc}") from exc
        return self._walk(duplicate)

    def redact_json_bytes(self, data: bytes | bytearray | str) -> bytes:
        return redact_json(data, self.walker)

    def _walk(self, value: T) -> T:
        try:
            return self.walker.walk(value)
        except RecursionError as exc:
            _reject(value, "is nested too deeply", exc)


def _ensure_mutable(value: Any) -> None:
    if isinstance(value, (bytes, bytearray, memoryview, str, Enum)):
        _reject(value, "is not a composite")
    if isinstance(value, (MutableMapping, MutableSequence, MutableSet)):
        return
    fields = record_fields(value)
    if fields is None:
        _reject(value, "is not a mutable composite")
    if is_frozen(value):
        _reject(value, "is frozen")


def _reject(value: Any, reason: str, cause: BaseException | None = None) -> NoReturn:
    kind = type(value).__name__
    logger.debug("redactor.invalid_input", kind=kind, reason=reason)
    raise InvalidInputError(f"Cannot redact {kind}: value {reason}") from cause


_DEFAULT_ENGINE: RedactionEngine | None = None


def default_engine() -> RedactionEngine:
    """Return the process-wide engine built from the built-in rules."""

    global _DEFAULT_ENGINE
    if _DEFAULT_ENGINE is None:
        _DEFAULT_ENGINE = RedactionEngine()
    return _DEFAULT_ENGINE


__all__ = ["RedactionEngine", "default_engine"]
