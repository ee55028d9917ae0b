"""Recursive traversal applying name rules and content detectors."""
from __future__ import annotations

from collections.abc import MutableMapping, MutableSequence, MutableSet
from enum import Enum
from typing import Any, List, Optional, Set

from ..classifier import NameClassifier
from ..models import REDACTED, Action, hash_marker
from ..scanner import Scanner
from ..utils.checks import is_marker, strip_markers
from .records import RecordField, read_field, record_fields, write_fields

_OPAQUE = (bool, int, float, complex, bytes, bytearray, memoryview, Enum)


class Walker:
    """Redact a value tree in place.

    Strings are replaced through the parent container, so :meth:`walk` always
    returns the value the caller should store; containers come back as the
    same object unless they are immutable and had to be rebuilt.
    """

    __slots__ = ("classifier", "scanner")

    def __init__(self, classifier: NameClassifier, scanner: Scanner) -> None:
        self.classifier = classifier
        self.scanner = scanner

    def redact_string(self, value: str, name: Optional[str] = None, override: Optional[Action] = None) -> str:
        action = self.classifier.classify(name, override)
        if action is Action.IGNORE:
            return value
        if action is Action.UNCLASSIFIED:
            return self.scanner.redact(value)
        if is_marker(value):
            return value
        if action is Action.HASH:
            return hash_marker(value)
        return REDACTED

    def walk(
        self,
        value: Any,
        name: Optional[str] = None,
        override: Optional[Action] = None,
        _path: Optional[Set[int]] = None,
    ) -> Any:
        if override is Action.IGNORE:
            return value
        if value is None or isinstance(value, _OPAQUE):
            return value
        if isinstance(value, str):
            return self.redact_string(value, name, override)
        path = set() if _path is None else _path
        marker = id(value)
        if marker in path:
            return value
        path.add(marker)
        try:
            return self._walk_composite(value, path)
        finally:
            path.discard(marker)

    def _walk_composite(self, value: Any, path: Set[int]) -> Any:
        if isinstance(value, MutableMapping):
            self._walk_mapping(value, path)
            return value
        if isinstance(value, MutableSequence):
            for index, item in enumerate(value):
                redacted = self.walk(item, _path=path)
                if redacted is not item:
                    value[index] = redacted
            return value
        if isinstance(value, MutableSet):
            items = list(value)
            redacted_items = [self.walk(item, _path=path) for item in items]
            if any(new is not old for new, old in zip(redacted_items, items)):
                value.clear()
                for item in redacted_items:
                    value.add(item)
            return value
        if isinstance(value, tuple):
            return self._walk_tuple(value, path)
        fields = record_fields(value)
        if fields is not None:
            return self._walk_record(value, fields, path)
        return value

    def _walk_mapping(self, mapping: MutableMapping, path: Set[int]) -> None:
        skip = self._apply_name_value_pair(mapping)
        for key, item in list(mapping.items()):
            if skip and key == skip:
                continue
            redacted = self.walk(item, key if isinstance(key, str) else None, _path=path)
            if redacted is not item:
                mapping[key] = redacted

    def _apply_name_value_pair(self, mapping: MutableMapping) -> Optional[str]:
        # {"name": "GITHUB_TOKEN", "value": "..."}: the value is classified by
        # the name it is paired with, as that name reads once scanned
        name = mapping.get("name")
        value = mapping.get("value")
        if not (isinstance(name, str) and isinstance(value, str) and name and value):
            return None
        label = strip_markers(self.scanner.redact(name))
        if self.classifier.classify(label) not in (Action.HASH, Action.REDACT):
            return None
        mapping["value"] = self.redact_string(value, label)
        return "value"

    def _walk_tuple(self, value: tuple, path: Set[int]) -> tuple:
        items = list(value)
        redacted: List[Any] = [self.walk(item, _path=path) for item in items]
        if all(new is old for new, old in zip(redacted, items)):
            return value
        if hasattr(value, "_make"):
            return value._make(redacted)
        return tuple(redacted)

    def _walk_record(self, record: Any, fields: List[RecordField], path: Set[int]) -> Any:
        updates = {}
        for field in fields:
            current = read_field(record, field.name)
            redacted = self.walk(current, field.name, field.override, _path=path)
            if redacted is not current:
                updates[field.name] = redacted
        return write_fields(record, updates)


__all__ = ["Walker"]
