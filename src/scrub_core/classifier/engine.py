"""Field name classification."""
from __future__ import annotations

from typing import FrozenSet, Iterable, Optional, Tuple

import regex

from ..models import Action
from .rules import HASHED_FIELD_NAMES, REDACTED_FIELD_PATTERNS


class NameClassifier:
    """Map a field or key name to the action its value should receive.

    Precedence: an explicit override, then the hashed-name set, then the
    redacted-name patterns. Anything else is :attr:`Action.UNCLASSIFIED` and
    left to content scanning by the caller.
    """

    __slots__ = ("_hashed", "_patterns", "_redacted")

    def __init__(
        self,
        hashed_names: Iterable[str] = HASHED_FIELD_NAMES,
        redacted_patterns: Iterable[str] = REDACTED_FIELD_PATTERNS,
    ) -> None:
        self._hashed: FrozenSet[str] = frozenset(name.casefold() for name in hashed_names)
        self._patterns: Tuple[str, ...] = tuple(redacted_patterns)
        self._redacted: Optional[regex.Pattern[str]] = None
        if self._patterns:
            joined = "|".join(f"(?:{pattern})" for pattern in self._patterns)
            self._redacted = regex.compile(joined, regex.IGNORECASE | regex.UNICODE)

    @property
    def hashed_names(self) -> FrozenSet[str]:
        return self._hashed

    @property
    def redacted_patterns(self) -> Tuple[str, ...]:
        return self._patterns

    def classify(self, name: Optional[str], override: Optional[Action] = None) -> Action:
        if override is not None:
            return override
        if not name:
            return Action.UNCLASSIFIED
        if name.casefold() in self._hashed:
            return Action.HASH
        if self._redacted is not None and self._redacted.search(name):
            return Action.REDACT
        return Action.UNCLASSIFIED


__all__ = ["NameClassifier"]
