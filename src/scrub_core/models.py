"""Shared domain models used across scrub_core."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .errors import InvalidInputError
from .utils.checks import stable_hash

REDACTED = "[redacted]"


class Action(str, Enum):
    HASH = "hash"
    REDACT = "redact"
    IGNORE = "ignore"
    UNCLASSIFIED = "unclassified"


class Strategy(str, Enum):
    LITERAL = "literal"
    HASH = "hash"


@dataclass(slots=True)
class Span:
    start: int
    end: int

    def overlaps(self, start: int, end: int) -> bool:
        return start < self.end and end > self.start


@dataclass(slots=True)
class Detection:
    detector: str
    span: Span
    strategy: Strategy


def literal_marker(tag: str) -> str:
    return f"[redacted:{tag}]"


def hash_marker(value: str) -> str:
    return f"[redacted:md5:{stable_hash(value)}]"


def parse_override(tag: Union[Action, str, None]) -> Optional[Action]:
    """Turn a field annotation into an override action.

    ``None`` means the field carries no annotation. ``unclassified`` is not a
    valid override since it would be indistinguishable from no annotation.
    """

    if tag is None:
        return None
    if isinstance(tag, Action):
        action = tag
    elif isinstance(tag, str):
        try:
            action = Action(tag.strip().lower())
        except ValueError:
            raise InvalidInputError(f"Unknown scrub override: {tag!r}") from None
    else:
        raise InvalidInputError(f"Unknown scrub override: {tag!r}")
    if action is Action.UNCLASSIFIED:
        raise InvalidInputError("'unclassified' cannot be used as an override")
    return action


__all__ = [
    "REDACTED",
    "Action",
    "Strategy",
    "Span",
    "Detection",
    "literal_marker",
    "hash_marker",
    "parse_override",
]
