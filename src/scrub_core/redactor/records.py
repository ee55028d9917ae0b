"""Field enumeration for typed records.

Three kinds of record are understood:

* objects implementing :class:`Scrubbable`, which list their own fields;
* dataclass instances, annotated through ``field(metadata={"scrub": ...})``
  or the :func:`scrub_field` shortcut;
* pydantic models, annotated through ``Field(json_schema_extra={"scrub": ...})``.
"""
from __future__ import annotations

import copy
import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Protocol, Tuple, Union, runtime_checkable

from pydantic import BaseModel

from ..errors import InvalidInputError
from ..models import Action, parse_override

SCRUB_METADATA_KEY = "scrub"


@runtime_checkable
class Scrubbable(Protocol):
    def scrub_fields(self) -> Iterable[Tuple[str, Union[Action, str, None]]]:
        """Yield ``(attribute name, override)`` for every field to visit."""


@dataclass(frozen=True, slots=True)
class RecordField:
    name: str
    override: Optional[Action] = None


def scrub_field(action: Union[Action, str], **kwargs: Any) -> Any:
    """``dataclasses.field`` carrying a scrub override."""

    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[SCRUB_METADATA_KEY] = parse_override(action)
    return dataclasses.field(metadata=metadata, **kwargs)


def record_fields(value: Any) -> Optional[List[RecordField]]:
    """Return the visitable fields of ``value`` or ``None`` if it is not a record."""

    if isinstance(value, type):
        return None
    if isinstance(value, Scrubbable):
        return [RecordField(name, parse_override(tag)) for name, tag in value.scrub_fields()]
    if dataclasses.is_dataclass(value):
        return [
            RecordField(item.name, parse_override(item.metadata.get(SCRUB_METADATA_KEY)))
            for item in dataclasses.fields(value)
        ]
    if isinstance(value, BaseModel):
        return [
            RecordField(name, parse_override(_pydantic_tag(info.json_schema_extra)))
            for name, info in type(value).model_fields.items()
        ]
    return None


def is_frozen(value: Any) -> bool:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return bool(type(value).__dataclass_params__.frozen)
    if isinstance(value, BaseModel):
        if value.model_config.get("frozen", False):
            return True
        return any(info.frozen for info in type(value).model_fields.values())
    return False


def read_field(record: Any, name: str) -> Any:
    try:
        return getattr(record, name)
    except AttributeError as exc:
        raise InvalidInputError(f"{type(record).__name__} has no field {name!r}") from exc


def write_fields(record: Any, updates: Dict[str, Any]) -> Any:
    """Apply ``updates`` to ``record``; frozen records are copied first."""

    if not updates:
        return record
    if isinstance(record, BaseModel) and is_frozen(record):
        return record.model_copy(update=updates)
    if dataclasses.is_dataclass(record) and is_frozen(record):
        clone = copy.copy(record)
        for name, value in updates.items():
            object.__setattr__(clone, name, value)
        return clone
    for name, value in updates.items():
        try:
            setattr(record, name, value)
        except AttributeError as exc:
            raise InvalidInputError(f"Field {name!r} of {type(record).__name__} is read-only") from exc
    return record


def _pydantic_tag(extra: Any) -> Any:
    if isinstance(extra, dict):
        return extra.get(SCRUB_METADATA_KEY)
    return None


__all__ = [
    "SCRUB_METADATA_KEY",
    "Scrubbable",
    "RecordField",
    "scrub_field",
    "record_fields",
    "is_frozen",
    "read_field",
    "write_fields",
]
