"""Structured logging setup for scrub_core."""
from __future__ import annotations

import logging
import sys
from typing import Any, Dict, FrozenSet, Optional

import structlog

from .errors import InvalidInputError
from .models import REDACTED
from .redactor.engines import RedactionEngine, default_engine

_DEFAULT_LEVEL = "info"
_RESERVED_KEYS = frozenset(
    {"level", "ts", "timestamp", "component", "logger", "exc_info", "stack_info", "exception"}
)


class ScrubProcessor:
    """structlog processor that redacts event values before they are rendered.

    Values are scrubbed on a copy, so objects handed to the logger as context
    are never mutated. A value that cannot be copied is replaced by the bare
    ``[redacted]`` marker.
    """

    def __init__(self, engine: Optional[RedactionEngine] = None, reserved: FrozenSet[str] = _RESERVED_KEYS) -> None:
        self._engine = engine
        self._reserved = reserved

    @property
    def engine(self) -> RedactionEngine:
        return self._engine or default_engine()

    def __call__(self, _logger: Any, _name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
        engine = self.engine
        for key, value in list(event_dict.items()):
            if key in self._reserved:
                continue
            if isinstance(value, str):
                event_dict[key] = engine.classify_keyed(key, value)
                continue
            try:
                event_dict[key] = engine.redact_copy(value)
            except InvalidInputError:
                event_dict[key] = REDACTED
        return event_dict


def configure_logging(
    level: str | None = None,
    *,
    scrub: bool = True,
    engine: Optional[RedactionEngine] = None,
) -> None:
    """Configure structlog for the application.

    The configuration emits JSON lines with the keys ``level``, ``ts``, ``msg`` and
    ``component`` while still preserving any additional context supplied by callers.
    With ``scrub`` enabled every other value passes through :class:`ScrubProcessor`
    first, using ``engine`` or the default engine.
    """

    log_level = (level or _DEFAULT_LEVEL).lower()
    numeric_level = _level_from_str(log_level)

    logging.basicConfig(
        level=numeric_level,
        handlers=[logging.StreamHandler(sys.stderr)],
        format="%(message)s",
        force=True,
    )

    processors: list[Any] = [
        structlog.processors.TimeStamper(fmt="iso", key="ts"),
        structlog.stdlib.add_log_level,
        _component_processor,
        _rename_event_to_msg,
    ]
    if scrub:
        processors.append(ScrubProcessor(engine))
    processors.extend(
        [
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    )

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=True,
    )


def _component_processor(
    logger: structlog.BoundLoggerBase, _name: str, event_dict: dict[str, object]
) -> dict[str, object]:
    """Ensure every log record carries a ``component`` field."""

    component = event_dict.get("component")
    if component is None:
        logger_name = getattr(logger, "name", None) or "scrub_core"
        event_dict["component"] = logger_name
    return event_dict


def _rename_event_to_msg(
    _logger: structlog.BoundLoggerBase, _name: str, event_dict: dict[str, object]
) -> dict[str, object]:
    """Normalize the event field to ``msg`` for downstream consumers."""

    if "msg" not in event_dict:
        event = event_dict.pop("event", "")
        event_dict["msg"] = event
    return event_dict


def _level_from_str(level: str) -> int:
    mapping: Dict[str, int] = {
        "critical": logging.CRITICAL,
        "error": logging.ERROR,
        "warning": logging.WARNING,
        "info": logging.INFO,
        "debug": logging.DEBUG,
    }
    return mapping.get(level, logging.INFO)


__all__ = ["ScrubProcessor", "configure_logging"]
