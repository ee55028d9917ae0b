"""Built-in detector patterns."""
from __future__ import annotations

from ..models import Strategy
from .registry import DetectorRegistry

EMAIL_PATTERN = r"(?<![A-Za-z0-9._%+\-])[A-Za-z0-9._%+\-]+@[A-Za-z0-9.\-]+\.[A-Za-z]{2,}"
# <adjective>-<noun>-<11 char suffix>, e.g. gitpodio-gitpod-uesaddev73c
WORKSPACE_ID_PATTERN = r"\b[a-z][0-9a-z]{1,15}-[a-z][0-9a-z]{1,15}-[0-9a-z]{11}\b"


def load_builtin_detectors(registry: DetectorRegistry) -> DetectorRegistry:
    registry.register_regex("email", EMAIL_PATTERN, strategy=Strategy.LITERAL)
    registry.register_regex("workspaceID", WORKSPACE_ID_PATTERN, strategy=Strategy.HASH)
    return registry


__all__ = ["load_builtin_detectors", "EMAIL_PATTERN", "WORKSPACE_ID_PATTERN"]
