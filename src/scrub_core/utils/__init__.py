"""Utility exports."""
from .checks import MARKER_PATTERN, is_marker, marker_spans, stable_hash, strip_markers

__all__ = ["MARKER_PATTERN", "is_marker", "marker_spans", "stable_hash", "strip_markers"]
