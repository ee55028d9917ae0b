"""Classifier package exports."""
from .engine import NameClassifier
from .rules import HASHED_FIELD_NAMES, REDACTED_FIELD_PATTERNS

__all__ = ["NameClassifier", "HASHED_FIELD_NAMES", "REDACTED_FIELD_PATTERNS"]
