"""Redaction package exports."""
from .engines import RedactionEngine, default_engine
from .records import Scrubbable, scrub_field
from .walker import Walker

__all__ = ["RedactionEngine", "default_engine", "Scrubbable", "scrub_field", "Walker"]
