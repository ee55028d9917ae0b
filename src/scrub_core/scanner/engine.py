"""Content scanning over unstructured text."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from ..models import Detection, Span
from ..utils.checks import marker_spans
from .patterns import load_builtin_detectors
from .registry import Detector, DetectorRegistry


@dataclass(slots=True)
class ScannerConfig:
    disabled: Sequence[str] | None = None


class Scanner:
    """Apply registered detectors to a string.

    The detector list is resolved once, at construction. Later changes to the
    registry do not affect an existing scanner.
    """

    def __init__(self, registry: DetectorRegistry | None = None, config: ScannerConfig | None = None) -> None:
        self.registry = registry if registry is not None else load_builtin_detectors(DetectorRegistry())
        self.config = config or ScannerConfig()
        self._detectors: Tuple[Detector, ...] = tuple(self._resolve_detectors())

    @property
    def detectors(self) -> Tuple[Detector, ...]:
        return self._detectors

    def find(self, text: str) -> List[Detection]:
        """Return the spans that :meth:`redact` would replace, left to right."""

        return [Detection(detector=d.name, span=Span(start, end), strategy=d.strategy) for start, end, d in self._claims(text)]

    def redact(self, text: str) -> str:
        claims = self._claims(text)
        if not claims:
            return text
        parts: List[str] = []
        cursor = 0
        for start, end, detector in claims:
            parts.append(text[cursor:start])
            parts.append(detector.replacement(text[start:end]))
            cursor = end
        parts.append(text[cursor:])
        return "".join(parts)

    def _claims(self, text: str) -> List[Tuple[int, int, Detector]]:
        if not text:
            return []
        # existing markers are claimed up front so no detector can rewrite them
        taken: List[Span] = [Span(start, end) for start, end in marker_spans(text)]
        claims: List[Tuple[int, int, Detector]] = []
        for detector in self._detectors:
            # overlapped, so a match hidden behind a dropped one is still found
            for match in detector.pattern.finditer(text, overlapped=True):
                start, end = match.span()
                if start == end:
                    continue
                if any(span.overlaps(start, end) for span in taken):
                    continue
                taken.append(Span(start, end))
                claims.append((start, end, detector))
        claims.sort(key=lambda claim: claim[0])
        return claims

    def _resolve_detectors(self) -> Iterable[Detector]:
        disabled = set(self.config.disabled or [])
        for detector in self.registry:
            if detector.name in disabled:
                continue
            yield detector


def scan_text(text: str, *, scanner: Scanner | None = None) -> str:
    runner = scanner or _default_scanner()
    return runner.redact(text)


_DEFAULT_SCANNER: Scanner | None = None


def _default_scanner() -> Scanner:
    global _DEFAULT_SCANNER
    if _DEFAULT_SCANNER is None:
        _DEFAULT_SCANNER = Scanner()
    return _DEFAULT_SCANNER


__all__ = ["Scanner", "ScannerConfig", "scan_text"]
