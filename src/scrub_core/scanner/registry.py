"""Detector registry for content scanning."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator

import regex

from ..models import Strategy, hash_marker, literal_marker

DETECTOR_NAME_PATTERN = regex.compile(r"[A-Za-z0-9_.\-]+")


@dataclass(frozen=True, slots=True)
class Detector:
    """A named pattern and the way its matches are replaced."""

    name: str
    pattern: regex.Pattern[str]
    strategy: Strategy = Strategy.LITERAL

    def replacement(self, matched: str) -> str:
        if self.strategy is Strategy.HASH:
            return hash_marker(matched)
        return literal_marker(self.name)


class DetectorRegistry:
    """Ordered collection of detectors; registration order is match priority."""

    def __init__(self) -> None:
        self._detectors: Dict[str, Detector] = {}

    def register(self, detector: Detector, override: bool = False) -> None:
        if not DETECTOR_NAME_PATTERN.fullmatch(detector.name):
            raise ValueError(f"Detector name is not marker safe: {detector.name!r}")
        if not override and detector.name in self._detectors:
            raise ValueError(f"Detector already registered: {detector.name}")
        self._detectors[detector.name] = detector

    def register_regex(
        self,
        name: str,
        pattern: str,
        *,
        strategy: Strategy | str = Strategy.LITERAL,
        flags: regex.RegexFlag | int = regex.UNICODE,
        override: bool = False,
    ) -> Detector:
        detector = Detector(name=name, pattern=regex.compile(pattern, flags), strategy=Strategy(strategy))
        self.register(detector, override=override)
        return detector

    def get(self, name: str) -> Detector:
        try:
            return self._detectors[name]
        except KeyError as exc:
            raise KeyError(f"Unknown detector: {name}") from exc

    def __iter__(self) -> Iterator[Detector]:
        return iter(list(self._detectors.values()))

    def __len__(self) -> int:
        return len(self._detectors)


__all__ = ["Detector", "DetectorRegistry", "DETECTOR_NAME_PATTERN"]
