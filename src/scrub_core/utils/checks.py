"""Digest and marker helpers."""
from __future__ import annotations

import hashlib

import regex

MARKER_PATTERN = regex.compile(r"\[redacted(?::[A-Za-z0-9_.\-]+)?(?::[0-9a-f]{32})?\]")


def stable_hash(value: str) -> str:
    digest = hashlib.md5(usedforsecurity=False)
    digest.update(value.encode("utf-8", errors="surrogatepass"))
    return digest.hexdigest()


def is_marker(value: str) -> bool:
    """Return ``True`` when ``value`` is exactly one redaction marker."""

    return MARKER_PATTERN.fullmatch(value) is not None


def strip_markers(text: str) -> str:
    return MARKER_PATTERN.sub("", text)


def marker_spans(text: str) -> list[tuple[int, int]]:
    if "[redacted" not in text:
        return []
    return [match.span() for match in MARKER_PATTERN.finditer(text)]


__all__ = ["MARKER_PATTERN", "stable_hash", "is_marker", "marker_spans", "strip_markers"]
