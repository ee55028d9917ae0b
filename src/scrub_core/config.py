"""Configuration loading utilities for scrub_core."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

import regex
import structlog
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .classifier import HASHED_FIELD_NAMES, REDACTED_FIELD_PATTERNS, NameClassifier
from .models import Strategy
from .paths import project_config_path, runtime_config_dir
from .scanner import DetectorRegistry, Scanner, ScannerConfig
from .scanner.patterns import load_builtin_detectors

logger = structlog.get_logger(__name__)


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO", description="Logging verbosity level")
    scrub: bool = Field(default=True, description="Scrub log event values before rendering")

    def normalized_level(self) -> str:
        return self.level.upper()


class DetectorConfig(BaseModel):
    name: str = Field(pattern=r"^[A-Za-z0-9_.\-]+$")
    pattern: str
    strategy: Strategy = Strategy.LITERAL
    ignore_case: bool = False

    @field_validator("pattern")
    @classmethod
    def _validate_pattern(cls, value: str) -> str:
        _compile(value)
        return value

    def flags(self) -> int:
        flags = regex.UNICODE
        if self.ignore_case:
            flags |= regex.IGNORECASE
        return flags


class RulesConfig(BaseModel):
    include_builtin: bool = Field(default=True, description="Start from the built-in rules")
    hashed_names: List[str] = Field(default_factory=list)
    redacted_names: List[str] = Field(default_factory=list, description="Regex fragments matched against field names")
    detectors: List[DetectorConfig] = Field(default_factory=list)
    disabled_detectors: List[str] = Field(default_factory=list)

    @field_validator("redacted_names")
    @classmethod
    def _validate_redacted_names(cls, value: List[str]) -> List[str]:
        for pattern in value:
            _compile(pattern)
        return value

    @model_validator(mode="after")
    def _unique_detectors(self) -> "RulesConfig":
        names = [detector.name for detector in self.detectors]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate detector names: {', '.join(duplicates)}")
        return self

    def build_registry(self) -> DetectorRegistry:
        registry = DetectorRegistry()
        if self.include_builtin:
            load_builtin_detectors(registry)
        for detector in self.detectors:
            registry.register_regex(
                detector.name,
                detector.pattern,
                strategy=detector.strategy,
                flags=detector.flags(),
                override=True,
            )
        return registry

    def build_scanner(self) -> Scanner:
        return Scanner(self.build_registry(), ScannerConfig(disabled=self.disabled_detectors))

    def build_classifier(self) -> NameClassifier:
        hashed = list(HASHED_FIELD_NAMES) if self.include_builtin else []
        redacted = list(REDACTED_FIELD_PATTERNS) if self.include_builtin else []
        return NameClassifier(hashed + self.hashed_names, redacted + self.redacted_names)


class AppConfig(BaseModel):
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    rules: RulesConfig = Field(default_factory=RulesConfig)


DEFAULT_CONFIG = AppConfig()


def config_search_paths(explicit: Optional[Path] = None) -> Iterable[Path]:
    if explicit:
        yield explicit
    yield project_config_path()
    yield runtime_config_dir() / "config.yaml"


def load_config(path: Optional[Path] = None) -> AppConfig:
    if path is not None and not path.is_file():
        raise ValueError(f"Configuration file not found: {path}")
    for candidate in config_search_paths(path):
        if candidate.is_file():
            with candidate.open("r", encoding="utf-8") as handle:
                data = yaml.safe_load(handle) or {}
            try:
                config = AppConfig.model_validate(data)
            except ValidationError as exc:
                raise ValueError(f"Invalid configuration in {candidate}: {exc}") from exc
            logger.debug("config.loaded", path=str(candidate))
            return config
    return DEFAULT_CONFIG.model_copy(deep=True)


def dump_default_config(target: Path) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(DEFAULT_CONFIG.model_dump(mode="json"), handle, sort_keys=False)


def _compile(pattern: str) -> None:
    try:
        regex.compile(pattern)
    except regex.error as exc:
        raise ValueError(f"Invalid pattern {pattern!r}: {exc}") from exc


__all__ = [
    "AppConfig",
    "DetectorConfig",
    "LoggingConfig",
    "RulesConfig",
    "DEFAULT_CONFIG",
    "config_search_paths",
    "dump_default_config",
    "load_config",
]
