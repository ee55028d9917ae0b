"""Shared filesystem path helpers for scrub_core."""
from __future__ import annotations

from pathlib import Path

from platformdirs import PlatformDirs

_APP_NAME = "scrub-core"


def runtime_config_dir() -> Path:
    """Return the per-user configuration directory."""
    dirs = PlatformDirs(appname=_APP_NAME, appauthor=None, roaming=True)
    return Path(dirs.user_config_path)


def project_config_path() -> Path:
    return Path.cwd() / ".scrub" / "config.yaml"
