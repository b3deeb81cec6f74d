"""Config file discovery and loading.

``tzctl.toml`` is found by walking up from the working directory, the way
git finds ``.git/``. ``TZCTL_CONFIG`` pins a file explicitly; when it
names a missing file no config is used at all.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

import click

from tzctl.config.models import TzConfig

CONFIG_FILENAME = "tzctl.toml"
CONFIG_ENV_VAR = "TZCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest ``tzctl.toml`` at or above *start*, or None."""
    pinned = os.environ.get(CONFIG_ENV_VAR)
    if pinned:
        path = Path(pinned)
        return path if path.is_file() else None

    directory = (start or Path.cwd()).resolve()
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def read_toml(path: Path) -> dict[str, Any]:
    """Parse *path*, reporting syntax errors as a CLI error."""
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise click.ClickException(f"Invalid TOML in {path}: {exc}") from exc


def load_config(path: Path | None = None, cwd: Path | None = None) -> TzConfig:
    """Load and validate *path*, or the discovered file, or the defaults."""
    if path is None:
        path = find_config(cwd)
    if path is None:
        return TzConfig()
    return TzConfig.model_validate(read_toml(path))
