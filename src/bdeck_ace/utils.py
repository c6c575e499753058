"""Shared utilities: config loading and input file resolution."""

from __future__ import annotations

import glob
import os
from functools import lru_cache
from pathlib import Path

import yaml

from bdeck_ace.models import AceConfig

_CONFIGS_DIR = Path(__file__).resolve().parent.parent.parent / "configs"

CONFIG_ENV_VAR = "BDECK_ACE_CONFIG"


def _config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return _CONFIGS_DIR / "ace.yaml"


@lru_cache(maxsize=1)
def load_config() -> AceConfig:
    """Load ACE rules from configs/ace.yaml, or $BDECK_ACE_CONFIG (cached)."""
    return load_config_file(_config_path())


def load_config_file(path: str | Path) -> AceConfig:
    """Load and validate an ACE rules file (uncached)."""
    raw = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    return AceConfig(**raw.get("ace", {}))


def list_files(path: str) -> list[str]:
    """Resolve *path* to a list of bdeck files.

    A directory yields every entry in it, sorted. A path that exists but is
    not a directory is rejected. Anything else is treated as a glob pattern.
    """
    path = path.lstrip(" ")
    p = Path(path)
    if p.exists():
        if not p.is_dir():
            raise NotADirectoryError(f"Not a directory: {path}")
        return sorted(str(child) for child in p.iterdir())
    return sorted(glob.glob(path))
