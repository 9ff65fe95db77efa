"""Configuration data structures."""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_INVENTORY_URL = "https://github.com/ZeroEyesTech/ZE-Inventory.git"


def default_git_cache_dir() -> str:
    """Return the per-user git cache directory, falling back to the temp dir."""
    base = os.environ.get("XDG_CACHE_HOME", "")
    if not base:
        try:
            base = str(Path.home() / ".cache")
        except RuntimeError:
            base = tempfile.gettempdir()
    return str(Path(base) / "tpology" / "git")


@dataclass
class InventoryConfig:
    """Where the inventory comes from and how it is loaded."""

    local: str = ""  # a local directory wins over the remote repository
    url: str = DEFAULT_INVENTORY_URL
    ref: str = "main"
    strict: bool = False


@dataclass
class GitConfig:
    """Git cache configuration."""

    cache_dir: str = field(default_factory=default_git_cache_dir)


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "warning"
    format: str = "auto"  # auto (console on a terminal, else json), json or console


@dataclass
class TpologyConfig:
    """Top-level tpology configuration."""

    quiet: bool = False
    inventory: InventoryConfig = field(default_factory=InventoryConfig)
    git: GitConfig = field(default_factory=GitConfig)
    log: LogConfig = field(default_factory=LogConfig)
