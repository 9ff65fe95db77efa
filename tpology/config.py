"""Configuration loading from environment variables."""

from __future__ import annotations

import os

from tpology.models.config import (
    DEFAULT_INVENTORY_URL,
    GitConfig,
    InventoryConfig,
    LogConfig,
    TpologyConfig,
    default_git_cache_dir,
)
from tpology.observability.logging import LOG_FORMATS


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"TPOLOGY_{key}", default)


def _env_bool(key: str, default: bool = False) -> bool:
    val = _env(key, str(default).lower())
    return val.lower() in ("true", "1", "yes")


def _validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def _validate_log_format(value: str) -> str:
    if value.lower() not in LOG_FORMATS:
        raise ValueError(f"Invalid log format: {value}. Must be one of {LOG_FORMATS}")
    return value.lower()


def _validate_ref(value: str) -> str:
    if not value or value.startswith("-") or any(c.isspace() for c in value):
        raise ValueError(f"Invalid git reference: {value!r}")
    return value


def load_config() -> TpologyConfig:
    """Load configuration from TPOLOGY_* environment variables."""
    return TpologyConfig(
        quiet=_env_bool("QUIET", False),
        inventory=InventoryConfig(
            local=_env("INVENTORY_LOCAL", ""),
            url=_env("INVENTORY", DEFAULT_INVENTORY_URL),
            ref=_validate_ref(_env("INVENTORY_REF", "main")),
            strict=_env_bool("STRICT_DUPLICATES", False),
        ),
        git=GitConfig(
            cache_dir=_env("GIT_CACHE_DIR", "") or default_git_cache_dir(),
        ),
        log=LogConfig(
            level=_validate_log_level(_env("LOG_LEVEL", "warning")),
            format=_validate_log_format(_env("LOG_FORMAT", "auto")),
        ),
    )
