"""Configuration data structures for tpology."""

from tpology.models.config import GitConfig, InventoryConfig, LogConfig, TpologyConfig

__all__ = [
    "GitConfig",
    "InventoryConfig",
    "LogConfig",
    "TpologyConfig",
]
