"""Loading an Inventory from a local directory of manifests."""

from __future__ import annotations

from pathlib import Path

from tpology.inventory.inventory import Inventory
from tpology.observability.logging import get_logger

_log = get_logger("inventory.io")


def load_inventory(path: str | Path, strict: bool = False) -> Inventory:
    """Build a fresh Inventory from every manifest under *path*.

    Raises:
        NotFoundError: *path* does not exist.
        DecodeError, ShapeError: a manifest is malformed. Callers that need
            the resources loaded before the failure should create the
            Inventory themselves and call ``load_directory``.
        DuplicateResourceError: *strict* is set and a (kind, name) repeats.
    """
    inv = Inventory(strict=strict)
    count = inv.load_directory(path)
    _log.info("inventory_loaded", path=str(path), resources=count, kinds=len(inv.resources))
    return inv
