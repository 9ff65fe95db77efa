"""Inventory of resources grouped by kind, then name.

Submodules:
    inventory -- Inventory container with last-write-wins or strict insertion.
    io        -- Loading an inventory from a directory of manifests.
"""

from tpology.inventory.inventory import Inventory
from tpology.inventory.io import load_inventory

__all__ = ["Inventory", "load_inventory"]
