"""Tabular rendering with rich."""

from __future__ import annotations

from collections.abc import Iterable

from rich import box
from rich.table import Table

from tpology.resource.model import Resource


def kinds_table(kinds: Iterable[str]) -> Table:
    """One ``Name`` column, one row per kind."""
    table = Table(box=box.MARKDOWN)
    table.add_column("Name")
    for kind in kinds:
        table.add_row(kind)
    return table


def resources_table(resources: Iterable[Resource]) -> Table:
    table = Table(box=box.MARKDOWN)
    for column in ("Kind", "Name", "Description", "Owner"):
        table.add_column(column)
    for r in resources:
        table.add_row(r.kind, r.name, r.description, r.owner)
    return table
