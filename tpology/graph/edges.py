"""Edge enumeration over a node's resolved payload.

The walk is a tree walk over the payload, never over the Node graph, so it
terminates whatever cycles exist between resources. Every occurrence of a
Node in the payload is reported, so the same target may appear more than once.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from tpology.graph.models import Edge, Node


def iter_edges(node: Node) -> Iterator[Edge]:
    """Yield an Edge for every Node embedded in *node*'s resolved payload.

    Order is depth-first in payload order (mapping insertion order, then
    list index order).
    """
    for path, target in iter_references(node.resolved_data):
        yield Edge(source=node, target=target, path=path)


def iter_references(value: Any, path: str = "") -> Iterator[tuple[str, Node]]:
    """Yield ``(path, node)`` for every Node reachable inside *value*."""
    if isinstance(value, Node):
        yield path, value
    elif isinstance(value, dict):
        for key, elem in value.items():
            yield from iter_references(elem, f"{path}.{key}" if path else str(key))
    elif isinstance(value, list):
        for i, elem in enumerate(value):
            yield from iter_references(elem, f"{path}[{i}]")
