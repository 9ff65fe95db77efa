"""Data structures for the resource reference graph."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from tpology.resource.model import Resource


@dataclass(eq=False)
class Node:
    """A resource after reference resolution.

    ``resolved_data`` mirrors ``resource.data`` with every reference replaced
    by the target Node itself. Nodes may refer to each other in cycles, so
    ``resolved_data`` is left out of repr. Identity is the (kind, name) pair.

    Only the graph builder sets ``resolved_data``; consumers read it.
    """

    resource: Resource
    _resolved_data: Any = field(default=None, init=False, repr=False)

    @property
    def resolved_data(self) -> Any:
        return self._resolved_data

    @property
    def kind(self) -> str:
        return self.resource.kind

    @property
    def name(self) -> str:
        return self.resource.name

    @property
    def key(self) -> tuple[str, str]:
        """Return the unique key for this node."""
        return (self.resource.kind, self.resource.name)

    @property
    def qualified_name(self) -> str:
        """Return the stable ``kind/name`` label for this node."""
        return f"{self.resource.kind}/{self.resource.name}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)


@dataclass(frozen=True)
class Edge:
    """A directed reference from one node's payload to another node."""

    source: Node
    target: Node
    path: str  # payload path of the referencing field, e.g. clusters[0].cluster


class Graph:
    """Every Node, keyed as ``nodes[kind][name]`` like the Inventory.

    Only the builder populates a Graph. ``nodes`` is a read-only view, so
    consumers cannot add, drop or swap nodes after the build.
    """

    def __init__(self, nodes: Mapping[str, Mapping[str, Node]] | None = None) -> None:
        self._nodes: dict[str, dict[str, Node]] = {
            kind: dict(by_name) for kind, by_name in (nodes or {}).items()
        }
        self._view = MappingProxyType(
            {kind: MappingProxyType(by_name) for kind, by_name in self._nodes.items()}
        )

    @property
    def nodes(self) -> Mapping[str, Mapping[str, Node]]:
        return self._view

    def kinds(self) -> list[str]:
        """Return every kind present, sorted."""
        return sorted(self._nodes)

    def nodes_of(self, kind: str) -> Mapping[str, Node]:
        """Return a read-only name -> Node view for *kind* (empty if unknown)."""
        return MappingProxyType(self._nodes.get(kind, {}))

    def node(self, kind: str, name: str) -> Node | None:
        return self._nodes.get(kind, {}).get(name)

    def iter_nodes(self) -> Iterator[Node]:
        """Yield every node, kind by kind then name by name."""
        for kind in self.kinds():
            by_name = self._nodes[kind]
            for name in sorted(by_name):
                yield by_name[name]

    def edges(self) -> Iterator[Edge]:
        """Yield every edge in the graph, grouped by source node."""
        from tpology.graph.edges import iter_edges

        for node in self.iter_nodes():
            yield from iter_edges(node)

    def __len__(self) -> int:
        return sum(len(by_name) for by_name in self._nodes.values())

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        kind, name = key
        return name in self._nodes.get(kind, {})

    def __repr__(self) -> str:
        return f"Graph(kinds={len(self._nodes)}, nodes={len(self)})"
