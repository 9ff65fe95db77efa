"""Graph builder: turns an Inventory into a Graph of resolved Nodes.

Two passes:

1. Materialise one Node per resource, keyed ``nodes[kind][name]``.
2. For each Node, rewrite ``resource.data`` into ``resolved_data``. A mapping
   entry whose key names a known kind and whose value is a string is a
   reference and becomes the target Node. Every other value is rebuilt
   recursively, so references may sit at any depth.

A reference to a known kind with an unknown name fails the whole build.
"""

from __future__ import annotations

from collections.abc import Container
from typing import Any

from tpology.errors import DanglingReferenceError
from tpology.graph.models import Graph, Node
from tpology.inventory.inventory import Inventory
from tpology.observability.logging import get_logger

_log = get_logger("graph.builder")


def is_reference_key(key: object, kinds: Container[str]) -> bool:
    """Return True if a payload mapping key denotes a reference.

    A key is a reference key when it is the name of a kind present in the
    graph. Field names that happen to match a kind are always references.
    """
    return isinstance(key, str) and key in kinds


def build_graph(inventory: Inventory) -> Graph:
    """Build the reference graph for *inventory*.

    The inventory is read, never mutated. No partial graph is ever returned.

    Raises:
        DanglingReferenceError: a reference names a resource that does not
            exist within its kind.
    """
    nodes: dict[str, dict[str, Node]] = {}
    for kind, resources in inventory.resources.items():
        for name, r in resources.items():
            nodes.setdefault(kind, {})[name] = Node(resource=r)
    graph = Graph(nodes)

    resolver = _Resolver(graph)
    for node in graph.iter_nodes():
        node._resolved_data = resolver.resolve(node, node.resource.data)

    _log.info("graph_built", kinds=len(graph.kinds()), nodes=len(graph))
    return graph


class _Resolver:
    """Rewrites one payload tree at a time against a fully materialised graph."""

    def __init__(self, graph: Graph) -> None:
        self._nodes = graph.nodes

    def resolve(self, node: Node, value: Any) -> Any:
        if isinstance(value, dict):
            return {k: self._resolve_entry(node, k, v) for k, v in value.items()}
        if isinstance(value, list):
            return [self.resolve(node, elem) for elem in value]
        return value

    def _resolve_entry(self, node: Node, key: Any, value: Any) -> Any:
        if isinstance(value, str) and is_reference_key(key, self._nodes):
            target = self._nodes[key].get(value)
            if target is None:
                _log.debug(
                    "dangling_reference",
                    source=node.qualified_name,
                    key=key,
                    target=value,
                    loaded_from=node.resource.loaded_from,
                )
                raise DanglingReferenceError(node.kind, node.name, key, value)
            return target
        return self.resolve(node, value)
