"""Structured dumps of resources and of resolved graphs."""

from __future__ import annotations

import json
from collections.abc import Iterable
from enum import StrEnum
from typing import Any

import yaml

from tpology.graph.models import Graph, Node
from tpology.resource.io import dump_json, dump_yaml, json_default
from tpology.resource.model import Resource


class DumpFormat(StrEnum):
    """Structured output formats."""

    JSON = "json"
    YAML = "yaml"


def dump_resources(resources: Iterable[Resource], fmt: DumpFormat | str) -> str:
    """Encode resources in their manifest wire shape."""
    fmt = DumpFormat(fmt)
    if fmt is DumpFormat.JSON:
        return dump_json(resources)
    return dump_yaml(resources)


def graph_to_data(graph: Graph) -> list[dict[str, Any]]:
    """Return the graph as plain data.

    Each node becomes its wire mapping with ``resolved_data`` in place of the
    payload; embedded Nodes are replaced by their qualified names so the
    result is a tree even when resources refer to each other in cycles.
    """
    out: list[dict[str, Any]] = []
    for node in graph.iter_nodes():
        r = node.resource
        out.append(
            {
                "kind": r.kind,
                "name": r.name,
                "description": r.description,
                "owner": r.owner,
                "data": _plain(node.resolved_data),
            }
        )
    return out


def dump_graph(graph: Graph, fmt: DumpFormat | str) -> str:
    data = graph_to_data(graph)
    if DumpFormat(fmt) is DumpFormat.JSON:
        return json.dumps(data, indent=2, default=json_default)
    return yaml.safe_dump(data, sort_keys=False, default_flow_style=False, indent=2)


def _plain(value: Any) -> Any:
    if isinstance(value, Node):
        return value.qualified_name
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value


def dump_names(names: Iterable[str], fmt: DumpFormat | str) -> str:
    """Encode a plain list of names, e.g. the kinds of an inventory."""
    values = list(names)
    if DumpFormat(fmt) is DumpFormat.JSON:
        return json.dumps(values, indent=2)
    return yaml.safe_dump(values, default_flow_style=False)
