"""Graphviz DOT output of the reference graph."""

from __future__ import annotations

from typing import TextIO

from tpology.graph.edges import iter_edges
from tpology.graph.models import Graph


def _quote(label: str) -> str:
    return '"' + label.replace("\\", "\\\\").replace('"', '\\"') + '"'


def write_dot(out: TextIO, graph: Graph) -> int:
    """Write one ``"src" -> "dst";`` line per edge; return the edge count.

    Repeated references between the same pair produce repeated lines.
    """
    count = 0
    out.write("digraph {\n")
    for node in graph.iter_nodes():
        for edge in iter_edges(node):
            out.write(f"    {_quote(edge.source.qualified_name)} -> {_quote(edge.target.qualified_name)};\n")
            count += 1
    out.write("}\n")
    return count
