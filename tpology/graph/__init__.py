"""Resource reference graph.

Built in one pass from a complete Inventory: every payload field whose key
names a known kind is rewritten into a direct link to the target Node.
"""

from tpology.graph.builder import build_graph, is_reference_key
from tpology.graph.edges import iter_edges
from tpology.graph.models import Edge, Graph, Node

__all__ = [
    "Edge",
    "Graph",
    "Node",
    "build_graph",
    "is_reference_key",
    "iter_edges",
]
