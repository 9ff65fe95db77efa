"""Renderers for resources and graphs.

Submodules:
    table -- Kinds or resources as a table (rich).
    dump  -- JSON/YAML dumps of resources and resolved graphs.
    dot   -- Graph edges in Graphviz DOT.
"""

from tpology.render.dot import write_dot
from tpology.render.dump import DumpFormat, dump_graph, dump_names, dump_resources, graph_to_data
from tpology.render.table import kinds_table, resources_table

__all__ = [
    "DumpFormat",
    "dump_graph",
    "dump_names",
    "dump_resources",
    "graph_to_data",
    "kinds_table",
    "resources_table",
    "write_dot",
]
