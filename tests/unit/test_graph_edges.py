"""Tests for edge enumeration over resolved payloads."""

from __future__ import annotations

from tpology.graph.builder import build_graph
from tpology.graph.edges import iter_edges, iter_references
from tpology.inventory.inventory import Inventory
from tpology.resource.model import Resource


def _scenario() -> Inventory:
    return Inventory(
        [
            Resource("provider", "gcp"),
            Resource("cluster", "gcp-dev", data={"provider": "gcp", "project": "p"}),
            Resource("environment", "dev", data={"clusters": [{"cluster": "gcp-dev", "namespace": "dev"}]}),
        ]
    )


class TestIterEdges:
    def test_environment_has_single_cluster_edge(self) -> None:
        g = build_graph(_scenario())
        edges = list(iter_edges(g.nodes["environment"]["dev"]))
        assert len(edges) == 1
        (edge,) = edges
        assert edge.source is g.nodes["environment"]["dev"]
        assert edge.target is g.nodes["cluster"]["gcp-dev"]
        assert edge.path == "clusters[0].cluster"

    def test_leaf_node_has_no_edges(self) -> None:
        g = build_graph(_scenario())
        assert list(iter_edges(g.nodes["provider"]["gcp"])) == []

    def test_repeated_target_reported_per_occurrence(self) -> None:
        g = build_graph(
            Inventory(
                [
                    Resource("provider", "gcp"),
                    Resource("cluster", "c", data={"provider": "gcp", "backup": [{"provider": "gcp"}, {"provider": "gcp"}]}),
                ]
            )
        )
        edges = list(iter_edges(g.nodes["cluster"]["c"]))
        assert [e.path for e in edges] == ["provider", "backup[0].provider", "backup[1].provider"]
        assert {e.target.qualified_name for e in edges} == {"provider/gcp"}

    def test_walk_terminates_with_cycles(self) -> None:
        g = build_graph(
            Inventory(
                [
                    Resource("service", "a", data={"service": "b"}),
                    Resource("service", "b", data={"service": "a"}),
                ]
            )
        )
        assert [(e.source.name, e.target.name) for e in g.edges()] == [("a", "b"), ("b", "a")]

    def test_sample_graph_edge_count(self, sample_inventory: Inventory) -> None:
        g = build_graph(sample_inventory)
        # 2 apps x 2 deployments + 2 environments x 2 clusters + 4 clusters x 1 provider
        assert len(list(g.edges())) == 12


class TestIterReferences:
    def test_scalar_root(self) -> None:
        assert list(iter_references("cluster")) == []

    def test_top_level_list_paths(self) -> None:
        g = build_graph(Inventory([Resource("provider", "gcp"), Resource("pool", "p", data=[{"provider": "gcp"}])]))
        assert [path for path, _ in iter_references(g.nodes["pool"]["p"].resolved_data)] == ["[0].provider"]
