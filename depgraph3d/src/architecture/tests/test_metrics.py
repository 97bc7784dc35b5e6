"""
Tests for architecture/metrics.py - Structural graph metrics.
"""

from depgraph3d.src.architecture.metrics import (
    compute_metrics,
    count_components,
    graph_complexity,
    graph_depth,
)
from depgraph3d.src.architecture.project import CodeGraph, ProjectMetadata
from depgraph3d.src.graph.models import CodeEdge, CodeNode


def _graph(ids, pairs, **kwargs):
    return CodeGraph(
        id="g",
        nodes=[CodeNode(i) for i in ids],
        edges=[CodeEdge(s, t) for s, t in pairs],
        **kwargs,
    )


class TestComponents:
    def test_empty_graph(self):
        assert count_components(_graph([], [])) == 0

    def test_isolated_nodes(self):
        assert count_components(_graph("ABC", [])) == 3

    def test_direction_is_ignored(self):
        graph = _graph("ABCD", [("A", "B"), ("C", "B")])
        assert count_components(graph) == 2

    def test_dangling_edges_ignored(self):
        graph = _graph("AB", [("A", "ghost")])
        assert count_components(graph) == 2


class TestComplexity:
    def test_tree_has_complexity_one(self):
        # E - N + 2P = 2 - 3 + 2 = 1
        assert graph_complexity(_graph("ABC", [("A", "B"), ("A", "C")])) == 1

    def test_diamond(self):
        graph = _graph("ABCD", [("A", "B"), ("A", "C"), ("B", "D"), ("C", "D")])
        assert graph_complexity(graph) == 2

    def test_floor_of_one(self):
        assert graph_complexity(_graph([], [])) == 1

    def test_service_graph(self, service_graph):
        nodes, edges = service_graph
        graph = CodeGraph(id="svc", nodes=nodes, edges=edges)
        assert graph_complexity(graph) == 7 - 7 + 2


class TestDepth:
    def test_chain(self):
        graph = _graph("ABCD", [("A", "B"), ("B", "C"), ("C", "D")])
        assert graph_depth(graph) == 3

    def test_no_edges(self):
        assert graph_depth(_graph("AB", [])) == 0

    def test_cycle_starts_from_first_node(self):
        graph = _graph("ABC", [("A", "B"), ("B", "C"), ("C", "A")])
        assert graph_depth(graph) == 2

    def test_empty(self):
        assert graph_depth(_graph([], [])) == 0


class TestComputeMetrics:
    def test_collects_everything(self):
        graph = _graph(
            "ABC",
            [("A", "B"), ("B", "C")],
            metadata=ProjectMetadata(technologies=["Python", "PostgreSQL"]),
        )
        metrics = compute_metrics(graph)
        assert metrics.node_count == 3
        assert metrics.edge_count == 2
        assert metrics.complexity == 1
        assert metrics.depth == 2
        assert metrics.technologies == ["Python", "PostgreSQL"]
