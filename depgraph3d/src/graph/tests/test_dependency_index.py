"""
Tests for graph/dependency_index.py - Directed adjacency index.
"""

from depgraph3d.src.graph.dependency_index import DependencyIndex
from depgraph3d.src.graph.models import CodeEdge, CodeNode


def _index(node_ids, pairs):
    nodes = [CodeNode(n) for n in node_ids]
    edges = [CodeEdge(s, t) for s, t in pairs]
    return DependencyIndex.from_graph(nodes, edges)


class TestDependencyIndexBuild:
    def test_empty_index(self):
        index = DependencyIndex([])
        assert index.node_ids == []
        assert index.roots() == []
        assert index.topological_levels() == ([], [])

    def test_successors_and_in_degree(self):
        index = _index("ABC", [("A", "B"), ("A", "C"), ("B", "C")])
        assert index.successors("A") == ["B", "C"]
        assert index.in_degree("C") == 2
        assert index.successors("unknown") == []

    def test_dangling_edges_are_skipped(self):
        index = _index("AB", [("A", "B"), ("A", "ghost"), ("ghost", "B")])
        assert index.successors("A") == ["B"]
        assert index.in_degree("B") == 1
        assert len(index.dangling_edges) == 2

    def test_duplicate_edges_count_twice(self):
        index = _index("AB", [("A", "B"), ("A", "B")])
        assert index.in_degree("B") == 2

    def test_snapshot_lists_are_copies(self):
        index = _index("AB", [("A", "B")])
        index.successors("A").append("X")
        assert index.successors("A") == ["B"]


class TestDependencyIndexTraversal:
    def test_roots_in_insertion_order(self):
        index = _index("CAB", [("A", "B")])
        assert index.roots() == ["C", "A"]

    def test_reachable_from(self):
        index = _index("ABCD", [("A", "B"), ("B", "C")])
        assert index.reachable_from("A") == ["A", "B", "C"]
        assert index.reachable_from("A", exclude={"B"}) == ["A"]
        assert index.reachable_from("A", exclude={"A"}) == []

    def test_topological_levels_chain(self):
        index = _index("ABC", [("A", "B"), ("B", "C")])
        levels, leftover = index.topological_levels()
        assert levels == [["A"], ["B"], ["C"]]
        assert leftover == []

    def test_topological_levels_diamond(self):
        index = _index("ABCD", [("A", "B"), ("A", "C"), ("B", "D"), ("C", "D")])
        levels, _ = index.topological_levels()
        assert levels == [["A"], ["B", "C"], ["D"]]

    def test_cycle_nodes_are_leftover(self):
        index = _index("ABCD", [("A", "B"), ("B", "C"), ("C", "B"), ("C", "D")])
        levels, leftover = index.topological_levels()
        assert levels == [["A"]]
        assert leftover == ["B", "C", "D"]
