"""
Tests for architecture/project.py - Project graph containers.
"""

import pytest

from depgraph3d.src.architecture.project import CodeGraph
from depgraph3d.src.graph.models import CodeEdge, CodeNode


def _graph():
    return CodeGraph(
        id="shop",
        nodes=[CodeNode("a"), CodeNode("b")],
        edges=[CodeEdge("a", "b")],
    )


class TestNodeLookup:
    def test_get_node(self):
        graph = _graph()
        assert graph.get_node("b") is graph.nodes[1]
        assert graph.get_node("missing") is None

    def test_replaced_node_is_found(self):
        graph = _graph()
        graph.get_node("a")
        graph.nodes[0] = CodeNode("c")
        assert graph.get_node("c") is graph.nodes[0]
        assert graph.get_node("a") is None

    def test_removed_node_is_not_returned(self):
        graph = _graph()
        graph.get_node("b")
        del graph.nodes[1]
        graph.nodes.append(CodeNode("d"))
        assert graph.get_node("b") is None
        assert graph.get_node("d") is graph.nodes[1]

    def test_renamed_node_is_reindexed(self):
        graph = _graph()
        graph.get_node("a")
        graph.nodes[0].id = "z"
        assert graph.get_node("a") is None
        assert graph.get_node("z") is graph.nodes[0]


class TestGraphEquality:
    def test_lookup_cache_does_not_affect_equality(self):
        first, second = _graph(), _graph()
        first.get_node("a")
        assert first == second

    def test_lookup_cache_is_not_a_constructor_argument(self):
        with pytest.raises(TypeError):
            CodeGraph(id="shop", _node_map={})
