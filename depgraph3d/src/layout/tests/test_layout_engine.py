"""
Tests for layout/layout_engine.py - Strategy selection and refinement.
"""

import pytest

from depgraph3d.src.common.diagnostics import LayoutDiagnostics
from depgraph3d.src.common.exceptions import LayoutError
from depgraph3d.src.geometry.bounds import BoundingBox
from depgraph3d.src.geometry.vector import Vector3
from depgraph3d.src.graph.models import CodeNode
from depgraph3d.src.layout.layout_engine import (
    LAYOUT_STRATEGIES,
    LayoutEngine,
    apply_layout,
    optimize_layout,
)
from depgraph3d.src.layout.layout_plan import LayoutAlgorithm


class TestLayoutEngine:
    def test_every_algorithm_registered(self):
        assert set(LAYOUT_STRATEGIES) == set(LayoutAlgorithm)

    @pytest.mark.parametrize("algorithm", list(LayoutAlgorithm))
    def test_every_algorithm_places_all_nodes(
        self, algorithm, bounds, parameters, service_graph
    ):
        nodes, edges = service_graph
        apply_layout(nodes, edges, algorithm, parameters, bounds, rng=3)
        assert all(n.position is not None for n in nodes)
        assert all(bounds.contains(n.position, 1e-9) for n in nodes)

    def test_string_algorithm(self, bounds, parameters, service_graph):
        nodes, edges = service_graph
        apply_layout(nodes, edges, "circular", parameters, bounds, rng=3)
        assert all(n.position is not None for n in nodes)

    def test_unknown_algorithm_falls_back(self, bounds, parameters, service_graph):
        nodes, edges = service_graph
        diagnostics = LayoutDiagnostics()
        apply_layout(
            nodes, edges, "spiral", parameters, bounds, rng=3, diagnostics=diagnostics
        )
        assert diagnostics.warning_count() == 1
        assert "spiral" in diagnostics.get_messages()[0]
        assert all(n.position is not None for n in nodes)

    def test_inverted_bounds_raise(self, parameters, service_graph):
        nodes, edges = service_graph
        box = BoundingBox(Vector3(10, 0, 0), Vector3(-10, 10, 10))
        with pytest.raises(LayoutError):
            apply_layout(nodes, edges, LayoutAlgorithm.GRID, parameters, box)
        assert all(n.position is None for n in nodes)

    @pytest.mark.parametrize("algorithm", list(LayoutAlgorithm))
    def test_empty_graph_is_noop(self, algorithm, bounds, parameters):
        apply_layout([], [], algorithm, parameters, bounds)

    def test_node_set_is_preserved(self, bounds, parameters, service_graph):
        nodes, edges = service_graph
        ids_before = [n.id for n in nodes]
        edges_before = list(edges)
        apply_layout(nodes, edges, LayoutAlgorithm.TREE, parameters, bounds, rng=1)
        assert [n.id for n in nodes] == ids_before
        assert edges == edges_before

    def test_existing_position_objects_are_reused(self, bounds, parameters):
        position = Vector3(1, 1, 1)
        nodes = [CodeNode("a", position=position), CodeNode("b")]
        apply_layout(nodes, [], LayoutAlgorithm.GRID, parameters, bounds, rng=1)
        assert nodes[0].position is position

    def test_seeded_engine_is_reproducible(self, bounds, parameters, service_graph):
        nodes_a, edges = service_graph
        nodes_b = [CodeNode(n.id) for n in nodes_a]
        LayoutEngine(rng=42).apply_layout(
            nodes_a, edges, LayoutAlgorithm.FORCE_DIRECTED, parameters, bounds
        )
        LayoutEngine(rng=42).apply_layout(
            nodes_b, edges, LayoutAlgorithm.FORCE_DIRECTED, parameters, bounds
        )
        for a, b in zip(nodes_a, nodes_b):
            assert a.position.to_tuple() == pytest.approx(b.position.to_tuple())

    def test_optimize_after_layout(self, bounds, parameters, service_graph):
        nodes, edges = service_graph
        engine = LayoutEngine(rng=5)
        engine.apply_layout(nodes, edges, LayoutAlgorithm.CIRCULAR, parameters, bounds)
        result = engine.optimize_layout(nodes, edges, parameters, bounds=bounds)
        assert result >= 0
        assert all(bounds.contains(n.position, 1e-9) for n in nodes)

    def test_module_optimize_wrapper(self, parameters):
        assert optimize_layout([], [], parameters) == 0
