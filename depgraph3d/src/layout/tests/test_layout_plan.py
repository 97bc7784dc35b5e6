"""
Tests for layout/layout_plan.py - Layout configuration structures.
"""

import numpy as np

from depgraph3d.src.common.constants import DEFAULT_CONFIG
from depgraph3d.src.layout.layout_plan import (
    GraphLayout,
    LayoutAlgorithm,
    LayoutParameters,
    resolve_algorithm,
    resolve_rng,
)


class TestLayoutParameters:
    def test_defaults_follow_config(self):
        params = LayoutParameters()
        assert params.node_spacing == DEFAULT_CONFIG.node_spacing
        assert params.edge_length == DEFAULT_CONFIG.edge_length
        assert params.iterations == DEFAULT_CONFIG.iterations

    def test_graph_layout_defaults(self):
        layout = GraphLayout()
        assert layout.algorithm == LayoutAlgorithm.FORCE_DIRECTED
        assert layout.bounds.max.x == DEFAULT_CONFIG.bounds_half_extent
        assert layout.bounds.min.x == -DEFAULT_CONFIG.bounds_half_extent

    def test_graph_layouts_do_not_share_bounds(self):
        first = GraphLayout()
        second = GraphLayout()
        first.bounds.max.x = 99
        assert second.bounds.max.x == DEFAULT_CONFIG.bounds_half_extent


class TestResolveAlgorithm:
    def test_enum_passthrough(self):
        assert resolve_algorithm(LayoutAlgorithm.TREE) is LayoutAlgorithm.TREE

    def test_string_values(self):
        assert resolve_algorithm("grid") is LayoutAlgorithm.GRID
        assert resolve_algorithm("Hierarchical") is LayoutAlgorithm.HIERARCHICAL

    def test_unknown_returns_none(self):
        assert resolve_algorithm("spiral") is None


class TestResolveRng:
    def test_seed_is_reproducible(self):
        assert resolve_rng(7).random() == resolve_rng(7).random()

    def test_generator_is_shared(self):
        gen = np.random.default_rng(3)
        assert resolve_rng(gen) is gen

    def test_none_gives_generator(self):
        assert isinstance(resolve_rng(None), np.random.Generator)
