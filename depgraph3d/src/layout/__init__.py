"""Graph Layout Module
=====================

Assigns 3D coordinates to dependency-graph nodes. It provides:

1. Five layout strategies (force-directed, hierarchical, circular, tree and
   grid), selected by :class:`LayoutAlgorithm`.
2. A crossing-minimization pass that perturbs nodes to reduce visual edge
   crossings on the horizontal plane.

Every call mutates ``CodeNode.position`` in place and leaves the node and
edge sets untouched.
"""

from .layout_engine import (
    LayoutEngine,
    LAYOUT_STRATEGIES,
    apply_layout,
    optimize_layout,
)
from .layout_plan import (
    LayoutAlgorithm,
    LayoutParameters,
    GraphLayout,
    resolve_rng,
)
from .force_directed_layout import ForceDirectedLayoutEngine
from .hierarchical_layout import compute_levels
from .tree_layout import find_tree_roots
from .circular_layout import circular_radius
from .crossing_optimizer import CrossingMinimizer, count_edge_crossings

__all__ = [
    # Entry points
    "apply_layout",
    "optimize_layout",
    "LayoutEngine",
    "LAYOUT_STRATEGIES",

    # Data structures
    "LayoutAlgorithm",
    "LayoutParameters",
    "GraphLayout",
    "resolve_rng",

    # Subsystems (for advanced use)
    "ForceDirectedLayoutEngine",
    "CrossingMinimizer",
    "count_edge_crossings",
    "compute_levels",
    "find_tree_roots",
    "circular_radius",
]
