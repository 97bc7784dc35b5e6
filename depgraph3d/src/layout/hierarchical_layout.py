"""Hierarchical layout: horizontal bands by dependency depth, roots on top."""

from typing import List, Optional, Tuple

from depgraph3d.src.common.constants import DEPTH_SPREAD
from depgraph3d.src.common.diagnostics import LayoutDiagnostics
from depgraph3d.src.geometry.bounds import BoundingBox
from depgraph3d.src.graph.dependency_index import DependencyIndex
from depgraph3d.src.graph.models import CodeEdge, CodeNode
from .layout_plan import LayoutParameters, RandomSource, resolve_rng


def compute_levels(
    nodes: List[CodeNode],
    edges: List[CodeEdge],
    diagnostics: Optional[LayoutDiagnostics] = None,
) -> Tuple[List[List[str]], List[str]]:
    """Level the graph with Kahn's algorithm.

    Nodes that never drain (on or downstream of a cycle) are pinned to the
    last computed level, or form level 0 when nothing drained at all.

    Returns:
        (levels, pinned) where ``pinned`` lists the cycle-bound node ids
    """
    diagnostics = diagnostics or LayoutDiagnostics()
    index = DependencyIndex.from_graph(nodes, edges)
    levels, leftover = index.topological_levels()

    if leftover:
        if levels:
            levels[-1].extend(leftover)
        else:
            levels.append(list(leftover))
        diagnostics.warning(
            f"{len(leftover)} node(s) sit on or behind a dependency cycle; "
            f"pinned to level {len(levels) - 1}",
            stage="hierarchical",
        )
    return levels, leftover


def apply_hierarchical_layout(
    nodes: List[CodeNode],
    edges: List[CodeEdge],
    parameters: LayoutParameters,
    bounds: BoundingBox,
    *,
    rng: RandomSource = None,
    diagnostics: Optional[LayoutDiagnostics] = None,
    show_progress: bool = False,
) -> None:
    if not nodes:
        return
    rng = resolve_rng(rng)
    levels, _ = compute_levels(nodes, edges, diagnostics)
    by_id = {node.id: node for node in nodes}

    level_height = bounds.height / max(len(levels) - 1, 1)
    center_z = bounds.center.z

    for level_index, level in enumerate(levels):
        y = bounds.max.y - level_index * level_height
        level_width = bounds.width / max(len(level) - 1, 1)

        for node_index, node_id in enumerate(level):
            x = bounds.min.x + node_index * level_width
            z = center_z + (rng.random() - 0.5) * bounds.depth * DEPTH_SPREAD
            by_id[node_id].place(x, y, z)
