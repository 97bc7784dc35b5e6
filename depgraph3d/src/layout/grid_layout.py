import math
from typing import List, Optional, Tuple

from depgraph3d.src.common.diagnostics import LayoutDiagnostics
from depgraph3d.src.geometry.bounds import BoundingBox
from depgraph3d.src.graph.models import CodeEdge, CodeNode
from .layout_plan import LayoutParameters, RandomSource, resolve_rng

"""Grid layout: row-major cells over the box's x/z extent."""


def grid_cell(index: int, side: int) -> Tuple[int, int]:
    """Return ``(row, col)`` of the ``index``-th node in a ``side``-wide grid."""
    return index // side, index % side


def apply_grid_layout(
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
    side = int(math.ceil(math.sqrt(len(nodes))))
    cell_width = bounds.width / side
    cell_depth = bounds.depth / side
    center_y = bounds.center.y

    for index, node in enumerate(nodes):
        row, col = grid_cell(index, side)
        x = bounds.min.x + col * cell_width + cell_width / 2
        z = bounds.min.z + row * cell_depth + cell_depth / 2
        jitter = (rng.random() - 0.5) * parameters.node_spacing
        y = min(max(center_y + jitter, bounds.min.y), bounds.max.y)
        node.place(x, y, z)
