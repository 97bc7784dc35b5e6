import math
from typing import List, Optional

from depgraph3d.src.common.constants import (
    CIRCULAR_RADIUS_FACTOR,
    CIRCULAR_VERTICAL_SPREAD,
)
from depgraph3d.src.common.diagnostics import LayoutDiagnostics
from depgraph3d.src.geometry.bounds import BoundingBox
from depgraph3d.src.graph.models import CodeEdge, CodeNode
from .layout_plan import LayoutParameters, RandomSource, resolve_rng

"""Circular layout: nodes evenly spaced on a ring in the x/z plane."""


def circular_radius(bounds: BoundingBox) -> float:
    return min(bounds.width / 2, bounds.depth / 2) * CIRCULAR_RADIUS_FACTOR


def apply_circular_layout(
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
    radius = circular_radius(bounds)
    center = bounds.center
    count = len(nodes)

    for index, node in enumerate(nodes):
        angle = 2 * math.pi * index / count
        x = center.x + math.cos(angle) * radius
        z = center.z + math.sin(angle) * radius
        y = center.y + (rng.random() - 0.5) * bounds.height * CIRCULAR_VERTICAL_SPREAD
        node.place(x, y, z)
