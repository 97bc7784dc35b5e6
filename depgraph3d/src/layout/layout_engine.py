from typing import Callable, Dict, List, Optional, Union

from depgraph3d.src.common.constants import OPTIMIZER_TRIALS
from depgraph3d.src.common.diagnostics import LayoutDiagnostics
from depgraph3d.src.geometry.bounds import BoundingBox
from depgraph3d.src.graph.models import CodeEdge, CodeNode
from .circular_layout import apply_circular_layout
from .crossing_optimizer import optimize_layout as _optimize_layout
from .force_directed_layout import apply_force_directed_layout
from .grid_layout import apply_grid_layout
from .hierarchical_layout import apply_hierarchical_layout
from .layout_plan import (
    LayoutAlgorithm,
    LayoutParameters,
    RandomSource,
    resolve_algorithm,
    resolve_rng,
)
from .tree_layout import apply_tree_layout

LayoutStrategy = Callable[..., None]

LAYOUT_STRATEGIES: Dict[LayoutAlgorithm, LayoutStrategy] = {
    LayoutAlgorithm.FORCE_DIRECTED: apply_force_directed_layout,
    LayoutAlgorithm.HIERARCHICAL: apply_hierarchical_layout,
    LayoutAlgorithm.CIRCULAR: apply_circular_layout,
    LayoutAlgorithm.TREE: apply_tree_layout,
    LayoutAlgorithm.GRID: apply_grid_layout,
}


class LayoutEngine:
    """Selects a layout strategy and runs the crossing refinement pass.

    One engine shares a random stream and a diagnostics collector across
    calls, so a seeded engine reproduces the same sequence of layouts.
    Calls mutate node positions in place and must not run concurrently on
    the same graph.
    """

    def __init__(
        self,
        diagnostics: Optional[LayoutDiagnostics] = None,
        rng: RandomSource = None,
        show_progress: bool = False,
    ):
        self.diagnostics = diagnostics or LayoutDiagnostics()
        self.rng = resolve_rng(rng)
        self.show_progress = show_progress

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def apply_layout(
        self,
        nodes: List[CodeNode],
        edges: List[CodeEdge],
        algorithm: Union[LayoutAlgorithm, str],
        parameters: LayoutParameters,
        bounds: BoundingBox,
    ) -> None:
        """Assign positions to ``nodes`` in place.

        Raises:
            LayoutError: if the bounding box is inverted
        """
        bounds.validate()

        resolved = resolve_algorithm(algorithm)
        if resolved is None:
            self.diagnostics.warning(
                f"Unknown layout algorithm '{algorithm}', using force_directed",
                stage="layout",
            )
            resolved = LayoutAlgorithm.FORCE_DIRECTED

        self.diagnostics.debug(
            f"Applying {resolved.value} layout to {len(nodes)} nodes, "
            f"{len(edges)} edges",
            stage="layout",
        )
        LAYOUT_STRATEGIES[resolved](
            nodes,
            edges,
            parameters,
            bounds,
            rng=self.rng,
            diagnostics=self.diagnostics,
            show_progress=self.show_progress,
        )

    def optimize_layout(
        self,
        nodes: List[CodeNode],
        edges: List[CodeEdge],
        parameters: LayoutParameters,
        bounds: Optional[BoundingBox] = None,
        trials: int = OPTIMIZER_TRIALS,
    ) -> int:
        """Reduce edge crossings in place; returns the final crossing count."""
        return _optimize_layout(
            nodes,
            edges,
            parameters,
            rng=self.rng,
            bounds=bounds,
            trials=trials,
            diagnostics=self.diagnostics,
            show_progress=self.show_progress,
        )


def apply_layout(
    nodes: List[CodeNode],
    edges: List[CodeEdge],
    algorithm: Union[LayoutAlgorithm, str],
    parameters: LayoutParameters,
    bounds: BoundingBox,
    *,
    rng: RandomSource = None,
    diagnostics: Optional[LayoutDiagnostics] = None,
    show_progress: bool = False,
) -> None:
    LayoutEngine(diagnostics, rng, show_progress).apply_layout(
        nodes, edges, algorithm, parameters, bounds
    )


def optimize_layout(
    nodes: List[CodeNode],
    edges: List[CodeEdge],
    parameters: LayoutParameters,
    *,
    rng: RandomSource = None,
    bounds: Optional[BoundingBox] = None,
    trials: int = OPTIMIZER_TRIALS,
    diagnostics: Optional[LayoutDiagnostics] = None,
    show_progress: bool = False,
) -> int:
    return LayoutEngine(diagnostics, rng, show_progress).optimize_layout(
        nodes, edges, parameters, bounds=bounds, trials=trials
    )
