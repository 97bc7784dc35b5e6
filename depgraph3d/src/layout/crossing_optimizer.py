"""Edge-crossing minimization as a post-layout refinement pass.

Crossings are counted on the x/z projection of the layout. The search
perturbs one random node per trial and keeps the move only when the
crossing count strictly drops, so the result is never worse than the input.

Counting is O(E^2) per evaluation and runs once per trial; large graphs
should cap the trial count.
"""

from typing import List, Optional

import numpy as np
from numba import jit
from tqdm import tqdm

from depgraph3d.src.common.constants import (
    OPTIMIZER_TRIALS,
    PARALLEL_EPSILON,
    PERTURBATION_SCALE,
)
from depgraph3d.src.common.diagnostics import LayoutDiagnostics
from depgraph3d.src.geometry.bounds import BoundingBox
from depgraph3d.src.graph.models import CodeEdge, CodeNode, index_nodes
from .layout_plan import LayoutParameters, RandomSource, resolve_rng


# ============================================================================
# NUMBA-COMPILED HOT PATHS
# ============================================================================


@jit(nopython=True, cache=True)
def segments_cross_numba(
    x1: float,
    z1: float,
    x2: float,
    z2: float,
    x3: float,
    z3: float,
    x4: float,
    z4: float,
) -> bool:
    """
    Parametric intersection test of segments (p1, p2) and (p3, p4).

    Touching at an endpoint (t or u exactly 0 or 1) counts as a crossing, so
    edges sharing a node may be counted. Near-parallel pairs never cross.
    """
    denom = (x1 - x2) * (z3 - z4) - (z1 - z2) * (x3 - x4)
    if abs(denom) < PARALLEL_EPSILON:
        return False

    t = ((x1 - x3) * (z3 - z4) - (z1 - z3) * (x3 - x4)) / denom
    u = -((x1 - x2) * (z1 - z3) - (z1 - z2) * (x1 - x3)) / denom

    return 0.0 <= t <= 1.0 and 0.0 <= u <= 1.0


@jit(nopython=True, cache=True)
def count_crossings_numba(segments: np.ndarray) -> int:
    """Count crossing pairs among rows of ``segments`` = (x1, z1, x2, z2)."""
    n = segments.shape[0]
    crossings = 0
    for i in range(n):
        for j in range(i + 1, n):
            if segments_cross_numba(
                segments[i, 0],
                segments[i, 1],
                segments[i, 2],
                segments[i, 3],
                segments[j, 0],
                segments[j, 1],
                segments[j, 2],
                segments[j, 3],
            ):
                crossings += 1
    return crossings


# ============================================================================
# LOCAL SEARCH
# ============================================================================


class CrossingMinimizer:
    """Randomized local search that reduces edge crossings in place.

    Only nodes that already carry a position take part; edges with a
    dangling or unplaced endpoint are ignored.
    """

    def __init__(
        self,
        nodes: List[CodeNode],
        edges: List[CodeEdge],
        parameters: LayoutParameters,
        diagnostics: Optional[LayoutDiagnostics] = None,
        rng: RandomSource = None,
        bounds: Optional[BoundingBox] = None,
        trials: int = OPTIMIZER_TRIALS,
        show_progress: bool = False,
    ):
        self.parameters = parameters
        self.diagnostics = diagnostics or LayoutDiagnostics()
        self.rng = resolve_rng(rng)
        self.bounds = bounds
        self.trials = trials
        self.show_progress = show_progress

        self.nodes = [node for node in nodes if node.position is not None]
        self.node_id_to_idx = index_nodes(self.nodes)
        self.positions = np.array(
            [node.position.to_array() for node in self.nodes], dtype=np.float64
        ).reshape(-1, 3)

        pairs = [
            (self.node_id_to_idx[e.source], self.node_id_to_idx[e.target])
            for e in edges
            if e.source in self.node_id_to_idx and e.target in self.node_id_to_idx
        ]
        self.edge_pairs = np.array(pairs, dtype=np.int64).reshape(-1, 2)

    def _segments(self, pos_array: np.ndarray) -> np.ndarray:
        src = pos_array[self.edge_pairs[:, 0]]
        tgt = pos_array[self.edge_pairs[:, 1]]
        return np.ascontiguousarray(
            np.column_stack((src[:, 0], src[:, 2], tgt[:, 0], tgt[:, 2]))
        )

    def count_crossings(self, pos_array: Optional[np.ndarray] = None) -> int:
        if pos_array is None:
            pos_array = self.positions
        if len(self.edge_pairs) < 2:
            return 0
        return int(count_crossings_numba(self._segments(pos_array)))

    def optimize(self) -> int:
        """Run the trials, write the best positions back, return the final count."""
        initial = self.count_crossings()
        best = initial

        if len(self.nodes) == 0 or best == 0:
            return best

        step = self.parameters.node_spacing * PERTURBATION_SCALE
        lo = hi = None
        if self.bounds is not None:
            lo, hi = self.bounds.as_arrays()

        for _ in tqdm(
            range(max(self.trials, 0)),
            desc="Crossing optimizer",
            disable=not self.show_progress,
        ):
            idx = int(self.rng.integers(len(self.nodes)))
            original = self.positions[idx].copy()

            self.positions[idx] += (self.rng.random(3) - 0.5) * step
            if lo is not None:
                np.clip(self.positions[idx], lo, hi, out=self.positions[idx])

            crossings = self.count_crossings()
            if crossings < best:
                best = crossings
                if best == 0:
                    break
            else:
                self.positions[idx] = original

        for node, (x, y, z) in zip(self.nodes, self.positions):
            node.place(x, y, z)

        self.diagnostics.info(
            f"Crossing optimizer: {initial} -> {best} crossings",
            stage="optimizer",
        )
        return best


def count_edge_crossings(nodes: List[CodeNode], edges: List[CodeEdge]) -> int:
    """Number of edge pairs whose x/z projections intersect."""
    return CrossingMinimizer(nodes, edges, LayoutParameters()).count_crossings()


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
    """Refine an existing layout in place; returns the final crossing count."""
    return CrossingMinimizer(
        nodes,
        edges,
        parameters,
        diagnostics=diagnostics,
        rng=rng,
        bounds=bounds,
        trials=trials,
        show_progress=show_progress,
    ).optimize()
