"""Force-directed layout for dependency graphs in 3D.

Every node pair repels with ``repulsion_strength / d**2`` and every edge acts
as a linear spring toward ``edge_length``. Forces are accumulated for the
whole iteration, damped, applied, and positions are clamped into the box.

Vectorized:
- scipy.spatial.distance for the pairwise distance matrix
- NumPy broadcasting for repulsion, np.add.at for spring accumulation
"""

from typing import Dict, List, Optional, Tuple

import numpy as np
from scipy.spatial.distance import pdist, squareform
from tqdm import tqdm

from depgraph3d.src.common.constants import FORCE_DAMPING, MIN_REPULSION_DISTANCE
from depgraph3d.src.common.diagnostics import LayoutDiagnostics
from depgraph3d.src.geometry.bounds import BoundingBox
from depgraph3d.src.graph.models import CodeEdge, CodeNode, index_nodes
from .layout_plan import LayoutParameters, RandomSource, resolve_rng


class ForceDirectedLayoutEngine:
    """
    Physics-based layout using repulsion, spring attraction and damping.

    Given fixed starting positions the simulation is deterministic; the only
    randomness is the initial placement of nodes that have no position.
    """

    def __init__(
        self,
        nodes: List[CodeNode],
        edges: List[CodeEdge],
        parameters: LayoutParameters,
        bounds: BoundingBox,
        diagnostics: Optional[LayoutDiagnostics] = None,
        rng: RandomSource = None,
        show_progress: bool = False,
    ):
        self.nodes = nodes
        self.edges = edges
        self.parameters = parameters
        self.bounds = bounds
        self.diagnostics = diagnostics or LayoutDiagnostics()
        self.rng = resolve_rng(rng)
        self.show_progress = show_progress

        self.n_nodes = len(nodes)
        self.node_id_to_idx = index_nodes(nodes)
        self.lo, self.hi = bounds.as_arrays()

        self._build_connectivity()

    def _build_connectivity(self) -> None:
        """Build source/target index arrays and weights for vectorization."""
        sources, targets, weights = [], [], []

        for edge in self.edges:
            src = self.node_id_to_idx.get(edge.source)
            tgt = self.node_id_to_idx.get(edge.target)
            if src is None or tgt is None:
                self.diagnostics.debug(
                    f"Skipping edge '{edge.key()}' with unknown endpoint",
                    stage="force_directed",
                )
                continue
            sources.append(src)
            targets.append(tgt)
            weights.append(edge.weight)

        self.sources = np.array(sources, dtype=np.int64)
        self.targets = np.array(targets, dtype=np.int64)
        self.weights = np.array(weights, dtype=np.float64)

        self.diagnostics.debug(
            f"Built connectivity: {len(self.sources)} springs over {self.n_nodes} nodes",
            stage="force_directed",
        )

    def _initialize_positions(self) -> np.ndarray:
        """Current positions as an (n, 3) array; unplaced nodes get random ones."""
        pos_array = np.zeros((self.n_nodes, 3), dtype=np.float64)
        center = self.bounds.center.to_array()
        extent = self.hi - self.lo

        for i, node in enumerate(self.nodes):
            if node.position is not None:
                pos_array[i] = node.position.to_array()
            else:
                pos_array[i] = center + (self.rng.random(3) - 0.5) * extent
        return pos_array

    # ========================================================================
    # FORCES
    # ========================================================================

    def _repulsive_forces(self, pos_array: np.ndarray) -> np.ndarray:
        """Pairwise inverse-square repulsion along j -> i.

        Pairs closer than MIN_REPULSION_DISTANCE (including i == j) are skipped.
        """
        if self.n_nodes < 2:
            return np.zeros_like(pos_array)

        diff = pos_array[:, None, :] - pos_array[None, :, :]
        dist = squareform(pdist(pos_array))
        active = dist >= MIN_REPULSION_DISTANCE

        # magnitude / distance folds the normalization of diff into one factor
        with np.errstate(divide="ignore", invalid="ignore"):
            factor = np.where(
                active, self.parameters.repulsion_strength / dist**3, 0.0
            )
        return np.einsum("ij,ijk->ik", factor, diff)

    def _attractive_forces(self, pos_array: np.ndarray) -> np.ndarray:
        """Signed linear springs along source -> target, weighted per edge."""
        forces = np.zeros_like(pos_array)
        if len(self.sources) == 0:
            return forces

        delta = pos_array[self.targets] - pos_array[self.sources]
        dist = np.linalg.norm(delta, axis=1)
        magnitude = (
            self.parameters.attraction_strength
            * (dist - self.parameters.edge_length)
            * self.weights
        )
        direction = np.divide(
            delta,
            dist[:, None],
            out=np.zeros_like(delta),
            where=dist[:, None] > 0,
        )
        force_vectors = direction * magnitude[:, None]

        np.add.at(forces, self.sources, force_vectors)
        np.subtract.at(forces, self.targets, force_vectors)
        return forces

    # ========================================================================
    # SIMULATION
    # ========================================================================

    def step(self, pos_array: np.ndarray) -> np.ndarray:
        """Run one iteration and return the new clamped positions."""
        forces = self._repulsive_forces(pos_array) + self._attractive_forces(pos_array)
        moved = pos_array + forces * FORCE_DAMPING
        return np.clip(moved, self.lo, self.hi)

    def simulate(self, pos_array: np.ndarray, iterations: int) -> np.ndarray:
        for _ in tqdm(
            range(max(iterations, 0)),
            desc="Force-directed",
            disable=not self.show_progress,
        ):
            pos_array = self.step(pos_array)
        return pos_array

    def optimize(self) -> Dict[str, Tuple[float, float, float]]:
        """
        Run the configured number of iterations and write positions back.

        Returns:
            Dict mapping node id to its final (x, y, z) position
        """
        if self.n_nodes == 0:
            return {}

        pos_array = self._initialize_positions()
        pos_array = self.simulate(pos_array, self.parameters.iterations)
        self._write_back(pos_array)

        self.diagnostics.info(
            f"Force-directed layout finished: {self.n_nodes} nodes, "
            f"{max(self.parameters.iterations, 0)} iterations",
            stage="force_directed",
        )
        return {node.id: node.position.to_tuple() for node in self.nodes}

    def _write_back(self, pos_array: np.ndarray) -> None:
        for node, (x, y, z) in zip(self.nodes, pos_array):
            node.place(x, y, z)


def apply_force_directed_layout(
    nodes: List[CodeNode],
    edges: List[CodeEdge],
    parameters: LayoutParameters,
    bounds: BoundingBox,
    *,
    rng: RandomSource = None,
    diagnostics: Optional[LayoutDiagnostics] = None,
    show_progress: bool = False,
) -> None:
    ForceDirectedLayoutEngine(
        nodes,
        edges,
        parameters,
        bounds,
        diagnostics=diagnostics,
        rng=rng,
        show_progress=show_progress,
    ).optimize()
