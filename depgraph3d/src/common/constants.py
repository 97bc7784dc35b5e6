"""Shared constants and default configuration for the layout engine."""

from dataclasses import dataclass

# Force-directed simulation
FORCE_DAMPING = 0.9
MIN_REPULSION_DISTANCE = 0.1  # pairs closer than this are skipped

# Crossing optimizer
OPTIMIZER_TRIALS = 100
PERTURBATION_SCALE = 0.5  # fraction of node_spacing
PARALLEL_EPSILON = 1e-4

# Closed-form layouts
CIRCULAR_RADIUS_FACTOR = 0.8
CIRCULAR_VERTICAL_SPREAD = 0.2  # fraction of box height
DEPTH_SPREAD = 0.3  # fraction of box depth for hierarchical/tree layouts

# Default layout parameters
DEFAULT_NODE_SPACING = 5.0
DEFAULT_EDGE_LENGTH = 8.0
DEFAULT_REPULSION_STRENGTH = 100.0
DEFAULT_ATTRACTION_STRENGTH = 0.1
DEFAULT_ITERATIONS = 1000
DEFAULT_BOUNDS_HALF_EXTENT = 20.0


@dataclass(frozen=True)
class LayoutConfig:
    """Defaults used when a graph document or caller leaves a setting out."""

    default_algorithm: str = "force_directed"
    node_spacing: float = DEFAULT_NODE_SPACING
    edge_length: float = DEFAULT_EDGE_LENGTH
    repulsion_strength: float = DEFAULT_REPULSION_STRENGTH
    attraction_strength: float = DEFAULT_ATTRACTION_STRENGTH
    iterations: int = DEFAULT_ITERATIONS
    bounds_half_extent: float = DEFAULT_BOUNDS_HALF_EXTENT
    optimize: bool = True
    optimizer_trials: int = OPTIMIZER_TRIALS


DEFAULT_CONFIG = LayoutConfig()
