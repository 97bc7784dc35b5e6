from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

import numpy as np

from depgraph3d.src.common.constants import DEFAULT_CONFIG
from depgraph3d.src.geometry.bounds import BoundingBox

"""Data structures for layout configuration."""

RandomSource = Union[None, int, np.random.Generator]


class LayoutAlgorithm(str, Enum):
    """Available layout strategies."""

    FORCE_DIRECTED = "force_directed"
    HIERARCHICAL = "hierarchical"
    CIRCULAR = "circular"
    TREE = "tree"
    GRID = "grid"


@dataclass
class LayoutParameters:
    """Caller-supplied tuning for the layout algorithms.

    Values are not validated; ``iterations <= 0`` means no simulation work.
    """

    node_spacing: float = DEFAULT_CONFIG.node_spacing
    edge_length: float = DEFAULT_CONFIG.edge_length  # spring rest length
    repulsion_strength: float = DEFAULT_CONFIG.repulsion_strength
    attraction_strength: float = DEFAULT_CONFIG.attraction_strength
    iterations: int = DEFAULT_CONFIG.iterations


@dataclass
class GraphLayout:
    """Layout configuration attached to a project graph."""

    algorithm: LayoutAlgorithm = LayoutAlgorithm(DEFAULT_CONFIG.default_algorithm)
    parameters: LayoutParameters = field(default_factory=LayoutParameters)
    bounds: BoundingBox = field(
        default_factory=lambda: BoundingBox.cube(DEFAULT_CONFIG.bounds_half_extent)
    )


def resolve_rng(rng: RandomSource = None) -> np.random.Generator:
    """Turn a seed, generator or None into a numpy Generator.

    A Generator passed in is returned unchanged so callers can share one
    random stream across several passes.
    """
    return np.random.default_rng(rng)


def resolve_algorithm(
    algorithm: Union[LayoutAlgorithm, str]
) -> Optional[LayoutAlgorithm]:
    """Coerce an enum member or its string value; None if unknown."""
    if isinstance(algorithm, LayoutAlgorithm):
        return algorithm
    try:
        return LayoutAlgorithm(str(algorithm).lower())
    except ValueError:
        return None
