from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from depgraph3d.src.common.exceptions import LayoutError
from .vector import Vector3

"""Axis-aligned bounding box constraining layout output."""


@dataclass
class BoundingBox:
    """A min/max corner pair. y is the vertical axis; x/z span the horizontal plane."""

    min: Vector3
    max: Vector3

    @classmethod
    def cube(cls, half_extent: float) -> BoundingBox:
        """Box centered on the origin with equal extent on every axis."""
        return cls(
            Vector3(-half_extent, -half_extent, -half_extent),
            Vector3(half_extent, half_extent, half_extent),
        )

    @property
    def width(self) -> float:
        return self.max.x - self.min.x

    @property
    def height(self) -> float:
        return self.max.y - self.min.y

    @property
    def depth(self) -> float:
        return self.max.z - self.min.z

    @property
    def center(self) -> Vector3:
        return Vector3(
            (self.max.x + self.min.x) / 2,
            (self.max.y + self.min.y) / 2,
            (self.max.z + self.min.z) / 2,
        )

    def validate(self) -> None:
        """Raise LayoutError if min exceeds max on any axis."""
        for axis in ("x", "y", "z"):
            lo = getattr(self.min, axis)
            hi = getattr(self.max, axis)
            if lo > hi:
                raise LayoutError(
                    f"Inverted bounding box on {axis} axis: min {lo} > max {hi}",
                    stage="bounds",
                )

    def contains(self, point: Vector3, tolerance: float = 1e-9) -> bool:
        return (
            self.min.x - tolerance <= point.x <= self.max.x + tolerance
            and self.min.y - tolerance <= point.y <= self.max.y + tolerance
            and self.min.z - tolerance <= point.z <= self.max.z + tolerance
        )

    def clamp(self, point: Vector3) -> Vector3:
        """Clamp ``point`` into the box in place and return it."""
        return point.clamp(self.min, self.max)

    def as_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """Return ``(lo, hi)`` corner arrays for vectorized clipping."""
        return self.min.to_array(), self.max.to_array()
