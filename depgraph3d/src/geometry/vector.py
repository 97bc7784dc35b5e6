from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple

import numpy as np

"""Mutable 3D point/vector used for node positions."""


@dataclass
class Vector3:
    """A 3D point or displacement.

    Binary operators return new vectors. ``add``/``sub``/``scale``/``clamp``
    and the augmented operators mutate in place so a node's position object
    can be rewritten without being replaced.
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    # ------------------------------------------------------------------
    # Construction / conversion
    # ------------------------------------------------------------------

    @classmethod
    def from_array(cls, values: Sequence[float]) -> Vector3:
        return cls(float(values[0]), float(values[1]), float(values[2]))

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def to_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def copy(self) -> Vector3:
        return Vector3(self.x, self.y, self.z)

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z))

    # ------------------------------------------------------------------
    # In-place mutation
    # ------------------------------------------------------------------

    def set(self, x: float, y: float, z: float) -> Vector3:
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)
        return self

    def copy_from(self, other: Vector3) -> Vector3:
        return self.set(other.x, other.y, other.z)

    def add(self, other: Vector3) -> Vector3:
        self.x += other.x
        self.y += other.y
        self.z += other.z
        return self

    def sub(self, other: Vector3) -> Vector3:
        self.x -= other.x
        self.y -= other.y
        self.z -= other.z
        return self

    def scale(self, factor: float) -> Vector3:
        self.x *= factor
        self.y *= factor
        self.z *= factor
        return self

    def clamp(self, lo: Vector3, hi: Vector3) -> Vector3:
        """Clamp each component into ``[lo, hi]``."""
        self.x = max(lo.x, min(hi.x, self.x))
        self.y = max(lo.y, min(hi.y, self.y))
        self.z = max(lo.z, min(hi.z, self.z))
        return self

    def __iadd__(self, other: Vector3) -> Vector3:
        return self.add(other)

    def __isub__(self, other: Vector3) -> Vector3:
        return self.sub(other)

    # ------------------------------------------------------------------
    # Pure operations
    # ------------------------------------------------------------------

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, factor: float) -> Vector3:
        return Vector3(self.x * factor, self.y * factor, self.z * factor)

    __rmul__ = __mul__

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalized(self) -> Vector3:
        """Unit vector in the same direction; the zero vector stays zero."""
        length = self.length()
        if length == 0.0:
            return Vector3()
        return Vector3(self.x / length, self.y / length, self.z / length)

    def distance_to(self, other: Vector3) -> float:
        return (self - other).length()

    def horizontal_distance_to(self, other: Vector3) -> float:
        """Distance in the x/z plane."""
        return math.hypot(self.x - other.x, self.z - other.z)
