"""Geometry primitives: points, vectors and bounding boxes."""

from .vector import Vector3
from .bounds import BoundingBox

__all__ = ["Vector3", "BoundingBox"]
