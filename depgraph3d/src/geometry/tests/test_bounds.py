"""
Tests for geometry/bounds.py - Bounding box helpers.
"""

import pytest

from depgraph3d.src.common.exceptions import LayoutError
from depgraph3d.src.geometry.bounds import BoundingBox
from depgraph3d.src.geometry.vector import Vector3


class TestBoundingBoxDimensions:
    def test_cube(self):
        box = BoundingBox.cube(5)
        assert box.min == Vector3(-5, -5, -5)
        assert box.max == Vector3(5, 5, 5)

    def test_extents_and_center(self):
        box = BoundingBox(Vector3(0, 10, -4), Vector3(8, 20, 4))
        assert box.width == 8
        assert box.height == 10
        assert box.depth == 8
        assert box.center == Vector3(4, 15, 0)

    def test_as_arrays(self):
        lo, hi = BoundingBox.cube(2).as_arrays()
        assert list(lo) == [-2, -2, -2]
        assert list(hi) == [2, 2, 2]


class TestBoundingBoxValidation:
    def test_valid_box_passes(self):
        BoundingBox.cube(1).validate()

    def test_flat_box_is_valid(self):
        BoundingBox(Vector3(0, 0, 0), Vector3(10, 0, 10)).validate()

    @pytest.mark.parametrize("axis", ["x", "y", "z"])
    def test_inverted_axis_raises(self, axis):
        lo = Vector3(0, 0, 0)
        hi = Vector3(1, 1, 1)
        setattr(lo, axis, 5)
        with pytest.raises(LayoutError, match=f"{axis} axis"):
            BoundingBox(lo, hi).validate()


class TestBoundingBoxContainment:
    def test_contains(self):
        box = BoundingBox.cube(1)
        assert box.contains(Vector3(1, -1, 0))
        assert not box.contains(Vector3(1.1, 0, 0))

    def test_clamp_moves_point_inside(self):
        box = BoundingBox.cube(1)
        point = Vector3(3, 0, -3)
        assert box.clamp(point) is point
        assert point == Vector3(1, 0, -1)
