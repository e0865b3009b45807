"""
Unit tests for SpatialIndex.
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

import math
import random

import pytest
from bacteria.organism import Vector
from simulation.spatial_grid import SpatialIndex


class Point:
    """Minimal entity with a position."""

    def __init__(self, x, y):
        self.pos = Vector(x, y)


def test_grid_dimensions():
    index = SpatialIndex(800, 600, 50)

    assert index.cols == 16
    assert index.rows == 12
    assert len(index) == 0


def test_invalid_cell_size():
    with pytest.raises(ValueError):
        SpatialIndex(800, 600, 0)


def test_insert_and_clear():
    """Test entities are bucketed by cell and removed by clear."""
    index = SpatialIndex(800, 600, 50)
    point = Point(120, 260)
    index.insert(point)

    assert index.cell_of(point.pos) == (2, 5)
    assert point in index.buckets[(2, 5)]
    assert len(index) == 1

    index.clear()
    assert len(index) == 0
    assert index.query_radius(point.pos, 100) == []


def test_out_of_world_positions_use_border_cells():
    index = SpatialIndex(800, 600, 50)

    assert index.cell_of(Vector(-30, -5)) == (0, 0)
    assert index.cell_of(Vector(800, 600)) == (15, 11)
    assert index.cell_of(Vector(5000, 10)) == (15, 0)


def test_rebuild_replaces_contents():
    index = SpatialIndex(800, 600, 50)
    index.insert(Point(10, 10))
    index.rebuild([Point(100, 100), Point(200, 200)], [Point(300, 300)])

    assert len(index) == 3


def test_query_radius_has_no_false_negatives():
    """Test every entity within the radius is returned."""
    rng = random.Random(3)
    index = SpatialIndex(800, 600, 50)
    points = [Point(rng.uniform(-50, 850), rng.uniform(-50, 650)) for _ in range(300)]
    index.rebuild(points)

    for _ in range(200):
        center = Vector(rng.uniform(0, 800), rng.uniform(0, 600))
        radius = rng.uniform(0, 200)
        found = {id(p) for p in index.query_radius(center, radius)}
        for point in points:
            if math.hypot(point.pos.x - center.x, point.pos.y - center.y) <= radius:
                assert id(point) in found


def test_query_radius_limits_to_nearby_cells():
    index = SpatialIndex(800, 600, 50)
    near = Point(105, 105)
    far = Point(700, 500)
    index.rebuild([near, far])

    found = index.query_radius(Vector(100, 100), 20)
    assert near in found
    assert far not in found


def test_query_within_is_exact():
    """Test the exact variant drops candidates outside the radius."""
    index = SpatialIndex(800, 600, 50)
    inside = Point(110, 100)
    outside = Point(140, 140)
    index.rebuild([inside, outside])

    assert outside in index.query_radius(Vector(100, 100), 30)
    assert index.query_within(Vector(100, 100), 30) == [inside]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
