"""
SpatialIndex: uniform grid used for neighbor queries.
"""

import math
from collections import defaultdict

from config import WIDTH, HEIGHT, GRID_CELL_SIZE


class SpatialIndex:
    """
    Uniform grid over the world plane.

    Entities are bucketed by the cell containing their ``pos``. Radius
    queries return every entity in the cells overlapping the circle's
    bounding box, so results may contain entities slightly outside the
    radius but never miss one inside it. Positions outside the world are
    bucketed into the nearest border cell.

    Attributes:
        cell_size (float): Side length of a cell
        cols (int): Number of cell columns
        rows (int): Number of cell rows
        buckets (dict): (col, row) -> list of entities
    """

    def __init__(self, width=WIDTH, height=HEIGHT, cell_size=GRID_CELL_SIZE):
        """
        Initialize an empty grid.

        Args:
            width (float): World width
            height (float): World height
            cell_size (float): Cell side length
        """
        if cell_size <= 0:
            raise ValueError("cell_size must be positive")
        self.width = width
        self.height = height
        self.cell_size = float(cell_size)
        self.cols = max(1, int(math.ceil(width / self.cell_size)))
        self.rows = max(1, int(math.ceil(height / self.cell_size)))
        self.buckets = defaultdict(list)
        self._count = 0

    def _col(self, x):
        return min(max(int(math.floor(x / self.cell_size)), 0), self.cols - 1)

    def _row(self, y):
        return min(max(int(math.floor(y / self.cell_size)), 0), self.rows - 1)

    def cell_of(self, pos):
        """Cell (col, row) holding a position."""
        return self._col(pos.x), self._row(pos.y)

    def clear(self):
        """Remove every entity."""
        self.buckets.clear()
        self._count = 0

    def insert(self, entity):
        """
        Add an entity by its ``pos``.

        Args:
            entity: Any object with a ``pos`` having ``x`` and ``y``
        """
        self.buckets[self.cell_of(entity.pos)].append(entity)
        self._count += 1

    def rebuild(self, *collections):
        """Clear, then insert every entity of every collection."""
        self.clear()
        for collection in collections:
            for entity in collection:
                self.insert(entity)

    def query_radius(self, point, radius):
        """
        Entities in every cell touched by the circle's bounding box.

        Args:
            point: Center with ``x`` and ``y``
            radius (float): Query radius

        Returns:
            list: Candidate entities (a superset of those within radius)
        """
        radius = max(0.0, radius)
        min_col, max_col = self._col(point.x - radius), self._col(point.x + radius)
        min_row, max_row = self._row(point.y - radius), self._row(point.y + radius)

        found = []
        for col in range(min_col, max_col + 1):
            for row in range(min_row, max_row + 1):
                bucket = self.buckets.get((col, row))
                if bucket:
                    found.extend(bucket)
        return found

    def query_within(self, point, radius):
        """Exact variant of ``query_radius``: entities at distance <= radius."""
        return [
            entity for entity in self.query_radius(point, radius)
            if math.hypot(entity.pos.x - point.x, entity.pos.y - point.y) <= radius
        ]

    def __len__(self):
        return self._count

    def __repr__(self):
        return f"SpatialIndex(cols={self.cols}, rows={self.rows}, entities={self._count})"
