"""Occupancy grid shared by every filler in a single fill pass.

The map is measured in inches and the grid resolves it at one cell per
inch. Placements may sit on fractional coordinates (dungeon floors scan on
a 1.5 inch step), so every rectangle is widened outward to whole cells:
the grid is conservative and never under-reports a collision.
"""

from __future__ import annotations

import math
from typing import List, Tuple


class OccupancyGrid:
    """Tracks which map cells are already covered by a placement.

    One instance is owned by one fill invocation. Fillers call
    ``try_place`` (check then mark); nothing else mutates the cells except
    ``mark_occupied`` for pieces that already exist on the map.
    """

    def __init__(self, width: float, height: float):
        self.width = max(0, math.ceil(width))
        self.height = max(0, math.ceil(height))
        # Row-major cells: _cells[row][col]. False means free.
        self._cells: List[List[bool]] = [
            [False] * self.width for _ in range(self.height)
        ]

    @staticmethod
    def _cell_span(x: float, y: float, w: float, h: float) -> Tuple[int, int, int, int]:
        """Return (start_col, start_row, end_col, end_row), end exclusive."""
        return (
            math.floor(x),
            math.floor(y),
            math.ceil(x + w),
            math.ceil(y + h),
        )

    def can_place(self, x: float, y: float, w: float, h: float) -> bool:
        """Check whether a w×h rectangle at (x, y) fits inside the map and is free."""
        start_col, start_row, end_col, end_row = self._cell_span(x, y, w, h)

        if start_col < 0 or start_row < 0:
            return False
        if end_col > self.width or end_row > self.height:
            return False

        for row in range(start_row, end_row):
            cells = self._cells[row]
            for col in range(start_col, end_col):
                if cells[col]:
                    return False
        return True

    def mark_occupied(self, x: float, y: float, w: float, h: float) -> None:
        """Mark the rectangle occupied, clipping silently to the grid bounds."""
        start_col, start_row, end_col, end_row = self._cell_span(x, y, w, h)

        for row in range(max(0, start_row), min(end_row, self.height)):
            cells = self._cells[row]
            for col in range(max(0, start_col), min(end_col, self.width)):
                cells[col] = True

    def try_place(self, x: float, y: float, w: float, h: float) -> bool:
        """Claim the rectangle if it is free. Returns True when claimed."""
        if not self.can_place(x, y, w, h):
            return False
        self.mark_occupied(x, y, w, h)
        return True

    def is_occupied(self, col: int, row: int) -> bool:
        """Return True for occupied cells. Cells outside the grid count as occupied."""
        if not (0 <= col < self.width and 0 <= row < self.height):
            return True
        return self._cells[row][col]

    def count_empty(self) -> int:
        """Number of free cells left on the map."""
        return sum(row.count(False) for row in self._cells)
