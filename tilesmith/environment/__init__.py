"""Map-space primitives: occupancy grid and tile elevation patterns."""

from .grid import OccupancyGrid
from .schemas import CornerElevations
from .elevation import (
    ElevationPattern,
    ROTATIONS,
    ROTATION_TABLE,
    classify,
    is_flat,
    rotate_corners,
    rotate_pattern,
    rotation_needed,
)

__all__ = [
    "OccupancyGrid",
    "CornerElevations",
    "ElevationPattern",
    "ROTATIONS",
    "ROTATION_TABLE",
    "classify",
    "is_flat",
    "rotate_corners",
    "rotate_pattern",
    "rotation_needed",
]
