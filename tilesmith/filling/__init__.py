"""Greedy fillers that turn abstract layout areas into tile placements.

Every filler takes the shared ``OccupancyGrid`` explicitly and claims
cells only through ``OccupancyGrid.try_place``, so fillers run one after
another against the same grid never overlap.
"""

from .matching import Orientation, terrain_matches, matching_tiles, orientations, scan_positions
from .regions import fill_region, greedy_fill
from .elevation_zones import fill_elevation_zone, position_pattern
from .paths import path_to_segments
from .dungeon import (
    CorridorSegment,
    DiagonalTransition,
    TRANSITION_ROTATIONS,
    corridor_path,
    diagonal_transitions,
    fill_dungeon_corridor,
    fill_dungeon_room,
    place_transitions,
)
from .gaps import fill_gaps

__all__ = [
    "Orientation",
    "terrain_matches",
    "matching_tiles",
    "orientations",
    "scan_positions",
    "fill_region",
    "greedy_fill",
    "fill_elevation_zone",
    "position_pattern",
    "path_to_segments",
    "CorridorSegment",
    "DiagonalTransition",
    "TRANSITION_ROTATIONS",
    "corridor_path",
    "diagonal_transitions",
    "fill_dungeon_corridor",
    "fill_dungeon_room",
    "place_transitions",
    "fill_gaps",
]
