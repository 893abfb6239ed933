"""Dungeon geometry and floor filling.

Rooms and corridors are floored with flat pieces on a 1.5 inch scan grid,
half the width of the smallest 3 inch pieces, so narrow corridors line up
with their rooms. Where a narrow corridor opens into a wider room, two
3×3 diagonal pieces can flank the mouth to soften the corners.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence, Tuple

from tilesmith.config import Config
from tilesmith.environment import OccupancyGrid
from tilesmith.schemas import (
    CorridorStyle,
    DungeonCorridor,
    DungeonRoom,
    Placement,
    Tile,
)

from .matching import Orientation, by_area_desc, orientations, terrain_matches
from .regions import greedy_fill


@dataclass(frozen=True, slots=True)
class CorridorSegment:
    """Axis-aligned corridor rectangle. ``horizontal`` is the direction of travel."""

    x: float
    y: float
    width: float
    height: float
    horizontal: bool

    @property
    def cross_size(self) -> float:
        """Corridor width measured across the direction of travel."""
        return self.height if self.horizontal else self.width

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        return self.x, self.y, self.x + self.width, self.y + self.height


@dataclass(frozen=True, slots=True)
class DiagonalTransition:
    """A 3×3 diagonal piece flanking a corridor mouth."""

    x: float
    y: float
    rotation: int
    room_id: str
    side: str


# Rotations for the two wedges at a corridor mouth, keyed by
# (horizontal corridor, corridor on the room's low side). Horizontal
# corridors list (top, bottom); vertical corridors list (left, right).
TRANSITION_ROTATIONS = {
    (True, True): (180, 90),
    (True, False): (270, 0),
    (False, True): (90, 180),
    (False, False): (0, 270),
}


# ============================================================================
# Geometry
# ============================================================================


def _cross_start(center: float, width: float) -> float:
    """Left/top edge of a corridor centred on ``center``, on whole inches and never negative."""
    # The occupancy grid resolves whole inches; a half-inch offset would
    # make the corridor collide with the wedges and pieces beside it.
    return max(0, math.floor(center - width / 2))


def _span_center(lo_a: float, hi_a: float, lo_b: float, hi_b: float, width: float, fallback: float) -> float:
    """Centre of the shared span of two intervals, if a corridor of ``width`` fits in it."""
    lo, hi = max(lo_a, lo_b), min(hi_a, hi_b)
    if hi - lo >= width:
        return (lo + hi) / 2
    return fallback


def _straight_path(from_room: DungeonRoom, to_room: DungeonRoom, width: float) -> List[CorridorSegment]:
    (fcx, fcy), (tcx, tcy) = from_room.center, to_room.center
    dx, dy = tcx - fcx, tcy - fcy

    if abs(dx) >= abs(dy):
        if dx >= 0:
            start, end = from_room.x + from_room.width, to_room.x
        else:
            start, end = to_room.x + to_room.width, from_room.x
        # Rooms overlapping along the corridor axis leave no gap to bridge.
        if end <= start:
            return []
        center = _span_center(
            from_room.y, from_room.y + from_room.height,
            to_room.y, to_room.y + to_room.height,
            width, (fcy + tcy) / 2,
        )
        segment = CorridorSegment(
            x=start,
            y=_cross_start(center, width),
            width=end - start,
            height=width,
            horizontal=True,
        )
    else:
        if dy >= 0:
            start, end = from_room.y + from_room.height, to_room.y
        else:
            start, end = to_room.y + to_room.height, from_room.y
        if end <= start:
            return []
        center = _span_center(
            from_room.x, from_room.x + from_room.width,
            to_room.x, to_room.x + to_room.width,
            width, (fcx + tcx) / 2,
        )
        segment = CorridorSegment(
            x=_cross_start(center, width),
            y=start,
            width=width,
            height=end - start,
            horizontal=False,
        )

    return [segment]


def _l_shaped_path(from_room: DungeonRoom, to_room: DungeonRoom, width: float) -> List[CorridorSegment]:
    (fcx, fcy), (tcx, tcy) = from_room.center, to_room.center
    row_y = _cross_start(fcy, width)
    column_x = _cross_start(tcx, width)
    segments: List[CorridorSegment] = []

    # Horizontal leg runs out of the source room and includes the corner square.
    if tcx >= fcx:
        left, right = from_room.x + from_room.width, column_x + width
    else:
        left, right = column_x, from_room.x
    if right > left:
        segments.append(CorridorSegment(left, row_y, right - left, width, horizontal=True))

    # Vertical leg drops from the corner into the destination's near edge.
    if tcy >= fcy:
        top, bottom = row_y + width, to_room.y
    else:
        top, bottom = to_room.y + to_room.height, row_y
    if bottom > top:
        segments.append(CorridorSegment(column_x, top, width, bottom - top, horizontal=False))

    return segments


def corridor_path(
    from_room: DungeonRoom,
    to_room: DungeonRoom,
    width: float,
    style: CorridorStyle = CorridorStyle.STRAIGHT,
) -> List[CorridorSegment]:
    """Corridor rectangles joining two rooms, ordered from ``from_room`` to ``to_room``.

    Straight corridors are a single segment along the axis with the larger
    centre-to-centre distance. L-shaped corridors run horizontally out of
    the source room, then turn and enter the destination through its top or
    bottom edge. Legs with no length are dropped.
    """
    if style == CorridorStyle.L_SHAPED:
        return _l_shaped_path(from_room, to_room, width)
    return _straight_path(from_room, to_room, width)


def _mouth_transitions(segment: CorridorSegment, room: DungeonRoom) -> List[DiagonalTransition]:
    size = Config.TRANSITION_SIZE
    cx, cy = room.center

    if segment.horizontal:
        # Not enough wall on either side of the mouth for a wedge.
        if segment.height >= room.height - size:
            return []
        low_side = segment.x + segment.width / 2 < cx
        top_rotation, bottom_rotation = TRANSITION_ROTATIONS[(True, low_side)]
        x = room.x - size if low_side else room.x + room.width
        return [
            DiagonalTransition(x, segment.y - size, top_rotation, room.id, "top"),
            DiagonalTransition(x, segment.y + segment.height, bottom_rotation, room.id, "bottom"),
        ]

    if segment.width >= room.width - size:
        return []
    low_side = segment.y + segment.height / 2 < cy
    left_rotation, right_rotation = TRANSITION_ROTATIONS[(False, low_side)]
    y = room.y - size if low_side else room.y + room.height
    return [
        DiagonalTransition(segment.x - size, y, left_rotation, room.id, "left"),
        DiagonalTransition(segment.x + segment.width, y, right_rotation, room.id, "right"),
    ]


def diagonal_transitions(
    corridor: DungeonCorridor,
    rooms: Mapping[str, DungeonRoom],
    segments: Sequence[CorridorSegment],
) -> List[DiagonalTransition]:
    """Diagonal wedges where ``corridor`` meets its two rooms.

    The first segment is matched against the source room and the last
    against the destination. A mouth gets wedges only when the corridor is
    narrower than the room wall by more than one wedge width.
    """
    if not corridor.use_diagonal_transitions or not segments:
        return []

    transitions: List[DiagonalTransition] = []
    from_room = rooms.get(corridor.from_room)
    to_room = rooms.get(corridor.to_room)
    if from_room is not None:
        transitions.extend(_mouth_transitions(segments[0], from_room))
    if to_room is not None:
        transitions.extend(_mouth_transitions(segments[-1], to_room))
    return transitions


# ============================================================================
# Floor filling
# ============================================================================


def floor_tiles(tiles: Sequence[Tile], terrain: str) -> List[Tile]:
    """Flat, non-diagonal tiles for a dungeon floor. An empty terrain accepts any."""
    return [
        tile
        for tile in tiles
        if tile.is_flat
        and not tile.is_diagonal
        and (not terrain or terrain_matches(tile.terrain_type, terrain))
    ]


def fill_dungeon_room(
    room: DungeonRoom,
    tiles: Sequence[Tile],
    terrain: str,
    grid: OccupancyGrid,
    passes: Optional[int] = None,
) -> List[Placement]:
    """Floor a room largest-piece-first on the dungeon scan grid."""
    candidates = [(tile, orientations(tile)) for tile in by_area_desc(floor_tiles(tiles, terrain))]
    if not candidates:
        return []
    return greedy_fill(
        (room.x, room.y, room.x + room.width, room.y + room.height),
        candidates,
        grid,
        step=Config.DUNGEON_STEP,
        passes=passes,
    )


def _corridor_orientations(tile: Tile, segment: CorridorSegment) -> List[Orientation]:
    fitting: List[Orientation] = []
    for orientation in orientations(tile):
        across = orientation.height if segment.horizontal else orientation.width
        if across <= segment.cross_size:
            fitting.append(orientation)
    return fitting


def fill_dungeon_corridor(
    segment: CorridorSegment,
    corridor_width: float,
    tiles: Sequence[Tile],
    terrain: str,
    grid: OccupancyGrid,
    passes: Optional[int] = None,
) -> List[Placement]:
    """Floor one corridor segment.

    Pieces exactly as wide as the corridor go first, then the longest
    pieces; orientations wider than the corridor are never tried.
    """
    ranked = sorted(
        floor_tiles(tiles, terrain),
        key=lambda tile: (
            0 if corridor_width in (tile.width, tile.height) else 1,
            -max(tile.width, tile.height),
        ),
    )
    candidates = []
    for tile in ranked:
        fitting = _corridor_orientations(tile, segment)
        if fitting:
            candidates.append((tile, fitting))
    if not candidates:
        return []
    return greedy_fill(
        segment.bounds,
        candidates,
        grid,
        step=Config.DUNGEON_STEP,
        passes=passes,
    )


def transition_tile(tiles: Sequence[Tile], terrain: str) -> Optional[Tile]:
    """The diagonal piece used for wedges: terrain match first, any fitting diagonal otherwise."""
    size = Config.TRANSITION_SIZE
    diagonals = [
        tile for tile in tiles
        if tile.is_diagonal and tile.width == size and tile.height == size
    ]
    if terrain:
        for tile in diagonals:
            if terrain_matches(tile.terrain_type, terrain):
                return tile
    return diagonals[0] if diagonals else None


def place_transitions(
    transitions: Sequence[DiagonalTransition],
    tiles: Sequence[Tile],
    terrain: str,
    grid: OccupancyGrid,
) -> List[Placement]:
    """Place a diagonal piece at every transition the grid still has room for."""
    tile = transition_tile(tiles, terrain)
    if tile is None:
        return []

    size = Config.TRANSITION_SIZE
    placements: List[Placement] = []
    for transition in transitions:
        if grid.try_place(transition.x, transition.y, size, size):
            placements.append(
                Placement(
                    piece_id=tile.id,
                    x=transition.x,
                    y=transition.y,
                    rotation=transition.rotation,
                )
            )
    return placements
