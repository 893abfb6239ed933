"""Elevation zone filling.

A zone is a raised plateau: its interior wants platform pieces and its
border wants ramps that rise toward the interior. Each grid position asks
for the pattern its location implies (see ``position_pattern``) and takes
the first tile that shows that pattern, rotating edge and corner pieces
into place when needed.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from tilesmith.config import Config
from tilesmith.environment import (
    ElevationPattern,
    OccupancyGrid,
    rotate_pattern,
    rotation_needed,
)
from tilesmith.schemas import ElevationZone, Placement, Tile

from .matching import Orientation, by_area_desc, matching_tiles, orientations, scan_positions


def position_pattern(x: float, y: float, w: float, h: float, zone: ElevationZone) -> ElevationPattern:
    """Pattern a w×h piece at (x, y) must show inside ``zone``.

    Pieces on the zone border rise inward: a piece in the north-west corner
    has only its south-east corner raised, a piece along the north edge has
    its south side raised, and so on. Corners are checked before edges,
    north before south and west before east, which settles zones too thin
    for a piece to touch only one side.
    """
    north = y <= zone.y
    south = y + h >= zone.y + zone.height
    west = x <= zone.x
    east = x + w >= zone.x + zone.width

    if north and west:
        return ElevationPattern.CORNER_SE
    if north and east:
        return ElevationPattern.CORNER_SW
    if south and west:
        return ElevationPattern.CORNER_NE
    if south and east:
        return ElevationPattern.CORNER_NW
    if north:
        return ElevationPattern.EDGE_SOUTH
    if south:
        return ElevationPattern.EDGE_NORTH
    if west:
        return ElevationPattern.EDGE_EAST
    if east:
        return ElevationPattern.EDGE_WEST
    return ElevationPattern.PLATFORM


def _rotation_for(tile: Tile, orientation: Orientation, required: ElevationPattern) -> Optional[int]:
    """Final rotation that makes ``tile`` show ``required`` in this footprint, if any."""
    shown = rotate_pattern(tile.pattern, orientation.rotation)
    if shown == required:
        return orientation.rotation

    extra = rotation_needed(shown, required)
    if extra is None:
        return None
    # A quarter turn swaps the footprint; only square pieces keep it.
    if extra in (90, 270) and tile.width != tile.height:
        return None
    return (orientation.rotation + extra) % 360


def _grouped_candidates(tiles: Sequence[Tile]) -> List[Tile]:
    """Group tiles by pattern (enum order), largest first within each group."""
    groups: Dict[ElevationPattern, List[Tile]] = {}
    for tile in tiles:
        groups.setdefault(tile.pattern, []).append(tile)

    ordered: List[Tile] = []
    for pattern in ElevationPattern:
        ordered.extend(by_area_desc(groups.get(pattern, [])))
    return ordered


def zone_candidates(zone: ElevationZone, tiles: Sequence[Tile]) -> List[Tile]:
    """Tiles eligible for ``zone``, pieces built to the zone's height first.

    Pieces at other heights stay eligible after them, so a position whose
    pattern no at-height piece shows still gets the best piece available.
    """
    matched = matching_tiles(tiles, zone.terrain)
    at_height = [
        tile
        for tile in matched
        if tile.elevation is not None and tile.elevation.peak == zone.height_inches
    ]
    others = [tile for tile in matched if tile not in at_height]
    return _grouped_candidates(at_height) + _grouped_candidates(others)


def fill_elevation_zone(
    zone: ElevationZone,
    tiles: Sequence[Tile],
    map_width: float,
    map_height: float,
    grid: OccupancyGrid,
    passes: Optional[int] = None,
) -> List[Placement]:
    """Fill an elevation zone with pattern-matched, correctly rotated tiles."""
    candidates: List[Tuple[Tile, List[Orientation]]] = [
        (tile, orientations(tile)) for tile in zone_candidates(zone, tiles)
    ]
    if not candidates:
        return []

    passes = Config.FILL_PASSES if passes is None else passes
    right = min(zone.x + zone.width, map_width)
    bottom = min(zone.y + zone.height, map_height)
    placements: List[Placement] = []

    for _ in range(passes):
        for y in scan_positions(zone.y, bottom, 1):
            for x in scan_positions(zone.x, right, 1):
                placed = False
                for tile, tile_orientations in candidates:
                    for orientation in tile_orientations:
                        w, h = orientation.width, orientation.height
                        if x + w > right or y + h > bottom:
                            continue
                        rotation = _rotation_for(tile, orientation, position_pattern(x, y, w, h, zone))
                        if rotation is None:
                            continue
                        if grid.try_place(x, y, w, h):
                            placements.append(
                                Placement(piece_id=tile.id, x=x, y=y, rotation=rotation)
                            )
                            placed = True
                            break
                    if placed:
                        break
    return placements
