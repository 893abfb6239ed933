"""Greedy bin-packing of rectangular regions.

Tiles are tried largest first and dropped wherever the shared occupancy
grid accepts them. There is no backtracking: a single sweep can leave gaps
that a smaller tile scanned earlier in the list could have filled, so the
whole tile list is swept several times. Gaps that no tile combination
covers exactly stay empty.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from tilesmith.config import Config
from tilesmith.environment import OccupancyGrid
from tilesmith.schemas import Placement, TerrainRegion, Tile

from .matching import Orientation, by_area_desc, matching_tiles, orientations, scan_positions

Candidate = Tuple[Tile, List[Orientation]]


def greedy_fill(
    bounds: Tuple[float, float, float, float],
    candidates: Sequence[Candidate],
    grid: OccupancyGrid,
    *,
    step: float = 1,
    passes: Optional[int] = None,
) -> List[Placement]:
    """Sweep ``candidates`` over ``bounds`` and claim every free spot.

    ``bounds`` is (left, top, right, bottom) in inches. Positions are
    scanned row-major (y outer, x inner) starting at the top-left corner.
    """
    passes = Config.FILL_PASSES if passes is None else passes
    left, top, right, bottom = bounds
    placements: List[Placement] = []

    for _ in range(passes):
        for tile, tile_orientations in candidates:
            for orientation in tile_orientations:
                w, h = orientation.width, orientation.height
                for y in scan_positions(top, bottom, h, step):
                    for x in scan_positions(left, right, w, step):
                        if grid.try_place(x, y, w, h):
                            placements.append(
                                Placement(
                                    piece_id=tile.id,
                                    x=x,
                                    y=y,
                                    rotation=orientation.rotation,
                                )
                            )
    return placements


def region_bounds(region: TerrainRegion, map_width: float, map_height: float) -> Tuple[float, float, float, float]:
    """Region rectangle clipped to the map's right and bottom edges."""
    return (
        region.x,
        region.y,
        min(region.x + region.width, map_width),
        min(region.y + region.height, map_height),
    )


def fill_region(
    region: TerrainRegion,
    tiles: Sequence[Tile],
    map_width: float,
    map_height: float,
    grid: OccupancyGrid,
    prefer_flat: bool = False,
    passes: Optional[int] = None,
) -> List[Placement]:
    """Fill a terrain region with matching, non-diagonal tiles.

    With ``prefer_flat`` and at least one flat match, elevated pieces are
    left out so ordinary ground is not covered in ramps.
    """
    matched = matching_tiles(tiles, region.terrain)
    if not matched:
        return []

    if prefer_flat:
        flat = [tile for tile in matched if tile.is_flat]
        if flat:
            matched = flat

    candidates = [(tile, orientations(tile)) for tile in by_area_desc(matched)]
    return greedy_fill(
        region_bounds(region, map_width, map_height),
        candidates,
        grid,
        passes=passes,
    )
