"""Fill the empty ground left around pieces that are already on the map."""

from __future__ import annotations

from typing import List, Optional, Sequence

from tilesmith.config import Config
from tilesmith.environment import OccupancyGrid
from tilesmith.schemas import GapFillResponse, PlacedPiece, Placement, Tile

from .matching import matching_tiles, orientations
from .regions import greedy_fill


def fill_gaps(
    placed: Sequence[PlacedPiece],
    tiles: Sequence[Tile],
    terrain_type: str,
    map_width: float,
    map_height: float,
    passes: Optional[int] = None,
) -> GapFillResponse:
    """Cover the remaining empty map area with flat pieces of one terrain.

    The first sweep places the largest pieces; later sweeps go smallest
    first to plug the leftovers. The whole map is scanned on the dungeon
    step so pieces line up with existing half-grid placements.
    """
    passes = Config.FILL_PASSES if passes is None else passes
    grid = OccupancyGrid(map_width, map_height)
    for piece in placed:
        grid.mark_occupied(piece.x, piece.y, piece.width, piece.height)

    empty_before = grid.count_empty()

    flat = [tile for tile in matching_tiles(tiles, terrain_type) if tile.is_flat]
    if not flat:
        return GapFillResponse(placements=[], filled_area=0)

    largest_first = sorted(flat, key=lambda tile: tile.area, reverse=True)
    smallest_first = sorted(flat, key=lambda tile: tile.area)
    sweeps = [largest_first] + [smallest_first] * max(0, passes - 1)

    placements: List[Placement] = []
    for ordering in sweeps:
        placements.extend(
            greedy_fill(
                (0, 0, map_width, map_height),
                [(tile, orientations(tile)) for tile in ordering],
                grid,
                step=Config.DUNGEON_STEP,
                passes=1,
            )
        )

    return GapFillResponse(
        placements=placements,
        filled_area=empty_before - grid.count_empty(),
    )
