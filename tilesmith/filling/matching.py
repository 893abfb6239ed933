"""Shared helpers for the greedy fillers: terrain matching, orientations, scanning."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Sequence

from tilesmith.schemas import Tile


@dataclass(frozen=True, slots=True)
class Orientation:
    """Footprint of a tile at a base rotation (0 or 90)."""

    width: float
    height: float
    rotation: int


def terrain_matches(tile_terrain: str, wanted: str) -> bool:
    """Loose, case-insensitive terrain comparison.

    Terrain names are free text typed by users and echoed back by an LLM,
    so the comparison is deliberately fuzzy. Precedence:

    1. exact match ("forest" == "forest")
    2. the tile's terrain contains the wanted name ("dark forest" ⊇ "forest")
    3. the wanted name contains the tile's terrain ("forest" ⊆ "forest floor")

    Empty names never match.
    """
    tile_name = tile_terrain.strip().lower()
    wanted_name = wanted.strip().lower()
    if not tile_name or not wanted_name:
        return False
    if tile_name == wanted_name:
        return True
    if wanted_name in tile_name:
        return True
    return tile_name in wanted_name


def matching_tiles(tiles: Iterable[Tile], terrain: str, *, allow_diagonal: bool = False) -> List[Tile]:
    """Tiles whose terrain matches, in catalog order. Diagonal tiles are skipped by default."""
    return [
        tile
        for tile in tiles
        if terrain_matches(tile.terrain_type, terrain)
        and (allow_diagonal or not tile.is_diagonal)
    ]


def by_area_desc(tiles: Sequence[Tile]) -> List[Tile]:
    """Largest tiles first. ``sorted`` is stable, so ties keep catalog order."""
    return sorted(tiles, key=lambda tile: tile.area, reverse=True)


def orientations(tile: Tile) -> List[Orientation]:
    """Footprints to try for a tile: one for squares, otherwise upright then swapped."""
    if tile.width == tile.height:
        return [Orientation(tile.width, tile.height, 0)]
    return [
        Orientation(tile.width, tile.height, 0),
        Orientation(tile.height, tile.width, 90),
    ]


def scan_positions(start: float, end: float, size: float, step: float = 1) -> Iterator[float]:
    """Yield start, start+step, ... while a piece of ``size`` still ends by ``end``."""
    index = 0
    position = start
    while position + size <= end:
        yield position
        index += 1
        # Multiply rather than accumulate so fractional steps do not drift.
        position = start + index * step
