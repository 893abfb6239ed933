"""Tests for terrain matching and greedy region filling."""

from tilesmith.environment import CornerElevations, OccupancyGrid
from tilesmith.filling import fill_region, orientations, scan_positions, terrain_matches
from tilesmith.schemas import TerrainRegion, Tile


def _tile(tile_id, terrain, width, height, **extra):
    return Tile(id=tile_id, terrain_type=terrain, width=width, height=height, **extra)


def test_terrain_matches_exact_and_substrings():
    assert terrain_matches("forest", "forest") is True
    assert terrain_matches("Forest", "FOREST") is True
    # Tile terrain contains the requested name
    assert terrain_matches("Dark Forest", "forest") is True
    # Requested name contains the tile terrain
    assert terrain_matches("forest", "forest floor") is True
    assert terrain_matches("water", "forest") is False
    assert terrain_matches("", "forest") is False


def test_orientations_for_square_and_rectangular_tiles():
    square = _tile("sq", "grass", 6, 6)
    rect = _tile("rect", "grass", 12, 6)

    assert [(o.width, o.height, o.rotation) for o in orientations(square)] == [(6, 6, 0)]
    assert [(o.width, o.height, o.rotation) for o in orientations(rect)] == [
        (12, 6, 0),
        (6, 12, 90),
    ]


def test_scan_positions_stop_when_piece_no_longer_fits():
    assert list(scan_positions(0, 10, 6)) == [0, 1, 2, 3, 4]
    assert list(scan_positions(0, 6, 3, 1.5)) == [0, 1.5, 3]
    assert list(scan_positions(0, 5, 6)) == []


def test_full_map_region_tiles_exactly_with_six_inch_pieces():
    tiles = [_tile("forest-6x6", "forest", 6, 6)]
    grid = OccupancyGrid(60, 60)
    region = TerrainRegion(terrain="forest", x=0, y=0, width=60, height=60)

    placements = fill_region(region, tiles, 60, 60, grid)

    assert len(placements) == 100
    assert {(p.x, p.y) for p in placements} == {
        (col * 6, row * 6) for col in range(10) for row in range(10)
    }
    assert all(p.rotation == 0 and p.piece_id == "forest-6x6" for p in placements)
    assert grid.count_empty() == 0


def test_largest_pieces_are_placed_first():
    tiles = [
        _tile("small", "grass", 6, 6),
        _tile("large", "grass", 12, 12),
    ]
    grid = OccupancyGrid(18, 12)
    region = TerrainRegion(terrain="grass", x=0, y=0, width=18, height=12)

    placements = fill_region(region, tiles, 18, 12, grid)

    assert [(p.piece_id, p.x, p.y) for p in placements] == [
        ("large", 0, 0),
        ("small", 12, 0),
        ("small", 12, 6),
    ]


def test_rectangular_piece_rotates_to_fit():
    tiles = [_tile("plank", "wood", 12, 6)]
    grid = OccupancyGrid(6, 12)
    region = TerrainRegion(terrain="wood", x=0, y=0, width=6, height=12)

    placements = fill_region(region, tiles, 6, 12, grid)

    assert len(placements) == 1
    assert (placements[0].x, placements[0].y, placements[0].rotation) == (0, 0, 90)


def test_diagonal_and_mismatched_tiles_are_skipped():
    tiles = [
        _tile("wedge", "grass", 6, 6, is_diagonal=True),
        _tile("water", "water", 6, 6),
    ]
    grid = OccupancyGrid(12, 12)
    region = TerrainRegion(terrain="grass", x=0, y=0, width=12, height=12)

    assert fill_region(region, tiles, 12, 12, grid) == []
    assert grid.count_empty() == 144


def test_prefer_flat_leaves_elevated_pieces_out():
    tiles = [
        _tile("hilltop", "grass", 12, 12, elevation=CornerElevations(nw=2, ne=2, sw=2, se=2)),
        _tile("meadow", "grass", 6, 6),
    ]
    region = TerrainRegion(terrain="grass", x=0, y=0, width=12, height=12)

    flat_only = fill_region(region, tiles, 12, 12, OccupancyGrid(12, 12), prefer_flat=True)
    assert {p.piece_id for p in flat_only} == {"meadow"}
    assert len(flat_only) == 4

    mixed = fill_region(region, tiles, 12, 12, OccupancyGrid(12, 12))
    assert [p.piece_id for p in mixed] == ["hilltop"]


def test_prefer_flat_falls_back_when_no_flat_piece_matches():
    tiles = [_tile("hilltop", "grass", 6, 6, elevation=CornerElevations(nw=1, ne=1, sw=1, se=1))]
    region = TerrainRegion(terrain="grass", x=0, y=0, width=6, height=6)

    placements = fill_region(region, tiles, 6, 6, OccupancyGrid(6, 6), prefer_flat=True)
    assert [p.piece_id for p in placements] == ["hilltop"]


def test_region_respects_existing_occupancy_and_map_edge():
    tiles = [_tile("grass", "grass", 6, 6)]
    grid = OccupancyGrid(12, 6)
    grid.mark_occupied(0, 0, 6, 6)

    # Region runs past the map edge; it is clipped to the map
    region = TerrainRegion(terrain="grass", x=0, y=0, width=30, height=6)
    placements = fill_region(region, tiles, 12, 6, grid)

    assert [(p.x, p.y) for p in placements] == [(6, 0)]
