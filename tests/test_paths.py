"""Tests for rasterizing waypoint paths into grid-aligned segments."""

from tilesmith.filling import path_to_segments
from tilesmith.schemas import PathWaypoint, TerrainPath


def _path(points, width=None, terrain="water"):
    return TerrainPath(
        terrain=terrain,
        width=width,
        waypoints=[{"x": x, "y": y} for x, y in points],
    )


def _rect(segment):
    return segment.x, segment.y, segment.width, segment.height


def test_horizontal_river_across_the_map():
    segments = path_to_segments(_path([(0, 30), (60, 30)]), 60, 60)

    assert [_rect(s) for s in segments] == [(0, 24, 60, 6)]
    assert segments[0].terrain == "water"


def test_vertical_road_down_the_map():
    segments = path_to_segments(_path([(30, 0), (30, 60)], terrain="road"), 60, 60)

    assert [_rect(s) for s in segments] == [(24, 0, 6, 60)]


def test_diagonal_tie_is_horizontal():
    segments = path_to_segments(_path([(0, 0), (12, 12)]), 60, 60)

    assert [_rect(s) for s in segments] == [(0, 0, 18, 6)]


def test_one_segment_per_waypoint_pair():
    segments = path_to_segments(_path([(0, 30), (30, 30), (30, 60)]), 60, 60)

    assert len(segments) == 2
    assert _rect(segments[0]) == (0, 24, 36, 6)
    assert _rect(segments[1]) == (24, 30, 6, 30)


def test_path_width_never_below_minimum():
    for width, expected in [(2, 6), (None, 6), (12, 12)]:
        segment = path_to_segments(_path([(0, 30), (24, 30)], width=width), 60, 60)[0]
        assert segment.height == expected


def test_segment_clipped_to_right_edge():
    segment = path_to_segments(_path([(48, 30), (60, 30)]), 60, 60)[0]

    assert segment.x == 48
    assert segment.width == 12


def test_path_with_single_waypoint_yields_nothing():
    # Bypasses validation, which would reject a one-point path
    path = TerrainPath.model_construct(
        terrain="water", width=6, waypoints=[PathWaypoint(x=0, y=0)]
    )

    assert path_to_segments(path, 60, 60) == []
