"""Rasterize waypoint paths (rivers, roads) into rectangular segments."""

from __future__ import annotations

import math
from typing import List

from tilesmith.config import Config
from tilesmith.schemas import TerrainPath, TerrainRegion


def _snap_down(value: float, grid: int) -> float:
    return math.floor(value / grid) * grid


def _snap_up(value: float, grid: int) -> float:
    return math.ceil(value / grid) * grid


def path_to_segments(path: TerrainPath, map_width: float, map_height: float) -> List[TerrainRegion]:
    """Convert a path into one axis-aligned segment per waypoint pair.

    Each pair becomes horizontal when ``|dx| >= |dy|`` and vertical
    otherwise. The long axis covers both waypoints plus the path width and
    is aligned to the map grid; the short axis is exactly the path width,
    centred on the pair's midpoint. Consecutive segments overlap at the
    joint; the occupancy grid settles that when they are filled.
    """
    waypoints = path.waypoints
    if len(waypoints) < 2:
        return []

    grid = Config.PATH_GRID
    path_width = max(Config.MIN_PATH_WIDTH, path.width or Config.MIN_PATH_WIDTH)
    segments: List[TerrainRegion] = []

    for start, end in zip(waypoints, waypoints[1:]):
        dx = end.x - start.x
        dy = end.y - start.y

        if abs(dx) >= abs(dy):
            min_x, max_x = min(start.x, end.x), max(start.x, end.x)
            center_y = (start.y + end.y) / 2
            x = max(0, _snap_down(min_x, grid))
            y = max(0, _snap_down(center_y - path_width / 2, grid))
            width = min(map_width - x, _snap_up(max_x - min_x + path_width, grid))
            height = path_width
        else:
            min_y, max_y = min(start.y, end.y), max(start.y, end.y)
            center_x = (start.x + end.x) / 2
            x = max(0, _snap_down(center_x - path_width / 2, grid))
            y = max(0, _snap_down(min_y, grid))
            width = path_width
            height = min(map_height - y, _snap_up(max_y - min_y + path_width, grid))

        if width <= 0 or height <= 0:
            continue
        segments.append(TerrainRegion(terrain=path.terrain, x=x, y=y, width=width, height=height))

    return segments
