"""Corner-elevation classification and rotation equivalence.

A tile's four corner heights are reduced to a symbolic pattern. Edge and
corner patterns each form a 4-cycle under 90° clockwise rotation, so the
rotation that turns one pattern into another is a table lookup:

    edge-north → edge-east → edge-south → edge-west → edge-north
    corner-nw  → corner-ne → corner-se  → corner-sw → corner-nw

Flat, platform and other are rotation-invariant. They never need (or
admit) a corrective rotation.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional, Tuple

from .schemas import CornerElevations


class ElevationPattern(str, Enum):
    """Symbolic classification of a tile's corner heights."""

    FLAT = "flat"
    PLATFORM = "platform"
    EDGE_NORTH = "edge-north"
    EDGE_SOUTH = "edge-south"
    EDGE_EAST = "edge-east"
    EDGE_WEST = "edge-west"
    CORNER_NW = "corner-nw"
    CORNER_NE = "corner-ne"
    CORNER_SW = "corner-sw"
    CORNER_SE = "corner-se"
    OTHER = "other"


ROTATIONS: Tuple[int, ...] = (0, 90, 180, 270)

_EDGE_CYCLE = (
    ElevationPattern.EDGE_NORTH,
    ElevationPattern.EDGE_EAST,
    ElevationPattern.EDGE_SOUTH,
    ElevationPattern.EDGE_WEST,
)
_CORNER_CYCLE = (
    ElevationPattern.CORNER_NW,
    ElevationPattern.CORNER_NE,
    ElevationPattern.CORNER_SE,
    ElevationPattern.CORNER_SW,
)


def _cycle_rows(cycle: Tuple[ElevationPattern, ...]) -> Dict[ElevationPattern, Tuple[ElevationPattern, ...]]:
    return {
        pattern: tuple(cycle[(index + step) % 4] for step in range(4))
        for index, pattern in enumerate(cycle)
    }


# ROTATION_TABLE[pattern][rotation // 90] is the pattern after rotating
# the tile clockwise by that many degrees.
ROTATION_TABLE: Dict[ElevationPattern, Tuple[ElevationPattern, ...]] = {
    ElevationPattern.FLAT: (ElevationPattern.FLAT,) * 4,
    ElevationPattern.PLATFORM: (ElevationPattern.PLATFORM,) * 4,
    ElevationPattern.OTHER: (ElevationPattern.OTHER,) * 4,
    **_cycle_rows(_EDGE_CYCLE),
    **_cycle_rows(_CORNER_CYCLE),
}

_ORIENTATION_INVARIANT = {
    ElevationPattern.FLAT,
    ElevationPattern.PLATFORM,
    ElevationPattern.OTHER,
}

# Two raised corners form an edge only when they share a side.
_EDGE_PAIRS: Dict[frozenset, ElevationPattern] = {
    frozenset({"nw", "ne"}): ElevationPattern.EDGE_NORTH,
    frozenset({"sw", "se"}): ElevationPattern.EDGE_SOUTH,
    frozenset({"nw", "sw"}): ElevationPattern.EDGE_WEST,
    frozenset({"ne", "se"}): ElevationPattern.EDGE_EAST,
}

_SINGLE_CORNERS: Dict[str, ElevationPattern] = {
    "nw": ElevationPattern.CORNER_NW,
    "ne": ElevationPattern.CORNER_NE,
    "sw": ElevationPattern.CORNER_SW,
    "se": ElevationPattern.CORNER_SE,
}


def _normalize_rotation(rotation: int) -> int:
    if rotation % 90 != 0:
        raise ValueError(f"Rotation must be a multiple of 90 degrees, got {rotation}")
    return rotation % 360


def classify(elevation: Optional[CornerElevations]) -> ElevationPattern:
    """Classify corner heights into an elevation pattern.

    Missing elevation data is treated as a flat tile.
    """
    if elevation is None:
        return ElevationPattern.FLAT

    raised = {
        corner
        for corner in ("nw", "ne", "sw", "se")
        if getattr(elevation, corner) > 0
    }

    if not raised:
        return ElevationPattern.FLAT
    if len(raised) == 4:
        return ElevationPattern.PLATFORM
    if len(raised) == 2:
        return _EDGE_PAIRS.get(frozenset(raised), ElevationPattern.OTHER)
    if len(raised) == 1:
        return _SINGLE_CORNERS[raised.pop()]
    return ElevationPattern.OTHER


def is_flat(elevation: Optional[CornerElevations]) -> bool:
    return classify(elevation) == ElevationPattern.FLAT


def rotate_pattern(pattern: ElevationPattern, rotation: int) -> ElevationPattern:
    """Return the pattern a tile shows after a clockwise rotation."""
    return ROTATION_TABLE[pattern][_normalize_rotation(rotation) // 90]


def rotate_corners(elevation: CornerElevations, rotation: int) -> CornerElevations:
    """Rotate concrete corner heights clockwise by ``rotation`` degrees."""
    nw, ne, se, sw = elevation.nw, elevation.ne, elevation.se, elevation.sw
    for _ in range(_normalize_rotation(rotation) // 90):
        # Clockwise: each corner takes the height of its counter-clockwise neighbour.
        nw, ne, se, sw = sw, nw, ne, se
    return CornerElevations(nw=nw, ne=ne, sw=sw, se=se)


def rotation_needed(source: ElevationPattern, target: ElevationPattern) -> Optional[int]:
    """Rotation (degrees clockwise) that turns ``source`` into ``target``.

    Returns None when ``source`` is flat, platform or other, or when
    ``target`` is not in the same rotation cycle.
    """
    if source in _ORIENTATION_INVARIANT:
        return None
    for index, rotated in enumerate(ROTATION_TABLE[source]):
        if rotated == target:
            return ROTATIONS[index]
    return None


__all__ = [
    "ElevationPattern",
    "ROTATIONS",
    "ROTATION_TABLE",
    "classify",
    "is_flat",
    "rotate_pattern",
    "rotate_corners",
    "rotation_needed",
]
