"""
Tilesmith - tile-filling engine for tabletop terrain maps.

Turns abstract layouts (regions, paths, elevation zones, dungeon rooms and
corridors) into concrete placements of physical terrain tiles.

No LLM client, no storage, no global grid.
Map size and tile inventory are injected by the caller.
"""

__version__ = "0.1.0"

# Main entry point
from .orchestrator import LayoutOrchestrator

# Parsing and validation
from .parsing import LayoutParseError, parse_json_object, strip_code_fences
from .validation import sanitize_dungeon, sanitize_layout

# Map-space primitives
from .environment import (
    OccupancyGrid,
    CornerElevations,
    ElevationPattern,
    classify,
    rotate_corners,
    rotate_pattern,
    rotation_needed,
)

# Fillers
from .filling import (
    CorridorSegment,
    DiagonalTransition,
    corridor_path,
    diagonal_transitions,
    fill_dungeon_corridor,
    fill_dungeon_room,
    fill_elevation_zone,
    fill_gaps,
    fill_region,
    path_to_segments,
    position_pattern,
    terrain_matches,
)

# Core schemas
from .schemas import (
    Tile,
    Placement,
    PlacedPiece,
    TerrainRegion,
    TerrainPath,
    PathWaypoint,
    ElevationZone,
    LayoutResult,
    DungeonRoom,
    DungeonCorridor,
    DungeonLayout,
    RoomType,
    CorridorStyle,
    LayoutResponse,
    DungeonResponse,
    GapFillResponse,
)

__all__ = [
    # Main class
    "LayoutOrchestrator",
    # Parsing and validation
    "LayoutParseError",
    "parse_json_object",
    "strip_code_fences",
    "sanitize_layout",
    "sanitize_dungeon",
    # Map-space primitives
    "OccupancyGrid",
    "CornerElevations",
    "ElevationPattern",
    "classify",
    "rotate_corners",
    "rotate_pattern",
    "rotation_needed",
    # Fillers
    "CorridorSegment",
    "DiagonalTransition",
    "corridor_path",
    "diagonal_transitions",
    "fill_dungeon_corridor",
    "fill_dungeon_room",
    "fill_elevation_zone",
    "fill_gaps",
    "fill_region",
    "path_to_segments",
    "position_pattern",
    "terrain_matches",
    # Schemas
    "Tile",
    "Placement",
    "PlacedPiece",
    "TerrainRegion",
    "TerrainPath",
    "PathWaypoint",
    "ElevationZone",
    "LayoutResult",
    "DungeonRoom",
    "DungeonCorridor",
    "DungeonLayout",
    "RoomType",
    "CorridorStyle",
    "LayoutResponse",
    "DungeonResponse",
    "GapFillResponse",
]
