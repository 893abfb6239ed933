"""
Pydantic schemas for the Tilesmith fill engine.

All data structures that cross the engine boundary are defined here.

Design Philosophy:
- Tiles are immutable catalog entries; the engine only references them by id
- Layout inputs mirror the JSON an LLM returns (camelCase names accepted as aliases)
- Responses dump to the editor's JSON shape with ``model_dump(by_alias=True)``
- Field-level validation happens per element so one bad entry never sinks a layout
"""

from enum import Enum
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator

from tilesmith.environment import CornerElevations, ElevationPattern, classify


def _stringify_id(value: Any) -> Any:
    # LLMs frequently emit numeric ids ("id": 1); rooms are keyed by string.
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


ObjectId = Annotated[str, BeforeValidator(_stringify_id)]


# ============================================================================
# Tile Catalog Schemas
# ============================================================================


class Tile(BaseModel):
    """A physical terrain piece available in the inventory.

    Diagonal tiles fill the right-triangle half of their bounding rectangle;
    the occupancy grid still reserves the whole rectangle. Tiles without
    elevation data (or with all corners at zero) are flat.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: ObjectId = Field(..., description="Unique catalog identifier")
    name: Optional[str] = Field(None, description="Human-friendly piece name")
    terrain_type: str = Field(..., alias="terrainType", description="Terrain label, matched loosely")
    width: float = Field(..., gt=0, description="Width in inches at rotation 0")
    height: float = Field(..., gt=0, description="Height in inches at rotation 0")
    is_diagonal: bool = Field(False, alias="isDiagonal", description="Right-triangle piece")
    elevation: Optional[CornerElevations] = Field(None, description="Corner heights in inches")

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def pattern(self) -> ElevationPattern:
        """Elevation pattern of the tile at rotation 0."""
        return classify(self.elevation)

    @property
    def is_flat(self) -> bool:
        return self.pattern == ElevationPattern.FLAT


class Placement(BaseModel):
    """A concrete (tile, position, rotation) assignment on the map."""

    model_config = ConfigDict(populate_by_name=True)

    piece_id: str = Field(..., alias="pieceId", description="Tile id from the catalog")
    x: float = Field(..., description="Left edge in inches")
    y: float = Field(..., description="Top edge in inches")
    rotation: int = Field(0, description="Degrees clockwise: 0, 90, 180 or 270")

    @field_validator("rotation")
    @classmethod
    def _check_rotation(cls, value: int) -> int:
        if value not in (0, 90, 180, 270):
            raise ValueError("rotation must be one of 0, 90, 180, 270")
        return value


class PlacedPiece(Placement):
    """A placement already on the map, with its rotated footprint."""

    width: float = Field(..., gt=0, description="Footprint width in inches")
    height: float = Field(..., gt=0, description="Footprint height in inches")


# ============================================================================
# General Layout Schemas
# ============================================================================


class TerrainRegion(BaseModel):
    """Axis-aligned rectangle tagged with a terrain type."""

    terrain: str = Field(..., min_length=1)
    x: float
    y: float
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)

    @property
    def area(self) -> float:
        return self.width * self.height


class PathWaypoint(BaseModel):
    x: float
    y: float


class TerrainPath(BaseModel):
    """A river, road or stream following waypoints.

    Paths are rasterized into TerrainRegion segments before filling; the
    path itself is not kept once segments exist.
    """

    terrain: str = Field(..., min_length=1)
    width: Optional[float] = Field(None, description="Path width in inches (minimum 6)")
    waypoints: List[PathWaypoint] = Field(..., min_length=2)


class ElevationZone(BaseModel):
    """Rectangular area that must be built from elevated tiles.

    The zone border is filled with ramps (edge and corner pieces rising
    inward) and the interior with platform pieces.
    """

    terrain: str = Field(..., min_length=1)
    x: float
    y: float
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)
    height_inches: float = Field(1.0, ge=0, description="Target plateau height")


class LayoutResult(BaseModel):
    """General terrain layout as suggested by the LLM."""

    regions: List[TerrainRegion] = Field(default_factory=list)
    paths: List[TerrainPath] = Field(default_factory=list)
    elevation_zones: List[ElevationZone] = Field(default_factory=list)
    description: str = ""


# ============================================================================
# Dungeon Layout Schemas
# ============================================================================


class RoomType(str, Enum):
    ENTRANCE = "entrance"
    CHAMBER = "chamber"
    BOSS = "boss"
    TREASURE = "treasure"
    TRAP = "trap"
    SHRINE = "shrine"
    CORRIDOR_HUB = "corridor-hub"


class CorridorStyle(str, Enum):
    STRAIGHT = "straight"
    L_SHAPED = "L-shaped"


class DungeonRoom(BaseModel):
    """A rectangular dungeon room."""

    id: ObjectId
    type: RoomType = RoomType.CHAMBER
    x: float
    y: float
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)
    connections: List[ObjectId] = Field(default_factory=list)
    description: Optional[str] = None

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value: Any) -> Any:
        # Unknown flavours ("library", "crypt") still describe a room.
        if isinstance(value, str):
            normalized = value.strip().lower().replace("_", "-").replace(" ", "-")
            if normalized in {member.value for member in RoomType}:
                return normalized
        return RoomType.CHAMBER

    @property
    def center(self) -> tuple[float, float]:
        return self.x + self.width / 2, self.y + self.height / 2


class DungeonCorridor(BaseModel):
    """A corridor joining two rooms."""

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[ObjectId] = None
    from_room: ObjectId = Field(..., alias="fromRoom")
    to_room: ObjectId = Field(..., alias="toRoom")
    width: float = Field(3, description="Corridor width in inches (3 or 6)")
    style: CorridorStyle = CorridorStyle.STRAIGHT
    use_diagonal_transitions: bool = Field(False, alias="useDiagonalTransitions")

    @field_validator("width", mode="before")
    @classmethod
    def _default_width(cls, value: Any) -> Any:
        # "width": null means the LLM left the choice to us.
        return 3 if value is None else value

    @field_validator("width", mode="after")
    @classmethod
    def _snap_width(cls, value: float) -> float:
        return 3 if value <= 4.5 else 6

    @field_validator("style", mode="before")
    @classmethod
    def _coerce_style(cls, value: Any) -> Any:
        if isinstance(value, str) and value.strip().lower().replace("_", "-") in {"l-shaped", "l"}:
            return CorridorStyle.L_SHAPED
        return CorridorStyle.STRAIGHT


class DungeonLayout(BaseModel):
    """Dungeon layout as suggested by the LLM."""

    rooms: List[DungeonRoom] = Field(default_factory=list)
    corridors: List[DungeonCorridor] = Field(default_factory=list)
    terrain: str = ""
    description: str = ""


# ============================================================================
# Response Schemas
# ============================================================================


class LayoutResponse(BaseModel):
    """Result of filling a general layout."""

    placements: List[Placement] = Field(default_factory=list)
    description: str = ""
    regions: List[TerrainRegion] = Field(default_factory=list)
    paths: List[TerrainPath] = Field(default_factory=list)
    elevation_zones: List[ElevationZone] = Field(default_factory=list)


class DungeonResponse(BaseModel):
    """Result of filling a dungeon layout."""

    placements: List[Placement] = Field(default_factory=list)
    description: str = ""
    rooms: List[DungeonRoom] = Field(default_factory=list)
    corridors: List[DungeonCorridor] = Field(default_factory=list)


class GapFillResponse(BaseModel):
    """Result of filling the empty cells around existing pieces."""

    model_config = ConfigDict(populate_by_name=True)

    placements: List[Placement] = Field(default_factory=list)
    filled_area: int = Field(0, alias="filledArea", description="Cells newly covered")
