"""
Field-level validation and clamping of LLM-suggested layouts.

LLM output is probabilistic, so validation is best-effort: every array
element is validated on its own, malformed elements are dropped (and
logged), and the survivors are clamped to the map. Nothing here raises for
bad layout data; the worst case is an empty layout.

Clamping rules:
- regions, zones and rooms: x/y clamped to [0, map size], width/height
  trimmed to what remains of the map; non-positive results are dropped
- rooms additionally need Config.MIN_ROOM_SIZE on both sides
- paths: width floored at Config.MIN_PATH_WIDTH, waypoints clamped
- corridors: dropped when either end names a room that did not survive
- terrain names are lower-cased
"""

from typing import Any, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from .config import Config
from .logging_utils import log_error
from .parsing import describe_validation_error
from .schemas import (
    DungeonCorridor,
    DungeonLayout,
    DungeonRoom,
    ElevationZone,
    LayoutResult,
    PathWaypoint,
    TerrainPath,
    TerrainRegion,
)


ModelT = TypeVar("ModelT", bound=BaseModel)
Payload = Union[BaseModel, Mapping[str, Any]]


def _as_mapping(payload: Payload) -> Mapping[str, Any]:
    if isinstance(payload, BaseModel):
        return payload.model_dump()
    if isinstance(payload, Mapping):
        return payload
    return {}


def _first_present(raw: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in raw:
            return raw[key]
    return None


def validate_items(items: Any, model: Type[ModelT], label: str) -> List[ModelT]:
    """Validate each element of ``items`` on its own, dropping the failures."""
    if items is None:
        return []
    if not isinstance(items, list):
        log_error(f"Ignoring {label} list: expected an array, got {type(items).__name__}")
        return []

    valid: List[ModelT] = []
    for index, item in enumerate(items):
        try:
            valid.append(model.model_validate(item))
        except ValidationError as exc:
            issues = "; ".join(describe_validation_error(exc))
            log_error(f"Dropping {label} #{index}: {issues}")
    return valid


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


def _clamp_rect(x: float, y: float, width: float, height: float, map_width: float, map_height: float):
    cx = _clamp(x, 0, map_width)
    cy = _clamp(y, 0, map_height)
    return cx, cy, min(width, map_width - cx), min(height, map_height - cy)


def clamp_region(region: TerrainRegion, map_width: float, map_height: float) -> Optional[TerrainRegion]:
    x, y, width, height = _clamp_rect(region.x, region.y, region.width, region.height, map_width, map_height)
    if width <= 0 or height <= 0:
        return None
    return TerrainRegion(terrain=region.terrain.lower(), x=x, y=y, width=width, height=height)


def clamp_zone(zone: ElevationZone, map_width: float, map_height: float) -> Optional[ElevationZone]:
    x, y, width, height = _clamp_rect(zone.x, zone.y, zone.width, zone.height, map_width, map_height)
    if width <= 0 or height <= 0:
        return None
    return zone.model_copy(
        update={"terrain": zone.terrain.lower(), "x": x, "y": y, "width": width, "height": height}
    )


def clamp_path(path: TerrainPath, map_width: float, map_height: float) -> TerrainPath:
    return TerrainPath(
        terrain=path.terrain.lower(),
        width=max(Config.MIN_PATH_WIDTH, path.width or Config.MIN_PATH_WIDTH),
        waypoints=[
            PathWaypoint(x=_clamp(wp.x, 0, map_width), y=_clamp(wp.y, 0, map_height))
            for wp in path.waypoints
        ],
    )


def clamp_room(room: DungeonRoom, map_width: float, map_height: float) -> Optional[DungeonRoom]:
    x, y, width, height = _clamp_rect(room.x, room.y, room.width, room.height, map_width, map_height)
    if width < Config.MIN_ROOM_SIZE or height < Config.MIN_ROOM_SIZE:
        return None
    return room.model_copy(update={"x": x, "y": y, "width": width, "height": height})


def sanitize_layout(payload: Payload, map_width: float, map_height: float) -> LayoutResult:
    """Validate and clamp a general terrain layout."""
    raw = _as_mapping(payload)

    regions = [
        clamped
        for region in validate_items(raw.get("regions"), TerrainRegion, "region")
        if (clamped := clamp_region(region, map_width, map_height)) is not None
    ]
    paths = [
        clamp_path(path, map_width, map_height)
        for path in validate_items(raw.get("paths"), TerrainPath, "path")
    ]
    zones = [
        clamped
        for zone in validate_items(
            _first_present(raw, "elevation_zones", "elevationZones"), ElevationZone, "elevation zone"
        )
        if (clamped := clamp_zone(zone, map_width, map_height)) is not None
    ]

    description = raw.get("description")
    return LayoutResult(
        regions=regions,
        paths=paths,
        elevation_zones=zones,
        description=description if isinstance(description, str) else "",
    )


def sanitize_dungeon(payload: Payload, map_width: float, map_height: float) -> DungeonLayout:
    """Validate and clamp a dungeon layout.

    Rooms smaller than the minimum room size after clamping are dropped,
    and so is every corridor that references a dropped or unknown room.
    Duplicate room ids keep the first room.
    """
    raw = _as_mapping(payload)

    rooms: List[DungeonRoom] = []
    seen_ids = set()
    for room in validate_items(raw.get("rooms"), DungeonRoom, "room"):
        clamped = clamp_room(room, map_width, map_height)
        if clamped is None:
            log_error(f"Dropping room '{room.id}': smaller than {Config.MIN_ROOM_SIZE}\" after clamping")
            continue
        if clamped.id in seen_ids:
            log_error(f"Dropping room '{room.id}': duplicate id")
            continue
        seen_ids.add(clamped.id)
        rooms.append(clamped)

    corridors: List[DungeonCorridor] = []
    for corridor in validate_items(raw.get("corridors"), DungeonCorridor, "corridor"):
        if corridor.from_room not in seen_ids or corridor.to_room not in seen_ids:
            log_error(
                f"Dropping corridor {corridor.from_room}->{corridor.to_room}: references a missing room"
            )
            continue
        if corridor.from_room == corridor.to_room:
            continue
        corridors.append(corridor)

    terrain = raw.get("terrain")
    description = raw.get("description")
    return DungeonLayout(
        rooms=rooms,
        corridors=corridors,
        terrain=terrain.lower() if isinstance(terrain, str) else "",
        description=description if isinstance(description, str) else "",
    )
