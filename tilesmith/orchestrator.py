"""
Layout orchestrator.

Fully decoupled from the LLM call, the HTTP route and storage. The map
size and tile inventory are injected; layouts arrive as parsed JSON
(dicts), pydantic models or raw LLM text.

General layout pipeline:
1. Validate and clamp regions, paths and elevation zones
2. Fill elevation zones (they win any contested ground)
3. Fill rasterized path segments (flat pieces preferred)
4. Fill regions largest-first (flat pieces preferred)

Dungeon layout pipeline:
1. Validate rooms and corridors
2. Floor every room
3. Floor every corridor
4. Place diagonal transitions (only if the inventory has diagonal pieces)

Each build call creates its own OccupancyGrid, so an orchestrator can be
reused for several layouts of the same map.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from pydantic import BaseModel

from .config import Config
from .environment import OccupancyGrid
from .filling import (
    corridor_path,
    diagonal_transitions,
    fill_dungeon_corridor,
    fill_dungeon_room,
    fill_elevation_zone,
    fill_gaps,
    fill_region,
    path_to_segments,
    place_transitions,
)
from .logging_utils import log_deterministic, log_info, log_llm, log_success
from .parsing import parse_json_object
from .schemas import (
    DungeonResponse,
    DungeonRoom,
    GapFillResponse,
    LayoutResponse,
    PlacedPiece,
    Placement,
    Tile,
)
from .validation import sanitize_dungeon, sanitize_layout

Payload = Union[BaseModel, Mapping[str, Any]]


class LayoutOrchestrator:
    """Turns LLM-suggested layouts into concrete tile placements for one map.

    Example:
        orchestrator = LayoutOrchestrator(60, 60, pieces)
        response = orchestrator.build_layout(
            {"regions": [{"terrain": "forest", "x": 0, "y": 0, "width": 60, "height": 60}]}
        )
        payload = response.model_dump(by_alias=True)
    """

    def __init__(
        self,
        map_width: float,
        map_height: float,
        pieces: Iterable[Union[Tile, Mapping[str, Any]]],
        *,
        passes: Optional[int] = None,
        verbose: bool = True,
    ):
        """
        Initialize orchestrator.

        Args:
            map_width: Map width in inches
            map_height: Map height in inches
            pieces: Available tiles (Tile models or editor-shaped dicts)
            passes: Greedy sweeps per area (defaults to Config.FILL_PASSES)
            verbose: Print phase summaries
        """
        if map_width <= 0 or map_height <= 0:
            raise ValueError("map_width and map_height must be positive")

        self.map_width = map_width
        self.map_height = map_height
        self.pieces: List[Tile] = [Tile.model_validate(piece) for piece in pieces]
        self.passes = Config.FILL_PASSES if passes is None else passes
        self.verbose = verbose

        if self.verbose:
            diagonal = sum(1 for piece in self.pieces if piece.is_diagonal)
            log_info(
                f"{map_width}x{map_height}\" map, {len(self.pieces)} pieces "
                f"({diagonal} diagonal), {self.passes} passes"
            )

    def _log(self, message: str) -> None:
        if self.verbose:
            log_deterministic(message)

    def _truncate(self, description: str) -> str:
        return description[: Config.DESCRIPTION_MAX_CHARS]

    # ------------------------------------------------------------------
    # General layouts
    # ------------------------------------------------------------------

    def build_layout(self, layout: Payload) -> LayoutResponse:
        """Validate a general layout and fill it with tiles."""
        result = sanitize_layout(layout, self.map_width, self.map_height)
        grid = OccupancyGrid(self.map_width, self.map_height)
        placements: List[Placement] = []

        for zone in result.elevation_zones:
            placements.extend(
                fill_elevation_zone(
                    zone, self.pieces, self.map_width, self.map_height, grid, passes=self.passes
                )
            )
        self._log(f"[Zones] {len(result.elevation_zones)} elevation zones → {len(placements)} placements")

        segments = [
            segment
            for path in result.paths
            for segment in path_to_segments(path, self.map_width, self.map_height)
        ]
        before = len(placements)
        for segment in segments:
            placements.extend(
                fill_region(
                    segment,
                    self.pieces,
                    self.map_width,
                    self.map_height,
                    grid,
                    prefer_flat=True,
                    passes=self.passes,
                )
            )
        self._log(f"[Paths] {len(segments)} path segments → {len(placements) - before} placements")

        before = len(placements)
        for region in sorted(result.regions, key=lambda r: r.area, reverse=True):
            placements.extend(
                fill_region(
                    region,
                    self.pieces,
                    self.map_width,
                    self.map_height,
                    grid,
                    prefer_flat=True,
                    passes=self.passes,
                )
            )
        self._log(f"[Regions] {len(result.regions)} regions → {len(placements) - before} placements")

        if self.verbose:
            log_success(f"Layout filled with {len(placements)} placements")

        return LayoutResponse(
            placements=placements,
            description=self._truncate(result.description),
            regions=result.regions,
            paths=result.paths,
            elevation_zones=result.elevation_zones,
        )

    def layout_from_text(self, text: str) -> LayoutResponse:
        """Parse raw LLM text and build the general layout.

        Raises:
            LayoutParseError: If the text is not a JSON object.
        """
        if self.verbose:
            log_llm("Parsing suggested terrain layout")
        return self.build_layout(parse_json_object(text))

    # ------------------------------------------------------------------
    # Dungeon layouts
    # ------------------------------------------------------------------

    def build_dungeon(self, layout: Payload) -> DungeonResponse:
        """Validate a dungeon layout and floor its rooms and corridors."""
        dungeon = sanitize_dungeon(layout, self.map_width, self.map_height)
        grid = OccupancyGrid(self.map_width, self.map_height)
        rooms: Dict[str, DungeonRoom] = {room.id: room for room in dungeon.rooms}
        placements: List[Placement] = []

        for room in dungeon.rooms:
            placements.extend(
                fill_dungeon_room(room, self.pieces, dungeon.terrain, grid, passes=self.passes)
            )
        self._log(f"[Rooms] {len(dungeon.rooms)} rooms → {len(placements)} placements")

        corridor_segments = []
        before = len(placements)
        for corridor in dungeon.corridors:
            segments = corridor_path(
                rooms[corridor.from_room], rooms[corridor.to_room], corridor.width, corridor.style
            )
            corridor_segments.append((corridor, segments))
            for segment in segments:
                placements.extend(
                    fill_dungeon_corridor(
                        segment, corridor.width, self.pieces, dungeon.terrain, grid, passes=self.passes
                    )
                )
        self._log(f"[Corridors] {len(dungeon.corridors)} corridors → {len(placements) - before} placements")

        if any(piece.is_diagonal for piece in self.pieces):
            before = len(placements)
            for corridor, segments in corridor_segments:
                transitions = diagonal_transitions(corridor, rooms, segments)
                placements.extend(
                    place_transitions(transitions, self.pieces, dungeon.terrain, grid)
                )
            self._log(f"[Transitions] {len(placements) - before} diagonal pieces placed")

        if self.verbose:
            log_success(f"Dungeon filled with {len(placements)} placements")

        return DungeonResponse(
            placements=placements,
            description=self._truncate(dungeon.description),
            rooms=dungeon.rooms,
            corridors=dungeon.corridors,
        )

    def dungeon_from_text(self, text: str) -> DungeonResponse:
        """Parse raw LLM text and build the dungeon layout.

        Raises:
            LayoutParseError: If the text is not a JSON object. Callers are
                expected to fall back to the general layout.
        """
        if self.verbose:
            log_llm("Parsing suggested dungeon layout")
        return self.build_dungeon(parse_json_object(text))

    # ------------------------------------------------------------------
    # Gap filling
    # ------------------------------------------------------------------

    def fill_gaps(
        self,
        placed: Sequence[Union[PlacedPiece, Mapping[str, Any]]],
        terrain_type: str,
    ) -> GapFillResponse:
        """Cover the empty map area around ``placed`` with flat ``terrain_type`` pieces."""
        pieces = [PlacedPiece.model_validate(piece) for piece in placed]
        response = fill_gaps(
            pieces,
            self.pieces,
            terrain_type,
            self.map_width,
            self.map_height,
            passes=self.passes,
        )
        self._log(f"[Gaps] {len(response.placements)} placements cover {response.filled_area} sq in")
        return response
