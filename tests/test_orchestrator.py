"""End-to-end tests for the layout orchestrator."""

import json

import pytest

from tilesmith import LayoutOrchestrator, LayoutParseError
from tilesmith.schemas import Tile


@pytest.fixture(autouse=True)
def _plain_logs(monkeypatch):
    monkeypatch.setenv("TILESMITH_NO_COLOR", "1")


def _outdoor_pieces():
    return [
        {"id": "plateau", "terrainType": "hill", "width": 6, "height": 6,
         "elevation": {"nw": 2, "ne": 2, "sw": 2, "se": 2}},
        {"id": "ramp", "terrainType": "hill", "width": 6, "height": 6,
         "elevation": {"nw": 2, "ne": 2, "sw": 0, "se": 0}},
        {"id": "corner", "terrainType": "hill", "width": 6, "height": 6,
         "elevation": {"nw": 2, "ne": 0, "sw": 0, "se": 0}},
        {"id": "water", "terrainType": "water", "width": 6, "height": 6},
        {"id": "grass", "terrainType": "grass", "width": 6, "height": 6},
    ]


def _dungeon_pieces():
    return [
        {"id": "slab", "terrainType": "stone", "width": 6, "height": 6},
        {"id": "strip", "terrainType": "stone", "width": 6, "height": 3},
        {"id": "wedge", "terrainType": "stone", "width": 3, "height": 3, "isDiagonal": True},
    ]


LAYERED_LAYOUT = {
    "elevationZones": [
        {"terrain": "hill", "x": 0, "y": 0, "width": 18, "height": 18, "height_inches": 2},
    ],
    "paths": [
        {"terrain": "water", "width": 6, "waypoints": [{"x": 0, "y": 30}, {"x": 36, "y": 30}]},
    ],
    "regions": [
        {"terrain": "grass", "x": 0, "y": 0, "width": 36, "height": 36},
    ],
    "description": "A hill above a river",
}

DUNGEON_LAYOUT = {
    "terrain": "stone",
    "rooms": [
        {"id": "entry", "type": "entrance", "x": 0, "y": 0, "width": 12, "height": 12},
        {"id": "vault", "type": "treasure", "x": 24, "y": 0, "width": 12, "height": 12},
    ],
    "corridors": [
        {"fromRoom": "entry", "toRoom": "vault", "width": 3, "useDiagonalTransitions": True},
    ],
    "description": "Two rooms and a passage",
}


def _assert_no_overlap_within_map(placements, pieces, map_width, map_height):
    sizes = {piece.id: (piece.width, piece.height) for piece in pieces}
    cells = set()
    for placement in placements:
        width, height = sizes[placement.piece_id]
        if placement.rotation in (90, 270):
            width, height = height, width
        assert placement.x >= 0 and placement.y >= 0
        assert placement.x + width <= map_width
        assert placement.y + height <= map_height
        # Every placement here sits on whole inches
        covered = {
            (col, row)
            for col in range(int(placement.x), int(placement.x + width))
            for row in range(int(placement.y), int(placement.y + height))
        }
        assert not covered & cells
        cells |= covered
    return cells


def test_layered_layout_fills_zone_then_path_then_region():
    orchestrator = LayoutOrchestrator(36, 36, _outdoor_pieces(), verbose=False)

    response = orchestrator.build_layout(LAYERED_LAYOUT)

    ids = [p.piece_id for p in response.placements]
    assert len(ids) == 36
    assert set(ids[:9]) == {"plateau", "ramp", "corner"}
    assert ids[9:15] == ["water"] * 6
    assert ids[15:] == ["grass"] * 21
    assert all(p.y == 24 for p in response.placements[9:15])

    cells = _assert_no_overlap_within_map(response.placements, orchestrator.pieces, 36, 36)
    assert len(cells) == 36 * 36

    assert response.description == "A hill above a river"
    assert len(response.elevation_zones) == 1
    assert len(response.paths) == 1
    assert len(response.regions) == 1


def test_layout_response_dumps_editor_field_names():
    orchestrator = LayoutOrchestrator(12, 12, _outdoor_pieces(), verbose=False)

    payload = orchestrator.build_layout(
        {"regions": [{"terrain": "grass", "x": 0, "y": 0, "width": 12, "height": 12}]}
    ).model_dump(by_alias=True)

    assert payload["placements"][0] == {"pieceId": "grass", "x": 0, "y": 0, "rotation": 0}


def test_layout_from_text_and_parse_failure():
    orchestrator = LayoutOrchestrator(36, 36, _outdoor_pieces(), verbose=False)

    fenced = "```json\n" + json.dumps(LAYERED_LAYOUT) + "\n```"
    assert len(orchestrator.layout_from_text(fenced).placements) == 36

    with pytest.raises(LayoutParseError):
        orchestrator.layout_from_text("I could not design a layout.")


def test_description_is_truncated():
    orchestrator = LayoutOrchestrator(12, 12, _outdoor_pieces(), verbose=False)

    response = orchestrator.build_layout({"description": "x" * 600})

    assert response.placements == []
    assert response.description == "x" * 500


def test_dungeon_rooms_corridor_and_transitions():
    orchestrator = LayoutOrchestrator(36, 12, _dungeon_pieces(), verbose=False)

    response = orchestrator.build_dungeon(DUNGEON_LAYOUT)

    ids = [p.piece_id for p in response.placements]
    assert ids == ["slab"] * 8 + ["strip"] * 2 + ["wedge"] * 4
    assert [(p.x, p.y) for p in response.placements[8:10]] == [(12, 4), (18, 4)]
    assert [(p.x, p.y, p.rotation) for p in response.placements[10:]] == [
        (12, 1, 270),
        (12, 7, 0),
        (21, 1, 180),
        (21, 7, 90),
    ]
    _assert_no_overlap_within_map(response.placements, orchestrator.pieces, 36, 12)

    assert [room.id for room in response.rooms] == ["entry", "vault"]
    assert response.description == "Two rooms and a passage"


def test_dungeon_without_diagonal_pieces_skips_transitions():
    pieces = [piece for piece in _dungeon_pieces() if not piece.get("isDiagonal")]
    orchestrator = LayoutOrchestrator(36, 12, pieces, verbose=False)

    response = orchestrator.build_dungeon(DUNGEON_LAYOUT)

    assert [p.piece_id for p in response.placements] == ["slab"] * 8 + ["strip"] * 2


def test_dungeon_from_text_rejects_garbage():
    orchestrator = LayoutOrchestrator(36, 12, _dungeon_pieces(), verbose=False)

    assert len(orchestrator.dungeon_from_text(json.dumps(DUNGEON_LAYOUT)).placements) == 14
    with pytest.raises(LayoutParseError):
        orchestrator.dungeon_from_text('["entry", "vault"]')


def test_fill_gaps_covers_remaining_ground():
    orchestrator = LayoutOrchestrator(12, 12, _outdoor_pieces(), verbose=False)
    placed = [{"pieceId": "water", "x": 0, "y": 0, "rotation": 0, "width": 6, "height": 6}]

    response = orchestrator.fill_gaps(placed, "grass")

    assert [(p.piece_id, p.x, p.y) for p in response.placements] == [
        ("grass", 6, 0),
        ("grass", 0, 6),
        ("grass", 6, 6),
    ]
    assert response.filled_area == 108
    assert response.model_dump(by_alias=True)["filledArea"] == 108


def test_verbose_output_uses_phase_tags(capsys):
    orchestrator = LayoutOrchestrator(36, 36, _outdoor_pieces(), passes=3)

    orchestrator.layout_from_text(json.dumps(LAYERED_LAYOUT))

    out = capsys.readouterr().out
    assert "[i] 36x36\" map, 5 pieces (0 diagonal), 3 passes" in out
    assert "[AI] Parsing suggested terrain layout" in out
    assert "[•] [Zones] 1 elevation zones → 9 placements" in out
    assert "[•] [Paths] 1 path segments → 6 placements" in out
    assert "[•] [Regions] 1 regions → 21 placements" in out
    assert "[✓] Layout filled with 36 placements" in out


def test_quiet_orchestrator_prints_nothing(capsys):
    orchestrator = LayoutOrchestrator(36, 12, _dungeon_pieces(), verbose=False)

    orchestrator.build_dungeon(DUNGEON_LAYOUT)

    assert capsys.readouterr().out == ""


def test_invalid_map_size_and_pieces():
    with pytest.raises(ValueError):
        LayoutOrchestrator(0, 36, [])

    orchestrator = LayoutOrchestrator(12, 12, [Tile(id="grass", terrain_type="grass", width=6, height=6)])
    assert orchestrator.pieces[0].id == "grass"

    with pytest.raises(ValueError):
        LayoutOrchestrator(12, 12, [{"id": "broken", "terrainType": "grass", "width": 0, "height": 6}])
