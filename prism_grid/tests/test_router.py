import pytest

from prism_grid.board import Cell, TileKind
from prism_grid.colors import LightColor
from prism_grid.grid import Direction
from prism_grid.router import ROUTING_TABLES, route

UP, RIGHT, DOWN, LEFT = Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT


@pytest.mark.parametrize(
    "kind, rotation, incoming, expected",
    [
        (TileKind.STRAIGHT, 0, DOWN, [DOWN]),
        (TileKind.STRAIGHT, 0, UP, [UP]),
        (TileKind.STRAIGHT, 0, RIGHT, []),
        (TileKind.STRAIGHT, 1, RIGHT, [RIGHT]),
        (TileKind.STRAIGHT, 1, DOWN, []),
        (TileKind.BEND, 0, DOWN, [RIGHT]),
        (TileKind.BEND, 0, LEFT, [UP]),
        (TileKind.BEND, 0, UP, []),
        (TileKind.BEND, 2, RIGHT, [DOWN]),
        (TileKind.MIRROR, 0, LEFT, [UP]),
        (TileKind.MIRROR, 0, UP, [LEFT]),
        (TileKind.MIRROR, 0, DOWN, [RIGHT]),
        (TileKind.MIRROR, 0, RIGHT, [DOWN]),
        (TileKind.SPLITTER, 0, UP, [LEFT, RIGHT]),
        (TileKind.SPLITTER, 0, RIGHT, [RIGHT]),
        (TileKind.SPLITTER, 0, DOWN, []),
        (TileKind.SPLITTER, 1, RIGHT, [UP, DOWN]),
        (TileKind.SPLITTER, 2, DOWN, [RIGHT, LEFT]),
        (TileKind.MERGER, 0, RIGHT, [UP]),
        (TileKind.MERGER, 0, LEFT, [UP]),
        (TileKind.MERGER, 0, UP, []),
        (TileKind.MERGER, 2, RIGHT, [DOWN]),
    ],
)
def test_routing_tables(kind, rotation, incoming, expected):
    assert route(Cell.tile(kind, rotation), incoming) == expected


@pytest.mark.parametrize("kind", [TileKind.EMPTY, TileKind.CROSS])
@pytest.mark.parametrize("rotation", range(4))
@pytest.mark.parametrize("incoming", list(Direction))
def test_pass_through_tiles_keep_direction(kind, rotation, incoming):
    assert route(Cell.tile(kind, rotation), incoming) == [incoming]


def test_dark_absorber_routes_straight_through():
    assert route(Cell.dark(LightColor.RED), LEFT) == [LEFT]


@pytest.mark.parametrize("incoming", list(Direction))
def test_sources_and_targets_absorb(incoming):
    assert route(Cell.source(LightColor.RED, UP), incoming) == []
    assert route(Cell.target(LightColor.RED), incoming) == []


@pytest.mark.parametrize("kind", sorted(ROUTING_TABLES, key=lambda kind: kind.value))
@pytest.mark.parametrize("rotation", range(4))
def test_rotating_a_tile_rotates_its_routes(kind, rotation):
    base = Cell.tile(kind, 0)
    rotated = Cell.tile(kind, rotation)
    for incoming in Direction:
        expected = [
            out.rotate_clockwise(rotation)
            for out in route(base, incoming.rotate_clockwise(-rotation))
        ]
        assert route(rotated, incoming) == expected
