"""Per-tile routing of a beam entering a cell.

Every routed kind has a canonical table written for rotation 0. Routing maps
the world entry face into the tile's local frame, looks the face up and maps
the local outputs back out by the tile's rotation.
"""

from __future__ import annotations

from typing import Dict, List

from .board import Cell, TileKind
from .grid import Direction

UP, RIGHT, DOWN, LEFT = Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT

# Local entry face -> local exit directions, at rotation 0.
ROUTING_TABLES: Dict[TileKind, Dict[Direction, List[Direction]]] = {
    TileKind.STRAIGHT: {UP: [DOWN], DOWN: [UP]},
    TileKind.BEND: {UP: [RIGHT], RIGHT: [UP]},
    TileKind.MIRROR: {UP: [RIGHT], RIGHT: [UP], DOWN: [LEFT], LEFT: [DOWN]},
    TileKind.SPLITTER: {DOWN: [LEFT, RIGHT], LEFT: [RIGHT], RIGHT: [LEFT]},
    TileKind.MERGER: {LEFT: [UP], RIGHT: [UP]},
}

PASS_THROUGH = frozenset({TileKind.EMPTY, TileKind.CROSS, TileKind.DARK_ABSORBER})
ABSORBING = frozenset({TileKind.SOURCE, TileKind.TARGET})


def route(cell: Cell, incoming: Direction) -> List[Direction]:
    """Return the world directions a beam travelling ``incoming`` leaves ``cell`` by.

    The result holds zero, one or two directions. A dark absorber passes light
    straight through here; its color gate is applied by the tracer.
    """
    if cell.kind in PASS_THROUGH:
        return [incoming]
    if cell.kind in ABSORBING:
        return []

    table = ROUTING_TABLES[cell.kind]
    local_entry = incoming.opposite().rotate_clockwise(-cell.rotation)
    return [
        local_exit.rotate_clockwise(cell.rotation)
        for local_exit in table.get(local_entry, ())
    ]
