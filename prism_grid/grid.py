"""Grid coordinates and cardinal directions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator


@dataclass(frozen=True)
class GridPosition:
    """Integer cell coordinate. Column grows rightward, row grows downward."""

    col: int
    row: int

    def __add__(self, other: "GridPosition") -> "GridPosition":
        return GridPosition(self.col + other.col, self.row + other.row)

    def __iter__(self) -> Iterator[int]:
        yield self.col
        yield self.row

    def __str__(self) -> str:
        return f"({self.col}, {self.row})"

    def step(self, direction: "Direction") -> "GridPosition":
        return self + direction.to_offset()


class Direction(Enum):
    """Cardinal directions for a beam, ordered clockwise."""

    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3

    @staticmethod
    def from_name(name: str) -> "Direction":
        name = name.upper()
        aliases = {"NORTH": "UP", "EAST": "RIGHT", "SOUTH": "DOWN", "WEST": "LEFT"}
        name = aliases.get(name, name)
        try:
            return Direction[name]
        except KeyError as exc:
            raise ValueError(f"Unknown direction: {name}") from exc

    def rotate_clockwise(self, steps: int) -> "Direction":
        """Rotate by ``steps`` quarter turns; negative steps turn counter-clockwise."""
        return Direction((self.value + steps) % 4)

    def opposite(self) -> "Direction":
        return self.rotate_clockwise(2)

    def turn_left(self) -> "Direction":
        return self.rotate_clockwise(-1)

    def turn_right(self) -> "Direction":
        return self.rotate_clockwise(1)

    def to_offset(self) -> GridPosition:
        return _OFFSETS[self]


_OFFSETS = {
    Direction.UP: GridPosition(0, -1),
    Direction.RIGHT: GridPosition(1, 0),
    Direction.DOWN: GridPosition(0, 1),
    Direction.LEFT: GridPosition(-1, 0),
}
