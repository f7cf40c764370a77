"""Board state: tile kinds, cells and the row-major grid that holds them."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Iterator, List, Optional

from .colors import LightColor
from .grid import Direction, GridPosition


class TileKind(Enum):
    """Closed set of tile behaviours. Routing lives in :mod:`prism_grid.router`."""

    EMPTY = "empty"
    STRAIGHT = "straight"
    BEND = "bend"
    SPLITTER = "splitter"
    CROSS = "cross"
    MERGER = "merger"
    DARK_ABSORBER = "dark"
    SOURCE = "source"
    TARGET = "target"
    MIRROR = "mirror"

    @staticmethod
    def from_name(name: str) -> "TileKind":
        key = str(name).strip().lower().replace("-", "_")
        if key in ("dark_absorber", "darkabsorber", "absorber"):
            key = "dark"
        for kind in TileKind:
            if kind.value == key:
                return kind
        raise ValueError(f"Unknown tile type: {name}")


# Kinds that level data can never leave rotatable.
ALWAYS_LOCKED = frozenset({TileKind.SOURCE, TileKind.TARGET, TileKind.DARK_ABSORBER})

_ASCII = {
    TileKind.EMPTY: ".",
    TileKind.STRAIGHT: "S",
    TileKind.BEND: "B",
    TileKind.SPLITTER: "T",
    TileKind.CROSS: "+",
    TileKind.MERGER: "M",
    TileKind.DARK_ABSORBER: "D",
    TileKind.SOURCE: "*",
    TileKind.TARGET: "O",
    TileKind.MIRROR: "/",
}


@dataclass
class Cell:
    """A single tile instance.

    Only the fields that belong to ``kind`` are meaningful: ``source_color`` and
    ``source_direction`` for sources, ``required_color`` for targets and
    ``activation_color`` for dark absorbers.
    """

    kind: TileKind = TileKind.EMPTY
    rotation: int = 0
    source_color: LightColor = LightColor.NONE
    source_direction: Direction = Direction.UP
    required_color: LightColor = LightColor.NONE
    activation_color: LightColor = LightColor.NONE
    locked: bool = False

    def __post_init__(self) -> None:
        self.rotation = int(self.rotation) % 4

    def __setattr__(self, name: str, value: object) -> None:
        if name == "rotation":
            value = int(value) % 4  # type: ignore[arg-type]
        object.__setattr__(self, name, value)

    @classmethod
    def empty(cls) -> "Cell":
        return cls()

    @classmethod
    def source(cls, color: LightColor, direction: Direction, rotation: int = 0) -> "Cell":
        return cls(
            kind=TileKind.SOURCE,
            rotation=rotation,
            source_color=color,
            source_direction=direction,
            locked=True,
        )

    @classmethod
    def target(cls, required: LightColor) -> "Cell":
        return cls(kind=TileKind.TARGET, required_color=required, locked=True)

    @classmethod
    def dark(cls, activation: LightColor) -> "Cell":
        return cls(kind=TileKind.DARK_ABSORBER, activation_color=activation, locked=True)

    @classmethod
    def tile(cls, kind: TileKind, rotation: int = 0, locked: bool = False) -> "Cell":
        return cls(kind=kind, rotation=rotation, locked=locked)

    @property
    def emission_direction(self) -> Direction:
        return self.source_direction.rotate_clockwise(self.rotation)

    def copy(self) -> "Cell":
        return replace(self)

    def same_tile(self, other: "Cell") -> bool:
        """Content equality used to match tiles after a shuffle (ignores ``locked``)."""
        return (
            self.kind is other.kind
            and self.rotation == other.rotation
            and self.source_color == other.source_color
            and self.source_direction is other.source_direction
            and self.required_color == other.required_color
            and self.activation_color == other.activation_color
        )


class Board:
    """Fixed ``width`` x ``height`` grid of cells stored row-major.

    Out-of-bounds access is a programming error and raises :class:`IndexError`.
    Callers that walk the grid (tracer, router) test :meth:`in_bounds` first.
    """

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Board dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._cells: List[Cell] = [Cell() for _ in range(width * height)]

    def __repr__(self) -> str:
        return f"Board({self.width}x{self.height})"

    def in_bounds(self, position: GridPosition) -> bool:
        return 0 <= position.col < self.width and 0 <= position.row < self.height

    def _index(self, position: GridPosition) -> int:
        if not self.in_bounds(position):
            raise IndexError(
                f"{position} is out of bounds ({self.width}x{self.height})"
            )
        return position.row * self.width + position.col

    def cell(self, position: GridPosition) -> Cell:
        return self._cells[self._index(position)]

    def set_cell(self, position: GridPosition, cell: Cell) -> None:
        self._cells[self._index(position)] = cell

    __getitem__ = cell
    __setitem__ = set_cell

    def positions(self) -> Iterator[GridPosition]:
        """All positions in row-major order."""
        for row in range(self.height):
            for col in range(self.width):
                yield GridPosition(col, row)

    def _positions_of(self, kind: TileKind) -> List[GridPosition]:
        return [
            position
            for position in self.positions()
            if self._cells[position.row * self.width + position.col].kind is kind
        ]

    def sources(self) -> List[GridPosition]:
        return self._positions_of(TileKind.SOURCE)

    def targets(self) -> List[GridPosition]:
        return self._positions_of(TileKind.TARGET)

    def rotatable_positions(self) -> List[GridPosition]:
        return [
            position
            for position in self.positions()
            if not self.cell(position).locked
            and self.cell(position).kind is not TileKind.EMPTY
        ]

    def rotate(self, position: GridPosition) -> bool:
        """Rotate a tile 90 degrees clockwise. Locked and empty cells are a no-op."""
        cell = self.cell(position)
        if cell.locked or cell.kind is TileKind.EMPTY:
            return False
        cell.rotation += 1
        return True

    def swap(self, first: GridPosition, second: GridPosition) -> bool:
        """Exchange two cells. Refused when either is locked or both are the same cell."""
        a = self.cell(first)
        b = self.cell(second)
        if first == second or a.locked or b.locked:
            return False
        self.set_cell(first, b)
        self.set_cell(second, a)
        return True

    def rotations(self) -> Dict[GridPosition, int]:
        """Snapshot of every non-empty cell's rotation."""
        return {
            position: self.cell(position).rotation
            for position in self.positions()
            if self.cell(position).kind is not TileKind.EMPTY
        }

    def copy(self) -> "Board":
        clone = Board(self.width, self.height)
        clone._cells = [cell.copy() for cell in self._cells]
        return clone

    def to_ascii(self, highlight: Optional[GridPosition] = None) -> str:
        rows = []
        for row in range(self.height):
            tokens = []
            for col in range(self.width):
                position = GridPosition(col, row)
                cell = self.cell(position)
                token = _ASCII[cell.kind]
                if cell.kind is not TileKind.EMPTY:
                    token += str(cell.rotation)
                    token += "!" if position == highlight else ("#" if cell.locked else " ")
                else:
                    token += "  "
                tokens.append(token)
            rows.append(" ".join(tokens).rstrip())
        return "\n".join(rows)

    def summary(self) -> str:
        return (
            f"Board {self.width}x{self.height}\n"
            f"{self.to_ascii()}\n"
            f"Sources: {', '.join(str(p) for p in self.sources()) or '-'}\n"
            f"Targets: {', '.join(str(p) for p in self.targets()) or '-'}\n"
            f"Rotatable: {len(self.rotatable_positions())}\n"
        )
