"""Level definitions, the JSON level loader and the deterministic shuffle."""

from __future__ import annotations

import json
import logging
import os
import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from .board import ALWAYS_LOCKED, Board, Cell, TileKind
from .colors import LightColor
from .grid import Direction, GridPosition

logger = logging.getLogger(__name__)

LEVEL_ENV_VAR = "PRISM_GRID_LEVEL_ROOT"


def default_level_root() -> Path:
    """The bundled level directory unless ``PRISM_GRID_LEVEL_ROOT`` points elsewhere."""
    value = os.environ.get(LEVEL_ENV_VAR)
    if value:
        return Path(value).expanduser()
    return Path(__file__).resolve().parent / "levels"


@dataclass
class TilePlacement:
    """One authored tile. ``color`` means source, required or activation color by kind."""

    col: int
    row: int
    kind: TileKind
    rotation: int = 0
    color: LightColor = LightColor.NONE
    direction: Optional[Direction] = None
    locked: bool = False

    @property
    def position(self) -> GridPosition:
        return GridPosition(self.col, self.row)

    def to_cell(self) -> Cell:
        if self.kind is TileKind.SOURCE:
            if self.direction is None:
                raise ValueError(f"Source at {self.position} needs a direction")
            return Cell.source(self.color, self.direction, self.rotation)
        if self.kind is TileKind.TARGET:
            cell = Cell.target(self.color)
        elif self.kind is TileKind.DARK_ABSORBER:
            cell = Cell.dark(self.color)
        else:
            return Cell.tile(self.kind, self.rotation, self.locked)
        cell.rotation = self.rotation
        return cell

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "TilePlacement":
        kind = TileKind.from_name(str(data["type"]))
        direction = data.get("direction")
        return cls(
            col=int(data["col"]),
            row=int(data["row"]),
            kind=kind,
            rotation=int(data.get("rotation", 0) or 0),
            color=LightColor.from_name(data.get("color", 0)),  # type: ignore[arg-type]
            direction=Direction.from_name(str(direction)) if direction else None,
            locked=bool(data.get("locked", False)) or kind in ALWAYS_LOCKED,
        )


@dataclass
class LevelDefinition:
    """In-memory representation of a level file."""

    id: str
    name: str
    width: int
    height: int
    par_moves: int = 0
    par_time_seconds: float = 0.0
    shuffle: bool = False
    tiles: List[TilePlacement] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Level {self.id} has invalid dimensions {self.width}x{self.height}"
            )
        occupied = set()
        for placement in self.tiles:
            position = placement.position
            if not (0 <= position.col < self.width and 0 <= position.row < self.height):
                raise ValueError(
                    f"Level {self.id}: tile at {position} is outside the "
                    f"{self.width}x{self.height} board"
                )
            if position in occupied:
                raise ValueError(f"Level {self.id}: two tiles placed at {position}")
            occupied.add(position)

    @property
    def metadata(self) -> Dict[str, object]:
        metadata: Dict[str, object] = {
            "id": self.id,
            "name": self.name,
            "dimensions": f"{self.width}x{self.height}",
            "par_moves": self.par_moves,
            "par_time_seconds": self.par_time_seconds,
        }
        if self.shuffle:
            metadata["shuffle"] = True
        return metadata

    @property
    def seed(self) -> int:
        return level_seed(self.id)

    def to_board(self, shuffle: Optional[bool] = None) -> Board:
        """Build a fresh board. ``shuffle`` defaults to the level's own setting."""
        board = Board(self.width, self.height)
        for placement in self.tiles:
            board.set_cell(placement.position, placement.to_cell())
        if shuffle is None:
            shuffle = self.shuffle
        if shuffle:
            shuffle_board(board, self.seed)
        return board


def parse_level(data: Dict[str, object]) -> LevelDefinition:
    try:
        return LevelDefinition(
            id=str(data.get("id", data["name"])),
            name=str(data["name"]),
            width=int(data["width"]),  # type: ignore[arg-type]
            height=int(data["height"]),  # type: ignore[arg-type]
            par_moves=int(data.get("par_moves", 0) or 0),  # type: ignore[arg-type]
            par_time_seconds=float(data.get("par_time_seconds", 0) or 0),  # type: ignore[arg-type]
            shuffle=bool(data.get("shuffle", False)),
            tiles=[TilePlacement.from_dict(tile) for tile in data.get("tiles", [])],  # type: ignore[union-attr]
        )
    except KeyError as exc:
        raise ValueError(f"Level data is missing required key {exc}") from exc


def level_seed(level_id: str) -> int:
    """djb2 hash of the level id, wrapped to a signed 32-bit integer."""
    value = 5381
    for char in level_id:
        value = (value * 33 + ord(char)) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return value


def shuffle_board(board: Board, seed: int) -> None:
    """Fisher-Yates over every unlocked cell, empty ones included."""
    rng = random.Random(seed)
    slots = [position for position in board.positions() if not board.cell(position).locked]
    if len(slots) < 2:
        return
    for i in range(len(slots) - 1, 0, -1):
        j = rng.randint(0, i)
        if i != j:
            board.swap(slots[i], slots[j])


class LevelLoader:
    """Load level files stored as JSON."""

    def __init__(self, root: Union[str, Path, None] = None):
        self.root = Path(root) if root is not None else default_level_root()

    def load(self, name: str) -> LevelDefinition:
        path = self.root / f"{name}.json"
        if not path.exists():
            raise FileNotFoundError(path)
        data = json.loads(path.read_text())
        level = parse_level(data)
        logger.debug("Loaded level %s (%s) from %s", level.id, level.name, path)
        return level

    def available(self) -> List[str]:
        if not self.root.is_dir():
            raise FileNotFoundError(self.root)
        return sorted(path.stem for path in self.root.glob("*.json"))

    def load_all(self) -> List[LevelDefinition]:
        return [self.load(name) for name in self.available()]
