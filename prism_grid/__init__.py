"""Prism Grid package."""

from .board import Board, Cell, TileKind
from .colors import LightColor, mix
from .game import PrismGame
from .grid import Direction, GridPosition
from .levels import LevelDefinition, LevelLoader, TilePlacement
from .router import route
from .solver import Hint, compute_par, next_hint, solve
from .tracer import BeamSegment, BeamTracer, CycleGuard, PropagationResult
from .ui import PrismGameUI

__all__ = [
    "BeamSegment",
    "BeamTracer",
    "Board",
    "Cell",
    "CycleGuard",
    "Direction",
    "GridPosition",
    "Hint",
    "LevelDefinition",
    "LevelLoader",
    "LightColor",
    "PrismGame",
    "PrismGameUI",
    "PropagationResult",
    "TileKind",
    "TilePlacement",
    "compute_par",
    "mix",
    "next_hint",
    "route",
    "solve",
]
