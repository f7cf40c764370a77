"""Exhaustive rotation search, hints and par calculation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Optional

from .board import Board
from .grid import GridPosition
from .tracer import BeamTracer, PropagationResult

if TYPE_CHECKING:
    from .levels import LevelDefinition

logger = logging.getLogger(__name__)

# Above this many rotatable tiles the 4^N search becomes noticeable.
LARGE_SEARCH_THRESHOLD = 10

Solution = Dict[GridPosition, int]


@dataclass(frozen=True)
class Hint:
    """Rotate the tile at ``position`` clockwise ``rotations`` times (1..3)."""

    position: GridPosition
    rotations: int


def rotatable_positions(board: Board) -> List[GridPosition]:
    return board.rotatable_positions()


def solve(board: Board, tracer: Optional[BeamTracer] = None) -> Optional[Solution]:
    """Find rotations for every rotatable tile that satisfy all targets.

    Positions are searched in row-major order and each tries its current
    rotation first, then the following clockwise ones. The board is mutated
    during the search but every rotation is restored before returning.

    Returns a row-major ``{position: rotation}`` mapping, or ``None`` when no
    tile is rotatable or no assignment satisfies the board.
    """
    positions = rotatable_positions(board)
    if not positions:
        logger.debug("Nothing to solve on %r: no rotatable tiles", board)
        return None
    if len(positions) > LARGE_SEARCH_THRESHOLD:
        logger.warning(
            "Solving %r with %d rotatable tiles; up to %d traces",
            board,
            len(positions),
            4 ** len(positions),
        )

    tracer = tracer or BeamTracer()
    result = PropagationResult()
    original = [board.cell(position).rotation for position in positions]

    def search(index: int) -> bool:
        if index == len(positions):
            return tracer.trace(board, result).all_targets_satisfied
        cell = board.cell(positions[index])
        for offset in range(4):
            cell.rotation = original[index] + offset
            if search(index + 1):
                return True
        return False

    try:
        if not search(0):
            logger.info("No solution for %r", board)
            return None
        solution = {position: board.cell(position).rotation for position in positions}
    finally:
        for position, rotation in zip(positions, original):
            board.cell(position).rotation = rotation

    logger.debug("Solved %r: %s", board, solution)
    return solution


def next_hint(board: Board, solution: Optional[Solution]) -> Optional[Hint]:
    """Return the first tile that still differs from ``solution``."""
    if solution is None:
        return None
    for position, target in solution.items():
        current = board.cell(position).rotation
        if current != target:
            return Hint(position, (target - current) % 4)
    return None


def count_rotation_moves(board: Board, solution: Solution) -> int:
    """Clockwise taps needed to bring ``board`` to ``solution``."""
    return sum(
        (target - board.cell(position).rotation) % 4
        for position, target in solution.items()
    )


def count_swap_moves(original: Board, shuffled: Board) -> int:
    """Minimum swaps that put the shuffled unlocked tiles back where they started.

    Each shuffled tile is matched to the first unclaimed original slot holding
    an identical tile, giving a permutation whose ``n - cycles`` is the swap
    count.
    """
    slots = [position for position in original.positions() if not original.cell(position).locked]
    count = len(slots)
    permutation = list(range(count))
    claimed = [False] * count
    for shuffled_index, position in enumerate(slots):
        tile = shuffled.cell(position)
        for original_index, candidate in enumerate(slots):
            if not claimed[original_index] and tile.same_tile(original.cell(candidate)):
                permutation[shuffled_index] = original_index
                claimed[original_index] = True
                break

    seen = [False] * count
    cycles = 0
    for start in range(count):
        if seen[start]:
            continue
        cycles += 1
        current = start
        while not seen[current]:
            seen[current] = True
            current = permutation[current]
    return count - cycles


def compute_par(level: "LevelDefinition", tracer: Optional[BeamTracer] = None) -> Optional[int]:
    """Minimum moves from a level's starting layout to the solver's solution."""
    board = level.to_board(shuffle=False)
    solution = solve(board, tracer)
    if solution is None:
        logger.warning("Level %s (%s) has no solution", level.id, level.name)
        return None

    par = count_rotation_moves(board, solution)
    if level.shuffle:
        par += count_swap_moves(board, level.to_board(shuffle=True))
    logger.debug("Level %s par: %d", level.id, par)
    return par
