"""Game controller for a single attempt at a level."""

from __future__ import annotations

from typing import Dict, Optional

from .board import Board
from .grid import GridPosition
from .levels import LevelDefinition
from .solver import Hint, Solution, next_hint, solve
from .tracer import BeamTracer, PropagationResult

TWO_STAR_MOVE_FACTOR = 1.5


class PrismGame:
    """Owns the board for one attempt: applies moves, re-traces and hands out hints."""

    def __init__(self, level: LevelDefinition, tracer: Optional[BeamTracer] = None):
        self.level = level
        self.tracer = tracer or BeamTracer()
        self.reset()

    def reset(self) -> None:
        self.board: Board = self.level.to_board()
        self.result = PropagationResult()
        self.move_count = 0
        self._solution: Optional[Solution] = None
        self._solution_ready = False
        self.propagate()

    @property
    def solved(self) -> bool:
        return self.result.all_targets_satisfied

    def propagate(self) -> PropagationResult:
        return self.tracer.trace(self.board, self.result)

    def rotate(self, position: GridPosition) -> bool:
        if self.solved or not self.board.rotate(position):
            return False
        self.move_count += 1
        self.propagate()
        return True

    def swap(self, first: GridPosition, second: GridPosition) -> bool:
        if self.solved or not self.board.swap(first, second):
            return False
        self.move_count += 1
        # A new arrangement needs a new solution.
        self._solution = None
        self._solution_ready = False
        self.propagate()
        return True

    def solution(self) -> Optional[Solution]:
        if not self._solution_ready:
            self._solution = solve(self.board, self.tracer)
            self._solution_ready = True
        return self._solution

    def hint(self) -> Optional[Hint]:
        if self.solved:
            return None
        return next_hint(self.board, self.solution())

    def level_complete(self) -> bool:
        return self.solved

    def star_rating(self, elapsed_seconds: float) -> int:
        par = self.level.par_moves
        if self.move_count <= par and elapsed_seconds <= self.level.par_time_seconds:
            return 3
        if self.move_count <= par * TWO_STAR_MOVE_FACTOR:
            return 2
        return 1

    def playthrough(self) -> Dict[str, object]:
        summary = self.propagate().to_payload()
        summary["metadata"] = self.level.metadata
        summary["moves"] = self.move_count
        hint = self.hint()
        summary["hint"] = (
            {"position": list(hint.position), "rotations": hint.rotations}
            if hint is not None
            else None
        )
        return summary
