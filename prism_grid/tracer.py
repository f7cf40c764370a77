"""Breadth-first propagation of colored beams across a board."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Deque, Dict, List, Optional, Tuple

from .board import Board, TileKind
from .colors import LightColor
from .grid import Direction, GridPosition
from .router import route


@dataclass(frozen=True)
class BeamSegment:
    """One cell-to-cell hop of a beam. ``direction`` is the travel direction."""

    start: GridPosition
    end: GridPosition
    color: LightColor
    direction: Direction


@dataclass
class PropagationResult:
    segments: List[BeamSegment] = field(default_factory=list)
    target_hits: Dict[GridPosition, LightColor] = field(default_factory=dict)
    all_targets_satisfied: bool = False

    def clear(self) -> None:
        self.segments.clear()
        self.target_hits.clear()
        self.all_targets_satisfied = False

    def to_payload(self) -> Dict[str, object]:
        return {
            "segments": [self._segment_payload(segment) for segment in self.segments],
            "targets": {
                str(position): color.name.lower()
                for position, color in self.target_hits.items()
            },
            "all_targets_satisfied": self.all_targets_satisfied,
        }

    @staticmethod
    def _segment_payload(segment: BeamSegment) -> Dict[str, object]:
        return {
            "start": list(segment.start),
            "end": list(segment.end),
            "color": segment.color.name.lower(),
            "direction": segment.direction.name,
        }


class CycleGuard(Enum):
    """How the tracer decides that a queued beam state was already handled.

    ``ONCE`` processes each ``(position, direction)`` a single time. A merger
    that receives its second input later then never forwards the merged color.
    ``COLOR_GROWTH`` reprocesses a state whenever the arriving color adds a
    component to what that state has already carried, which lets merged light
    travel on. Colors only grow, so each state is processed at most four times:
    once for an uncolored beam and once per added primary.
    """

    ONCE = "once"
    COLOR_GROWTH = "color_growth"


_State = Tuple[GridPosition, Direction]


class BeamTracer:
    """Trace every source on a board until the work queue drains.

    The queue, visited map and merger arrival map are kept on the instance and
    cleared at the start of each :meth:`trace` call, so one tracer can be reused
    for the thousands of traces a solver run performs. A tracer is not safe to
    share between threads.
    """

    def __init__(self, cycle_guard: CycleGuard = CycleGuard.COLOR_GROWTH):
        self.cycle_guard = cycle_guard
        self.steps = 0
        self._queue: Deque[Tuple[GridPosition, Direction, LightColor]] = deque()
        self._visited: Dict[_State, LightColor] = {}
        self._arrivals: Dict[_State, LightColor] = {}

    def _reset(self) -> None:
        self._queue.clear()
        self._visited.clear()
        self._arrivals.clear()
        self.steps = 0

    def trace(
        self, board: Board, result: Optional[PropagationResult] = None
    ) -> PropagationResult:
        if result is None:
            result = PropagationResult()
        result.clear()
        self._reset()

        for position in board.sources():
            cell = board.cell(position)
            self._emit(board, result, position, cell.emission_direction, cell.source_color)

        while self._queue:
            position, direction, color = self._queue.popleft()
            if self._already_handled(position, direction, color):
                continue
            self.steps += 1

            cell = board.cell(position)
            if cell.kind is TileKind.DARK_ABSORBER:
                if not color.contains(cell.activation_color):
                    continue
            elif cell.kind is TileKind.TARGET:
                previous = result.target_hits.get(position, LightColor.NONE)
                result.target_hits[position] = previous | color
                continue
            elif cell.kind is TileKind.MERGER:
                color = self._merge(position, direction, color)

            for out in route(cell, direction):
                self._emit(board, result, position, out, color)

        targets = board.targets()
        result.all_targets_satisfied = bool(targets) and all(
            result.target_hits.get(position, LightColor.NONE).contains(
                board.cell(position).required_color
            )
            for position in targets
        )
        return result

    def _emit(
        self,
        board: Board,
        result: PropagationResult,
        start: GridPosition,
        direction: Direction,
        color: LightColor,
    ) -> None:
        end = start.step(direction)
        if not board.in_bounds(end):
            return
        result.segments.append(BeamSegment(start, end, color, direction))
        self._queue.append((end, direction, color))

    def _already_handled(
        self, position: GridPosition, direction: Direction, color: LightColor
    ) -> bool:
        key = (position, direction)
        seen = self._visited.get(key)
        if self.cycle_guard is CycleGuard.ONCE:
            if seen is not None:
                return True
            self._visited[key] = color
            return False
        if seen is not None and seen.contains(color):
            return True
        self._visited[key] = (seen or LightColor.NONE) | color
        return False

    def _merge(
        self, position: GridPosition, direction: Direction, color: LightColor
    ) -> LightColor:
        """Record an arrival and return the union of everything that reached this merger."""
        key = (position, direction.opposite())
        self._arrivals[key] = self._arrivals.get(key, LightColor.NONE) | color
        merged = LightColor.NONE
        for face in Direction:
            merged |= self._arrivals.get((position, face), LightColor.NONE)
        return merged


def trace(board: Board, cycle_guard: CycleGuard = CycleGuard.COLOR_GROWTH) -> PropagationResult:
    """Convenience wrapper around a one-off :class:`BeamTracer`."""
    return BeamTracer(cycle_guard).trace(board)
