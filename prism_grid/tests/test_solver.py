import logging

from prism_grid.board import Board, Cell, TileKind
from prism_grid.colors import LightColor
from prism_grid.grid import Direction, GridPosition
from prism_grid.levels import LevelLoader
from prism_grid.solver import (
    Hint,
    compute_par,
    count_rotation_moves,
    count_swap_moves,
    next_hint,
    rotatable_positions,
    solve,
)
from prism_grid.tracer import BeamTracer

P = GridPosition


def corner_board() -> Board:
    board = Board(2, 2)
    board.set_cell(P(0, 0), Cell.source(LightColor.RED, Direction.RIGHT))
    board.set_cell(P(1, 0), Cell.tile(TileKind.BEND, 0))
    board.set_cell(P(1, 1), Cell.target(LightColor.RED))
    return board


def corridor(length: int, rotation: int = 1, target: LightColor = LightColor.RED) -> Board:
    board = Board(length + 2, 1)
    board.set_cell(P(0, 0), Cell.source(LightColor.RED, Direction.RIGHT))
    for col in range(1, length + 1):
        board.set_cell(P(col, 0), Cell.tile(TileKind.STRAIGHT, rotation))
    board.set_cell(P(length + 1, 0), Cell.target(target))
    return board


def test_rotatable_positions_skip_locked_and_empty_in_row_major_order():
    board = Board(3, 2)
    board.set_cell(P(2, 0), Cell.tile(TileKind.MIRROR))
    board.set_cell(P(0, 1), Cell.tile(TileKind.BEND))
    board.set_cell(P(1, 1), Cell.tile(TileKind.MERGER, locked=True))
    board.set_cell(P(0, 0), Cell.target(LightColor.RED))

    assert rotatable_positions(board) == [P(2, 0), P(0, 1)]


def test_solve_finds_rotation_and_restores_board():
    board = corner_board()

    solution = solve(board)

    assert solution == {P(1, 0): 2}
    assert board.cell(P(1, 0)).rotation == 0


def test_solve_leaves_every_rotation_untouched():
    board = corridor(3, rotation=0)
    board.set_cell(P(1, 0), Cell.tile(TileKind.STRAIGHT, 2))
    before = board.rotations()

    solution = solve(board)

    assert solution == {P(1, 0): 3, P(2, 0): 1, P(3, 0): 1}
    assert board.rotations() == before


def test_failed_search_leaves_every_rotation_untouched():
    board = corridor(3, rotation=2, target=LightColor.BLUE)
    before = board.rotations()

    assert solve(board) is None
    assert board.rotations() == before


def test_applying_solution_satisfies_board():
    board = corner_board()
    for position, rotation in solve(board).items():
        board.cell(position).rotation = rotation

    assert BeamTracer().trace(board).all_targets_satisfied


def test_solve_returns_none_without_rotatable_tiles():
    board = Board(2, 1)
    board.set_cell(P(0, 0), Cell.source(LightColor.RED, Direction.RIGHT))
    board.set_cell(P(1, 0), Cell.target(LightColor.RED))

    assert solve(board) is None


def test_unsolvable_board_returns_none_and_restores():
    board = corridor(2, rotation=3, target=LightColor.BLUE)

    assert solve(board) is None
    assert [board.cell(P(col, 0)).rotation for col in (1, 2)] == [3, 3]


def test_unsolvable_board_is_logged(caplog):
    board = corridor(1, target=LightColor.BLUE)

    with caplog.at_level(logging.INFO, logger="prism_grid.solver"):
        assert solve(board) is None

    assert [record.levelno for record in caplog.records] == [logging.INFO]
    assert caplog.records[0].getMessage() == "No solution for Board(3x1)"


def test_solver_prefers_current_rotation_first():
    board = corridor(3, rotation=1)
    assert solve(board) == {P(1, 0): 1, P(2, 0): 1, P(3, 0): 1}


def test_next_hint():
    board = corner_board()
    solution = solve(board)

    assert next_hint(board, solution) == Hint(P(1, 0), 2)
    board.rotate(P(1, 0))
    assert next_hint(board, solution) == Hint(P(1, 0), 1)
    board.rotate(P(1, 0))
    assert next_hint(board, solution) is None
    assert next_hint(board, None) is None


def test_hint_counts_wrap_clockwise():
    board = corner_board()
    board.cell(P(1, 0)).rotation = 3
    assert next_hint(board, {P(1, 0): 2}) == Hint(P(1, 0), 3)


def test_count_rotation_moves():
    board = corridor(2, rotation=0)
    assert count_rotation_moves(board, {P(1, 0): 1, P(2, 0): 3}) == 4


def test_count_swap_moves():
    original = Board(4, 1)
    for col, kind in enumerate((TileKind.STRAIGHT, TileKind.BEND, TileKind.MIRROR, TileKind.CROSS)):
        original.set_cell(P(col, 0), Cell.tile(kind))

    assert count_swap_moves(original, original.copy()) == 0

    one_swap = original.copy()
    one_swap.swap(P(0, 0), P(3, 0))
    assert count_swap_moves(original, one_swap) == 1

    three_cycle = original.copy()
    three_cycle.swap(P(0, 0), P(1, 0))
    three_cycle.swap(P(1, 0), P(2, 0))
    assert count_swap_moves(original, three_cycle) == 2


def test_compute_par_matches_authored_value():
    level = LevelLoader().load("level_13_zigzag")
    assert compute_par(level) == level.par_moves == 3


def test_large_search_logs_warning(caplog):
    board = corridor(11)
    with caplog.at_level(logging.WARNING, logger="prism_grid.solver"):
        solution = solve(board)

    assert solution is not None
    assert any("11 rotatable tiles" in record.getMessage() for record in caplog.records)
