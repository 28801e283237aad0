# tests/test_sudoku.py
import numpy as np
import pytest

from sudoku import (
    ALL_NUMS,
    BitConstraintTracker,
    Difficulty,
    board_to_line,
    box_index,
    is_completion_of,
    is_consistent,
    is_safe,
    is_solved,
    parse_board,
    sudoku_board_string,
    to_grid,
)


def test_to_grid_copies_and_validates(puzzle):
    grid = to_grid(puzzle)
    grid[0, 0] = 0
    assert puzzle[0, 0] == 5

    with pytest.raises(ValueError):
        to_grid([[0] * 9] * 8)
    with pytest.raises(ValueError):
        to_grid([[0] * 9] * 8 + [[0] * 8 + [10]])
    with pytest.raises(ValueError):
        to_grid([[0] * 9] * 8 + [[0] * 8 + [-1]])
    with pytest.raises(ValueError):
        to_grid([["x"] * 9] * 9)
    # Fractional values are rejected, not truncated
    with pytest.raises(ValueError):
        to_grid([[1.7] + [0] * 8] + [[0] * 9] * 8)
    with pytest.raises(ValueError):
        to_grid([[True] * 9] * 9)

    whole = to_grid([[1.0] + [0.0] * 8] + [[0.0] * 9] * 8)
    assert whole[0, 0] == 1
    assert np.issubdtype(whole.dtype, np.integer)


def test_parse_board_round_trips_formatted_board(puzzle):
    assert np.array_equal(parse_board(board_to_line(puzzle)), puzzle)
    assert np.array_equal(parse_board(sudoku_board_string(puzzle)), puzzle)
    dotted = board_to_line(puzzle).replace("0", ".")
    assert np.array_equal(parse_board(dotted), puzzle)
    with pytest.raises(ValueError):
        parse_board("123")


def test_box_index():
    assert box_index(0, 0) == 0
    assert box_index(4, 4) == 4
    assert box_index(2, 8) == 2
    assert box_index(8, 0) == 6


def test_is_safe_checks_row_column_and_box(puzzle):
    assert not is_safe(puzzle, 0, 2, 5)  # row
    assert not is_safe(puzzle, 0, 2, 8)  # column
    assert not is_safe(puzzle, 0, 2, 9)  # box
    assert is_safe(puzzle, 0, 2, 4)
    # The cell's own value never conflicts with itself
    assert is_safe(puzzle, 0, 0, 5)


def test_grid_predicates(puzzle, solution):
    assert is_consistent(puzzle)
    assert not is_solved(puzzle)
    assert is_solved(solution)
    assert is_completion_of(puzzle, solution)

    bad = puzzle.copy()
    bad[0, 2] = 5
    assert not is_consistent(bad)
    other = solution.copy()
    other[0, 0], other[0, 1] = other[0, 1], other[0, 0]
    assert not is_completion_of(puzzle, other)


def test_tracker_mirrors_grid(puzzle):
    tracker = BitConstraintTracker()
    tracker.initialize(puzzle)
    assert tracker.rows[0] == (1 << 5) | (1 << 3) | (1 << 7)
    assert tracker.cols[0] == sum(1 << v for v in (5, 6, 8, 4, 7))
    assert tracker.boxes[0] == sum(1 << v for v in (5, 3, 6, 9, 8))

    mask = tracker.candidates(0, 2)
    assert list(BitConstraintTracker.iter_values(mask)) == [1, 2, 4]
    assert mask & ~ALL_NUMS == 0


def test_tracker_place_and_remove_keep_grid_in_step(puzzle):
    grid = puzzle.copy()
    tracker = BitConstraintTracker()
    tracker.initialize(grid)
    before = (list(tracker.rows), list(tracker.cols), list(tracker.boxes))

    tracker.place(grid, 0, 2, 4)
    assert grid[0, 2] == 4
    assert 4 not in BitConstraintTracker.iter_values(tracker.candidates(0, 3))

    tracker.remove(grid, 0, 2, 4)
    assert grid[0, 2] == 0
    assert (tracker.rows, tracker.cols, tracker.boxes) == before


def test_iter_values_is_ascending():
    mask = (1 << 9) | (1 << 2) | (1 << 5)
    assert list(BitConstraintTracker.iter_values(mask)) == [2, 5, 9]
    assert list(BitConstraintTracker.iter_values(0)) == []


def test_difficulty_table():
    assert Difficulty.EASY.value == (30, 35)
    assert Difficulty.EXTREME.value == (46, 64)
    assert Difficulty.from_label("Hard") is Difficulty.HARD
    assert Difficulty.from_label(Difficulty.MEDIUM) is Difficulty.MEDIUM
    with pytest.raises(ValueError):
        Difficulty.from_label("impossible")
