# solver.py

import time
import numpy as np
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from dlx import ExactCoverMatrix
from sudoku import GRID_SIZE, BitConstraintTracker, is_consistent, is_safe, to_grid

class Algorithm(Enum):
    DLX = "Dancing Links (DLX)"
    BITMASK_BACKTRACK = "Backtracking with Bit Operations"
    SIMPLE_BACKTRACK = "Simple Backtracking"

    @classmethod
    def from_name(cls, name):
        if isinstance(name, cls):
            return name
        aliases = {
            "dlx": cls.DLX,
            "bitmask": cls.BITMASK_BACKTRACK,
            "bitmask-backtrack": cls.BITMASK_BACKTRACK,
            "simple": cls.SIMPLE_BACKTRACK,
            "simple-backtrack": cls.SIMPLE_BACKTRACK,
        }
        key = str(name).strip().lower().replace("_", "-")
        if key in aliases:
            return aliases[key]
        for algorithm in cls:
            if algorithm.value.lower() == key:
                return algorithm
        raise ValueError(f"Unknown algorithm '{name}' (expected one of: {', '.join(sorted(aliases))})")

@dataclass(frozen=True)
class Step:
    """One committed assignment and every value tried before it."""
    row: int
    col: int
    tested_values: Tuple[int, ...]
    final_value: int

@dataclass(frozen=True)
class Stats:
    algorithm: Algorithm
    elapsed_ms: float
    steps: int

class SudokuSolver:
    """
    Solves a 9x9 grid with one of three algorithms, recording a step trace.

    The solver owns a private copy of the board. After a successful ``solve`` the
    board is complete; after a failed one it holds whatever the last backtrack
    left behind, so callers must check the returned flag before using it.
    """

    def __init__(self):
        self.board = np.zeros((GRID_SIZE, GRID_SIZE), dtype=int)
        self.solution_steps: List[Step] = []
        self.stats: Optional[Stats] = None

    def set_board(self, board):
        self.board = to_grid(board)
        self.solution_steps = []

    def solve(self, algorithm=Algorithm.DLX) -> Tuple[bool, Stats]:
        algorithm = Algorithm.from_name(algorithm)
        self.solution_steps = []

        start = time.perf_counter()
        if not is_consistent(self.board):
            solved = False
        elif algorithm is Algorithm.DLX:
            solved = self._solve_dlx()
        elif algorithm is Algorithm.BITMASK_BACKTRACK:
            solved = self._solve_bitmask()
        else:
            solved = self._search_simple()
        elapsed_ms = (time.perf_counter() - start) * 1000.0

        self.stats = Stats(algorithm=algorithm, elapsed_ms=elapsed_ms, steps=len(self.solution_steps))
        return solved, self.stats

    def get_solution(self):
        return self.board.copy()

    def get_solution_steps(self) -> List[Step]:
        return list(self.solution_steps)

    def get_stats(self) -> Optional[Stats]:
        return self.stats

    # --- Dancing Links ---

    def _solve_dlx(self):
        matrix = ExactCoverMatrix(self.board)
        return self._search_dlx(matrix)

    def _search_dlx(self, matrix):
        if matrix.is_empty():
            return True

        header = matrix.choose_column()
        if matrix.size[header] == 0:
            return False

        matrix.cover(header)
        tested = []
        for node in matrix.column_nodes(header):
            row, col, num = matrix.candidate[node]
            tested.append(num)

            for j in matrix.row_nodes(node):
                matrix.cover(matrix.column[j])

            placed = self.board[row, col] == 0
            if placed:
                self.solution_steps.append(Step(row, col, tuple(tested), num))
                self.board[row, col] = num

            if self._search_dlx(matrix):
                return True

            if placed:
                self.board[row, col] = 0
                self.solution_steps.pop()

            for j in matrix.row_nodes_reversed(node):
                matrix.uncover(matrix.column[j])

        matrix.uncover(header)
        return False

    # --- Backtracking with bit operations ---

    def _solve_bitmask(self):
        tracker = BitConstraintTracker()
        tracker.initialize(self.board)
        return self._search_bitmask(tracker)

    def _search_bitmask(self, tracker):
        for row in range(GRID_SIZE):
            for col in range(GRID_SIZE):
                if self.board[row, col] != 0:
                    continue

                tested = []
                for num in tracker.iter_values(tracker.candidates(row, col)):
                    tested.append(num)
                    tracker.place(self.board, row, col, num)
                    self.solution_steps.append(Step(row, col, tuple(tested), num))

                    if self._search_bitmask(tracker):
                        return True

                    tracker.remove(self.board, row, col, num)
                    self.solution_steps.pop()
                return False
        return True

    # --- Simple backtracking ---

    def _search_simple(self):
        for row in range(GRID_SIZE):
            for col in range(GRID_SIZE):
                if self.board[row, col] != 0:
                    continue

                tested = []
                for num in range(1, GRID_SIZE + 1):
                    tested.append(num)
                    if not is_safe(self.board, row, col, num):
                        continue
                    self.board[row, col] = num
                    self.solution_steps.append(Step(row, col, tuple(tested), num))

                    if self._search_simple():
                        return True

                    self.board[row, col] = 0
                    self.solution_steps.pop()
                return False
        return True

def count_solutions(board, limit=2):
    """Number of completions of `board`, capped at `limit`."""
    grid = to_grid(board)
    if not is_consistent(grid):
        return 0
    return ExactCoverMatrix(grid).count_solutions(limit)

def has_multiple_solutions(board):
    return count_solutions(board, limit=2) > 1
