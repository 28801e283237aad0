# generator.py

import random
import numpy as np
from dataclasses import dataclass
from typing import List, NamedTuple, Optional

from solver import Algorithm, SudokuSolver, has_multiple_solutions
from sudoku import BOX_SIZE, GRID_SIZE, NON_UNIQUE_EXTREME, Difficulty, is_safe

@dataclass
class GeneratorConfig:
    seed: Optional[int] = None
    allow_non_unique: bool = False
    algorithm: Algorithm = Algorithm.DLX
    max_attempts: int = GRID_SIZE * GRID_SIZE  # removal attempts per digging pass
    max_rounds: int = 3
    verbose: bool = False

class Puzzle(NamedTuple):
    puzzle: np.ndarray
    solution: np.ndarray

class SudokuGenerator:
    def __init__(self, config: Optional[GeneratorConfig] = None, rng: Optional[random.Random] = None):
        self.config = config or GeneratorConfig()
        self.rng = rng or random.Random(self.config.seed)
        self.solver = SudokuSolver()

    def get_difficulty_levels(self) -> List[str]:
        return [d.label for d in Difficulty]

    def holes_range(self, difficulty):
        difficulty = Difficulty.from_label(difficulty)
        if difficulty is Difficulty.EXTREME and self.config.allow_non_unique:
            return NON_UNIQUE_EXTREME
        return difficulty.value

    def generate_puzzle(self, difficulty=Difficulty.MEDIUM) -> Puzzle:
        low, high = self.holes_range(difficulty)
        solution = self.generate_filled_grid()
        puzzle = solution.copy()

        holes = self.rng.randint(low, high)
        dug = self.dig_holes(puzzle, holes)
        if self.config.verbose:
            print(f"Dug {dug}/{holes} holes ({Difficulty.from_label(difficulty).label}), {GRID_SIZE * GRID_SIZE - dug} clues left.")
        return Puzzle(puzzle=puzzle, solution=solution)

    def generate_filled_grid(self):
        grid = np.zeros((GRID_SIZE, GRID_SIZE), dtype=int)
        for i in range(0, GRID_SIZE, BOX_SIZE):
            self._fill_box(grid, i, i)

        remaining = [(r, c) for r in range(GRID_SIZE) for c in range(GRID_SIZE) if grid[r, c] == 0]
        if not self._fill_remaining(grid, remaining, 0):
            raise RuntimeError("Could not complete the grid from its diagonal boxes.")
        return grid

    def _fill_box(self, grid, row, col):
        nums = list(range(1, GRID_SIZE + 1))
        self.rng.shuffle(nums)
        for i in range(BOX_SIZE):
            for j in range(BOX_SIZE):
                grid[row + i, col + j] = nums[i * BOX_SIZE + j]

    def _fill_remaining(self, grid, cells, index):
        if index == len(cells):
            return True
        r, c = cells[index]
        for num in range(1, GRID_SIZE + 1):
            if is_safe(grid, r, c, num):
                grid[r, c] = num
                if self._fill_remaining(grid, cells, index + 1):
                    return True
                grid[r, c] = 0
        return False

    def dig_holes(self, grid, holes, rounds=None):
        """
        Removes up to `holes` values from `grid` in place and returns how many were removed.

        A cell stays empty only if the reduced grid is still solvable and, unless
        non-unique puzzles are allowed, still has exactly one solution. Each pass
        visits the cells in a fresh random order and spends at most `max_attempts`
        removal attempts. When the budget runs out with cells still untried, the
        remainder is dug in another pass while rounds remain.
        """
        if rounds is None:
            rounds = self.config.max_rounds

        positions = [(r, c) for r in range(GRID_SIZE) for c in range(GRID_SIZE)]
        self.rng.shuffle(positions)

        removed = 0
        attempts = 0
        budget_spent = False
        for r, c in positions:
            if removed >= holes:
                break
            if grid[r, c] == 0:
                continue
            if attempts >= self.config.max_attempts:
                budget_spent = True
                break
            attempts += 1

            backup = grid[r, c]
            grid[r, c] = 0

            self.solver.set_board(grid.copy())
            solved, _ = self.solver.solve(self.config.algorithm)
            if not solved or (not self.config.allow_non_unique and has_multiple_solutions(grid.copy())):
                grid[r, c] = backup
            else:
                removed += 1

        # A rejected cell stays rejected as more holes are dug, so only a pass
        # cut short by the budget is worth repeating.
        remaining = holes - removed
        if remaining > 0 and budget_spent and rounds > 1:
            if self.config.verbose:
                print(f"Pass removed {removed}/{holes} holes, retrying for {remaining} more...")
            removed += self.dig_holes(grid, remaining, rounds - 1)
        return removed

def generate_sudoku(difficulty: Difficulty, seed: Optional[int] = None):
    generator = SudokuGenerator(GeneratorConfig(seed=seed))
    return generator.generate_puzzle(difficulty)
