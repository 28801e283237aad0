import argparse
import sys
from dataclasses import dataclass
from typing import Dict, List, Optional

import numpy as np

from generator import GeneratorConfig, SudokuGenerator
from solver import Algorithm, SudokuSolver
from sudoku import is_completion_of, is_solved, sudoku_board_string

# --- Configuration ---
DIFFICULTY_LEVELS = ['easy', 'medium', 'hard', 'extreme']

@dataclass
class DifficultyReport:
    solved: int
    total: int
    mean_ms: float
    mean_steps: float

    @property
    def accuracy(self) -> float:
        return (self.solved / self.total) * 100 if self.total > 0 else 0.0

def run_single_check(solver: SudokuSolver, algorithm: Algorithm, puzzle: np.ndarray,
                     solution: np.ndarray, puzzle_num: int, num_puzzles: int,
                     allow_non_unique: bool = False) -> Optional[tuple]:
    """
    Solves one generated puzzle and compares the result with the generator's
    solution. Non-unique puzzles accept any valid completion. Returns
    (elapsed_ms, steps) on success, None on failure.
    """
    solver.set_board(puzzle)
    solved, stats = solver.solve(algorithm)
    result = solver.get_solution()

    if not solved:
        print(f"  Puzzle {puzzle_num}/{num_puzzles}: Failed (no solution found)")
        print(sudoku_board_string(puzzle))
        return None

    if not (is_solved(result) and is_completion_of(puzzle, result)):
        print(f"  Puzzle {puzzle_num}/{num_puzzles}: Failed (invalid grid returned)")
        return None

    if not allow_non_unique and not np.array_equal(result, solution):
        # A valid completion that differs from the generator's grid means the puzzle was not unique.
        print(f"  Puzzle {puzzle_num}/{num_puzzles}: Failed (solution mismatch)")
        print("Expected Solution:          | Solver Solution:")
        truth_lines = sudoku_board_string(solution).split('\n')
        pred_lines = sudoku_board_string(result).split('\n')
        for truth, pred in zip(truth_lines, pred_lines):
            print(f"{truth:<28}| {pred}")
        return None

    return stats.elapsed_ms, stats.steps

def evaluate(algorithm: Algorithm, num_puzzles: int, seed: Optional[int],
             allow_non_unique: bool, levels: List[str]) -> Dict[str, DifficultyReport]:
    """Generates and solves `num_puzzles` puzzles for each difficulty level."""
    generator = SudokuGenerator(GeneratorConfig(seed=seed, allow_non_unique=allow_non_unique))
    solver = SudokuSolver()

    results = {}
    print(f"Starting evaluation with algorithm: '{algorithm.value}'")
    print(f"Testing {num_puzzles} puzzles per difficulty level...\n")

    for difficulty in levels:
        print(f"--- Evaluating difficulty: {difficulty} ---")
        times, steps = [], []
        for i in range(1, num_puzzles + 1):
            puzzle, solution = generator.generate_puzzle(difficulty)
            outcome = run_single_check(solver, algorithm, puzzle, solution, i, num_puzzles, allow_non_unique)
            if outcome is not None:
                times.append(outcome[0])
                steps.append(outcome[1])
                print(f"  Puzzle {i}/{num_puzzles}: Solved in {outcome[0]:.2f} ms, {outcome[1]} steps")

        report = DifficultyReport(
            solved=len(times),
            total=num_puzzles,
            mean_ms=float(np.mean(times)) if times else 0.0,
            mean_steps=float(np.mean(steps)) if steps else 0.0,
        )
        results[difficulty] = report
        print(f"--- Solved {report.accuracy:.2f}% of {difficulty} puzzles ---\n")

    return results

def print_summary(results: Dict[str, DifficultyReport]):
    """Prints a final summary table of the evaluation results."""
    print("="*56)
    print("                  EVALUATION SUMMARY")
    print("="*56)
    print(f"  {'difficulty':<12} | {'solved':>8} | {'mean ms':>10} | {'mean steps':>10}")
    for difficulty, report in results.items():
        print(f"  {difficulty:<12} | {report.accuracy:>7.2f}% | {report.mean_ms:>10.2f} | {report.mean_steps:>10.1f}")
    print("="*56)


if __name__ == '__main__':
    parser = argparse.ArgumentParser(
        description="Generate puzzles per difficulty and check that a solver recovers each solution.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument(
        "-a", "--algorithm",
        type=str,
        default="dlx",
        choices=["dlx", "bitmask", "simple"],
        help="Solving algorithm to evaluate."
    )
    parser.add_argument(
        "-n", "--num_puzzles",
        type=int,
        default=5,
        help="Number of puzzles to evaluate for each difficulty level."
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the puzzle generator."
    )
    parser.add_argument(
        "--allow-non-unique",
        action="store_true",
        help="Generate without the uniqueness check."
    )
    parser.add_argument(
        "--levels",
        nargs="+",
        default=DIFFICULTY_LEVELS,
        choices=DIFFICULTY_LEVELS,
        help="Difficulty levels to evaluate."
    )

    args = parser.parse_args()

    if args.num_puzzles < 1:
        print("Error: --num_puzzles must be at least 1.")
        sys.exit(1)

    evaluation_results = evaluate(Algorithm.from_name(args.algorithm), args.num_puzzles, args.seed,
                                  args.allow_non_unique, args.levels)
    print_summary(evaluation_results)
