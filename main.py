# main.py

import argparse
import os
import sys

from generator import GeneratorConfig, SudokuGenerator
from solver import Algorithm, SudokuSolver
from sudoku import Difficulty, board_to_line, parse_board, sudoku_board_string

ALGORITHM_CHOICES = ["dlx", "bitmask", "simple"]

def generate(difficulty_str, seed=None, allow_non_unique=False, algorithm_str="dlx", verbose=False):
    config = GeneratorConfig(
        seed=seed,
        allow_non_unique=allow_non_unique,
        algorithm=Algorithm.from_name(algorithm_str),
        verbose=verbose,
    )
    generator = SudokuGenerator(config)
    difficulty = Difficulty.from_label(difficulty_str)
    puzzle, solution = generator.generate_puzzle(difficulty)

    clues = int((puzzle != 0).sum())
    print(f"Difficulty: {difficulty.label} ({clues} clues)")
    print("Puzzle:\n", sudoku_board_string(puzzle))
    print("Solution:\n", sudoku_board_string(solution))
    print(f"Puzzle line: {board_to_line(puzzle)}")
    return puzzle, solution

def solve(puzzle_arg, algorithm_str="dlx", show_steps=False):
    # Accept either a path to a puzzle file or the 81 digits themselves
    if os.path.isfile(puzzle_arg):
        with open(puzzle_arg, encoding="utf-8") as f:
            text = f.read()
    else:
        text = puzzle_arg
    puzzle = parse_board(text)
    algorithm = Algorithm.from_name(algorithm_str)

    solver = SudokuSolver()
    solver.set_board(puzzle)
    solved, stats = solver.solve(algorithm)

    print("Puzzle:\n", sudoku_board_string(puzzle))
    if not solved:
        print(f"No solution found with {stats.algorithm.value} ({stats.elapsed_ms:.2f} ms).")
        return False

    print("Solution:\n", sudoku_board_string(solver.get_solution()))
    print(f"Algorithm: {stats.algorithm.value}")
    print(f"Time: {stats.elapsed_ms:.2f} ms")
    print(f"Steps: {stats.steps}")

    if show_steps:
        for i, step in enumerate(solver.get_solution_steps(), start=1):
            tried = ", ".join(str(v) for v in step.tested_values)
            print(f"{i:>4}. r{step.row + 1}c{step.col + 1} = {step.final_value}  (tried {tried})")
    return True

def main(argv=None):
    parser = argparse.ArgumentParser(description="Sudoku solver and generator with step traces")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # Generate command
    parser_generate = subparsers.add_parser("generate", help="Generate a puzzle and its solution")
    parser_generate.add_argument("difficulty", type=str, choices=[d.label for d in Difficulty],
                                 help="Difficulty of the Sudoku puzzle to generate")
    parser_generate.add_argument("--seed", type=int, default=None, help="Seed for reproducible puzzles")
    parser_generate.add_argument("--allow-non-unique", action="store_true",
                                 help="Skip the uniqueness check (extreme puzzles may keep only 4-10 clues)")
    parser_generate.add_argument("--algorithm", type=str, choices=ALGORITHM_CHOICES, default="dlx",
                                 help="Algorithm used for the solvability check while digging holes")
    parser_generate.add_argument("-v", "--verbose", action="store_true", help="Print hole-digging progress")

    # Solve command
    parser_solve = subparsers.add_parser("solve", help="Solve a puzzle and report its step trace")
    parser_solve.add_argument("puzzle", type=str,
                              help="81 digits ('0' or '.' for blanks) or a path to a file containing them")
    parser_solve.add_argument("--algorithm", type=str, choices=ALGORITHM_CHOICES, default="dlx",
                              help="Solving algorithm")
    parser_solve.add_argument("--steps", action="store_true", help="Print every step with the values tried")

    args = parser.parse_args(argv)

    try:
        if args.command == "generate":
            generate(args.difficulty, args.seed, args.allow_non_unique, args.algorithm, args.verbose)
            return 0
        return 0 if solve(args.puzzle, args.algorithm, args.steps) else 1
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

if __name__ == "__main__":
    sys.exit(main())
