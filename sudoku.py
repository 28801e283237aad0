# sudoku.py

import numpy as np
from enum import Enum

GRID_SIZE = 9
BOX_SIZE = 3
ALL_NUMS = 0b1111111110  # bits 1-9

class Difficulty(Enum):
    EASY = (30, 35)
    MEDIUM = (35, 40)
    HARD = (40, 45)
    EXTREME = (46, 64)

    @property
    def label(self):
        return self.name.lower()

    @classmethod
    def from_label(cls, label):
        if isinstance(label, cls):
            return label
        try:
            return cls[str(label).strip().upper().replace("-", "_")]
        except KeyError:
            levels = ", ".join(d.label for d in cls)
            raise ValueError(f"Unknown difficulty '{label}' (expected one of: {levels})") from None

# Near-minimal clue counts, only reachable when uniqueness is not enforced.
NON_UNIQUE_EXTREME = (71, 77)

def to_grid(board):
    """Converts a 9x9 nested sequence into a grid, failing fast on bad shape or values."""
    try:
        raw = np.array(board)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Board is not a 9x9 grid of integers: {e}") from e
    if raw.shape != (GRID_SIZE, GRID_SIZE):
        raise ValueError(f"Board must be 9x9, got shape {raw.shape}")
    if raw.dtype == bool or not (np.issubdtype(raw.dtype, np.integer) or np.issubdtype(raw.dtype, np.floating)):
        raise ValueError(f"Board values must be integers, got {raw.dtype}")
    grid = raw.astype(int)
    if not np.array_equal(raw, grid):
        raise ValueError("Board values must be whole numbers")
    if grid.min() < 0 or grid.max() > 9:
        raise ValueError("Board values must be in the range 0-9")
    return grid

def parse_board(text):
    """Parses 81 digits ('0' or '.' for blanks), ignoring whitespace and box separators."""
    cells = [ch for ch in text if ch.isdigit() or ch == "."]
    if len(cells) != GRID_SIZE * GRID_SIZE:
        raise ValueError(f"Expected 81 cells, found {len(cells)}")
    values = [0 if ch == "." else int(ch) for ch in cells]
    return np.array(values, dtype=int).reshape(GRID_SIZE, GRID_SIZE)

def box_index(row, col):
    return (row // BOX_SIZE) * BOX_SIZE + col // BOX_SIZE

def is_safe(grid, row, col, value):
    for c in range(GRID_SIZE):
        if c != col and grid[row, c] == value:
            return False
    for r in range(GRID_SIZE):
        if r != row and grid[r, col] == value:
            return False
    box_row, box_col = row - row % BOX_SIZE, col - col % BOX_SIZE
    for r in range(box_row, box_row + BOX_SIZE):
        for c in range(box_col, box_col + BOX_SIZE):
            if (r, c) != (row, col) and grid[r, c] == value:
                return False
    return True

def is_consistent(grid):
    for r in range(GRID_SIZE):
        for c in range(GRID_SIZE):
            value = grid[r, c]
            if value != 0 and not is_safe(grid, r, c, value):
                return False
    return True

def is_solved(grid):
    return not (grid == 0).any() and is_consistent(grid)

def is_completion_of(puzzle, grid):
    """True when every given of `puzzle` is kept unchanged in `grid`."""
    puzzle, grid = np.asarray(puzzle), np.asarray(grid)
    givens = puzzle != 0
    return bool((puzzle[givens] == grid[givens]).all())

class BitConstraintTracker:
    """Row, column and box bitmasks mirroring the placed values of a grid.

    Bit ``v`` of ``rows[r]`` is set when value ``v`` sits somewhere in row ``r``;
    likewise for ``cols`` and ``boxes``. Grid writes go through ``place`` and
    ``remove`` so the masks never drift from the grid.
    """

    def __init__(self):
        self.rows = [0] * GRID_SIZE
        self.cols = [0] * GRID_SIZE
        self.boxes = [0] * GRID_SIZE

    def initialize(self, grid):
        self.rows = [0] * GRID_SIZE
        self.cols = [0] * GRID_SIZE
        self.boxes = [0] * GRID_SIZE
        for r in range(GRID_SIZE):
            for c in range(GRID_SIZE):
                value = int(grid[r, c])
                if value != 0:
                    bit = 1 << value
                    self.rows[r] |= bit
                    self.cols[c] |= bit
                    self.boxes[box_index(r, c)] |= bit

    def candidates(self, row, col):
        used = self.rows[row] | self.cols[col] | self.boxes[box_index(row, col)]
        return ALL_NUMS & ~used

    def place(self, grid, row, col, value):
        bit = 1 << value
        grid[row, col] = value
        self.rows[row] |= bit
        self.cols[col] |= bit
        self.boxes[box_index(row, col)] |= bit

    def remove(self, grid, row, col, value):
        bit = 1 << value
        grid[row, col] = 0
        self.rows[row] &= ~bit
        self.cols[col] &= ~bit
        self.boxes[box_index(row, col)] &= ~bit

    @staticmethod
    def iter_values(mask):
        while mask:
            bit = mask & -mask
            mask &= ~bit
            yield bit.bit_length() - 1

def sudoku_board_string(board):
    horizontal_line = "+-------+-------+-------+"
    result = horizontal_line + "\n"
    for i, row in enumerate(board):
        line = "|"
        for j, cell in enumerate(row):
            display_value = "." if cell == 0 else str(int(cell))
            line += f" {display_value}"
            if (j + 1) % 3 == 0:
                line += " |"
        result += line + "\n"
        if (i + 1) % 3 == 0:
            result += horizontal_line + "\n"
    return result.strip()

def board_to_line(board):
    return "".join(str(int(cell)) for cell in np.asarray(board).flatten())
