# dlx.py

from typing import Iterator, List, Optional, Tuple

from sudoku import GRID_SIZE, box_index

CELLS = GRID_SIZE * GRID_SIZE
NUM_COLUMNS = 4 * CELLS  # cell, row-value, col-value, box-value
ROOT = 0

Candidate = Tuple[int, int, int]  # (row, col, value)

def constraint_columns(row: int, col: int, value: int) -> Tuple[int, int, int, int]:
    """Header indices of the four constraints a placement satisfies."""
    digit = value - 1
    return (
        1 + row * GRID_SIZE + col,
        1 + CELLS + row * GRID_SIZE + digit,
        1 + 2 * CELLS + col * GRID_SIZE + digit,
        1 + 3 * CELLS + box_index(row, col) * GRID_SIZE + digit,
    )

class ExactCoverMatrix:
    """
    Sparse toroidal exact-cover matrix for a 9x9 Sudoku, stored as an arena.

    Every node is an integer index into parallel lists holding its left/right/up/down
    neighbours and its column header. Index 0 is the root of the header ring,
    1..324 are the constraint headers and every candidate row contributes four
    more nodes. Cover and uncover only rewrite list entries, so a matching
    uncover restores the lists exactly.
    """

    def __init__(self, board):
        headers = NUM_COLUMNS + 1
        self.left = [i - 1 for i in range(headers)]
        self.left[ROOT] = NUM_COLUMNS
        self.right = [i + 1 for i in range(headers)]
        self.right[NUM_COLUMNS] = ROOT
        self.up = list(range(headers))
        self.down = list(range(headers))
        self.column = list(range(headers))
        self.size = [0] * headers
        self.candidate: List[Optional[Candidate]] = [None] * headers

        for r in range(GRID_SIZE):
            for c in range(GRID_SIZE):
                value = int(board[r, c])
                if value == 0:
                    for num in range(1, GRID_SIZE + 1):
                        self.add_row(r, c, num)
                else:
                    self.add_row(r, c, value)

    def add_row(self, row: int, col: int, value: int) -> int:
        first = len(self.left)
        for offset, header in enumerate(constraint_columns(row, col, value)):
            node = first + offset
            self.left.append(first + (offset - 1) % 4)
            self.right.append(first + (offset + 1) % 4)
            # Append at the bottom of the column's vertical ring
            self.up.append(self.up[header])
            self.down.append(header)
            self.down[self.up[header]] = node
            self.up[header] = node
            self.column.append(header)
            self.candidate.append((row, col, value))
            self.size[header] += 1
        return first

    def is_empty(self) -> bool:
        return self.right[ROOT] == ROOT

    def headers(self) -> Iterator[int]:
        c = self.right[ROOT]
        while c != ROOT:
            yield c
            c = self.right[c]

    def column_nodes(self, header: int) -> Iterator[int]:
        i = self.down[header]
        while i != header:
            yield i
            i = self.down[i]

    def row_nodes(self, node: int) -> Iterator[int]:
        """The other nodes of `node`'s candidate row, left to right."""
        j = self.right[node]
        while j != node:
            yield j
            j = self.right[j]

    def cover(self, header: int) -> None:
        left, right, up, down = self.left, self.right, self.up, self.down
        column, size = self.column, self.size

        right[left[header]] = right[header]
        left[right[header]] = left[header]
        i = down[header]
        while i != header:
            j = right[i]
            while j != i:
                down[up[j]] = down[j]
                up[down[j]] = up[j]
                size[column[j]] -= 1
                j = right[j]
            i = down[i]

    def uncover(self, header: int) -> None:
        left, right, up, down = self.left, self.right, self.up, self.down
        column, size = self.column, self.size

        i = up[header]
        while i != header:
            j = left[i]
            while j != i:
                size[column[j]] += 1
                down[up[j]] = j
                up[down[j]] = j
                j = left[j]
            i = up[i]
        right[left[header]] = header
        left[right[header]] = header

    def choose_column(self) -> Optional[int]:
        """Live header with the fewest candidates; the first one wins ties."""
        best, best_size = None, None
        for c in self.headers():
            if best is None or self.size[c] < best_size:
                best, best_size = c, self.size[c]
                if best_size <= 1:
                    break
        return best

    def snapshot(self):
        return (
            list(self.left),
            list(self.right),
            list(self.up),
            list(self.down),
            list(self.size),
        )

    def count_solutions(self, limit: int = 2) -> int:
        """Counts exact covers, stopping once `limit` have been found."""
        if self.is_empty():
            return 1
        header = self.choose_column()
        if self.size[header] == 0:
            return 0

        found = 0
        self.cover(header)
        for node in self.column_nodes(header):
            for j in self.row_nodes(node):
                self.cover(self.column[j])
            found += self.count_solutions(limit - found)
            for j in self.row_nodes_reversed(node):
                self.uncover(self.column[j])
            if found >= limit:
                break
        self.uncover(header)
        return found

    def row_nodes_reversed(self, node: int) -> Iterator[int]:
        j = self.left[node]
        while j != node:
            yield j
            j = self.left[j]
