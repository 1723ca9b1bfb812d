"""Knight's Tour board representation for square boards of any size."""

from __future__ import annotations
from functools import lru_cache
from typing import List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from ..errors import InvalidBoardError


UNVISITED = 0
VISITED = 1

# Relative knight displacements. The order is the stable tie-break order
# used by the solvers.
KNIGHT_MOVES: Tuple[Tuple[int, int], ...] = (
    (-2, -1), (-2, 1), (-1, -2), (-1, 2),
    (1, -2), (1, 2), (2, -1), (2, 1),
)


class Position(NamedTuple):
    """A (row, col) square, 0-indexed."""
    row: int
    col: int

    def to_dict(self) -> dict:
        return {"row": int(self.row), "col": int(self.col)}


@lru_cache(maxsize=None)
def knight_neighbors(size: int) -> Tuple[Tuple[Tuple[Position, ...], ...], ...]:
    """
    Precompute the in-bounds knight targets of every square.

    Returns:
        table[row][col] -> tuple of Positions, in KNIGHT_MOVES order.
    """
    table = []
    for row in range(size):
        row_entries = []
        for col in range(size):
            targets = []
            for dr, dc in KNIGHT_MOVES:
                r, c = row + dr, col + dc
                if 0 <= r < size and 0 <= c < size:
                    targets.append(Position(r, c))
            row_entries.append(tuple(targets))
        table.append(tuple(row_entries))
    return tuple(table)


class KnightBoard:
    """
    Represents an N x N Knight's Tour board.

    Every cell is either UNVISITED (0) or VISITED (1). The board carries its
    own size, nothing about the board dimension is global.
    """

    def __init__(self, size: int = 8, grid: Optional[np.ndarray] = None):
        """
        Initialize a board.

        Args:
            size: Board side length (must be >= 1).
            grid: Optional initial grid of 0/1 values. If None, creates an
                  all-unvisited board.
        """
        if size < 1:
            raise InvalidBoardError(f"Size must be a positive integer, got {size}")

        self.size = size

        if grid is not None:
            grid = np.asarray(grid)
            if grid.shape != (size, size):
                raise InvalidBoardError(f"Grid shape must be ({size}, {size}), got {grid.shape}")
            if not np.isin(grid, (UNVISITED, VISITED)).all():
                raise InvalidBoardError("Grid cells must be 0 (unvisited) or 1 (visited)")
            self.grid = grid.astype(np.int8)
        else:
            self.grid = np.zeros((size, size), dtype=np.int8)

        self._neighbors = knight_neighbors(size)

    def copy(self) -> KnightBoard:
        """Create a deep copy of the board."""
        new_board = KnightBoard(self.size)
        new_board.grid = self.grid.copy()
        return new_board

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def is_visited(self, row: int, col: int) -> bool:
        return self.grid[row, col] == VISITED

    def visit(self, row: int, col: int) -> None:
        self.grid[row, col] = VISITED

    def unvisit(self, row: int, col: int) -> None:
        self.grid[row, col] = UNVISITED

    def count_visited(self) -> int:
        """Count the number of visited squares."""
        return int(np.count_nonzero(self.grid))

    def count_unvisited(self) -> int:
        """Count the number of unvisited squares."""
        return self.size * self.size - self.count_visited()

    def is_complete(self) -> bool:
        """Check if every square has been visited."""
        return self.count_unvisited() == 0

    def neighbors(self, row: int, col: int) -> Tuple[Position, ...]:
        """All in-bounds knight targets of (row, col), visited or not."""
        return self._neighbors[row][col]

    def onward_moves(self, row: int, col: int) -> List[Position]:
        """Knight targets of (row, col) that are still unvisited."""
        grid = self.grid
        return [p for p in self._neighbors[row][col] if grid[p.row, p.col] == UNVISITED]

    def degree(self, row: int, col: int) -> int:
        """
        Number of unvisited squares reachable by one knight move.

        This is the Warnsdorff degree of (row, col).
        """
        grid = self.grid
        count = 0
        for r, c in self._neighbors[row][col]:
            if grid[r, c] == UNVISITED:
                count += 1
        return count

    def get_unvisited_cells(self) -> List[Position]:
        """Get list of all unvisited positions in row-major order."""
        rows, cols = np.nonzero(self.grid == UNVISITED)
        return [Position(int(r), int(c)) for r, c in zip(rows, cols)]

    def to_string(self) -> str:
        """
        Convert board to a compact string representation.
        Uses '0' for unvisited and '1' for visited, row-major.
        """
        return ''.join('1' if v else '0' for v in self.grid.flatten())

    @classmethod
    def from_string(cls, s: str, size: Optional[int] = None) -> KnightBoard:
        """
        Create a board from a string representation.

        Args:
            s: String of length size*size. '0' or '.' for unvisited,
               '1' or 'x' for visited. Whitespace is ignored.
            size: Board size. Inferred from the string length if omitted.
        """
        s = ''.join(s.split())
        if size is None:
            size = int(round(len(s) ** 0.5))
        if len(s) != size * size:
            raise InvalidBoardError(f"String length must be {size*size}, got {len(s)}")

        grid = np.zeros((size, size), dtype=np.int8)
        for idx, ch in enumerate(s):
            if ch in '1xX':
                grid[idx // size, idx % size] = VISITED
            elif ch not in '0.':
                raise InvalidBoardError(f"Invalid board character {ch!r}")

        return cls(size, grid)

    @classmethod
    def from_2d_list(cls, data: Sequence[Sequence[int]]) -> KnightBoard:
        """Create a board from a 2D list, treating any non-zero cell as visited."""
        if not data:
            raise InvalidBoardError("Board must have at least one row")
        size = len(data)
        if any(len(row) != size for row in data):
            raise InvalidBoardError("Board must be square")
        arr = (np.array(data) != 0).astype(np.int8)
        return cls(size, arr)

    @classmethod
    def from_path(cls, size: int, path: Sequence[Tuple[int, int]]) -> KnightBoard:
        """Create a board with every square of `path` marked visited."""
        board = cls(size)
        for row, col in path:
            if not board.in_bounds(row, col):
                raise InvalidBoardError(f"Position ({row}, {col}) is outside a {size}x{size} board")
            board.visit(row, col)
        return board

    def to_2d_list(self) -> List[List[int]]:
        return self.grid.astype(int).tolist()

    def __str__(self) -> str:
        """Pretty-print the board ('x' visited, '.' unvisited)."""
        lines = []
        for i in range(self.size):
            lines.append(' '.join('x' if v else '.' for v in self.grid[i]))
        return '\n'.join(lines)

    def __repr__(self) -> str:
        return f"KnightBoard(size={self.size}, visited={self.count_visited()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KnightBoard):
            return False
        return self.size == other.size and np.array_equal(self.grid, other.grid)

    def __hash__(self) -> int:
        return hash((self.size, self.to_string()))
