"""Validation utilities for Knight's Tour paths and board states."""

from __future__ import annotations
from typing import TYPE_CHECKING, Sequence, Tuple

if TYPE_CHECKING:
    from .board import KnightBoard


def is_knight_move(a: Tuple[int, int], b: Tuple[int, int]) -> bool:
    """Check if two squares are exactly one knight move apart."""
    dr = abs(a[0] - b[0])
    dc = abs(a[1] - b[1])
    return (dr, dc) in ((1, 2), (2, 1))


def square_color(row: int, col: int) -> int:
    """Colour of a square: 0 for (row + col) even, 1 for odd."""
    return (row + col) % 2


def parity_feasible(board: KnightBoard, start: Tuple[int, int]) -> bool:
    """
    Check the colour-count condition for completing a tour from `start`.

    A knight alternates colours on every move, so the remaining squares are
    visited opposite-colour first. A completion can only exist if the
    unvisited squares of the opposite colour equal the unvisited squares of
    `start`'s colour, or exceed them by exactly one.

    This is a necessary condition, not a sufficient one.
    """
    start_color = square_color(start[0], start[1])
    same = 0
    opposite = 0
    for row, col in board.get_unvisited_cells():
        if square_color(row, col) == start_color:
            same += 1
        else:
            opposite += 1
    return opposite - same in (0, 1)


def validate_tour_path(
    board: KnightBoard,
    start: Tuple[int, int],
    path: Sequence[Tuple[int, int]],
) -> bool:
    """
    Validate that `path` completes a tour from `start` on `board`.

    Args:
        board: The board the search was started from (start already visited).
        start: The knight's square when the search began.
        path: The proposed path, beginning with `start`.

    Returns:
        True if the path starts at `start`, stays on the board, never
        repeats a square, only makes knight moves, only enters squares that
        were unvisited on `board`, and brings the visited count to N*N.
    """
    if not path or tuple(path[0]) != tuple(start):
        return False

    seen = set()
    for row, col in path:
        if not board.in_bounds(row, col):
            return False
        if (row, col) in seen:
            return False
        seen.add((row, col))

    for prev, nxt in zip(path, path[1:]):
        if not is_knight_move(prev, nxt):
            return False

    for row, col in path[1:]:
        if board.is_visited(row, col):
            return False

    visited_before = board.count_visited()
    if not board.is_visited(start[0], start[1]):
        visited_before += 1
    return visited_before + len(path) - 1 == board.size * board.size


def count_tours(board: KnightBoard, start: Tuple[int, int], limit: int = 2) -> int:
    """
    Count the number of ways to complete a tour from `start` (up to limit).

    Uses plain backtracking and stops early once limit is reached.

    Args:
        board: The board state. `start` is treated as visited.
        start: The knight's current square.
        limit: Maximum completions to count before stopping.

    Returns:
        Number of completions found (up to limit).
    """
    work_board = board.copy()
    work_board.visit(start[0], start[1])
    total = work_board.size * work_board.size
    count = [0]  # Use list to allow modification in nested function

    def backtrack(row: int, col: int, visited: int) -> bool:
        """Returns True if limit reached."""
        if visited == total:
            count[0] += 1
            return count[0] >= limit

        for r, c in work_board.onward_moves(row, col):
            work_board.visit(r, c)
            if backtrack(r, c, visited + 1):
                return True
            work_board.unvisit(r, c)

        return False

    if parity_feasible(work_board, start):
        backtrack(start[0], start[1], work_board.count_visited())
    return count[0]
