"""Squares from which a full Knight's Tour exists on a fresh board."""

from __future__ import annotations
from functools import lru_cache
from typing import List, Optional, Tuple

from .board import KnightBoard, Position


@lru_cache(maxsize=None)
def _cached_starting_points(size: int) -> Tuple[Position, ...]:
    from ..solvers import WarnsdorffSolver

    return tuple(_compute(size, WarnsdorffSolver(track_memory=False)))


def _compute(size: int, solver) -> List[Position]:
    points = []
    for row in range(size):
        for col in range(size):
            if solver.is_tour_possible(KnightBoard(size), (row, col), 1):
                points.append(Position(row, col))
    return points


def valid_starting_points(size: int, solver=None) -> List[Position]:
    """
    Every square of an empty size x size board that starts a full tour.

    With the default exhaustive solver the answer is exact and cached per
    size. Large boards take a while on the first call: the search runs once
    per square.

    Args:
        size: Board size.
        solver: Optional solver to use instead of the cached default. Results
                from a custom solver are not cached.
    """
    if solver is not None:
        return _compute(size, solver)
    return list(_cached_starting_points(size))


def is_valid_starting_point(size: int, start: Tuple[int, int], solver=None) -> bool:
    """Check if a full tour exists from `start` on an empty board."""
    if not (0 <= start[0] < size and 0 <= start[1] < size):
        return False
    if solver is None:
        solver = _default_solver()
    return solver.is_tour_possible(KnightBoard(size), start, 1)


def _default_solver():
    from ..solvers import WarnsdorffSolver

    return WarnsdorffSolver(track_memory=False)
