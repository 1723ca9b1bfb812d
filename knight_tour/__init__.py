"""Knight's Tour solver: backtracking search with Warnsdorff move ordering."""

from .core.board import KnightBoard, Position
from .solvers import (
    BaseTourSolver,
    BacktrackingSolver,
    WarnsdorffSolver,
    RandomizedWarnsdorffSolver,
    SearchOutcome,
    SolverStats
)

__version__ = "1.0.0"

__all__ = [
    "KnightBoard",
    "Position",
    "BaseTourSolver",
    "BacktrackingSolver",
    "WarnsdorffSolver",
    "RandomizedWarnsdorffSolver",
    "SearchOutcome",
    "SolverStats"
]
