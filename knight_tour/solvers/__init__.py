"""Solvers module for the Knight's Tour."""

from .base_solver import BaseTourSolver, SolverStats, SearchOutcome
from .backtracking_solver import BacktrackingSolver
from .warnsdorff_solver import WarnsdorffSolver
from .randomized_solver import RandomizedWarnsdorffSolver

__all__ = [
    "BaseTourSolver",
    "SolverStats",
    "SearchOutcome",
    "BacktrackingSolver",
    "WarnsdorffSolver",
    "RandomizedWarnsdorffSolver"
]
