"""Base solver interface and common utilities."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any, List, Tuple
import logging
import threading
import time
import tracemalloc

from ..core.board import KnightBoard, Position
from ..errors import SearchAborted

logger = logging.getLogger(__name__)

Path = List[Position]


class SearchOutcome(Enum):
    """How a search ended."""
    FOUND = "found"
    NO_SOLUTION = "no_solution"
    INCONCLUSIVE = "inconclusive"


@dataclass
class SolverStats:
    """Statistics from a solver run."""
    # Core metrics
    solved: bool = False
    outcome: SearchOutcome = SearchOutcome.NO_SOLUTION
    time_seconds: float = 0.0
    memory_bytes: int = 0
    iterations: int = 0

    # Algorithm-specific metrics
    backtracks: int = 0
    nodes_explored: int = 0
    attempts: int = 0

    # Additional metadata
    algorithm: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "solved": self.solved,
            "outcome": self.outcome.value,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "iterations": self.iterations,
            "backtracks": self.backtracks,
            "nodes_explored": self.nodes_explored,
            "attempts": self.attempts,
            "algorithm": self.algorithm,
            **self.extra
        }


class BaseTourSolver(ABC):
    """
    Abstract base class for Knight's Tour solvers.

    Subclasses implement `_find_tour`. The public queries (`solve`,
    `is_tour_possible`, `get_hint`) always work on a private copy of the
    caller's board, so a solver instance never retains or leaks board state.

    Bounding: `timeout_seconds` and `cancel_event` are checked between
    candidate attempts at every recursion level. When either fires the
    search unwinds and the outcome is INCONCLUSIVE.
    """

    name: str = "BaseTourSolver"

    def __init__(
        self,
        timeout_seconds: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
        track_memory: bool = True
    ):
        """
        Args:
            timeout_seconds: Optional wall-clock budget for one search.
            cancel_event: Optional event; setting it abandons the search.
            track_memory: Record peak memory with tracemalloc. tracemalloc is
                          process-wide, so leave this off when several
                          searches run at once in different threads.
        """
        self.timeout_seconds = timeout_seconds
        self.cancel_event = cancel_event
        self.track_memory = track_memory
        self.stats = SolverStats(algorithm=self.name)
        self._deadline: Optional[float] = None

    def solve(
        self,
        board: KnightBoard,
        start: Tuple[int, int],
        visited_count: Optional[int] = None
    ) -> Tuple[Optional[Path], SolverStats]:
        """
        Search for a tour completion with timing and memory tracking.

        The caller's board is copied; `start` is marked visited on the copy.

        Args:
            board: The current game state.
            start: The knight's current square.
            visited_count: Number of visited squares including `start`.
                           Derived from the board when omitted.

        Returns:
            Tuple of (path or None, stats).
        """
        work_board = board.copy()
        start = Position(*start)
        if not work_board.in_bounds(*start):
            raise ValueError(f"Start {tuple(start)} is outside a {board.size}x{board.size} board")
        work_board.visit(*start)

        if self.track_memory:
            tracemalloc.start()

        start_time = time.perf_counter()
        try:
            path = self.find_tour(work_board, start, visited_count)
        finally:
            self.stats.time_seconds = time.perf_counter() - start_time
            if self.track_memory:
                current, peak = tracemalloc.get_traced_memory()
                tracemalloc.stop()
                self.stats.memory_bytes = peak

        logger.debug(
            "%s from %s on %dx%d: %s in %.4fs (%d nodes, %d backtracks)",
            self.name, tuple(start), board.size, board.size, self.stats.outcome.value,
            self.stats.time_seconds, self.stats.nodes_explored, self.stats.backtracks
        )
        return path, self.stats

    def is_tour_possible(
        self,
        board: KnightBoard,
        start: Tuple[int, int],
        visited_count: Optional[int] = None
    ) -> bool:
        """Check whether the remaining squares can all be visited from `start`."""
        path, _ = self.solve(board, start, visited_count)
        return path is not None

    def get_hint(
        self,
        board: KnightBoard,
        start: Tuple[int, int],
        visited_count: Optional[int] = None
    ) -> Optional[Position]:
        """
        Suggest the next move from `start`.

        Only the first step of the found path is returned, never the rest.

        Returns:
            The square to move to, or None if no completion exists (or the
            board is already complete).
        """
        path, _ = self.solve(board, start, visited_count)
        if path is not None and len(path) > 1:
            return path[1]
        return None

    def find_tour(
        self,
        board: KnightBoard,
        start: Tuple[int, int],
        visited_count: Optional[int] = None
    ) -> Optional[Path]:
        """
        Find a path from `start` that visits every unvisited square once.

        `board` is mutated during the search. On failure, including a
        timeout or cancellation, it is restored to its original content; on
        success the whole tour is left marked. Use `solve` to work on a copy
        instead.

        Each call starts with fresh `stats`; `stats.outcome` tells a proven
        NO_SOLUTION apart from an INCONCLUSIVE (abandoned) search.

        Args:
            board: Board with `start` already visited.
            start: The knight's current square.
            visited_count: Visited squares including `start`.

        Returns:
            The path (beginning with `start`) or None.
        """
        self.stats = SolverStats(algorithm=self.name)
        start = Position(*start)
        visited_count = self._check_preconditions(board, start, visited_count)

        snapshot = board.grid.copy()
        if self.timeout_seconds is not None:
            self._deadline = time.perf_counter() + self.timeout_seconds

        try:
            path = self._find_tour(board, start, visited_count)
        except SearchAborted as e:
            logger.info("%s search abandoned: %s", self.name, e.reason)
            board.grid[...] = snapshot
            self.stats.outcome = SearchOutcome.INCONCLUSIVE
            self.stats.extra["aborted"] = e.reason
            return None
        finally:
            self._deadline = None

        if path is not None:
            self.stats.outcome = SearchOutcome.FOUND
        elif self.stats.outcome is not SearchOutcome.INCONCLUSIVE:
            self.stats.outcome = SearchOutcome.NO_SOLUTION
        self.stats.solved = path is not None
        return path

    @abstractmethod
    def _find_tour(
        self,
        board: KnightBoard,
        start: Position,
        visited_count: int
    ) -> Optional[Path]:
        """
        Internal search to be implemented by subclasses.

        Args:
            board: Board with `start` visited (can be modified).
            start: The knight's current square.
            visited_count: Validated count of visited squares.

        Returns:
            The path or None if no completion was found.
        """
        pass

    def _check_preconditions(
        self,
        board: KnightBoard,
        start: Position,
        visited_count: Optional[int]
    ) -> int:
        if not board.in_bounds(start.row, start.col):
            raise ValueError(f"Start {tuple(start)} is outside a {board.size}x{board.size} board")
        if not board.is_visited(start.row, start.col):
            raise ValueError(f"Start {tuple(start)} must be marked visited")

        actual = board.count_visited()
        if visited_count is None:
            return actual
        if visited_count != actual:
            raise ValueError(
                f"visited_count is {visited_count} but the board has {actual} visited squares"
            )
        return visited_count

    def _check_budget(self) -> None:
        """Abort the search if the deadline passed or cancellation was requested."""
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise SearchAborted("cancelled")
        if self._deadline is not None and time.perf_counter() >= self._deadline:
            raise SearchAborted("timeout")

    def reset_stats(self) -> None:
        """Reset solver statistics."""
        self.stats = SolverStats(algorithm=self.name)
