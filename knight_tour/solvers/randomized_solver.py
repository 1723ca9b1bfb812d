"""Warnsdorff solver with randomized tie-breaks and bounded retries."""

from __future__ import annotations
from typing import Optional, List
import logging
import random
import threading

from .warnsdorff_solver import WarnsdorffSolver
from .base_solver import Path, SearchOutcome
from ..core.board import KnightBoard, Position
from ..core.validator import parity_feasible

logger = logging.getLogger(__name__)


class _AttemptExhausted(Exception):
    """The current attempt used up its node budget."""


class RandomizedWarnsdorffSolver(WarnsdorffSolver):
    """
    Fast, approximate variant of the Warnsdorff solver.

    Ties between equal-degree candidates are broken at random, and each
    attempt may only explore a fixed number of nodes. The solver retries up
    to `max_attempts` times with fresh random tie-breaks.

    This trades completeness for bounded latency: when every attempt runs
    out of budget the outcome is INCONCLUSIVE and `find_tour` returns None
    even though a tour may exist (a false negative). If an attempt explores
    its whole tree within budget, the None result is a proven NO_SOLUTION.
    Prefer WarnsdorffSolver when a reliable answer is needed.
    """

    name = "Randomized Warnsdorff"

    def __init__(
        self,
        max_attempts: int = 3,
        max_nodes_per_attempt: Optional[int] = 10000,
        seed: Optional[int] = None,
        prune_parity: bool = True,
        timeout_seconds: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
        track_memory: bool = True
    ):
        """
        Initialize the randomized solver.

        Args:
            max_attempts: Number of randomized searches before giving up.
            max_nodes_per_attempt: Node budget of one attempt (None = unbounded).
            seed: Random seed for reproducibility.
            prune_parity: See WarnsdorffSolver.
            timeout_seconds: Optional wall-clock budget for the whole call.
            cancel_event: Optional event; setting it abandons the search.
            track_memory: Record peak memory with tracemalloc.
        """
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")
        super().__init__(
            prune_parity=prune_parity,
            timeout_seconds=timeout_seconds,
            cancel_event=cancel_event,
            track_memory=track_memory
        )
        self.max_attempts = max_attempts
        self.max_nodes_per_attempt = max_nodes_per_attempt
        self.seed = seed
        self.rng = random.Random(seed)
        self._attempt_nodes = 0

    def _find_tour(
        self,
        board: KnightBoard,
        start: Position,
        visited_count: int
    ) -> Optional[Path]:
        """Run up to max_attempts budgeted, randomized searches."""
        if self.prune_parity and not parity_feasible(board, start):
            self.stats.extra["pruned"] = "parity"
            return None

        for attempt in range(self.max_attempts):
            self.stats.attempts += 1
            self._attempt_nodes = 0
            path = [start]

            try:
                if self._backtrack(board, start, visited_count, path):
                    return path
            except _AttemptExhausted:
                # Unwind the partial path before the next attempt
                for pos in path[1:]:
                    board.unvisit(pos.row, pos.col)
                logger.debug(
                    "Attempt %d/%d exhausted its budget of %s nodes",
                    attempt + 1, self.max_attempts, self.max_nodes_per_attempt
                )
                continue

            # The whole tree was explored within budget
            return None

        self.stats.outcome = SearchOutcome.INCONCLUSIVE
        self.stats.extra["aborted"] = "attempts exhausted"
        return None

    def _order_candidates(self, board: KnightBoard, candidates: List[Position]) -> List[Position]:
        scored = self._score_candidates(board, candidates)
        self.rng.shuffle(scored)
        scored.sort(key=lambda item: item[1])
        return [pos for pos, _ in scored]

    def _check_budget(self) -> None:
        super()._check_budget()
        if self.max_nodes_per_attempt is not None and self._attempt_nodes >= self.max_nodes_per_attempt:
            raise _AttemptExhausted()
        self._attempt_nodes += 1
