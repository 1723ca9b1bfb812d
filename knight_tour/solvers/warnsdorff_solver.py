"""Backtracking solver ordered by Warnsdorff's Rule."""

from __future__ import annotations
from typing import Optional, List, Tuple
import threading

from .backtracking_solver import BacktrackingSolver
from .base_solver import Path
from ..core.board import KnightBoard, Position
from ..core.validator import parity_feasible


class WarnsdorffSolver(BacktrackingSolver):
    """
    Exhaustive DFS with Warnsdorff move ordering.

    Features:
    - Candidates sorted by ascending degree (fewest onward moves first)
    - Stable tie-break in KNIGHT_MOVES order, so results are reproducible
    - Colour-parity check before the search starts
    - Backtracking on dead ends, so the search stays complete

    This is the default engine for possibility checks and hints.
    """

    name = "Warnsdorff"

    def __init__(
        self,
        prune_parity: bool = True,
        timeout_seconds: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
        track_memory: bool = True
    ):
        """
        Initialize the Warnsdorff solver.

        Args:
            prune_parity: If True, reject states whose remaining square
                          colours cannot be covered by alternating moves.
            timeout_seconds: Optional wall-clock budget for one search.
            cancel_event: Optional event; setting it abandons the search.
            track_memory: Record peak memory with tracemalloc.
        """
        super().__init__(
            timeout_seconds=timeout_seconds,
            cancel_event=cancel_event,
            track_memory=track_memory
        )
        self.prune_parity = prune_parity

    def _find_tour(
        self,
        board: KnightBoard,
        start: Position,
        visited_count: int
    ) -> Optional[Path]:
        if self.prune_parity and not parity_feasible(board, start):
            self.stats.extra["pruned"] = "parity"
            return None
        return super()._find_tour(board, start, visited_count)

    def _order_candidates(self, board: KnightBoard, candidates: List[Position]) -> List[Position]:
        scored = self._score_candidates(board, candidates)
        # sorted() is stable, equal degrees keep KNIGHT_MOVES order
        scored.sort(key=lambda item: item[1])
        return [pos for pos, _ in scored]

    def _score_candidates(
        self,
        board: KnightBoard,
        candidates: List[Position]
    ) -> List[Tuple[Position, int]]:
        """
        Compute the Warnsdorff degree of every candidate.

        Each candidate is marked visited while its onward moves are
        counted, then unmarked again.
        """
        scored = []
        for pos in candidates:
            board.visit(pos.row, pos.col)
            degree = board.degree(pos.row, pos.col)
            board.unvisit(pos.row, pos.col)
            scored.append((pos, degree))
        return scored
