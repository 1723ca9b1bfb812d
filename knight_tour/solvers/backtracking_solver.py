"""Depth-First Search solver with plain backtracking."""

from __future__ import annotations
from typing import Optional, List

from .base_solver import BaseTourSolver, Path
from ..core.board import KnightBoard, Position


class BacktrackingSolver(BaseTourSolver):
    """
    Depth-First Search solver using recursive backtracking.

    Candidates are tried in the fixed KNIGHT_MOVES order. The search is
    exhaustive: every candidate at every level is eventually tried, so a
    completion is found whenever one exists. Without move ordering this
    gets slow quickly beyond 5x5 boards.

    Subclasses change the search only through `_order_candidates`.
    """

    name = "Backtracking"

    def _find_tour(
        self,
        board: KnightBoard,
        start: Position,
        visited_count: int
    ) -> Optional[Path]:
        """Solve using DFS with backtracking."""
        self.stats.attempts += 1
        path = [start]
        if self._backtrack(board, start, visited_count, path):
            return path
        return None

    def _backtrack(
        self,
        board: KnightBoard,
        current: Position,
        visited_count: int,
        path: List[Position]
    ) -> bool:
        """
        Recursive backtracking algorithm.

        Returns True if a full tour was reached, False otherwise. On False
        the board and path are exactly as they were on entry.
        """
        self.stats.iterations += 1

        if visited_count == board.size * board.size:
            return True

        candidates = self._order_candidates(board, board.onward_moves(current.row, current.col))

        for nxt in candidates:
            self._check_budget()

            board.visit(nxt.row, nxt.col)
            path.append(nxt)
            self.stats.nodes_explored += 1

            if self._backtrack(board, nxt, visited_count + 1, path):
                return True

            path.pop()
            board.unvisit(nxt.row, nxt.col)
            self.stats.backtracks += 1

        return False

    def _order_candidates(self, board: KnightBoard, candidates: List[Position]) -> List[Position]:
        """Order in which to try the unvisited knight targets."""
        return candidates
