"""Mid-game board snapshots for testing and benchmarking the solvers."""

from __future__ import annotations
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..core.board import KnightBoard, Position
from ..solvers import RandomizedWarnsdorffSolver


@dataclass
class GameState:
    """A board snapshot as a game would hand it to the solver."""
    board: KnightBoard
    position: Position
    visited_count: int
    path: List[Position]

    def to_dict(self) -> dict:
        return {
            "board": self.board.to_2d_list(),
            "knightPos": self.position.to_dict(),
            "visitedCount": self.visited_count,
            "boardSize": self.board.size,
            "path": [p.to_dict() for p in self.path],
        }


class GameStateGenerator:
    """
    Generator for Knight's Tour game states.

    Two kinds of state:
    1. Random walks: the knight makes random legal moves. The resulting
       state may or may not be completable.
    2. Solvable states: a full tour is found first, then cut after a number
       of moves, so a completion is guaranteed to exist.
    """

    def __init__(self, size: int = 8, seed: Optional[int] = None):
        """
        Initialize the generator.

        Args:
            size: Board size.
            seed: Random seed for reproducibility.
        """
        if size < 1:
            raise ValueError(f"Size must be a positive integer, got {size}")
        self.size = size
        self.seed = seed
        self.rng = random.Random(seed)

    def _random_square(self) -> Position:
        return Position(self.rng.randrange(self.size), self.rng.randrange(self.size))

    def generate(self, moves: int, start: Optional[Tuple[int, int]] = None) -> GameState:
        """
        Play up to `moves` random knight moves.

        The walk stops early if the knight has no unvisited square to go to.

        Args:
            moves: Number of moves to attempt.
            start: Starting square (random if None).
        """
        position = Position(*start) if start is not None else self._random_square()
        board = KnightBoard(self.size)
        board.visit(*position)
        path = [position]

        for _ in range(moves):
            options = board.onward_moves(*position)
            if not options:
                break
            position = self.rng.choice(options)
            board.visit(*position)
            path.append(position)

        return GameState(board=board, position=position, visited_count=len(path), path=path)

    def generate_batch(self, count: int, moves: int) -> List[GameState]:
        """
        Generate multiple random-walk states.

        Args:
            count: Number of states to generate.
            moves: Moves per walk.
        """
        return [self.generate(moves) for _ in range(count)]

    def generate_with_solution(self, moves: int) -> Tuple[GameState, List[Position]]:
        """
        Generate a state that is known to be completable.

        Returns:
            Tuple of (state, full tour the state was cut from).
        """
        tour = self._random_tour()
        if tour is None:
            raise ValueError(f"No knight's tour exists on a {self.size}x{self.size} board")

        moves = max(0, min(moves, len(tour) - 1))
        prefix = tour[:moves + 1]
        board = KnightBoard.from_path(self.size, prefix)
        state = GameState(board=board, position=prefix[-1], visited_count=len(prefix), path=prefix)
        return state, tour

    def generate_solvable_batch(self, count: int, moves: int) -> List[GameState]:
        """Generate multiple completable states."""
        return [self.generate_with_solution(moves)[0] for _ in range(count)]

    def _random_tour(self) -> Optional[List[Position]]:
        """Find a full tour from a random starting square."""
        squares = [Position(r, c) for r in range(self.size) for c in range(self.size)]
        self.rng.shuffle(squares)

        # Unbounded attempts make the randomized solver exhaustive
        solver = RandomizedWarnsdorffSolver(
            max_attempts=1,
            max_nodes_per_attempt=None,
            seed=self.rng.randrange(2 ** 32),
            track_memory=False
        )
        for start in squares:
            path, _ = solver.solve(KnightBoard(self.size), start, 1)
            if path is not None:
                return path
        return None
