"""Benchmarking framework for comparing Knight's Tour solvers."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional
from concurrent.futures import ThreadPoolExecutor, TimeoutError
import json
import logging
import os
import threading

from tqdm import tqdm

from ..generator import GameStateGenerator, GameState
from ..solvers import (
    BaseTourSolver,
    BacktrackingSolver,
    WarnsdorffSolver,
    RandomizedWarnsdorffSolver,
    SearchOutcome
)

logger = logging.getLogger(__name__)


@dataclass
class BenchmarkResult:
    """Results from a single benchmark run."""
    state_id: int
    board_size: int
    algorithm: str
    solved: bool
    outcome: str
    time_seconds: float
    memory_bytes: int
    iterations: int
    backtracks: int
    nodes_explored: int
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "state_id": self.state_id,
            "board_size": self.board_size,
            "algorithm": self.algorithm,
            "solved": self.solved,
            "outcome": self.outcome,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "memory_mb": self.memory_bytes / (1024 * 1024),
            "iterations": self.iterations,
            "backtracks": self.backtracks,
            "nodes_explored": self.nodes_explored,
            **self.extra
        }


class Benchmark:
    """
    Benchmark framework for comparing tour solving algorithms.

    Generates completable mid-game states for each board size, runs every
    solver on them and collects performance metrics.
    """

    def __init__(
        self,
        board_sizes: Optional[List[int]] = None,
        states_per_size: int = 5,
        moves_per_state: int = 3,
        solvers: Optional[Dict[str, BaseTourSolver]] = None,
        timeout_seconds: float = 30.0,
        seed: Optional[int] = None
    ):
        """
        Initialize the benchmark.

        Args:
            board_sizes: Board sizes to test (default: 5 and 6).
            states_per_size: Number of game states generated per size.
            moves_per_state: Moves already played in each state.
            solvers: Dict of solver_name -> solver_instance (default: all).
            timeout_seconds: Maximum time per state per solver.
            seed: Random seed for reproducibility.
        """
        self.board_sizes = board_sizes or [5, 6]
        self.states_per_size = states_per_size
        self.moves_per_state = moves_per_state
        self.timeout_seconds = timeout_seconds
        self.seed = seed

        # Solvers also stop themselves when the benchmark timeout passes,
        # so a timed-out run does not keep a worker thread busy.
        self._cancel = threading.Event()
        if solvers is None:
            self.solvers = {
                "Backtracking": BacktrackingSolver(cancel_event=self._cancel),
                "Warnsdorff": WarnsdorffSolver(cancel_event=self._cancel),
                "Randomized": RandomizedWarnsdorffSolver(seed=seed, cancel_event=self._cancel)
            }
        else:
            self.solvers = solvers

        self.states: Dict[int, List[GameState]] = {}
        self.results: List[BenchmarkResult] = []

    def generate_states(self, show_progress: bool = True) -> None:
        """Generate all game states for benchmarking."""
        generator_seed = self.seed
        for size in tqdm(self.board_sizes, desc="Board sizes", disable=not show_progress):
            generator = GameStateGenerator(size=size, seed=generator_seed)
            self.states[size] = generator.generate_solvable_batch(
                self.states_per_size,
                self.moves_per_state
            )
            if generator_seed is not None:
                generator_seed += 1

    def run(self, show_progress: bool = True) -> List[BenchmarkResult]:
        """
        Run the full benchmark suite.

        Returns:
            List of BenchmarkResult objects.
        """
        if not self.states:
            self.generate_states(show_progress)

        self.results = []

        total_tests = sum(len(s) for s in self.states.values()) * len(self.solvers)
        pbar = tqdm(total=total_tests, desc="Benchmarking", disable=not show_progress)

        for size, states in self.states.items():
            for state_id, state in enumerate(states):
                for solver_name, solver in self.solvers.items():
                    result = self._run_single(state, state_id, solver_name, solver)
                    self.results.append(result)
                    pbar.update(1)

        pbar.close()
        return self.results

    def _run_single(
        self,
        state: GameState,
        state_id: int,
        solver_name: str,
        solver: BaseTourSolver
    ) -> BenchmarkResult:
        """Run a single solver on a single state."""
        size = state.board.size
        self._cancel.clear()

        # Use ThreadPoolExecutor to enforce timeout
        with ThreadPoolExecutor(max_workers=1) as executor:
            future = executor.submit(solver.solve, state.board, state.position, state.visited_count)
            try:
                path, stats = future.result(timeout=self.timeout_seconds)

                return BenchmarkResult(
                    state_id=state_id,
                    board_size=size,
                    algorithm=solver_name,
                    solved=stats.solved,
                    outcome=stats.outcome.value,
                    time_seconds=stats.time_seconds,
                    memory_bytes=stats.memory_bytes,
                    iterations=stats.iterations,
                    backtracks=stats.backtracks,
                    nodes_explored=stats.nodes_explored,
                    extra=dict(stats.extra)
                )
            except TimeoutError:
                logger.warning("%s timed out on %dx%d state %d", solver_name, size, size, state_id)
                self._cancel.set()
                return BenchmarkResult(
                    state_id=state_id,
                    board_size=size,
                    algorithm=solver_name,
                    solved=False,
                    outcome=SearchOutcome.INCONCLUSIVE.value,
                    time_seconds=self.timeout_seconds,
                    memory_bytes=0,
                    iterations=0,
                    backtracks=0,
                    nodes_explored=0,
                    extra={"error": "Timeout"}
                )

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics from benchmark results."""
        summary = {
            "total_states": len(self.results) // len(self.solvers) if self.solvers else 0,
            "solvers_tested": list(self.solvers.keys()),
            "board_sizes": list(self.board_sizes),
            "results_by_algorithm": {},
            "results_by_size": {}
        }

        # Group by algorithm
        for solver_name in self.solvers:
            solver_results = [r for r in self.results if r.algorithm == solver_name]
            if solver_results:
                solved = [r for r in solver_results if r.solved]
                times = [r.time_seconds for r in solver_results]
                memory = [r.memory_bytes for r in solver_results]

                summary["results_by_algorithm"][solver_name] = {
                    "accuracy": len(solved) / len(solver_results) * 100,
                    "avg_time_seconds": sum(times) / len(times),
                    "max_time_seconds": max(times),
                    "min_time_seconds": min(times),
                    "avg_memory_mb": sum(memory) / len(memory) / (1024 * 1024),
                    "avg_nodes_explored": sum(r.nodes_explored for r in solver_results) / len(solver_results),
                    "inconclusive": sum(1 for r in solver_results if r.outcome == SearchOutcome.INCONCLUSIVE.value),
                    "total_solved": len(solved),
                    "total_tested": len(solver_results)
                }

        # Group by board size
        for size in self.board_sizes:
            size_results = [r for r in self.results if r.board_size == size]
            if size_results:
                key = f"{size}x{size}"
                summary["results_by_size"][key] = {}

                for solver_name in self.solvers:
                    solver_size_results = [r for r in size_results if r.algorithm == solver_name]
                    if solver_size_results:
                        solved = [r for r in solver_size_results if r.solved]
                        times = [r.time_seconds for r in solver_size_results]

                        summary["results_by_size"][key][solver_name] = {
                            "accuracy": len(solved) / len(solver_size_results) * 100,
                            "avg_time_seconds": sum(times) / len(times),
                            "solved": len(solved),
                            "tested": len(solver_size_results)
                        }

        return summary

    def save_results(self, output_dir: str) -> None:
        """Save benchmark results and generated states to files."""
        os.makedirs(output_dir, exist_ok=True)

        # Save raw results as JSON
        results_file = os.path.join(output_dir, "benchmark_results.json")
        with open(results_file, "w") as f:
            json.dump([r.to_dict() for r in self.results], f, indent=2)

        # Save summary
        summary_file = os.path.join(output_dir, "benchmark_summary.json")
        with open(summary_file, "w") as f:
            json.dump(self.get_summary(), f, indent=2)

        # Save states by board size
        states_file = os.path.join(output_dir, "states.json")
        with open(states_file, "w") as f:
            json.dump(
                {f"{size}x{size}": [s.to_dict() for s in states] for size, states in self.states.items()},
                f,
                indent=2
            )

        logger.info("Results and states saved to %s", output_dir)
