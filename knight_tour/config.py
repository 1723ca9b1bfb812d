"""Solver configuration and construction."""

from __future__ import annotations
from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Optional
import json
import logging
import threading

from .solvers import (
    BaseTourSolver,
    BacktrackingSolver,
    WarnsdorffSolver,
    RandomizedWarnsdorffSolver
)

logger = logging.getLogger(__name__)

ALGORITHMS = ("warnsdorff", "backtracking", "randomized")


@dataclass
class SolverConfig:
    """
    Settings used to build a solver.

    Attributes:
        algorithm: One of "warnsdorff" (exhaustive, default),
                   "backtracking" (exhaustive, unordered) or
                   "randomized" (bounded retries, may give false negatives).
        timeout_seconds: Optional wall-clock budget per search.
        prune_parity: Colour-parity check before searching.
        max_attempts: Randomized solver only.
        max_nodes_per_attempt: Randomized solver only.
        seed: Randomized solver only.
        track_memory: Record peak memory with tracemalloc.
    """
    algorithm: str = "warnsdorff"
    timeout_seconds: Optional[float] = None
    prune_parity: bool = True
    max_attempts: int = 3
    max_nodes_per_attempt: Optional[int] = 10000
    seed: Optional[int] = None
    track_memory: bool = True

    def __post_init__(self):
        if self.algorithm not in ALGORITHMS:
            raise ValueError(
                f"Unknown algorithm {self.algorithm!r}, expected one of {', '.join(ALGORITHMS)}"
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> SolverConfig:
        """Build a config from a dict, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning("Ignoring unknown solver config keys: %s", ", ".join(sorted(unknown)))
        return cls(**{k: v for k, v in data.items() if k in known})

    @classmethod
    def from_json_file(cls, path: str) -> SolverConfig:
        """Load a config from a JSON file."""
        with open(path, "r") as f:
            data = json.load(f)
        logger.info("Loaded solver config from %s", path)
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def build_solver(self, cancel_event: Optional[threading.Event] = None) -> BaseTourSolver:
        """Create the solver described by this config."""
        if self.algorithm == "backtracking":
            return BacktrackingSolver(
                timeout_seconds=self.timeout_seconds,
                cancel_event=cancel_event,
                track_memory=self.track_memory
            )
        if self.algorithm == "randomized":
            return RandomizedWarnsdorffSolver(
                max_attempts=self.max_attempts,
                max_nodes_per_attempt=self.max_nodes_per_attempt,
                seed=self.seed,
                prune_parity=self.prune_parity,
                timeout_seconds=self.timeout_seconds,
                cancel_event=cancel_event,
                track_memory=self.track_memory
            )
        return WarnsdorffSolver(
            prune_parity=self.prune_parity,
            timeout_seconds=self.timeout_seconds,
            cancel_event=cancel_event,
            track_memory=self.track_memory
        )
