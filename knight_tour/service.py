"""
Request/response front end for the tour solver.

A caller (UI event loop, web handler, ...) sends a request dict such as

    {"type": "GET_HINT", "board": [[1, 0, ...], ...],
     "knightPos": {"row": 0, "col": 0}, "visitedCount": 1, "boardSize": 5}

and receives {"type": "GET_HINT_RESULT", "result": {"row": 1, "col": 2}}.
Failures come back as {"type": ..., "result": None, "error": "..."}.

`TourWorker` runs requests on a background thread pool so a caller can keep
its own thread responsive while a search runs.
"""

from __future__ import annotations
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Union
import logging

from .config import SolverConfig
from .core.board import KnightBoard, Position
from .errors import InvalidBoardError, InvalidStartError, KnightTourError

logger = logging.getLogger(__name__)


class RequestType(Enum):
    GET_HINT = "GET_HINT"
    CHECK_POSSIBLE = "CHECK_POSSIBLE"


@dataclass
class TourRequest:
    """A single query against the solver."""
    type: str
    board: List[List[int]]
    knight_pos: Optional[Position] = None
    visited_count: Optional[int] = None
    board_size: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TourRequest:
        """
        Build a request from a message dict.

        Accepts camelCase keys (knightPos, visitedCount, boardSize) as well
        as their snake_case forms. knightPos may be {"row", "col"} or a
        two-item sequence.

        Raises:
            InvalidStartError: If knightPos is present but malformed.
        """
        raw = data.get("knightPos", data.get("knight_pos"))
        try:
            if isinstance(raw, dict):
                pos = Position(int(raw["row"]), int(raw["col"]))
            elif raw is not None:
                pos = Position(*(int(v) for v in raw))
            else:
                pos = None
        except (KeyError, TypeError, ValueError):
            raise InvalidStartError(f"Malformed knightPos: {raw!r}")

        return cls(
            type=data.get("type", ""),
            board=data.get("board") or [],
            knight_pos=pos,
            visited_count=data.get("visitedCount", data.get("visited_count")),
            board_size=data.get("boardSize", data.get("board_size"))
        )

    def build_board(self) -> KnightBoard:
        board = KnightBoard.from_2d_list(self.board)
        if self.board_size is not None and board.size != self.board_size:
            raise InvalidBoardError(
                f"boardSize is {self.board_size} but the board is {board.size}x{board.size}"
            )
        return board


def _response(request_type: str, result: Any, error: Optional[str] = None) -> Dict[str, Any]:
    response = {"type": f"{request_type}_RESULT", "result": result}
    if error is not None:
        response["error"] = error
    return response


def handle_request(
    request: Union[TourRequest, Dict[str, Any]],
    config: Optional[SolverConfig] = None
) -> Dict[str, Any]:
    """
    Answer one GET_HINT or CHECK_POSSIBLE request.

    Invalid input never raises; it is reported in the response's "error".

    Args:
        request: A TourRequest or a raw message dict.
        config: Solver settings (default: exhaustive Warnsdorff search).

    Returns:
        Response dict with "type", "result" and, on failure, "error".
    """
    config = config or SolverConfig(track_memory=False)
    request_type_name = request.get("type", "") if isinstance(request, dict) else request.type

    try:
        if isinstance(request, dict):
            request = TourRequest.from_dict(request)
        if request.knight_pos is None:
            raise InvalidStartError()

        try:
            request_type = RequestType(request.type)
        except ValueError:
            logger.warning("Unknown request type: %s", request.type)
            return _response(request.type, None, f"Unknown request type: {request.type}")

        board = request.build_board()
        solver = config.build_solver()

        if request_type is RequestType.GET_HINT:
            hint = solver.get_hint(board, request.knight_pos, request.visited_count)
            result = hint.to_dict() if hint is not None else None
        else:
            result = solver.is_tour_possible(board, request.knight_pos, request.visited_count)

        logger.debug("%s -> %s (%s)", request.type, result, solver.stats.outcome.value)
        return _response(request.type, result)

    except (KnightTourError, ValueError) as e:
        logger.info("Rejected %s request: %s", request_type_name, e)
        return _response(request_type_name, None, str(e))


class TourWorker:
    """
    Runs solver requests on a background thread pool.

    Each request gets its own board copy and solver instance, so requests
    can run in parallel without coordination. Memory tracking is turned
    off when more than one worker thread is used.

    Usage:
        with TourWorker() as worker:
            future = worker.submit({"type": "CHECK_POSSIBLE", ...})
            response = future.result()
    """

    def __init__(self, max_workers: int = 1, config: Optional[SolverConfig] = None):
        config = config or SolverConfig(track_memory=False)
        if max_workers > 1 and config.track_memory:
            # tracemalloc is process-wide; overlapping runs would clobber each other
            logger.warning("Memory tracking disabled for a %d-thread worker", max_workers)
            config = replace(config, track_memory=False)
        self.config = config
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="knight-tour"
        )

    def submit(self, request: Union[TourRequest, Dict[str, Any]]) -> Future:
        """Queue a request; the future resolves to its response dict."""
        return self._executor.submit(handle_request, request, self.config)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> TourWorker:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()
