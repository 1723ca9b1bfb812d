"""Core module for Knight's Tour board representation and validation."""

from .board import KnightBoard, Position, KNIGHT_MOVES, UNVISITED, VISITED
from .validator import is_knight_move, parity_feasible, validate_tour_path, count_tours

__all__ = [
    "KnightBoard",
    "Position",
    "KNIGHT_MOVES",
    "UNVISITED",
    "VISITED",
    "is_knight_move",
    "parity_feasible",
    "validate_tour_path",
    "count_tours"
]
