"""Generator module for creating Knight's Tour game states."""

from .generator import GameStateGenerator, GameState

__all__ = ["GameStateGenerator", "GameState"]
