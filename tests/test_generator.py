"""Unit tests for the game state generator and starting points."""

import pytest
from knight_tour.core.board import Position
from knight_tour.core.starting_points import valid_starting_points, is_valid_starting_point
from knight_tour.core.validator import is_knight_move, validate_tour_path
from knight_tour.generator import GameStateGenerator
from knight_tour.solvers import WarnsdorffSolver


class TestGameStateGenerator:
    """Tests for GameStateGenerator class."""

    def test_random_walk_is_legal(self):
        """Every step of a generated walk is a knight move onto a new square."""
        generator = GameStateGenerator(size=6, seed=42)
        state = generator.generate(moves=10)

        assert state.path[-1] == state.position
        assert state.visited_count == len(state.path)
        assert state.board.count_visited() == state.visited_count
        assert len(set(state.path)) == len(state.path)
        for prev, nxt in zip(state.path, state.path[1:]):
            assert is_knight_move(prev, nxt)

    def test_walk_stops_when_stuck(self):
        """On 3x3 the knight can make at most eight moves."""
        generator = GameStateGenerator(size=3, seed=1)
        state = generator.generate(moves=50, start=(0, 0))
        assert state.visited_count <= 9

    def test_walk_from_centre_of_3x3(self):
        generator = GameStateGenerator(size=3, seed=1)
        state = generator.generate(moves=5, start=(1, 1))
        assert state.path == [Position(1, 1)]

    def test_seed_is_reproducible(self):
        state1 = GameStateGenerator(size=8, seed=123).generate(moves=20)
        state2 = GameStateGenerator(size=8, seed=123).generate(moves=20)
        assert state1.path == state2.path

    def test_generate_batch(self):
        """Test batch generation."""
        states = GameStateGenerator(size=5, seed=42).generate_batch(3, moves=4)
        assert len(states) == 3

    def test_generate_with_solution(self):
        """The generated state is a prefix of a valid full tour."""
        generator = GameStateGenerator(size=6, seed=7)
        state, tour = generator.generate_with_solution(moves=5)

        assert state.visited_count == 6
        assert state.path == tour[:6]

        start_board = state.board.copy()
        for pos in tour[1:6]:
            start_board.unvisit(*pos)
        assert validate_tour_path(start_board, tour[0], tour)

        assert WarnsdorffSolver().is_tour_possible(state.board, state.position, state.visited_count)

    def test_generate_with_solution_impossible_board(self):
        with pytest.raises(ValueError):
            GameStateGenerator(size=3, seed=1).generate_with_solution(moves=2)

    def test_state_to_dict(self):
        state = GameStateGenerator(size=5, seed=42).generate(moves=2)
        data = state.to_dict()
        assert data["boardSize"] == 5
        assert data["visitedCount"] == state.visited_count
        assert data["knightPos"] == state.position.to_dict()


class TestStartingPoints:
    """Tests for the valid starting point table."""

    def test_5x5(self):
        points = valid_starting_points(5)
        assert len(points) == 13
        assert all((p.row + p.col) % 2 == 0 for p in points)

    def test_3x3_has_none(self):
        assert valid_starting_points(3) == []

    def test_is_valid_starting_point(self):
        assert is_valid_starting_point(5, (0, 0))
        assert not is_valid_starting_point(5, (0, 1))
        assert not is_valid_starting_point(5, (5, 5))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
