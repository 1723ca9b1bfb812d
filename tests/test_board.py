"""Unit tests for the Knight's Tour board and validation."""

import pytest
import numpy as np
from knight_tour.core.board import KnightBoard, Position, KNIGHT_MOVES, knight_neighbors
from knight_tour.core.validator import (
    is_knight_move,
    parity_feasible,
    validate_tour_path,
    count_tours
)
from knight_tour.errors import InvalidBoardError


class TestKnightBoard:
    """Tests for KnightBoard class."""

    def test_create_empty_board(self):
        """Test creating an empty 8x8 board."""
        board = KnightBoard()
        assert board.size == 8
        assert board.count_visited() == 0
        assert board.count_unvisited() == 64

    def test_invalid_size(self):
        with pytest.raises(InvalidBoardError):
            KnightBoard(0)

    def test_visit_and_unvisit(self):
        """Test marking and clearing squares."""
        board = KnightBoard(5)
        board.visit(2, 3)
        assert board.is_visited(2, 3)
        assert board.count_visited() == 1

        board.unvisit(2, 3)
        assert not board.is_visited(2, 3)

    def test_move_deltas(self):
        assert len(KNIGHT_MOVES) == 8
        assert len(set(KNIGHT_MOVES)) == 8
        for dr, dc in KNIGHT_MOVES:
            assert {abs(dr), abs(dc)} == {1, 2}

    def test_neighbors_respect_bounds(self):
        """Corner squares have two knight targets, centre of 5x5 has eight."""
        board = KnightBoard(5)
        assert set(board.neighbors(0, 0)) == {Position(1, 2), Position(2, 1)}
        assert len(board.neighbors(2, 2)) == 8

    def test_neighbor_table_is_cached(self):
        assert knight_neighbors(6) is knight_neighbors(6)

    def test_onward_moves_and_degree(self):
        """Visited squares are excluded from onward moves."""
        board = KnightBoard(5)
        board.visit(1, 2)
        assert board.onward_moves(0, 0) == [Position(2, 1)]
        assert board.degree(0, 0) == 1

    def test_degree_on_3x3_centre(self):
        board = KnightBoard(3)
        assert board.degree(1, 1) == 0

    def test_copy(self):
        """Test board copy."""
        board = KnightBoard(6)
        board.visit(4, 4)
        copy = board.copy()

        assert copy.is_visited(4, 4)

        # Modify copy, original should be unchanged
        copy.unvisit(4, 4)
        assert board.is_visited(4, 4)

    def test_from_string(self):
        """Test creating board from string."""
        board = KnightBoard.from_string("x.... ..... ..... ..... ....1")
        assert board.size == 5
        assert board.is_visited(0, 0)
        assert board.is_visited(4, 4)
        assert board.count_visited() == 2

    def test_from_string_rejects_bad_length(self):
        with pytest.raises(InvalidBoardError):
            KnightBoard.from_string("0" * 24, size=5)

    def test_to_string_round_trip(self):
        board = KnightBoard(5)
        board.visit(0, 0)
        s = board.to_string()
        assert len(s) == 25
        assert s[0] == '1'
        assert KnightBoard.from_string(s) == board

    def test_from_2d_list(self):
        board = KnightBoard.from_2d_list([[1, 0, 0], [0, 0, 0], [0, 0, 2]])
        assert board.size == 3
        assert board.is_visited(0, 0)
        assert board.is_visited(2, 2)

    def test_from_2d_list_must_be_square(self):
        with pytest.raises(InvalidBoardError):
            KnightBoard.from_2d_list([[0, 0, 0], [0, 0, 0]])

    def test_grid_values_checked(self):
        with pytest.raises(InvalidBoardError):
            KnightBoard(2, np.array([[0, 3], [0, 0]]))

    def test_from_path(self):
        board = KnightBoard.from_path(5, [(0, 0), (1, 2), (2, 4)])
        assert board.count_visited() == 3
        with pytest.raises(InvalidBoardError):
            KnightBoard.from_path(5, [(0, 5)])

    def test_unvisited_cells(self):
        board = KnightBoard.from_string("1110")
        assert board.get_unvisited_cells() == [Position(1, 1)]


class TestValidator:
    """Tests for validation utilities."""

    def test_is_knight_move(self):
        assert is_knight_move((0, 0), (1, 2))
        assert is_knight_move((3, 3), (1, 2))
        assert not is_knight_move((0, 0), (1, 1))
        assert not is_knight_move((0, 0), (0, 0))

    def test_parity_on_5x5(self):
        """On 5x5 only squares of the majority colour can start a tour."""
        board = KnightBoard(5)
        board.visit(0, 0)
        assert parity_feasible(board, (0, 0))

        board = KnightBoard(5)
        board.visit(0, 1)
        assert not parity_feasible(board, (0, 1))

    def test_parity_on_even_board(self):
        board = KnightBoard(8)
        board.visit(3, 4)
        assert parity_feasible(board, (3, 4))

    def test_validate_tour_path(self):
        """A hand-checked 5x5 tail: three squares left, visited in order."""
        path = [(0, 0), (1, 2), (2, 4)]
        board = KnightBoard(3)
        assert not validate_tour_path(board, (0, 0), path)

        board = KnightBoard(5)
        for r in range(5):
            for c in range(5):
                if (r, c) not in ((1, 2), (2, 4)):
                    board.visit(r, c)
        assert validate_tour_path(board, (0, 0), path)

    def test_validate_rejects_bad_paths(self):
        board = KnightBoard(5)
        for r in range(5):
            for c in range(5):
                if (r, c) not in ((1, 2), (2, 4)):
                    board.visit(r, c)

        # Wrong start
        assert not validate_tour_path(board, (2, 1), [(0, 0), (1, 2), (2, 4)])
        # Not a knight move
        assert not validate_tour_path(board, (0, 0), [(0, 0), (2, 4), (1, 2)])
        # Repeated square
        assert not validate_tour_path(board, (0, 0), [(0, 0), (1, 2), (0, 0)])
        # Enters a visited square
        assert not validate_tour_path(board, (0, 0), [(0, 0), (2, 1), (0, 2)])
        # Too short
        assert not validate_tour_path(board, (0, 0), [(0, 0), (1, 2)])
        # Empty
        assert not validate_tour_path(board, (0, 0), [])

    def test_count_tours_small(self):
        assert count_tours(KnightBoard(3), (0, 0), limit=10) == 0
        assert count_tours(KnightBoard(1), (0, 0)) == 1

    def test_count_tours_parity(self):
        assert count_tours(KnightBoard(5), (0, 1), limit=1) == 0

    def test_count_tours_single_completion(self):
        board = KnightBoard(5)
        for r in range(5):
            for c in range(5):
                if (r, c) not in ((1, 2), (2, 4)):
                    board.visit(r, c)
        assert count_tours(board, (0, 0), limit=5) == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
