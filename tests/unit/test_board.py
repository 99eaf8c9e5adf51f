"""
Unit tests for board primitives.

Tests verify:
1. Gravity placement and full-column rejection
2. Win detection walks outward from the last placed piece
3. Draw detection and board validation
"""

import numpy as np
import pytest

from c4_engines.game.board import (
    ROWS,
    COLS,
    Cell,
    create_board,
    as_board,
    as_player,
    clone_board,
    opponent,
    valid_columns,
    play_move,
    detect_win,
    is_draw,
    board_key,
    parse_board,
    format_board,
)
from c4_engines.game.connect_four import ConnectFour


A = Cell.PLAYER_A
B = Cell.PLAYER_B


class TestPlacement:
    """Test gravity and column handling."""

    def test_empty_board(self):
        board = create_board()
        assert board.shape == (ROWS, COLS)
        assert board.dtype == np.int8
        assert not board.any()

    def test_gravity(self):
        """Pieces stack from the bottom row upward."""
        board = create_board()
        assert play_move(board, 3, A) == 5
        assert play_move(board, 3, B) == 4
        assert board[5, 3] == A
        assert board[4, 3] == B

    def test_full_column_raises(self):
        board = create_board()
        for i in range(ROWS):
            play_move(board, 0, A if i % 2 == 0 else B)

        assert 0 not in valid_columns(board)
        with pytest.raises(ValueError):
            play_move(board, 0, A)

    def test_valid_columns_ascending(self):
        board = create_board()
        board[:, 4] = A
        assert valid_columns(board) == [0, 1, 2, 3, 5, 6]

    def test_clone_is_independent(self):
        board = create_board()
        copy = clone_board(board)
        play_move(copy, 2, A)
        assert not board.any()
        assert board_key(board) != board_key(copy)
        assert board_key(board) == board_key(create_board())

    def test_opponent(self):
        assert opponent(A) == B
        assert opponent(B) == A


class TestWinDetection:
    """Test detect_win in all four directions."""

    def test_horizontal(self):
        board = create_board()
        for col in range(4):
            play_move(board, col, A)
        line = detect_win(board, 5, 3)
        assert line is not None
        assert sorted(line) == [(5, 0), (5, 1), (5, 2), (5, 3)]

    def test_three_is_not_a_win(self):
        board = create_board()
        for col in range(3):
            play_move(board, col, A)
        assert detect_win(board, 5, 2) is None

    def test_vertical(self):
        board = create_board()
        for _ in range(4):
            row = play_move(board, 6, B)
        assert detect_win(board, row, 6) is not None

    def test_diagonal(self):
        board = parse_board([
            ".......",
            ".......",
            "...X...",
            "..XO...",
            ".XOO...",
            "XOOO...",
        ])
        assert detect_win(board, 2, 3) is not None
        assert detect_win(board, 5, 0) is not None

    def test_anti_diagonal(self):
        board = parse_board([
            ".......",
            ".......",
            "O......",
            "XO.....",
            "XXO....",
            "XXXO...",
        ])
        assert detect_win(board, 5, 3) is not None

    def test_empty_cell(self):
        assert detect_win(create_board(), 5, 0) is None

    def test_mixed_line(self):
        board = parse_board([
            ".......",
            ".......",
            ".......",
            ".......",
            ".......",
            "XXOX...",
        ])
        assert detect_win(board, 5, 3) is None


class TestDrawAndValidation:
    """Test is_draw, as_board and parse_board."""

    def test_draw_when_top_row_full(self):
        board = np.full((ROWS, COLS), A, dtype=np.int8)
        assert is_draw(board)
        assert not is_draw(create_board())

    def test_one_open_cell_is_not_draw(self):
        board = np.full((ROWS, COLS), B, dtype=np.int8)
        board[0, 4] = Cell.EMPTY
        assert not is_draw(board)
        assert valid_columns(board) == [4]

    def test_rejects_wrong_shape(self):
        with pytest.raises(ValueError):
            as_board(np.zeros((5, 7)))

    def test_rejects_unknown_cell(self):
        board = [[0] * COLS for _ in range(ROWS)]
        board[5][0] = 3
        with pytest.raises(ValueError):
            as_board(board)

    def test_as_board_copies(self):
        board = create_board()
        converted = as_board(board)
        converted[5, 0] = A
        assert board[5, 0] == Cell.EMPTY

    def test_as_player(self):
        assert as_player(1) == A
        with pytest.raises(ValueError):
            as_player(0)

    def test_parse_and_format(self):
        rows = [
            ".......",
            ".......",
            ".......",
            ".......",
            "...O...",
            "..XX...",
        ]
        board = parse_board(rows)
        assert board[5, 2] == A
        assert board[4, 3] == B
        assert format_board(board).splitlines()[-1] == "|.|.|X|X|.|.|.|"

    def test_parse_rejects_bad_symbol(self):
        with pytest.raises(ValueError):
            parse_board(["......."] * 5 + ["..Z...."])


class TestConnectFourGame:
    """Test the ConnectFour rules wrapper."""

    def test_next_state_does_not_mutate(self):
        game = ConnectFour()
        state = game.get_initial_state()
        new_state, row = game.get_next_state(state, 3, A)
        assert row == 5
        assert not state.any()
        assert new_state[5, 3] == A

    def test_valid_moves_mask(self):
        game = ConnectFour()
        state = game.get_initial_state()
        state[:, 0] = B
        assert game.get_valid_moves(state).tolist() == [0, 1, 1, 1, 1, 1, 1]

    def test_value_and_terminated(self):
        game = ConnectFour()
        state = game.get_initial_state()
        for col in range(3):
            state, row = game.get_next_state(state, col, A)
            assert game.get_value_and_terminated(state, row, col) == (0, False)

        state, row = game.get_next_state(state, 3, A)
        assert game.get_value_and_terminated(state, row, 3) == (1, True)
