"""
Unit tests for move ordering heuristics.
"""

import numpy as np

from c4_engines.game.board import Cell, create_board, parse_board
from c4_engines.engine.move_ordering import (
    CENTER_ORDER,
    center_priority_move,
    immediate_threat_score,
    adjacency_score,
    order_moves_minimax,
    order_moves_mcts,
    rollout_move,
)


A = Cell.PLAYER_A
B = Cell.PLAYER_B


class TestMinimaxOrdering:

    def test_empty_board_center_first(self):
        assert order_moves_minimax(create_board()) == CENTER_ORDER

    def test_winning_column_first(self):
        board = parse_board([
            ".......",
            ".......",
            ".......",
            ".......",
            "....O..",
            "XXX.OO.",
        ])
        assert order_moves_minimax(board)[0] == 3

    def test_fixed_player_threat_scores(self):
        board = parse_board([
            ".......",
            ".......",
            ".......",
            ".......",
            ".......",
            "OOO....",
        ])
        assert immediate_threat_score(board, 3) == 80
        board[5, :3] = A
        assert immediate_threat_score(board, 3) == 100

    def test_adjacency(self):
        board = create_board()
        assert adjacency_score(board, 3) == 0
        board[5, 3] = A
        # Landing on top of one piece
        assert adjacency_score(board, 3) == 5

    def test_full_columns_excluded(self):
        board = create_board()
        board[:, 3] = B
        moves = order_moves_minimax(board)
        assert 3 not in moves
        assert sorted(moves) == [0, 1, 2, 4, 5, 6]


class TestMCTSOrdering:

    def test_empty_board_center_first(self):
        assert order_moves_mcts(create_board(), A) == CENTER_ORDER

    def test_winning_column_first(self):
        board = parse_board([
            ".......",
            ".......",
            ".......",
            ".......",
            ".......",
            "OOO....",
        ])
        # Completing the line for B, or blocking it for A
        assert order_moves_mcts(board, B)[0] == 3
        assert order_moves_mcts(board, A)[0] == 3

    def test_does_not_mutate(self):
        board = parse_board([
            ".......",
            ".......",
            ".......",
            "...X...",
            "..OO...",
            ".XXO...",
        ])
        before = board.copy()
        order_moves_mcts(board, A)
        assert np.array_equal(board, before)


class TestFallbackAndRollout:

    def test_center_priority(self):
        board = create_board()
        assert center_priority_move(board) == 3
        board[:, 3] = A
        assert center_priority_move(board) == 2

    def test_rollout_prefers_center(self):
        board = create_board()
        assert rollout_move(board, A, list(range(7))) == 3

    def test_rollout_counts_above_dropped_piece(self):
        board = parse_board([
            ".......",
            ".......",
            ".......",
            ".......",
            ".......",
            "XX.....",
        ])
        before = board.copy()
        # Column 1 stacks on X and scores a vertical three from the cell above:
        # 8 + 10 + 25 = 43, against 40 for the center column
        assert rollout_move(board, A, list(range(7))) == 1
        assert rollout_move(board, A, [2, 3]) == 3
        assert rollout_move(board, B, list(range(7))) == 3
        assert np.array_equal(board, before)

    def test_rollout_skips_full_columns(self):
        board = create_board()
        board[:, 3] = B
        assert rollout_move(board, A, [3, 2]) == 2
