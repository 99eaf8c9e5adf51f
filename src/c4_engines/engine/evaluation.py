"""
Static evaluation shared by the minimax and MCTS engines.

Every possible line of four cells (a "window") is scored from one player's
point of view using a small payoff table:

    player 4           decisive
    player 3 + 1 empty strong positive
    player 2 + 2 empty mild positive
    opponent 3 + 1     negative (blocking weighs slightly less than advancing)
    opponent 2 + 2     mildly negative

The two engines use different constants, kept as separate tables below.
"""

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from c4_engines.game.board import (
    ROWS, COLS, WIN_LENGTH, Cell, opponent, drop_row, valid_columns,
)


@dataclass(frozen=True)
class WindowWeights:
    four: int
    three: int
    two: int
    opp_three: int
    opp_two: int


MINIMAX_WEIGHTS = WindowWeights(four=1000, three=50, two=10, opp_three=-40, opp_two=-5)
MCTS_WEIGHTS = WindowWeights(four=10000, three=100, two=10, opp_three=-80, opp_two=-5)

CENTER_COLUMNS = (2, 3, 4)
CENTER_PIECE_SCORE = 3
MOBILITY_WEIGHT = 2


def _build_windows() -> np.ndarray:
    """Flat cell indices of every horizontal, vertical and diagonal window."""
    windows = []
    for row in range(ROWS):
        for col in range(COLS):
            for dr, dc in ((0, 1), (1, 0), (1, 1), (1, -1)):
                end_r = row + dr * (WIN_LENGTH - 1)
                end_c = col + dc * (WIN_LENGTH - 1)
                if 0 <= end_r < ROWS and 0 <= end_c < COLS:
                    windows.append([(row + dr * i) * COLS + col + dc * i for i in range(WIN_LENGTH)])
    return np.array(windows, dtype=np.intp)


WINDOWS = _build_windows()  # (69, 4)


def score_window(window: Sequence[int], player: int, opp: int, weights: WindowWeights) -> int:
    """Score a single four-cell window for `player`."""
    player_count = sum(1 for cell in window if cell == player)
    opponent_count = sum(1 for cell in window if cell == opp)
    empty_count = len(window) - player_count - opponent_count

    score = 0
    if player_count == 4:
        score += weights.four
    elif player_count == 3 and empty_count == 1:
        score += weights.three
    elif player_count == 2 and empty_count == 2:
        score += weights.two

    if opponent_count == 3 and empty_count == 1:
        score += weights.opp_three
    elif opponent_count == 2 and empty_count == 2:
        score += weights.opp_two

    return score


def evaluate_lines(board: np.ndarray, player: int, weights: WindowWeights) -> int:
    """Sum of score_window over all 69 windows of the board."""
    cells = board.ravel()[WINDOWS]
    mine = (cells == player).sum(axis=1)
    theirs = (cells == opponent(player)).sum(axis=1)
    empty = WIN_LENGTH - mine - theirs

    score = weights.four * np.count_nonzero(mine == 4)
    score += weights.three * np.count_nonzero((mine == 3) & (empty == 1))
    score += weights.two * np.count_nonzero((mine == 2) & (empty == 2))
    score += weights.opp_three * np.count_nonzero((theirs == 3) & (empty == 1))
    score += weights.opp_two * np.count_nonzero((theirs == 2) & (empty == 2))
    return int(score)


def evaluate_center_control(board: np.ndarray, player: int) -> int:
    center = board[:, CENTER_COLUMNS]
    mine = np.count_nonzero(center == player)
    theirs = np.count_nonzero(center == opponent(player))
    return CENTER_PIECE_SCORE * (mine - theirs)


def evaluate_mobility(board: np.ndarray, player: int) -> float:
    """
    Compare the mover's move count with the opponent's average mobility
    after each of the opponent's replies.
    """
    opp = opponent(player)
    moves = valid_columns(board)
    if not moves:
        return 0.0

    opponent_mobility = 0
    for col in moves:
        row = drop_row(board, col)
        board[row, col] = opp
        opponent_mobility += len(valid_columns(board))
        board[row, col] = Cell.EMPTY

    average = opponent_mobility / len(moves)
    return (len(moves) - average) * MOBILITY_WEIGHT


def evaluate_board_advanced(board: np.ndarray, player: int) -> float:
    """Leaf evaluation for minimax: lines + center control + mobility."""
    score = evaluate_lines(board, player, MINIMAX_WEIGHTS)
    score += evaluate_center_control(board, player)
    score += evaluate_mobility(board, player)
    return score


def heuristic_score(board: np.ndarray, player: int) -> int:
    """Static heuristic used by MCTS nodes and rollouts."""
    return evaluate_lines(board, player, MCTS_WEIGHTS)
