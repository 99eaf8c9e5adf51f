"""
Move ordering heuristics.

Good move ordering is critical for alpha-beta pruning efficiency, and the
MCTS engine uses its own ordering to decide which untried moves to expand
first. Ordering is recomputed from each node's own board; nothing is
memoized across nodes.

Minimax ordering (high to low influence):
1. Immediate threats (a column that wins for either side)
2. Adjacency to existing pieces
3. Center preference

MCTS ordering additionally rewards double-threat potential and weighs own
pieces above opponent pieces around the landing cell.
"""

import numpy as np

from c4_engines.game.board import ROWS, COLS, Cell, DIRECTIONS, drop_row, opponent, valid_columns
from c4_engines.engine.tactics import (
    is_winning_move,
    count_potential_threats,
    double_threat_potential,
)

CENTER_ORDER = [3, 2, 4, 1, 5, 0, 6]

MINIMAX_CENTER_BONUS = {3: 20, 2: 10, 4: 10, 1: 5, 5: 5}
MCTS_CENTER_BONUS = {3: 50, 2: 25, 4: 25, 1: 12, 5: 12, 0: 5, 6: 5}
ROLLOUT_CENTER_BONUS = {3: 30, 2: 15, 4: 15, 1: 8, 5: 8}


def center_priority_move(board: np.ndarray) -> int:
    """First available column in center-out order."""
    for col in CENTER_ORDER:
        if drop_row(board, col) is not None:
            return col
    return valid_columns(board)[0]


def _sorted_by_score(columns: list[int], scores: dict[int, float]) -> list[int]:
    # Stable: equal scores keep ascending column order.
    return sorted(columns, key=lambda col: -scores[col])


# ---------------------------------------------------------------------------
# Minimax
# ---------------------------------------------------------------------------

def immediate_threat_score(board: np.ndarray, col: int) -> int:
    """
    100 if PLAYER_A would win by playing `col`, 80 if PLAYER_B would.

    Uses fixed player identities rather than the side to move.
    """
    if is_winning_move(board, col, Cell.PLAYER_A):
        return 100
    if is_winning_move(board, col, Cell.PLAYER_B):
        return 80
    return 0


def adjacency_score(board: np.ndarray, col: int) -> int:
    """5 points per occupied cell directly connected to the landing cell."""
    row = drop_row(board, col)
    if row is None:
        return 0

    score = 0
    for first, second in DIRECTIONS:
        connected = 0
        for dr, dc in (first, second):
            for i in range(1, 4):
                r, c = row + dr * i, col + dc * i
                if 0 <= r < ROWS and 0 <= c < COLS and board[r, c] != Cell.EMPTY:
                    connected += 1
                else:
                    break
        score += connected * 5
    return score


def order_moves_minimax(board: np.ndarray) -> list[int]:
    """
    Order valid columns for alpha-beta search.

    Args:
        board: Current board state

    Returns:
        List of column indices sorted by priority (best first)
    """
    columns = valid_columns(board)
    scores = {}
    for col in columns:
        score = MINIMAX_CENTER_BONUS.get(col, 0)
        score += immediate_threat_score(board, col) * 50
        score += adjacency_score(board, col)
        scores[col] = score
    return _sorted_by_score(columns, scores)


# ---------------------------------------------------------------------------
# MCTS
# ---------------------------------------------------------------------------

def mover_threat_score(board: np.ndarray, col: int, player: int) -> int:
    opp = opponent(player)
    if is_winning_move(board, col, player):
        return 200
    if is_winning_move(board, col, opp):
        return 150
    score = count_potential_threats(board, col, player, 3) * 15
    score -= count_potential_threats(board, col, opp, 3) * 12
    return score


def positional_advantage(board: np.ndarray, col: int, player: int) -> int:
    """Own pieces (+8) and opponent pieces (-6) within three cells of the landing cell."""
    row = drop_row(board, col)
    if row is None:
        return 0

    opp = opponent(player)
    score = 0
    for first, second in DIRECTIONS:
        own = 0
        theirs = 0
        for dr, dc in (first, second):
            for i in range(1, 4):
                r, c = row + dr * i, col + dc * i
                if 0 <= r < ROWS and 0 <= c < COLS:
                    if board[r, c] == player:
                        own += 1
                    elif board[r, c] == opp:
                        theirs += 1
        score += own * 8 - theirs * 6
    return score


def order_moves_mcts(board: np.ndarray, player: int) -> list[int]:
    """Order valid columns for expansion from `player`'s point of view, best first."""
    columns = valid_columns(board)
    scores = {}
    for col in columns:
        score = MCTS_CENTER_BONUS[col]
        score += mover_threat_score(board, col, player) * 100
        score += double_threat_potential(board, col, player) * 75
        score += positional_advantage(board, col, player) * 20
        scores[col] = score
    return _sorted_by_score(columns, scores)


def rollout_move(board: np.ndarray, player: int, columns: list[int]) -> int:
    """
    Cheap playout policy: center bias plus two- and three-in-a-row
    threat counts.

    The piece is dropped first and the threats are counted for the next
    free cell of the same column, on top of it.
    """
    best_col = columns[0]
    best_score = None
    for col in columns:
        row = drop_row(board, col)
        if row is None:
            continue

        score = ROLLOUT_CENTER_BONUS.get(col, 0)
        board[row, col] = player
        score += count_potential_threats(board, col, player, 2) * 10
        score += count_potential_threats(board, col, player, 3) * 25
        board[row, col] = Cell.EMPTY

        if best_score is None or score > best_score:
            best_col = col
            best_score = score
    return best_col
