"""
One- and two-ply tactical checks used by both engines: immediate wins,
double threats and short-line threat counting.

All helpers place pieces on `board` temporarily and restore it before
returning.
"""

from typing import Iterable, Optional

import numpy as np

from c4_engines.game.board import ROWS, COLS, Cell, DIRECTIONS, drop_row, detect_win, valid_columns


def is_winning_move(board: np.ndarray, col: int, player: int) -> bool:
    row = drop_row(board, col)
    if row is None:
        return False
    board[row, col] = player
    won = detect_win(board, row, col) is not None
    board[row, col] = Cell.EMPTY
    return won


def find_immediate_win(board: np.ndarray, player: int, columns: Optional[Iterable[int]] = None) -> Optional[int]:
    """
    First column in `columns` (ascending valid columns by default) where
    `player` completes four in a row.
    """
    if columns is None:
        columns = valid_columns(board)
    for col in columns:
        if is_winning_move(board, col, player):
            return col
    return None


def count_winning_replies(board: np.ndarray, player: int, limit: Optional[int] = None) -> int:
    """Number of columns where `player` would win on the next move."""
    count = 0
    for col in valid_columns(board):
        if is_winning_move(board, col, player):
            count += 1
            if limit is not None and count >= limit:
                break
    return count


def find_double_threat_move(board: np.ndarray, player: int) -> Optional[int]:
    """
    First column (ascending) after which `player` has two or more distinct
    winning follow-ups.
    """
    for col in valid_columns(board):
        row = drop_row(board, col)
        board[row, col] = player
        threats = count_winning_replies(board, player, limit=2)
        board[row, col] = Cell.EMPTY
        if threats >= 2:
            return col
    return None


def double_threat_potential(board: np.ndarray, col: int, player: int) -> int:
    """Winning follow-ups created by playing `col`, capped at 2."""
    row = drop_row(board, col)
    if row is None:
        return 0
    board[row, col] = player
    threats = count_winning_replies(board, player, limit=2)
    board[row, col] = Cell.EMPTY
    return threats


def count_potential_threats(board: np.ndarray, col: int, player: int, length: int) -> int:
    """
    Number of directions in which a piece dropped into `col` would sit in a
    run of at least `length` consecutive `player` pieces.
    """
    row = drop_row(board, col)
    if row is None:
        return 0

    threats = 0
    for first, second in DIRECTIONS:
        consecutive = 1
        for dr, dc in (first, second):
            for i in range(1, 4):
                r, c = row + dr * i, col + dc * i
                if 0 <= r < ROWS and 0 <= c < COLS and board[r, c] == player:
                    consecutive += 1
                else:
                    break
        if consecutive >= length:
            threats += 1
    return threats
