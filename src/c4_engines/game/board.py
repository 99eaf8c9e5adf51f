"""
Board primitives shared by both search engines.

Board layout:
- numpy array of shape (6, 7), dtype int8
- Row 0 is the TOP of the board, row 5 is the BOTTOM
- Values: Cell.EMPTY (0), Cell.PLAYER_A (1), Cell.PLAYER_B (2)

Gravity invariant: the occupied cells of a column are always contiguous from
the bottom row upward.
"""

from enum import IntEnum
from typing import Iterable, Optional

import numpy as np

ROWS = 6
COLS = 7
WIN_LENGTH = 4


class Cell(IntEnum):
    EMPTY = 0
    PLAYER_A = 1
    PLAYER_B = 2


# Axis pairs walked outward from the last placed piece:
# horizontal, vertical, diagonal \, diagonal /
DIRECTIONS = [
    ((0, 1), (0, -1)),
    ((1, 0), (-1, 0)),
    ((1, 1), (-1, -1)),
    ((1, -1), (-1, 1)),
]

_SYMBOLS = {Cell.EMPTY: '.', Cell.PLAYER_A: 'X', Cell.PLAYER_B: 'O'}
_FROM_SYMBOL = {symbol: cell for cell, symbol in _SYMBOLS.items()}


def create_board() -> np.ndarray:
    """Returns an empty 6x7 board."""
    return np.zeros((ROWS, COLS), dtype=np.int8)


def as_board(board) -> np.ndarray:
    """
    Convert nested lists (or an existing array) into a validated board.

    Raises:
        ValueError: if the shape is not 6x7 or a cell is not a Cell value
    """
    array = np.asarray(board)
    if array.shape != (ROWS, COLS):
        raise ValueError(f"Board must have shape ({ROWS}, {COLS}), got {array.shape}")
    if not np.isin(array, list(Cell)).all():
        raise ValueError("Board contains values outside of Cell")
    return array.astype(np.int8, copy=True)


def as_player(player) -> Cell:
    """Validate a player identifier (PLAYER_A or PLAYER_B)."""
    if player not in (Cell.PLAYER_A, Cell.PLAYER_B):
        raise ValueError(f"Player must be PLAYER_A or PLAYER_B, got {player!r}")
    return Cell(int(player))


def clone_board(board: np.ndarray) -> np.ndarray:
    return board.copy()


def opponent(player: int) -> Cell:
    return Cell.PLAYER_B if player == Cell.PLAYER_A else Cell.PLAYER_A


def drop_row(board: np.ndarray, col: int) -> Optional[int]:
    """
    Returns the lowest empty row in `col`, or None if the column is full.
    """
    for row in range(ROWS - 1, -1, -1):
        if board[row, col] == Cell.EMPTY:
            return row
    return None


def valid_columns(board: np.ndarray) -> list[int]:
    """Columns with at least one empty cell, in ascending order."""
    return [int(col) for col in np.flatnonzero(board[0] == Cell.EMPTY)]


def play_move(board: np.ndarray, col: int, player: int) -> int:
    """
    Drop a piece for `player` into `col` in place.

    Returns:
        Row where the piece landed

    Raises:
        ValueError: if the column is full
    """
    row = drop_row(board, col)
    if row is None:
        raise ValueError(f"Column {col} is full")
    board[row, col] = player
    return row


def detect_win(board: np.ndarray, row: int, col: int) -> Optional[list[tuple[int, int]]]:
    """
    Check whether the piece at (row, col) completes four in a row.

    Must be called with the coordinates of the most recently placed piece:
    this walks outward from that cell only, it does not scan the full board.

    Args:
        board: Board state
        row: Row of the last placed piece
        col: Column of the last placed piece

    Returns:
        The cells of the winning line (4 or more), or None
    """
    player = board[row, col]
    if player == Cell.EMPTY:
        return None

    for first, second in DIRECTIONS:
        cells = [(row, col)]
        for dr, dc in (first, second):
            r, c = row + dr, col + dc
            while 0 <= r < ROWS and 0 <= c < COLS and board[r, c] == player:
                cells.append((r, c))
                r += dr
                c += dc
        if len(cells) >= WIN_LENGTH:
            return cells

    return None


def is_draw(board: np.ndarray) -> bool:
    """
    True iff the top row is full. Independent of win state, so callers
    must check for a win first.
    """
    return not (board[0] == Cell.EMPTY).any()


def board_key(board: np.ndarray) -> bytes:
    """Exact encoding of all 42 cells, usable as a dict key."""
    return board.tobytes()


def parse_board(rows: Iterable[str]) -> np.ndarray:
    """
    Build a board from six text rows, top row first.

    '.' is empty, 'X' is PLAYER_A, 'O' is PLAYER_B. Whitespace is ignored.
    """
    lines = [''.join(line.split()) for line in rows]
    lines = [line for line in lines if line]
    if len(lines) != ROWS or any(len(line) != COLS for line in lines):
        raise ValueError(f"Expected {ROWS} rows of {COLS} cells")

    board = create_board()
    for r, line in enumerate(lines):
        for c, symbol in enumerate(line.upper()):
            if symbol not in _FROM_SYMBOL:
                raise ValueError(f"Unknown cell symbol {symbol!r}")
            board[r, c] = _FROM_SYMBOL[symbol]
    return board


def format_board(board: np.ndarray) -> str:
    header = ' ' + ' '.join(str(c) for c in range(COLS))
    lines = [header]
    for r in range(ROWS):
        lines.append('|' + '|'.join(_SYMBOLS[Cell(int(v))] for v in board[r]) + '|')
    return '\n'.join(lines)
