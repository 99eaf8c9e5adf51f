from c4_engines.game.board import (
    ROWS,
    COLS,
    Cell,
    create_board,
    as_board,
    as_player,
    clone_board,
    opponent,
    drop_row,
    valid_columns,
    play_move,
    detect_win,
    is_draw,
    board_key,
    parse_board,
    format_board,
)
from c4_engines.game.connect_four import ConnectFour

__all__ = [
    'ROWS',
    'COLS',
    'Cell',
    'create_board',
    'as_board',
    'as_player',
    'clone_board',
    'opponent',
    'drop_row',
    'valid_columns',
    'play_move',
    'detect_win',
    'is_draw',
    'board_key',
    'parse_board',
    'format_board',
    'ConnectFour',
]
