#!/usr/bin/env python3
"""Suggest a move for a Connect Four position.

The board is read as six text rows, top row first ('.' empty, 'X' player A,
'O' player B), from a file or stdin:

  python scripts/suggest_move.py --engine mcts --player O board.txt
"""

import sys
import logging
import argparse

from c4_engines.config import PLAY_CONFIG
from c4_engines.game.board import Cell, parse_board, format_board
from c4_engines.engine.dispatch import EngineType, create_engine

PLAYERS = {'X': Cell.PLAYER_A, 'O': Cell.PLAYER_B}


def main():
    ap = argparse.ArgumentParser(description="Suggest a Connect Four move")
    ap.add_argument('board', nargs='?', help='Board file (default: stdin)')
    ap.add_argument('--engine', choices=[e.value for e in EngineType], default=PLAY_CONFIG['default_engine'])
    ap.add_argument('--player', choices=sorted(PLAYERS), default='X')
    ap.add_argument('--depth', type=int, default=None, help='Minimax max depth')
    ap.add_argument('--iterations', type=int, default=None, help='MCTS iteration budget')
    ap.add_argument('--time_ms', type=int, default=None, help='MCTS time budget')
    ap.add_argument('--log-level', default=PLAY_CONFIG['log_level'])
    args = ap.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format='%(asctime)s %(name)s %(levelname)s %(message)s')

    if args.board:
        with open(args.board) as f:
            board = parse_board(f.read().splitlines())
    else:
        board = parse_board(sys.stdin.read().splitlines())

    overrides = {}
    if args.engine == EngineType.MINIMAX.value:
        if args.depth is not None:
            overrides['max_depth'] = args.depth
    else:
        if args.iterations is not None:
            overrides['max_iterations'] = args.iterations
        if args.time_ms is not None:
            overrides['time_limit_ms'] = args.time_ms

    engine = create_engine(args.engine, **overrides)
    result = engine.search(board, PLAYERS[args.player])

    print(format_board(board))
    print(f"\nBest move: column {result.best_move} ({result.source})")
    for key, value in vars(result).items():
        if key not in ('best_move', 'source', 'children'):
            print(f"  {key}: {value}")
    for child in getattr(result, 'children', []):
        print(f"  col {child['move']}: visits={child['visits']} win_rate={child['win_rate']:.3f}")


if __name__ == '__main__':
    main()
