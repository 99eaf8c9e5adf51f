#!/usr/bin/env python3
"""Engine vs engine Connect Four match.

  python scripts/run_match.py --a minimax --b mcts --games 10 --depth 4 --iterations 500
"""

import logging
import argparse

from c4_engines.arena import run_match
from c4_engines.engine.dispatch import EngineType, create_engine


def build(engine_type, args):
    if engine_type == EngineType.MINIMAX.value:
        return create_engine(engine_type, max_depth=args.depth)
    return create_engine(engine_type, max_iterations=args.iterations, time_limit_ms=args.time_ms)


def main():
    engines = [e.value for e in EngineType]
    ap = argparse.ArgumentParser(description="Run a Connect Four engine match")
    ap.add_argument('--a', choices=engines, default='minimax')
    ap.add_argument('--b', choices=engines, default='mcts')
    ap.add_argument('--games', type=int, default=10)
    ap.add_argument('--depth', type=int, default=4)
    ap.add_argument('--iterations', type=int, default=500)
    ap.add_argument('--time_ms', type=int, default=2000)
    ap.add_argument('--no-swap', action='store_true', help='Engine A always moves first')
    ap.add_argument('--log-level', default='WARNING')
    args = ap.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format='%(asctime)s %(name)s %(levelname)s %(message)s')

    summary = run_match(
        build(args.a, args),
        build(args.b, args),
        args.games,
        swap_sides=not args.no_swap,
        progress=True,
    )

    print(f"\n{args.a} (A) vs {args.b} (B) over {summary.games} games")
    print(f"  A wins: {summary.wins_a}")
    print(f"  B wins: {summary.wins_b}")
    print(f"  Draws:  {summary.draws}")
    print(f"  Avg game length: {summary.avg_game_length:.1f} moves")


if __name__ == '__main__':
    main()
