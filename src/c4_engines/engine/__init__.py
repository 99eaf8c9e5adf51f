"""
Search engine components for Connect Four.

This package contains the components shared by both engines and the
alpha-beta searcher itself:
- Static evaluation over all 69 four-cell windows
- Tactical scans (immediate wins, double threats)
- Move ordering heuristics
- Transposition table for caching search results
- Iterative-deepening alpha-beta search
"""

from c4_engines.engine.transposition_table import TranspositionTable, TTEntry
from c4_engines.engine.move_ordering import order_moves_minimax, order_moves_mcts
from c4_engines.engine.alphabeta import AlphaBetaEngine, SearchResult

__all__ = [
    'TranspositionTable',
    'TTEntry',
    'order_moves_minimax',
    'order_moves_mcts',
    'AlphaBetaEngine',
    'SearchResult',
]
