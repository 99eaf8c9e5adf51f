"""
Connect Four move-selection engines: iterative-deepening alpha-beta minimax
with a transposition table, and heuristic-guided Monte-Carlo Tree Search.
"""

__version__ = "0.1"
