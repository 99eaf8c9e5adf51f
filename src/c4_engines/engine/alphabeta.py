"""
Alpha-beta minimax search engine for Connect Four.

Key features:
- Tactical fast path (immediate win, forced block, double threat)
- Iterative deepening (search depth 1, then 2, ... up to max_depth)
- Alpha-beta pruning over heuristically ordered moves
- Transposition table keyed by the exact board, cleared on every call
- Depth-sensitive terminal scores: shallower wins and deeper losses score better


Algorithm overview:

    def minimax(board, depth, alpha, beta, maximizing):
        if cached := tt.probe(board, depth):
            return cached

        # Side to move can win right now
        if side_to_move_has_winning_move(board):
            return +(10000 + depth * 10) if maximizing else -(10000 + depth * 10)
        if board_full(board):
            return 0
        if depth == 0:
            return static_eval(board, root_player)

        for move in ordered_moves(board):
            score = minimax(child, depth - 1, alpha, beta, not maximizing)
            ... update best, alpha/beta
            if beta <= alpha:
                break

        tt.store(board, depth, best_score)
        return best_score
"""

import logging
import math
import time
from dataclasses import dataclass
from typing import Optional

import numpy as np

from c4_engines.config import MINIMAX_CONFIG
from c4_engines.game.board import Cell, as_board, as_player, board_key, is_draw, opponent, play_move
from c4_engines.engine.evaluation import evaluate_board_advanced
from c4_engines.engine.move_ordering import order_moves_minimax, center_priority_move
from c4_engines.engine.tactics import find_immediate_win, find_double_threat_move
from c4_engines.engine.transposition_table import TranspositionTable

logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    """Result of a minimax move selection."""
    best_move: int
    score: Optional[float]
    source: str                 # immediate_win, block, double_threat, search, fallback
    depth_reached: int
    nodes_searched: int
    cache_hits: int
    time_ms: int
    tt_stats: dict


# Terminal scores
SCORE_WIN = 10000
WIN_DEPTH_BONUS = 10
SCORE_DRAW = 0


class AlphaBetaEngine:
    """
    Iterative-deepening alpha-beta minimax engine.

    The maximizing layer plays the root player, the minimizing layer plays
    the opponent. Leaf positions are scored with `evaluate_board_advanced`
    from the root player's perspective.
    """

    def __init__(
        self,
        max_depth: int = MINIMAX_CONFIG['max_depth'],
        win_threshold: float = MINIMAX_CONFIG['win_threshold'],
    ):
        """
        Initialize minimax engine.

        Args:
            max_depth: Maximum iterative deepening depth
            win_threshold: Stop deepening once the best root score exceeds this
        """
        self.max_depth = max_depth
        self.win_threshold = win_threshold
        self.tt = TranspositionTable()

        # Search statistics
        self.nodes_searched = 0
        self.start_time = 0.0

    def select_move(self, board, player: int) -> int:
        return self.search(board, player).best_move

    def search(self, board, player: int) -> SearchResult:
        """
        Choose a column for `player`.

        Args:
            board: 6x7 board (array or nested lists); never modified
            player: Cell.PLAYER_A or Cell.PLAYER_B

        Returns:
            SearchResult with best move and statistics
        """
        board = as_board(board)
        player = as_player(player)

        self.tt.clear()
        self.nodes_searched = 0
        self.start_time = time.perf_counter()

        root_moves = order_moves_minimax(board)

        col = find_immediate_win(board, player, root_moves)
        if col is not None:
            logger.info("Minimax: immediate win found at column %d", col)
            return self._result(col, None, 'immediate_win', 0)

        col = find_immediate_win(board, opponent(player), root_moves)
        if col is not None:
            logger.info("Minimax: blocking opponent win at column %d", col)
            return self._result(col, None, 'block', 0)

        col = find_double_threat_move(board, player)
        if col is not None:
            logger.info("Minimax: double threat move at column %d", col)
            return self._result(col, None, 'double_threat', 0)

        best_move = None
        best_score = None
        depth_reached = 0

        for depth in range(1, self.max_depth + 1):
            move, score = self._search_root(board, player, depth, root_moves)
            if move is None:
                continue

            best_move = move
            best_score = score
            depth_reached = depth
            logger.debug("Minimax: depth %d, best score %s, best move %d", depth, score, move)

            if score > self.win_threshold:
                logger.info("Minimax: winning sequence found at depth %d", depth)
                break

        logger.info(
            "Minimax: nodes evaluated %d, cache hits %d",
            self.nodes_searched, self.tt.hits,
        )

        if best_move is None:
            return self._result(center_priority_move(board), None, 'fallback', 0)
        return self._result(best_move, best_score, 'search', depth_reached)

    def _search_root(self, board: np.ndarray, player: int, depth: int, moves: list[int]):
        """
        Root node search at a fixed depth.

        Returns:
            (best_move, best_score), best_move is None if no move was searched
        """
        best_move = None
        best_score = -math.inf
        alpha = -math.inf
        beta = math.inf

        for col in moves:
            row = play_move(board, col, player)
            score = self._minimax(board, depth - 1, alpha, beta, False, player)
            board[row, col] = Cell.EMPTY

            if score > best_score:
                best_score = score
                best_move = col

            alpha = max(alpha, best_score)

        return best_move, best_score

    def _minimax(
        self,
        board: np.ndarray,
        depth: int,
        alpha: float,
        beta: float,
        maximizing: bool,
        player: int,
    ) -> float:
        """
        Alpha-beta minimax.

        Args:
            board: Scratch board, restored before returning
            depth: Remaining depth
            alpha: Best score guaranteed for the maximizer
            beta: Best score guaranteed for the minimizer
            maximizing: True when `player` is to move
            player: Root player

        Returns:
            Score from the root player's perspective
        """
        self.nodes_searched += 1

        key = board_key(board)
        cached = self.tt.probe(key, depth)
        if cached is not None:
            return cached

        terminal = self._terminal_score(board, depth, maximizing, player)
        if terminal is not None:
            return terminal

        if depth == 0:
            return evaluate_board_advanced(board, player)

        mover = player if maximizing else opponent(player)
        best_score = -math.inf if maximizing else math.inf

        for col in order_moves_minimax(board):
            row = play_move(board, col, mover)
            score = self._minimax(board, depth - 1, alpha, beta, not maximizing, player)
            board[row, col] = Cell.EMPTY

            if maximizing:
                best_score = max(best_score, score)
                alpha = max(alpha, best_score)
            else:
                best_score = min(best_score, score)
                beta = min(beta, best_score)

            if beta <= alpha:
                break

        self.tt.store(key, depth, best_score)
        return best_score

    def _terminal_score(self, board: np.ndarray, depth: int, maximizing: bool, player: int) -> Optional[float]:
        """
        Decisive score if the side to move can win immediately, 0 if the
        board is full, otherwise None.
        """
        mover = player if maximizing else opponent(player)
        if find_immediate_win(board, mover) is not None:
            score = SCORE_WIN + depth * WIN_DEPTH_BONUS
            return score if maximizing else -score

        if is_draw(board):
            return SCORE_DRAW

        return None

    def _result(self, move: int, score: Optional[float], source: str, depth_reached: int) -> SearchResult:
        elapsed_ms = int((time.perf_counter() - self.start_time) * 1000)
        return SearchResult(
            best_move=int(move),
            score=score,
            source=source,
            depth_reached=depth_reached,
            nodes_searched=self.nodes_searched,
            cache_hits=self.tt.hits,
            time_ms=elapsed_ms,
            tt_stats=self.tt.get_stats(),
        )

    def get_stats(self) -> dict:
        """Get search statistics."""
        return {
            'nodes_searched': self.nodes_searched,
            'tt_stats': self.tt.get_stats(),
        }
