"""
Engine selection for a computer player.

`AIPlayer` owns one engine of each kind and forwards move requests to the
active one. A failing engine never ends a game: if the engine raises or
answers with a column that cannot take a piece, a uniformly random legal
column is played instead.
"""

import logging
from enum import Enum
from typing import Optional

import numpy as np

from c4_engines.config import MINIMAX_CONFIG, MCTS_CONFIG, PLAY_CONFIG
from c4_engines.game.board import COLS, as_board, drop_row, valid_columns
from c4_engines.engine.alphabeta import AlphaBetaEngine
from c4_engines.mcts.mcts import MCTS

logger = logging.getLogger(__name__)


class EngineType(str, Enum):
    MINIMAX = 'minimax'
    MCTS = 'mcts'


def create_engine(engine_type, **overrides):
    """
    Build an engine from its config dict merged with `overrides`.

    Args:
        engine_type: EngineType or its string value
        **overrides: Constructor arguments replacing config defaults

    Returns:
        AlphaBetaEngine or MCTS instance
    """
    engine_type = EngineType(engine_type)
    if engine_type is EngineType.MINIMAX:
        return AlphaBetaEngine(**{**MINIMAX_CONFIG, **overrides})
    return MCTS(**{**MCTS_CONFIG, **overrides})


class AIPlayer:
    """
    Computer player that can switch between the minimax and MCTS engines.
    """

    def __init__(
        self,
        engine_type=PLAY_CONFIG['default_engine'],
        seed: Optional[int] = None,
        engines: Optional[dict] = None,
    ):
        """
        Args:
            engine_type: Initially active engine
            seed: Seed for the random fallback move
            engines: Optional prebuilt engines keyed by EngineType
        """
        self.engine_type = EngineType(engine_type)
        self.engines = {
            EngineType.MINIMAX: create_engine(EngineType.MINIMAX),
            EngineType.MCTS: create_engine(EngineType.MCTS),
        }
        if engines:
            self.engines.update({EngineType(k): v for k, v in engines.items()})
        self.rng = np.random.default_rng(seed)

        # Number of moves answered by the random fallback
        self.fallbacks = 0

    @property
    def engine(self):
        return self.engines[self.engine_type]

    def toggle(self) -> EngineType:
        """Switch the active engine and return the new type."""
        if self.engine_type is EngineType.MINIMAX:
            self.engine_type = EngineType.MCTS
        else:
            self.engine_type = EngineType.MINIMAX
        logger.info("AI engine switched to %s", self.engine_type.value)
        return self.engine_type

    def get_move(self, board, player: int) -> int:
        """
        Ask the active engine for a column, degrading to a random legal one.

        Raises:
            ValueError: if the board is malformed or has no legal column
        """
        board = as_board(board)
        columns = valid_columns(board)
        if not columns:
            raise ValueError("No legal moves: the board is full")

        try:
            col = self.engine.select_move(board, player)
        except Exception:
            logger.exception("%s engine failed, playing a random move", self.engine_type.value)
            return self._random_move(columns)

        if not isinstance(col, (int, np.integer)) or not 0 <= col < COLS or drop_row(board, col) is None:
            logger.warning(
                "%s engine returned unplayable column %r, playing a random move",
                self.engine_type.value, col,
            )
            return self._random_move(columns)

        return int(col)

    def _random_move(self, columns: list[int]) -> int:
        self.fallbacks += 1
        return int(self.rng.choice(columns))
