"""
Unit tests for engine selection and the degraded-fallback AI player.
"""

import pytest

from c4_engines.game.board import Cell, create_board
from c4_engines.engine.alphabeta import AlphaBetaEngine
from c4_engines.engine.dispatch import EngineType, AIPlayer, create_engine
from c4_engines.mcts.mcts import MCTS


A = Cell.PLAYER_A


class BrokenEngine:
    def select_move(self, board, player):
        raise RuntimeError("engine crashed")


class FixedEngine:
    def __init__(self, col):
        self.col = col

    def select_move(self, board, player):
        return self.col


class TestCreateEngine:

    def test_minimax_with_override(self):
        engine = create_engine(EngineType.MINIMAX, max_depth=3)
        assert isinstance(engine, AlphaBetaEngine)
        assert engine.max_depth == 3
        assert engine.win_threshold == 9000

    def test_mcts_from_string(self):
        engine = create_engine('mcts', max_iterations=10)
        assert isinstance(engine, MCTS)
        assert engine.max_iterations == 10
        assert engine.time_limit_ms == 8000

    def test_unknown_engine(self):
        with pytest.raises(ValueError):
            create_engine('alphazero')


class TestAIPlayer:

    def test_toggle(self):
        player = AIPlayer(EngineType.MINIMAX)
        assert player.toggle() is EngineType.MCTS
        assert isinstance(player.engine, MCTS)
        assert player.toggle() is EngineType.MINIMAX

    def test_uses_active_engine(self):
        player = AIPlayer('minimax', engines={'minimax': FixedEngine(5)})
        assert player.get_move(create_board(), A) == 5
        assert player.fallbacks == 0

    def test_fallback_on_exception(self):
        player = AIPlayer('minimax', seed=0, engines={'minimax': BrokenEngine()})
        move = player.get_move(create_board(), A)
        assert 0 <= move <= 6
        assert player.fallbacks == 1

    def test_fallback_on_full_column(self):
        board = create_board()
        board[:, 2] = A
        player = AIPlayer('mcts', seed=1, engines={'mcts': FixedEngine(2)})
        for _ in range(20):
            assert player.get_move(board, A) != 2
        assert player.fallbacks == 20

    def test_fallback_on_out_of_range(self):
        player = AIPlayer('minimax', seed=2, engines={'minimax': FixedEngine(9)})
        assert 0 <= player.get_move(create_board(), A) <= 6
        assert player.fallbacks == 1

    def test_no_legal_moves(self):
        board = create_board()
        board[:, :] = A
        player = AIPlayer(engines={'minimax': FixedEngine(0)})
        with pytest.raises(ValueError):
            player.get_move(board, A)
