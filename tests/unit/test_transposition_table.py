"""
Unit tests for the transposition table.
"""

from c4_engines.game.board import Cell, create_board, board_key, play_move
from c4_engines.engine.transposition_table import TranspositionTable


class TestTranspositionTable:
    """Test transposition table functionality."""

    def test_store_and_probe(self):
        tt = TranspositionTable()
        key = board_key(create_board())

        assert tt.probe(key, 3) is None
        tt.store(key, 3, 42.0)
        assert tt.probe(key, 3) == 42.0
        assert len(tt) == 1

    def test_depth_requirement(self):
        """Entries only answer probes at the same or a shallower depth."""
        tt = TranspositionTable()
        key = board_key(create_board())
        tt.store(key, 3, -7.5)

        assert tt.probe(key, 2) == -7.5
        assert tt.probe(key, 4) is None

    def test_exact_keys(self):
        tt = TranspositionTable()
        board = create_board()
        tt.store(board_key(board), 5, 1.0)

        play_move(board, 0, Cell.PLAYER_A)
        assert tt.probe(board_key(board), 0) is None

    def test_stats_and_clear(self):
        tt = TranspositionTable()
        key = board_key(create_board())
        tt.probe(key, 1)
        tt.store(key, 1, 0.0)
        tt.probe(key, 1)

        stats = tt.get_stats()
        assert stats['hits'] == 1
        assert stats['misses'] == 1
        assert stats['hit_rate'] == 0.5
        assert stats['stores'] == 1
        assert stats['size_entries'] == 1

        tt.clear()
        stats = tt.get_stats()
        assert len(tt) == 0
        assert stats['hits'] == 0
        assert stats['hit_rate'] == 0.0
