"""
Headless games and matches between two move sources.

A player is anything with `select_move(board, player) -> int` (both engines
and `AIPlayer` via `get_move`) or a plain callable with the same signature.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from tqdm import tqdm

from c4_engines.game.board import Cell, as_board, format_board
from c4_engines.game.connect_four import ConnectFour

logger = logging.getLogger(__name__)


@dataclass
class MoveRecord:
    number: int
    player: Cell
    row: int
    col: int


@dataclass
class GameRecord:
    """Outcome of one game."""
    winner: Optional[Cell]              # None for a draw
    moves: list[MoveRecord] = field(default_factory=list)
    winning_line: Optional[list[tuple[int, int]]] = None
    final_board: object = None

    @property
    def is_draw(self) -> bool:
        return self.winner is None

    def __len__(self):
        return len(self.moves)


@dataclass
class MatchSummary:
    """Aggregate of a multi-game match, counted per engine (not per colour)."""
    games: int = 0
    wins_a: int = 0
    wins_b: int = 0
    draws: int = 0
    total_moves: int = 0

    @property
    def avg_game_length(self) -> float:
        return self.total_moves / self.games if self.games else 0.0

    def __str__(self):
        return (
            f"games={self.games} A={self.wins_a} B={self.wins_b} "
            f"draws={self.draws} avg_length={self.avg_game_length:.1f}"
        )


def _move_fn(player):
    if hasattr(player, 'select_move'):
        return player.select_move
    if hasattr(player, 'get_move'):
        return player.get_move
    return player


def play_game(player_a, player_b, board=None, first: Cell = Cell.PLAYER_A) -> GameRecord:
    """
    Play one game to completion.

    Args:
        player_a: Move source for Cell.PLAYER_A
        player_b: Move source for Cell.PLAYER_B
        board: Optional starting position (not modified)
        first: Player to move first

    Returns:
        GameRecord with the move history and result
    """
    game = ConnectFour()
    state = game.get_initial_state() if board is None else as_board(board)
    movers = {Cell.PLAYER_A: _move_fn(player_a), Cell.PLAYER_B: _move_fn(player_b)}

    record = GameRecord(winner=None)
    current = Cell(first)

    while game.get_valid_moves(state).any():
        col = int(movers[current](state.copy(), current))
        state, row = game.get_next_state(state, col, current)
        record.moves.append(MoveRecord(len(record.moves) + 1, current, row, col))
        logger.debug("Move %d: player %d -> column %d", len(record.moves), current, col)

        value, terminated = game.get_value_and_terminated(state, row, col)
        if terminated:
            if value == 1:
                record.winner = current
                record.winning_line = game.check_win(state, row, col)
            break

        current = game.get_opponent(current)

    record.final_board = state
    logger.debug("Final position:\n%s", format_board(state))
    return record


def run_match(engine_a, engine_b, games: int, swap_sides: bool = True, progress: bool = False) -> MatchSummary:
    """
    Play `games` games between two engines.

    With `swap_sides`, engine_a moves first in even-numbered games and
    engine_b in odd-numbered ones. Engine_a always plays PLAYER_A.
    """
    summary = MatchSummary()

    for i in tqdm(range(games), desc="Games", disable=not progress):
        first = Cell.PLAYER_B if swap_sides and i % 2 == 1 else Cell.PLAYER_A
        record = play_game(engine_a, engine_b, first=first)

        summary.games += 1
        summary.total_moves += len(record)
        if record.winner == Cell.PLAYER_A:
            summary.wins_a += 1
        elif record.winner == Cell.PLAYER_B:
            summary.wins_b += 1
        else:
            summary.draws += 1

    logger.info("Match finished: %s", summary)
    return summary
