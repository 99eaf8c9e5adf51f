import numpy as np

from c4_engines.game import board as b
from c4_engines.game.board import Cell


class ConnectFour:
    """
    Connect Four rules over the shared board primitives.

    Board: 6 rows x 7 columns
    Win condition: 4 in a row (horizontal, vertical, or diagonal)
    Actions: Column index (0-6) - disc drops to lowest empty row
    """

    row_count = b.ROWS
    column_count = b.COLS
    win_length = b.WIN_LENGTH
    action_size = b.COLS

    def __repr__(self):
        return f"ConnectFour({self.row_count}x{self.column_count}, win={self.win_length})"

    def get_initial_state(self):
        return b.create_board()

    def get_next_state(self, state, action, player):
        """
        Apply gravity-based move: drop disc in column to lowest empty row.

        Args:
            state: Current board state (rows, cols)
            action: Column index (0 to column_count-1)
            player: Cell.PLAYER_A or Cell.PLAYER_B

        Returns:
            (new_state, row) with the disc placed; `state` is left untouched
        """
        state = b.clone_board(state)
        row = b.play_move(state, action, player)
        return state, row

    def get_valid_moves(self, state):
        """Returns a binary mask of length action_size."""
        return (state[0, :] == Cell.EMPTY).astype(np.uint8)

    def check_win(self, state, row, action):
        """Winning cells if the disc at (row, action) completed a line, else None."""
        return b.detect_win(state, row, action)

    def get_value_and_terminated(self, state, row, action):
        """
        Returns game outcome from the perspective of the player who just moved.

        Returns:
            (value, terminated) where:
            - value: 1 if that player won, 0 otherwise
            - terminated: True if game is over (win or draw)
        """
        if self.check_win(state, row, action):
            return 1, True

        if b.is_draw(state):
            return 0, True

        return 0, False

    def get_opponent(self, player):
        return b.opponent(player)
