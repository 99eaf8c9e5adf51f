"""
Monte-Carlo Tree Search for Connect Four with heuristic-guided playouts.

Each iteration runs four phases:

1. Selection: descend from the root while a node is fully expanded, picking
   the child with the highest UCB1 score plus a small static-heuristic bias.
2. Expansion: pop the strongest untried move and attach a child for it,
   unless either side can already win on the next move.
3. Simulation: a short tactical rollout (win > block > double threat >
   deny double threat > heuristic move), capped at a fixed number of plies.
4. Backpropagation: add the result to every ancestor.

Results are always expressed from the root player's perspective, so no sign
flip happens during backpropagation.

Nodes live in a per-search arena (`SearchTree.nodes`); parents and children
refer to each other by index. The whole tree is discarded after the best
move is read.
"""

import logging
import math
import time
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from c4_engines.config import MCTS_CONFIG
from c4_engines.game.board import (
    Cell,
    as_board,
    as_player,
    clone_board,
    detect_win,
    is_draw,
    opponent,
    play_move,
    valid_columns,
)
from c4_engines.engine.evaluation import heuristic_score
from c4_engines.engine.move_ordering import order_moves_mcts, rollout_move
from c4_engines.engine.tactics import find_immediate_win, find_double_threat_move

logger = logging.getLogger(__name__)


class Node:
    __slots__ = (
        'board', 'parent', 'move', 'player', 'root_player', 'winner',
        'children', 'visits', 'wins', 'untried_moves', 'heuristic_score',
    )

    def __init__(
        self,
        board: np.ndarray,
        player: int,
        root_player: int,
        parent: Optional[int] = None,
        move: Optional[int] = None,
        winner: Optional[int] = None,
    ):
        """
        Args:
            board: Board snapshot owned by this node
            player: Player to move at this node
            root_player: Player to move at the root of the tree
            parent: Arena index of the parent node
            move: Column that produced this node
            winner: Player whose move produced a four-in-a-row, if any
        """
        self.board = board
        self.parent = parent
        self.move = move
        self.player = player
        self.root_player = root_player
        self.winner = winner

        self.children: list[int] = []
        self.visits = 0
        self.wins = 0.0

        # Best move last, so pop() tries the strongest untried move first
        if winner is None:
            self.untried_moves = order_moves_mcts(board, player)[::-1]
        else:
            self.untried_moves = []
        self.heuristic_score = heuristic_score(board, player)

    def is_terminal(self) -> bool:
        """
        True if the producing move won, the board is full, or either side
        can complete four on the next move.
        """
        if self.winner is not None or is_draw(self.board):
            return True
        return (
            find_immediate_win(self.board, Cell.PLAYER_A) is not None
            or find_immediate_win(self.board, Cell.PLAYER_B) is not None
        )

    @property
    def win_rate(self) -> float:
        return self.wins / self.visits if self.visits else 0.0


class SearchTree:
    """Node arena for one search call."""

    def __init__(self, board: np.ndarray, player: int):
        self.nodes: list[Node] = [Node(board, player, root_player=player)]

    @property
    def root(self) -> Node:
        return self.nodes[0]

    def add_child(self, parent_index: int, move: int) -> int:
        parent = self.nodes[parent_index]
        board = clone_board(parent.board)
        row = play_move(board, move, parent.player)
        winner = parent.player if detect_win(board, row, move) else None

        child = Node(
            board,
            opponent(parent.player),
            parent.root_player,
            parent=parent_index,
            move=move,
            winner=winner,
        )
        self.nodes.append(child)
        index = len(self.nodes) - 1
        parent.children.append(index)
        return index

    def __len__(self):
        return len(self.nodes)


@dataclass
class MCTSResult:
    """Result of an MCTS move selection."""
    best_move: int
    source: str                 # immediate_win, block, search, no_children
    iterations: int
    time_ms: int
    tree_size: int
    children: list[dict] = field(default_factory=list)


class MCTS:
    def __init__(
        self,
        max_iterations: int = MCTS_CONFIG['max_iterations'],
        time_limit_ms: Optional[int] = MCTS_CONFIG['time_limit_ms'],
        C: float = MCTS_CONFIG['C'],
        heuristic_bias: float = MCTS_CONFIG['heuristic_bias'],
        rollout_max_plies: int = MCTS_CONFIG['rollout_max_plies'],
        rollout_value_scale: float = MCTS_CONFIG['rollout_value_scale'],
        min_visits: int = MCTS_CONFIG['min_visits'],
    ):
        """
        Args:
            max_iterations: Iteration budget
            time_limit_ms: Wall-clock budget, checked between iterations (None = no limit)
            C: UCB1 exploration constant
            heuristic_bias: Weight of a child's cached heuristic in UCB1
            rollout_max_plies: Playout length cap
            rollout_value_scale: Scale of the tanh partial credit at the ply cap
            min_visits: Visits required before a child's win rate is trusted
        """
        self.max_iterations = max_iterations
        self.time_limit_ms = time_limit_ms
        self.C = C
        self.heuristic_bias = heuristic_bias
        self.rollout_max_plies = rollout_max_plies
        self.rollout_value_scale = rollout_value_scale
        self.min_visits = min_visits

    def select_move(self, board, player: int) -> int:
        return self.search(board, player).best_move

    def search(self, board, player: int) -> MCTSResult:
        """
        Choose a column for `player` within the iteration and time budgets.

        Args:
            board: 6x7 board (array or nested lists); never modified
            player: Cell.PLAYER_A or Cell.PLAYER_B

        Returns:
            MCTSResult with best move and statistics
        """
        board = as_board(board)
        player = as_player(player)
        start = time.perf_counter()

        col = find_immediate_win(board, player)
        if col is not None:
            logger.info("MCTS: immediate win at column %d", col)
            return MCTSResult(col, 'immediate_win', 0, self._elapsed_ms(start), 0)

        col = find_immediate_win(board, opponent(player))
        if col is not None:
            logger.info("MCTS: blocking opponent at column %d", col)
            return MCTSResult(col, 'block', 0, self._elapsed_ms(start), 0)

        tree = SearchTree(board, player)
        iterations = 0

        while iterations < self.max_iterations and not self._time_up(start):
            index = self._expand(tree, self._select(tree))
            result = self._simulate(tree.nodes[index])
            self._backpropagate(tree, index, result)
            iterations += 1

        elapsed_ms = self._elapsed_ms(start)
        logger.info("MCTS completed %d iterations in %dms", iterations, elapsed_ms)

        best_move, source = self._best_move(tree)
        logger.info("MCTS selected move: %d", best_move)

        children = [
            {'move': child.move, 'visits': child.visits, 'win_rate': child.win_rate}
            for child in (tree.nodes[i] for i in tree.root.children)
        ]
        return MCTSResult(best_move, source, iterations, elapsed_ms, len(tree), children)

    def _select(self, tree: SearchTree) -> int:
        """Descend while the node has children and nothing left to try."""
        index = 0
        node = tree.nodes[index]
        while node.children and not node.untried_moves:
            index = self._select_child(tree, node)
            node = tree.nodes[index]
        return index

    def _expand(self, tree: SearchTree, index: int) -> int:
        """Attach a child for the strongest untried move; terminal nodes stay leaves."""
        node = tree.nodes[index]
        if node.untried_moves and not node.is_terminal():
            return tree.add_child(index, node.untried_moves.pop())
        return index

    def _select_child(self, tree: SearchTree, node: Node) -> int:
        best_index = node.children[0]
        best_ucb = -math.inf
        log_visits = math.log(node.visits) if node.visits > 0 else 0.0

        for index in node.children:
            child = tree.nodes[index]
            if child.visits == 0:
                return index

            ucb = self.get_ucb(child, log_visits)
            if ucb > best_ucb:
                best_ucb = ucb
                best_index = index

        return best_index

    def get_ucb(self, child: Node, log_parent_visits: float) -> float:
        exploration = math.sqrt(log_parent_visits / child.visits)
        bias = child.heuristic_score * self.heuristic_bias
        return child.win_rate + self.C * exploration + bias

    def _simulate(self, node: Node) -> float:
        """
        Play out from `node` and score the result for the root player:
        +1 win, -1 loss, 0 draw, tanh partial credit when the ply cap is hit.
        """
        root_player = node.root_player
        if node.winner is not None:
            return 1.0 if node.winner == root_player else -1.0

        board = clone_board(node.board)
        current = node.player

        for _ in range(self.rollout_max_plies):
            if find_immediate_win(board, current) is not None:
                return 1.0 if current == root_player else -1.0

            col = self._rollout_policy(board, current)
            if col is None:
                return 0.0

            row = play_move(board, col, current)
            if detect_win(board, row, col):
                return 1.0 if current == root_player else -1.0

            current = opponent(current)

        return math.tanh(heuristic_score(board, root_player) * self.rollout_value_scale)

    def _rollout_policy(self, board: np.ndarray, player: int) -> Optional[int]:
        """
        Playout move for a `player` without an immediate win: block, own
        double threat, the opponent's double-threat column, heuristic move.

        Returns:
            Column to play, or None if the board is full
        """
        opp = opponent(player)
        block = find_immediate_win(board, opp)
        if block is not None:
            return block

        columns = valid_columns(board)
        if not columns:
            return None

        col = find_double_threat_move(board, player)
        if col is None:
            # Occupy the column the opponent would use for a double threat
            col = find_double_threat_move(board, opp)
        if col is None:
            col = rollout_move(board, player, columns)
        return col

    def _backpropagate(self, tree: SearchTree, index: Optional[int], result: float):
        while index is not None:
            node = tree.nodes[index]
            node.visits += 1
            node.wins += result
            index = node.parent

    def _best_move(self, tree: SearchTree) -> tuple[int, str]:
        """
        Highest win rate among children with at least `min_visits` visits,
        otherwise the most visited child.
        """
        root = tree.root
        if not root.children:
            columns = valid_columns(root.board)
            return (columns[0] if columns else 0), 'no_children'

        children = [tree.nodes[i] for i in root.children]
        trusted = [child for child in children if child.visits >= self.min_visits]
        if trusted:
            best = max(trusted, key=lambda child: child.win_rate)
        else:
            best = max(children, key=lambda child: child.visits)
        return best.move, 'search'

    def _time_up(self, start: float) -> bool:
        if self.time_limit_ms is None:
            return False
        return self._elapsed_ms(start) >= self.time_limit_ms

    @staticmethod
    def _elapsed_ms(start: float) -> int:
        return int((time.perf_counter() - start) * 1000)
