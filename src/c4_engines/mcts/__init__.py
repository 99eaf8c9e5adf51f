from c4_engines.mcts.mcts import MCTS, MCTSResult, Node, SearchTree

__all__ = ['MCTS', 'MCTSResult', 'Node', 'SearchTree']
