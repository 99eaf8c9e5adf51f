"""
Configuration for the Connect Four engines.
"""

# Minimax Configuration
MINIMAX_CONFIG = {
    'max_depth': 8,                     # Iterative deepening upper bound
    'win_threshold': 9000,              # Stop deepening once best score exceeds this
}

# MCTS Configuration
MCTS_CONFIG = {
    'max_iterations': 5000,
    'time_limit_ms': 8000,
    'C': 1.414,                         # UCB1 exploration constant
    'heuristic_bias': 0.001,            # Weight of the child's static heuristic in UCB1
    'rollout_max_plies': 20,
    'rollout_value_scale': 0.001,       # tanh(heuristic * scale) at the ply cap
    'min_visits': 5,                    # Minimum visits for win-rate based move choice
}

# Caller-side configuration
PLAY_CONFIG = {
    'default_engine': 'minimax',        # 'minimax' or 'mcts'
    'log_level': 'INFO',
}
