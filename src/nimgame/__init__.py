"""nimgame package.

Nim counting game rules, an alpha-beta computer opponent, an exact solver,
game simulation, and a simple CLI.

Convenience imports are exposed for common workflows.
"""

from .game_basics import GameState, InvalidMove, Player, new_game
from .search import best_move, search
from .solver import solve_all_reachable, solve_state

__all__ = [
    "GameState",
    "InvalidMove",
    "Player",
    "new_game",
    "best_move",
    "search",
    "solve_state",
    "solve_all_reachable",
]
