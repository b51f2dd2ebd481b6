"""
Depth-bounded minimax with alpha-beta pruning, from the Computer's perspective.
Teaching notes:
- Leaves score +1 when the Computer is the player to move, -1 otherwise. At an
  empty pile that is the real outcome; at the depth horizon it is only a guess.
- Successors are visited in ascending take order, so ties resolve to the
  smallest take.
- Every node is a fresh immutable GameState; branches never share state.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from .game_basics import GameState, Player

SEARCH_DEPTH = 10


@dataclass
class SearchStats:
    nodes: int = 0
    leaves: int = 0
    cutoffs: int = 0


def evaluate(state: GameState) -> int:
    return 1 if state.current_player is Player.COMPUTER else -1


def search(
    state: GameState,
    depth: int,
    maximizing: bool,
    alpha: float,
    beta: float,
    stats: Optional[SearchStats] = None,
) -> int:
    if stats is not None:
        stats.nodes += 1
    if depth == 0 or state.is_terminal():
        if stats is not None:
            stats.leaves += 1
        return evaluate(state)

    if maximizing:
        best = -math.inf
        for child in state.successors():
            value = search(child, depth - 1, False, alpha, beta, stats)
            best = max(best, value)
            alpha = max(alpha, value)
            if beta <= alpha:
                if stats is not None:
                    stats.cutoffs += 1
                break
        return int(best)

    best = math.inf
    for child in state.successors():
        value = search(child, depth - 1, True, alpha, beta, stats)
        best = min(best, value)
        beta = min(beta, value)
        if beta <= alpha:
            if stats is not None:
                stats.cutoffs += 1
            break
    return int(best)


def best_move(
    state: GameState,
    depth: int = SEARCH_DEPTH,
    stats: Optional[SearchStats] = None,
) -> int:
    """Pick the take that maximizes the Computer's searched score.

    The first ply is spent on the candidate take itself, so each child is
    searched with ``depth - 1`` plies left and the opponent to move. Alpha is
    carried across candidates; beta stays open.
    """
    if state.is_terminal():
        raise ValueError("No move to search: the pile is empty")
    if depth < 1:
        raise ValueError(f"Search depth must be at least 1: {depth}")
    best_value = -math.inf
    best_take = 0
    alpha = -math.inf
    for take in state.legal_moves():
        child = state.apply_move(take)
        value = search(child, depth - 1, False, alpha, math.inf, stats)
        logging.debug("candidate take=%d score=%d", take, value)
        if value > best_value:
            best_value = value
            best_take = take
        alpha = max(alpha, value)
    return best_take
