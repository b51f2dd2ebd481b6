"""
Exact game-theoretic solver (negamax with memoization), from the side-to-move perspective.
The side recorded to move at an empty pile wins, matching the game's winner rule.
Tie-break policy:
- Prefer win over loss.
- Among wins, prefer shorter distance (plies) to termination.
- Among losses, prefer longer distance (delay the loss).
"""
from functools import lru_cache
from typing import Dict, List, Optional, Tuple

from .game_basics import MAX_START, MAX_TAKE


def legal_takes(remaining: int) -> List[int]:
    return list(range(1, min(MAX_TAKE, remaining) + 1))


@lru_cache(maxsize=None)
def solve_state(remaining: int) -> Dict:
    if remaining < 0:
        raise ValueError(f"Pile size must be non-negative: {remaining}")
    if remaining == 0:
        return {
            'value': 1,
            'plies_to_end': 0,
            'optimal_moves': tuple(),
            'q_values': tuple([None] * MAX_TAKE),
            'dtt_action': tuple([None] * MAX_TAKE),
        }
    q_vals: List[Optional[int]] = [None] * MAX_TAKE
    dtt_action: List[Optional[int]] = [None] * MAX_TAKE
    best_val: Optional[int] = None
    best_dtt: Optional[int] = None
    best_moves: List[int] = []
    for take in legal_takes(remaining):
        s_child = solve_state(remaining - take)
        q = -s_child['value']
        dtt = 1 + s_child['plies_to_end']
        q_vals[take - 1] = q
        dtt_action[take - 1] = dtt
        if best_val is None or q > best_val:
            best_val, best_dtt, best_moves = q, dtt, [take]
        elif q == best_val:
            shorter_win = q == 1 and dtt < best_dtt
            longer_loss = q == -1 and dtt > best_dtt
            if shorter_win or longer_loss:
                best_dtt, best_moves = dtt, [take]
            elif dtt == best_dtt:
                best_moves.append(take)
    return {
        'value': best_val,
        'plies_to_end': best_dtt,
        'optimal_moves': tuple(sorted(best_moves)),
        'q_values': tuple(q_vals),
        'dtt_action': tuple(dtt_action),
    }


def winning_moves(remaining: int) -> Tuple[int, ...]:
    sol = solve_state(remaining)
    return tuple(i + 1 for i, q in enumerate(sol['q_values']) if q == 1)


def solve_all_reachable(max_count: int = MAX_START) -> Dict[int, Dict]:
    """Solve every pile size from empty up to ``max_count``."""
    return {n: solve_state(n) for n in range(max_count + 1)}
