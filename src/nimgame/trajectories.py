"""
Trajectory generation: the search engine against a chosen human-side policy.
"""
from typing import Callable, Dict, List, Optional

import numpy as np

from .game_basics import MAX_START, MIN_START, GameState, Player, new_game
from .search import SEARCH_DEPTH, best_move
from .solver import solve_state

Policy = Callable[[GameState], int]

POLICIES = ('optimal', 'random', 'epsilon')


def scripted(take: int) -> Policy:
    """Always take ``take`` counters, or the whole pile when it is smaller."""
    def _policy(state: GameState) -> int:
        return min(take, state.remaining_count)
    return _policy


def random_policy(rng: np.random.Generator) -> Policy:
    def _policy(state: GameState) -> int:
        return int(rng.choice(state.legal_moves()))
    return _policy


def optimal_policy(rng: Optional[np.random.Generator] = None) -> Policy:
    def _policy(state: GameState) -> int:
        choices = list(solve_state(state.remaining_count)['optimal_moves'])
        if rng is None:
            return choices[0]
        return int(rng.choice(choices))
    return _policy


def epsilon_optimal(rng: np.random.Generator, epsilon: float) -> Policy:
    if epsilon < 0.0 or epsilon > 1.0:
        raise ValueError(f"Epsilon out of range [0,1]: {epsilon}")
    explore = random_policy(rng)
    exploit = optimal_policy(rng)

    def _policy(state: GameState) -> int:
        if rng.random() < epsilon:
            return explore(state)
        return exploit(state)
    return _policy


def play_out(state: GameState, human_policy: Policy, depth: int = SEARCH_DEPTH) -> List[Dict]:
    game: List[Dict] = []
    while not state.is_terminal():
        p = state.current_player
        if p.is_computer:
            take = best_move(state, depth)
        else:
            take = human_policy(state)
        game.append({
            'remaining': state.remaining_count,
            'player': p.label,
            'take': take,
            'solver_value': solve_state(state.remaining_count)['value'],
        })
        state = state.apply_move(take)
    return game


def winner_of(game: List[Dict]) -> Player:
    # the player who took the last counter leaves the other one to move
    last = Player(game[-1]['player'])
    return last.opponent


def generate_trajectories(
    policy: str = 'optimal',
    epsilon: float = 0.1,
    max_games: int = 100,
    seed: int = 42,
    start: Optional[int] = None,
    depth: int = SEARCH_DEPTH,
) -> List[List[Dict]]:
    if policy not in POLICIES:
        raise ValueError(f"Unknown policy: {policy}")
    rng = np.random.default_rng(seed)
    if policy == 'optimal':
        human = optimal_policy(rng)
    elif policy == 'random':
        human = random_policy(rng)
    else:
        human = epsilon_optimal(rng, epsilon)
    games: List[List[Dict]] = []
    for _ in range(max_games):
        n = start if start is not None else int(rng.integers(MIN_START, MAX_START + 1))
        games.append(play_out(new_game(n), human, depth))
    return games


def summarize(games: List[List[Dict]]) -> Dict[str, float]:
    played = [g for g in games if g]
    computer_wins = sum(1 for g in played if winner_of(g) is Player.COMPUTER)
    return {
        'games': len(played),
        'computer_wins': computer_wins,
        'computer_win_rate': computer_wins / len(played) if played else 0.0,
        'mean_plies': float(np.mean([len(g) for g in played])) if played else 0.0,
    }
