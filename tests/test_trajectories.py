import numpy as np
import pytest

from nimgame.game_basics import MAX_START, MIN_START, GameState, Player, new_game
from nimgame.trajectories import (
    epsilon_optimal,
    generate_trajectories,
    optimal_policy,
    play_out,
    random_policy,
    scripted,
    summarize,
    winner_of,
)


def test_scripted_policy_clamps_to_pile():
    pol = scripted(3)
    assert pol(GameState(current_player=Player.HUMAN, remaining_count=2)) == 2
    assert pol(GameState(current_player=Player.HUMAN, remaining_count=9)) == 3


def test_random_policy_only_picks_legal_takes():
    rng = np.random.default_rng(0)
    pol = random_policy(rng)
    for n in range(1, 8):
        s = GameState(current_player=Player.HUMAN, remaining_count=n)
        for _ in range(10):
            assert pol(s) in s.legal_moves()


def test_optimal_policy_picks_the_solver_move():
    pol = optimal_policy()
    assert pol(GameState(current_player=Player.HUMAN, remaining_count=8)) == 3


def test_epsilon_range_checked():
    with pytest.raises(ValueError):
        epsilon_optimal(np.random.default_rng(0), 1.5)


def test_play_out_conserves_counters_and_alternates():
    game = play_out(new_game(13), scripted(2))
    assert sum(e['take'] for e in game) == 13
    players = [e['player'] for e in game]
    assert players[0] == "Human"
    assert all(a != b for a, b in zip(players, players[1:]))


def test_winner_is_the_player_who_did_not_take_last():
    game = play_out(new_game(6), scripted(1))
    assert game[-1]['player'] == "Human"
    assert winner_of(game) is Player.COMPUTER


def test_optimal_human_wins_from_winning_start():
    # 8 leaves the human a winning take of 3, and small piles sit inside the search horizon
    game = play_out(new_game(8), optimal_policy())
    assert winner_of(game) is Player.HUMAN


def test_generate_trajectories_reproducible():
    g1 = generate_trajectories(policy='epsilon', epsilon=0.3, max_games=5, seed=7)
    g2 = generate_trajectories(policy='epsilon', epsilon=0.3, max_games=5, seed=7)
    assert g1 == g2
    assert len(g1) == 5
    for game in g1:
        assert MIN_START <= game[0]['remaining'] <= MAX_START
        assert sum(e['take'] for e in game) == game[0]['remaining']


def test_unknown_policy_rejected():
    with pytest.raises(ValueError):
        generate_trajectories(policy='greedy', max_games=1)


def test_summarize_counts_computer_wins():
    games = generate_trajectories(policy='random', max_games=4, seed=3, start=6)
    s = summarize(games)
    assert s['games'] == 4
    assert 0 <= s['computer_wins'] <= 4
    assert s['mean_plies'] >= 2.0
