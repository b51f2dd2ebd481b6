import math

import pytest

from nimgame.game_basics import GameState, Player
from nimgame.search import SEARCH_DEPTH, SearchStats, best_move, evaluate, search
from nimgame.solver import winning_moves
from nimgame.trajectories import play_out, scripted


def computer_to_move(n: int) -> GameState:
    return GameState(current_player=Player.COMPUTER, remaining_count=n)


def test_evaluate_scores_side_to_move():
    assert evaluate(computer_to_move(0)) == 1
    assert evaluate(GameState(current_player=Player.HUMAN, remaining_count=0)) == -1
    assert evaluate(computer_to_move(9)) == 1


def test_search_base_cases():
    leaf = GameState(current_player=Player.HUMAN, remaining_count=7)
    assert search(leaf, 0, True, -math.inf, math.inf) == -1
    assert search(computer_to_move(0), 5, False, -math.inf, math.inf) == 1


def test_forced_single_stick():
    assert best_move(computer_to_move(1)) == 1


def test_takes_three_from_four():
    assert best_move(computer_to_move(4)) == 3


def test_losing_pile_keeps_smallest_take():
    # 5 is lost for the side to move; every take scores the same
    for n in (5, 9):
        assert best_move(computer_to_move(n)) == 1


@pytest.mark.parametrize("n", range(1, SEARCH_DEPTH + 1))
def test_agrees_with_exact_solver_within_horizon(n: int):
    wins = winning_moves(n)
    take = best_move(computer_to_move(n))
    if wins:
        assert take in wins
    else:
        assert take == 1


def test_best_move_on_empty_pile_is_an_error():
    with pytest.raises(ValueError):
        best_move(computer_to_move(0))


def full_tree_size(state: GameState, depth: int) -> int:
    if depth == 0 or state.is_terminal():
        return 1
    return 1 + sum(full_tree_size(c, depth - 1) for c in state.successors())


def test_stats_count_nodes_and_cutoffs():
    s = computer_to_move(12)
    stats = SearchStats()
    best_move(s, stats=stats)
    assert stats.leaves > 0
    assert stats.leaves <= stats.nodes
    assert stats.cutoffs > 0
    unpruned = sum(full_tree_size(c, SEARCH_DEPTH - 1) for c in s.successors())
    assert stats.nodes < unpruned


def test_search_does_not_touch_the_live_state():
    s = computer_to_move(11)
    before = (s.current_player, s.remaining_count)
    best_move(s)
    assert (s.current_player, s.remaining_count) == before


def test_full_game_from_six_with_human_taking_one():
    start = GameState(current_player=Player.HUMAN, remaining_count=6)
    game = play_out(start, scripted(1))
    assert sum(e['take'] for e in game) == 6
    assert [(e['player'], e['take']) for e in game] == [
        ("Human", 1),
        ("Computer", 1),
        ("Human", 1),
        ("Computer", 2),
        ("Human", 1),
    ]


def test_best_move_rejects_depth_below_one():
    for depth in (0, -1):
        with pytest.raises(ValueError):
            best_move(computer_to_move(5), depth)


def test_past_the_horizon_the_guess_is_kept():
    # the candidate take spends one of the plies, so piles of 19 and 20 never reach
    # an empty pile and are scored by the side-to-move heuristic
    assert winning_moves(19) == (2,)
    assert winning_moves(20) == (3,)
    assert best_move(computer_to_move(19)) == 1
    assert best_move(computer_to_move(20)) == 1
