"""
Line-based terminal game loop: Human against the search engine.

Game text goes to ``stdout``; diagnostics go through ``logging``.
"""
from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Optional, TextIO

import numpy as np

from .game_basics import (
    INVALID_MOVE_MESSAGE,
    MAX_START,
    MIN_START,
    GameState,
    InvalidMove,
    Player,
    new_game,
)
from .search import SEARCH_DEPTH, SearchStats, best_move


@dataclass
class PlayArgs:
    total_counters: Optional[int] = None
    seed: Optional[int] = None
    depth: int = SEARCH_DEPTH


def random_start(seed: Optional[int] = None) -> int:
    rng = np.random.default_rng(seed)
    return int(rng.integers(MIN_START, MAX_START + 1))


def _read_take(stdin: TextIO) -> Optional[int]:
    line = stdin.readline()
    if line == "":
        raise EOFError("Input ended before the game was over")
    try:
        return int(line.strip())
    except ValueError:
        return None


def _computer_take(state: GameState, depth: int) -> int:
    stats = SearchStats()
    take = best_move(state, depth, stats)
    logging.debug(
        "search remaining=%d nodes=%d leaves=%d cutoffs=%d",
        state.remaining_count,
        stats.nodes,
        stats.leaves,
        stats.cutoffs,
    )
    return take


def run_game(args: PlayArgs, stdin: TextIO = sys.stdin, stdout: TextIO = sys.stdout) -> Player:
    total = args.total_counters if args.total_counters is not None else random_start(args.seed)
    state = new_game(total)
    logging.debug("new game total=%d depth=%d", total, args.depth)

    def say(msg: str) -> None:
        print(msg, file=stdout, flush=True)

    while not state.is_terminal():
        say(f"Total sticks: {state.remaining_count}")
        say(f"Current player: {state.current_player.label}")
        if state.current_player.is_computer:
            take = _computer_take(state, args.depth)
            say(f"Computer takes: {take} sticks")
        else:
            say("How many sticks do you want to take?")
            take = _read_take(stdin)
            if take is None:
                say(INVALID_MOVE_MESSAGE)
                continue
        try:
            state = state.apply_move(take)
        except InvalidMove as e:
            say(str(e))

    winner = state.winner
    say("Game over!")
    say(f"Winner: {winner.label}")
    return winner
