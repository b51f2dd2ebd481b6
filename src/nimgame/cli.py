from __future__ import annotations

import argparse
import logging
import os
from typing import Optional

from .driver import PlayArgs, run_game
from .game_basics import MAX_START, GameState, Player
from .search import SEARCH_DEPTH, SearchStats, best_move
from .solver import solve_state
from .trajectories import POLICIES, generate_trajectories, summarize


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="nim", description="Nim counting game CLI")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument(
        "--info",
        action="store_true",
        help="Print environment and dependency info and exit",
    )
    p.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Global seed for reproducibility (default: $NIM_SEED if set)",
    )
    p.add_argument(
        "--deterministic",
        action="store_true",
        help="Enable deterministic mode (sets PYTHONHASHSEED, seeds numpy)",
    )

    # play against the computer
    p_play = sub.add_parser("play", help="Play a game against the computer on stdin/stdout")
    p_play.add_argument(
        "--total",
        type=int,
        default=None,
        help="Starting number of sticks (default: random in [4, 20])",
    )
    p_play.add_argument(
        "--depth", type=int, default=SEARCH_DEPTH, help=f"Search depth in plies (default: {SEARCH_DEPTH})"
    )

    # computer's choice for a pile
    p_best = sub.add_parser("best-move", help="Show the computer's take for a pile, computer to move")
    p_best.add_argument("--remaining", type=int, help="Sticks left in the pile (omit with --stdin)")
    p_best.add_argument(
        "--stdin", action="store_true", help="Read many pile sizes from stdin and stream CSV output"
    )
    p_best.add_argument(
        "--depth", type=int, default=SEARCH_DEPTH, help=f"Search depth in plies (default: {SEARCH_DEPTH})"
    )

    # exact solver
    p_sol = sub.add_parser("solve", help="Solve a pile via perfect play from side-to-move")
    p_sol.add_argument("--remaining", type=int, help="Sticks left in the pile (omit with --stdin)")
    p_sol.add_argument(
        "--stdin", action="store_true", help="Read many pile sizes from stdin and stream CSV output"
    )

    # simulated games
    p_sim = sub.add_parser("simulate", help="Simulate games of a human policy against the computer")
    p_sim.add_argument("--policy", choices=list(POLICIES), default="random", help="Human-side policy")
    p_sim.add_argument("--epsilon", type=float, default=0.1, help="Exploration rate for --policy epsilon")
    p_sim.add_argument("--games", type=int, default=100, help="Number of games (default: 100)")
    p_sim.add_argument("--start", type=int, default=None, help="Fixed starting pile (default: random)")

    return p


def _resolve_seed(seed: Optional[int]) -> Optional[int]:
    if seed is not None:
        return seed
    env = os.getenv("NIM_SEED")
    if env:
        try:
            return int(env)
        except ValueError:
            logging.warning("Ignoring non-integer NIM_SEED=%r", env)
    return None


def _set_global_seed(seed: Optional[int]) -> None:
    if seed is None:
        return
    import random

    import numpy as np

    random.seed(seed)
    np.random.seed(seed)


def _set_deterministic_env(seed: Optional[int]) -> None:
    if seed is not None:
        os.environ.setdefault("PYTHONHASHSEED", str(seed))
    _set_global_seed(seed)


def _print_info() -> None:
    import importlib.util
    import platform
    import sys

    print(f"python={sys.version.split()[0]} platform={platform.platform()}")
    for pkg in ["numpy"]:
        spec = importlib.util.find_spec(pkg)
        if spec is None:
            print(f"{pkg}=<not installed>")
        else:
            mod = __import__(pkg)
            ver = getattr(mod, "__version__", "?")
            print(f"{pkg}={ver}")


def _parse_pile(raw: str) -> Optional[int]:
    raw = raw.strip()
    if not raw.isdecimal():
        return None
    return int(raw)


def _computer_choice(remaining: int, depth: int) -> tuple[int, SearchStats]:
    stats = SearchStats()
    take = best_move(GameState(current_player=Player.COMPUTER, remaining_count=remaining), depth, stats)
    return take, stats


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    # Early exits
    if getattr(ns, "version", False):
        try:
            from importlib.metadata import version as _ver

            print(_ver("nimgame"))
        except Exception:
            print("unknown")
        return 0
    if getattr(ns, "info", False):
        _print_info()
        return 0

    seed = _resolve_seed(getattr(ns, "seed", None))
    if getattr(ns, "deterministic", False) or seed is not None:
        _set_deterministic_env(seed)

    if ns.cmd == "play":
        if ns.total is not None and ns.total < 0:
            logging.error("Starting total must be non-negative: %d", ns.total)
            return 2
        if ns.depth < 1:
            logging.error("Search depth must be at least 1: %d", ns.depth)
            return 2
        try:
            run_game(PlayArgs(total_counters=ns.total, seed=seed, depth=ns.depth))
        except EOFError as e:
            logging.error("%s", e)
            return 1
        return 0

    if ns.cmd == "best-move":
        if ns.depth < 1:
            logging.error("Search depth must be at least 1: %d", ns.depth)
            return 2
        import sys as _sys
        if ns.stdin:
            import csv as _csv
            w = _csv.writer(_sys.stdout)
            w.writerow(["remaining", "take", "nodes"])
            for line in _sys.stdin:
                n = _parse_pile(line)
                if n is None or n < 1:
                    continue
                take, stats = _computer_choice(n, ns.depth)
                w.writerow([n, take, stats.nodes])
            return 0
        if ns.remaining is None or ns.remaining < 1:
            logging.error("Pile must hold at least one stick for the computer to move.")
            return 2
        take, stats = _computer_choice(ns.remaining, ns.depth)
        logging.info(
            "remaining=%d take=%d nodes=%d cutoffs=%d",
            ns.remaining,
            take,
            stats.nodes,
            stats.cutoffs,
        )
        return 0

    if ns.cmd == "solve":
        import sys as _sys
        if ns.stdin:
            import csv as _csv
            w = _csv.writer(_sys.stdout)
            w.writerow(["remaining", "value", "plies_to_end", "optimal_moves"])
            for line in _sys.stdin:
                n = _parse_pile(line)
                if n is None:
                    continue
                res = solve_state(n)
                w.writerow([
                    n,
                    res['value'],
                    res['plies_to_end'],
                    ' '.join(map(str, res['optimal_moves'])),
                ])
            return 0
        if ns.remaining is None or ns.remaining < 0:
            logging.error("Invalid pile size. Must be a non-negative integer.")
            return 2
        res = solve_state(ns.remaining)
        logging.info(
            "value=%s plies=%s optimal=%s",
            res['value'],
            res['plies_to_end'],
            list(res['optimal_moves']),
        )
        return 0

    if ns.cmd == "simulate":
        if ns.epsilon < 0.0 or ns.epsilon > 1.0:
            logging.error("Epsilon out of range [0,1]: %s", ns.epsilon)
            return 2
        if ns.games < 1:
            logging.error("Number of games must be positive: %d", ns.games)
            return 2
        if ns.start is not None and not 1 <= ns.start <= MAX_START:
            logging.error("Starting pile out of range [1,%d]: %d", MAX_START, ns.start)
            return 2
        games = generate_trajectories(
            policy=ns.policy,
            epsilon=ns.epsilon,
            max_games=ns.games,
            seed=seed if seed is not None else 42,
            start=ns.start,
        )
        s = summarize(games)
        logging.info(
            "policy=%s games=%d computer_wins=%d win_rate=%.3f mean_plies=%.2f",
            ns.policy,
            s['games'],
            s['computer_wins'],
            s['computer_win_rate'],
            s['mean_plies'],
        )
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
