"""
Game basics: players, pile state, move legality, successors.
Teaching notes:
- A state is a pile of counters plus the player to move. Human always starts.
- A "ply" is a half-move (one player's turn). Each ply removes 1 to 3 counters.
- The player recorded to move when the pile is empty is declared the winner,
  i.e. the player who did not take the last counter.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

MAX_TAKE = 3
MIN_START = 4
MAX_START = 20

INVALID_MOVE_MESSAGE = "Invalid number of sticks!"


class InvalidMove(ValueError):
    """Raised when a take is zero, above MAX_TAKE, or larger than the pile."""

    def __init__(self, take: int, remaining: int) -> None:
        super().__init__(INVALID_MOVE_MESSAGE)
        self.take = take
        self.remaining = remaining


class Player(Enum):
    HUMAN = "Human"
    COMPUTER = "Computer"

    @property
    def label(self) -> str:
        return self.value

    @property
    def is_computer(self) -> bool:
        return self is Player.COMPUTER

    @property
    def opponent(self) -> "Player":
        return Player.HUMAN if self is Player.COMPUTER else Player.COMPUTER


@dataclass(frozen=True)
class GameState:
    current_player: Player
    remaining_count: int

    def __post_init__(self) -> None:
        if self.remaining_count < 0:
            raise ValueError(f"Counter total must be non-negative: {self.remaining_count}")

    def is_terminal(self) -> bool:
        return self.remaining_count == 0

    @property
    def winner(self) -> Optional[Player]:
        return self.current_player if self.is_terminal() else None

    def legal_moves(self) -> List[int]:
        return list(range(1, min(MAX_TAKE, self.remaining_count) + 1))

    def apply_move(self, take: int) -> "GameState":
        if take < 1 or take > MAX_TAKE or take > self.remaining_count:
            raise InvalidMove(take, self.remaining_count)
        return GameState(
            current_player=self.current_player.opponent,
            remaining_count=self.remaining_count - take,
        )

    def successors(self) -> List["GameState"]:
        return [self.apply_move(n) for n in self.legal_moves()]


def new_game(total_counters: int) -> GameState:
    return GameState(current_player=Player.HUMAN, remaining_count=total_counters)
