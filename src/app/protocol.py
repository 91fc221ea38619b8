from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Literal

Outcome = Literal["computer_win", "player_win", "draw"]

VERDICTS: dict[str, str] = {
    "computer_win": "Computer wins",
    "player_win": "You win",
    "draw": "Draw",
}


class ConfigurationError(ValueError):
    """The move list given at startup cannot be played."""


class InvalidMove(ValueError):
    """A move name or menu selection that is not part of the move set."""


@dataclass(frozen=True)
class MoveSet:
    moves: tuple[str, ...]
    _index: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "moves", tuple(self.moves))
        _validate(self.moves)
        object.__setattr__(self, "_index", {name: i for i, name in enumerate(self.moves)})

    @classmethod
    def from_args(cls, args: Iterable[str]) -> "MoveSet":
        return cls(tuple(args))

    def __len__(self) -> int:
        return len(self.moves)

    def __iter__(self) -> Iterator[str]:
        return iter(self.moves)

    def __getitem__(self, i: int) -> str:
        return self.moves[i]

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def index_of(self, name: str) -> int:
        try:
            return self._index[name]
        except KeyError:
            raise InvalidMove(f"unknown move: {name!r}") from None


def _validate(moves: tuple[str, ...]) -> None:
    # Order matters: the first violated rule is the one reported.
    if not moves:
        raise ConfigurationError("No moves provided. Please provide an odd number of non-repeating moves.")
    if len(moves) == 1:
        raise ConfigurationError(
            "Only one move provided. Please provide an odd number of non-repeating moves greater than 1."
        )
    if len(moves) % 2 == 0:
        raise ConfigurationError("Even number of moves provided. Please provide an odd number of non-repeating moves.")
    if len(set(moves)) != len(moves):
        raise ConfigurationError("Duplicate moves found. Please provide non-repeating moves.")


class GameRules:
    """Cyclic "beats" relation over an odd-sized move set.

    Every move beats the ``half`` moves that precede it (wrapping around) and
    loses to the ``half`` moves that follow it, so ``rock paper scissors``
    gives the classic table: paper beats rock, scissors beats paper, rock
    beats scissors.
    """

    def __init__(self, move_set: MoveSet) -> None:
        self.move_set = move_set
        self.size = len(move_set)
        self.half = self.size // 2

    def signed_distance(self, computer_move: str, player_move: str) -> int:
        a = self.move_set.index_of(computer_move)
        b = self.move_set.index_of(player_move)
        # Shifting by half re-centres the modular distance into [-half, +half].
        return (a - b + self.half + self.size) % self.size - self.half

    def determine_outcome(self, computer_move: str, player_move: str) -> Outcome:
        distance = self.signed_distance(computer_move, player_move)
        if distance == 0:
            return "draw"
        return "computer_win" if distance > 0 else "player_win"

    def beats(self, move: str) -> tuple[str, ...]:
        """Moves that ``move`` wins against, nearest first."""
        i = self.move_set.index_of(move)
        return tuple(self.move_set[(i - step) % self.size] for step in range(1, self.half + 1))

    def loses_to(self, move: str) -> tuple[str, ...]:
        i = self.move_set.index_of(move)
        return tuple(self.move_set[(i + step) % self.size] for step in range(1, self.half + 1))


def reverse_outcome(outcome: Outcome) -> Outcome:
    if outcome == "computer_win":
        return "player_win"
    if outcome == "player_win":
        return "computer_win"
    return "draw"


def verdict(outcome: Outcome) -> str:
    return VERDICTS[outcome]
