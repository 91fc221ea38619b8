from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Literal

from commit_reveal import CommitmentScheme, HmacCommitmentScheme, new_commitment
from help_table import build_table, format_table
from protocol import GameRules, InvalidMove, MoveSet, Outcome, verdict

SessionState = Literal["initializing", "awaiting_input", "resolved", "exited"]

EXIT_COMMAND = "0"
HELP_COMMAND = "?"
PROMPT = "Enter your move: "
SELECTION_PATTERN = re.compile(r"[+-]?[0-9]+")

logger = logging.getLogger("rps.game_session")


class SessionError(RuntimeError):
    """A command was sent to a session that cannot accept it."""


@dataclass(frozen=True)
class RoundResult:
    player_move: str
    computer_move: str
    outcome: Outcome
    key: str
    hmac: str

    @property
    def verdict(self) -> str:
        return verdict(self.outcome)


class GameSession:
    """One round against the computer.

    The computer's move and the HMAC key are drawn when the session is
    created; only the HMAC is shown until the player has picked a move.
    """

    def __init__(self, move_set: MoveSet, scheme: CommitmentScheme | None = None) -> None:
        self.move_set = move_set
        self.rules = GameRules(move_set)
        self.state: SessionState = "initializing"
        self.result: RoundResult | None = None
        self._commitment = new_commitment(move_set, scheme or HmacCommitmentScheme())

    @property
    def hmac(self) -> str:
        return self._commitment.hmac

    @property
    def finished(self) -> bool:
        return self.state in ("resolved", "exited")

    def start(self) -> list[str]:
        if self.state != "initializing":
            raise SessionError(f"session already started (state={self.state})")
        lines = [f"HMAC: {self.hmac}", "Available moves:"]
        lines.extend(f"{i} - {move}" for i, move in enumerate(self.move_set, start=1))
        lines.append(f"{EXIT_COMMAND} - exit")
        lines.append(f"{HELP_COMMAND} - help")
        self._transition("awaiting_input")
        return lines

    def handle(self, command: str) -> list[str]:
        if self.state != "awaiting_input":
            raise SessionError(f"session is not awaiting input (state={self.state})")

        command = command.strip()
        if command == EXIT_COMMAND:
            self._transition("exited")
            return ["Exiting the game."]
        if command == HELP_COMMAND:
            return [format_table(build_table(self.move_set, self.rules))]

        try:
            player_move = self._parse_selection(command)
        except InvalidMove:
            logger.debug("rejected input %r", command)
            return ["Invalid Move! Please try again"]
        return self._resolve(player_move)

    def play(
        self,
        read: Callable[[str], str] | None = None,
        write: Callable[[str], None] | None = None,
    ) -> RoundResult | None:
        """Run the session on the console until the player picks a move or exits."""
        read = read or input
        write = write or print
        for line in self.start():
            write(line)
        while not self.finished:
            try:
                command = read(PROMPT)
            except (EOFError, KeyboardInterrupt):
                command = EXIT_COMMAND
            for line in self.handle(command):
                write(line)
        return self.result

    def _parse_selection(self, command: str) -> str:
        # ASCII digits with an optional sign, as a plain integer parse reads them.
        if not SELECTION_PATTERN.fullmatch(command):
            raise InvalidMove(f"not a menu entry: {command!r}")
        try:
            choice = int(command)
        except ValueError:
            raise InvalidMove(f"not a menu entry: {command[:20]!r}...") from None
        if not 1 <= choice <= len(self.move_set):
            raise InvalidMove(f"menu entry out of range: {command[:20]}")
        return self.move_set[choice - 1]

    def _resolve(self, player_move: str) -> list[str]:
        commitment = self._commitment
        outcome = self.rules.determine_outcome(commitment.move, player_move)
        self.result = RoundResult(
            player_move=player_move,
            computer_move=commitment.move,
            outcome=outcome,
            key=commitment.key,
            hmac=commitment.hmac,
        )
        self._transition("resolved")
        return [
            f"Your move: {player_move}",
            f"Computer move: {commitment.move}",
            self.result.verdict,
            f"HMAC key: {commitment.key}",
        ]

    def _transition(self, state: SessionState) -> None:
        logger.debug("session %s -> %s", self.state, state)
        self.state = state
