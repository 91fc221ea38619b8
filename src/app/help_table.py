from __future__ import annotations

from dataclasses import dataclass

from protocol import GameRules, MoveSet, Outcome, verdict

CORNER = "PC\\User"


@dataclass(frozen=True)
class MatchupTable:
    # rows[i][j]: outcome when the computer plays move i and the player move j.
    move_set: MoveSet
    rows: tuple[tuple[Outcome, ...], ...]

    @property
    def moves(self) -> tuple[str, ...]:
        return self.move_set.moves

    def outcome(self, computer_move: str, player_move: str) -> Outcome:
        return self.rows[self.move_set.index_of(computer_move)][self.move_set.index_of(player_move)]


def build_table(move_set: MoveSet, rules: GameRules | None = None) -> MatchupTable:
    rules = rules or GameRules(move_set)
    rows = tuple(
        tuple(rules.determine_outcome(computer_move, player_move) for player_move in move_set)
        for computer_move in move_set
    )
    return MatchupTable(move_set=move_set, rows=rows)


def format_table(table: MatchupTable) -> str:
    header = [CORNER, *table.moves]
    body = [[move, *(verdict(o) for o in row)] for move, row in zip(table.moves, table.rows)]

    widths = [max(len(line[col]) for line in [header, *body]) for col in range(len(header))]

    def render(cells: list[str]) -> str:
        return "  ".join(f"{cell:{width}}" for cell, width in zip(cells, widths)).rstrip()

    lines: list[str] = [render(header)]
    lines.append("-" * len(lines[0]))
    lines.extend(render(cells) for cells in body)
    return "\n".join(lines)
