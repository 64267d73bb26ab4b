"""
Console presentation: render the field, read human moves, drive AI moves.

Cells are shown and typed 1-based ("2,3" is row 2, column 3). Input that
cannot be parsed or that the engine rejects is reported and the same player
is asked again; the turn never advances on a rejected move.
"""
from __future__ import annotations

import re
from typing import Callable, List, Optional

from .engine import PlayEngine
from .errors import InvalidCellError, InvalidInputError
from .field import PlayField
from .models import EMPTY, Cell, Player

_SPLIT = re.compile(r"\s*[,;]\s*|\s+")


def render_field(field: PlayField) -> str:
    width = len(str(field.size))
    header = " " * (width + 1) + " ".join(str(c + 1).rjust(width) for c in range(field.size))
    lines: List[str] = [header]
    for r, row in enumerate(field.rows()):
        cells = " ".join((m if m != EMPTY else ".").rjust(width) for m in row)
        lines.append(f"{str(r + 1).rjust(width)} {cells}")
    return "\n".join(lines)


def parse_cell(text: str, size: int) -> Cell:
    """Parse "row,col" (1-based) into a zero-based Cell.

    Only the syntax is checked; whether the cell is on the field is up to
    the engine.
    """
    raw = (text or "").strip()
    parts = _SPLIT.split(raw)
    if len(parts) != 2 or not all(parts):
        raise InvalidInputError(text, f"expected row,col between 1 and {size}")
    try:
        row, col = (int(p) for p in parts)
    except ValueError:
        raise InvalidInputError(text, "row and column must be whole numbers") from None
    return Cell(row - 1, col - 1)


class ConsoleSession:
    def __init__(
        self,
        engine: PlayEngine,
        strategy,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ) -> None:
        self.engine = engine
        self.strategy = strategy
        self._input = input_fn
        self._output = output_fn

    def _rivals(self, player: Player) -> List[Player]:
        players = self.engine.players
        i = players.index(player)
        return list(players[i + 1:] + players[:i])

    def _ai_cell(self, player: Player) -> Cell:
        cell = self.strategy.choose_cell(
            self.engine.field, player, self.engine.win_score, self._rivals(player)
        )
        self._output(f"{player.name} [{player.mark}] plays {cell.row + 1},{cell.col + 1}")
        return cell

    def _human_cell(self, player: Player) -> Cell:
        text = self._input(f"{player.name} [{player.mark}], enter row,col: ")
        return parse_cell(text, self.engine.field.size)

    def play_turn(self) -> None:
        """Obtain and play one move, re-asking until the engine accepts it."""
        player = self.engine.next_player
        if player.is_ai:
            # strategies only pick free cells, so a rejection here is a bug
            self.engine.perform_action(self._ai_cell(player))
            return
        while True:
            try:
                self.engine.perform_action(self._human_cell(player))
                return
            except (InvalidInputError, InvalidCellError) as e:
                self._output(f"Invalid move: {e}")

    def run(self) -> Optional[Player]:
        eng = self.engine
        self._output(
            f"Field {eng.field.size}x{eng.field.size}, "
            f"{eng.win_score} in a row wins. "
            + ", ".join(f"{p.name}={p.mark}" for p in eng.players)
        )
        while not eng.is_over:
            self._output(render_field(eng.field))
            self.play_turn()
        self._output(render_field(eng.field))
        if eng.winner is not None:
            self._output(f"{eng.winner.name} [{eng.winner.mark}] wins!")
        else:
            self._output("Draw: no free cells left.")
        return eng.winner
