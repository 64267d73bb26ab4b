"""
AI move selection. The engine never calls these; the caller asks a strategy
for a cell when the next player is AI-controlled and hands that cell to
PlayEngine.perform_action.

Teaching notes:
- Local motifs (win now, block now) cover most of what matters on small
  fields; the tactical strategy checks them before looking at line length.
- Look-ahead works on field.copy(), never on the live field.
"""
from __future__ import annotations

import random
from typing import List, Optional, Sequence

from .errors import ConfigurationError, IllegalStateError
from .field import PlayField
from .models import Cell, Player


def immediate_winning_cells(field: PlayField, mark: str, win_score: int) -> List[Cell]:
    wins: List[Cell] = []
    for cell in field.empty_cells():
        f = field.copy()
        f.put(mark, cell)
        if max(f.line_scores(cell).values()) >= win_score:
            wins.append(cell)
    return wins


def longest_line_after(field: PlayField, mark: str, cell: Cell) -> int:
    f = field.copy()
    f.put(mark, cell)
    return max(f.line_scores(cell).values())


def _free_cells(field: PlayField) -> List[Cell]:
    cells = field.empty_cells()
    if not cells:
        raise IllegalStateError("No free cell left to choose from")
    return cells


class RandomStrategy:
    """Uniformly random free cell."""

    name = "random"

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def choose_cell(
        self,
        field: PlayField,
        player: Player,
        win_score: int,
        rivals: Sequence[Player] = (),
    ) -> Cell:
        return self._rng.choice(_free_cells(field))


class TacticalStrategy:
    """Win if possible, else block, else extend the longest own line."""

    name = "tactical"

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def choose_cell(
        self,
        field: PlayField,
        player: Player,
        win_score: int,
        rivals: Sequence[Player] = (),
    ) -> Cell:
        free = _free_cells(field)
        wins = immediate_winning_cells(field, player.mark, win_score)
        if wins:
            return wins[0]
        # rivals are given in turn order, so the most urgent threat comes first
        for rival in rivals:
            blocks = immediate_winning_cells(field, rival.mark, win_score)
            if blocks:
                return blocks[0]

        center = (field.size - 1) / 2.0

        def key(c: Cell):
            dist = abs(c.row - center) + abs(c.col - center)
            return (-longest_line_after(field, player.mark, c), dist)

        best = min(key(c) for c in free)
        candidates = [c for c in free if key(c) == best]
        return self._rng.choice(candidates)


STRATEGIES = {
    RandomStrategy.name: RandomStrategy,
    TacticalStrategy.name: TacticalStrategy,
}


def get_strategy(name: str, seed: Optional[int] = None):
    try:
        cls = STRATEGIES[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown strategy {name!r}; choose one of {sorted(STRATEGIES)}"
        ) from None
    return cls(seed)
