"""
Play field: grid storage, placement and line scoring.
Teaching notes:
- The grid is an n x n numpy array of one-character marks; EMPTY is "".
- Scores count the contiguous run of the mark at a cell along one axis,
  walking outward in both directions and counting the cell itself.
- Scores are only meaningful for an occupied cell; an empty cell scores 0.
"""
from __future__ import annotations

from typing import Dict, List, Tuple

import numpy as np

from .errors import ConfigurationError, InvalidCellError
from .models import EMPTY, Cell

# (row step, col step) for each axis; the opposite direction is the negation.
DIRECTIONS: Dict[str, Tuple[int, int]] = {
    "horizontal": (0, 1),
    "vertical": (1, 0),
    "diagonal1": (1, 1),  # top-left to bottom-right
    "diagonal2": (1, -1),  # top-right to bottom-left
}


class PlayField:
    def __init__(self, size: int) -> None:
        if isinstance(size, bool) or not isinstance(size, (int, np.integer)):
            raise ConfigurationError(f"Field size must be an integer, got {size!r}")
        if size < 1:
            raise ConfigurationError(f"Field size must be at least 1, got {size}")
        self._size = int(size)
        self._grid = np.full((self._size, self._size), EMPTY, dtype="<U1")
        self._free = self._size * self._size

    @property
    def size(self) -> int:
        return self._size

    def contains(self, cell: Cell) -> bool:
        return 0 <= cell.row < self._size and 0 <= cell.col < self._size

    def mark_at(self, cell: Cell) -> str:
        if not self.contains(cell):
            raise InvalidCellError(cell, "cell is outside the field")
        return str(self._grid[cell.row, cell.col])

    def is_empty(self, cell: Cell) -> bool:
        return self.mark_at(cell) == EMPTY

    def put(self, mark: str, cell: Cell) -> None:
        """Place ``mark`` on ``cell``.

        Raises InvalidCellError when the cell is outside the field or already
        taken, and ValueError when ``mark`` is not a single character; the
        field is left untouched in both cases.
        """
        if not isinstance(mark, str) or len(mark) != 1:
            raise ValueError(f"A mark must be exactly one character, got {mark!r}")
        if not self.contains(cell):
            raise InvalidCellError(cell, "cell is outside the field")
        if self._grid[cell.row, cell.col] != EMPTY:
            raise InvalidCellError(cell, "cell is already taken")
        self._grid[cell.row, cell.col] = mark
        self._free -= 1

    def get_free_room_count(self) -> int:
        return self._free

    def empty_cells(self) -> List[Cell]:
        return [Cell(int(r), int(c)) for r, c in np.argwhere(self._grid == EMPTY)]

    def rows(self) -> List[List[str]]:
        return [[str(v) for v in row] for row in self._grid]

    def copy(self) -> "PlayField":
        other = PlayField(self._size)
        other._grid = self._grid.copy()
        other._free = self._free
        return other

    def _score(self, cell: Cell, step: Tuple[int, int]) -> int:
        if not self.contains(cell):
            raise InvalidCellError(cell, "cell is outside the field")
        mark = self._grid[cell.row, cell.col]
        if mark == EMPTY:
            return 0
        dr, dc = step
        count = 1
        for sign in (1, -1):
            r = cell.row + sign * dr
            c = cell.col + sign * dc
            while 0 <= r < self._size and 0 <= c < self._size and self._grid[r, c] == mark:
                count += 1
                r += sign * dr
                c += sign * dc
        return count

    def calculate_horizontal_score(self, cell: Cell) -> int:
        return self._score(cell, DIRECTIONS["horizontal"])

    def calculate_vertical_score(self, cell: Cell) -> int:
        return self._score(cell, DIRECTIONS["vertical"])

    def calculate_diagonal1_score(self, cell: Cell) -> int:
        return self._score(cell, DIRECTIONS["diagonal1"])

    def calculate_diagonal2_score(self, cell: Cell) -> int:
        return self._score(cell, DIRECTIONS["diagonal2"])

    def line_scores(self, cell: Cell) -> Dict[str, int]:
        return {
            "horizontal": self.calculate_horizontal_score(cell),
            "vertical": self.calculate_vertical_score(cell),
            "diagonal1": self.calculate_diagonal1_score(cell),
            "diagonal2": self.calculate_diagonal2_score(cell),
        }

    def __repr__(self) -> str:
        return f"PlayField(size={self._size}, free={self._free})"
