"""
Value types shared by the field, the engine and the presentation layer.
Teaching notes:
- Cells are zero-based (row, col) pairs; the console shows them 1-based.
- A mark is a single character. EMPTY ("") marks a free cell.
- Players are immutable records; the AI flag is only a tag that tells the
  caller who supplies the next cell.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

EMPTY = ""
MAX_WIN_SCORE = 5


@dataclass(frozen=True)
class Cell:
    row: int
    col: int

    def __str__(self) -> str:
        return f"({self.row}, {self.col})"


@dataclass(frozen=True)
class Player:
    name: str
    mark: str
    is_ai: bool = False


class RuntimeStatus(Enum):
    RUNNING = "running"
    OVER = "over"


def win_score_for(size: int) -> int:
    """Run length needed to win on a size x size field."""
    return min(size, MAX_WIN_SCORE)
