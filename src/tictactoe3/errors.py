"""
Exception hierarchy for the game engine and its collaborators.

ConfigurationError is fatal to building a session, InvalidCellError is a
recoverable game event (nothing was mutated), IllegalStateError signals an
integration bug such as moving after the game is over.
"""
from __future__ import annotations

from typing import Optional


class TicTacToeError(Exception):
    """Base class for all errors raised by tictactoe3."""


class ConfigurationError(TicTacToeError, ValueError):
    pass


class InvalidCellError(TicTacToeError):
    def __init__(self, cell, reason: str = "invalid cell") -> None:
        self.cell = cell
        self.reason = reason
        super().__init__(f"{reason}: {cell}")


class IllegalStateError(TicTacToeError, RuntimeError):
    pass


class InvalidInputError(TicTacToeError, ValueError):
    def __init__(self, text: str, hint: Optional[str] = None) -> None:
        self.text = text
        msg = f"Cannot read a cell from {text!r}"
        if hint:
            msg = f"{msg} ({hint})"
        super().__init__(msg)
