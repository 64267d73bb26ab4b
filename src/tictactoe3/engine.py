"""
Play engine: the game controller.

The engine owns one PlayField and the player tuple for the whole session.
Each call to perform_action places the mark of the player whose turn it is,
advances the turn and updates the status. A completed line wins even when it
fills the last free cell; a full field without a line is a draw.

Not thread-safe. A host serving several threads must hold one lock per
engine around every call.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence, Tuple

from .config import Params
from .errors import IllegalStateError
from .field import PlayField
from .models import Cell, Player, RuntimeStatus, win_score_for
from .players import build_players, default_players


class PlayEngine:
    def __init__(self, params: Params, players: Optional[Sequence[Player]] = None) -> None:
        """Build a fresh session.

        ``players`` defaults to the Player1/Player2/AI line-up taken from
        ``params``. Raises ConfigurationError on a degenerate size or
        conflicting marks.
        """
        self._params = params
        self._field = PlayField(params.play_field_size)
        self._players: Tuple[Player, ...] = (
            default_players(params) if players is None else build_players(players)
        )
        self._win_score = win_score_for(self._field.size)
        self._turn = 0
        self._status = RuntimeStatus.RUNNING
        self._winner: Optional[Player] = None

    @property
    def status(self) -> RuntimeStatus:
        return self._status

    @property
    def is_over(self) -> bool:
        return self._status is RuntimeStatus.OVER

    @property
    def next_player(self) -> Player:
        """Player whose turn it is. Only meaningful while running."""
        return self._players[self._turn]

    @property
    def turn(self) -> int:
        return self._turn

    @property
    def players(self) -> Tuple[Player, ...]:
        return self._players

    @property
    def params(self) -> Params:
        return self._params

    @property
    def field(self) -> PlayField:
        return self._field

    @property
    def winner(self) -> Optional[Player]:
        return self._winner

    @property
    def win_score(self) -> int:
        """Run length a player needs to win: min(field size, 5)."""
        return self._win_score

    @property
    def moves_played(self) -> int:
        return self._field.size ** 2 - self._field.get_free_room_count()

    def perform_action(self, cell: Cell) -> None:
        """Play ``cell`` for the current player.

        Raises InvalidCellError (propagated from the field, turn unchanged)
        when the cell is outside the field or taken, and IllegalStateError
        when the game is already over.
        """
        if self._status is RuntimeStatus.OVER:
            raise IllegalStateError("The game is over; no more moves are accepted")

        player = self._players[self._turn]
        self._field.put(player.mark, cell)
        logging.debug("%s [%s] played %s", player.name, player.mark, cell)

        self._turn = (self._turn + 1) % len(self._players)

        if (
            self._field.calculate_horizontal_score(cell) >= self._win_score
            or self._field.calculate_vertical_score(cell) >= self._win_score
            or self._field.calculate_diagonal1_score(cell) >= self._win_score
            or self._field.calculate_diagonal2_score(cell) >= self._win_score
        ):
            self._status = RuntimeStatus.OVER
            self._winner = player
            logging.info("%s [%s] wins after %d moves", player.name, player.mark, self.moves_played)
        elif self._field.get_free_room_count() == 0:
            self._status = RuntimeStatus.OVER
            logging.info("Draw: the field is full")
