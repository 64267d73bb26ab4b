"""
Player registry: a fixed, ordered tuple of immutable participants.
"""
from __future__ import annotations

from typing import Sequence, Tuple

from .errors import ConfigurationError
from .models import EMPTY, Player


def _check_mark(player: Player) -> None:
    mark = player.mark
    if not isinstance(mark, str) or mark == EMPTY:
        raise ConfigurationError(f"{player.name}: mark must be a non-empty string")
    if len(mark) != 1:
        raise ConfigurationError(f"{player.name}: mark must be a single character, got {mark!r}")
    if mark.isspace():
        raise ConfigurationError(f"{player.name}: mark cannot be whitespace")


def build_players(players: Sequence[Player]) -> Tuple[Player, ...]:
    """Validate ``players`` and freeze them in turn order."""
    if not players:
        raise ConfigurationError("At least one player is required")
    seen = {}
    for p in players:
        if not p.name or not p.name.strip():
            raise ConfigurationError("Player name cannot be blank")
        _check_mark(p)
        if p.mark in seen:
            raise ConfigurationError(
                f"Players {seen[p.mark]!r} and {p.name!r} share the mark {p.mark!r}"
            )
        seen[p.mark] = p.name
    return tuple(players)


def default_players(params) -> Tuple[Player, ...]:
    """The three-seat line-up: two humans followed by the AI."""
    return build_players([
        Player("Player1", params.player_one_symbol),
        Player("Player2", params.player_two_symbol),
        Player("AI", params.ai_player_symbol, is_ai=True),
    ])
