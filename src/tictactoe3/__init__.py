"""tictactoe3 package.

A three-player tic-tac-toe engine (two humans and an AI) on an n x n field,
with a console front end, AI strategies, and a self-play simulator.

Convenience imports are exposed for common workflows.
"""

from .config import Params, load_params
from .engine import PlayEngine
from .errors import ConfigurationError, IllegalStateError, InvalidCellError
from .field import PlayField
from .models import Cell, Player, RuntimeStatus
from .simulate import SimulationArgs, run_simulation

__all__ = [
    "Cell",
    "ConfigurationError",
    "IllegalStateError",
    "InvalidCellError",
    "Params",
    "PlayEngine",
    "PlayField",
    "Player",
    "RuntimeStatus",
    "SimulationArgs",
    "load_params",
    "run_simulation",
]
