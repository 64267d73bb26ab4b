"""
Game configuration: field size and the three player symbols.

Resolution order for load_params: built-in defaults -> JSON config file ->
explicit overrides (usually CLI flags). Example file::

    {"play_field_size": 5, "player_one_symbol": "X",
     "player_two_symbol": "O", "ai_player_symbol": "A"}
"""
from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .errors import ConfigurationError
from .paths import default_config_path

MIN_FIELD_SIZE = 3
MAX_FIELD_SIZE = 10


@dataclass(frozen=True)
class Params:
    play_field_size: int = 3
    player_one_symbol: str = "X"
    player_two_symbol: str = "O"
    ai_player_symbol: str = "A"

    def symbols(self) -> tuple:
        return (self.player_one_symbol, self.player_two_symbol, self.ai_player_symbol)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


_FIELD_TYPES = {f.name: (int if f.name == "play_field_size" else str) for f in fields(Params)}


def _coerce(values: Mapping[str, Any], source: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, value in values.items():
        if key not in _FIELD_TYPES:
            raise ConfigurationError(f"{source}: unknown setting {key!r}")
        if value is None:
            continue
        expected = _FIELD_TYPES[key]
        if expected is int and (isinstance(value, bool) or not isinstance(value, int)):
            raise ConfigurationError(f"{source}: {key} must be an integer, got {value!r}")
        if expected is str and not isinstance(value, str):
            raise ConfigurationError(f"{source}: {key} must be a string, got {value!r}")
        out[key] = value
    return out


def read_config_file(path: Path) -> Dict[str, Any]:
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigurationError(f"Config file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Config file {path} is not valid JSON: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Config file {path} must contain a JSON object")
    return _coerce(raw, str(path))


def validate_params(params: Params) -> Params:
    """Bounds for user supplied configuration.

    The engine accepts any size >= 1; boards read from files or flags must
    fit the console, hence the narrower range.
    """
    size = params.play_field_size
    if not MIN_FIELD_SIZE <= size <= MAX_FIELD_SIZE:
        raise ConfigurationError(
            f"play_field_size must be between {MIN_FIELD_SIZE} and {MAX_FIELD_SIZE}, got {size}"
        )
    for name, sym in zip(("player_one_symbol", "player_two_symbol", "ai_player_symbol"), params.symbols()):
        if len(sym) != 1 or sym.isspace():
            raise ConfigurationError(f"{name} must be a single visible character, got {sym!r}")
    if len(set(params.symbols())) != 3:
        raise ConfigurationError(f"Player symbols must be distinct, got {params.symbols()}")
    return params


def load_params(path: Optional[Path] = None, overrides: Optional[Mapping[str, Any]] = None) -> Params:
    params = Params()
    cfg_path = path if path is not None else default_config_path()
    if cfg_path is not None:
        logging.debug("Loading config from %s", cfg_path)
        params = replace(params, **read_config_file(cfg_path))
    if overrides:
        params = replace(params, **_coerce(overrides, "overrides"))
    return validate_params(params)


def parse_symbols(text: str) -> Dict[str, str]:
    """Parse a "X,O,A" flag into the three symbol settings."""
    parts = [p.strip() for p in text.split(",")]
    if len(parts) != 3:
        raise ConfigurationError(f"Expected three comma-separated symbols, got {text!r}")
    return dict(zip(("player_one_symbol", "player_two_symbol", "ai_player_symbol"), parts))
