import json
from pathlib import Path

import pytest

from tictactoe3.config import Params, load_params, parse_symbols, read_config_file
from tictactoe3.errors import ConfigurationError


@pytest.fixture(autouse=True)
def _no_ambient_config(monkeypatch, tmp_path):
    monkeypatch.delenv("TTT3_CONFIG", raising=False)
    monkeypatch.setenv("TTT3_REPO_ROOT", str(tmp_path))


def write(tmp_path: Path, data) -> Path:
    p = tmp_path / "cfg.json"
    p.write_text(data if isinstance(data, str) else json.dumps(data))
    return p


def test_defaults():
    assert load_params() == Params(3, "X", "O", "A")


def test_file_then_overrides(tmp_path):
    p = write(tmp_path, {"play_field_size": 6, "ai_player_symbol": "Z"})
    params = load_params(p, {"player_one_symbol": "#"})
    assert params == Params(6, "#", "O", "Z")


def test_env_config_path(tmp_path, monkeypatch):
    p = write(tmp_path, {"play_field_size": 4})
    monkeypatch.setenv("TTT3_CONFIG", str(p))
    assert load_params().play_field_size == 4


def test_repo_root_config_is_picked_up(tmp_path):
    (tmp_path / "ttt3.json").write_text(json.dumps({"play_field_size": 5}))
    assert load_params().play_field_size == 5


def test_missing_env_config_is_an_error(tmp_path, monkeypatch):
    monkeypatch.setenv("TTT3_CONFIG", str(tmp_path / "nope.json"))
    with pytest.raises(ConfigurationError):
        load_params()


@pytest.mark.parametrize("data", [
    "{not json",
    "[1, 2]",
    {"colour": "red"},
    {"play_field_size": "3"},
    {"play_field_size": True},
    {"player_one_symbol": 1},
])
def test_bad_files(tmp_path, data):
    with pytest.raises(ConfigurationError):
        read_config_file(write(tmp_path, data))


@pytest.mark.parametrize("overrides", [
    {"play_field_size": 2},
    {"play_field_size": 11},
    {"player_two_symbol": "X"},
    {"ai_player_symbol": "AI"},
    {"ai_player_symbol": " "},
])
def test_out_of_range_settings(overrides):
    with pytest.raises(ConfigurationError):
        load_params(overrides=overrides)


def test_parse_symbols():
    assert parse_symbols("X, O ,A") == {
        "player_one_symbol": "X",
        "player_two_symbol": "O",
        "ai_player_symbol": "A",
    }
    with pytest.raises(ConfigurationError):
        parse_symbols("X,O")
