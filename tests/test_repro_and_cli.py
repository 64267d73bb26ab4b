import os
import subprocess
import sys
from pathlib import Path

import pytest

SRC = Path(__file__).resolve().parents[1] / "src"


def _run_cli(args: list[str], cwd: Path, stdin: str = "") -> subprocess.CompletedProcess:
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(SRC), env.get("PYTHONPATH")]))
    env["TTT3_REPO_ROOT"] = str(cwd)
    env.pop("TTT3_CONFIG", None)
    exe = [sys.executable, "-m", "tictactoe3.cli"]
    return subprocess.run(exe + args, cwd=cwd, input=stdin, capture_output=True, text=True, env=env)


def test_cli_play_full_game(tmp_path: Path):
    cells = [f"{r},{c}" for r in range(1, 4) for c in range(1, 4)]
    stdin = "\n".join(cells * 9) + "\n"
    r = _run_cli(["--seed", "5", "play", "--size", "3"], cwd=tmp_path, stdin=stdin)
    assert r.returncode == 0, r.stderr
    assert "wins!" in r.stdout or "Draw" in r.stdout


def test_cli_play_input_closed(tmp_path: Path):
    r = _run_cli(["play"], cwd=tmp_path, stdin="1,1\n")
    assert r.returncode == 1


def test_cli_simulate_and_export(tmp_path: Path):
    outdir = tmp_path / "cli_out"
    r = _run_cli(
        ["--seed", "3", "simulate", "--games", "4", "--size", "4", "--out", str(outdir)], cwd=tmp_path
    )
    assert r.returncode == 0, r.stderr
    assert "games=4" in r.stdout + r.stderr
    assert (outdir / "games.csv").exists()
    assert (outdir / "manifest.json").exists()


def test_cli_uses_config_file(tmp_path: Path):
    cfg = tmp_path / "ttt3.json"
    cfg.write_text('{"play_field_size": 5}')
    r = _run_cli(["--config", str(cfg), "simulate", "--games", "1"], cwd=tmp_path)
    assert r.returncode == 0, r.stderr
    assert "5x5" in r.stdout + r.stderr


@pytest.mark.parametrize("bad", [
    ["play", "--size", "2"],
    ["play", "--symbols", "X,X,A"],
    ["simulate", "--symbols", "X,O"],
    ["simulate", "--games", "0"],
])
def test_cli_bad_configuration(tmp_path: Path, bad):
    r = _run_cli(bad, cwd=tmp_path)
    assert r.returncode == 2


def test_cli_help_and_version(tmp_path: Path):
    r = _run_cli([], cwd=tmp_path)
    assert r.returncode == 0
    assert "usage" in r.stdout
    r = _run_cli(["--version"], cwd=tmp_path)
    assert r.returncode == 0
    assert r.stdout.strip()
