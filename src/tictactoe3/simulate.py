"""
Self-play simulation: every seat is driven by a strategy, results are
summarized and optionally exported (CSV/Parquet plus a JSON manifest).

Per-game seeds are drawn from one numpy generator seeded with the run seed,
so a run with the same arguments reproduces the same games.
"""
from __future__ import annotations

import csv
import hashlib
import importlib.util
import json
import logging
import sys
from collections import Counter
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import numpy as np

from .config import Params
from .engine import PlayEngine
from .models import Player
from .paths import get_git_commit
from .strategy import get_strategy
from .tracking import log_artifact, log_metrics, log_params

RESULTS_VERSION = "1.0.0"
FIELDNAMES = ["game", "seed", "field_size", "win_score", "moves", "winner", "winner_mark", "outcome"]


@dataclass
class SimulationArgs:
    games: int = 100
    params: Params = field(default_factory=Params)
    strategy: str = "tactical"
    seed: Optional[int] = None
    out: Optional[Path] = None
    format: str = "csv"  # one of: "csv", "parquet", "both"
    verbose: bool = False
    cli_argv: List[str] | None = None


@dataclass
class GameRecord:
    game: int
    seed: int
    field_size: int
    win_score: int
    moves: int
    winner: Optional[str]
    winner_mark: Optional[str]
    outcome: str  # "win" or "draw"


@dataclass
class SimulationSummary:
    games: int
    wins: Dict[str, int]
    draws: int
    mean_moves: float
    min_moves: int
    max_moves: int
    records: List[GameRecord] = field(default_factory=list, repr=False)

    def metrics(self) -> Dict[str, float]:
        m = {
            "games": float(self.games),
            "draws": float(self.draws),
            "mean_moves": self.mean_moves,
        }
        for name, n in self.wins.items():
            m[f"wins_{name}"] = float(n)
        return m


def play_game(
    params: Params,
    strategies: Sequence,
    players: Optional[Sequence[Player]] = None,
    game: int = 0,
    seed: int = 0,
) -> GameRecord:
    """Play one game to the end with ``strategies[i]`` moving for seat i."""
    engine = PlayEngine(params, players=players)
    seats = engine.players
    if len(strategies) != len(seats):
        raise ValueError(f"Need one strategy per seat ({len(seats)}), got {len(strategies)}")
    while not engine.is_over:
        i = engine.turn
        player = seats[i]
        rivals = list(seats[i + 1:] + seats[:i])
        cell = strategies[i].choose_cell(engine.field, player, engine.win_score, rivals)
        engine.perform_action(cell)
    w = engine.winner
    return GameRecord(
        game=game,
        seed=seed,
        field_size=engine.field.size,
        win_score=engine.win_score,
        moves=engine.moves_played,
        winner=w.name if w else None,
        winner_mark=w.mark if w else None,
        outcome="win" if w else "draw",
    )


def summarize(records: List[GameRecord], players: Sequence[Player]) -> SimulationSummary:
    wins = Counter(r.winner for r in records if r.winner is not None)
    moves = np.array([r.moves for r in records], dtype=int)
    return SimulationSummary(
        games=len(records),
        wins={p.name: wins.get(p.name, 0) for p in players},
        draws=sum(1 for r in records if r.winner is None),
        mean_moves=float(moves.mean()) if moves.size else 0.0,
        min_moves=int(moves.min()) if moves.size else 0,
        max_moves=int(moves.max()) if moves.size else 0,
        records=records,
    )


def _sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            h.update(chunk)
    return h.hexdigest()


def _write_csv(path: Path, records: List[GameRecord]) -> None:
    with path.open("w", newline="") as f:
        w = csv.DictWriter(f, fieldnames=FIELDNAMES)
        w.writeheader()
        for r in records:
            w.writerow(asdict(r))


def _package_versions() -> Dict[str, str]:
    versions: Dict[str, str] = {}
    for pkg in ["numpy", "pandas", "pyarrow"]:
        if importlib.util.find_spec(pkg) is None:
            continue
        mod = __import__(pkg)
        ver = getattr(mod, "__version__", None)
        if ver:
            versions[pkg] = ver
    return versions


def export_results(args: SimulationArgs, summary: SimulationSummary) -> Dict[str, Optional[Path]]:
    """Write the per-game table and manifest.json under ``args.out``."""
    if args.out is None:
        raise ValueError("export_results needs an output directory (args.out)")
    fmt = (args.format or "csv").lower()
    if fmt not in {"csv", "parquet", "both"}:
        raise ValueError(f"Unknown export format: {args.format}")
    out = Path(args.out)
    out.mkdir(parents=True, exist_ok=True)
    csv_path = out / "games.csv"
    parquet_path = out / "games.parquet"
    files: Dict[str, Optional[Path]] = {"games_csv": None, "games_parquet": None}

    if fmt in {"parquet", "both"}:
        have_parquet = (
            importlib.util.find_spec("pandas") is not None
            and importlib.util.find_spec("pyarrow") is not None
        )
        if have_parquet:
            import pandas as pd  # type: ignore

            df = pd.DataFrame([asdict(r) for r in summary.records], columns=FIELDNAMES)
            df.to_parquet(parquet_path, index=False)
            files["games_parquet"] = parquet_path
            logging.info("Wrote %s (%d rows)", parquet_path, len(df))
        else:
            msg = "Parquet export needs pandas and pyarrow (pip install .[parquet])."
            if fmt == "parquet":
                raise RuntimeError(msg)
            logging.warning("%s Writing CSV only.", msg)

    if fmt in {"csv", "both"}:
        _write_csv(csv_path, summary.records)
        files["games_csv"] = csv_path
        logging.info("Wrote %s (%d rows)", csv_path, len(summary.records))

    manifest = {
        "results_version": RESULTS_VERSION,
        "created_at": datetime.now(timezone.utc).isoformat(),
        "args": {
            "games": args.games,
            "strategy": args.strategy,
            "seed": args.seed,
            "format": fmt,
            "params": args.params.to_dict(),
        },
        "git_commit": get_git_commit(),
        "python": {"python_version": sys.version.split(" ")[0], "packages": _package_versions()},
        "cli_argv": args.cli_argv,
        "row_count": len(summary.records),
        "summary": {
            "wins": summary.wins,
            "draws": summary.draws,
            "mean_moves": summary.mean_moves,
            "min_moves": summary.min_moves,
            "max_moves": summary.max_moves,
        },
        "files": {k: str(v) if v else None for k, v in files.items()},
        "checksums": {k: _sha256_file(v) for k, v in files.items() if v is not None},
    }
    manifest_path = out / "manifest.json"
    manifest_path.write_text(json.dumps(manifest, indent=2))
    files["manifest"] = manifest_path
    logging.info("Wrote %s", manifest_path)
    return files


def run_simulation(args: SimulationArgs) -> SimulationSummary:
    if args.games < 1:
        raise ValueError(f"games must be positive, got {args.games}")
    rng = np.random.default_rng(args.seed)
    seeds = rng.integers(0, 2**31 - 1, size=args.games)
    players = PlayEngine(args.params).players
    logging.info(
        "Simulating %d games on a %dx%d field with the %s strategy",
        args.games, args.params.play_field_size, args.params.play_field_size, args.strategy,
    )
    records: List[GameRecord] = []
    for g, s in enumerate(seeds):
        s = int(s)
        strategies = [get_strategy(args.strategy, seed=s + seat) for seat in range(len(players))]
        records.append(play_game(args.params, strategies, game=g, seed=s))
        if args.verbose and (g + 1) % 100 == 0:
            logging.info("Played %d/%d games", g + 1, args.games)
    summary = summarize(records, players)

    log_params({
        "games": args.games,
        "strategy": args.strategy,
        "seed": args.seed,
        "field_size": args.params.play_field_size,
    })
    log_metrics(summary.metrics())

    if args.out is not None:
        files = export_results(args, summary)
        for path in files.values():
            if path is not None:
                log_artifact(path)
    return summary
