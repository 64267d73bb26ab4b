#!/usr/bin/env python3
from __future__ import annotations

import math
import statistics as stats
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple

from tictactoe3.config import Params
from tictactoe3.simulate import SimulationArgs, run_simulation
from tictactoe3.tracking import log_metrics, log_params, maybe_mlflow_run


def ci95(values: List[float]) -> Tuple[float, float]:
    if not values:
        return (float("nan"), float("nan"))
    m = stats.fmean(values)
    s = stats.pstdev(values) if len(values) > 1 else 0.0
    half = 1.96 * (s / math.sqrt(len(values)))
    return m, half


@dataclass
class Config:
    seeds: int = 5
    games: int = 50
    sizes: List[int] = field(default_factory=lambda: [3, 5, 7, 10])
    strategy: str = "tactical"
    tracking: str = "none"  # or "mlflow"
    log_dir: Path = Path("runs")


def main() -> int:
    cfg = Config()
    with maybe_mlflow_run(cfg.tracking == "mlflow", run_name="benchmarks", log_dir=cfg.log_dir):
        log_params({"seeds": cfg.seeds, "games": cfg.games, "strategy": cfg.strategy})
        metrics = {}
        for size in cfg.sizes:
            per_game: List[float] = []
            for s in range(cfg.seeds):
                t0 = time.perf_counter()
                run_simulation(SimulationArgs(
                    games=cfg.games, params=Params(size), strategy=cfg.strategy, seed=s,
                ))
                per_game.append((time.perf_counter() - t0) / cfg.games)
            m, h = ci95(per_game)
            metrics[f"game_mean_s_n{size}"] = m
            metrics[f"game_ci95_half_s_n{size}"] = h
            print(f"n={size}: {m * 1000:.2f}ms/game ± {h * 1000:.2f}ms (95% CI)")
        log_metrics(metrics)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
