from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from .config import load_params, parse_symbols
from .console import ConsoleSession
from .engine import PlayEngine
from .errors import ConfigurationError
from .simulate import SimulationArgs, run_simulation
from .strategy import STRATEGIES, get_strategy
from .tracking import maybe_mlflow_run


def _add_game_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("--size", type=int, default=None, help="Field size (3-10); overrides the config file")
    p.add_argument(
        "--symbols",
        default=None,
        help='Comma-separated marks for Player1, Player2 and AI, e.g. "X,O,A"',
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ttt3", description="Three-player tic-tac-toe")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument(
        "--info",
        action="store_true",
        help="Print environment and dependency info and exit",
    )
    p.add_argument("--seed", type=int, default=None, help="Seed for AI strategies")
    p.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (default: $TTT3_CONFIG, then ttt3.json in the repo root)",
    )

    p_play = sub.add_parser("play", help="Play an interactive game on the console")
    _add_game_options(p_play)
    p_play.add_argument(
        "--ai-strategy",
        choices=sorted(STRATEGIES),
        default="tactical",
        help="How the AI player picks its cells (default: tactical)",
    )

    p_sim = sub.add_parser("simulate", help="Run self-play games and summarize the results")
    _add_game_options(p_sim)
    p_sim.add_argument("--games", type=int, default=100, help="Number of games (default: 100)")
    p_sim.add_argument(
        "--strategy",
        choices=sorted(STRATEGIES),
        default="tactical",
        help="Strategy used by every seat (default: tactical)",
    )
    p_sim.add_argument("--out", type=Path, default=None, help="Directory for results and manifest")
    p_sim.add_argument(
        "--format",
        choices=["csv", "parquet", "both"],
        default="csv",
        help="Export format: csv (default), parquet, both",
    )
    p_sim.add_argument(
        "--tracking",
        choices=["none", "mlflow"],
        default="none",
        help="Experiment tracking backend",
    )
    p_sim.add_argument(
        "--log-dir",
        type=Path,
        default=Path("runs"),
        help="Directory for tracking logs/artifacts (for mlflow local backend)",
    )
    return p


def _overrides(ns: argparse.Namespace) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    if ns.size is not None:
        out["play_field_size"] = ns.size
    if ns.symbols:
        out.update(parse_symbols(ns.symbols))
    return out


def _print_info() -> None:
    import importlib.util
    import platform
    import sys

    print(f"python={sys.version.split()[0]} platform={platform.platform()}")
    for pkg in ["numpy", "pandas", "pyarrow", "mlflow"]:
        spec = importlib.util.find_spec(pkg)
        if spec is None:
            print(f"{pkg}=<not installed>")
        else:
            mod = __import__(pkg)
            ver = getattr(mod, "__version__", "?")
            print(f"{pkg}={ver}")


def _play(ns: argparse.Namespace) -> int:
    params = load_params(ns.config, _overrides(ns))
    engine = PlayEngine(params)
    session = ConsoleSession(engine, get_strategy(ns.ai_strategy, seed=ns.seed))
    try:
        session.run()
    except (EOFError, KeyboardInterrupt):
        print()
        logging.warning("Input closed before the game finished")
        return 1
    return 0


def _simulate(ns: argparse.Namespace, argv: Optional[list]) -> int:
    if ns.games < 1:
        logging.error("--games must be positive: %s", ns.games)
        return 2
    params = load_params(ns.config, _overrides(ns))
    with maybe_mlflow_run(ns.tracking == "mlflow", run_name="simulate", log_dir=ns.log_dir):
        summary = run_simulation(SimulationArgs(
            games=ns.games,
            params=params,
            strategy=ns.strategy,
            seed=ns.seed,
            out=ns.out,
            format=ns.format,
            verbose=ns.verbose,
            cli_argv=list(argv) if argv is not None else None,
        ))
    logging.info(
        "games=%d wins=%s draws=%d mean_moves=%.2f",
        summary.games,
        summary.wins,
        summary.draws,
        summary.mean_moves,
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    if getattr(ns, "version", False):
        from importlib.metadata import PackageNotFoundError, version as _ver

        try:
            print(_ver("tictactoe3"))
        except PackageNotFoundError:
            print("unknown")
        return 0
    if getattr(ns, "info", False):
        _print_info()
        return 0

    try:
        if ns.cmd == "play":
            return _play(ns)
        if ns.cmd == "simulate":
            return _simulate(ns, argv)
    except ConfigurationError as e:
        logging.error("%s", e)
        return 2

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
