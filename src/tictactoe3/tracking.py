"""
Experiment tracking for simulation runs (optional MLflow backend).

MLflow is imported only when tracking is requested, so plain games and CSV
exports never need it. Tracking problems are logged and do not abort a run.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, Optional


def _mlflow():
    try:
        import mlflow  # type: ignore
    except ModuleNotFoundError:
        return None
    if mlflow.active_run() is None:
        return None
    return mlflow


@contextmanager
def maybe_mlflow_run(enabled: bool, run_name: str, log_dir: Optional[Path] = None) -> Iterator[bool]:
    """Yield True while an MLflow run is active, False otherwise."""
    if not enabled:
        yield False
        return
    try:
        import mlflow  # type: ignore
    except ModuleNotFoundError:
        logging.warning("MLflow tracking requested but mlflow is not installed; continuing without it")
        yield False
        return
    if log_dir is not None:
        mlflow.set_tracking_uri((Path(log_dir).resolve() / "mlruns").as_uri())
    with mlflow.start_run(run_name=run_name):
        yield True


def log_params(params: Dict[str, object]) -> None:
    mlflow = _mlflow()
    if mlflow is None:
        return
    try:
        mlflow.log_params(params)
    except Exception as e:
        logging.debug("mlflow.log_params failed: %s", e)


def log_metrics(metrics: Dict[str, float]) -> None:
    mlflow = _mlflow()
    if mlflow is None:
        return
    try:
        mlflow.log_metrics(metrics)
    except Exception as e:
        logging.debug("mlflow.log_metrics failed: %s", e)


def log_artifact(path: Path, artifact_path: Optional[str] = None) -> None:
    mlflow = _mlflow()
    if mlflow is None:
        return
    try:
        mlflow.log_artifact(str(path), artifact_path=artifact_path)
    except Exception as e:
        logging.debug("mlflow.log_artifact failed: %s", e)
