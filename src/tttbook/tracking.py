"""
Experiment tracking helpers (optional MLflow backend).

MLflow is imported only when tracking is requested, so it stays an optional extra.
"""
from __future__ import annotations

import importlib.util
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, Optional


def _mlflow():
    if importlib.util.find_spec("mlflow") is None:
        return None
    import mlflow  # type: ignore

    return mlflow


@contextmanager
def maybe_mlflow_run(enabled: bool, run_name: str, log_dir: Optional[Path] = None) -> Iterator[bool]:
    mlflow = _mlflow() if enabled else None
    if mlflow is None:
        if enabled:
            logging.warning("mlflow is not installed; continuing without tracking")
        yield False
        return
    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        mlflow.set_tracking_uri((log_dir.resolve() / "mlruns").as_uri())
    with mlflow.start_run(run_name=run_name):
        yield True


def _active():
    mlflow = _mlflow()
    if mlflow is None or mlflow.active_run() is None:
        return None
    return mlflow


def log_params(params: Dict[str, object]) -> None:
    mlflow = _active()
    if mlflow is not None:
        mlflow.log_params(params)


def log_metrics(metrics: Dict[str, float]) -> None:
    mlflow = _active()
    if mlflow is not None:
        mlflow.log_metrics(metrics)


def log_artifact(path: Path, artifact_path: Optional[str] = None) -> None:
    mlflow = _active()
    if mlflow is not None:
        mlflow.log_artifact(str(path), artifact_path=artifact_path)
