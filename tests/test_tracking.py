from pathlib import Path

from tttbook.tracking import log_artifact, log_metrics, log_params, maybe_mlflow_run


def test_disabled_run_is_noop(tmp_path: Path):
    with maybe_mlflow_run(False, run_name="x", log_dir=tmp_path) as active:
        assert active is False
        log_params({"a": 1})
        log_metrics({"b": 1.0})
        log_artifact(tmp_path)
    assert not (tmp_path / "mlruns").exists()
