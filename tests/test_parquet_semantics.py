import json
from pathlib import Path

import pytest

from tttbook.export import ExportArgs, run_export


def _hide_parquet_deps(monkeypatch: pytest.MonkeyPatch) -> None:
    import importlib

    real_find_spec = importlib.util.find_spec

    def fake_find_spec(name: str, package=None):  # type: ignore[override]
        if name in {"pandas", "pyarrow"}:
            return None
        return real_find_spec(name, package)

    monkeypatch.setattr(importlib.util, "find_spec", fake_find_spec)


def test_format_both_graceful_without_parquet_deps(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _hide_parquet_deps(monkeypatch)
    res = run_export(ExportArgs(out=tmp_path / "exp_both", format="both"))

    assert (res / "tictactoe_paths.txt").exists()
    assert (res / "tictactoe_paths.csv").exists()
    manifest = json.loads((res / "manifest.json").read_text())
    assert manifest["parquet_written"] is False
    assert not (res / "tictactoe_paths.parquet").exists()


def test_format_parquet_raises_without_deps(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _hide_parquet_deps(monkeypatch)
    out = tmp_path / "exp_parquet"
    with pytest.raises(RuntimeError):
        run_export(ExportArgs(out=out, format="parquet"))

    # No partial outputs should exist
    assert not out.exists() or not any(out.iterdir())


def test_unknown_format(tmp_path: Path):
    with pytest.raises(ValueError):
        run_export(ExportArgs(out=tmp_path / "x", format="xlsx"))


def test_parquet_matches_csv(tmp_path: Path):
    pd = pytest.importorskip("pandas")
    pytest.importorskip("pyarrow")
    res = run_export(ExportArgs(out=tmp_path / "exp", format="both"))
    df = pd.read_parquet(res / "tictactoe_paths.parquet")
    csv_df = pd.read_csv(res / "tictactoe_paths.csv", keep_default_na=False, dtype=str)
    assert len(df) == len(csv_df)
    assert list(df.columns) == list(csv_df.columns)
    assert df["PAGE"].tolist() == list(range(1, len(df) + 1))
    first = df.iloc[0]
    assert [int(first[f"POS{i}_NUMBER"]) for i in range(1, 10)] == list(range(2, 11))
    assert df["POS1_NUMBER"].isna().any()
