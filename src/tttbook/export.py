"""
Writes the generated catalog to disk.

The text book is always written; the page table goes to CSV, Parquet or both.
A manifest.json with checksums and provenance sits next to the artifacts.
"""
from __future__ import annotations

import hashlib
import importlib.util
import json
import logging
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

from .formats import NUMBER_COLUMNS, render_book_text, table_records, write_table
from .paths import get_git_commit, get_git_is_dirty
from .records import PageRecord, generate_records
from .stats import summarize
from .tracking import log_artifact, log_metrics, log_params

FORMAT_VERSION = "1.0.0"
FILE_NAME_TXT = "tictactoe_paths.txt"
FILE_NAME_CSV = "tictactoe_paths.csv"
FILE_NAME_PARQUET = "tictactoe_paths.parquet"


@dataclass
class ExportArgs:
    out: Path
    format: str = "csv"  # one of: "csv", "parquet", "both"
    verbose: bool = False
    cli_argv: List[str] | None = None


def sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open('rb') as f:
        for chunk in iter(lambda: f.read(8192), b''):
            h.update(chunk)
    return h.hexdigest()


def _have_parquet_deps() -> bool:
    return (importlib.util.find_spec('pandas') is not None
            and importlib.util.find_spec('pyarrow') is not None)


def write_parquet(path: Path, records: List[PageRecord]) -> None:
    import pandas as pd  # type: ignore

    df = pd.DataFrame(table_records(records))
    df = df.astype({c: "Int64" for c in NUMBER_COLUMNS})
    df.to_parquet(path, index=False)


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


def run_export(args: ExportArgs) -> Path:
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="[%(levelname)s] %(message)s")
    fmt = (args.format or "csv").lower()
    if fmt not in {"csv", "parquet", "both"}:
        raise ValueError(f"Unknown export format: {args.format}")
    want_parquet = fmt in {"parquet", "both"}
    if want_parquet and not _have_parquet_deps():
        msg = (
            "Parquet dependencies not available (install pandas and pyarrow). "
            "Use pip install .[parquet] to enable parquet support."
        )
        if fmt == "parquet":
            # nothing has been written yet
            raise RuntimeError(msg)
        logging.warning("%s Proceeding with CSV only; manifest will record parquet_written=false.", msg)
        want_parquet = False

    logging.info("Generating pages…")
    records = generate_records()
    summary = summarize(records)
    logging.info("Generated %d pages (%d lost, %d draw)", summary['pages'], summary['lost'], summary['draw'])

    args.out.mkdir(parents=True, exist_ok=True)
    txt_path = args.out / FILE_NAME_TXT
    csv_path = args.out / FILE_NAME_CSV
    parquet_path = args.out / FILE_NAME_PARQUET

    txt_path.write_text(render_book_text(records), encoding='utf-8')
    logging.info('File "%s" written with %d pages.', txt_path.name, len(records))
    wrote_csv = False
    if fmt in {"csv", "both"}:
        write_table(csv_path, records)
        wrote_csv = True
        logging.info('File "%s" written with %d pages.', csv_path.name, len(records))
    wrote_parquet = False
    if want_parquet:
        write_parquet(parquet_path, records)
        wrote_parquet = True
        logging.info('File "%s" written with %d pages.', parquet_path.name, len(records))

    files: Dict[str, Any] = {
        "book_txt": str(txt_path),
        "pages_csv": str(csv_path) if wrote_csv else None,
        "pages_parquet": str(parquet_path) if wrote_parquet else None,
    }
    checksums = {label: sha256_file(Path(p)) for label, p in files.items() if p is not None}
    manifest = {
        "format_version": FORMAT_VERSION,
        "created_at": datetime.now(timezone.utc).isoformat(),
        "args": {"format": fmt},
        "git_commit": get_git_commit(),
        "git_is_dirty": get_git_is_dirty(),
        "python": {
            "python_version": sys.version.split(" ")[0],
            "packages": _package_versions(),
        },
        "cli_argv": args.cli_argv,
        "pages": len(records),
        "stats": summary,
        "files": files,
        "checksums": checksums,
        "parquet_written": wrote_parquet,
    }
    manifest_path = args.out / "manifest.json"
    manifest_path.write_text(json.dumps(manifest, indent=2))
    logging.info("Wrote manifest.json")

    log_params({"format": fmt, "pages": len(records)})
    log_metrics({k: float(summary[k]) for k in ("pages", "in_progress", "lost", "draw", "mean_branching")})
    log_artifact(manifest_path)
    for p in files.values():
        if p is not None:
            log_artifact(Path(p))
    return args.out
