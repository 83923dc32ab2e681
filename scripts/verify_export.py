#!/usr/bin/env python3
"""
Verify a tic-tac-toe book export directory.

Checks performed:
- manifest.json exists and is parseable
- manifest page count is a positive integer
- Files listed in manifest exist (if not None)
- SHA256 checksums of files match manifest.checksums
- The CSV header is the 21-column page table header
- CSV row count matches the manifest, page ids run 1..N
- Every move link points at an existing page

Exit codes:
 0 on success, non-zero on any validation failure.
"""
from __future__ import annotations

import argparse
import csv
import hashlib
import json
from pathlib import Path
import sys
from typing import Any, Dict, List

from tttbook.formats import TABLE_HEADER, parse_table_row


def sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open('rb') as f:
        for chunk in iter(lambda: f.read(8192), b''):
            h.update(chunk)
    return h.hexdigest()


def check_table(path: Path, pages: int) -> List[str]:
    errors: List[str] = []
    with path.open('r', newline='') as f:
        reader = csv.reader(f)
        header = next(reader, None)
        rows = list(reader)
    if header != TABLE_HEADER:
        errors.append(f"unexpected CSV header: {header}")
        return errors
    if len(rows) != pages:
        errors.append(f"page row count mismatch: manifest={pages} actual={len(rows)}")
    parsed = []
    for i, row in enumerate(rows, start=2):
        try:
            parsed.append(parse_table_row(row))
        except ValueError as e:
            errors.append(f"line {i}: {e}")
    ids = [p[0] for p in parsed]
    if ids != list(range(1, len(ids) + 1)):
        errors.append("page ids are not 1..N in order")
    known = set(ids)
    for page, _, moves in parsed:
        for coord, target in moves:
            if target not in known:
                errors.append(f"page {page}: move {coord} links to missing page {target}")
    return errors


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Verify tic-tac-toe book export")
    ap.add_argument("out", type=Path, help="Export directory (contains manifest.json)")
    ns = ap.parse_args(argv)
    out = ns.out
    manifest_path = out / "manifest.json"
    if not manifest_path.exists():
        print(f"ERROR: manifest not found: {manifest_path}", file=sys.stderr)
        return 2
    try:
        manifest = json.loads(manifest_path.read_text())
    except json.JSONDecodeError as e:
        print(f"ERROR: failed to parse manifest: {e}", file=sys.stderr)
        return 2

    ok = True
    files: Dict[str, Any] = manifest.get("files", {}) or {}
    checksums: Dict[str, Any] = manifest.get("checksums", {}) or {}

    pages = manifest.get("pages")
    if not isinstance(pages, int) or pages <= 0:
        print("ERROR: manifest.pages must be a positive integer", file=sys.stderr)
        return 1

    for label, p in files.items():
        if p is None:
            continue
        fp = Path(p)
        if not fp.exists():
            print(f"ERROR: missing file listed in manifest: {label} -> {fp}", file=sys.stderr)
            ok = False
            continue
        want = checksums.get(label)
        have = sha256_file(fp)
        if want and want != have:
            print(f"ERROR: checksum mismatch for {label}: manifest={want} computed={have}", file=sys.stderr)
            ok = False

    pages_csv = files.get("pages_csv")
    if pages_csv and Path(pages_csv).exists():
        for err in check_table(Path(pages_csv), pages):
            print(f"ERROR: {err}", file=sys.stderr)
            ok = False

    if not ok:
        return 1
    print("OK: export verified", file=sys.stdout)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
