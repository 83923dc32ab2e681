"""Output locations and source-control metadata for exports.

Environment-first, falling back to the nearest git checkout, then the CWD, so
an installed package never writes under site-packages.
"""

from __future__ import annotations

import os
import subprocess
from pathlib import Path


def _find_git_root(start: Path) -> Path | None:
    cur = start
    for _ in range(5):
        if (cur / ".git").exists():
            return cur
        if cur.parent == cur:
            break
        cur = cur.parent
    return None


def repo_root() -> Path:
    """Order: env var TTT_REPO_ROOT -> nearest parent containing .git -> CWD."""
    env = os.getenv("TTT_REPO_ROOT")
    if env:
        return Path(env)
    git_root = _find_git_root(Path(__file__).resolve())
    if git_root is not None:
        return git_root
    return Path.cwd()


def book_dir() -> Path:
    p = os.getenv("TTT_BOOK_OUT")
    return Path(p) if p else repo_root() / "book"


def _git(*args: str) -> str | None:
    try:
        return subprocess.check_output(
            ["git", "-C", str(repo_root()), *args],
            stderr=subprocess.DEVNULL,
            text=True,
            timeout=2.0,
        )
    except (OSError, subprocess.SubprocessError):
        return None


def get_git_commit() -> str | None:
    out = _git("rev-parse", "HEAD")
    return out.strip() if out else None


def get_git_is_dirty() -> bool | None:
    """True with uncommitted changes, False if clean, None outside a repo."""
    out = _git("status", "--porcelain")
    if out is None:
        return None
    return len(out.strip()) > 0
