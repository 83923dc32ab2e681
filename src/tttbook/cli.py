from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

from .builder import build_page_graph
from .export import ExportArgs, run_export
from .game_basics import (
    O,
    Board,
    board_key,
    current_player,
    deserialize_board,
    is_board_string,
    is_terminal,
    is_valid_state,
)
from .paths import book_dir
from .records import emit_records
from .solver import best_move, minimax
from .stats import summarize
from .tracking import maybe_mlflow_run


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ttt-book", description="Tic-tac-toe choose-your-path book generator")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument(
        "--info",
        action="store_true",
        help="Print environment and dependency info and exit",
    )

    p_gen = sub.add_parser("generate", help="Generate the book and write it to disk")
    p_gen.add_argument(
        "--out", type=Path, default=None, help="Output directory (default: $TTT_BOOK_OUT or <repo>/book)"
    )
    p_gen.add_argument(
        "--format",
        choices=["csv", "parquet", "both"],
        default="csv",
        help="Page table format: csv (default), parquet, both; the text book is always written",
    )
    p_gen.add_argument(
        "--tracking",
        choices=["none", "mlflow"],
        default="none",
        help="Experiment tracking backend",
    )
    p_gen.add_argument(
        "--log-dir",
        type=Path,
        default=Path("runs"),
        help="Directory for tracking logs/artifacts (for mlflow local backend)",
    )

    p_page = sub.add_parser("page", help="Show the page for a board (9 digits, 0=empty,1=X,2=O)")
    p_page.add_argument("--board", required=True, help="Board string, e.g., 100020000")

    p_best = sub.add_parser("best-move", help="Show the computer's reply on a board with O to move")
    p_best.add_argument("--board", required=True, help="Board string, e.g., 100000000")

    sub.add_parser("stats", help="Summarize the generated book without writing files")

    return p


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


def _parse_board(raw: Optional[str]) -> Optional[Board]:
    raw = (raw or "").strip()
    if not is_board_string(raw):
        logging.error("Invalid board string. Must be 9 chars of 0/1/2.")
        return None
    b = deserialize_board(raw)
    if not is_valid_state(b):
        logging.error("Board is not a valid reachable state.")
        return None
    return b


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    if getattr(ns, "version", False):
        try:
            from importlib.metadata import PackageNotFoundError, version as _ver

            print(_ver("tttbook"))
        except PackageNotFoundError:
            print("unknown")
        return 0
    if getattr(ns, "info", False):
        _print_info()
        return 0

    if ns.cmd == "generate":
        out_dir = ns.out if ns.out is not None else book_dir()
        with maybe_mlflow_run(ns.tracking == "mlflow", run_name="book_generate", log_dir=ns.log_dir):
            out = run_export(ExportArgs(
                out=out_dir,
                format=ns.format,
                verbose=ns.verbose,
                cli_argv=list(argv) if argv is not None else None,
            ))
        logging.info("Wrote book to: %s", out)
        return 0

    if ns.cmd == "page":
        b = _parse_board(ns.board)
        if b is None:
            return 2
        page = build_page_graph().get(board_key(b))
        if page is None:
            logging.error("No page shows this board (X to move, O replies optimally).")
            return 2
        moves = " ".join(f"r{r + 1}c{c + 1}->{t}" for (r, c), t in page.transitions)
        logging.info("page=%d outcome=%s moves=%s", page.id, page.outcome, moves or "-")
        return 0

    if ns.cmd == "best-move":
        b = _parse_board(ns.board)
        if b is None:
            return 2
        if is_terminal(b) or current_player(b) != O:
            logging.error("Board must be unfinished with O to move.")
            return 2
        r, c = best_move(b)
        logging.info("reply=(row %d, col %d) score=%d", r + 1, c + 1, minimax(b, True))
        return 0

    if ns.cmd == "stats":
        summary = summarize(emit_records(build_page_graph()))
        for k, v in summary.items():
            print(f"{k}={v}")
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
