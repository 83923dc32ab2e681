"""
Per-page records handed to the text and table writers.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

from .builder import DRAW, IN_PROGRESS, LOST, Page, build_page_graph
from .game_basics import Coord, board_rows

OUTCOME_TEXT = {
    IN_PROGRESS: "Choose your next move (You are X):",
    LOST: "You lost!",
    DRAW: "It's a draw!",
}


@dataclass(frozen=True)
class PageRecord:
    page: int
    key: str
    rows: Tuple[Tuple[str, ...], ...]
    outcome: str
    outcome_text: str
    moves: Tuple[Tuple[Coord, int], ...]


def to_record(page: Page) -> PageRecord:
    return PageRecord(
        page=page.id,
        key=page.key,
        rows=tuple(tuple(r) for r in board_rows(page.board)),
        outcome=page.outcome,
        outcome_text=OUTCOME_TEXT[page.outcome],
        moves=tuple(page.transitions),
    )


def emit_records(graph: Dict[str, Page]) -> List[PageRecord]:
    return [to_record(p) for p in sorted(graph.values(), key=lambda p: p.id)]


def generate_records() -> List[PageRecord]:
    """Build the full page graph from the empty board and emit its records in id order."""
    return emit_records(build_page_graph())
