"""
Breadth-first construction of the page graph.

Only X turns produce pages: X picks a free cell, O answers at once with its
minimax reply (unless X's own move ended the game), and the resulting board is
the page X lands on. Boards are deduplicated by content key; page ids follow
discovery order starting at 1.
"""
from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, List, Optional, Tuple

from .game_basics import (
    O,
    X,
    Board,
    Coord,
    apply_move,
    board_key,
    empty_board,
    empty_cells,
    get_winner,
    is_full,
    is_terminal,
)
from .solver import best_move

IN_PROGRESS = "in_progress"
LOST = "lost"
DRAW = "draw"


@dataclass
class Page:
    id: int
    board: Board
    parent: Optional[int] = None
    outcome: Optional[str] = None
    transitions: List[Tuple[Coord, int]] = field(default_factory=list)

    @property
    def key(self) -> str:
        return board_key(self.board)

    @property
    def expanded(self) -> bool:
        return self.outcome is not None


@dataclass
class BuilderState:
    next_id: int
    graph: Dict[str, Page]
    queue: Deque[str]


def new_builder_state() -> BuilderState:
    start = empty_board()
    key = board_key(start)
    return BuilderState(next_id=2, graph={key: Page(id=1, board=start)}, queue=deque([key]))


def reply_for(board: Board, coord: Coord) -> Board:
    """Board after X plays `coord` and O, if the game goes on, replies."""
    after_x = apply_move(board, coord, X)
    if is_terminal(after_x):
        return after_x
    return apply_move(after_x, best_move(after_x), O)


def terminal_outcome(board: Board) -> Optional[str]:
    w = get_winner(board)
    if w == O:
        return LOST
    if w == X:
        raise RuntimeError(f"X won on board {board_key(board)}; O's search must never allow this")
    if is_full(board):
        return DRAW
    return None


def lookup_or_create(state: BuilderState, board: Board, parent: int) -> int:
    key = board_key(board)
    page = state.graph.get(key)
    if page is not None:
        return page.id
    page = Page(id=state.next_id, board=board, parent=parent)
    state.graph[key] = page
    state.queue.append(key)
    state.next_id += 1
    logging.debug("Discovered page %d (%s) from page %d", page.id, key, parent)
    return page.id


def expand_next(state: BuilderState) -> BuilderState:
    """Pop one key off the queue and fill in its page's outcome and moves."""
    page = state.graph[state.queue.popleft()]
    outcome = terminal_outcome(page.board)
    if outcome is not None:
        page.outcome = outcome
        return state
    for cell in empty_cells(page.board):
        target = lookup_or_create(state, reply_for(page.board, cell), page.id)
        page.transitions.append((cell, target))
    page.outcome = IN_PROGRESS
    return state


def build_page_graph() -> Dict[str, Page]:
    """Enumerate every page reachable from the empty board."""
    state = new_builder_state()
    while state.queue:
        state = expand_next(state)
    logging.info("Built page graph with %d pages", len(state.graph))
    return state.graph
