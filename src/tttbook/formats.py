"""
Text and table renderings of page records.

Text: one block per page (header, grid, move list or game-over line), blocks
separated by a dashed divider. Table: 21 columns per page, PAGE, LOST, DRAW,
then the target page for each cell and the symbol in each cell, row-major.
"""
from __future__ import annotations

import csv
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from .builder import DRAW, LOST
from .game_basics import CELLS, SIZE, Coord, to_coord, to_index
from .records import OUTCOME_TEXT, PageRecord

EMPTY_PLACEHOLDER = '.'
DIVIDER = '-' * 40

NUMBER_COLUMNS = [f"POS{i + 1}_NUMBER" for i in range(CELLS)]
SYMBOL_COLUMNS = [f"POS{i + 1}_SYMBOL" for i in range(CELLS)]
TABLE_HEADER = ["PAGE", "LOST", "DRAW"] + NUMBER_COLUMNS + SYMBOL_COLUMNS

_NUMBER_OFFSET = 3
_SYMBOL_OFFSET = _NUMBER_OFFSET + CELLS


def format_grid(rows: Sequence[Sequence[str]]) -> str:
    return '\n'.join(' '.join(r) for r in rows)


def render_page_text(rec: PageRecord) -> str:
    content = f"Page {rec.page}\n\n{format_grid(rec.rows)}\n"
    if rec.outcome == LOST:
        content += "Game Over! Winner: O\n"
    elif rec.outcome == DRAW:
        content += "Game Over! It's a draw.\n"
    else:
        content += rec.outcome_text + "\n"
        for (row, col), target in rec.moves:
            content += f"- Move to (row {row + 1}, col {col + 1}) -> Go to page {target}\n"
    return content


def render_book_text(records: List[PageRecord]) -> str:
    content = "All Valid Tic-Tac-Toe Game Paths (User=X, Computer=O)\n"
    content += "Computer's move is silently applied right after X.\n"
    content += f"Total Pages: {len(records)}\n\n"
    for rec in sorted(records, key=lambda r: r.page):
        content += render_page_text(rec) + '\n\n' + DIVIDER + '\n\n'
    return content


def table_row(rec: PageRecord) -> List[Any]:
    row: List[Any] = [''] * len(TABLE_HEADER)
    row[0] = rec.page
    if rec.outcome == LOST:
        row[1] = OUTCOME_TEXT[LOST]
    elif rec.outcome == DRAW:
        row[2] = OUTCOME_TEXT[DRAW]
    for coord, target in rec.moves:
        row[_NUMBER_OFFSET + to_index(coord)] = target
    for r, cells in enumerate(rec.rows):
        for c, sym in enumerate(cells):
            row[_SYMBOL_OFFSET + r * SIZE + c] = '' if sym == EMPTY_PLACEHOLDER else sym
    return row


def parse_table_row(
    row: Sequence[Any],
) -> Tuple[int, Tuple[Tuple[str, ...], ...], Tuple[Tuple[Coord, int], ...]]:
    """Inverse of table_row: (page id, grid rows, moves in row-major order)."""
    if len(row) != len(TABLE_HEADER):
        raise ValueError(f"Expected {len(TABLE_HEADER)} columns, got {len(row)}")
    page = int(row[0])
    symbols = [str(v) or EMPTY_PLACEHOLDER for v in row[_SYMBOL_OFFSET:]]
    rows = tuple(tuple(symbols[r * SIZE:(r + 1) * SIZE]) for r in range(SIZE))
    moves = tuple(
        (to_coord(i), int(v))
        for i, v in enumerate(row[_NUMBER_OFFSET:_SYMBOL_OFFSET])
        if str(v) != ''
    )
    return page, rows, moves


def write_table(path: Path, records: Iterable[PageRecord]) -> int:
    n = 0
    with path.open('w', newline='') as f:
        w = csv.writer(f, lineterminator='\n')
        w.writerow(TABLE_HEADER)
        for rec in records:
            w.writerow(table_row(rec))
            n += 1
    return n


def read_table(path: Path) -> List[List[str]]:
    with path.open('r', newline='') as f:
        reader = csv.reader(f)
        header = next(reader)
        if header != TABLE_HEADER:
            raise ValueError(f"Unexpected table header in {path}")
        return [r for r in reader]


def table_records(records: Iterable[PageRecord]) -> List[Dict[str, Optional[Any]]]:
    """Typed rows for columnar export: empty number slots become None."""
    out: List[Dict[str, Optional[Any]]] = []
    for rec in records:
        values = table_row(rec)
        d: Dict[str, Optional[Any]] = dict(zip(TABLE_HEADER, values))
        for col in NUMBER_COLUMNS:
            if d[col] == '':
                d[col] = None
        out.append(d)
    return out
