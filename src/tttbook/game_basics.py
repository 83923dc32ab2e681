"""
Game basics: board representation, move application, winner/full checks, keys.

- A board is a flat tuple of SIZE*SIZE cells: 0=empty, 1=X (the reader), 2=O (the computer).
- Coordinates are 0-based (row, col) pairs; they are printed 1-based.
- X always starts, so valid boards hold as many X marks as O marks, or one more.
"""
from typing import List, Optional, Tuple

SIZE = 3
CELLS = SIZE * SIZE

EMPTY = 0
X = 1
O = 2

Board = Tuple[int, ...]
Coord = Tuple[int, int]

SYMBOLS = {EMPTY: '', X: 'X', O: 'O'}
KEY_SYMBOLS = {EMPTY: '_', X: 'X', O: 'O'}

# Scan order matters for winner(): rows, then columns, then both diagonals.
WIN_PATTERNS = (
    [[r * SIZE + c for c in range(SIZE)] for r in range(SIZE)]
    + [[r * SIZE + c for r in range(SIZE)] for c in range(SIZE)]
    + [[i * SIZE + i for i in range(SIZE)]]
    + [[i * SIZE + (SIZE - 1 - i) for i in range(SIZE)]]
)


class InvalidMove(ValueError):
    """Placement on an occupied or out-of-range cell."""


def empty_board() -> Board:
    return tuple([EMPTY] * CELLS)


def to_index(coord: Coord) -> int:
    row, col = coord
    return row * SIZE + col


def to_coord(idx: int) -> Coord:
    return divmod(idx, SIZE)


def apply_move(board: Board, coord: Coord, mark: int) -> Board:
    """Return a copy of `board` with `mark` placed at `coord`."""
    row, col = coord
    if not (0 <= row < SIZE and 0 <= col < SIZE):
        raise InvalidMove(f"Coordinate out of range: {coord}")
    idx = to_index(coord)
    if board[idx] != EMPTY:
        raise InvalidMove(f"Cell already occupied: {coord}")
    lst = list(board)
    lst[idx] = mark
    return tuple(lst)


def empty_cells(board: Board) -> List[Coord]:
    return [to_coord(i) for i, v in enumerate(board) if v == EMPTY]


def get_winner(board: Board) -> Optional[int]:
    for pattern in WIN_PATTERNS:
        v = board[pattern[0]]
        if v != EMPTY and all(board[i] == v for i in pattern):
            return v
    return None


def is_full(board: Board) -> bool:
    return EMPTY not in board


def is_terminal(board: Board) -> bool:
    return get_winner(board) is not None or is_full(board)


def board_key(board: Board) -> str:
    """Content key used to deduplicate pages; '_' marks an empty cell."""
    return ''.join(KEY_SYMBOLS[v] for v in board)


def board_rows(board: Board, empty: str = '.') -> List[List[str]]:
    return [
        [SYMBOLS[board[r * SIZE + c]] or empty for c in range(SIZE)]
        for r in range(SIZE)
    ]


def serialize_board(board: Board) -> str:
    return ''.join(str(cell) for cell in board)


def deserialize_board(board_str: str) -> Board:
    return tuple(int(cell) for cell in board_str)


def is_board_string(raw: str) -> bool:
    return len(raw) == CELLS and all(c in "012" for c in raw)


def get_piece_counts(board: Board) -> Tuple[int, int]:
    return board.count(X), board.count(O)


def current_player(board: Board) -> int:
    x, o = get_piece_counts(board)
    return X if x == o else O


def is_valid_state(board: Board) -> bool:
    x_count, o_count = get_piece_counts(board)
    if not (x_count == o_count or x_count == o_count + 1):
        return False

    def count_wins(p: int) -> int:
        return sum(1 for pat in WIN_PATTERNS if all(board[i] == p for i in pat))

    x_wins, o_wins = count_wins(X), count_wins(O)
    if x_wins > 0 and o_wins > 0:
        return False
    if x_wins and x_count != o_count + 1:
        return False
    if o_wins and x_count != o_count:
        return False
    return True
