"""
Minimax search for the computer (O), which always moves second.
Scoring:
- +10 when O has a line, -10 when X has a line, 0 otherwise.
- O maximizes, X minimizes; every continuation is explored.
Tie-break policy:
- best_move keeps the first cell, in row-major order, reaching the best score.
Results are cached per (board, side-to-move); cached and uncached search agree exactly.
"""
from functools import lru_cache

from .game_basics import O, X, Board, Coord, apply_move, empty_cells, get_winner, is_full


def evaluate(board: Board) -> int:
    w = get_winner(board)
    if w == O:
        return 10
    if w == X:
        return -10
    return 0


@lru_cache(maxsize=None)
def minimax(board: Board, maximizing: bool) -> int:
    if get_winner(board) is not None:
        return evaluate(board)
    if is_full(board):
        return 0
    if maximizing:
        best = float('-inf')
        for cell in empty_cells(board):
            best = max(best, minimax(apply_move(board, cell, O), False))
    else:
        best = float('inf')
        for cell in empty_cells(board):
            best = min(best, minimax(apply_move(board, cell, X), True))
    return int(best)


def best_move(board: Board) -> Coord:
    """Return O's reply on a board where O is to move.

    Raises ValueError when no cell is free.
    """
    best_val = float('-inf')
    best = None
    for cell in empty_cells(board):
        val = minimax(apply_move(board, cell, O), False)
        # strictly greater: later equally good cells never replace the first
        if val > best_val:
            best_val = val
            best = cell
    if best is None:
        raise ValueError("No move available on a full board")
    return best
