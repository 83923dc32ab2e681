"""
Summary numbers for a generated catalog.
"""
from typing import Any, Dict, List

import numpy as np

from .builder import DRAW, IN_PROGRESS, LOST
from .game_basics import CELLS
from .records import PageRecord


def summarize(records: List[PageRecord]) -> Dict[str, Any]:
    outcomes = [r.outcome for r in records]
    marks = np.array(
        [sum(1 for row in r.rows for s in row if s in ('X', 'O')) for r in records],
        dtype=np.int64,
    )
    branching = np.array([len(r.moves) for r in records if r.outcome == IN_PROGRESS], dtype=np.float64)
    by_marks = np.bincount(marks, minlength=CELLS + 1) if marks.size else np.zeros(CELLS + 1, dtype=np.int64)
    return {
        'pages': len(records),
        'in_progress': outcomes.count(IN_PROGRESS),
        'lost': outcomes.count(LOST),
        'draw': outcomes.count(DRAW),
        'pages_by_marks': {int(k): int(v) for k, v in enumerate(by_marks) if v},
        'mean_branching': float(branching.mean()) if branching.size else 0.0,
    }
