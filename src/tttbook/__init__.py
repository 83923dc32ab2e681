"""tttbook package.

Builds a choose-your-path tic-tac-toe book: every board the reader (X) can
reach against a perfect computer (O), numbered as pages with move links.

Convenience imports are exposed for common workflows.
"""

from .builder import build_page_graph
from .export import ExportArgs, run_export
from .records import generate_records
from .solver import best_move

__all__ = [
    "build_page_graph",
    "generate_records",
    "best_move",
    "run_export",
    "ExportArgs",
]
