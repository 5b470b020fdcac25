"""Top-level solve interface.

Expose `solve_puzzle(puzzle)` that accepts a pre-built Puzzle, the grid text,
or a raw puzzle dictionary compatible with `src.mushikui.parser.parse_puzzle`.
"""

from typing import Any, List, Optional

from src.mushikui import solver_core
from src.mushikui.model import Puzzle
from src.mushikui.parser import parse_puzzle
from src.utils.trace import Tracer, get_tracer, reset_tracer


def solve_puzzle(puzzle: Any, wildcard: str = "*", tracer: Optional[Tracer] = None) -> List[Puzzle]:
    """
    Solve a puzzle and return every fully resolved Puzzle consistent with it.
    Accepts:
      - Puzzle instances (used directly)
      - Grid text or raw puzzle dictionaries (parsed via `parse_puzzle`)

    Without an explicit tracer the global one is reset first, so repeated
    calls do not pile steps onto it.
    """
    if isinstance(puzzle, Puzzle):
        parsed = puzzle
    elif isinstance(puzzle, (str, dict)):
        parsed = parse_puzzle(puzzle, wildcard)
    else:
        raise TypeError("solve_puzzle expects a Puzzle, grid text, or puzzle dictionary")

    if tracer is None:
        reset_tracer()
        tracer = get_tracer()
    return solver_core.solve(parsed, tracer)


__all__ = ["solve_puzzle"]
