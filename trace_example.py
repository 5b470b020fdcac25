"""Example: solve a puzzle with tracing enabled and inspect the search steps."""

from pathlib import Path
from typing import List, Optional

from run import format_puzzle
from solver import solve_puzzle
from src.mushikui.examples import EXAMPLE_PUZZLES
from src.mushikui.model import Puzzle
from src.utils.trace import get_tracer, reset_tracer


def solve_and_trace(puzzle_text: str, output_trace_csv: Optional[Path] = None) -> List[Puzzle]:
    """
    Solve a puzzle and log all steps to a trace file.

    Args:
        puzzle_text: Grid text of the puzzle
        output_trace_csv: Path to write trace CSV (optional)

    Returns:
        Every solution found
    """
    reset_tracer()
    tracer = get_tracer()

    solutions = solve_puzzle(puzzle_text, tracer=tracer)

    summary = tracer.summary()
    print(f"\n{'='*50}")
    print(f"Solver Summary:")
    print(f"  Total steps: {summary['total_steps']}")
    print(f"  Assignments: {summary['num_assignments']}")
    print(f"  Backtracks: {summary['num_backtracks']}")
    print(f"  Solutions: {summary['num_solutions']}")
    print(f"  Time: {summary['elapsed_time_seconds']:.3f}s")
    print(f"  Actions: {summary['action_counts']}")
    print(f"{'='*50}\n")

    if output_trace_csv:
        tracer.to_csv(output_trace_csv)

    return solutions


if __name__ == "__main__":
    trace_output = Path("traces/example_trace.csv")
    for solution in solve_and_trace(EXAMPLE_PUZZLES["Q.15"], trace_output):
        print(format_puzzle(solution))
