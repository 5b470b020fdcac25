"""Tracing module: logs search steps and writes them to CSV."""

import csv
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass
class TraceStep:
    """A single step in the solving process."""

    timestamp: float
    step_number: int
    action_type: str  # 'assign', 'backtrack', 'constraint_check', 'solution_found'
    cell: Optional[str] = None  # e.g. 'multiplicand[3]', 'multiplier[0]'
    value: Optional[Any] = None
    depth: Optional[int] = None  # Number of multiplicand digits resolved
    constraint_checked: Optional[str] = None
    is_valid: Optional[bool] = None
    reason: Optional[str] = None


class Tracer:
    """Records solver steps for logging and analysis."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.steps: List[TraceStep] = []
        self.start_time = datetime.now().timestamp()
        self.step_counter = 0

    def _get_timestamp(self) -> float:
        """Get elapsed time in seconds since tracer creation."""
        return datetime.now().timestamp() - self.start_time

    def _record(self, action_type: str, **fields: Any) -> None:
        self.step_counter += 1
        self.steps.append(TraceStep(
            timestamp=self._get_timestamp(),
            step_number=self.step_counter,
            action_type=action_type,
            **fields,
        ))

    def log_assign(self, cell: str, value: Any, depth: int):
        """Log a tentative digit assignment."""
        if not self.enabled:
            return
        self._record('assign', cell=cell, value=str(value), depth=depth)

    def log_backtrack(self, cell: str, depth: Optional[int] = None, reason: str = "No digit accepted"):
        """Log a dead end at `cell`."""
        if not self.enabled:
            return
        self._record('backtrack', cell=cell, depth=depth, reason=reason)

    def log_constraint_check(self, constraint_desc: str, is_valid: bool, cell: Optional[str] = None):
        """Log a full-row verification."""
        if not self.enabled:
            return
        self._record(
            'constraint_check',
            constraint_checked=constraint_desc,
            is_valid=is_valid,
            cell=cell,
        )

    def log_solution_found(self, solution_index: int):
        """Log when a solution is recorded."""
        if not self.enabled:
            return
        self._record('solution_found', value=str(solution_index))

    def to_csv(self, filepath: Path) -> None:
        """Write trace to CSV file."""
        if not self.steps:
            print("No trace steps to write")
            return

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        fieldnames = [
            'timestamp', 'step_number', 'action_type', 'cell', 'value',
            'depth', 'constraint_checked', 'is_valid', 'reason'
        ]

        with open(filepath, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            for step in self.steps:
                writer.writerow(asdict(step))

        print(f"Trace written to {filepath} ({len(self.steps)} steps)")

    def summary(self) -> Dict[str, Any]:
        """Get a summary of the trace."""
        action_counts: Dict[str, int] = {}
        for step in self.steps:
            action_counts[step.action_type] = action_counts.get(step.action_type, 0) + 1

        return {
            'total_steps': len(self.steps),
            'elapsed_time_seconds': self._get_timestamp(),
            'action_counts': action_counts,
            'num_assignments': action_counts.get('assign', 0),
            'num_backtracks': action_counts.get('backtrack', 0),
            'num_solutions': action_counts.get('solution_found', 0),
        }


# Global tracer instance
_global_tracer: Optional[Tracer] = None


def get_tracer() -> Tracer:
    """Get or create the global tracer."""
    global _global_tracer
    if _global_tracer is None:
        _global_tracer = Tracer(enabled=True)
    return _global_tracer


def reset_tracer() -> None:
    """Reset the global tracer."""
    global _global_tracer
    _global_tracer = None


def enable_tracing(enabled: bool = True) -> None:
    """Enable or disable tracing."""
    get_tracer().enabled = enabled
