"""Test to verify trace.py works and captures solver steps."""

import tempfile
from pathlib import Path

from src.utils.trace import Tracer, enable_tracing, get_tracer, reset_tracer
from trace_example import solve_and_trace


def test_tracer_captures_steps():
    reset_tracer()
    tracer = get_tracer()

    tracer.log_assign("multiplicand[1]", 7, depth=0)
    tracer.log_assign("multiplier[0]", 3, depth=0)
    tracer.log_backtrack("multiplier[0]", depth=1)
    tracer.log_constraint_check("partial product 0", is_valid=True)
    tracer.log_constraint_check("product", is_valid=False)
    tracer.log_solution_found(solution_index=1)

    summary = tracer.summary()
    assert summary["total_steps"] == 6
    assert summary["num_assignments"] == 2
    assert summary["num_backtracks"] == 1
    assert summary["num_solutions"] == 1
    assert summary["action_counts"]["constraint_check"] == 2
    assert [s.step_number for s in tracer.steps] == [1, 2, 3, 4, 5, 6]
    assert tracer.steps[0].cell == "multiplicand[1]"
    assert tracer.steps[0].value == "7"

    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = Path(tmpdir) / "nested" / "trace.csv"
        tracer.to_csv(output_path)
        assert output_path.exists()
        lines = output_path.read_text().splitlines()

    assert lines[0] == "timestamp,step_number,action_type,cell,value,depth,constraint_checked,is_valid,reason"
    assert len(lines) == 7


def test_disabled_tracer_records_nothing():
    reset_tracer()
    enable_tracing(False)
    tracer = get_tracer()
    tracer.log_assign("multiplicand[0]", 1, depth=0)
    assert tracer.steps == []
    reset_tracer()
    assert get_tracer().enabled


def test_empty_trace_is_not_written():
    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = Path(tmpdir) / "trace.csv"
        Tracer().to_csv(output_path)
        assert not output_path.exists()


def test_solve_and_trace_writes_the_search():
    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = Path(tmpdir) / "trace.csv"
        solutions = solve_and_trace(" 27\n  *\n---\n**9\n---\n**9\n", output_path)
        assert output_path.exists()

    assert len(solutions) == 1
    assert get_tracer().summary()["num_solutions"] == 1
