"""Backtracking search over multiplicand and multiplier digits with partial-product pruning."""

import sys
from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence

from .arithmetic import compute_partial_product, compute_product
from .model import Digit, Puzzle, Row
from src.utils.trace import Tracer, get_tracer

_FIXED = [Digit(v) for v in range(10)]


def solve(puzzle: Puzzle, tracer: Optional[Tracer] = None) -> List[Puzzle]:
    """
    Enumerate every digit assignment consistent with the puzzle.

    Multiplicand digits are assigned least-significant first. After each one a
    speculative multiplier pass checks the partial products that are already
    determined by the resolved suffix; only branches surviving that pass move
    on to the next multiplicand digit. Once the multiplicand is complete, a
    final multiplier pass verifies every partial product and the product in
    full. Returns the fully resolved puzzles in enumeration order, possibly
    none. The given puzzle is left untouched.
    """
    tracer = tracer or get_tracer()
    work = puzzle.copy()
    solutions: List[Puzzle] = []

    with _recursion_limit(_required_depth(work)):
        _assign_multiplicand(work, 0, solutions, tracer)
    return solutions


def count_solutions(puzzle: Puzzle, tracer: Optional[Tracer] = None) -> int:
    return len(solve(puzzle, tracer))


def is_unique(puzzle: Puzzle, tracer: Optional[Tracer] = None) -> bool:
    """True when exactly one assignment satisfies the puzzle."""
    return count_solutions(puzzle, tracer) == 1


def _assign_multiplicand(
    puzzle: Puzzle, i: int, solutions: List[Puzzle], tracer: Tracer
) -> None:
    length = len(puzzle.multiplicand)
    if i == length:
        _assign_multiplier(puzzle, i, 0, True, solutions, tracer)
        return

    pos = length - i - 1
    cell = puzzle.multiplicand[pos]
    for d in range(10):
        # Leading digit.
        if d == 0 and pos == 0:
            continue
        if not cell.accepts(d):
            continue
        tracer.log_assign(f"multiplicand[{pos}]", d, depth=i)
        with _patched(puzzle.multiplicand, pos, [d]):
            _assign_multiplier(puzzle, i, 0, False, solutions, tracer)


def _assign_multiplier(
    puzzle: Puzzle,
    i: int,
    j: int,
    final: bool,
    solutions: List[Puzzle],
    tracer: Tracer,
) -> None:
    """
    Assign multiplier digit j (from the right) given a multiplicand resolved up
    to position i. In the speculative pass (`final` False) rows whose cell at
    position i is still a wildcard carry no new information and are skipped.
    """
    length = len(puzzle.multiplier)
    if not final:
        while j < length and _is_open_cell(puzzle.partial_products[j], i):
            j += 1

    if j == length:
        if final:
            _verify_and_record(puzzle, solutions, tracer)
        else:
            _assign_multiplicand(puzzle, i + 1, solutions, tracer)
        return

    pos = length - j - 1
    cell = puzzle.multiplier[pos]
    row = puzzle.partial_products[j]
    accepted = False
    for d in range(1, 10):
        if not cell.accepts(d):
            continue
        part = compute_partial_product(puzzle.multiplicand, d)
        if len(part) > len(row) or not _suffix_accepts(row, part):
            continue
        accepted = True
        tracer.log_assign(f"multiplier[{pos}]", d, depth=i)
        with _patched(puzzle.multiplier, pos, [d]), _patched(row, len(row) - len(part), part):
            _assign_multiplier(puzzle, i, j + 1, final, solutions, tracer)

    if not accepted:
        tracer.log_backtrack(f"multiplier[{pos}]", depth=i)


def _verify_and_record(puzzle: Puzzle, solutions: List[Puzzle], tracer: Tracer) -> None:
    length = len(puzzle.multiplier)
    partial_products: List[Row] = []
    for j in range(length):
        d = puzzle.multiplier[length - j - 1].value
        row = puzzle.partial_products[j]
        part = compute_partial_product(puzzle.multiplicand, d)
        ok = len(part) == len(row) and _suffix_accepts(row, part)
        tracer.log_constraint_check(f"partial product {j}", ok)
        if not ok:
            return
        partial_products.append([_FIXED[v] for v in part])

    product = compute_product(partial_products)
    ok = len(product) == len(puzzle.product) and _suffix_accepts(puzzle.product, product)
    tracer.log_constraint_check("product", ok)
    if not ok:
        return

    solutions.append(Puzzle(
        multiplicand=list(puzzle.multiplicand),
        multiplier=list(puzzle.multiplier),
        partial_products=partial_products,
        product=[_FIXED[v] for v in product],
    ))
    tracer.log_solution_found(len(solutions))


def _is_open_cell(row: Row, i: int) -> bool:
    pos = len(row) - i - 1
    return pos >= 0 and row[pos].is_wildcard()


def _suffix_accepts(row: Row, digits: Sequence[int]) -> bool:
    """Compare right-aligned: every computed digit must be accepted by its cell."""
    return all(cell.accepts(d) for cell, d in zip(reversed(row), reversed(digits)))


@contextmanager
def _patched(row: Row, start: int, digits: Sequence[int]) -> Iterator[None]:
    """Fix `digits` into `row` from `start`, restoring the previous cells on exit."""
    end = start + len(digits)
    saved = row[start:end]
    row[start:end] = [_FIXED[d] for d in digits]
    try:
        yield
    finally:
        row[start:end] = saved


def _required_depth(puzzle: Puzzle) -> int:
    # Each multiplicand digit may stack one frame per multiplier digit.
    return (len(puzzle.multiplicand) + 1) * (len(puzzle.multiplier) + 2) + 100


@contextmanager
def _recursion_limit(depth: int) -> Iterator[None]:
    previous = sys.getrecursionlimit()
    sys.setrecursionlimit(previous + depth)
    try:
        yield
    finally:
        sys.setrecursionlimit(previous)
