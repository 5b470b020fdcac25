"""Puzzle parser: convert the textual multiplication grid into a Puzzle.

Accepted layout (rows right-aligned by decimal place, `*` marks unknown cells):

       *1
       2*
     ----
      **3
     *4*
     ----
     ****

The first row is the multiplicand, the second the multiplier and the last the
product; the rows in between are the partial products, starting with the one
for the least-significant multiplier digit. Separator lines are ignored.
"""

from __future__ import annotations

from typing import Any, Dict, List, Union

from .model import WILDCARD, Digit, Puzzle, Row, ValidationError

SEPARATOR = "---"


def parse_row(text: str, wildcard: str = WILDCARD) -> Row:
    row = text.strip()
    if not row:
        raise ValidationError("Empty row")
    return [Digit.from_char(ch, wildcard) for ch in row]


def split_rows(text: str) -> List[str]:
    """Non-empty, non-separator lines of a puzzle grid, stripped."""
    rows: List[str] = []
    for line in text.strip().splitlines():
        line = line.strip()
        if not line or SEPARATOR in line:
            continue
        rows.append(line)
    return rows


def parse_grid(text: str, wildcard: str = WILDCARD) -> Puzzle:
    rows = split_rows(text)
    if len(rows) < 4:
        raise ValidationError(
            f"A puzzle needs at least 4 rows (multiplicand, multiplier, partial product, product), got {len(rows)}"
        )
    return Puzzle(
        multiplicand=parse_row(rows[0], wildcard),
        multiplier=parse_row(rows[1], wildcard),
        partial_products=[parse_row(r, wildcard) for r in rows[2:-1]],
        product=parse_row(rows[-1], wildcard),
    )


def parse_puzzle(puzzle: Union[str, Dict[str, Any]], wildcard: str = WILDCARD) -> Puzzle:
    """
    Build a Puzzle from either the grid text itself or a record dict.

    A record either carries the grid text under "puzzle", or explicit
    "multiplicand", "multiplier", "partial_products" and "product" fields.
    A "wildcard" field overrides the wildcard character.
    """
    if isinstance(puzzle, str):
        return parse_grid(puzzle, wildcard)

    wildcard = str(puzzle.get("wildcard") or wildcard)
    text = puzzle.get("puzzle")
    if isinstance(text, str) and text.strip():
        return parse_grid(text, wildcard)

    missing = [
        key
        for key in ("multiplicand", "multiplier", "partial_products", "product")
        if puzzle.get(key) is None
    ]
    if missing:
        raise ValidationError(f"Puzzle record is missing fields: {', '.join(missing)}")

    partial_products = puzzle["partial_products"]
    if isinstance(partial_products, str):
        partial_products = partial_products.split()
    return Puzzle(
        multiplicand=parse_row(str(puzzle["multiplicand"]), wildcard),
        multiplier=parse_row(str(puzzle["multiplier"]), wildcard),
        partial_products=[parse_row(str(r), wildcard) for r in partial_products],
        product=parse_row(str(puzzle["product"]), wildcard),
    )
