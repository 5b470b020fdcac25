"""Digit-level long multiplication helpers used by the search."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Sequence

if TYPE_CHECKING:
    from .model import Digit


def digits_of(n: int) -> List[int]:
    """Decimal digits of a non-negative integer, most-significant first."""
    if n < 0:
        raise ValueError("digits_of expects a non-negative integer")
    return [int(ch) for ch in str(n)]


def value_of(digits: Sequence[int]) -> int:
    value = 0
    for d in digits:
        value = value * 10 + d
    return value


def compute_partial_product(multiplicand: Sequence[Digit], d: int) -> List[int]:
    """
    Multiply the resolved suffix of `multiplicand` by the single digit `d`.

    Only the contiguous run of concrete cells at the least-significant end is
    used, so for a partially resolved multiplicand the result is the matching
    suffix of the true partial product. The final carry becomes a leading digit
    only once the whole multiplicand is concrete; before that it belongs to a
    cell that is not known yet.
    """
    resolved: List[int] = []
    for cell in reversed(multiplicand):
        if cell.value is None:
            break
        resolved.append(cell.value)

    prod: List[int] = []
    carry = 0
    for m in resolved:
        e = m * d + carry
        prod.append(e % 10)
        carry = e // 10
    if carry > 0 and len(resolved) == len(multiplicand):
        prod.append(carry)
    prod.reverse()
    return prod


def compute_product(partial_products: Sequence[Sequence[Digit]]) -> List[int]:
    """
    Sum the partial products column by column, row j shifted left by j places.
    Wildcard cells count as 0.
    """
    columns = max((j + len(part) for j, part in enumerate(partial_products)), default=0)
    prod: List[int] = []
    carry = 0
    for k in range(columns):
        s = carry
        for j, part in enumerate(partial_products):
            if j <= k < j + len(part):
                s += part[len(part) - (k - j) - 1].value or 0
        prod.append(s % 10)
        carry = s // 10
    while carry > 0:
        prod.append(carry % 10)
        carry //= 10
    prod.reverse()
    return prod
