"""Puzzle core data structures: digit cells and the long-multiplication record."""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Union

from .arithmetic import value_of

WILDCARD = "*"

Row = List["Digit"]
RawRow = Union[str, Sequence[str], Sequence["Digit"]]


class ValidationError(ValueError):
    """Raised when a puzzle is structurally malformed."""


@dataclass(frozen=True)
class Digit:
    """
    A single decimal cell. `value` holds the concrete digit (0-9) for a fixed
    cell and is None for a wildcard that accepts any digit.
    """

    value: Optional[int] = None

    def __post_init__(self) -> None:
        if self.value is not None and not 0 <= self.value <= 9:
            raise ValidationError(f"Digit out of range: {self.value!r}")

    @classmethod
    def fixed(cls, value: int) -> "Digit":
        return cls(value)

    @classmethod
    def wildcard(cls) -> "Digit":
        return cls(None)

    @classmethod
    def from_char(cls, ch: str, wildcard: str = WILDCARD) -> "Digit":
        if len(ch) == 1 and ch in "0123456789":
            return cls(int(ch))
        if ch == wildcard:
            return cls(None)
        raise ValidationError(f"Unexpected cell character: {ch!r}")

    def digit(self) -> Optional[int]:
        return self.value

    def accepts(self, candidate: int) -> bool:
        return self.value is None or self.value == candidate

    def is_wildcard(self) -> bool:
        return self.value is None

    def __str__(self) -> str:
        return WILDCARD if self.value is None else str(self.value)


def _to_row(raw: RawRow, wildcard: str = WILDCARD) -> Row:
    row: Row = []
    for cell in raw:
        if isinstance(cell, Digit):
            row.append(cell)
        else:
            row.append(Digit.from_char(str(cell), wildcard))
    return row


@dataclass
class Puzzle:
    """
    A long multiplication `multiplicand x multiplier = product` together with
    one partial-product row per multiplier digit. Rows are stored
    most-significant digit first; `partial_products[j]` belongs to the j-th
    multiplier digit counted from the least-significant end.
    """

    multiplicand: Row
    multiplier: Row
    partial_products: List[Row] = field(default_factory=list)
    product: Row = field(default_factory=list)

    def __post_init__(self) -> None:
        self.multiplicand = _to_row(self.multiplicand)
        self.multiplier = _to_row(self.multiplier)
        self.partial_products = [_to_row(part) for part in self.partial_products]
        self.product = _to_row(self.product)
        self.validate()

    @classmethod
    def from_rows(
        cls,
        multiplicand: RawRow,
        multiplier: RawRow,
        partial_products: Iterable[RawRow],
        product: RawRow,
        wildcard: str = WILDCARD,
    ) -> "Puzzle":
        return cls(
            multiplicand=_to_row(multiplicand, wildcard),
            multiplier=_to_row(multiplier, wildcard),
            partial_products=[_to_row(part, wildcard) for part in partial_products],
            product=_to_row(product, wildcard),
        )

    def validate(self) -> None:
        """Check the structural invariants; raise ValidationError on the first violation."""
        l1 = len(self.multiplicand)
        l2 = len(self.multiplier)
        if l1 == 0:
            raise ValidationError("Multiplicand must have at least one digit")
        if l2 == 0:
            raise ValidationError("Multiplier must have at least one digit")
        if l2 > l1:
            raise ValidationError(
                f"Multiplier ({l2} digits) is longer than the multiplicand ({l1} digits)"
            )
        if len(self.partial_products) != l2:
            raise ValidationError(
                f"Expected {l2} partial product rows, got {len(self.partial_products)}"
            )
        for j, part in enumerate(self.partial_products):
            if not part:
                raise ValidationError(f"Partial product row {j} is empty")
            if len(part) > l1 + 1:
                raise ValidationError(
                    f"Partial product row {j} has {len(part)} digits, at most {l1 + 1} allowed"
                )
        if not l1 + l2 - 1 <= len(self.product) <= l1 + l2:
            raise ValidationError(
                f"Product must have {l1 + l2 - 1} or {l1 + l2} digits, got {len(self.product)}"
            )

        for name, row in self.named_rows():
            if row[0].value == 0:
                raise ValidationError(f"Leading zero in {name}")

    def named_rows(self) -> Iterator[tuple]:
        yield "multiplicand", self.multiplicand
        yield "multiplier", self.multiplier
        for j, part in enumerate(self.partial_products):
            yield f"partial product {j}", part
        yield "product", self.product

    def rows(self) -> Iterator[Row]:
        for _, row in self.named_rows():
            yield row

    def copy(self) -> "Puzzle":
        # Digits are immutable, so copying the row lists is enough.
        return Puzzle(
            multiplicand=list(self.multiplicand),
            multiplier=list(self.multiplier),
            partial_products=[list(part) for part in self.partial_products],
            product=list(self.product),
        )

    def wildcard_count(self) -> int:
        return sum(1 for row in self.rows() for cell in row if cell.is_wildcard())

    def is_resolved(self) -> bool:
        return self.wildcard_count() == 0

    def values(self) -> Dict[str, Any]:
        """Integer values of a fully resolved puzzle."""
        if not self.is_resolved():
            raise ValueError("Puzzle still contains wildcards")
        return {
            "multiplicand": value_of([cell.value for cell in self.multiplicand]),
            "multiplier": value_of([cell.value for cell in self.multiplier]),
            "partial_products": [value_of([cell.value for cell in part]) for part in self.partial_products],
            "product": value_of([cell.value for cell in self.product]),
        }

    def to_dict(self) -> Dict[str, Any]:
        """Row strings, suitable for JSON output."""
        return {
            "multiplicand": "".join(str(d) for d in self.multiplicand),
            "multiplier": "".join(str(d) for d in self.multiplier),
            "partial_products": ["".join(str(d) for d in part) for part in self.partial_products],
            "product": "".join(str(d) for d in self.product),
        }
