"""Unit tests for the digit and puzzle records."""

import pytest

from src.mushikui.model import Digit, Puzzle, ValidationError


def _make_puzzle(**overrides):
    rows = {
        "multiplicand": "*1",
        "multiplier": "2*",
        "partial_products": ["**3", "*4*"],
        "product": "****",
    }
    rows.update(overrides)
    return Puzzle.from_rows(**rows)


def test_fixed_digit_accepts_only_its_value():
    seven = Digit.fixed(7)
    assert seven.digit() == 7
    assert seven.accepts(7)
    assert not seven.accepts(3)
    assert not seven.is_wildcard()


def test_wildcard_accepts_everything():
    any_digit = Digit.wildcard()
    assert any_digit.digit() is None
    assert all(any_digit.accepts(d) for d in range(10))
    assert str(any_digit) == "*"


def test_digit_out_of_range_is_rejected():
    with pytest.raises(ValidationError):
        Digit(10)


def test_from_char_rejects_unknown_characters():
    assert Digit.from_char("4") == Digit.fixed(4)
    assert Digit.from_char("?", wildcard="?").is_wildcard()
    with pytest.raises(ValidationError):
        Digit.from_char("x")


def test_from_rows_builds_digit_rows():
    puzzle = _make_puzzle()
    assert puzzle.multiplicand == [Digit.wildcard(), Digit.fixed(1)]
    assert len(puzzle.partial_products) == 2
    assert puzzle.wildcard_count() == 10
    assert not puzzle.is_resolved()


@pytest.mark.parametrize(
    "overrides",
    [
        {"multiplicand": ""},
        {"multiplier": "", "partial_products": []},
        {"multiplier": "***", "partial_products": ["**", "**", "**"], "product": "*****"},
        {"partial_products": ["**3"]},
        {"partial_products": ["****", "*4*"]},
        {"product": "**"},
        {"product": "*****"},
        {"multiplicand": "01"},
        {"multiplier": "0*"},
        {"partial_products": ["0*3", "*4*"]},
        {"product": "0***"},
    ],
)
def test_malformed_puzzles_raise_validation_error(overrides):
    with pytest.raises(ValidationError):
        _make_puzzle(**overrides)


def test_validation_error_is_a_value_error():
    assert issubclass(ValidationError, ValueError)


def test_copy_is_independent():
    puzzle = _make_puzzle()
    clone = puzzle.copy()
    clone.partial_products[0][0] = Digit.fixed(2)
    clone.multiplicand[0] = Digit.fixed(7)
    assert puzzle.partial_products[0][0].is_wildcard()
    assert puzzle.multiplicand[0].is_wildcard()


def test_values_of_resolved_puzzle():
    puzzle = Puzzle.from_rows("71", "23", ["213", "142"], "1633")
    assert puzzle.is_resolved()
    assert puzzle.values() == {
        "multiplicand": 71,
        "multiplier": 23,
        "partial_products": [213, 142],
        "product": 1633,
    }


def test_values_requires_resolved_puzzle():
    with pytest.raises(ValueError):
        _make_puzzle().values()


def test_to_dict_keeps_wildcards():
    assert _make_puzzle().to_dict() == {
        "multiplicand": "*1",
        "multiplier": "2*",
        "partial_products": ["**3", "*4*"],
        "product": "****",
    }


def test_constructor_converts_raw_rows():
    puzzle = Puzzle("9", "*", ["27"], "27")
    assert puzzle.multiplicand == [Digit.fixed(9)]
    assert puzzle.multiplier == [Digit.wildcard()]
    assert puzzle.partial_products == [[Digit.fixed(2), Digit.fixed(7)]]


def test_constructor_rejects_bad_raw_cells():
    with pytest.raises(ValidationError):
        Puzzle("1x", "*", ["**"], "**")
