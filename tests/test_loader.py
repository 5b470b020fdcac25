import json
import tempfile
from pathlib import Path

import pandas as pd
import pytest

from src.mushikui.loader import load_puzzles
from src.mushikui.parser import parse_puzzle

GRID = """
 27
  *
---
**9
---
**9
"""

RECORD = {
    "id": "q6",
    "multiplicand": "*1",
    "multiplier": "2*",
    "partial_products": ["**3", "*4*"],
    "product": "****",
}


def test_missing_file_raises():
    with pytest.raises(FileNotFoundError):
        load_puzzles("does/not/exist.txt")


def test_text_file_with_several_grids():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "book.txt"
        path.write_text(GRID + "\n\n" + GRID.replace("27", "36"))
        records = load_puzzles(str(path))

    assert [r["id"] for r in records] == ["book-1", "book-2"]
    assert parse_puzzle(records[1]).to_dict()["multiplicand"] == "36"


def test_json_array_and_object():
    with tempfile.TemporaryDirectory() as tmpdir:
        array_path = Path(tmpdir) / "many.json"
        array_path.write_text(json.dumps([RECORD, {"puzzle": GRID}, "not a record"]))
        object_path = Path(tmpdir) / "one.json"
        object_path.write_text(json.dumps({"id": "q2", "grid": GRID}))

        many = load_puzzles(str(array_path))
        one = load_puzzles(str(object_path))

    assert [r["id"] for r in many] == ["q6", "many-2"]
    assert parse_puzzle(many[0]).to_dict()["partial_products"] == ["**3", "*4*"]
    assert one[0]["puzzle"] == GRID


def test_jsonl_skips_malformed_lines():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "set.jsonl"
        path.write_text(json.dumps(RECORD) + "\n{invalid json\n\n" + json.dumps({"puzzle": GRID}) + "\n")
        records = load_puzzles(str(path))

    assert len(records) == 2
    assert records[0]["id"] == "q6"


def test_json_extension_holding_json_lines():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "lines.json"
        path.write_text(json.dumps(RECORD) + "\n" + json.dumps(RECORD) + "\n")
        records = load_puzzles(str(path))

    assert len(records) == 2


def test_csv_dataset():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "set.csv"
        path.write_text(
            "id,multiplicand,multiplier,partial_products,product\n"
            "q6,*1,2*,**3 *4*,****\n"
            "q7,2*,4*,6* *8,***\n"
        )
        records = load_puzzles(str(path))

    assert [r["id"] for r in records] == ["q6", "q7"]
    assert parse_puzzle(records[1]).to_dict()["partial_products"] == ["6*", "*8"]


def test_parquet_dataset():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "set.parquet"
        pd.DataFrame([RECORD]).to_parquet(path)
        records = load_puzzles(str(path))

    assert records[0]["id"] == "q6"
    assert records[0]["partial_products"] == ["**3", "*4*"]
    assert len(parse_puzzle(records[0]).partial_products) == 2
