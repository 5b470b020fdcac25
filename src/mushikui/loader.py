import json
import os
from typing import Any, Dict, List

import pandas as pd

from .parser import split_rows

TEXT_SUFFIXES = (".txt", ".puz")
TABLE_SUFFIXES = (".parquet", ".csv")
PUZZLE_SUFFIXES = TEXT_SUFFIXES + TABLE_SUFFIXES + (".json", ".jsonl")


def load_puzzles(file_path: str) -> List[Dict[str, Any]]:
    """
    Reads puzzle records from a file. Handles plain text grids, .json, .jsonl,
    and tabular .parquet / .csv datasets.
    Returns a list of raw puzzle dictionaries carrying at least an "id".
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    stem = os.path.splitext(os.path.basename(file_path))[0]

    def _is_nonempty_str(value: Any) -> bool:
        return isinstance(value, str) and value.strip() != ""

    def _normalize_record(record: Dict[str, Any], index: int) -> Dict[str, Any]:
        record = {k: v for k, v in record.items() if not _is_missing(v)}
        if not _is_nonempty_str(record.get("id")):
            record["id"] = str(record["id"]) if "id" in record else f"{stem}-{index}"

        if not _is_nonempty_str(record.get("puzzle")):
            for key in ("grid", "text", "problem"):
                if _is_nonempty_str(record.get(key)):
                    record["puzzle"] = record[key]
                    break

        partial_products = record.get("partial_products")
        if partial_products is not None and not isinstance(partial_products, str):
            # Arrays coming out of parquet columns.
            record["partial_products"] = [str(p) for p in partial_products]
        return record

    def _read_json_lines(f) -> List[Dict[str, Any]]:
        data = []
        for line in f:
            if not line.strip():
                continue
            try:
                obj = json.loads(line)
            except json.JSONDecodeError:
                continue
            if isinstance(obj, dict):
                data.append(_normalize_record(obj, len(data) + 1))
        return data

    # Case 1: plain text, one grid per blank-line separated block
    if file_path.endswith(TEXT_SUFFIXES):
        with open(file_path, "r", encoding="utf-8") as f:
            content = f.read()
        records = []
        block: List[str] = []
        for line in content.splitlines() + [""]:
            if line.strip():
                block.append(line)
                continue
            if split_rows("\n".join(block)):
                records.append(_normalize_record({"puzzle": "\n".join(block)}, len(records) + 1))
            block = []
        return records

    # Case 2: tabular datasets
    if file_path.endswith(TABLE_SUFFIXES):
        try:
            if file_path.endswith(".parquet"):
                df = pd.read_parquet(file_path)
            else:
                df = pd.read_csv(file_path, dtype=str, keep_default_na=False)
        except Exception as e:
            print(f"Error reading {file_path}: {e}")
            return []
        records = df.to_dict(orient="records")
        return [_normalize_record(r, i + 1) for i, r in enumerate(records)]

    # Case 3: JSON file (array or object)
    if file_path.endswith(".json"):
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except json.JSONDecodeError:
            # Some sources use ".json" but actually store JSONL.
            with open(file_path, "r", encoding="utf-8") as f:
                return _read_json_lines(f)
        if isinstance(payload, list):
            return [
                _normalize_record(p, i + 1)
                for i, p in enumerate(payload)
                if isinstance(p, dict)
            ]
        if isinstance(payload, dict):
            return [_normalize_record(payload, 1)]
        return []

    # Case 4: JSONL file
    with open(file_path, "r", encoding="utf-8") as f:
        return _read_json_lines(f)


def _is_missing(value: Any) -> bool:
    if isinstance(value, str):
        return not value.strip()
    if hasattr(value, "__len__"):
        return False
    return value is None or bool(pd.isna(value))
