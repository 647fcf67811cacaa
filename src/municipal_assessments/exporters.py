from __future__ import annotations

import csv
import json
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, TextIO

from .schema.records import API_FIELDS


_NUMBER_RE = re.compile(r"^-?\d+(\.\d+)?$")


def neutralize_csv_field(value: Any) -> str:
    text = "" if value is None else str(value)
    # Negative numbers (longitudes) are data, not formulas.
    if _NUMBER_RE.match(text):
        return text
    if text.startswith(("=", "+", "-", "@")):
        return "'" + text
    return text


def write_jsonl(rows: Iterable[Dict[str, Any]], handle: TextIO) -> None:
    for row in rows:
        handle.write(json.dumps(row) + "\n")


def write_json(rows: Iterable[Dict[str, Any]], handle: TextIO) -> None:
    handle.write(json.dumps(list(rows)) + "\n")


def write_csv(rows: Iterable[Dict[str, Any]], handle: TextIO, *, header: bool = True) -> None:
    writer = csv.DictWriter(handle, fieldnames=API_FIELDS)
    if header:
        writer.writeheader()
    for row in rows:
        writer.writerow({k: neutralize_csv_field(row.get(k, "")) for k in API_FIELDS})


def export_rows(rows: List[Dict[str, Any]], fmt: str, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as handle:
        if fmt == "jsonl":
            write_jsonl(rows, handle)
        elif fmt == "json":
            write_json(rows, handle)
        elif fmt == "csv":
            write_csv(rows, handle)
        else:
            raise ValueError(f"unsupported format: {fmt}")
