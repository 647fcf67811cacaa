from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterator, List, Union

from ..logging_utils import get_logger
from ..schema.records import NUM_COLUMNS, PropertyAssessment, record_from_cells
from ..store import RecordStore


logger = get_logger("ingest.csv")


def fit_row(row: List[str]) -> List[str]:
    """Force a parsed row to exactly NUM_COLUMNS cells.

    Surplus cells are folded back into the last one (as a split with a
    limit would); short rows are padded with empty cells.
    """

    if len(row) > NUM_COLUMNS:
        head = row[: NUM_COLUMNS - 1]
        return head + [",".join(row[NUM_COLUMNS - 1 :])]
    if len(row) < NUM_COLUMNS:
        return row + [""] * (NUM_COLUMNS - len(row))
    return row


def iter_records(path: Union[str, Path]) -> Iterator[PropertyAssessment]:
    """Yield one record per data row; the header line is skipped.

    Raises OSError if the file cannot be opened.
    """

    with open(path, newline="", encoding="utf-8-sig", errors="replace") as handle:
        reader = csv.reader(handle)
        next(reader, None)
        for row in reader:
            if not row or not any(cell.strip() for cell in row):
                continue
            if len(row) != NUM_COLUMNS:
                logger.debug(
                    "row %d has %d cells, expected %d", reader.line_num, len(row), NUM_COLUMNS
                )
            yield record_from_cells(fit_row(row))


def load_csv(path: Union[str, Path], store: RecordStore) -> int:
    """Read the whole file into `store` and return the number of rows added.

    Every row is added, duplicate account numbers included. A file that
    cannot be opened is logged and leaves the store empty.
    """

    count = 0
    try:
        for record in iter_records(path):
            store.add(record)
            count += 1
    except OSError as exc:
        logger.error("cannot open assessment file %s: %s", path, exc)
        return count
    except csv.Error as exc:
        logger.error("stopped reading %s after %d rows: %s", path, count, exc)
        return count
    logger.info("loaded %d assessments from %s", count, path)
    return count
