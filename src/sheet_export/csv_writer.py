"""CSV output for fetched rows."""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

from sheet_export.exceptions import DataShapeError, OutputWriteError

logger = logging.getLogger(__name__)


def cell_to_text(value: Any, row: int, column: int) -> str:
    """Return ``value`` if it is text, otherwise raise.

    Args:
        value: Cell value as returned by the API.
        row: Zero-based row index, for the error message.
        column: Zero-based column index, for the error message.

    Raises:
        DataShapeError: If the value is not a ``str``. No coercion is attempted.
    """
    if not isinstance(value, str):
        raise DataShapeError(row, column, value)
    return value


def format_row(row: Sequence[Any]) -> str:
    """Render a row for the console, cells separated by tabs."""
    return "\t".join(str(cell) for cell in row)


def write_rows(path: str | Path, rows: Iterable[Sequence[Any]]) -> int:
    """Write rows to a CSV file, one record per row, no header.

    The file is created or truncated first. Rows are converted and written
    one at a time, so a non-text cell stops the write before any later row
    reaches the file.

    Args:
        path: Output file path.
        rows: Rows of cell values.

    Returns:
        Number of rows written.

    Raises:
        OutputWriteError: If the file cannot be created or written.
        DataShapeError: If a cell value is not text.
    """
    path = Path(path)
    count = 0
    try:
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f, lineterminator="\n")
            for row_index, row in enumerate(rows):
                record = [
                    cell_to_text(value, row_index, column)
                    for column, value in enumerate(row)
                ]
                writer.writerow(record)
                count += 1
    except OSError as e:
        raise OutputWriteError(str(path), e.strerror or str(e)) from e

    logger.info(f"Wrote {count} rows to {path}")
    return count
