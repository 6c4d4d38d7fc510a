"""CSV processing utilities for task import and deletion."""

import csv
import io
from pathlib import Path

from ..core.exceptions import FileOperationError
from ..models.task import ParsedCsv
from .logging_utils import get_logger

HEADER_MARKER = "title"

logger = get_logger(__name__)


def _is_blank_row(cells: list[str]) -> bool:
    return "".join(cells).strip() == ""


def _split_lines(csv_text: str) -> list[list[str]]:
    """Fallback splitter used when the csv module rejects the input."""
    return [line.split(",") for line in csv_text.splitlines()]


def _read_rows(csv_text: str) -> list[list[str]]:
    """Split CSV text into rows of cells.

    Args:
        csv_text: Raw CSV text

    Returns:
        List of rows, each a list of cell strings
    """
    try:
        return list(csv.reader(io.StringIO(csv_text, newline="")))
    except csv.Error as e:
        logger.warning(
            f"CSV input could not be parsed strictly, splitting lines instead: {e}",
            extra={"operation": "parse_csv"},
        )
        return _split_lines(csv_text)


def is_header_row(cells: list[str]) -> bool:
    """Check if a row is a header row.

    A row is a header when any of its cells reads ``title`` once trimmed,
    ignoring case.

    Args:
        cells: Row cells

    Returns:
        bool: True if the row is a header
    """
    return any(cell.strip().lower() == HEADER_MARKER for cell in cells)


def parse_csv(csv_text: str | None) -> ParsedCsv:
    """Parse CSV text into an optional header and data rows.

    Blank rows are dropped before header detection. Malformed input never
    raises; it degrades to best-effort cell extraction.

    Args:
        csv_text: Raw CSV text (None and "" are treated as empty input)

    Returns:
        ParsedCsv: Header (or None) and the remaining data rows in order
    """
    if not csv_text:
        return ParsedCsv(header=None, data=[])

    rows = [cells for cells in _read_rows(csv_text) if not _is_blank_row(cells)]
    if not rows:
        return ParsedCsv(header=None, data=[])

    if is_header_row(rows[0]):
        return ParsedCsv(header=rows[0], data=rows[1:])

    return ParsedCsv(header=None, data=rows)


def read_csv_text(file_path: str | Path) -> str:
    """Read a CSV file into text.

    A leading UTF-8 byte order mark is dropped.

    Args:
        file_path: Path to the CSV file

    Returns:
        str: File contents

    Raises:
        FileOperationError: If the file cannot be read
    """
    path = Path(file_path)
    try:
        with open(path, encoding="utf-8-sig", newline="") as infile:
            return infile.read()
    except FileNotFoundError as e:
        raise FileOperationError(
            "File not found", file_path=str(path), operation="read"
        ) from e
    except PermissionError as e:
        raise FileOperationError(
            "Permission denied reading file", file_path=str(path), operation="read"
        ) from e
    except IsADirectoryError as e:
        raise FileOperationError(
            "Path is a directory, not a file", file_path=str(path), operation="read"
        ) from e
    except UnicodeDecodeError as e:
        raise FileOperationError(
            "File encoding error",
            file_path=str(path),
            operation="read",
            details=str(e),
        ) from e
    except OSError as e:
        raise FileOperationError(
            "OS error reading file",
            file_path=str(path),
            operation="read",
            details=str(e),
        ) from e
