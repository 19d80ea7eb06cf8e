"""Delimited-text parsing into header and row structures."""

import csv
import io
import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

logger = logging.getLogger(__name__)

CANDIDATE_DELIMITERS = ",;\t|"
DEFAULT_DELIMITER = ","
SNIFF_SAMPLE_SIZE = 4096


class CsvParseError(ValueError):
    """Raised when tabular text cannot be turned into headers and rows."""


def sniff_delimiter(text: str) -> str:
    """Guess the delimiter from the first lines, defaulting to a comma."""
    sample = text[:SNIFF_SAMPLE_SIZE]
    try:
        return csv.Sniffer().sniff(sample, delimiters=CANDIDATE_DELIMITERS).delimiter
    except csv.Error:
        return DEFAULT_DELIMITER


def is_blank_row(row: Dict[str, str]) -> bool:
    """A row is blank when every value, stripped, is empty."""
    return all(not str(value or "").strip() for value in row.values())


def parse_csv_text(
    text: str, delimiter: Optional[str] = None
) -> Tuple[List[str], List[Dict[str, str]]]:
    """
    Parse delimited text into (headers, rows).

    - First line is the header; unnamed columns are dropped
    - Short rows are padded with "", extra cells ignored
    - Fully blank rows are skipped
    """
    text = text.lstrip("\ufeff")
    if not text.strip():
        raise CsvParseError("No data: input is empty")

    delimiter = delimiter or sniff_delimiter(text)
    try:
        reader = csv.reader(io.StringIO(text, newline=""), delimiter=delimiter, strict=True)
        raw_rows = list(reader)
    except csv.Error as e:
        raise CsvParseError(f"Malformed CSV: {e}") from e

    raw_headers = raw_rows[0]
    columns = [(i, h.strip()) for i, h in enumerate(raw_headers) if h.strip()]
    if not columns:
        raise CsvParseError("No header row found")
    headers = [h for _, h in columns]

    rows = []
    for raw in raw_rows[1:]:
        row = {h: (raw[i] if i < len(raw) else "") for i, h in columns}
        if is_blank_row(row):
            continue
        rows.append(row)

    logger.debug(
        "Parsed %d rows with %d columns (delimiter %r)", len(rows), len(headers), delimiter
    )
    return headers, rows


def load_csv_file(
    filename: Union[str, Path], delimiter: Optional[str] = None
) -> Tuple[List[str], List[Dict[str, str]]]:
    """Read and parse a CSV file (UTF-8, BOM tolerant)."""
    try:
        with open(filename, "r", encoding="utf-8-sig", newline="") as fp:
            text = fp.read()
    except UnicodeDecodeError as e:
        raise CsvParseError(f"Not UTF-8 text: {e}") from e
    logger.info("Loading CSV %s", filename)
    return parse_csv_text(text, delimiter)
