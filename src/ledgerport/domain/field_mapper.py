"""Header-to-field detection.

``detect_field`` is the header-only contract. ``suggest_mapping`` adds a
content pass over a few sample rows so columns with unhelpful or missing
headers still get a sensible first guess.
"""

import logging
import re
from typing import Optional, Sequence

from ledgerport.domain.entities import ColumnMapping, RawGrid
from ledgerport.domain.field_schema import FIELD_SCHEMA, MONETARY_FIELDS, UNMAPPED
from ledgerport.logging_setup import get_logger
from ledgerport.utils.amount_parser import parse_amount
from ledgerport.utils.date_parser import is_serial_date

logger = get_logger(__name__)

MAX_SAMPLE_ROWS = 5

_DATE_SHAPE = re.compile(r"^\d{1,4}[-/.]\d{1,2}[-/.]\d{1,4}$")
_HAS_SEPARATOR = re.compile(r"[-/.]")
_FOUR_DIGIT_YEAR = re.compile(r"\b\d{4}\b")
_PLAIN_NUMBER = re.compile(r"^-?\d+([.,]\d+)?$")


def detect_field(header_text) -> str:
    """Return the first field whose pattern matches ``header_text``.

    Returns ``UNMAPPED`` for empty or unrecognized headers.
    """
    if header_text is None:
        return UNMAPPED
    text = str(header_text).strip().lower()
    if not text:
        return UNMAPPED
    for entry in FIELD_SCHEMA:
        if entry.matches(text):
            return entry.name
    return UNMAPPED


def map_headers(headers: Optional[Sequence]) -> ColumnMapping:
    """Map each header cell independently with ``detect_field``."""
    if not headers:
        return ColumnMapping()
    return ColumnMapping(tuple(detect_field(h) for h in headers))


def suggest_mapping(
    grid: RawGrid,
    header_row: Optional[int] = 0,
    data_row: Optional[int] = None,
    log: Optional[logging.Logger] = None,
) -> ColumnMapping:
    """Suggest a column mapping from headers and sample data.

    Args:
        grid: Parsed rows
        header_row: Index of the header row, or None when the data has no header
        data_row: Index of the first data row (defaults to the row after the header)
        log: Logger to report decisions to

    Returns:
        ColumnMapping as wide as the header row; without a header, as wide as
        the widest sample row. Cells past the header are left to the
        normalizer, which reports them as extra cells.
    """
    log = log or logger
    headers = list(grid[header_row]) if header_row is not None and header_row < len(grid) else []
    if data_row is None:
        data_row = 0 if header_row is None else header_row + 1
    samples = [row for row in grid[data_row:data_row + MAX_SAMPLE_ROWS] if row]

    if header_row is not None:
        width = len(headers)
    else:
        width = max([0] + [len(row) for row in samples])
    fields = list(map_headers(headers)) + [UNMAPPED] * (width - len(headers))

    # Monetary fields hold one column each; later duplicates lose.
    for name in MONETARY_FIELDS:
        holders = [i for i, f in enumerate(fields) if f == name]
        for index in holders[1:]:
            log.debug("Column %d also matched %s; left unmapped", index, name)
            fields[index] = UNMAPPED

    def column_values(index: int) -> list[str]:
        return [row[index] for row in samples if index < len(row) and row[index]]

    if "Date" not in fields:
        for index in range(width):
            values = column_values(index)
            if fields[index] == UNMAPPED and values and _looks_like_dates(values):
                log.debug("Column %d identified as Date from content", index)
                fields[index] = "Date"
                break

    if "Description" not in fields:
        for index in range(width):
            values = column_values(index)
            if fields[index] == UNMAPPED and values and _looks_like_text(values):
                log.debug("Column %d identified as Description from content", index)
                fields[index] = "Description"
                break

    for index in range(width):
        values = column_values(index)
        if fields[index] != UNMAPPED or not values or not _looks_monetary(values):
            continue
        name = _classify_monetary(values, income_taken="Income" in fields)
        if name in fields:
            continue
        log.debug("Column %d identified as %s from monetary values", index, name)
        fields[index] = name

    mapping = ColumnMapping(tuple(fields))
    log.debug("Suggested mapping: %s", list(mapping))
    return mapping


def _looks_like_dates(values: list[str]) -> bool:
    serials = sum(1 for v in values if is_serial_date(v))
    if serials > len(values) * 0.5:
        return True
    dated = 0
    for value in values:
        text = str(value).strip()
        if _DATE_SHAPE.match(text) or (
            _HAS_SEPARATOR.search(text) and _FOUR_DIGIT_YEAR.search(text)
        ):
            dated += 1
    return dated > len(values) * 0.4


def _looks_like_text(values: list[str]) -> bool:
    texty = 0
    for value in values:
        text = str(value).strip()
        if len(text.split()) > 1:
            texty += 1
        elif re.search(r"[^\W\d_]", text) and not _PLAIN_NUMBER.match(text):
            texty += 1
    return texty > len(values) * 0.4


def _amount_or_none(value: str):
    try:
        return parse_amount(value)
    except ValueError:
        return None


def _looks_monetary(values: list[str]) -> bool:
    numeric = [v for v in values if _amount_or_none(v) is not None]
    return len(numeric) > len(values) * 0.5


def _classify_monetary(values: list[str], income_taken: bool) -> str:
    positives = negatives = 0
    for value in values:
        amount = _amount_or_none(value)
        if amount is None:
            continue
        if amount < 0:
            negatives += 1
        else:
            positives += 1
    if not income_taken and positives >= negatives:
        return "Income"
    return "Expenses"
