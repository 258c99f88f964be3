"""Workbook decoding through pandas."""

import io
import logging
import math
from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional

import pandas as pd

from ledgerport.domain import errors
from ledgerport.domain.entities import RawGrid
from ledgerport.logging_setup import get_logger

logger = get_logger(__name__)

ENGINES = {
    "xlsx": "openpyxl",
    "xls": "xlrd",
}


def cell_text(value) -> Optional[str]:
    """Render one decoded cell as text, or None when it is empty."""
    if value is None:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    if value is pd.NaT:
        return None
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, datetime):
        if value.time() == time(0, 0):
            return value.date().isoformat()
        return value.isoformat(sep=" ")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return str(Decimal(repr(value)))
    text = str(value).strip()
    return text or None


def parse_spreadsheet(
    content: bytes, extension: str, log: Optional[logging.Logger] = None
) -> RawGrid:
    """Read the first sheet of a workbook as positional rows.

    No header inference is done; every sheet row becomes a grid row. Rows
    whose cells are all empty are dropped so trailing blank rows in exports
    do not turn into transactions.

    Raises:
        MalformedSpreadsheetError: If the workbook cannot be decoded
        NoDataFoundError: If every row is empty
    """
    log = log or logger
    try:
        frame = pd.read_excel(
            io.BytesIO(content),
            sheet_name=0,
            header=None,
            dtype=object,
            keep_default_na=False,
            engine=ENGINES[extension],
        )
    except Exception as e:
        raise errors.MalformedSpreadsheetError(
            errors.malformed_spreadsheet(extension, str(e))
        ) from e

    grid: RawGrid = []
    blank = 0
    for values in frame.itertuples(index=False, name=None):
        row = [cell_text(value) for value in values]
        if any(cell is not None for cell in row):
            grid.append(row)
        else:
            blank += 1

    if blank:
        log.debug("Dropped %d blank rows", blank)
    if not grid:
        raise errors.NoDataFoundError(errors.no_rows_found(extension))

    log.debug("Read %d rows from %s workbook", len(grid), extension)
    return grid
