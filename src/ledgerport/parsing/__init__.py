"""Format-adaptive parsing of export files into raw grids."""

import logging
from typing import Optional

from ledgerport.domain import errors
from ledgerport.domain.entities import RawGrid
from ledgerport.logging_setup import get_logger
from ledgerport.parsing.markup import parse_markup
from ledgerport.parsing.spreadsheet import parse_spreadsheet

logger = get_logger(__name__)

MARKUP_EXTENSIONS = ("xml",)
SPREADSHEET_EXTENSIONS = ("xls", "xlsx")
SUPPORTED_EXTENSIONS = MARKUP_EXTENSIONS + SPREADSHEET_EXTENSIONS


def normalize_extension(extension: Optional[str]) -> str:
    """Lower-case an extension and drop any leading dot."""
    return (extension or "").strip().lstrip(".").lower()


def check_extension(extension: Optional[str]) -> str:
    """Return the normalized extension.

    Raises:
        UnsupportedFormatError: If the extension is not supported
    """
    ext = normalize_extension(extension)
    if ext not in SUPPORTED_EXTENSIONS:
        raise errors.UnsupportedFormatError(
            errors.unsupported_format(ext, SUPPORTED_EXTENSIONS)
        )
    return ext


def parse(content: bytes, extension: str, log: Optional[logging.Logger] = None) -> RawGrid:
    """Parse file content into rows of cells.

    The extension is checked before the content is looked at.

    Args:
        content: Raw file bytes (not modified)
        extension: Declared file extension, e.g. "xlsx"
        log: Logger to report parsing decisions to

    Returns:
        Grid with at least one row

    Raises:
        UnsupportedFormatError: If the extension is not supported
        MalformedMarkupError: If XML content is not well formed
        MalformedSpreadsheetError: If a workbook cannot be decoded
        NoDataFoundError: If no rows are found
    """
    ext = check_extension(extension)
    log = log or logger
    if ext in MARKUP_EXTENSIONS:
        return parse_markup(content, log=log)
    return parse_spreadsheet(content, ext, log=log)


__all__ = [
    "SUPPORTED_EXTENSIONS",
    "check_extension",
    "normalize_extension",
    "parse",
]
