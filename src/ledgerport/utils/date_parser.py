"""Date parsing utilities."""

import re
from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser

# Spreadsheet day serials (1900 date system). Only integers in this window are
# treated as dates; it covers roughly 1968-2173 and keeps ordinary numbers out.
SERIAL_MIN = 25000
SERIAL_MAX = 100000
SERIAL_EPOCH = date(1899, 12, 30)

_ISO = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")
_REVERSE = re.compile(r"^(\d{4})/(\d{1,2})/(\d{1,2})$")
_SLASHED = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
_DAY_FIRST = re.compile(r"^(\d{1,2})[.-](\d{1,2})[.-](\d{4})$")
_COMPACT = re.compile(r"^(\d{4})(\d{2})(\d{2})$")
_SERIAL = re.compile(r"^\d+(\.0+)?$")


def is_serial_date(value) -> bool:
    """Check if a value looks like a spreadsheet date serial number."""
    if value is None or isinstance(value, bool):
        return False
    text = str(value).strip()
    if not _SERIAL.match(text):
        return False
    return SERIAL_MIN <= int(float(text)) <= SERIAL_MAX


def serial_to_date(serial) -> date:
    """Convert a spreadsheet date serial number into a date.

    Raises:
        ValueError: If the value is not a plausible date serial
    """
    if not is_serial_date(serial):
        raise ValueError(f"'{serial}' is not a spreadsheet date serial")
    return SERIAL_EPOCH + timedelta(days=int(float(str(serial).strip())))


def _build(year: str, month: str, day: str) -> date:
    return date(int(year), int(month), int(day))


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports:
    - ISO dates: "2024-01-15" (a trailing time part is ignored)
    - Slashed dates: "01/15/2024" (month first, day first when the first part > 12)
    - Day-first dotted or dashed dates: "15.01.2024", "15-01-2024"
    - Year-first slashed dates: "2024/01/15"
    - Compact dates: "20240115"
    - Spreadsheet serials: "45306"
    - Anything else dateutil understands: "January 15, 2024", "15 Jan 2024"

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed or names an impossible date
    """
    if date_str is None or not str(date_str).strip():
        raise ValueError("Empty date string")

    text = str(date_str).strip()

    if is_serial_date(text):
        return serial_to_date(text)

    # Drop a time component from ISO timestamps ("2024-01-15 00:00:00", "2024-01-15T10:00")
    head = re.split(r"[T ]", text, maxsplit=1)[0]

    try:
        year_first = _ISO.match(head) or _REVERSE.match(head) or _COMPACT.match(text)
        if year_first:
            return _build(*year_first.groups())

        slashed = _SLASHED.match(text)
        if slashed:
            first, second, year = slashed.groups()
            if int(first) > 12:
                return _build(year, second, first)
            return _build(year, first, second)

        day_first = _DAY_FIRST.match(text)
        if day_first:
            day, month, year = day_first.groups()
            return _build(year, month, day)
    except ValueError as e:
        raise ValueError(f"Could not parse date '{text}': {e}")

    if text.isdigit():
        raise ValueError(f"Could not parse date '{text}': bare number")

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError, TypeError) as e:
        raise ValueError(f"Could not parse date '{text}': {e}")


def try_parse_date(date_str) -> Optional[date]:
    """Parse a date, returning None instead of raising."""
    try:
        return parse_date(date_str)
    except ValueError:
        return None
