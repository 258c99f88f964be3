"""Shared domain error messages and error types."""

from typing import Iterable


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class ParseError(DomainError):
    """A file could not be turned into a grid; aborts the whole import.

    ``stage`` tells the caller which step failed so it can explain the
    failure: ``format`` (rejected before reading), ``parse`` (structurally
    invalid content) or ``empty`` (no rows found).
    """

    stage = "parse"
    label = "Could not parse file"


class UnsupportedFormatError(ParseError):
    """File extension is not a recognized spreadsheet or markup kind."""

    stage = "format"
    label = "Unsupported format"


class MalformedMarkupError(ParseError):
    """Markup parser reported a syntax error."""


class MalformedSpreadsheetError(ParseError):
    """Spreadsheet decoding library could not read the workbook."""


class NoDataFoundError(ParseError):
    """Zero rows were discovered after every row strategy was tried."""

    stage = "empty"
    label = "No data found"


def unsupported_format(extension: str, supported: Iterable[str]) -> str:
    """Return message for a rejected file extension."""
    shown = extension or "(none)"
    return f"Unsupported file type '{shown}'. Supported types: {', '.join(supported)}"


def malformed_markup(detail: str) -> str:
    """Return message for a markup syntax error."""
    return f"XML parsing failed: {detail}"


def malformed_spreadsheet(extension: str, detail: str) -> str:
    """Return message for an unreadable workbook."""
    return f"Could not read {extension} workbook: {detail}"


def no_rows_found(kind: str) -> str:
    """Return message when no rows could be located."""
    return f"No transaction data found in {kind} file"


def unknown_field(name: str) -> str:
    """Return message for a field name missing from the field schema."""
    return f"Unknown transaction field '{name}'"


def format_not_found(name: str) -> str:
    """Return message for missing saved import format."""
    return f"Import format '{name}' not found"


def duplicate_format_name(name: str) -> str:
    """Return message for duplicate saved import format name."""
    return f"Import format with name '{name}' already exists"


def missing_required_field(field: str) -> str:
    """Return validation message for a missing required field."""
    return f"Missing required field: {field}"


def invalid_date(raw: str) -> str:
    """Return validation message for an unparseable date."""
    return f"Invalid date: '{raw}'"


def missing_monetary_value(fields: Iterable[str]) -> str:
    """Return validation message when all monetary fields are zero."""
    names = list(fields)
    listed = ", ".join(names[:-1]) + f", or {names[-1]}" if len(names) > 1 else "".join(names)
    return f"Transaction must have at least one monetary value ({listed})"


def extra_cells(count: int) -> str:
    """Return warning message for cells beyond the mapped columns."""
    return f"Row has {count} cell{'s' if count != 1 else ''} beyond the mapped columns"
