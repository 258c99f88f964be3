"""Turn mapped grid rows into validated transactions."""

import logging
import time
import uuid
from dataclasses import replace
from decimal import Decimal
from typing import Callable, Iterable, Optional, Sequence

from ledgerport.domain import errors
from ledgerport.domain.entities import (
    ZERO,
    ColumnMapping,
    FieldCoercionIssue,
    Transaction,
    ValidationResult,
)
from ledgerport.domain.field_schema import (
    FIELD_SCHEMA,
    MONETARY_FIELDS,
    REQUIRED_FIELDS,
    get_field,
)
from ledgerport.logging_setup import get_logger
from ledgerport.utils.amount_parser import parse_amount
from ledgerport.utils.date_parser import try_parse_date

logger = get_logger(__name__)

IdFactory = Callable[[int], str]


def new_transaction_id(index: int) -> str:
    """Build an id from creation time, a random part and the row index."""
    millis = time.time_ns() // 1_000_000
    return f"tx_{millis}_{uuid.uuid4().hex[:12]}_{index}"


class TransactionIdFactory:
    """Issues transaction ids that are unique within one factory.

    One factory per import batch; ids it has handed out (or been told about
    through ``reserve``) are never issued again.
    """

    def __init__(self, generator: IdFactory = new_transaction_id):
        self._generator = generator
        self._issued: set[str] = set()

    def __call__(self, index: int) -> str:
        new_id = self._generator(index)
        while new_id in self._issued:
            new_id = self._generator(index)
        self._issued.add(new_id)
        return new_id

    def reserve(self, tx_id: str) -> bool:
        """Record an externally assigned id. Returns False if already taken."""
        if tx_id in self._issued:
            return False
        self._issued.add(tx_id)
        return True


def _cell_text(row: Sequence, index: int) -> Optional[str]:
    if index >= len(row) or row[index] is None:
        return None
    text = str(row[index]).strip()
    return text or None


def normalize(
    row: Sequence,
    mapping: ColumnMapping,
    index: int = 0,
    id_factory: Optional[IdFactory] = None,
    source_row: Optional[int] = None,
    log: Optional[logging.Logger] = None,
) -> tuple[Transaction, ValidationResult]:
    """Build a transaction from one row and validate it.

    Unmapped columns are ignored. When several columns carry the same field,
    the first non-empty cell wins. A monetary cell that cannot be parsed
    counts as zero and is reported as a coercion issue; it never stops the
    remaining fields from being read. Validation problems are returned, not
    raised, and the transaction is always produced.

    Args:
        row: Cells of one grid row (short rows are padded with empty cells)
        mapping: Column to field assignment
        index: Position of the row in its batch, part of the generated id
        id_factory: Callable issuing ids; defaults to ``new_transaction_id``
        source_row: Row number reported in messages (defaults to ``index + 1``)
        log: Logger for coercion and validation details

    Returns:
        Tuple of (transaction, validation result)
    """
    log = log or logger
    make_id = id_factory or new_transaction_id

    values: dict[str, Optional[str]] = {}
    origins: dict[str, int] = {}
    for column, field_name in mapping.mapped_columns().items():
        text = _cell_text(row, column)
        if text is not None and values.get(field_name) is None:
            values[field_name] = text
            origins[field_name] = column

    issues: list[FieldCoercionIssue] = []
    amounts: dict[str, Decimal] = {}
    for field_name in MONETARY_FIELDS:
        raw = values.get(field_name)
        if raw is None:
            amounts[field_name] = ZERO
            continue
        try:
            amounts[field_name] = parse_amount(raw)
        except ValueError as e:
            issue = FieldCoercionIssue(
                column=origins[field_name], field=field_name, raw_value=raw, reason=str(e)
            )
            log.debug("Coerced %s to 0: %s", field_name, issue)
            issues.append(issue)
            amounts[field_name] = ZERO

    # Parseable dates are stored in ISO form, anything else as found so the
    # caller can correct it.
    date_value = values.get("Date")
    if date_value is not None:
        parsed = try_parse_date(date_value)
        if parsed is None:
            log.debug("Unparseable date kept as text: %r", date_value)
        else:
            date_value = parsed.isoformat()

    attributes = {}
    for entry in FIELD_SCHEMA:
        if entry.monetary:
            attributes[entry.attribute] = amounts[entry.name]
        elif entry.name == "Date":
            attributes[entry.attribute] = date_value
        else:
            attributes[entry.attribute] = values.get(entry.name)

    transaction = Transaction(
        id=make_id(index),
        source_row=source_row if source_row is not None else index + 1,
        **attributes,
    )

    error_list = list(validate_transaction(transaction).errors)

    warnings = []
    extra = sum(1 for i in range(len(mapping), len(row)) if _cell_text(row, i) is not None)
    if extra:
        warnings.append(errors.extra_cells(extra))

    result = ValidationResult(
        valid=not error_list,
        errors=tuple(error_list),
        warnings=tuple(warnings),
        issues=tuple(issues),
    )
    if not result.valid:
        log.debug("Row %s invalid: %s", transaction.source_row, "; ".join(result.errors))
    return transaction, result


def validate_transaction(transaction: Transaction) -> ValidationResult:
    """Check a transaction against the validity rules.

    Valid means every required field is present, the date is a real calendar
    date, and at least one monetary field is a non-zero finite number.
    """
    found: list[str] = []
    for field_name in REQUIRED_FIELDS:
        if not getattr(transaction, get_field(field_name).attribute):
            found.append(errors.missing_required_field(field_name))

    if transaction.date and try_parse_date(transaction.date) is None:
        found.append(errors.invalid_date(transaction.date))

    has_amount = False
    for field_name in MONETARY_FIELDS:
        value = getattr(transaction, get_field(field_name).attribute)
        if isinstance(value, Decimal) and value.is_finite() and value != 0:
            has_amount = True
            break
    if not has_amount:
        found.append(errors.missing_monetary_value(MONETARY_FIELDS))

    return ValidationResult(valid=not found, errors=tuple(found))


def normalize_rows(
    rows: Iterable[Sequence],
    mapping: ColumnMapping,
    first_row_number: int = 1,
    id_factory: Optional[IdFactory] = None,
    log: Optional[logging.Logger] = None,
) -> tuple[list[Transaction], list[ValidationResult]]:
    """Normalize a batch of rows, one transaction and result per row, in order."""
    factory = id_factory or TransactionIdFactory()
    transactions: list[Transaction] = []
    results: list[ValidationResult] = []
    for index, row in enumerate(rows):
        transaction, result = normalize(
            row,
            mapping,
            index=index,
            id_factory=factory,
            source_row=first_row_number + index,
            log=log,
        )
        transactions.append(transaction)
        results.append(result)
    return transactions, results


def ensure_transaction_ids(
    transactions: Iterable[Transaction],
    id_factory: Optional[IdFactory] = None,
) -> list[Transaction]:
    """Give every transaction a unique id without touching ids already unique.

    Only a missing id, or one repeating an earlier transaction's id, is
    replaced.
    """
    factory = TransactionIdFactory(id_factory or new_transaction_id)
    out: list[Transaction] = []
    for index, transaction in enumerate(transactions):
        if not transaction.id or not factory.reserve(transaction.id):
            transaction = replace(transaction, id=factory(index))
        out.append(transaction)
    return out
