"""Domain model entities for ledgerport.

These are plain data classes shared by the parsing, mapping and normalizing
steps, independent of the saved-format database schema.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Iterator, Optional

from ledgerport.domain.errors import ValidationError, unknown_field
from ledgerport.domain.field_schema import UNMAPPED, lookup_field

# Rows of cells; a cell is text or None when empty.
RawGrid = list[list[Optional[str]]]

ZERO = Decimal("0")


@dataclass(frozen=True)
class Transaction:
    """Normalized transaction produced from one mapped row.

    ``id`` is assigned once by the normalizer. Use ``with_updates`` to enrich
    a transaction; it refuses to touch the id.
    """

    id: str
    date: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    subcategory: Optional[str] = None
    income: Decimal = ZERO
    expenses: Decimal = ZERO
    balance: Decimal = ZERO
    currency: Optional[str] = None
    reference: Optional[str] = None
    notes: Optional[str] = None
    account: Optional[str] = None
    payee: Optional[str] = None
    check_number: Optional[str] = None
    transaction_id: Optional[str] = None
    source_row: Optional[int] = None

    def with_updates(self, **changes) -> "Transaction":
        """Return a copy with ``changes`` applied, keeping the same id."""
        if "id" in changes and changes["id"] != self.id:
            raise ValidationError(f"Transaction id '{self.id}' cannot be reassigned")
        changes.pop("id", None)
        return replace(self, **changes)


@dataclass(frozen=True)
class FieldCoercionIssue:
    """A cell that could not be coerced and was defaulted instead."""

    column: int
    field: str
    raw_value: str
    reason: str

    def __str__(self) -> str:
        return f"{self.field} (column {self.column + 1}): {self.reason}"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one normalized transaction."""

    valid: bool
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    issues: tuple[FieldCoercionIssue, ...] = ()


@dataclass(frozen=True)
class WindowRange:
    """Half-open index range ``[start, end)`` into a transaction sequence."""

    start: int = 0
    end: int = 0

    def __len__(self) -> int:
        return self.end - self.start

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.start, self.end))


@dataclass(frozen=True)
class ColumnMapping:
    """Assignment of a field name (or ``UNMAPPED``) to each grid column."""

    fields: tuple[str, ...] = ()

    @classmethod
    def from_fields(cls, names: Iterable[Optional[str]]) -> "ColumnMapping":
        """Build a mapping from field names given per column.

        Names are matched case-insensitively against the field schema; empty
        names and the ``UNMAPPED`` sentinel leave the column unmapped.

        Raises:
            ValidationError: If a name is not a known field
        """
        resolved = []
        for name in names:
            if name is None or not str(name).strip() or str(name).strip() == UNMAPPED:
                resolved.append(UNMAPPED)
                continue
            entry = lookup_field(str(name))
            if entry is None:
                raise ValidationError(unknown_field(str(name)))
            resolved.append(entry.name)
        return cls(tuple(resolved))

    def __len__(self) -> int:
        return len(self.fields)

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def field_at(self, index: int) -> str:
        """Field assigned to column ``index``; columns past the end are unmapped."""
        if 0 <= index < len(self.fields):
            return self.fields[index]
        return UNMAPPED

    def columns_for(self, field_name: str) -> list[int]:
        """Indexes of the columns assigned to ``field_name``."""
        return [i for i, name in enumerate(self.fields) if name == field_name]

    def mapped_columns(self) -> dict[int, str]:
        return {i: name for i, name in enumerate(self.fields) if name != UNMAPPED}

    def with_field(self, index: int, field_name: Optional[str]) -> "ColumnMapping":
        """Assign ``field_name`` to column ``index``.

        A field is held by one column at a time: any other column holding the
        same field becomes unmapped. The mapping grows if ``index`` is past the
        current width.
        """
        if index < 0:
            raise ValidationError(f"Column index must be non-negative, got {index}")
        target = ColumnMapping.from_fields([field_name]).fields[0]
        fields = list(self.fields) + [UNMAPPED] * max(0, index + 1 - len(self.fields))
        if target != UNMAPPED:
            for other in self.columns_for(target):
                fields[other] = UNMAPPED
        fields[index] = target
        return ColumnMapping(tuple(fields))


@dataclass(frozen=True)
class ImportFormat:
    """Saved mapping configuration for files sharing a structure."""

    id: int
    name: str
    signature: str
    extension: str
    header_row: Optional[int]
    data_row: Optional[int]
    created_at: datetime


@dataclass(frozen=True)
class ImportColumnMapping:
    """One column assignment of a saved import format."""

    id: int
    format_id: int
    column_index: int
    header_text: Optional[str]
    field_name: str


@dataclass(frozen=True)
class ImportResult:
    """Everything an import hands back to its caller, in input row order."""

    transactions: tuple[Transaction, ...]
    results: tuple[ValidationResult, ...]
    mapping: ColumnMapping
    headers: tuple[Optional[str], ...] = ()
    signature: str = ""
    format_name: Optional[str] = None

    def __len__(self) -> int:
        return len(self.transactions)

    @property
    def valid_transactions(self) -> list[Transaction]:
        return [tx for tx, res in zip(self.transactions, self.results) if res.valid]

    @property
    def invalid(self) -> list[tuple[Transaction, ValidationResult]]:
        return [(tx, res) for tx, res in zip(self.transactions, self.results) if not res.valid]

    @property
    def errors(self) -> list[str]:
        """Validation errors prefixed with their row number."""
        return [
            f"Row {tx.source_row}: {error}"
            for tx, res in zip(self.transactions, self.results)
            for error in res.errors
        ]

    @property
    def warnings(self) -> list[str]:
        return [
            f"Row {tx.source_row}: {warning}"
            for tx, res in zip(self.transactions, self.results)
            for warning in res.warnings
        ]
