"""Static description of the recognized transaction fields.

The table order is the detection order: a header that matches several
patterns (anything containing "id", "note", "category"...) resolves to the
earliest entry. Reordering entries changes which field a header maps to.
"""

import re
from dataclasses import dataclass
from typing import Optional

# Sentinel for a column that is not assigned to any field.
UNMAPPED = "–"


@dataclass(frozen=True)
class FieldSchemaEntry:
    """One recognized transaction field."""

    name: str
    attribute: str
    pattern: re.Pattern
    required: bool = False
    monetary: bool = False

    def matches(self, header_text: str) -> bool:
        return self.pattern.search(header_text) is not None


def _pattern(expr: str) -> re.Pattern:
    return re.compile(expr, re.IGNORECASE)


FIELD_SCHEMA: tuple[FieldSchemaEntry, ...] = (
    FieldSchemaEntry(
        "Date",
        "date",
        _pattern(r"date|day|time|datum|fecha|תאריך|день"),
        required=True,
    ),
    FieldSchemaEntry(
        "Description",
        "description",
        _pattern(
            r"desc|note|memo|detail|comment|text|narrative"
            r"|beschreibung|descripcion|תאור|פרטים"
        ),
    ),
    FieldSchemaEntry(
        "Income",
        "income",
        _pattern(r"income|credit|deposit|revenue|in|receipt|einnahmen|ingreso|זכות"),
        monetary=True,
    ),
    FieldSchemaEntry(
        "Expenses",
        "expenses",
        _pattern(r"expense|debit|cost|payment|out|withdrawal|ausgaben|gasto|חובה"),
        monetary=True,
    ),
    FieldSchemaEntry(
        "Category",
        "category",
        _pattern(r"category|type|class|gruppe|categoria|קטגוריה"),
    ),
    FieldSchemaEntry(
        "Subcategory",
        "subcategory",
        _pattern(r"subcategory|subtype|subclass|untergruppe|subcategoria"),
    ),
    FieldSchemaEntry(
        "Balance",
        "balance",
        _pattern(r"balance|total|sum|saldo|equilibrio|יתרה"),
        monetary=True,
    ),
    FieldSchemaEntry(
        "Currency",
        "currency",
        _pattern(r"currency|curr|money|währung|moneda|מטבע"),
    ),
    FieldSchemaEntry(
        "Reference",
        "reference",
        _pattern(r"ref|reference|referenz|referencia|אסמכתא"),
    ),
    FieldSchemaEntry(
        "Notes",
        "notes",
        _pattern(r"notes|comments|remarks|notizen|notas|הערות"),
    ),
    FieldSchemaEntry(
        "Account",
        "account",
        _pattern(r"account|acc|konto|cuenta|חשבון"),
    ),
    FieldSchemaEntry(
        "Payee",
        "payee",
        _pattern(r"payee|vendor|supplier|empfänger|beneficiario|נמען"),
    ),
    FieldSchemaEntry(
        "Check Number",
        "check_number",
        _pattern(r"check|cheque|scheck"),
    ),
    FieldSchemaEntry(
        "Transaction ID",
        "transaction_id",
        _pattern(r"id|transaction.?id|trans.?id|identifier"),
    ),
)

FIELD_NAMES: tuple[str, ...] = tuple(entry.name for entry in FIELD_SCHEMA)
REQUIRED_FIELDS: tuple[str, ...] = tuple(e.name for e in FIELD_SCHEMA if e.required)
MONETARY_FIELDS: tuple[str, ...] = tuple(e.name for e in FIELD_SCHEMA if e.monetary)

_BY_NAME = {entry.name: entry for entry in FIELD_SCHEMA}
_BY_LOWER = {entry.name.lower(): entry for entry in FIELD_SCHEMA}
_BY_LOWER.update({entry.attribute: entry for entry in FIELD_SCHEMA})


def get_field(name: str) -> FieldSchemaEntry:
    """Look up a field by its display name.

    Raises:
        KeyError: If the name is not in the schema
    """
    return _BY_NAME[name]


def lookup_field(name: Optional[str]) -> Optional[FieldSchemaEntry]:
    """Case-insensitive lookup by display name or attribute name.

    Accepts "Check Number", "check number" and "check_number" alike.
    """
    if not name:
        return None
    return _BY_LOWER.get(name.strip().lower())
