"""Saved import format domain service."""

import hashlib
import re
from typing import Optional, Sequence

from ledgerport.database.base import Database
from ledgerport.domain import errors
from ledgerport.domain.entities import (
    ColumnMapping,
    ImportColumnMapping as ImportColumnMappingEntity,
    ImportFormat as ImportFormatEntity,
)
from ledgerport.domain.field_schema import UNMAPPED


def compute_signature(
    extension: str, header: Optional[Sequence], column_count: Optional[int] = None
) -> str:
    """Stable signature of a file's structure.

    Built from the extension, the column count and the header cells reduced
    to lower-case letters and digits, so cosmetic differences in header
    spelling ("Date", " DATE ", "date:") give the same signature.

    Args:
        extension: Normalized file extension
        header: Header row cells, or None for headerless files
        column_count: Column count when there is no header row
    """
    cells = list(header or [])
    count = len(cells) if header is not None else (column_count or 0)
    content = "|".join(re.sub(r"[\W_]", "", str(c or "").lower()) for c in cells)
    digest = hashlib.sha1(f"{extension}:{count}:{content}".encode("utf-8")).hexdigest()
    return f"sig_{digest[:12]}"


class ImportFormatService:
    """Service for managing saved import formats."""

    def __init__(self, db: Database):
        """Initialize import format service.

        Args:
            db: Database instance
        """
        self.db = db

    def save_format(
        self,
        name: str,
        signature: str,
        extension: str,
        mapping: ColumnMapping,
        headers: Optional[Sequence] = None,
        header_row: Optional[int] = 0,
        data_row: Optional[int] = None,
        overwrite: bool = False,
    ) -> int:
        """Save a column mapping under ``name``.

        Args:
            name: Format name
            signature: Structure signature of the files it applies to
            extension: File extension
            mapping: Column mapping to store (unmapped columns are not stored)
            headers: Header cells, stored alongside each mapped column
            header_row: Header row index, None for headerless files
            data_row: First data row index, None for "right after the header"
            overwrite: Replace an existing format with the same name

        Returns:
            Format ID

        Raises:
            ValidationError: If the name is empty or nothing is mapped
            ConflictError: If the name is taken and overwrite is False
        """
        name = (name or "").strip()
        if not name:
            raise errors.ValidationError("Import format name cannot be empty")
        if not mapping.mapped_columns():
            raise errors.ValidationError("Cannot save a format with no mapped columns")

        headers = list(headers or [])
        rows = [
            (index, headers[index] if index < len(headers) else None, field_name)
            for index, field_name in mapping.mapped_columns().items()
        ]

        existing = self.db.get_import_format_by_name(name)
        if existing is not None:
            if not overwrite:
                raise errors.ConflictError(errors.duplicate_format_name(name))
            format_id = existing.id
            self.db.update_import_format(
                format_id, signature=signature, header_row=header_row, data_row=data_row
            )
        else:
            format_id = self.db.create_import_format(
                name=name,
                signature=signature,
                extension=extension,
                header_row=header_row,
                data_row=data_row,
            )

        self.db.replace_column_mappings(format_id, rows)
        return format_id

    def get_format(self, format_id: int) -> Optional[ImportFormatEntity]:
        """Get import format by ID."""
        return self.db.get_import_format(format_id)

    def get_format_by_name(self, name: str) -> Optional[ImportFormatEntity]:
        """Get import format by name."""
        return self.db.get_import_format_by_name(name)

    def find_by_signature(self, signature: str) -> Optional[ImportFormatEntity]:
        """Get the import format saved for files with this signature."""
        return self.db.find_import_format_by_signature(signature)

    def list_formats(self) -> list[ImportFormatEntity]:
        """List saved import formats by name."""
        return self.db.list_import_formats()

    def get_mappings(self, format_id: int) -> list[ImportColumnMappingEntity]:
        """Get the stored column assignments of a format."""
        return self.db.get_column_mappings(format_id)

    def get_column_mapping(self, format_id: int, width: int = 0) -> ColumnMapping:
        """Rebuild a ColumnMapping from a saved format.

        Args:
            format_id: Format ID
            width: Minimum number of columns of the result

        Raises:
            NotFoundError: If the format doesn't exist
        """
        if self.db.get_import_format(format_id) is None:
            raise errors.NotFoundError(f"Import format {format_id} not found")
        stored = self.get_mappings(format_id)
        size = max([width] + [m.column_index + 1 for m in stored])
        fields = [UNMAPPED] * size
        for m in stored:
            fields[m.column_index] = m.field_name
        return ColumnMapping.from_fields(fields)

    def delete_format(self, format_id: int) -> None:
        """Delete an import format.

        Raises:
            NotFoundError: If the format doesn't exist
        """
        if self.db.get_import_format(format_id) is None:
            raise errors.NotFoundError(f"Import format {format_id} not found")
        self.db.delete_import_format(format_id)
