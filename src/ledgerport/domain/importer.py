"""File import domain service."""

import logging
from pathlib import Path
from typing import Optional, Sequence, Union

from ledgerport.database.base import Database
from ledgerport.domain import errors
from ledgerport.domain.entities import ColumnMapping, ImportResult, RawGrid
from ledgerport.domain.field_mapper import suggest_mapping
from ledgerport.domain.import_format import ImportFormatService, compute_signature
from ledgerport.domain.normalizer import TransactionIdFactory, normalize_rows
from ledgerport.logging_setup import get_logger
from ledgerport.parsing import check_extension, parse

logger = get_logger(__name__)

MappingSpec = Union[ColumnMapping, Sequence[Optional[str]], None]


class ImportService:
    """Service for importing export files into transactions.

    The database is optional and only used for saved import formats; imported
    transactions are returned to the caller, never stored.
    """

    def __init__(self, db: Optional[Database] = None, log: Optional[logging.Logger] = None):
        """Initialize import service.

        Args:
            db: Database holding saved import formats, or None to work without them
            log: Logger to report to (defaults to the module logger)
        """
        self.db = db
        self.format_service = ImportFormatService(db) if db is not None else None
        self.log = log or logger

    def import_file(self, file_path: Union[str, Path], **options) -> ImportResult:
        """Import transactions from a file on disk.

        The extension is checked before the file is opened. See
        ``import_grid`` for ``options``.

        Raises:
            UnsupportedFormatError: If the file extension is not supported
            FileNotFoundError: If the file doesn't exist
        """
        path = Path(file_path)
        extension = check_extension(path.suffix)
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {file_path}")
        self.log.info("Importing %s", path.name)
        return self.import_bytes(path.read_bytes(), extension, **options)

    def import_bytes(self, content: bytes, extension: str, **options) -> ImportResult:
        """Import transactions from in-memory file content.

        Raises:
            ParseError: If the content cannot be turned into rows
        """
        extension = check_extension(extension)
        grid = parse(content, extension, log=self.log)
        return self.import_grid(grid, extension, **options)

    def import_grid(
        self,
        grid: RawGrid,
        extension: str,
        header_row: Optional[int] = 0,
        data_row: Optional[int] = None,
        mapping: MappingSpec = None,
        format_name: Optional[str] = None,
        overrides: Optional[dict] = None,
        save_as: Optional[str] = None,
        use_saved: bool = True,
    ) -> ImportResult:
        """Map and normalize an already parsed grid.

        The column mapping comes from, in order of preference: ``mapping``,
        the saved format ``format_name``, a saved format whose signature
        matches this file, and finally ``suggest_mapping``.

        Args:
            grid: Parsed rows
            extension: Normalized file extension
            header_row: Index of the header row, None when there is none
            data_row: Index of the first data row (default: after the header)
            mapping: Explicit mapping, as a ColumnMapping or field names per column
            format_name: Saved format to apply
            overrides: Per-column corrections applied on top of the mapping, keyed by
                column index or header text, valued by field name
            save_as: Save the mapping used under this format name
            use_saved: Look up saved formats by signature

        Returns:
            ImportResult with one transaction and validation result per data row

        Raises:
            ValidationError: If row indexes are out of range or a field name is unknown
            NotFoundError: If ``format_name`` doesn't exist
        """
        saved = None
        if format_name is not None:
            saved = self._require_formats().get_format_by_name(format_name)
            if saved is None:
                raise errors.NotFoundError(errors.format_not_found(format_name))
            header_row = saved.header_row
            if data_row is None:
                data_row = saved.data_row

        header_row, data_row = self._resolve_rows(grid, header_row, data_row)
        headers = tuple(grid[header_row]) if header_row is not None else ()
        width = max((len(row) for row in grid), default=0)
        signature = compute_signature(
            extension, headers if header_row is not None else None, width
        )

        if saved is None and mapping is None and use_saved and self.format_service is not None:
            saved = self.format_service.find_by_signature(signature)
            if saved is not None:
                self.log.info("Using saved format '%s' for signature %s", saved.name, signature)

        if mapping is not None:
            column_mapping = (
                mapping if isinstance(mapping, ColumnMapping) else ColumnMapping.from_fields(mapping)
            )
        elif saved is not None:
            column_mapping = self.format_service.get_column_mapping(saved.id, width=len(headers))
        else:
            column_mapping = suggest_mapping(grid, header_row, data_row, log=self.log)

        for key, field_name in (overrides or {}).items():
            column_mapping = column_mapping.with_field(
                self._column_index(key, headers), field_name
            )

        self.log.debug("Column mapping: %s", list(column_mapping))

        transactions, results = normalize_rows(
            grid[data_row:],
            column_mapping,
            first_row_number=data_row + 1,
            id_factory=TransactionIdFactory(),
            log=self.log,
        )

        if save_as:
            self._require_formats().save_format(
                name=save_as,
                signature=signature,
                extension=extension,
                mapping=column_mapping,
                headers=headers,
                header_row=header_row,
                data_row=data_row,
                overwrite=True,
            )
            self.log.info("Saved format '%s'", save_as)

        result = ImportResult(
            transactions=tuple(transactions),
            results=tuple(results),
            mapping=column_mapping,
            headers=headers,
            signature=signature,
            format_name=save_as or (saved.name if saved is not None else None),
        )
        self.log.info(
            "Imported %d rows: %d valid, %d invalid",
            len(result),
            len(result.valid_transactions),
            len(result.invalid),
        )
        return result

    def _require_formats(self) -> ImportFormatService:
        if self.format_service is None:
            raise errors.ValidationError("Saved import formats need a database")
        return self.format_service

    @staticmethod
    def _column_index(key, headers: Sequence) -> int:
        if isinstance(key, int):
            return key
        wanted = str(key).strip().lower()
        for index, header in enumerate(headers):
            if header is not None and str(header).strip().lower() == wanted:
                return index
        raise errors.ValidationError(f"No column with header '{key}'")

    @staticmethod
    def _resolve_rows(
        grid: RawGrid, header_row: Optional[int], data_row: Optional[int]
    ) -> tuple[Optional[int], int]:
        if header_row is not None and not 0 <= header_row < len(grid):
            raise errors.ValidationError(
                f"Header row {header_row + 1} is outside the file ({len(grid)} rows)"
            )
        if data_row is None:
            data_row = 0 if header_row is None else header_row + 1
        if not 0 <= data_row <= len(grid):
            raise errors.ValidationError(
                f"Data row {data_row + 1} is outside the file ({len(grid)} rows)"
            )
        if header_row is not None and data_row <= header_row:
            raise errors.ValidationError("Data row must come after the header row")
        return header_row, data_row
