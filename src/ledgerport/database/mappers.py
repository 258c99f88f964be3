"""Mapper functions to convert SQLAlchemy models into domain entities."""

from ledgerport.domain import entities as domain
from ledgerport.database.models import (
    ImportFormat as ORMImportFormat,
    ImportColumnMapping as ORMImportColumnMapping,
)


def import_format_to_domain(orm_format: ORMImportFormat) -> domain.ImportFormat:
    """Convert SQLAlchemy ImportFormat model to domain ImportFormat entity."""
    return domain.ImportFormat(
        id=orm_format.id,
        name=orm_format.name,
        signature=orm_format.signature,
        extension=orm_format.extension,
        header_row=orm_format.header_row,
        data_row=orm_format.data_row,
        created_at=orm_format.created_at,
    )


def import_column_mapping_to_domain(
    orm_mapping: ORMImportColumnMapping,
) -> domain.ImportColumnMapping:
    """Convert SQLAlchemy ImportColumnMapping model to domain entity."""
    return domain.ImportColumnMapping(
        id=orm_mapping.id,
        format_id=orm_mapping.format_id,
        column_index=orm_mapping.column_index,
        header_text=orm_mapping.header_text,
        field_name=orm_mapping.field_name,
    )
