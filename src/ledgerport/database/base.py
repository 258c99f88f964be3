"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerport.domain.entities import ImportColumnMapping, ImportFormat


class Database(ABC):
    """Abstract store for saved import formats."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Import format operations
    @abstractmethod
    def create_import_format(
        self,
        name: str,
        signature: str,
        extension: str,
        header_row: Optional[int],
        data_row: Optional[int],
    ) -> int:
        """Create a new import format. Returns format ID."""
        pass

    @abstractmethod
    def get_import_format(self, format_id: int) -> Optional[ImportFormat]:
        """Get import format by ID."""
        pass

    @abstractmethod
    def get_import_format_by_name(self, name: str) -> Optional[ImportFormat]:
        """Get import format by name."""
        pass

    @abstractmethod
    def find_import_format_by_signature(self, signature: str) -> Optional[ImportFormat]:
        """Get the most recently saved import format with this signature."""
        pass

    @abstractmethod
    def list_import_formats(self) -> list[ImportFormat]:
        """List all import formats."""
        pass

    @abstractmethod
    def update_import_format(
        self,
        format_id: int,
        signature: str,
        header_row: Optional[int],
        data_row: Optional[int],
    ) -> None:
        """Overwrite the signature and row settings of a format."""
        pass

    @abstractmethod
    def delete_import_format(self, format_id: int) -> None:
        """Delete an import format and its column mappings."""
        pass

    # Column mapping operations
    @abstractmethod
    def replace_column_mappings(
        self,
        format_id: int,
        mappings: Sequence[tuple[int, Optional[str], str]],
    ) -> None:
        """Replace all column mappings of a format.

        Each mapping is (column_index, header_text, field_name).
        """
        pass

    @abstractmethod
    def get_column_mappings(self, format_id: int) -> list[ImportColumnMapping]:
        """Get column mappings of a format ordered by column index."""
        pass
