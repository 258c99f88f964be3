"""Tests for Database interface returning domain models."""

import pytest
from datetime import datetime

from ledgerport.domain import entities
from ledgerport.domain.errors import ConflictError, NotFoundError


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_get_import_format_returns_domain_model(self, temp_db):
        """Test that get_import_format returns a domain ImportFormat entity."""
        format_id = temp_db.create_import_format(
            name="Bank", signature="sig_1", extension="xlsx", header_row=0, data_row=None
        )

        fmt = temp_db.get_import_format(format_id)

        assert isinstance(fmt, entities.ImportFormat)
        assert fmt.id == format_id
        assert fmt.name == "Bank"
        assert fmt.signature == "sig_1"
        assert fmt.extension == "xlsx"
        assert fmt.header_row == 0
        assert fmt.data_row is None
        assert isinstance(fmt.created_at, datetime)

    def test_missing_format_is_none(self, temp_db):
        """Lookups of unknown formats return None."""
        assert temp_db.get_import_format(999) is None
        assert temp_db.get_import_format_by_name("nope") is None
        assert temp_db.find_import_format_by_signature("sig_none") is None

    def test_duplicate_name(self, temp_db):
        """Format names are unique."""
        temp_db.create_import_format("Bank", "sig_1", "xlsx", 0, None)
        with pytest.raises(ConflictError):
            temp_db.create_import_format("Bank", "sig_2", "xml", 0, None)

    def test_list_import_formats_by_name(self, temp_db):
        """Formats are listed alphabetically."""
        temp_db.create_import_format("Zeta", "sig_1", "xlsx", 0, None)
        temp_db.create_import_format("Alpha", "sig_2", "xlsx", 0, None)

        formats = temp_db.list_import_formats()

        assert [f.name for f in formats] == ["Alpha", "Zeta"]
        for fmt in formats:
            assert isinstance(fmt, entities.ImportFormat)

    def test_find_by_signature_prefers_latest(self, temp_db):
        """The most recently created format wins a signature tie."""
        temp_db.create_import_format("Old", "sig_same", "xlsx", 0, None)
        newer = temp_db.create_import_format("New", "sig_same", "xlsx", 0, None)

        assert temp_db.find_import_format_by_signature("sig_same").id == newer

    def test_update_import_format(self, temp_db):
        """Signature and row settings can be overwritten."""
        format_id = temp_db.create_import_format("Bank", "sig_1", "xlsx", 0, None)
        temp_db.update_import_format(format_id, signature="sig_2", header_row=None, data_row=3)

        fmt = temp_db.get_import_format(format_id)
        assert fmt.signature == "sig_2"
        assert fmt.header_row is None
        assert fmt.data_row == 3

    def test_column_mappings(self, temp_db):
        """Column mappings are replaced wholesale and returned in column order."""
        format_id = temp_db.create_import_format("Bank", "sig_1", "xlsx", 0, None)
        temp_db.replace_column_mappings(format_id, [(2, "Amount", "Income"), (0, "Date", "Date")])
        temp_db.replace_column_mappings(format_id, [(1, "Amount", "Expenses"), (0, "Date", "Date")])

        mappings = temp_db.get_column_mappings(format_id)

        assert all(isinstance(m, entities.ImportColumnMapping) for m in mappings)
        assert [(m.column_index, m.field_name) for m in mappings] == [(0, "Date"), (1, "Expenses")]

    def test_delete_cascades(self, temp_db):
        """Deleting a format removes its column mappings."""
        format_id = temp_db.create_import_format("Bank", "sig_1", "xlsx", 0, None)
        temp_db.replace_column_mappings(format_id, [(0, "Date", "Date")])

        temp_db.delete_import_format(format_id)

        assert temp_db.get_import_format(format_id) is None
        assert temp_db.get_column_mappings(format_id) == []

    def test_unknown_format_operations(self, temp_db):
        """Writing to an unknown format raises NotFoundError."""
        with pytest.raises(NotFoundError):
            temp_db.delete_import_format(42)
        with pytest.raises(NotFoundError):
            temp_db.replace_column_mappings(42, [])
