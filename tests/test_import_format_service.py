"""Domain tests for the saved import format service."""

import pytest

from ledgerport.domain.entities import ColumnMapping
from ledgerport.domain.errors import ConflictError, NotFoundError, ValidationError
from ledgerport.domain.field_schema import UNMAPPED
from ledgerport.domain.import_format import compute_signature

HEADERS = ["Date", "Memo", "Amount"]


@pytest.fixture
def mapping():
    return ColumnMapping.from_fields(["Date", "Description", "Expenses"])


class TestComputeSignature:
    """Tests for compute_signature."""

    def test_stable(self):
        """The same structure always gives the same signature."""
        assert compute_signature("xlsx", HEADERS) == compute_signature("xlsx", HEADERS)
        assert compute_signature("xlsx", HEADERS).startswith("sig_")

    def test_cosmetic_header_differences(self):
        """Case, spacing and punctuation do not change the signature."""
        assert compute_signature("xlsx", HEADERS) == compute_signature(
            "xlsx", [" DATE ", "memo:", "Amount"]
        )

    def test_structure_changes(self):
        """Extension, header text and column count all matter."""
        base = compute_signature("xlsx", HEADERS)
        assert compute_signature("xls", HEADERS) != base
        assert compute_signature("xlsx", ["Date", "Memo", "Value"]) != base
        assert compute_signature("xlsx", HEADERS + [None]) != base

    def test_headerless(self):
        """Headerless files are told apart by column count."""
        assert compute_signature("xml", None, 3) == compute_signature("xml", None, 3)
        assert compute_signature("xml", None, 3) != compute_signature("xml", None, 4)


class TestImportFormatService:
    """Tests for ImportFormatService."""

    def test_save_and_load(self, import_format_service, mapping):
        """A saved format reproduces its column mapping."""
        format_id = import_format_service.save_format(
            name="My Bank",
            signature="sig_1",
            extension="xlsx",
            mapping=mapping,
            headers=HEADERS,
        )

        fmt = import_format_service.get_format(format_id)
        assert fmt.name == "My Bank"
        assert fmt.header_row == 0
        assert import_format_service.get_format_by_name("My Bank").id == format_id
        assert import_format_service.find_by_signature("sig_1").id == format_id

        stored = import_format_service.get_mappings(format_id)
        assert [(m.column_index, m.header_text, m.field_name) for m in stored] == [
            (0, "Date", "Date"),
            (1, "Memo", "Description"),
            (2, "Amount", "Expenses"),
        ]
        assert import_format_service.get_column_mapping(format_id) == mapping

    def test_unmapped_columns_not_stored(self, import_format_service):
        """Only mapped columns are saved; width is restored on load."""
        mapping = ColumnMapping.from_fields([UNMAPPED, "Date", UNMAPPED, "Income"])
        format_id = import_format_service.save_format("Sparse", "sig_2", "xml", mapping)

        assert len(import_format_service.get_mappings(format_id)) == 2
        loaded = import_format_service.get_column_mapping(format_id, width=5)
        assert list(loaded) == [UNMAPPED, "Date", UNMAPPED, "Income", UNMAPPED]

    def test_empty_name(self, import_format_service, mapping):
        """Format names cannot be blank."""
        with pytest.raises(ValidationError):
            import_format_service.save_format("  ", "sig_1", "xlsx", mapping)

    def test_nothing_mapped(self, import_format_service):
        """A mapping without any field cannot be saved."""
        with pytest.raises(ValidationError):
            import_format_service.save_format(
                "Empty", "sig_1", "xlsx", ColumnMapping.from_fields([UNMAPPED])
            )

    def test_duplicate_name(self, import_format_service, mapping):
        """Saving twice under one name needs overwrite."""
        import_format_service.save_format("My Bank", "sig_1", "xlsx", mapping)
        with pytest.raises(ConflictError) as excinfo:
            import_format_service.save_format("My Bank", "sig_1", "xlsx", mapping)
        assert "already exists" in str(excinfo.value)

    def test_overwrite(self, import_format_service, mapping):
        """Overwriting replaces signature, rows and columns in place."""
        format_id = import_format_service.save_format("My Bank", "sig_1", "xlsx", mapping)
        new_mapping = ColumnMapping.from_fields(["Date", "Income"])

        same_id = import_format_service.save_format(
            "My Bank", "sig_9", "xlsx", new_mapping, header_row=None, data_row=2, overwrite=True
        )

        assert same_id == format_id
        fmt = import_format_service.get_format(format_id)
        assert fmt.signature == "sig_9"
        assert fmt.header_row is None
        assert fmt.data_row == 2
        assert import_format_service.get_column_mapping(format_id) == new_mapping

    def test_list_and_delete(self, import_format_service, mapping):
        """Formats can be listed and deleted."""
        format_id = import_format_service.save_format("My Bank", "sig_1", "xlsx", mapping)
        assert [f.name for f in import_format_service.list_formats()] == ["My Bank"]

        import_format_service.delete_format(format_id)

        assert import_format_service.list_formats() == []
        with pytest.raises(NotFoundError):
            import_format_service.delete_format(format_id)
        with pytest.raises(NotFoundError):
            import_format_service.get_column_mapping(format_id)
