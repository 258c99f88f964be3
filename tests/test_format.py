"""Tests for saved format commands."""

import pytest
from click.testing import CliRunner
from ledgerport.cli.main import cli
from ledgerport.domain.entities import ColumnMapping


@pytest.fixture
def saved_format(import_format_service):
    """Save a sample import format."""
    format_id = import_format_service.save_format(
        name="My Bank",
        signature="sig_123456789abc",
        extension="xlsx",
        mapping=ColumnMapping.from_fields(["Date", "Description", "Expenses"]),
        headers=["Booking Date", "Memo", None],
    )
    return import_format_service.get_format(format_id)


def test_format_list_empty(cli_runner, temp_db):
    """Test listing formats when none exist."""
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "format", "list"])

    assert result.exit_code == 0
    assert "No import formats found" in result.output


def test_format_list_with_data(cli_runner, temp_db, saved_format):
    """Test listing formats with data."""
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "format", "list"])

    assert result.exit_code == 0
    assert "My Bank" in result.output
    assert "column 1 'Booking Date' -> Date" in result.output
    assert "column 3 (no header) -> Expenses" in result.output


def test_format_show(cli_runner, temp_db, saved_format):
    """Test showing format details."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "format", "show", "My Bank"]
    )

    assert result.exit_code == 0
    assert "Format: My Bank" in result.output
    assert "Extension: xlsx" in result.output
    assert "Signature: sig_123456789abc" in result.output
    assert "Header row: 1" in result.output
    assert "column 2 'Memo' -> Description" in result.output


def test_format_show_not_found(cli_runner, temp_db):
    """Test showing a format that does not exist."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "format", "show", "Nope"]
    )

    assert result.exit_code == 1
    assert "Import format 'Nope' not found" in result.output


def test_format_delete_confirmed(cli_runner, temp_db, saved_format, import_format_service):
    """Test deleting a format after confirmation."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "format", "delete", "My Bank"], input="y\n"
    )

    assert result.exit_code == 0
    assert "Deleted format 'My Bank'" in result.output
    assert import_format_service.get_format_by_name("My Bank") is None


def test_format_delete_cancelled(cli_runner, temp_db, saved_format, import_format_service):
    """Test cancelling a format deletion."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "format", "delete", "My Bank"], input="n\n"
    )

    assert result.exit_code == 0
    assert "Deletion cancelled" in result.output
    assert import_format_service.get_format_by_name("My Bank") is not None


def test_format_delete_yes(cli_runner, temp_db, saved_format):
    """--yes skips the prompt."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "format", "delete", "My Bank", "--yes"]
    )

    assert result.exit_code == 0
    assert "Deleted format 'My Bank'" in result.output


def test_format_delete_not_found(cli_runner, temp_db):
    """Test deleting a format that does not exist."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "format", "delete", "Nope", "--yes"]
    )

    assert result.exit_code == 1
    assert "Import format 'Nope' not found" in result.output
