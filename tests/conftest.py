"""Shared pytest fixtures for ledgerport tests."""

import logging
import tempfile
import os
from datetime import date
from pathlib import Path
import pytest

from ledgerport import logging_setup
from ledgerport.database.factories import create_sqlite_database
from ledgerport.domain.import_format import ImportFormatService
from ledgerport.domain.importer import ImportService


@pytest.fixture(autouse=True)
def package_logger():
    """Restore the package logger after each test.

    CLI invocations call configure_logging, which would otherwise leave
    handlers on the logger for later tests.
    """
    logger = logging.getLogger("ledgerport")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    saved_handler = logging_setup._handler
    yield logger
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]
    logging_setup._handler = saved_handler


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def import_format_service(temp_db):
    """Create an ImportFormatService with a temporary database."""
    return ImportFormatService(temp_db)


@pytest.fixture
def import_service(temp_db):
    """Create an ImportService with a temporary database."""
    return ImportService(temp_db)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def sample_rows():
    """Header plus three transactions, as a bank export would lay them out."""
    return [
        ["Date", "Description", "Income", "Expenses", "Balance"],
        [date(2024, 1, 5), "Salary January", 2500, None, 2500],
        [date(2024, 1, 7), "Groceries", None, 82.4, 2417.6],
        [date(2024, 1, 9), "Rent", None, 1200, 1217.6],
    ]


@pytest.fixture
def write_xlsx(tmp_path):
    """Return a builder writing rows into a real xlsx workbook."""
    from openpyxl import Workbook

    def build(rows, name="export.xlsx"):
        workbook = Workbook()
        sheet = workbook.active
        for row in rows:
            sheet.append(list(row))
        path = tmp_path / name
        workbook.save(path)
        return path

    return build


@pytest.fixture
def write_xml(tmp_path):
    """Return a builder writing XML text into a file."""

    def build(text, name="export.xml"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return build


@pytest.fixture
def sample_xml():
    """XML export with per-field element names."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<transactions>
  <transaction>
    <date>2024-01-05</date>
    <description>Salary January</description>
    <income>2500.00</income>
    <expenses></expenses>
  </transaction>
  <transaction>
    <date>2024-01-07</date>
    <description>Groceries</description>
    <income></income>
    <expenses>82.40</expenses>
  </transaction>
</transactions>
"""
