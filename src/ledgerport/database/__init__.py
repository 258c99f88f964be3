"""Database layer for saved import formats."""

from ledgerport.database.base import Database
from ledgerport.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
