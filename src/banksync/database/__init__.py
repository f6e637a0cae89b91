"""Database layer for banksync."""

from banksync.database.base import Database
from banksync.database.factories import create_sqlite_database
from banksync.database.sqlalchemy_db import SQLAlchemyDatabase

__all__ = ["Database", "SQLAlchemyDatabase", "create_sqlite_database"]
