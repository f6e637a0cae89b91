"""Shared pytest fixtures for banksync tests."""

import os
import tempfile
from datetime import date

import pytest

from banksync.database.factories import create_sqlite_database
from banksync.domain.account import AccountService
from banksync.domain.category import CategoryService
from banksync.domain.item import ItemService
from banksync.domain.transaction import TransactionService
from banksync.domain.transaction_sync import TransactionSyncEngine

from feed_fakes import FakeFeed

TODAY = date(2024, 6, 30)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for CLI tests
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def feed():
    """Scripted in-memory feed."""
    return FakeFeed()


@pytest.fixture
def engine(temp_db, feed):
    """Sync engine over the temporary database with a fixed clock."""
    return TransactionSyncEngine(temp_db, feed, today=lambda: TODAY)


@pytest.fixture
def item_service(temp_db, feed):
    """Create an ItemService wired to the fake feed."""
    return ItemService(temp_db, feed)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def sample_item(item_service):
    """Link a sample item with no cursor yet."""
    item_id = item_service.link_item(
        external_item_id="item-sandbox-1",
        access_token="access-sandbox-1",
        institution_name="First Platypus Bank",
    )
    return item_service.get_item(item_id)


@pytest.fixture
def sample_categories(category_service):
    """Create a small category tree and return IDs keyed by path."""
    ids = {}
    ids["Food & Dining"] = category_service.create_category("Food & Dining")
    ids["Food & Dining > Groceries"] = category_service.create_category(
        "Groceries", parent_path="Food & Dining"
    )
    ids["Household"] = category_service.create_category("Household")
    return ids


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
