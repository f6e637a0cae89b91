"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date, datetime

# Import entities directly to avoid circular import through domain/__init__.py
from banksync.domain.entities import (
    Item,
    ItemStatus,
    Account,
    AccountData,
    Category,
    SplitChild,
    Transaction,
    TransactionData,
)


class Database(ABC):
    """Abstract database interface for banksync."""

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

    # Item operations
    @abstractmethod
    def create_item(
        self,
        external_id: str,
        access_token: str,
        institution_name: Optional[str] = None,
    ) -> int:
        """Create a new item with status ACTIVE. Returns item ID."""
        pass

    @abstractmethod
    def get_item(self, item_id: int) -> Optional[Item]:
        """Get item by ID."""
        pass

    @abstractmethod
    def get_item_by_external_id(self, external_id: str) -> Optional[Item]:
        """Get item by its external ID."""
        pass

    @abstractmethod
    def list_items(self) -> list[Item]:
        """List all items."""
        pass

    @abstractmethod
    def update_item_cursor(
        self, item_id: int, cursor: Optional[str], synced_at: Optional[datetime] = None
    ) -> None:
        """Persist an item's sync cursor and last-synced timestamp."""
        pass

    @abstractmethod
    def update_item_status(self, item_id: int, status: ItemStatus) -> None:
        """Set an item's lifecycle status."""
        pass

    # Account operations
    @abstractmethod
    def upsert_account(self, item_id: int, data: AccountData) -> tuple[int, bool]:
        """Insert or update an account by external ID.

        The display name is only written on insert.

        Returns:
            Tuple of (account ID, True if the account was created)
        """
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def get_account_by_external_id(self, external_id: str) -> Optional[Account]:
        """Get account by its external ID."""
        pass

    @abstractmethod
    def list_accounts(self, item_id: Optional[int] = None) -> list[Account]:
        """List accounts, optionally filtered by item."""
        pass

    @abstractmethod
    def update_account_name(self, account_id: int, name: str) -> None:
        """Update account display name."""
        pass

    # Category operations
    @abstractmethod
    def create_category(self, name: str, parent_id: Optional[int] = None) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def get_category_by_path(self, path: str) -> Optional[Category]:
        """Get category by path (e.g., 'Food & Dining > Groceries')."""
        pass

    @abstractmethod
    def list_categories(self, parent_id: Optional[int] = None) -> list[Category]:
        """List categories, optionally filtered by parent."""
        pass

    # Transaction operations
    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def get_transaction_by_external_id(self, external_id: str) -> Optional[Transaction]:
        """Get transaction by its external ID."""
        pass

    @abstractmethod
    def upsert_transaction(self, data: TransactionData) -> tuple[int, bool]:
        """Insert or update a transaction by external ID.

        Updates only touch feed-owned fields.

        Returns:
            Tuple of (transaction ID, True if the transaction was created)

        Raises:
            NotFoundError: If the referenced account does not exist
        """
        pass

    @abstractmethod
    def delete_transactions_by_external_ids(self, external_ids: list[str]) -> int:
        """Delete un-split, non-child transactions with the given external IDs.

        Returns:
            Number of rows deleted
        """
        pass

    @abstractmethod
    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        account_id: Optional[int] = None,
        pending: Optional[bool] = None,
    ) -> list[Transaction]:
        """List transactions with optional filters."""
        pass

    @abstractmethod
    def list_child_transactions(self, parent_id: int) -> list[Transaction]:
        """List the split children of a transaction."""
        pass

    @abstractmethod
    def update_transaction_category(
        self, transaction_id: int, category_id: Optional[int], subcategory_id: Optional[int] = None
    ) -> None:
        """Update transaction custom category and subcategory."""
        pass

    @abstractmethod
    def update_transaction_notes(self, transaction_id: int, notes: Optional[str]) -> None:
        """Update transaction notes."""
        pass

    @abstractmethod
    def create_split_children(self, parent_id: int, children: list[SplitChild]) -> list[int]:
        """Mark a transaction as split and insert its children in one commit.

        Returns:
            IDs of the created child transactions
        """
        pass
