"""Account domain service."""

from typing import Optional
from banksync.database.base import Database
from banksync.domain.entities import Account as AccountEntity
from banksync.domain.errors import NotFoundError, ValidationError, account_not_found


class AccountService:
    """Service for browsing and renaming synced accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def list_accounts(self, item_id: Optional[int] = None) -> list[AccountEntity]:
        """List accounts, optionally limited to one item."""
        return self.db.list_accounts(item_id=item_id)

    def rename_account(self, account_id: int, name: str) -> None:
        """Rename an account.

        The new name survives later syncs; the feed never overwrites it.

        Args:
            account_id: Account ID to rename
            name: New account name

        Raises:
            ValidationError: If the name is empty
            NotFoundError: If the account doesn't exist
        """
        name = name.strip()
        if not name:
            raise ValidationError("Account name cannot be empty")

        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

        self.db.update_account_name(account_id=account_id, name=name)
