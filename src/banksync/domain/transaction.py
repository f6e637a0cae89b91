"""Transaction domain service."""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from banksync.database.base import Database
from banksync.domain.entities import SplitChild, Transaction as TransactionEntity
from banksync.domain.errors import (
    NotFoundError,
    ValidationError,
    category_path_not_found,
    transaction_not_found,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SplitItem:
    """One part of a requested split."""

    amount: Decimal
    category_path: Optional[str] = None
    notes: Optional[str] = None
    description: Optional[str] = None


def validate_split_amounts(
    original: Decimal, amounts: list[Decimal], tolerance_percent: Decimal = Decimal("0")
) -> bool:
    """Check that split amounts add up to the original amount.

    The comparison is signed: parts of an expense must be negative.

    Args:
        original: Amount of the transaction being split
        amounts: Amounts of the parts
        tolerance_percent: Allowed difference as a percentage of the original

    Returns:
        True if the parts add up within the tolerance
    """
    total = sum((Decimal(a) for a in amounts), Decimal("0"))
    difference = abs(total - Decimal(original))
    tolerance = abs(Decimal(original)) * Decimal(tolerance_percent) / Decimal("100")
    return difference <= tolerance


class TransactionService:
    """Service for browsing, categorizing and splitting transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        account_id: Optional[int] = None,
        pending: Optional[bool] = None,
    ) -> list[TransactionEntity]:
        """List transactions, newest first.

        Args:
            start_date: Optional inclusive start date
            end_date: Optional inclusive end date
            account_id: Optional account ID
            pending: True for pending only, False for posted only, None for both

        Returns:
            List of transaction entities

        Raises:
            ValidationError: If start_date is after end_date
        """
        if start_date is not None and end_date is not None and start_date > end_date:
            raise ValidationError("Start date must be on or before end date")
        return self.db.list_transactions(
            start_date=start_date,
            end_date=end_date,
            account_id=account_id,
            pending=pending,
        )

    def _resolve_category_path(self, path: str) -> tuple[int, Optional[int]]:
        """Resolve a path to (category ID, subcategory ID).

        The root of the path is the category; the leaf is the subcategory
        when the path is deeper than one level.
        """
        leaf = self.db.get_category_by_path(path)
        if leaf is None:
            raise NotFoundError(category_path_not_found(path))

        root = leaf
        while root.parent_id is not None:
            parent = self.db.get_category(root.parent_id)
            if parent is None:
                break
            root = parent

        if root.id == leaf.id:
            return leaf.id, None
        return root.id, leaf.id

    def update_category(self, transaction_id: int, category_path: Optional[str]) -> None:
        """Update transaction category.

        Args:
            transaction_id: Transaction ID
            category_path: Category path (e.g., "Food & Dining > Groceries") or None
                to clear the category

        Raises:
            NotFoundError: If transaction or category doesn't exist
        """
        if self.db.get_transaction(transaction_id) is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        category_id, subcategory_id = None, None
        if category_path is not None:
            category_id, subcategory_id = self._resolve_category_path(category_path)

        self.db.update_transaction_category(transaction_id, category_id, subcategory_id)

    def update_notes(self, transaction_id: int, notes: Optional[str]) -> None:
        """Update transaction notes.

        Raises:
            NotFoundError: If transaction doesn't exist
        """
        if self.db.get_transaction(transaction_id) is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        self.db.update_transaction_notes(transaction_id, notes)

    def get_split_children(self, transaction_id: int) -> list[TransactionEntity]:
        return self.db.list_child_transactions(transaction_id)

    def split_transaction(self, transaction_id: int, splits: list[SplitItem]) -> list[int]:
        """Split a transaction into child transactions.

        The parent is kept and flagged as split so that it is never removed
        by a later sync. Each child copies the parent's feed fields and gets
        its own amount, category and notes. Part amounts are given the
        parent's sign, whatever sign they were entered with.

        Args:
            transaction_id: Transaction to split
            splits: Parts of the split, at least two

        Returns:
            IDs of the created child transactions

        Raises:
            NotFoundError: If the transaction or a category doesn't exist
            ValidationError: If the transaction is already split or is itself
                a split part, or the amounts don't add up
        """
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        if txn.is_split:
            raise ValidationError(f"Transaction {transaction_id} has already been split")
        if txn.parent_transaction_id is not None:
            raise ValidationError(f"Transaction {transaction_id} is part of a split")
        if len(splits) < 2:
            raise ValidationError("A split needs at least two parts")

        # Parts always take the parent's sign
        amounts = [abs(Decimal(split.amount)).copy_sign(txn.amount) for split in splits]
        if not validate_split_amounts(txn.amount, amounts):
            total = sum(amounts, Decimal("0"))
            raise ValidationError(
                f"Split amounts total {total} but the transaction amount is {txn.amount}"
            )

        count = len(splits)
        children = []
        for index, (split, amount) in enumerate(zip(splits, amounts), start=1):
            category_id, subcategory_id = None, None
            if split.category_path:
                category_id, subcategory_id = self._resolve_category_path(split.category_path)
            children.append(
                SplitChild(
                    external_id=f"{txn.external_id}_split_{index}",
                    name=split.description or f"{txn.name} (Split {index}/{count})",
                    amount=amount,
                    category_id=category_id,
                    subcategory_id=subcategory_id,
                    notes=split.notes,
                )
            )

        child_ids = self.db.create_split_children(txn.id, children)
        logger.info("Split transaction %d into %d parts", txn.id, count)
        return child_ids
