"""Item domain service."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, UTC
from typing import Optional

from banksync.database.base import Database
from banksync.domain.entities import Item as ItemEntity, ItemStatus
from banksync.domain.errors import (
    ConfigurationError,
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
    duplicate_item,
    item_not_found,
)
from banksync.domain.feed import TransactionFeed
from banksync.domain.transaction_sync import TransactionSyncEngine, TransactionSyncResult

logger = logging.getLogger(__name__)


@dataclass
class SyncRunSummary:
    """Totals for a run over every linked item."""

    items_synced: int = 0
    accounts_updated: int = 0
    transactions_added: int = 0
    transactions_modified: int = 0
    transactions_removed: int = 0
    sign_changes: int = 0
    failed: list[tuple[int, str]] = field(default_factory=list)

    def add(self, result: TransactionSyncResult) -> None:
        stats = result.stats
        self.items_synced += 1
        self.accounts_updated += stats.accounts_updated
        self.transactions_added += stats.transactions_added
        self.transactions_modified += stats.transactions_modified
        self.transactions_removed += stats.transactions_removed
        self.sign_changes += len(stats.sign_changes)


class ItemService:
    """Service for linking and synchronizing items."""

    def __init__(self, db: Database, feed: Optional[TransactionFeed] = None):
        """Initialize item service.

        Args:
            db: Database instance
            feed: Remote transaction feed; only needed for sync operations
        """
        self.db = db
        self.feed = feed

    def link_item(
        self,
        external_item_id: str,
        access_token: str,
        institution_name: Optional[str] = None,
    ) -> int:
        """Link a new item.

        Args:
            external_item_id: Item ID assigned by the feed
            access_token: Feed access token for the item
            institution_name: Optional institution display name

        Returns:
            Item ID

        Raises:
            ValidationError: If the external ID or token is empty
            ConflictError: If the item is already linked
        """
        if not external_item_id or not access_token:
            raise ValidationError("External item ID and access token are required")

        if self.db.get_item_by_external_id(external_item_id) is not None:
            raise ConflictError(duplicate_item(external_item_id))

        item_id = self.db.create_item(
            external_id=external_item_id,
            access_token=access_token,
            institution_name=institution_name,
        )
        logger.info("Linked item %s as %d", external_item_id, item_id)
        return item_id

    def get_item(self, item_id: int) -> Optional[ItemEntity]:
        """Get item by ID."""
        return self.db.get_item(item_id)

    def find_by_external_id(self, external_item_id: str) -> Optional[ItemEntity]:
        """Get item by the ID the feed assigned to it."""
        return self.db.get_item_by_external_id(external_item_id)

    def list_items(self) -> list[ItemEntity]:
        return self.db.list_items()

    def set_status(self, item_id: int, status: ItemStatus | str) -> None:
        """Set an item's lifecycle status.

        Raises:
            NotFoundError: If the item doesn't exist
            ValidationError: If the status is not a known status
        """
        if self.db.get_item(item_id) is None:
            raise NotFoundError(item_not_found(item_id))
        try:
            status = ItemStatus(status)
        except ValueError as exc:
            raise ValidationError(f"Unknown item status '{status}'") from exc
        self.db.update_item_status(item_id, status)
        logger.info("Item %d status set to %s", item_id, status.value)

    def sync_item(self, item_id: int) -> TransactionSyncResult:
        """Synchronize one item and persist its new cursor.

        The cursor is only written after the engine returns; if the sync
        fails the stored cursor stays as it was.

        Args:
            item_id: Item ID

        Returns:
            Result of the sync

        Raises:
            NotFoundError: If the item doesn't exist
            ConfigurationError: If no feed is configured
            FeedError: If the feed rejects a request
        """
        item = self.db.get_item(item_id)
        if item is None:
            raise NotFoundError(item_not_found(item_id))
        if self.feed is None:
            raise ConfigurationError("No transaction feed configured")

        engine = TransactionSyncEngine(self.db, self.feed)
        result = engine.sync(item.id, item.access_token, item.cursor)
        self.db.update_item_cursor(
            item.id, result.new_cursor or None, synced_at=datetime.now(UTC)
        )
        return result

    def sync_all_items(self) -> SyncRunSummary:
        """Synchronize every linked item, one after another.

        A failing item is logged and recorded in the summary; the remaining
        items are still synced.

        Returns:
            Summary of the run
        """
        summary = SyncRunSummary()
        for item in self.db.list_items():
            try:
                result = self.sync_item(item.id)
            except DomainError as exc:
                logger.error("Sync failed for item %d (%s): %s", item.id, item.external_id, exc)
                summary.failed.append((item.id, str(exc)))
                continue
            summary.add(result)
        return summary
