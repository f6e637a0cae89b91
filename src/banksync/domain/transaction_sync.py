"""Transaction synchronization engine.

Reconciles locally stored transactions and account balances for one item
with the remote feed. A sync runs in two phases:

1. Historical backfill, only when the item has no cursor yet: page through
   the bulk list endpoint from ``HISTORICAL_START_DATE`` to today.
2. Delta sync, always: follow the cursor-based sync endpoint until it
   reports no more pages, applying accounts, added, modified and removed
   records in that order.

Every repository call commits on its own. A failure part-way through leaves
earlier pages applied; re-running from the previous cursor is safe because
upserts are keyed on external IDs and deletes are by ID set.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Callable, Optional

from banksync.database.base import Database
from banksync.domain.entities import ItemStatus
from banksync.domain.errors import ITEM_LOGIN_REQUIRED, FeedError, ValidationError
from banksync.domain.feed import (
    FeedAccount,
    FeedTransaction,
    TransactionFeed,
    TransactionSyncPage,
)
from banksync.domain.sync_data import (
    build_account_data,
    build_transaction_data,
    is_sign_change,
)

logger = logging.getLogger(__name__)

HISTORICAL_START_DATE = date(2024, 1, 1)
TRANSACTION_BATCH_SIZE = 500


@dataclass(frozen=True)
class SignChange:
    """A modified transaction whose amount flipped sign."""

    external_id: str
    old_amount: Decimal
    new_amount: Decimal


@dataclass
class TransactionSyncStats:
    """Counters accumulated over one sync call."""

    accounts_updated: int = 0
    transactions_added: int = 0
    transactions_modified: int = 0
    transactions_removed: int = 0
    new_transaction_ids: list[int] = field(default_factory=list)
    sign_changes: list[SignChange] = field(default_factory=list)


@dataclass(frozen=True)
class TransactionSyncResult:
    stats: TransactionSyncStats
    new_cursor: str


class TransactionSyncEngine:
    """Synchronizes one item's transactions with a remote feed."""

    def __init__(
        self,
        db: Database,
        feed: TransactionFeed,
        today: Callable[[], date] = date.today,
    ):
        """Initialize the sync engine.

        Args:
            db: Database instance
            feed: Remote transaction feed
            today: Clock used for the end of the backfill window
        """
        self.db = db
        self.feed = feed
        self.today = today

    def sync(
        self, item_id: int, access_token: str, last_cursor: Optional[str] = None
    ) -> TransactionSyncResult:
        """Synchronize an item's transactions.

        Args:
            item_id: Local item ID
            access_token: Feed access token for the item
            last_cursor: Cursor stored after the previous sync; None or empty
                starts with a historical backfill

        Returns:
            Sync statistics and the cursor to persist for the next call

        Raises:
            ValidationError: If item_id or access_token is empty
            FeedError: If the feed rejects a request
        """
        if not item_id:
            raise ValidationError("Item ID is required")
        if not access_token:
            raise ValidationError("Access token is required")

        stats = TransactionSyncStats()

        if not last_cursor:
            self._sync_historical(item_id, access_token, stats)

        cursor = last_cursor or None
        logger.info("Starting delta sync for item %s (cursor=%s)", item_id, cursor)
        while True:
            page = self._fetch_sync_page(item_id, access_token, cursor)
            logger.debug(
                "Item %s: sync page with %d added, %d modified, %d removed",
                item_id,
                len(page.added),
                len(page.modified),
                len(page.removed),
            )
            self._process_accounts(item_id, page.accounts, stats, count=True)
            self._process_added(page.added, stats)
            self._process_modified(page.modified, stats)
            self._process_removed(page.removed, stats)

            cursor = page.next_cursor
            if not page.has_more:
                break

        logger.info(
            "Item %s synced: %d added, %d modified, %d removed, %d accounts",
            item_id,
            stats.transactions_added,
            stats.transactions_modified,
            stats.transactions_removed,
            stats.accounts_updated,
        )
        return TransactionSyncResult(stats=stats, new_cursor=cursor or "")

    def _sync_historical(self, item_id: int, access_token: str, stats: TransactionSyncStats) -> None:
        """Backfill every transaction since HISTORICAL_START_DATE."""
        end_date = self.today()
        logger.info(
            "Starting historical backfill for item %s (%s to %s)",
            item_id,
            HISTORICAL_START_DATE,
            end_date,
        )

        offset = 0
        fetched = 0
        while True:
            page = self.feed.list_transactions(
                access_token,
                start_date=HISTORICAL_START_DATE,
                end_date=end_date,
                count=TRANSACTION_BATCH_SIZE,
                offset=offset,
            )
            self._process_accounts(item_id, page.accounts, stats, count=False)
            self._process_added(page.transactions, stats, skip_split=True)

            fetched += len(page.transactions)
            logger.debug(
                "Item %s: backfill fetched %d of %d", item_id, fetched, page.total_transactions
            )
            if not page.transactions or fetched >= page.total_transactions:
                break
            offset += TRANSACTION_BATCH_SIZE

    def _fetch_sync_page(
        self, item_id: int, access_token: str, cursor: Optional[str]
    ) -> TransactionSyncPage:
        try:
            return self.feed.sync_transactions(
                access_token, cursor=cursor, count=TRANSACTION_BATCH_SIZE
            )
        except FeedError as exc:
            logger.error(
                "Feed error for item %s (code=%s, cursor=%s): %s",
                item_id,
                exc.error_code,
                cursor,
                exc.error_message,
            )
            if exc.error_code == ITEM_LOGIN_REQUIRED:
                self.db.update_item_status(item_id, ItemStatus.ITEM_LOGIN_REQUIRED)
            raise

    def _process_accounts(
        self,
        item_id: int,
        accounts: list[FeedAccount],
        stats: TransactionSyncStats,
        count: bool,
    ) -> None:
        for account in accounts:
            self.db.upsert_account(item_id, build_account_data(account))
            if count:
                stats.accounts_updated += 1

    def _process_added(
        self, records: list[FeedTransaction], stats: TransactionSyncStats, skip_split: bool = False
    ) -> None:
        for record in records:
            data = build_transaction_data(record)
            if skip_split:
                existing = self.db.get_transaction_by_external_id(data.external_id)
                if existing is not None and existing.is_split:
                    logger.info("Backfill skipped split transaction %s", data.external_id)
                    continue
            transaction_id, created = self.db.upsert_transaction(data)
            if created:
                stats.transactions_added += 1
                stats.new_transaction_ids.append(transaction_id)

    def _process_modified(self, records: list[FeedTransaction], stats: TransactionSyncStats) -> None:
        for record in records:
            data = build_transaction_data(record)
            existing = self.db.get_transaction_by_external_id(data.external_id)

            if existing is not None:
                if is_sign_change(existing.amount, data.amount):
                    logger.warning(
                        "Sign change on transaction %s: %s -> %s",
                        data.external_id,
                        existing.amount,
                        data.amount,
                    )
                    stats.sign_changes.append(
                        SignChange(
                            external_id=data.external_id,
                            old_amount=existing.amount,
                            new_amount=data.amount,
                        )
                    )
                if existing.is_split and existing.amount != data.amount:
                    logger.warning(
                        "Split transaction %s changed amount %s -> %s; "
                        "its children may no longer add up",
                        data.external_id,
                        existing.amount,
                        data.amount,
                    )

            self.db.upsert_transaction(data)
            stats.transactions_modified += 1

    def _process_removed(self, external_ids: list[str], stats: TransactionSyncStats) -> None:
        if not external_ids:
            return
        deleted = self.db.delete_transactions_by_external_ids(list(external_ids))
        stats.transactions_removed += deleted
        logger.info("Removed %d of %d transaction(s) reported removed", deleted, len(external_ids))
