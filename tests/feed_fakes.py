"""Scripted in-memory transaction feed and record builders for tests."""

from datetime import date
from decimal import Decimal
from typing import Optional

from banksync.domain.feed import (
    FeedAccount,
    FeedBalances,
    FeedTransaction,
    TransactionFeed,
    TransactionListPage,
    TransactionSyncPage,
)


def make_account(account_id="acc-1", name="Plaid Checking", current="100.00", **kwargs):
    """Build a FeedAccount with sensible defaults."""
    balances = kwargs.pop(
        "balances",
        FeedBalances(
            current=Decimal(current) if current is not None else None,
            available=Decimal(current) if current is not None else None,
            iso_currency_code="USD",
        ),
    )
    kwargs.setdefault("official_name", "Plaid Gold Standard 0% Interest Checking")
    kwargs.setdefault("mask", "0000")
    kwargs.setdefault("type", "depository")
    kwargs.setdefault("subtype", "checking")
    return FeedAccount(account_id=account_id, name=name, balances=balances, **kwargs)


def make_transaction(
    transaction_id="txn-1",
    amount="12.34",
    account_id="acc-1",
    txn_date=date(2024, 3, 1),
    name="Coffee Shop",
    **kwargs,
):
    """Build a FeedTransaction. Positive amounts are money spent."""
    kwargs.setdefault("iso_currency_code", "USD")
    return FeedTransaction(
        transaction_id=transaction_id,
        account_id=account_id,
        amount=Decimal(amount),
        date=txn_date,
        name=name,
        **kwargs,
    )


def sync_page(
    added=(),
    modified=(),
    removed=(),
    accounts=None,
    next_cursor="c1",
    has_more=False,
):
    """Build a TransactionSyncPage; accounts default to one snapshot account."""
    if accounts is None:
        accounts = [make_account()]
    return TransactionSyncPage(
        added=list(added),
        modified=list(modified),
        removed=list(removed),
        accounts=list(accounts),
        next_cursor=next_cursor,
        has_more=has_more,
    )


class FakeFeed(TransactionFeed):
    """Feed that serves a fixed history and a queue of sync pages.

    Every call is recorded in ``list_calls`` / ``sync_calls``.
    """

    def __init__(self):
        self.history: list[FeedTransaction] = []
        self.history_accounts: list[FeedAccount] = [make_account()]
        self.reported_total: Optional[int] = None
        self.sync_pages: list[TransactionSyncPage] = []
        self.sync_error: Optional[Exception] = None
        self.list_calls: list[dict] = []
        self.sync_calls: list[dict] = []

    def queue(self, *pages: TransactionSyncPage) -> "FakeFeed":
        self.sync_pages.extend(pages)
        return self

    def list_transactions(self, access_token, start_date, end_date, count, offset):
        self.list_calls.append(
            {
                "access_token": access_token,
                "start_date": start_date,
                "end_date": end_date,
                "count": count,
                "offset": offset,
            }
        )
        total = self.reported_total if self.reported_total is not None else len(self.history)
        return TransactionListPage(
            transactions=self.history[offset : offset + count],
            total_transactions=total,
            accounts=list(self.history_accounts),
        )

    def sync_transactions(self, access_token, cursor, count):
        self.sync_calls.append({"access_token": access_token, "cursor": cursor, "count": count})
        if self.sync_error is not None:
            raise self.sync_error
        if not self.sync_pages:
            return sync_page(next_cursor=cursor or "empty")
        return self.sync_pages.pop(0)
