"""Remote transaction feed interface and record types.

The sync engine only sees the feed through :class:`TransactionFeed`. Records
keep the feed's own conventions: amounts are positive for money leaving the
account, and optional fields are None when the feed omits them.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class FeedBalances:
    current: Optional[Decimal] = None
    available: Optional[Decimal] = None
    limit: Optional[Decimal] = None
    iso_currency_code: Optional[str] = None
    last_updated_datetime: Optional[datetime] = None


@dataclass(frozen=True)
class FeedAccount:
    """Account snapshot as reported by the feed."""

    account_id: str
    name: Optional[str] = None
    official_name: Optional[str] = None
    mask: Optional[str] = None
    type: Optional[str] = None
    subtype: Optional[str] = None
    balances: FeedBalances = field(default_factory=FeedBalances)


@dataclass(frozen=True)
class FeedTransaction:
    """Transaction record as reported by the feed."""

    transaction_id: str
    account_id: str
    amount: Decimal
    date: date
    name: str
    pending: bool = False
    iso_currency_code: Optional[str] = None
    authorized_date: Optional[date] = None
    merchant_name: Optional[str] = None
    payment_channel: Optional[str] = None
    pending_transaction_id: Optional[str] = None
    logo_url: Optional[str] = None
    category_icon_url: Optional[str] = None
    category: Optional[str] = None
    subcategory: Optional[str] = None


@dataclass(frozen=True)
class TransactionListPage:
    """One page of the bulk list endpoint."""

    transactions: list[FeedTransaction]
    total_transactions: int
    accounts: list[FeedAccount] = field(default_factory=list)


@dataclass(frozen=True)
class TransactionSyncPage:
    """One page of the cursor-based delta endpoint.

    ``removed`` holds external transaction IDs.
    """

    added: list[FeedTransaction]
    modified: list[FeedTransaction]
    removed: list[str]
    accounts: list[FeedAccount]
    next_cursor: str
    has_more: bool


class TransactionFeed(ABC):
    """Abstract remote transaction feed."""

    @abstractmethod
    def list_transactions(
        self,
        access_token: str,
        start_date: date,
        end_date: date,
        count: int,
        offset: int,
    ) -> TransactionListPage:
        """Fetch one page of transactions dated within [start_date, end_date]."""
        pass

    @abstractmethod
    def sync_transactions(
        self,
        access_token: str,
        cursor: Optional[str],
        count: int,
    ) -> TransactionSyncPage:
        """Fetch the changes since ``cursor`` (everything when cursor is None).

        Raises:
            FeedError: If the feed rejects the request
        """
        pass
