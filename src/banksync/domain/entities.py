"""Domain model entities for banksync.

These are pure data classes representing linked items, accounts and ledger
entries, independent of the database schema and of the remote feed's wire
format.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class ItemStatus(str, Enum):
    """Lifecycle status of a linked item."""

    ACTIVE = "ACTIVE"
    ITEM_LOGIN_REQUIRED = "ITEM_LOGIN_REQUIRED"
    ERROR = "ERROR"
    PENDING_EXPIRATION = "PENDING_EXPIRATION"
    PENDING_DISCONNECT = "PENDING_DISCONNECT"


@dataclass(frozen=True)
class Item:
    """Linked external account connection.

    A ``cursor`` of None means the item has never completed a delta sync and
    the next sync starts with a historical backfill.
    """

    id: int
    external_id: str
    institution_name: Optional[str]
    access_token: str
    cursor: Optional[str]
    status: ItemStatus
    last_synced_at: Optional[datetime]
    created_at: datetime


@dataclass(frozen=True)
class Account:
    """Bank or brokerage account under an item."""

    id: int
    external_id: str
    item_id: int
    name: str
    official_name: Optional[str]
    mask: Optional[str]
    type: Optional[str]
    subtype: Optional[str]
    currency: Optional[str]
    current_balance: Optional[Decimal]
    available_balance: Optional[Decimal]
    credit_limit: Optional[Decimal]
    balance_updated_at: Optional[datetime]
    created_at: datetime


@dataclass(frozen=True)
class Category:
    """Category domain entity with hierarchical structure."""

    id: int
    name: str
    parent_id: Optional[int]
    created_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Ledger entry.

    ``amount`` follows the display convention: negative for money leaving the
    account, positive for money coming in.
    """

    id: int
    external_id: str
    account_id: int
    amount: Decimal
    currency: Optional[str]
    date: date
    authorized_date: Optional[date]
    pending: bool
    name: str
    merchant_name: Optional[str]
    payment_channel: Optional[str]
    pending_transaction_id: Optional[str]
    logo_url: Optional[str]
    category_icon_url: Optional[str]
    feed_category: Optional[str]
    feed_subcategory: Optional[str]
    category_id: Optional[int]
    subcategory_id: Optional[int]
    notes: Optional[str]
    parent_transaction_id: Optional[int]
    is_split: bool
    created_at: datetime
    updated_at: datetime


# Transaction columns whose source of truth is the remote feed. Sync may
# overwrite these; everything else on a row belongs to the user.
FEED_OWNED_FIELDS = (
    "amount",
    "currency",
    "date",
    "authorized_date",
    "pending",
    "name",
    "merchant_name",
    "payment_channel",
    "pending_transaction_id",
    "logo_url",
    "category_icon_url",
    "feed_category",
    "feed_subcategory",
)


@dataclass(frozen=True)
class TransactionData:
    """Feed-owned values of a transaction, ready to be upserted.

    The owning account is referenced by its external ID; the database
    resolves it to a local account.
    """

    external_id: str
    account_external_id: str
    amount: Decimal
    currency: Optional[str]
    date: date
    authorized_date: Optional[date]
    pending: bool
    name: str
    merchant_name: Optional[str]
    payment_channel: Optional[str]
    pending_transaction_id: Optional[str]
    logo_url: Optional[str]
    category_icon_url: Optional[str]
    feed_category: Optional[str]
    feed_subcategory: Optional[str]


@dataclass(frozen=True)
class AccountData:
    """Account values from the feed, ready to be upserted.

    ``name`` is only used when the account is created.
    """

    external_id: str
    name: str
    official_name: Optional[str]
    mask: Optional[str]
    type: Optional[str]
    subtype: Optional[str]
    currency: Optional[str]
    current_balance: Optional[Decimal]
    available_balance: Optional[Decimal]
    credit_limit: Optional[Decimal]
    balance_updated_at: Optional[datetime]


@dataclass(frozen=True)
class SplitChild:
    """One child row to create when splitting a transaction."""

    external_id: str
    name: str
    amount: Decimal
    category_id: Optional[int] = None
    subcategory_id: Optional[int] = None
    notes: Optional[str] = None
