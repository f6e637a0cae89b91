"""Conversion of feed records into upsert payloads."""

from decimal import Decimal
from typing import Optional

from banksync.domain.entities import AccountData, TransactionData
from banksync.domain.feed import FeedAccount, FeedTransaction

DEFAULT_ACCOUNT_NAME = "Account"


def to_display_amount(feed_amount: Decimal) -> Decimal:
    """Convert a feed amount to the display convention.

    The feed reports money leaving the account as positive; the ledger stores
    it as negative.

    Args:
        feed_amount: Amount as reported by the feed

    Returns:
        Negated amount (zero stays a plain, unsigned zero)
    """
    if feed_amount == 0:
        return Decimal("0")
    return -feed_amount


def is_sign_change(old_amount: Optional[Decimal], new_amount: Decimal) -> bool:
    """Return True when both amounts are nonzero and their signs differ."""
    if old_amount is None or old_amount == 0 or new_amount == 0:
        return False
    return (old_amount < 0) != (new_amount < 0)


def build_transaction_data(record: FeedTransaction) -> TransactionData:
    """Build the feed-owned transaction values for an upsert.

    Optional fields the feed left empty are stored as None, never as "".
    """
    return TransactionData(
        external_id=record.transaction_id,
        account_external_id=record.account_id,
        amount=to_display_amount(record.amount),
        currency=record.iso_currency_code or None,
        date=record.date,
        authorized_date=record.authorized_date,
        pending=bool(record.pending),
        name=record.name,
        merchant_name=record.merchant_name or None,
        payment_channel=record.payment_channel or None,
        pending_transaction_id=record.pending_transaction_id or None,
        logo_url=record.logo_url or None,
        category_icon_url=record.category_icon_url or None,
        feed_category=record.category or None,
        feed_subcategory=record.subcategory or None,
    )


def build_account_data(record: FeedAccount) -> AccountData:
    """Build account values for an upsert.

    The name falls back to the official name, then to a generic label. It is
    only applied when the account is first created.
    """
    balances = record.balances
    return AccountData(
        external_id=record.account_id,
        name=record.name or record.official_name or DEFAULT_ACCOUNT_NAME,
        official_name=record.official_name or None,
        mask=record.mask or None,
        type=record.type or None,
        subtype=record.subtype or None,
        currency=balances.iso_currency_code or None,
        current_balance=balances.current,
        available_balance=balances.available,
        credit_limit=balances.limit,
        balance_updated_at=balances.last_updated_datetime,
    )
