"""Mapper functions to convert SQLAlchemy models into domain entities.

This layer isolates the conversion logic so the domain entities stay stable
when the schema changes.
"""

from banksync.domain import entities as domain
from banksync.database.models import (
    Item as ORMItem,
    Account as ORMAccount,
    Category as ORMCategory,
    Transaction as ORMTransaction,
)


def item_to_domain(orm_item: ORMItem) -> domain.Item:
    """Convert SQLAlchemy Item model to domain Item entity."""
    return domain.Item(
        id=orm_item.id,
        external_id=orm_item.external_id,
        institution_name=orm_item.institution_name,
        access_token=orm_item.access_token,
        cursor=orm_item.cursor,
        status=domain.ItemStatus(orm_item.status),
        last_synced_at=orm_item.last_synced_at,
        created_at=orm_item.created_at,
    )


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        external_id=orm_account.external_id,
        item_id=orm_account.item_id,
        name=orm_account.name,
        official_name=orm_account.official_name,
        mask=orm_account.mask,
        type=orm_account.type,
        subtype=orm_account.subtype,
        currency=orm_account.currency,
        current_balance=orm_account.current_balance,
        available_balance=orm_account.available_balance,
        credit_limit=orm_account.credit_limit,
        balance_updated_at=orm_account.balance_updated_at,
        created_at=orm_account.created_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        parent_id=orm_category.parent_id,
        created_at=orm_category.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        external_id=orm_transaction.external_id,
        account_id=orm_transaction.account_id,
        amount=orm_transaction.amount,
        currency=orm_transaction.currency,
        date=orm_transaction.date,
        authorized_date=orm_transaction.authorized_date,
        pending=orm_transaction.pending,
        name=orm_transaction.name,
        merchant_name=orm_transaction.merchant_name,
        payment_channel=orm_transaction.payment_channel,
        pending_transaction_id=orm_transaction.pending_transaction_id,
        logo_url=orm_transaction.logo_url,
        category_icon_url=orm_transaction.category_icon_url,
        feed_category=orm_transaction.feed_category,
        feed_subcategory=orm_transaction.feed_subcategory,
        category_id=orm_transaction.category_id,
        subcategory_id=orm_transaction.subcategory_id,
        notes=orm_transaction.notes,
        parent_transaction_id=orm_transaction.parent_transaction_id,
        is_split=orm_transaction.is_split,
        created_at=orm_transaction.created_at,
        updated_at=orm_transaction.updated_at,
    )
