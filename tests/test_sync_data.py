"""Tests for feed record conversion."""

from decimal import Decimal

from banksync.domain.feed import FeedBalances
from banksync.domain.sync_data import (
    build_account_data,
    build_transaction_data,
    is_sign_change,
    to_display_amount,
)

from feed_fakes import make_account, make_transaction


def test_display_amount_negates():
    assert to_display_amount(Decimal("12.34")) == Decimal("-12.34")
    assert to_display_amount(Decimal("-8.00")) == Decimal("8.00")


def test_display_amount_zero_is_unsigned():
    assert to_display_amount(Decimal("0.00")).is_signed() is False


def test_is_sign_change():
    assert is_sign_change(Decimal("-1"), Decimal("1"))
    assert is_sign_change(Decimal("5"), Decimal("-0.01"))
    assert not is_sign_change(Decimal("-1"), Decimal("-2"))
    assert not is_sign_change(Decimal("0"), Decimal("3"))
    assert not is_sign_change(Decimal("3"), Decimal("0"))
    assert not is_sign_change(None, Decimal("3"))


def test_transaction_data_maps_fields():
    record = make_transaction(
        "txn-1",
        amount="4.50",
        merchant_name="Blue Bottle",
        payment_channel="in store",
        category="FOOD_AND_DRINK",
        subcategory="FOOD_AND_DRINK_COFFEE",
        category_icon_url="https://icons/coffee.png",
    )

    data = build_transaction_data(record)

    assert data.external_id == "txn-1"
    assert data.account_external_id == "acc-1"
    assert data.amount == Decimal("-4.50")
    assert data.currency == "USD"
    assert data.merchant_name == "Blue Bottle"
    assert data.feed_category == "FOOD_AND_DRINK"
    assert data.feed_subcategory == "FOOD_AND_DRINK_COFFEE"
    assert data.category_icon_url == "https://icons/coffee.png"


def test_transaction_data_keeps_nulls():
    data = build_transaction_data(make_transaction(iso_currency_code=None, merchant_name=None))
    assert data.currency is None
    assert data.merchant_name is None
    assert data.logo_url is None


def test_account_data_name_fallbacks():
    assert build_account_data(make_account(name="Main")).name == "Main"
    assert build_account_data(make_account(name=None, official_name="Gold")).name == "Gold"
    assert build_account_data(make_account(name=None, official_name=None)).name == "Account"


def test_account_data_balances():
    account = make_account(
        balances=FeedBalances(
            current=Decimal("410.00"),
            available=None,
            limit=Decimal("2000.00"),
            iso_currency_code="CAD",
        ),
        type="credit",
        subtype="credit card",
    )

    data = build_account_data(account)

    assert data.current_balance == Decimal("410.00")
    assert data.available_balance is None
    assert data.credit_limit == Decimal("2000.00")
    assert data.currency == "CAD"
    assert data.subtype == "credit card"
