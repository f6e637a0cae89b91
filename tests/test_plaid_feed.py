"""Tests for the Plaid feed adapter, using a stand-in API client."""

import json
from datetime import date, datetime
from decimal import Decimal

import pytest
from plaid.api import plaid_api
from plaid.exceptions import ApiException

from banksync.domain.errors import ConfigurationError, FeedError
from banksync.feeds.plaid_feed import PlaidTransactionFeed, build_plaid_client
from banksync.feeds.settings import PlaidSettings


class _Response:
    def __init__(self, payload):
        self.payload = payload

    def to_dict(self):
        return self.payload


class _Enum:
    """Mimics an SDK enum model such as TransactionPaymentChannel."""

    def __init__(self, value):
        self.value = value


class StubPlaidClient:
    """Records requests and replays canned responses."""

    def __init__(self, sync_payload=None, get_payload=None, error=None):
        self.sync_payload = sync_payload
        self.get_payload = get_payload
        self.error = error
        self.requests = []

    def transactions_sync(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return _Response(self.sync_payload)

    def transactions_get(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return _Response(self.get_payload)


RAW_ACCOUNT = {
    "account_id": "acc-1",
    "name": "Plaid Checking",
    "official_name": "Plaid Gold Standard 0% Interest Checking",
    "mask": "0000",
    "type": _Enum("depository"),
    "subtype": _Enum("checking"),
    "balances": {
        "current": 110.0,
        "available": 100.0,
        "limit": None,
        "iso_currency_code": "USD",
        "last_updated_datetime": None,
    },
}

RAW_TRANSACTION = {
    "transaction_id": "txn-1",
    "account_id": "acc-1",
    "amount": 12.3,
    "iso_currency_code": "USD",
    "date": date(2024, 3, 1),
    "authorized_date": "2024-02-29",
    "pending": False,
    "merchant_name": None,
    "name": "Uber 063015 SF**POOL**",
    "payment_channel": _Enum("online"),
    "pending_transaction_id": None,
    "logo_url": None,
    "personal_finance_category": {"primary": "TRANSPORTATION", "detailed": "TRANSPORTATION_TAXIS"},
    "personal_finance_category_icon_url": "https://plaid-category-icons.plaid.com/PFC_TRANSPORTATION.png",
}


def test_sync_transactions_converts_records():
    client = StubPlaidClient(
        sync_payload={
            "added": [RAW_TRANSACTION],
            "modified": [],
            "removed": [{"transaction_id": "txn-0", "account_id": "acc-1"}],
            "accounts": [RAW_ACCOUNT],
            "next_cursor": "c1",
            "has_more": True,
        }
    )

    page = PlaidTransactionFeed(client).sync_transactions("access-1", cursor="c0", count=500)

    request = client.requests[0]
    assert request.access_token == "access-1"
    assert request.cursor == "c0"
    assert request.count == 500
    assert page.next_cursor == "c1"
    assert page.has_more is True
    assert page.removed == ["txn-0"]

    txn = page.added[0]
    assert txn.amount == Decimal("12.3")
    assert txn.authorized_date == date(2024, 2, 29)
    assert txn.payment_channel == "online"
    assert txn.merchant_name is None
    assert txn.category == "TRANSPORTATION"
    assert txn.subcategory == "TRANSPORTATION_TAXIS"
    assert txn.category_icon_url.endswith("PFC_TRANSPORTATION.png")

    account = page.accounts[0]
    assert account.type == "depository"
    assert account.subtype == "checking"
    assert account.balances.current == Decimal("110.0")
    assert account.balances.limit is None


def test_sync_without_cursor_omits_it():
    client = StubPlaidClient(
        sync_payload={
            "added": [],
            "modified": [],
            "removed": [],
            "accounts": [],
            "next_cursor": "c1",
            "has_more": False,
        }
    )

    PlaidTransactionFeed(client).sync_transactions("access-1", cursor=None, count=500)

    assert "cursor" not in client.requests[0].to_dict()


def test_list_transactions_builds_paged_request():
    client = StubPlaidClient(
        get_payload={
            "transactions": [RAW_TRANSACTION],
            "total_transactions": 1,
            "accounts": [RAW_ACCOUNT],
        }
    )

    page = PlaidTransactionFeed(client).list_transactions(
        "access-1", start_date=date(2024, 1, 1), end_date=date(2024, 6, 30), count=500, offset=500
    )

    request = client.requests[0]
    assert request.start_date == date(2024, 1, 1)
    assert request.end_date == date(2024, 6, 30)
    assert request.options.count == 500
    assert request.options.offset == 500
    assert page.total_transactions == 1
    assert page.transactions[0].transaction_id == "txn-1"
    assert page.accounts[0].account_id == "acc-1"


def test_api_exception_becomes_feed_error():
    error = ApiException(status=400, reason="Bad Request")
    error.body = json.dumps(
        {
            "error_type": "ITEM_ERROR",
            "error_code": "ITEM_LOGIN_REQUIRED",
            "error_message": "the login details of this item have changed",
        }
    )
    client = StubPlaidClient(error=error)

    with pytest.raises(FeedError) as exc_info:
        PlaidTransactionFeed(client).sync_transactions("access-1", cursor=None, count=500)

    assert exc_info.value.error_code == "ITEM_LOGIN_REQUIRED"
    assert "login details" in exc_info.value.error_message
    assert exc_info.value.__cause__ is error


def test_api_exception_without_json_body():
    error = ApiException(status=502, reason="Bad Gateway")
    error.body = "<html>upstream</html>"
    client = StubPlaidClient(error=error)

    with pytest.raises(FeedError) as exc_info:
        PlaidTransactionFeed(client).list_transactions(
            "access-1", start_date=date(2024, 1, 1), end_date=date(2024, 1, 2), count=500, offset=0
        )

    assert exc_info.value.error_code is None
    assert "Bad Gateway" in exc_info.value.error_message


def test_build_client_requires_credentials():
    with pytest.raises(ConfigurationError):
        build_plaid_client(PlaidSettings(client_id=None, secret="secret"))


def test_build_client_rejects_unknown_environment():
    with pytest.raises(ConfigurationError, match="development"):
        build_plaid_client(PlaidSettings(client_id="id", secret="secret", environment="development"))


def test_build_client_for_sandbox():
    client = build_plaid_client(PlaidSettings(client_id="id", secret="secret"))
    assert isinstance(client, plaid_api.PlaidApi)


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("PLAID_CLIENT_ID", "client")
    monkeypatch.setenv("PLAID_SECRET", "shh")
    monkeypatch.delenv("PLAID_ENV", raising=False)

    settings = PlaidSettings.from_env()

    assert settings == PlaidSettings(client_id="client", secret="shh", environment="sandbox")


def test_parses_iso_datetime_strings():
    raw_account = dict(RAW_ACCOUNT)
    raw_account["balances"] = dict(RAW_ACCOUNT["balances"], last_updated_datetime="2024-03-01T10:00:00Z")
    client = StubPlaidClient(
        sync_payload={
            "added": [dict(RAW_TRANSACTION, date="2024-03-01")],
            "modified": [],
            "removed": [],
            "accounts": [raw_account],
            "next_cursor": "c1",
            "has_more": False,
        }
    )

    page = PlaidTransactionFeed(client).sync_transactions("access-1", cursor="c0", count=500)

    assert page.added[0].date == date(2024, 3, 1)
    assert isinstance(page.accounts[0].balances.last_updated_datetime, datetime)
