"""Transaction feed backed by the Plaid API."""

import json
import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

import plaid
from dateutil import parser as date_parser
from plaid.api import plaid_api
from plaid.exceptions import ApiException
from plaid.model.transactions_get_request import TransactionsGetRequest
from plaid.model.transactions_get_request_options import TransactionsGetRequestOptions
from plaid.model.transactions_sync_request import TransactionsSyncRequest

from banksync.domain.errors import ConfigurationError, FeedError
from banksync.domain.feed import (
    FeedAccount,
    FeedBalances,
    FeedTransaction,
    TransactionFeed,
    TransactionListPage,
    TransactionSyncPage,
)
from banksync.feeds.settings import PLAID_ENVIRONMENTS, PlaidSettings

logger = logging.getLogger(__name__)


def build_plaid_client(settings: PlaidSettings) -> plaid_api.PlaidApi:
    """Build a Plaid API client.

    Raises:
        ConfigurationError: If credentials are missing or the environment is
            not one of PLAID_ENVIRONMENTS
    """
    if not settings.client_id or not settings.secret:
        raise ConfigurationError("Plaid credentials missing: set PLAID_CLIENT_ID and PLAID_SECRET")

    environment = settings.environment.lower()
    if environment not in PLAID_ENVIRONMENTS:
        raise ConfigurationError(
            f"Unknown Plaid environment '{settings.environment}' "
            f"(expected one of: {', '.join(PLAID_ENVIRONMENTS)})"
        )

    configuration = plaid.Configuration(
        host=getattr(plaid.Environment, environment.capitalize()),
        api_key={
            "clientId": settings.client_id,
            "secret": settings.secret,
        },
    )
    return plaid_api.PlaidApi(plaid.ApiClient(configuration))


def _plain(value: Any) -> Any:
    """Unwrap SDK enum models (payment channel, account type) to their value."""
    return getattr(value, "value", value)


def _to_decimal(value: Any) -> Optional[Decimal]:
    if value is None:
        return None
    return Decimal(str(value))


def _to_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date_parser.isoparse(value).date()


def _to_datetime(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return date_parser.isoparse(value)


def _parse_account(raw: dict[str, Any]) -> FeedAccount:
    balances = raw.get("balances") or {}
    return FeedAccount(
        account_id=raw["account_id"],
        name=raw.get("name"),
        official_name=raw.get("official_name"),
        mask=raw.get("mask"),
        type=_plain(raw.get("type")),
        subtype=_plain(raw.get("subtype")),
        balances=FeedBalances(
            current=_to_decimal(balances.get("current")),
            available=_to_decimal(balances.get("available")),
            limit=_to_decimal(balances.get("limit")),
            iso_currency_code=balances.get("iso_currency_code"),
            last_updated_datetime=_to_datetime(balances.get("last_updated_datetime")),
        ),
    )


def _parse_transaction(raw: dict[str, Any]) -> FeedTransaction:
    category = raw.get("personal_finance_category") or {}
    return FeedTransaction(
        transaction_id=raw["transaction_id"],
        account_id=raw["account_id"],
        amount=Decimal(str(raw["amount"])),
        date=_to_date(raw["date"]),
        name=raw.get("name") or raw.get("merchant_name") or "",
        pending=bool(raw.get("pending", False)),
        iso_currency_code=raw.get("iso_currency_code"),
        authorized_date=_to_date(raw.get("authorized_date")),
        merchant_name=raw.get("merchant_name"),
        payment_channel=_plain(raw.get("payment_channel")),
        pending_transaction_id=raw.get("pending_transaction_id"),
        logo_url=raw.get("logo_url"),
        category_icon_url=raw.get("personal_finance_category_icon_url"),
        category=category.get("primary"),
        subcategory=category.get("detailed"),
    )


def _removed_id(raw: Any) -> str:
    if isinstance(raw, dict):
        return raw["transaction_id"]
    return raw


def feed_error_from_exception(exc: ApiException) -> FeedError:
    """Decode a Plaid error body into a FeedError."""
    body = exc.body
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    try:
        payload = json.loads(body) if isinstance(body, str) else (body or {})
    except json.JSONDecodeError:
        payload = {}
    if not isinstance(payload, dict):
        payload = {}
    return FeedError(
        payload.get("error_code"),
        payload.get("error_message") or str(exc.reason or exc),
    )


class PlaidTransactionFeed(TransactionFeed):
    """TransactionFeed over ``plaid_api.PlaidApi``."""

    def __init__(self, client: plaid_api.PlaidApi):
        self.client = client

    @classmethod
    def from_settings(cls, settings: PlaidSettings) -> "PlaidTransactionFeed":
        return cls(build_plaid_client(settings))

    def list_transactions(
        self,
        access_token: str,
        start_date: date,
        end_date: date,
        count: int,
        offset: int,
    ) -> TransactionListPage:
        request = TransactionsGetRequest(
            access_token=access_token,
            start_date=start_date,
            end_date=end_date,
            options=TransactionsGetRequestOptions(count=count, offset=offset),
        )
        try:
            response = self.client.transactions_get(request).to_dict()
        except ApiException as exc:
            raise feed_error_from_exception(exc) from exc

        return TransactionListPage(
            transactions=[_parse_transaction(t) for t in response.get("transactions", [])],
            total_transactions=response.get("total_transactions", 0),
            accounts=[_parse_account(a) for a in response.get("accounts", [])],
        )

    def sync_transactions(
        self,
        access_token: str,
        cursor: Optional[str],
        count: int,
    ) -> TransactionSyncPage:
        params: dict[str, Any] = {"access_token": access_token, "count": count}
        if cursor:
            params["cursor"] = cursor
        try:
            response = self.client.transactions_sync(TransactionsSyncRequest(**params)).to_dict()
        except ApiException as exc:
            raise feed_error_from_exception(exc) from exc

        return TransactionSyncPage(
            added=[_parse_transaction(t) for t in response.get("added", [])],
            modified=[_parse_transaction(t) for t in response.get("modified", [])],
            removed=[_removed_id(r) for r in response.get("removed", [])],
            accounts=[_parse_account(a) for a in response.get("accounts", [])],
            next_cursor=response.get("next_cursor", ""),
            has_more=bool(response.get("has_more", False)),
        )
