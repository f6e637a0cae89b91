"""CLI helper for account resolution."""

from __future__ import annotations

import click
from banksync.cli.error_handling import handle_domain_error
from banksync.domain.account import AccountService
from banksync.domain.errors import DomainError
from banksync.utils.account_resolver import resolve_account


def resolve_account_or_exit(
    ctx: click.Context, account_service: AccountService, account: str | int
) -> int:
    """Resolve an account ID, name or external ID, or exit with a CLI error."""
    try:
        return resolve_account(account_service, account)
    except DomainError as exc:
        handle_domain_error(ctx, exc)
