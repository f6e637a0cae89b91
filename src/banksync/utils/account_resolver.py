"""Utility for resolving account references to IDs."""

from banksync.domain.account import AccountService
from banksync.domain.errors import NotFoundError


def resolve_account(account_service: AccountService, account: str | int) -> int:
    """Resolve an account reference to an account ID.

    A reference is tried as a local ID, then as a display name, then as the
    external account ID from the feed.

    Args:
        account_service: AccountService instance
        account: Account ID, name or external ID

    Returns:
        Account ID

    Raises:
        NotFoundError: If no account matches, or a name matches several accounts
    """
    if isinstance(account, int) or str(account).isdigit():
        account_id = int(account)
        if account_service.get_account(account_id) is None:
            raise NotFoundError(f"Account ID {account_id} not found")
        return account_id

    accounts = account_service.list_accounts()
    by_name = [acc for acc in accounts if acc.name == account]
    if len(by_name) == 1:
        return by_name[0].id
    if len(by_name) > 1:
        ids = ", ".join(str(acc.id) for acc in by_name)
        raise NotFoundError(f"Account name '{account}' is ambiguous (IDs: {ids}); use an ID")

    for acc in accounts:
        if acc.external_id == account:
            return acc.id

    raise NotFoundError(f"Account '{account}' not found")
