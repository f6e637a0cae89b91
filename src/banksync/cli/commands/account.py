"""Account commands."""

import click
from banksync.cli.account_resolution import resolve_account_or_exit
from banksync.cli.error_handling import handle_domain_error
from banksync.domain.account import AccountService
from banksync.domain.errors import DomainError


@click.group()
def account_group():
    """Browse and rename synced accounts."""
    pass


@account_group.command("list")
@click.option("--item", "item_id", type=int, help="Only accounts of this item ID")
@click.pass_context
def list_accounts(ctx, item_id: int | None):
    """List accounts with their latest balances."""
    service = AccountService(ctx.obj["db"])

    accounts = service.list_accounts(item_id=item_id)
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 80)
    for acc in accounts:
        mask = f"••{acc.mask}" if acc.mask else ""
        balance = f"{acc.current_balance:,.2f}" if acc.current_balance is not None else "-"
        currency = acc.currency or ""
        click.echo(
            f"ID: {acc.id:3d} | {acc.name:24s} | {mask:6s} | {acc.subtype or acc.type or '':12s} | "
            f"{balance} {currency}".rstrip()
        )


@account_group.command("rename")
@click.argument("account", metavar="ACCOUNT")
@click.argument("new_name", metavar="NEW_NAME")
@click.pass_context
def rename_account(ctx, account: str, new_name: str) -> None:
    """Rename an account.

    ACCOUNT can be an account ID, name or external ID. The new name is kept
    across syncs.

    Examples:
        banksync account rename "Plaid Checking" "Everyday"
        banksync account rename 3 "Joint Savings"
    """
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)

    try:
        service.rename_account(account_id=account_id, name=new_name)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Renamed account to '{new_name.strip()}'")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
