"""Transaction commands."""

import click
from banksync.cli.account_resolution import resolve_account_or_exit
from banksync.cli.error_handling import handle_domain_error
from banksync.domain.account import AccountService
from banksync.domain.category import CategoryService
from banksync.domain.errors import DomainError
from banksync.domain.transaction import SplitItem, TransactionService
from banksync.utils.amount_parser import parse_amount
from banksync.utils.date_parser import parse_date


@click.group()
def transaction_group():
    """Browse, categorize and split transactions."""
    pass


def _parse_date_or_exit(ctx, value: str | None, label: str):
    if value is None:
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


@transaction_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month', 'this year')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option("--account", help="Account ID, name or external ID")
@click.option("--pending/--posted", default=None, help="Only pending or only posted transactions")
@click.pass_context
def list_transactions(
    ctx,
    start_date: str | None,
    end_date: str | None,
    account: str | None,
    pending: bool | None,
) -> None:
    """List transactions, newest first.

    Amounts are negative for money spent and positive for money received.

    Examples:
        banksync transaction list --start-date "this month"
        banksync transaction list --account "Plaid Checking" --pending
    """
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)
    category_service = CategoryService(db)

    account_id = None
    if account is not None:
        account_id = resolve_account_or_exit(ctx, AccountService(db), account)

    start = _parse_date_or_exit(ctx, start_date, "start date")
    end = _parse_date_or_exit(ctx, end_date, "end date")

    try:
        transactions = transaction_service.list_transactions(
            start_date=start, end_date=end, account_id=account_id, pending=pending
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not transactions:
        click.echo("No transactions found.")
        return

    for txn in transactions:
        flags = ""
        if txn.pending:
            flags += "P"
        if txn.is_split:
            flags += "S"
        elif txn.parent_transaction_id is not None:
            flags += "C"
        category = ""
        if txn.subcategory_id is not None:
            category = category_service.format_category_path(txn.subcategory_id)
        elif txn.category_id is not None:
            category = category_service.format_category_path(txn.category_id)
        elif txn.feed_category:
            category = f"[{txn.feed_category}]"
        click.echo(
            f"{txn.id:5d} | {txn.date} | {txn.amount:>12,.2f} | {flags:2s} | "
            f"{txn.name[:36]:36s} | {category}".rstrip()
        )


@transaction_group.command("categorize")
@click.argument("transaction_id", type=int)
@click.argument("category_path")
@click.pass_context
def categorize_transaction(ctx, transaction_id: int, category_path: str) -> None:
    """Assign a category to a transaction.

    Use an empty CATEGORY_PATH ("") to clear it.

    Examples:
        banksync transaction categorize 42 "Food & Dining > Groceries"
    """
    service = TransactionService(ctx.obj["db"])
    try:
        service.update_category(transaction_id, category_path or None)
    except DomainError as e:
        handle_domain_error(ctx, e)
    if category_path:
        click.echo(f"Categorized transaction {transaction_id} as '{category_path}'")
    else:
        click.echo(f"Cleared category of transaction {transaction_id}")


@transaction_group.command("notes")
@click.argument("transaction_id", type=int)
@click.argument("notes")
@click.pass_context
def set_notes(ctx, transaction_id: int, notes: str) -> None:
    """Set the notes of a transaction ("" clears them)."""
    service = TransactionService(ctx.obj["db"])
    try:
        service.update_notes(transaction_id, notes or None)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated notes of transaction {transaction_id}")


def _parse_part(value: str) -> SplitItem:
    """Parse AMOUNT[:CATEGORY_PATH]."""
    amount_text, _, category_path = value.partition(":")
    return SplitItem(amount=parse_amount(amount_text), category_path=category_path.strip() or None)


@transaction_group.command("split")
@click.argument("transaction_id", type=int)
@click.option(
    "--part",
    "parts",
    multiple=True,
    required=True,
    help="Split part as AMOUNT[:CATEGORY_PATH]; repeat for each part",
)
@click.pass_context
def split_transaction(ctx, transaction_id: int, parts: tuple[str, ...]) -> None:
    """Split a transaction into parts.

    The parts must add up to the transaction amount. The original stays in
    place, marked as split, and is kept even if the bank later removes it.

    Examples:
        banksync transaction split 42 --part "-30.00:Food & Dining > Groceries" --part "-12.50:Household"
    """
    try:
        splits = [_parse_part(part) for part in parts]
    except ValueError as e:
        click.echo(f"Error: Invalid split part: {e}", err=True)
        ctx.exit(1)

    service = TransactionService(ctx.obj["db"])
    try:
        child_ids = service.split_transaction(transaction_id, splits)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Split transaction {transaction_id} into {len(child_ids)} parts")
    for child_id in child_ids:
        child = service.get_transaction(child_id)
        click.echo(f"  {child.id:5d} | {child.amount:>12,.2f} | {child.name}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
