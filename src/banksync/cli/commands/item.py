"""Item management and sync commands."""

import click
from banksync.cli.error_handling import handle_domain_error
from banksync.cli.feed_options import get_item_service, plaid_options
from banksync.domain.errors import DomainError
from banksync.domain.item import ItemService


@click.group()
def item_group():
    """Manage linked items."""
    pass


@item_group.command("link")
@click.argument("external_item_id")
@click.argument("access_token")
@click.option("--institution", help="Institution name")
@click.pass_context
def link_item(ctx, external_item_id: str, access_token: str, institution: str | None):
    """Link an item from its Plaid item ID and access token.

    Examples:
        banksync item link item-sandbox-123 access-sandbox-abc --institution "First Platypus"
    """
    service = ItemService(ctx.obj["db"])
    try:
        item_id = service.link_item(
            external_item_id=external_item_id,
            access_token=access_token,
            institution_name=institution,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Linked item '{external_item_id}' (ID: {item_id})")


@item_group.command("list")
@click.pass_context
def list_items(ctx):
    """List linked items."""
    service = ItemService(ctx.obj["db"])

    items = service.list_items()
    if not items:
        click.echo("No items found.")
        return

    click.echo("\nItems:")
    click.echo("-" * 80)
    for it in items:
        synced = it.last_synced_at.strftime("%Y-%m-%d %H:%M") if it.last_synced_at else "never"
        institution = it.institution_name or "-"
        click.echo(
            f"ID: {it.id:3d} | {it.external_id:24s} | {institution:20s} | "
            f"{it.status.value:20s} | Synced: {synced}"
        )


def _echo_stats(label: str, stats) -> None:
    click.echo(
        f"{label}: {stats.transactions_added} added, {stats.transactions_modified} modified, "
        f"{stats.transactions_removed} removed, {stats.accounts_updated} accounts updated"
    )
    for change in stats.sign_changes:
        click.echo(
            f"  Sign change on {change.external_id}: {change.old_amount} -> {change.new_amount}"
        )


@item_group.command("sync")
@click.argument("item_id", type=int, required=False)
@click.option("--all", "sync_all", is_flag=True, help="Sync every linked item")
@plaid_options
@click.pass_context
def sync_items(
    ctx,
    item_id: int | None,
    sync_all: bool,
    plaid_client_id: str | None,
    plaid_secret: str | None,
    plaid_env: str,
):
    """Sync transactions for one item, or for all items with --all.

    Plaid credentials are read from PLAID_CLIENT_ID, PLAID_SECRET and
    PLAID_ENV unless given as options.

    Examples:
        banksync item sync 1
        banksync item sync --all
    """
    if sync_all == (item_id is not None):
        click.echo("Error: Give either ITEM_ID or --all", err=True)
        ctx.exit(1)

    try:
        service = get_item_service(ctx, plaid_client_id, plaid_secret, plaid_env)
        if item_id is not None:
            result = service.sync_item(item_id)
            _echo_stats(f"Item {item_id}", result.stats)
            return
        summary = service.sync_all_items()
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(
        f"Synced {summary.items_synced} item(s): {summary.transactions_added} added, "
        f"{summary.transactions_modified} modified, {summary.transactions_removed} removed"
    )
    if summary.sign_changes:
        click.echo(f"{summary.sign_changes} sign change(s) detected")
    for failed_id, message in summary.failed:
        click.echo(f"Error: Item {failed_id} failed: {message}", err=True)
    if summary.failed:
        ctx.exit(1)


def register_commands(cli):
    """Register item commands with main CLI."""
    cli.add_command(item_group, name="item")
