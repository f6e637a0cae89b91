"""Webhook replay command."""

import click
from banksync.cli.error_handling import handle_domain_error
from banksync.cli.feed_options import get_item_service, plaid_options
from banksync.domain.errors import DomainError
from banksync.domain.item import ItemService
from banksync.domain.webhooks import TRANSACTIONS_WEBHOOK, handle_webhook


@click.command("webhook")
@click.argument("webhook_type")
@click.argument("webhook_code")
@click.argument("external_item_id")
@plaid_options
@click.pass_context
def webhook_command(
    ctx,
    webhook_type: str,
    webhook_code: str,
    external_item_id: str,
    plaid_client_id: str | None,
    plaid_secret: str | None,
    plaid_env: str,
):
    """Handle a Plaid webhook, as a web endpoint would.

    Examples:
        banksync webhook TRANSACTIONS SYNC_UPDATES_AVAILABLE item-sandbox-123
        banksync webhook ITEM LOGIN_REPAIRED item-sandbox-123
    """
    try:
        if webhook_type.upper() == TRANSACTIONS_WEBHOOK:
            service = get_item_service(ctx, plaid_client_id, plaid_secret, plaid_env)
        else:
            # Status webhooks never reach the feed
            service = ItemService(ctx.obj["db"], ctx.obj.get("feed"))
        result = handle_webhook(service, webhook_type, webhook_code, external_item_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if result is None:
        click.echo(f"Handled {webhook_type.upper()}/{webhook_code.upper()}")
    else:
        stats = result.stats
        click.echo(
            f"Synced item '{external_item_id}': {stats.transactions_added} added, "
            f"{stats.transactions_modified} modified, {stats.transactions_removed} removed"
        )


def register_commands(cli):
    """Register webhook command with main CLI."""
    cli.add_command(webhook_command, name="webhook")
