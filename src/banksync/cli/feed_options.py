"""Shared Plaid options for commands that talk to the feed."""

import click
from banksync.domain.feed import TransactionFeed
from banksync.domain.item import ItemService
from banksync.feeds.plaid_feed import PlaidTransactionFeed
from banksync.feeds.settings import PLAID_ENVIRONMENTS, PlaidSettings


def plaid_options(func):
    """Add --plaid-client-id, --plaid-secret and --plaid-env to a command."""
    func = click.option(
        "--plaid-env",
        envvar="PLAID_ENV",
        default="sandbox",
        show_default=True,
        type=click.Choice(PLAID_ENVIRONMENTS, case_sensitive=False),
        help="Plaid environment",
    )(func)
    func = click.option("--plaid-secret", envvar="PLAID_SECRET", help="Plaid secret")(func)
    func = click.option("--plaid-client-id", envvar="PLAID_CLIENT_ID", help="Plaid client ID")(func)
    return func


def get_feed(ctx: click.Context, client_id: str | None, secret: str | None, env: str) -> TransactionFeed:
    """Return the feed placed on the context, or build a Plaid feed.

    Raises:
        ConfigurationError: If Plaid credentials are missing
    """
    feed = ctx.obj.get("feed")
    if feed is None:
        settings = PlaidSettings(client_id=client_id, secret=secret, environment=env)
        feed = PlaidTransactionFeed.from_settings(settings)
        ctx.obj["feed"] = feed
    return feed


def get_item_service(
    ctx: click.Context, client_id: str | None, secret: str | None, env: str
) -> ItemService:
    return ItemService(ctx.obj["db"], get_feed(ctx, client_id, secret, env))
