"""Rendering of domain and feed errors for banksync commands."""

import logging

import click

from banksync.domain.errors import ITEM_LOGIN_REQUIRED, DomainError, FeedError

logger = logging.getLogger(__name__)

RELINK_HINT = "Hint: the bank needs new credentials; re-link the item, then sync again."


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Print ``Error: <message>`` to stderr and exit with status 1.

    Feed errors keep their feed error code in the message. An
    ITEM_LOGIN_REQUIRED failure also prints a hint to re-link the item.
    """
    logger.debug("Command %s failed: %r", ctx.info_name, error)
    click.echo(f"Error: {error}", err=True)
    if isinstance(error, FeedError) and error.error_code == ITEM_LOGIN_REQUIRED:
        click.echo(RELINK_HINT, err=True)
    ctx.exit(1)
