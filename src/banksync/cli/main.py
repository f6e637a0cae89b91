"""Main CLI entry point."""

import logging

import click
from banksync.database.factories import create_sqlite_database

# Import and register all commands at module level
from banksync.cli.commands import (
    account,
    category,
    item,
    transaction,
    webhook,
)

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides BANKSYNC_DB_PATH environment variable)",
    envvar="BANKSYNC_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="BANKSYNC_LOG_LEVEL",
    help="Logging level",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """banksync - Bank transaction sync.

    Link bank items, pull their accounts and transactions from Plaid, and
    keep a local ledger you can categorize and split.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(level=log_level.upper(), format=LOG_FORMAT)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None and "db" not in ctx.obj:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
item.register_commands(cli)
account.register_commands(cli)
transaction.register_commands(cli)
category.register_commands(cli)
webhook.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
