"""Custom category commands."""

import click
from banksync.cli.error_handling import handle_domain_error
from banksync.domain.category import CategoryService
from banksync.domain.errors import DomainError


def _echo_subtree(service: CategoryService, parent_id: int | None, depth: int) -> None:
    for cat in service.list_categories(parent_id=parent_id):
        click.echo(f"{'  ' * depth}{cat.name} (ID: {cat.id})")
        _echo_subtree(service, cat.id, depth + 1)


@click.group()
def category_group():
    """Manage custom categories."""
    pass


@category_group.command("list")
@click.pass_context
def list_categories(ctx):
    """List categories as a tree."""
    service = CategoryService(ctx.obj["db"])

    if not service.list_categories():
        click.echo("No categories found.")
        return

    click.echo("\nCategories:")
    _echo_subtree(service, None, 0)


@category_group.command("create")
@click.argument("name")
@click.option("--parent", help="Parent category path (e.g., 'Food & Dining')")
@click.pass_context
def create_category(ctx, name: str, parent: str | None):
    """Create a category, optionally under a parent."""
    service = CategoryService(ctx.obj["db"])
    try:
        category_id = service.create_category(name=name, parent_path=parent)
    except DomainError as e:
        handle_domain_error(ctx, e)
    parent_str = f" under '{parent}'" if parent else ""
    click.echo(f"Created category '{name}'{parent_str} (ID: {category_id})")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
