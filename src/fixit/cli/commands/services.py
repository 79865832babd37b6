"""Service catalog commands."""

import click

from fixit.domain.catalog import CATEGORIES, PROVINCES, get_category


@click.group()
def services_group():
    """Browse the service catalog."""
    pass


@services_group.command("list")
def list_services():
    """List all service categories."""
    click.echo("\nServices:")
    click.echo("-" * 60)
    for category in CATEGORIES:
        click.echo(f"{category.id:15s} | {category.name:22s} | {category.description}")


@services_group.command("show")
@click.argument("category_id")
@click.pass_context
def show_service(ctx, category_id: str):
    """Show a category and its bookable services."""
    category = get_category(category_id)
    if category is None:
        click.echo(f"Error: Service '{category_id}' not found", err=True)
        ctx.exit(1)

    click.echo(f"\n{category.name}")
    click.echo(category.details)
    click.echo("")
    for sub in category.subcategories:
        click.echo(f"  {sub.id:20s} {sub.name} - {sub.description}")


@click.command("provinces")
def list_provinces():
    """List provinces where services can be booked."""
    for province in PROVINCES:
        click.echo(province)


def register_commands(cli):
    """Register catalog commands with main CLI."""
    cli.add_command(services_group, name="services")
    cli.add_command(list_provinces)
