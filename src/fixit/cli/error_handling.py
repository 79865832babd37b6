"""CLI error handling helpers."""

import click

from fixit.domain.entities import UserProfile
from fixit.domain.errors import DomainError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def require_login(ctx: click.Context) -> UserProfile:
    """Return the session user or exit if nobody is logged in."""
    user = ctx.obj["state"].current_user
    if user is None:
        click.echo("Error: Not logged in. Run 'fixit login EMAIL' first.", err=True)
        ctx.exit(1)
    return user
