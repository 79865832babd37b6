"""Notification commands."""

import click


@click.command("notifications")
@click.pass_context
def list_notifications(ctx):
    """Show booking notifications, oldest first."""
    entries = ctx.obj["state"].notifications
    if not entries:
        click.echo("No notifications yet.")
        return

    for entry in entries:
        click.echo(f"[{entry.created_at:%Y-%m-%d %H:%M}] {entry.message}")


def register_commands(cli):
    """Register notification commands with main CLI."""
    cli.add_command(list_notifications)
