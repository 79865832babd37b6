"""Main CLI entry point."""

import asyncio

import click

from fixit.config import Settings
from fixit.logging_config import setup_logging
from fixit.state import AppState
from fixit.storage.factories import create_sqlite_store

# Import and register all commands at module level
from fixit.cli.commands import (
    account,
    profile,
    services,
    booking,
    notifications,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides FIXIT_DB_PATH environment variable)",
    envvar="FIXIT_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level (overrides FIXIT_LOG_LEVEL environment variable)",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str | None):
    """FixIt - Book home and personal services.

    Register an account, browse the service catalog, and manage your
    bookings. Data is stored locally.
    """
    ctx.ensure_object(dict)
    settings = Settings()
    setup_logging(level=log_level or settings.log_level, logfile=settings.log_file)

    # Load state only when actually running a command (not when showing help)
    if ctx.invoked_subcommand is not None:
        store = create_sqlite_store(database_path=db_path or settings.db_path)
        store.connect()
        store.initialize_schema()
        ctx.call_on_close(store.disconnect)

        state = AppState(store)
        asyncio.run(state.load())
        ctx.obj["state"] = state


# Register all commands
account.register_commands(cli)
profile.register_commands(cli)
services.register_commands(cli)
booking.register_commands(cli)
notifications.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
