"""Registration, login and session commands."""

import click

from fixit.cli.error_handling import handle_domain_error
from fixit.cli.validators import (
    validate_email,
    validate_new_password,
    validate_password,
    validate_phone,
)
from fixit.domain.entities import UserProfile
from fixit.domain.errors import ValidationError, email_already_registered


@click.command("register")
@click.argument("name")
@click.argument("email")
@click.argument("phone")
@click.password_option(help="Account password (prompted if omitted)")
@click.pass_context
def register(ctx, name: str, email: str, phone: str, password: str):
    """Create a new account.

    The password must have at least 8 characters, with lower and upper case
    letters, a number and a symbol. PHONE must be an 11-digit number
    starting with 010, 011, 012 or 015.

    Examples:
        fixit register "Mona Adel" mona@example.com 01012345678
    """
    state = ctx.obj["state"]

    try:
        email = validate_email(email)
        phone = validate_phone(phone)
        validate_password(password)
    except ValidationError as e:
        handle_domain_error(ctx, e)

    if state.lookup(email) is not None:
        click.echo(f"Error: {email_already_registered()}", err=True)
        ctx.exit(1)

    profile = state.register(
        UserProfile(name=name.strip(), email=email, phone=phone, password=password)
    )
    click.echo(f"Registered '{profile.name}' <{profile.email}>")


@click.command("login")
@click.argument("email")
@click.password_option(confirmation_prompt=False, help="Account password (prompted if omitted)")
@click.pass_context
def login(ctx, email: str, password: str):
    """Log in to an existing account."""
    state = ctx.obj["state"]

    profile = state.log_in_with_credentials(email.strip(), password)
    if profile is None:
        click.echo("Error: Wrong credentials", err=True)
        ctx.exit(1)

    click.echo(f"Welcome back, {profile.name}!")


@click.command("logout")
@click.pass_context
def logout(ctx):
    """Log out of the current account."""
    state = ctx.obj["state"]

    if state.current_user is None:
        click.echo("Not logged in.")
        return

    state.log_out()
    click.echo("Logged out.")


@click.command("whoami")
@click.pass_context
def whoami(ctx):
    """Show the logged-in user."""
    user = ctx.obj["state"].current_user
    if user is None:
        click.echo("Not logged in.")
        return

    click.echo(f"Name:  {user.name}")
    click.echo(f"Email: {user.email}")
    click.echo(f"Phone: {user.phone}")


@click.group()
def password_group():
    """Manage passwords."""
    pass


@password_group.command("change")
@click.argument("email")
@click.option("--old-password", prompt=True, hide_input=True, help="Current password")
@click.option(
    "--new-password",
    prompt=True,
    hide_input=True,
    confirmation_prompt=True,
    help="New password (at least 8 characters)",
)
@click.pass_context
def change_password(ctx, email: str, old_password: str, new_password: str):
    """Change the password of an account.

    Examples:
        fixit password change mona@example.com
    """
    state = ctx.obj["state"]

    if not old_password:
        click.echo("Error: Please enter your old password", err=True)
        ctx.exit(1)

    try:
        validate_new_password(new_password)
    except ValidationError as e:
        handle_domain_error(ctx, e)

    if not state.change_password(email.strip(), old_password, new_password):
        click.echo("Error: Old password is incorrect", err=True)
        ctx.exit(1)

    click.echo("Password updated successfully!")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(register)
    cli.add_command(login)
    cli.add_command(logout)
    cli.add_command(whoami)
    cli.add_command(password_group, name="password")
