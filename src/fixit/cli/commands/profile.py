"""Profile management commands."""

import click

from fixit.cli.error_handling import handle_domain_error, require_login
from fixit.cli.validators import validate_email, validate_new_password, validate_phone
from fixit.domain.errors import DomainError
from fixit.domain.entities import normalize_email


@click.group()
def profile_group():
    """Manage your profile."""
    pass


@profile_group.command("update")
@click.option("--name", help="New display name")
@click.option("--phone", help="New phone number")
@click.option("--email", help="New email address")
@click.option(
    "--password",
    "change_password",
    is_flag=True,
    help="Prompt for a new password (at least 6 characters)",
)
@click.pass_context
def update_profile(
    ctx,
    name: str | None,
    phone: str | None,
    email: str | None,
    change_password: bool,
):
    """Update the logged-in user's profile.

    Options that are not given keep their current value. With --password
    the new password is read from a hidden prompt. Profile edits accept
    passwords of 6 or more characters; 'password change' requires 8.

    Examples:
        fixit profile update --name "Mona A." --phone 01198765432
        fixit profile update --email mona.adel@example.com --password
    """
    state = ctx.obj["state"]
    user = require_login(ctx)

    password = None
    if change_password:
        password = click.prompt("New password", hide_input=True, confirmation_prompt=True)

    current_email = user.email
    try:
        new_name = name.strip() if name else user.name
        new_phone = validate_phone(phone) if phone else user.phone
        new_email = validate_email(email) if email else current_email
        new_password = validate_new_password(password, minimum=6) if password else None

        if normalize_email(new_email) != normalize_email(current_email) or new_password:
            state.update_email_and_password(current_email, new_email, new_password)
        state.update_profile(new_email, new_name, new_phone)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo("Profile updated successfully")


def register_commands(cli):
    """Register profile commands with main CLI."""
    cli.add_command(profile_group, name="profile")
