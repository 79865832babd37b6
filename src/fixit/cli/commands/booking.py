"""Booking commands."""

import click

from fixit.cli.error_handling import handle_domain_error, require_login
from fixit.cli.validators import validate_province
from fixit.domain.catalog import find_category_for_service, get_category, get_subcategory, service_label
from fixit.domain.entities import Booking, BookingStatus
from fixit.domain.errors import ValidationError
from fixit.domain.notifications import format_day, format_time
from fixit.utils.date_parser import parse_datetime


@click.command("book")
@click.argument("category_id")
@click.argument("subcategory_id")
@click.option("--province", required=True, help="Province (see 'fixit provinces')")
@click.option(
    "--when",
    required=True,
    help="Date and time (e.g. '2025-03-01 14:30', 'tomorrow 9am', 'friday 18:00')",
)
@click.option("--notes", default="", help="Notes for the service provider")
@click.pass_context
def book(ctx, category_id: str, subcategory_id: str, province: str, when: str, notes: str):
    """Book a service.

    Examples:
        fixit book plumbing plumb_leak --province Cairo --when "tomorrow 10:00"
        fixit book barber barber_haircut --province Giza --when "2025-03-01 18:30" --notes "Ring twice"
    """
    state = ctx.obj["state"]
    require_login(ctx)

    category = get_category(category_id)
    subcategory = get_subcategory(category_id, subcategory_id)
    if category is None or subcategory is None:
        click.echo(f"Error: Service '{category_id} {subcategory_id}' not found", err=True)
        ctx.exit(1)

    try:
        province = validate_province(province)
        scheduled_at = parse_datetime(when, now=state.clock())
    except ValueError as e:
        handle_domain_error(ctx, e)

    booking = state.add_booking(
        Booking(
            service_name=service_label(category, subcategory),
            province=province,
            scheduled_at=scheduled_at,
            notes=notes,
        )
    )
    click.echo(
        f"Booked {booking.service_name} in {booking.province} "
        f"on {format_day(booking.scheduled_at)} at {format_time(booking.scheduled_at)}"
    )


@click.group()
def bookings_group():
    """View and cancel your bookings."""
    pass


@bookings_group.command("list")
@click.option(
    "--status",
    type=click.Choice([s.value for s in BookingStatus], case_sensitive=False),
    help="Only show bookings with this status",
)
@click.pass_context
def list_bookings(ctx, status: str | None):
    """List your bookings.

    Row numbers refer to your full booking list and are used by
    'bookings show' and 'bookings cancel'.
    """
    state = ctx.obj["state"]
    require_login(ctx)

    owned = state.bookings_for_current_user()
    if status is not None:
        wanted = BookingStatus(status.capitalize())
        rows = [(i, b) for i, b in enumerate(owned, start=1) if state.status_of(b) == wanted]
    else:
        rows = list(enumerate(owned, start=1))

    if not rows:
        click.echo("No bookings found.")
        return

    click.echo("\nBookings:")
    click.echo("-" * 80)
    for number, booking in rows:
        click.echo(
            f"{number:3d} | {state.status_of(booking).value:9s} | {booking.service_name:40s} | "
            f"{booking.province} - {format_day(booking.scheduled_at)} {format_time(booking.scheduled_at)}"
        )
        if booking.notes:
            click.echo(f"    | Notes: {booking.notes}")


@bookings_group.command("show")
@click.argument("number", type=int)
@click.pass_context
def show_booking(ctx, number: int):
    """Show details of booking NUMBER from 'bookings list'."""
    state = ctx.obj["state"]
    require_login(ctx)

    owned = state.bookings_for_current_user()
    if number < 1 or number > len(owned):
        handle_domain_error(ctx, ValidationError(f"No booking number {number}"))

    booking = owned[number - 1]
    category = find_category_for_service(booking.service_name)

    click.echo(f"\nBooking {number}")
    click.echo("-" * 40)
    click.echo(f"Service:  {booking.service_name}")
    if category is not None:
        click.echo(f"Category: {category.name} ({category.id})")
    click.echo(f"Province: {booking.province}")
    click.echo(f"Date:     {format_day(booking.scheduled_at)}")
    click.echo(f"Time:     {format_time(booking.scheduled_at)}")
    click.echo(f"Status:   {state.status_of(booking).value}")
    if booking.notes:
        click.echo(f"Notes:    {booking.notes}")


@bookings_group.command("cancel")
@click.argument("number", type=int)
@click.option("--yes", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def cancel_booking(ctx, number: int, yes: bool):
    """Cancel booking NUMBER from 'bookings list'."""
    state = ctx.obj["state"]
    require_login(ctx)

    owned = state.bookings_for_current_user()
    if number < 1 or number > len(owned):
        handle_domain_error(ctx, ValidationError(f"No booking number {number}"))

    booking = owned[number - 1]
    if booking.cancelled:
        click.echo(f"Booking {number} is already cancelled.")
        return

    if not yes and not click.confirm(f"Cancel {booking.service_name} on {format_day(booking.scheduled_at)}?"):
        click.echo("Cancellation aborted.")
        return

    state.cancel_booking(booking)
    click.echo(f"Cancelled {booking.service_name}")


def register_commands(cli):
    """Register booking commands with main CLI."""
    cli.add_command(book)
    cli.add_command(bookings_group, name="bookings")
