"""Notification log domain service."""

from datetime import datetime
from typing import Callable

from fixit.domain.entities import Booking, NotificationEntry


def format_day(moment: datetime) -> str:
    """Format as d/m/yyyy without zero padding."""
    return f"{moment.day}/{moment.month}/{moment.year}"


def format_time(moment: datetime) -> str:
    """Format as a 12-hour clock time, e.g. ``3:05 PM``."""
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d} {suffix}"


def booked_message(booking: Booking) -> str:
    return (
        f"Booked {booking.service_name} in {booking.province} "
        f"on {format_day(booking.scheduled_at)} at {format_time(booking.scheduled_at)}"
    )


def cancelled_message(booking: Booking) -> str:
    return (
        f"Cancelled {booking.service_name} in {booking.province} "
        f"on {format_day(booking.scheduled_at)}"
    )


class NotificationLog:
    """Append-only, unbounded log of human-readable events."""

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        """Initialize notification log.

        Args:
            clock: Source of ``created_at`` timestamps
        """
        self.clock = clock
        self.entries: list[NotificationEntry] = []

    def record(self, message: str) -> NotificationEntry:
        """Append a message stamped with the current time."""
        entry = NotificationEntry(message=message, created_at=self.clock())
        self.entries.append(entry)
        return entry
