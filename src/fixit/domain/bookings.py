"""Booking ledger domain service."""

import logging
from datetime import datetime
from typing import Optional

from fixit.domain.entities import Booking, BookingStatus, normalize_email
from fixit.domain.notifications import NotificationLog, booked_message, cancelled_message
from fixit.domain.session import Session

logger = logging.getLogger(__name__)


def derive_status(booking: Booking, now: datetime) -> BookingStatus:
    """Derive a booking's status from the given wall-clock time.

    Status is never stored; it is recomputed whenever it is displayed.
    """
    if booking.cancelled:
        return BookingStatus.CANCELLED
    if booking.scheduled_at < now:
        return BookingStatus.COMPLETED
    # Whole days only, so anything under 48 hours ahead is upcoming
    if (booking.scheduled_at - now).days <= 1:
        return BookingStatus.UPCOMING
    return BookingStatus.SCHEDULED


def filter_by_owner(bookings: list[Booking], email: Optional[str]) -> list[Booking]:
    """Filter bookings by owner email (case-insensitive).

    Args:
        bookings: Bookings in ledger order
        email: Owner email; if None, all bookings are returned unfiltered

    Returns:
        Matching bookings, preserving order
    """
    if email is None:
        return list(bookings)
    key = normalize_email(email)
    return [b for b in bookings if normalize_email(b.owner_email) == key]


def filter_by_status(
    bookings: list[Booking], status: Optional[BookingStatus], now: datetime
) -> list[Booking]:
    """Keep bookings whose derived status equals ``status`` (None keeps all)."""
    if status is None:
        return list(bookings)
    return [b for b in bookings if derive_status(b, now) == status]


class BookingLedger:
    """Ordered collection of bookings tied to users."""

    def __init__(self, session: Session, notifications: NotificationLog):
        """Initialize booking ledger.

        Args:
            session: Session used to default booking ownership
            notifications: Log receiving one entry per booking event
        """
        self.session = session
        self.notifications = notifications
        self.bookings: list[Booking] = []

    def add(self, booking: Booking) -> Booking:
        """Append a booking, stamping the session owner if none is set.

        Returns:
            The booking as stored
        """
        if not booking.owner_email and self.session.is_authenticated:
            booking.owner_email = self.session.email

        self.bookings.append(booking)
        self.notifications.record(booked_message(booking))
        logger.debug("Added booking %r for %s", booking.service_name, booking.owner_email)
        return booking

    def cancel(self, booking: Booking) -> bool:
        """Soft-cancel the given booking instance.

        The booking is located by identity, not field equality. A
        cancellation notification is recorded even if the instance is not
        part of the ledger, and again on every repeated call.

        Returns:
            True if the instance was found in the ledger
        """
        found = self.index_of(booking)
        if found is not None:
            self.bookings[found].cancelled = True
        else:
            logger.warning("Cancelling booking %r not held by the ledger", booking.service_name)

        self.notifications.record(cancelled_message(booking))
        return found is not None

    def index_of(self, booking: Booking) -> Optional[int]:
        """Return the position of this exact instance, or None."""
        for index, candidate in enumerate(self.bookings):
            if candidate is booking:
                return index
        return None

    def for_owner(self, email: Optional[str]) -> list[Booking]:
        return filter_by_owner(self.bookings, email)
