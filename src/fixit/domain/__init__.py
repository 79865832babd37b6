"""Domain layer for fixit application."""

from fixit.domain.accounts import AccountDirectory
from fixit.domain.bookings import BookingLedger
from fixit.domain.notifications import NotificationLog
from fixit.domain.session import Session

__all__ = [
    "AccountDirectory",
    "BookingLedger",
    "NotificationLog",
    "Session",
]
