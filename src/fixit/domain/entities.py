"""Domain model entities for fixit.

These are plain data classes independent of the storage format. Unlike
read-only lookup data, accounts and bookings are mutated in place by the
domain services, so most of them are not frozen.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


def normalize_email(email: str) -> str:
    """Return the case-folded form used as account identity."""
    return email.lower()


@dataclass
class UserProfile:
    """Registered user's profile.

    ``password`` holds the stored credential: a SHA-256 hex digest, or the
    plaintext password for rows written before hashing was introduced.
    """

    name: str
    email: str
    phone: str
    password: str


@dataclass
class AccountRecord:
    """Directory entry keyed by normalized email."""

    email: str
    password: str
    profile: UserProfile


@dataclass
class Booking:
    """Service booking.

    ``owner_email`` is stamped once when the booking enters the ledger and
    is never reassigned afterwards.
    """

    service_name: str
    province: str
    scheduled_at: datetime
    notes: str = ""
    owner_email: str = ""
    cancelled: bool = False


@dataclass(frozen=True)
class NotificationEntry:
    """Append-only log entry."""

    message: str
    created_at: datetime


class BookingStatus(str, Enum):
    """Booking status derived from the wall clock at read time."""

    CANCELLED = "Cancelled"
    COMPLETED = "Completed"
    UPCOMING = "Upcoming"
    SCHEDULED = "Scheduled"


@dataclass(frozen=True)
class AppSnapshot:
    """Immutable view of the application state handed to observers."""

    current_user: Optional[UserProfile]
    bookings: tuple[Booking, ...] = field(default_factory=tuple)
    notifications: tuple[NotificationEntry, ...] = field(default_factory=tuple)
