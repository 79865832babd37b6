"""Conversion between domain entities and stored JSON documents.

Field names follow the layout written by earlier releases of the app so
existing stores keep loading. Missing fields fall back to empty strings,
False or the current time; anything structurally wrong raises
DeserializationError for the whole document.
"""

import json
from datetime import datetime
from typing import Any, Callable, Optional

from dateutil.parser import isoparse

from fixit.domain.entities import AccountRecord, Booking, NotificationEntry, UserProfile
from fixit.domain.errors import DeserializationError, malformed_document

USERS_KEY = "registeredUsers"
BOOKINGS_KEY = "bookings"
NOTIFICATIONS_KEY = "notifications"
SESSION_KEY = "currentUserEmail"


def _text(data: dict[str, Any], field: str) -> str:
    value = data.get(field)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"field '{field}' must be a string")
    return value


def _flag(data: dict[str, Any], field: str) -> bool:
    value = data.get(field)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise TypeError(f"field '{field}' must be a boolean")
    return value


def _timestamp(data: dict[str, Any], field: str, now: Callable[[], datetime]) -> datetime:
    value = data.get(field)
    if value is None:
        return now()
    if not isinstance(value, str):
        raise TypeError(f"field '{field}' must be a date-time string")
    parsed = isoparse(value)
    if parsed.tzinfo is not None:
        # Entities hold naive local times
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def _object(value: Any, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise TypeError(f"{what} must be an object")
    return value


def profile_to_dict(profile: UserProfile) -> dict[str, Any]:
    return {
        "name": profile.name,
        "email": profile.email,
        "phone": profile.phone,
        "password": profile.password,
    }


def profile_from_dict(data: dict[str, Any]) -> UserProfile:
    data = _object(data, "profile")
    return UserProfile(
        name=_text(data, "name"),
        email=_text(data, "email"),
        phone=_text(data, "phone"),
        password=_text(data, "password"),
    )


def account_to_dict(record: AccountRecord) -> dict[str, Any]:
    return {
        "email": record.email,
        "password": record.password,
        "userData": profile_to_dict(record.profile),
    }


def account_from_dict(data: dict[str, Any]) -> AccountRecord:
    data = _object(data, "account")
    return AccountRecord(
        email=_text(data, "email"),
        password=_text(data, "password"),
        profile=profile_from_dict(data.get("userData") or {}),
    )


def booking_to_dict(booking: Booking) -> dict[str, Any]:
    return {
        "serviceName": booking.service_name,
        "province": booking.province,
        "dateTime": booking.scheduled_at.isoformat(),
        "notes": booking.notes,
        "userEmail": booking.owner_email,
        "isCancelled": booking.cancelled,
    }


def booking_from_dict(
    data: dict[str, Any], now: Callable[[], datetime] = datetime.now
) -> Booking:
    data = _object(data, "booking")
    return Booking(
        service_name=_text(data, "serviceName"),
        province=_text(data, "province"),
        scheduled_at=_timestamp(data, "dateTime", now),
        notes=_text(data, "notes"),
        owner_email=_text(data, "userEmail"),
        cancelled=_flag(data, "isCancelled"),
    )


def notification_to_dict(entry: NotificationEntry) -> dict[str, Any]:
    return {"message": entry.message, "createdAt": entry.created_at.isoformat()}


def notification_from_dict(
    data: dict[str, Any], now: Callable[[], datetime] = datetime.now
) -> NotificationEntry:
    data = _object(data, "notification")
    return NotificationEntry(
        message=_text(data, "message"),
        created_at=_timestamp(data, "createdAt", now),
    )


def dump_accounts(records: dict[str, AccountRecord]) -> str:
    return json.dumps({key: account_to_dict(record) for key, record in records.items()})


def dump_bookings(bookings: list[Booking]) -> str:
    return json.dumps([booking_to_dict(b) for b in bookings])


def dump_notifications(entries: list[NotificationEntry]) -> str:
    return json.dumps([notification_to_dict(n) for n in entries])


def _decode(key: str, raw: str, expected: type) -> Any:
    try:
        document = json.loads(raw)
    except ValueError as e:
        raise DeserializationError(malformed_document(key, str(e))) from e
    if not isinstance(document, expected):
        raise DeserializationError(
            malformed_document(key, f"expected a JSON {expected.__name__}")
        )
    return document


def load_accounts(raw: Optional[str]) -> dict[str, AccountRecord]:
    """Decode the account directory document.

    Raises:
        DeserializationError: If the document or any record is malformed
    """
    if raw is None:
        return {}
    document = _decode(USERS_KEY, raw, dict)
    try:
        return {key: account_from_dict(value) for key, value in document.items()}
    except (TypeError, ValueError) as e:
        raise DeserializationError(malformed_document(USERS_KEY, str(e))) from e


def load_bookings(raw: Optional[str], now: Callable[[], datetime] = datetime.now) -> list[Booking]:
    """Decode the bookings document.

    Raises:
        DeserializationError: If the document or any booking is malformed
    """
    if raw is None:
        return []
    document = _decode(BOOKINGS_KEY, raw, list)
    try:
        return [booking_from_dict(item, now) for item in document]
    except (TypeError, ValueError, OverflowError) as e:
        raise DeserializationError(malformed_document(BOOKINGS_KEY, str(e))) from e


def load_notifications(
    raw: Optional[str], now: Callable[[], datetime] = datetime.now
) -> list[NotificationEntry]:
    """Decode the notifications document.

    Raises:
        DeserializationError: If the document or any entry is malformed
    """
    if raw is None:
        return []
    document = _decode(NOTIFICATIONS_KEY, raw, list)
    try:
        return [notification_from_dict(item, now) for item in document]
    except (TypeError, ValueError, OverflowError) as e:
        raise DeserializationError(malformed_document(NOTIFICATIONS_KEY, str(e))) from e
