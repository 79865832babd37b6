"""Date and time parsing utilities."""

from datetime import datetime, time
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta, MO, TU, WE, TH, FR, SA, SU

WEEKDAYS = {
    "monday": MO,
    "tuesday": TU,
    "wednesday": WE,
    "thursday": TH,
    "friday": FR,
    "saturday": SA,
    "sunday": SU,
}


def parse_datetime(value: str, now: Optional[datetime] = None) -> datetime:
    """Parse a date-time string into a naive local datetime.

    Supports absolute values understood by dateutil ("2025-03-01 14:30",
    "March 1 2025 2:30pm") and a relative day followed by an optional time:
    - "today 18:00", "tomorrow 9am"
    - "friday 10:30" (the next Friday, never today)

    Without a time, midnight is used.

    Args:
        value: Date-time string
        now: Reference time for relative values (defaults to now)

    Returns:
        Datetime without timezone information

    Raises:
        ValueError: If the string cannot be parsed
    """
    text = value.strip().lower()
    now = now or datetime.now()
    today = datetime.combine(now.date(), time())

    day_word, _, rest = text.partition(" ")
    base = None
    if day_word == "today":
        base = today
    elif day_word == "tomorrow":
        base = today + relativedelta(days=1)
    elif day_word in WEEKDAYS:
        base = today + relativedelta(days=1, weekday=WEEKDAYS[day_word](+1))

    try:
        if base is not None:
            if not rest.strip():
                return base
            return date_parser.parse(rest, default=base).replace(tzinfo=None)
        return date_parser.parse(text, default=today).replace(tzinfo=None)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date/time '{value}': {e}")
