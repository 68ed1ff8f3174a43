from __future__ import annotations

import re
from datetime import date, datetime

from ..core.exceptions import ValidationError

_CLOCK_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})(?::\d{2})?\s*([AaPp][Mm])?\s*$")

MINUTES_PER_DAY = 24 * 60


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD") from None


def parse_clock_time(value: str) -> int:
    """Return minutes from midnight for "09:00", "9:00 AM" or "06:30 PM"."""
    m = _CLOCK_RE.match(value or "")
    if not m:
        raise ValidationError(f"Invalid time {value!r}")

    hours, minutes, modifier = int(m.group(1)), int(m.group(2)), m.group(3)
    if minutes > 59:
        raise ValidationError(f"Invalid time {value!r}")

    if modifier:
        if not 1 <= hours <= 12:
            raise ValidationError(f"Invalid time {value!r}")
        modifier = modifier.upper()
        if hours == 12:
            hours = 0
        if modifier == "PM":
            hours += 12
    elif hours > 23:
        raise ValidationError(f"Invalid time {value!r}")

    return hours * 60 + minutes


def minutes_between(start: int, end: int) -> int:
    """Minutes from start to end, wrapping past midnight for overnight spans."""
    if end < start:
        end += MINUTES_PER_DAY
    return end - start


def to_epoch_ms(value: datetime) -> int:
    return int(value.timestamp() * 1000)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
