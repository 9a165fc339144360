"""Departure time parsing and shift inference for routes.

Departure times are stored as zero-padded ``"HH:MM"`` strings. They are
parsed into :class:`datetime.time` and compared numerically, so a legacy
``"9:00"`` value is still read as a morning departure.
"""

from __future__ import annotations

import re
from datetime import time

from shuttle.domain.value_objects.enums import Shift

NOON = time(12, 0)

_HHMM = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*$")


def parse_departure_time(raw: str) -> time:
    """Parse ``"HH:MM"`` (24-hour) into a time of day.

    Raises:
        ValueError: if the string is not a valid 24-hour wall-clock time.
    """
    match = _HHMM.match(raw or "")
    if not match:
        raise ValueError(f"Invalid departure time {raw!r}, expected HH:MM")
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise ValueError(f"Invalid departure time {raw!r}, expected HH:MM")
    return time(hour, minute)


def normalize_departure_time(raw: str) -> str:
    """Return the canonical zero-padded ``"HH:MM"`` form."""
    return parse_departure_time(raw).strftime("%H:%M")


def shift_for_departure(raw: str) -> Shift | None:
    """Infer shift orientation: before 12:00 → morning, otherwise evening.

    Returns None for an unparseable value.
    """
    try:
        departure = parse_departure_time(raw)
    except ValueError:
        return None
    return Shift.MORNING if departure < NOON else Shift.EVENING
