"""CSV column normalization — handles BOM, trailing spaces, encoding quirks."""

from __future__ import annotations

import re

from shuttle.domain.value_objects.enums import Shift, VehicleStatus

# Shift labels seen in exports (English / Russian / Kazakh)
SHIFT_ALIASES: dict[str, Shift] = {
    "morning": Shift.MORNING,
    "утро": Shift.MORNING,
    "утренняя": Shift.MORNING,
    "таңертеңгі": Shift.MORNING,
    "evening": Shift.EVENING,
    "вечер": Shift.EVENING,
    "вечерняя": Shift.EVENING,
    "кешкі": Shift.EVENING,
}

STATUS_ALIASES: dict[str, VehicleStatus] = {
    "active": VehicleStatus.ACTIVE,
    "активен": VehicleStatus.ACTIVE,
    "maintenance": VehicleStatus.MAINTENANCE,
    "обслуживание": VehicleStatus.MAINTENANCE,
    "inactive": VehicleStatus.INACTIVE,
    "неактивен": VehicleStatus.INACTIVE,
}

_TRUE_VALUES = {"1", "true", "yes", "да", "иә", "y"}


def normalize_column_name(name: str) -> str:
    """Normalize a CSV column name.

    - Strips leading/trailing whitespace
    - Removes BOM characters (\\ufeff)
    - Replaces multiple spaces / non-breaking spaces with single underscore
    - Lowercases
    - Strips non-alphanumeric characters (except underscore)
    """
    name = name.replace("\ufeff", "")
    name = name.strip()
    name = re.sub(r"[\s\u00a0]+", "_", name)
    name = name.lower()
    # Keep Cyrillic letters: \w is unicode-aware
    name = re.sub(r"[^\w]", "", name, flags=re.UNICODE)
    return name


def clean_string(value: str | None) -> str | None:
    """Strip whitespace and return None for empty strings."""
    if value is None:
        return None
    value = value.strip()
    return value if value else None


def parse_stops(raw: str | None) -> list[str]:
    """Split ``"ул. Ленина | пр. Советский"`` into an ordered list of stop addresses.

    Stops are separated by ``|``; commas are kept because addresses contain them.
    """
    if not raw:
        return []
    return [p.strip() for p in raw.split("|") if p.strip()]


def parse_shift(raw: str | None) -> Shift | None:
    if not raw:
        return None
    return SHIFT_ALIASES.get(raw.strip().lower())


def parse_status(raw: str | None) -> VehicleStatus:
    if not raw:
        return VehicleStatus.ACTIVE
    return STATUS_ALIASES.get(raw.strip().lower(), VehicleStatus.ACTIVE)


def parse_bool(raw: str | None, default: bool = True) -> bool:
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUE_VALUES
