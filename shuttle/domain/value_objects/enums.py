"""Domain enums — pure Python, no external dependencies."""

from enum import Enum


class Shift(str, Enum):
    MORNING = "morning"
    EVENING = "evening"


class VehicleStatus(str, Enum):
    ACTIVE = "active"
    MAINTENANCE = "maintenance"
    INACTIVE = "inactive"


class AssignmentType(str, Enum):
    AUTOMATIC = "automatic"
    MANUAL = "manual"
