"""Vehicle entity — read-only context for the assignment engine."""

from dataclasses import dataclass

from shuttle.domain.value_objects.enums import VehicleStatus


@dataclass
class Vehicle:
    id: int | None
    license_plate: str
    model: str
    capacity: int
    route_id: int | None = None
    status: VehicleStatus = VehicleStatus.ACTIVE
    notes: str | None = None
