"""Employee entity — a person who rides a shuttle route."""

from dataclasses import dataclass

from shuttle.domain.value_objects.enums import Shift
from shuttle.domain.value_objects.geo_point import GeoPoint


@dataclass
class Employee:
    id: int | None
    name: str
    address: str
    shift: Shift
    phone: str | None = None
    location: GeoPoint | None = None
    route_id: int | None = None

    def is_assigned(self) -> bool:
        return self.route_id is not None

    def is_location_known(self) -> bool:
        return self.location is not None
