"""Route entity — a scheduled shuttle run with a fixed seat capacity."""

from dataclasses import dataclass, field

from shuttle.domain.value_objects.departure_time import shift_for_departure
from shuttle.domain.value_objects.enums import Shift
from shuttle.domain.value_objects.geo_point import GeoPoint


@dataclass
class Route:
    id: int | None
    name: str
    driver: str
    capacity: int
    departure_time: str
    stops: list[str] = field(default_factory=list)
    is_active: bool = True
    stop_locations: list[GeoPoint] = field(default_factory=list)
    # Derived: number of employees currently referencing this route.
    occupancy: int = 0

    @property
    def shift(self) -> Shift | None:
        return shift_for_departure(self.departure_time)

    @property
    def headroom(self) -> int:
        return max(self.capacity - self.occupancy, 0)

    def is_full(self) -> bool:
        return self.occupancy >= self.capacity
