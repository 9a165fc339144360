"""Port interface for route persistence."""

from abc import ABC, abstractmethod

from shuttle.domain.entities.employee import Employee
from shuttle.domain.entities.route import Route
from shuttle.domain.value_objects.geo_point import GeoPoint


class RouteRepository(ABC):
    @abstractmethod
    async def save(self, route: Route) -> Route:
        ...

    @abstractmethod
    async def update(self, route: Route) -> Route:
        ...

    @abstractmethod
    async def set_stop_locations(self, route_id: int, locations: list[GeoPoint]) -> None:
        """Store geocoded stop coordinates without touching any other column."""
        ...

    @abstractmethod
    async def get_by_id(self, route_id: int, for_update: bool = False) -> Route | None:
        """Return the route with live occupancy.

        With ``for_update=True`` the route row stays locked until the
        surrounding transaction ends, serializing concurrent seat changes.
        """
        ...

    @abstractmethod
    async def get_all(self) -> list[Route]:
        """All routes with live occupancy, ordered by id."""
        ...

    @abstractmethod
    async def get_active(self, for_update: bool = False) -> list[Route]:
        """Active routes with live occupancy, ordered by id."""
        ...

    @abstractmethod
    async def get_riders(self, route_id: int) -> list[Employee]:
        ...

    @abstractmethod
    async def delete(self, route_id: int) -> bool:
        ...

    @abstractmethod
    async def count_active(self) -> int:
        ...
