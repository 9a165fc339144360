"""Port interface for vehicle persistence."""

from abc import ABC, abstractmethod

from shuttle.domain.entities.vehicle import Vehicle


class VehicleRepository(ABC):
    @abstractmethod
    async def save(self, vehicle: Vehicle) -> Vehicle:
        ...

    @abstractmethod
    async def update(self, vehicle: Vehicle) -> Vehicle:
        ...

    @abstractmethod
    async def get_by_id(self, vehicle_id: int) -> Vehicle | None:
        ...

    @abstractmethod
    async def get_by_route(self, route_id: int) -> list[Vehicle]:
        ...

    @abstractmethod
    async def get_all(self) -> list[Vehicle]:
        ...

    @abstractmethod
    async def clear_route_for(self, route_id: int) -> int:
        ...

    @abstractmethod
    async def delete(self, vehicle_id: int) -> bool:
        ...

    @abstractmethod
    async def count(self) -> int:
        ...
