"""Port interface for employee persistence."""

from abc import ABC, abstractmethod

from shuttle.domain.entities.employee import Employee


class EmployeeRepository(ABC):
    @abstractmethod
    async def save(self, employee: Employee) -> Employee:
        ...

    @abstractmethod
    async def update(self, employee: Employee) -> Employee:
        """Persist profile fields. ``route_id`` is only changed via set_route()."""
        ...

    @abstractmethod
    async def get_by_id(self, employee_id: int) -> Employee | None:
        ...

    @abstractmethod
    async def get_all(self) -> list[Employee]:
        ...

    @abstractmethod
    async def get_unassigned(self) -> list[Employee]:
        """Return employees with no route, ordered by id ascending."""
        ...

    @abstractmethod
    async def set_route(self, employee_id: int, route_id: int | None) -> None:
        ...

    @abstractmethod
    async def clear_route_for(self, route_id: int) -> int:
        """Set route_id to None on every employee of the route. Returns the count."""
        ...

    @abstractmethod
    async def delete(self, employee_id: int) -> bool:
        ...

    @abstractmethod
    async def count(self) -> int:
        ...

    @abstractmethod
    async def count_assigned(self) -> int:
        ...
