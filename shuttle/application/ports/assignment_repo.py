"""Port interface for assignment persistence."""

from abc import ABC, abstractmethod

from shuttle.domain.entities.assignment import Assignment, AssignmentDetails


class AssignmentRepository(ABC):
    @abstractmethod
    async def save(self, assignment: Assignment) -> Assignment:
        ...

    @abstractmethod
    async def delete(self, employee_id: int, route_id: int) -> bool:
        """Delete the exact (employee, route) pairing. Returns False if absent."""
        ...

    @abstractmethod
    async def delete_by_employee(self, employee_id: int) -> int:
        ...

    @abstractmethod
    async def delete_by_route(self, route_id: int) -> int:
        ...

    @abstractmethod
    async def get_details(self, route_id: int | None = None) -> list[AssignmentDetails]:
        """Assignments joined with their employee and route, ordered by id."""
        ...
