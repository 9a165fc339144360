"""Manual assignment and removal of single (employee, route) pairings."""

from __future__ import annotations

import logging

from shuttle.application.ports.assignment_repo import AssignmentRepository
from shuttle.application.ports.employee_repo import EmployeeRepository
from shuttle.application.ports.route_repo import RouteRepository
from shuttle.application.use_cases.assignment_commit import (
    commit_assignment,
    invalidate_assignment,
    require_positive_id,
)
from shuttle.domain.entities.assignment import Assignment
from shuttle.domain.errors import (
    CapacityExceededError,
    EmployeeNotFoundError,
    RouteNotFoundError,
)
from shuttle.domain.value_objects.enums import AssignmentType

logger = logging.getLogger(__name__)


class ManualAssignUseCase:
    """Place one employee on one route, bypassing scoring."""

    def __init__(
        self,
        employee_repo: EmployeeRepository,
        route_repo: RouteRepository,
        assignment_repo: AssignmentRepository,
    ):
        self._employees = employee_repo
        self._routes = route_repo
        self._assignments = assignment_repo

    async def execute(self, employee_id: int, route_id: int) -> Assignment:
        """Assign *employee_id* to *route_id*.

        A previous assignment of the employee is replaced. Re-assigning an
        employee to the route they already ride does not need a free seat.

        Raises:
            InvalidIdentifierError: ids are not positive integers.
            EmployeeNotFoundError / RouteNotFoundError: unknown ids.
            CapacityExceededError: the route has no free seat.
        """
        require_positive_id("employee_id", employee_id)
        require_positive_id("route_id", route_id)

        route = await self._routes.get_by_id(route_id, for_update=True)
        if route is None:
            raise RouteNotFoundError(route_id)

        # Read under the route lock so a concurrent assign of the same employee is seen
        employee = await self._employees.get_by_id(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)

        if employee.route_id != route_id and route.is_full():
            raise CapacityExceededError(route_id, route.capacity, route.occupancy)

        assignment = await commit_assignment(
            self._assignments, self._employees,
            employee_id, route_id, AssignmentType.MANUAL,
        )
        logger.info(
            "Manual assignment: employee %d → route %d (previous route: %s)",
            employee_id, route_id, employee.route_id,
        )
        return assignment


class RemoveAssignmentUseCase:
    def __init__(
        self,
        employee_repo: EmployeeRepository,
        assignment_repo: AssignmentRepository,
    ):
        self._employees = employee_repo
        self._assignments = assignment_repo

    async def execute(self, employee_id: int, route_id: int) -> bool:
        """Remove the pairing. Raises AssignmentNotFoundError if it does not exist."""
        require_positive_id("employee_id", employee_id)
        require_positive_id("route_id", route_id)

        await invalidate_assignment(
            self._assignments, self._employees, employee_id, route_id
        )
        logger.info("Removed assignment: employee %d from route %d", employee_id, route_id)
        return True
