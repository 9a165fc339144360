"""Cascading deletes for routes and employees.

Each use case runs its steps inside the caller's transaction; the API layer
commits once at the end, so a failure part-way rolls every step back.
"""

from __future__ import annotations

import logging

from shuttle.application.ports.assignment_repo import AssignmentRepository
from shuttle.application.ports.employee_repo import EmployeeRepository
from shuttle.application.ports.route_repo import RouteRepository
from shuttle.application.ports.vehicle_repo import VehicleRepository
from shuttle.domain.errors import EmployeeNotFoundError, RouteNotFoundError

logger = logging.getLogger(__name__)


class DeleteRouteUseCase:
    def __init__(
        self,
        route_repo: RouteRepository,
        employee_repo: EmployeeRepository,
        vehicle_repo: VehicleRepository,
        assignment_repo: AssignmentRepository,
    ):
        self._routes = route_repo
        self._employees = employee_repo
        self._vehicles = vehicle_repo
        self._assignments = assignment_repo

    async def execute(self, route_id: int) -> None:
        """Delete a route, detaching its riders and vehicles and dropping its assignments."""
        route = await self._routes.get_by_id(route_id, for_update=True)
        if route is None:
            raise RouteNotFoundError(route_id)

        dropped = await self._assignments.delete_by_route(route_id)
        riders = await self._employees.clear_route_for(route_id)
        vehicles = await self._vehicles.clear_route_for(route_id)
        await self._routes.delete(route_id)

        logger.info(
            "Deleted route %d (%s): %d assignments, %d riders, %d vehicles detached",
            route_id, route.name, dropped, riders, vehicles,
        )


class DeleteEmployeeUseCase:
    def __init__(
        self,
        employee_repo: EmployeeRepository,
        assignment_repo: AssignmentRepository,
    ):
        self._employees = employee_repo
        self._assignments = assignment_repo

    async def execute(self, employee_id: int) -> None:
        employee = await self._employees.get_by_id(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)

        await self._assignments.delete_by_employee(employee_id)
        await self._employees.delete(employee_id)
        logger.info("Deleted employee %d (%s)", employee_id, employee.name)
