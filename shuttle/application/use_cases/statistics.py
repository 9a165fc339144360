"""StatisticsUseCase — dashboard counters and assignment efficiency."""

from __future__ import annotations

import math
from dataclasses import dataclass

from shuttle.application.ports.employee_repo import EmployeeRepository
from shuttle.application.ports.route_repo import RouteRepository
from shuttle.application.ports.vehicle_repo import VehicleRepository


@dataclass(frozen=True)
class Statistics:
    total_employees: int
    active_routes: int
    total_vehicles: int
    efficiency: int


def assignment_efficiency(assigned: int, total: int) -> int:
    """Percentage of employees with a route, rounded half-up; 0 without employees."""
    if total <= 0:
        return 0
    return math.floor(assigned / total * 100 + 0.5)


class StatisticsUseCase:
    def __init__(
        self,
        employee_repo: EmployeeRepository,
        route_repo: RouteRepository,
        vehicle_repo: VehicleRepository,
    ):
        self._employees = employee_repo
        self._routes = route_repo
        self._vehicles = vehicle_repo

    async def execute(self) -> Statistics:
        total = await self._employees.count()
        assigned = await self._employees.count_assigned()
        return Statistics(
            total_employees=total,
            active_routes=await self._routes.count_active(),
            total_vehicles=await self._vehicles.count(),
            efficiency=assignment_efficiency(assigned, total),
        )
