"""AutoAssignUseCase — weighted bulk matching of unassigned employees to routes."""

from __future__ import annotations

import logging

from shuttle.application.ports.assignment_repo import AssignmentRepository
from shuttle.application.ports.employee_repo import EmployeeRepository
from shuttle.application.ports.route_repo import RouteRepository
from shuttle.application.use_cases.assignment_commit import commit_assignment
from shuttle.domain.entities.assignment import Assignment
from shuttle.domain.policies.candidate_scoring import (
    DEFAULT_PROXIMITY_RADIUS_KM,
    select_best_route,
)
from shuttle.domain.value_objects.enums import AssignmentType
from shuttle.domain.value_objects.weights import AssignmentWeights

logger = logging.getLogger(__name__)


class AutoAssignUseCase:
    """Assign every unassigned employee to its best feasible active route."""

    def __init__(
        self,
        employee_repo: EmployeeRepository,
        route_repo: RouteRepository,
        assignment_repo: AssignmentRepository,
        proximity_radius_km: float = DEFAULT_PROXIMITY_RADIUS_KM,
    ):
        self._employees = employee_repo
        self._routes = route_repo
        self._assignments = assignment_repo
        self._radius_km = proximity_radius_km

    async def execute(self, weights: AssignmentWeights) -> list[Assignment]:
        """Run one auto-assignment batch.

        Pipeline:
        1. Lock active routes, then load unassigned employees
        2. Walk employees by ascending id
        3. Score feasible routes against the in-flight occupancy
        4. Commit the winner and consume one seat before the next employee

        Employees with no feasible route are skipped. Returns the created
        assignments in creation order.
        """
        if not isinstance(weights, AssignmentWeights):
            raise TypeError("weights must be an AssignmentWeights instance")

        # Route locks come first so the employee read sees committed batches
        routes = await self._routes.get_active(for_update=True)
        employees = sorted(await self._employees.get_unassigned(), key=lambda e: e.id)
        logger.info(
            "Auto-assign: %d unassigned employees, %d active routes (weights p=%g c=%g s=%g)",
            len(employees), len(routes),
            weights.proximity_weight, weights.capacity_weight, weights.shift_weight,
        )

        # Working set: later employees in this batch see earlier commits
        occupancy = {r.id: r.occupancy for r in routes}
        created: list[Assignment] = []
        skipped = 0

        for employee in employees:
            best = select_best_route(
                employee, routes, weights, occupancy, self._radius_km
            )
            if best is None:
                skipped += 1
                logger.warning("Employee %d (%s): no feasible route, skipped", employee.id, employee.name)
                continue

            assignment = await commit_assignment(
                self._assignments, self._employees,
                employee.id, best.route.id, AssignmentType.AUTOMATIC,
            )
            occupancy[best.route.id] += 1
            employee.route_id = best.route.id
            created.append(assignment)

            logger.info(
                "Employee %d → Route %d %s (score=%.2f, seats %d/%d)",
                employee.id, best.route.id, best.route.name, best.total,
                occupancy[best.route.id], best.route.capacity,
            )

        logger.info("Auto-assign complete: %d assigned, %d skipped", len(created), skipped)
        return created
