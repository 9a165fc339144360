"""ListAssignmentsUseCase — enriched assignment listings."""

from __future__ import annotations

from shuttle.application.ports.assignment_repo import AssignmentRepository
from shuttle.domain.entities.assignment import AssignmentDetails


class ListAssignmentsUseCase:
    def __init__(self, assignment_repo: AssignmentRepository):
        self._assignments = assignment_repo

    async def execute(self, route_id: int | None = None) -> list[AssignmentDetails]:
        """All assignments, or only those of *route_id*, with employee and route snapshots."""
        return await self._assignments.get_details(route_id)
