"""Assignment entity — an employee riding a route."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from shuttle.domain.entities.employee import Employee
from shuttle.domain.entities.route import Route
from shuttle.domain.value_objects.enums import AssignmentType


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Assignment:
    id: int | None
    employee_id: int
    route_id: int
    assignment_type: AssignmentType
    assigned_at: datetime = field(default_factory=_utcnow)


@dataclass
class AssignmentDetails:
    """An assignment enriched with employee and route snapshots."""

    assignment: Assignment
    employee: Employee
    route: Route
