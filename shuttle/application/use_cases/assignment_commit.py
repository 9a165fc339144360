"""Commit / invalidate primitives shared by every assignment entry point.

They keep the assignment table and ``Employee.route_id`` in step and enforce
one assignment per employee. Callers run them inside a single transaction.
"""

from __future__ import annotations

import logging

from shuttle.application.ports.assignment_repo import AssignmentRepository
from shuttle.application.ports.employee_repo import EmployeeRepository
from shuttle.domain.entities.assignment import Assignment
from shuttle.domain.errors import AssignmentNotFoundError, InvalidIdentifierError
from shuttle.domain.value_objects.enums import AssignmentType

logger = logging.getLogger(__name__)


def require_positive_id(field: str, value: object) -> int:
    """Validate an entity identifier before it reaches a repository."""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidIdentifierError(field, value)
    return value


async def commit_assignment(
    assignments: AssignmentRepository,
    employees: EmployeeRepository,
    employee_id: int,
    route_id: int,
    assignment_type: AssignmentType,
) -> Assignment:
    """Record *employee_id* → *route_id*, superseding any prior assignment."""
    superseded = await assignments.delete_by_employee(employee_id)
    if superseded:
        logger.info("Employee %d: superseded %d previous assignment(s)", employee_id, superseded)

    assignment = await assignments.save(
        Assignment(
            id=None,
            employee_id=employee_id,
            route_id=route_id,
            assignment_type=assignment_type,
        )
    )
    await employees.set_route(employee_id, route_id)
    return assignment


async def invalidate_assignment(
    assignments: AssignmentRepository,
    employees: EmployeeRepository,
    employee_id: int,
    route_id: int,
) -> None:
    """Remove the exact pairing and clear the employee's route.

    Raises:
        AssignmentNotFoundError: if no such pairing exists (nothing changes).
    """
    if not await assignments.delete(employee_id, route_id):
        raise AssignmentNotFoundError(employee_id, route_id)

    employee = await employees.get_by_id(employee_id)
    if employee is not None and employee.route_id == route_id:
        await employees.set_route(employee_id, None)
