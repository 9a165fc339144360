"""Tests for ManualAssignUseCase and RemoveAssignmentUseCase."""

import pytest

from shuttle.application.use_cases.manual_assign import (
    ManualAssignUseCase,
    RemoveAssignmentUseCase,
)
from shuttle.domain.errors import (
    AssignmentNotFoundError,
    CapacityExceededError,
    EmployeeNotFoundError,
    InvalidIdentifierError,
    RouteNotFoundError,
)
from shuttle.domain.value_objects.enums import AssignmentType, Shift


def _assign_uc(store) -> ManualAssignUseCase:
    return ManualAssignUseCase(store.employee_repo, store.route_repo, store.assignment_repo)


def _remove_uc(store) -> RemoveAssignmentUseCase:
    return RemoveAssignmentUseCase(store.employee_repo, store.assignment_repo)


@pytest.mark.asyncio
async def test_manual_assign_creates_manual_record(store):
    employee = store.add_employee()
    route = store.add_route(departure_time="18:00")  # shift mismatch is allowed

    assignment = await _assign_uc(store).execute(employee.id, route.id)

    assert assignment.id is not None
    assert assignment.assignment_type is AssignmentType.MANUAL
    assert store.employees[employee.id].route_id == route.id
    assert store.route_repo.lock_requests == [route.id]


@pytest.mark.asyncio
async def test_manual_assign_full_route(store):
    route = store.add_route(capacity=1)
    rider = store.add_employee()
    store.add_assignment(rider.id, route.id)
    newcomer = store.add_employee()

    with pytest.raises(CapacityExceededError) as exc_info:
        await _assign_uc(store).execute(newcomer.id, route.id)

    assert exc_info.value.route_id == route.id
    assert exc_info.value.capacity == 1
    assert store.employees[newcomer.id].route_id is None
    assert len(store.assignments) == 1


@pytest.mark.asyncio
async def test_manual_assign_supersedes_previous(store):
    r1 = store.add_route()
    r2 = store.add_route()
    employee = store.add_employee()
    old = store.add_assignment(employee.id, r1.id, AssignmentType.AUTOMATIC)

    new = await _assign_uc(store).execute(employee.id, r2.id)

    assert old.id not in store.assignments
    records = [a for a in store.assignments.values() if a.employee_id == employee.id]
    assert [a.id for a in records] == [new.id]
    assert store.employees[employee.id].route_id == r2.id
    assert store.occupancy(r1.id) == 0


@pytest.mark.asyncio
async def test_manual_reassign_same_full_route(store):
    """An employee already riding a full route can be re-assigned to it."""
    route = store.add_route(capacity=1)
    employee = store.add_employee()
    store.add_assignment(employee.id, route.id, AssignmentType.AUTOMATIC)

    assignment = await _assign_uc(store).execute(employee.id, route.id)

    assert assignment.assignment_type is AssignmentType.MANUAL
    assert len(store.assignments) == 1
    assert store.occupancy(route.id) == 1


@pytest.mark.asyncio
async def test_manual_assign_unknown_employee(store):
    route = store.add_route()
    with pytest.raises(EmployeeNotFoundError):
        await _assign_uc(store).execute(99, route.id)


@pytest.mark.asyncio
async def test_manual_assign_unknown_route(store):
    employee = store.add_employee()
    with pytest.raises(RouteNotFoundError):
        await _assign_uc(store).execute(employee.id, 99)
    assert store.employees[employee.id].route_id is None


@pytest.mark.asyncio
async def test_manual_assign_locks_route_before_reading_employee(store):
    employee = store.add_employee()
    route = store.add_route()

    await _assign_uc(store).execute(employee.id, route.id)

    assert store.events[:2] == ["lock_route", "read_employee"]


@pytest.mark.asyncio
async def test_manual_assign_unknown_route_reads_no_employee(store):
    employee = store.add_employee()
    with pytest.raises(RouteNotFoundError):
        await _assign_uc(store).execute(employee.id, 99)
    assert "read_employee" not in store.events


@pytest.mark.asyncio
@pytest.mark.parametrize("employee_id, route_id", [(0, 1), (1, -3), ("1", 1), (1, 2.0), (True, 1)])
async def test_manual_assign_invalid_ids(store, employee_id, route_id):
    store.add_employee()
    store.add_route()
    with pytest.raises(InvalidIdentifierError):
        await _assign_uc(store).execute(employee_id, route_id)
    assert store.assignments == {}


@pytest.mark.asyncio
async def test_remove_assignment(store):
    route = store.add_route()
    employee = store.add_employee()
    store.add_assignment(employee.id, route.id)

    assert await _remove_uc(store).execute(employee.id, route.id) is True

    assert store.assignments == {}
    assert store.employees[employee.id].route_id is None


@pytest.mark.asyncio
async def test_remove_missing_pairing_changes_nothing(store):
    r1 = store.add_route()
    r2 = store.add_route()
    employee = store.add_employee(shift=Shift.EVENING)
    store.add_assignment(employee.id, r1.id)
    before = dict(store.assignments)

    with pytest.raises(AssignmentNotFoundError) as exc_info:
        await _remove_uc(store).execute(employee.id, r2.id)

    assert exc_info.value.employee_id == employee.id
    assert exc_info.value.route_id == r2.id
    assert store.assignments == before
    assert store.employees[employee.id].route_id == r1.id
