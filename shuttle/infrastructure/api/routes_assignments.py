"""Assignment endpoints — auto / manual assignment, removal, listings."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from shuttle.adapters.persistence.database import get_session
from shuttle.application.use_cases.auto_assign import AutoAssignUseCase
from shuttle.application.use_cases.list_assignments import ListAssignmentsUseCase
from shuttle.application.use_cases.manual_assign import (
    ManualAssignUseCase,
    RemoveAssignmentUseCase,
)
from shuttle.domain.errors import AssignmentError
from shuttle.domain.value_objects.weights import AssignmentWeights
from shuttle.infrastructure.api.dependencies import (
    get_auto_assign_uc,
    get_list_assignments_uc,
    get_manual_assign_uc,
    get_remove_assignment_uc,
)
from shuttle.infrastructure.api.errors import to_http_exception
from shuttle.infrastructure.api.schemas import AutoAssignRequest, ManualAssignRequest
from shuttle.infrastructure.api.serializers import (
    serialize_assignment,
    serialize_assignment_details,
)

router = APIRouter(prefix="/assignments", tags=["assignments"])


@router.get("")
async def list_assignments(
    list_uc: ListAssignmentsUseCase = Depends(get_list_assignments_uc),
):
    """All assignments with employee and route snapshots."""
    details = await list_uc.execute()
    return [serialize_assignment_details(d) for d in details]


@router.get("/route/{route_id}")
async def list_route_assignments(
    route_id: int,
    list_uc: ListAssignmentsUseCase = Depends(get_list_assignments_uc),
):
    details = await list_uc.execute(route_id)
    return [serialize_assignment_details(d) for d in details]


@router.post("/auto")
async def auto_assign(
    body: AutoAssignRequest,
    auto_uc: AutoAssignUseCase = Depends(get_auto_assign_uc),
    session: AsyncSession = Depends(get_session),
):
    """Assign every unassigned employee to its best feasible route."""
    try:
        weights = AssignmentWeights(
            proximity_weight=body.proximity_weight,
            capacity_weight=body.capacity_weight,
            shift_weight=body.shift_weight,
        )
        created = await auto_uc.execute(weights)
    except AssignmentError as e:
        await session.rollback()
        raise to_http_exception(e)
    await session.commit()
    return [serialize_assignment(a) for a in created]


@router.post("", status_code=201)
async def manual_assign(
    body: ManualAssignRequest,
    manual_uc: ManualAssignUseCase = Depends(get_manual_assign_uc),
    session: AsyncSession = Depends(get_session),
):
    """Assign one employee to one route, replacing any previous assignment."""
    try:
        assignment = await manual_uc.execute(body.employee_id, body.route_id)
    except AssignmentError as e:
        await session.rollback()
        raise to_http_exception(e)
    await session.commit()
    return serialize_assignment(assignment)


@router.delete("/{employee_id}/{route_id}", status_code=204)
async def remove_assignment(
    employee_id: int,
    route_id: int,
    remove_uc: RemoveAssignmentUseCase = Depends(get_remove_assignment_uc),
    session: AsyncSession = Depends(get_session),
):
    try:
        await remove_uc.execute(employee_id, route_id)
    except AssignmentError as e:
        await session.rollback()
        raise to_http_exception(e)
    await session.commit()
    return Response(status_code=204)
