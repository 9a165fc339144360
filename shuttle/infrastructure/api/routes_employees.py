"""Employee endpoints — CRUD. Route membership changes go through /assignments."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession

from shuttle.adapters.persistence.database import get_session
from shuttle.adapters.persistence.repositories import SqlEmployeeRepository, SqlRouteRepository
from shuttle.application.use_cases.delete_entities import DeleteEmployeeUseCase
from shuttle.domain.entities.employee import Employee
from shuttle.domain.errors import AssignmentError
from shuttle.domain.value_objects.geo_point import GeoPoint
from shuttle.infrastructure.api.dependencies import (
    get_delete_employee_uc,
    get_employee_repo,
    get_route_repo,
)
from shuttle.infrastructure.api.errors import to_http_exception
from shuttle.infrastructure.api.schemas import EmployeeCreate, EmployeeUpdate
from shuttle.infrastructure.api.serializers import serialize_employee

router = APIRouter(prefix="/employees", tags=["employees"])


def _location(latitude: float | None, longitude: float | None) -> GeoPoint | None:
    if latitude is None or longitude is None:
        return None
    return GeoPoint(latitude=latitude, longitude=longitude)


@router.get("")
async def list_employees(
    employees: SqlEmployeeRepository = Depends(get_employee_repo),
    routes: SqlRouteRepository = Depends(get_route_repo),
):
    """All employees with their current route."""
    route_by_id = {r.id: r for r in await routes.get_all()}
    return [
        serialize_employee(e, route_by_id.get(e.route_id))
        for e in await employees.get_all()
    ]


@router.get("/{employee_id}")
async def get_employee(
    employee_id: int,
    employees: SqlEmployeeRepository = Depends(get_employee_repo),
):
    employee = await employees.get_by_id(employee_id)
    if not employee:
        raise HTTPException(status_code=404, detail="Employee not found")
    return serialize_employee(employee)


@router.post("", status_code=201)
async def create_employee(
    body: EmployeeCreate,
    employees: SqlEmployeeRepository = Depends(get_employee_repo),
    session: AsyncSession = Depends(get_session),
):
    employee = await employees.save(
        Employee(
            id=None,
            name=body.name,
            phone=body.phone,
            address=body.address,
            shift=body.shift,
            location=_location(body.latitude, body.longitude),
        )
    )
    await session.commit()
    return serialize_employee(employee)


@router.put("/{employee_id}")
async def update_employee(
    employee_id: int,
    body: EmployeeUpdate,
    employees: SqlEmployeeRepository = Depends(get_employee_repo),
    session: AsyncSession = Depends(get_session),
):
    employee = await employees.get_by_id(employee_id)
    if not employee:
        raise HTTPException(status_code=404, detail="Employee not found")

    patch = body.model_dump(exclude_unset=True)
    for field in ("name", "address", "shift"):
        if patch.get(field) is not None:
            setattr(employee, field, patch[field])
    if "phone" in patch:
        employee.phone = patch["phone"]
    if "latitude" in patch or "longitude" in patch:
        current = employee.location
        employee.location = _location(
            patch.get("latitude", current.latitude if current else None),
            patch.get("longitude", current.longitude if current else None),
        )

    await employees.update(employee)
    await session.commit()
    return serialize_employee(employee)


@router.delete("/{employee_id}", status_code=204)
async def delete_employee(
    employee_id: int,
    delete_uc: DeleteEmployeeUseCase = Depends(get_delete_employee_uc),
    session: AsyncSession = Depends(get_session),
):
    """Delete an employee together with their assignment."""
    try:
        await delete_uc.execute(employee_id)
    except AssignmentError as e:
        await session.rollback()
        raise to_http_exception(e)
    await session.commit()
    return Response(status_code=204)
