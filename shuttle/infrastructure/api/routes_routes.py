"""Route endpoints — CRUD with occupancy, cascade delete, stop geocoding."""

from __future__ import annotations

from collections import defaultdict

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession

from shuttle.adapters.persistence.database import get_session
from shuttle.adapters.persistence.repositories import (
    SqlEmployeeRepository,
    SqlRouteRepository,
    SqlVehicleRepository,
)
from shuttle.application.use_cases.delete_entities import DeleteRouteUseCase
from shuttle.application.use_cases.resolve_route_stops import ResolveRouteStopsUseCase
from shuttle.domain.entities.route import Route
from shuttle.domain.errors import AssignmentError
from shuttle.infrastructure.api.dependencies import (
    get_delete_route_uc,
    get_employee_repo,
    get_resolve_stops_uc,
    get_route_repo,
    get_vehicle_repo,
)
from shuttle.infrastructure.api.errors import to_http_exception
from shuttle.infrastructure.api.schemas import RouteCreate, RouteUpdate
from shuttle.infrastructure.api.serializers import serialize_route

router = APIRouter(prefix="/routes", tags=["routes"])


@router.get("")
async def list_routes(
    routes: SqlRouteRepository = Depends(get_route_repo),
    employees: SqlEmployeeRepository = Depends(get_employee_repo),
    vehicles: SqlVehicleRepository = Depends(get_vehicle_repo),
):
    """All routes with occupancy, riders and attached vehicles."""
    riders_by_route: dict[int, list] = defaultdict(list)
    for e in await employees.get_all():
        if e.is_assigned():
            riders_by_route[e.route_id].append(e)
    vehicles_by_route: dict[int, list] = defaultdict(list)
    for v in await vehicles.get_all():
        if v.route_id is not None:
            vehicles_by_route[v.route_id].append(v)

    return [
        serialize_route(r, riders=riders_by_route[r.id], vehicles=vehicles_by_route[r.id])
        for r in await routes.get_all()
    ]


@router.get("/{route_id}")
async def get_route(
    route_id: int,
    routes: SqlRouteRepository = Depends(get_route_repo),
    vehicles: SqlVehicleRepository = Depends(get_vehicle_repo),
):
    route = await routes.get_by_id(route_id)
    if not route:
        raise HTTPException(status_code=404, detail="Route not found")
    return serialize_route(
        route,
        riders=await routes.get_riders(route_id),
        vehicles=await vehicles.get_by_route(route_id),
    )


@router.post("", status_code=201)
async def create_route(
    body: RouteCreate,
    routes: SqlRouteRepository = Depends(get_route_repo),
    session: AsyncSession = Depends(get_session),
):
    route = await routes.save(
        Route(
            id=None,
            name=body.name,
            driver=body.driver,
            capacity=body.capacity,
            departure_time=body.departure_time,
            stops=body.stops,
            is_active=body.is_active,
        )
    )
    await session.commit()
    return serialize_route(route)


@router.put("/{route_id}")
async def update_route(
    route_id: int,
    body: RouteUpdate,
    routes: SqlRouteRepository = Depends(get_route_repo),
    session: AsyncSession = Depends(get_session),
):
    route = await routes.get_by_id(route_id, for_update=True)
    if not route:
        raise HTTPException(status_code=404, detail="Route not found")

    patch = body.model_dump(exclude_unset=True)
    if patch.get("capacity") is not None and patch["capacity"] < route.occupancy:
        raise HTTPException(
            status_code=409,
            detail=f"Route has {route.occupancy} riders; capacity cannot drop below that",
        )
    for field, value in patch.items():
        if value is not None:
            setattr(route, field, value)
    if "stops" in patch:
        # Coordinates belong to the old stop list
        route.stop_locations = []

    await routes.update(route)
    await session.commit()
    return serialize_route(route)


@router.delete("/{route_id}", status_code=204)
async def delete_route(
    route_id: int,
    delete_uc: DeleteRouteUseCase = Depends(get_delete_route_uc),
    session: AsyncSession = Depends(get_session),
):
    """Delete a route; riders and vehicles are detached, assignments dropped."""
    try:
        await delete_uc.execute(route_id)
    except AssignmentError as e:
        await session.rollback()
        raise to_http_exception(e)
    await session.commit()
    return Response(status_code=204)


@router.post("/{route_id}/resolve-stops")
async def resolve_route_stops(
    route_id: int,
    resolve_uc: ResolveRouteStopsUseCase = Depends(get_resolve_stops_uc),
    session: AsyncSession = Depends(get_session),
):
    """Geocode the route's stops so proximity scoring can use real distances."""
    try:
        route = await resolve_uc.execute(route_id)
    except AssignmentError as e:
        await session.rollback()
        raise to_http_exception(e)
    await session.commit()
    return serialize_route(route)
