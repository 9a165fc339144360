"""Vehicle endpoints — CRUD."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shuttle.adapters.persistence.database import get_session
from shuttle.adapters.persistence.repositories import SqlRouteRepository, SqlVehicleRepository
from shuttle.domain.entities.vehicle import Vehicle
from shuttle.infrastructure.api.dependencies import get_route_repo, get_vehicle_repo
from shuttle.infrastructure.api.schemas import VehicleCreate, VehicleUpdate
from shuttle.infrastructure.api.serializers import serialize_vehicle

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/vehicles", tags=["vehicles"])


async def _require_route(routes: SqlRouteRepository, route_id: int | None) -> None:
    if route_id is not None and await routes.get_by_id(route_id) is None:
        raise HTTPException(status_code=404, detail="Route not found")


@router.get("")
async def list_vehicles(vehicles: SqlVehicleRepository = Depends(get_vehicle_repo)):
    return [serialize_vehicle(v) for v in await vehicles.get_all()]


@router.get("/{vehicle_id}")
async def get_vehicle(
    vehicle_id: int,
    vehicles: SqlVehicleRepository = Depends(get_vehicle_repo),
):
    vehicle = await vehicles.get_by_id(vehicle_id)
    if not vehicle:
        raise HTTPException(status_code=404, detail="Vehicle not found")
    return serialize_vehicle(vehicle)


@router.post("", status_code=201)
async def create_vehicle(
    body: VehicleCreate,
    vehicles: SqlVehicleRepository = Depends(get_vehicle_repo),
    routes: SqlRouteRepository = Depends(get_route_repo),
    session: AsyncSession = Depends(get_session),
):
    await _require_route(routes, body.route_id)
    try:
        vehicle = await vehicles.save(
            Vehicle(
                id=None,
                license_plate=body.license_plate.strip().upper(),
                model=body.model,
                capacity=body.capacity,
                route_id=body.route_id,
                status=body.status,
                notes=body.notes,
            )
        )
        await session.commit()
    except IntegrityError:
        await session.rollback()
        logger.warning("Duplicate license plate %s", body.license_plate)
        raise HTTPException(status_code=409, detail="License plate already registered")
    return serialize_vehicle(vehicle)


@router.put("/{vehicle_id}")
async def update_vehicle(
    vehicle_id: int,
    body: VehicleUpdate,
    vehicles: SqlVehicleRepository = Depends(get_vehicle_repo),
    routes: SqlRouteRepository = Depends(get_route_repo),
    session: AsyncSession = Depends(get_session),
):
    vehicle = await vehicles.get_by_id(vehicle_id)
    if not vehicle:
        raise HTTPException(status_code=404, detail="Vehicle not found")

    patch = body.model_dump(exclude_unset=True)
    if "route_id" in patch:
        await _require_route(routes, patch["route_id"])
    if patch.get("license_plate"):
        patch["license_plate"] = patch["license_plate"].strip().upper()
    for field, value in patch.items():
        if value is not None or field in ("route_id", "notes"):
            setattr(vehicle, field, value)

    try:
        await vehicles.update(vehicle)
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise HTTPException(status_code=409, detail="License plate already registered")
    return serialize_vehicle(vehicle)


@router.delete("/{vehicle_id}", status_code=204)
async def delete_vehicle(
    vehicle_id: int,
    vehicles: SqlVehicleRepository = Depends(get_vehicle_repo),
    session: AsyncSession = Depends(get_session),
):
    if not await vehicles.delete(vehicle_id):
        raise HTTPException(status_code=404, detail="Vehicle not found")
    await session.commit()
    return Response(status_code=204)
