"""SQLAlchemy repository implementations."""

from __future__ import annotations

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from shuttle.adapters.persistence.models import (
    AssignmentModel,
    EmployeeModel,
    RouteModel,
    VehicleModel,
)
from shuttle.application.ports.assignment_repo import AssignmentRepository
from shuttle.application.ports.employee_repo import EmployeeRepository
from shuttle.application.ports.route_repo import RouteRepository
from shuttle.application.ports.vehicle_repo import VehicleRepository
from shuttle.domain.entities.assignment import Assignment, AssignmentDetails
from shuttle.domain.entities.employee import Employee
from shuttle.domain.entities.route import Route
from shuttle.domain.entities.vehicle import Vehicle
from shuttle.domain.value_objects.enums import AssignmentType, Shift, VehicleStatus
from shuttle.domain.value_objects.geo_point import GeoPoint

# ─── Mappers ─────────────────────────────────────────────────────────


def _employee_to_domain(m: EmployeeModel) -> Employee:
    location = None
    if m.latitude is not None and m.longitude is not None:
        location = GeoPoint(latitude=m.latitude, longitude=m.longitude)
    return Employee(
        id=m.id,
        name=m.name,
        phone=m.phone,
        address=m.address,
        location=location,
        shift=Shift(m.shift),
        route_id=m.route_id,
    )


def _route_to_domain(m: RouteModel, occupancy: int = 0) -> Route:
    stop_locations = [GeoPoint.from_dict(raw) for raw in (m.stop_locations or [])]
    return Route(
        id=m.id,
        name=m.name,
        driver=m.driver,
        capacity=m.capacity,
        departure_time=m.departure_time,
        stops=list(m.stops or []),
        is_active=m.is_active,
        stop_locations=[p for p in stop_locations if p is not None],
        occupancy=occupancy,
    )


def _vehicle_to_domain(m: VehicleModel) -> Vehicle:
    return Vehicle(
        id=m.id,
        license_plate=m.license_plate,
        model=m.model,
        capacity=m.capacity,
        route_id=m.route_id,
        status=VehicleStatus(m.status),
        notes=m.notes,
    )


def _assignment_to_domain(m: AssignmentModel) -> Assignment:
    return Assignment(
        id=m.id,
        employee_id=m.employee_id,
        route_id=m.route_id,
        assignment_type=AssignmentType(m.assignment_type),
        assigned_at=m.assigned_at,
    )


def _location_columns(location: GeoPoint | None) -> dict:
    return {
        "latitude": location.latitude if location else None,
        "longitude": location.longitude if location else None,
    }


async def _occupancy_by_route(session: AsyncSession) -> dict[int, int]:
    """Count employees per route in one grouped query."""
    result = await session.execute(
        select(EmployeeModel.route_id, func.count(EmployeeModel.id))
        .where(EmployeeModel.route_id.is_not(None))
        .group_by(EmployeeModel.route_id)
    )
    return {route_id: count for route_id, count in result.all()}


# ─── Repositories ────────────────────────────────────────────────────


class SqlEmployeeRepository(EmployeeRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def save(self, employee: Employee) -> Employee:
        m = EmployeeModel(
            name=employee.name,
            phone=employee.phone,
            address=employee.address,
            shift=employee.shift.value,
            route_id=employee.route_id,
            **_location_columns(employee.location),
        )
        self._s.add(m)
        await self._s.flush()
        employee.id = m.id
        return employee

    async def update(self, employee: Employee) -> Employee:
        await self._s.execute(
            update(EmployeeModel)
            .where(EmployeeModel.id == employee.id)
            .values(
                name=employee.name,
                phone=employee.phone,
                address=employee.address,
                shift=employee.shift.value,
                **_location_columns(employee.location),
            )
        )
        await self._s.flush()
        return employee

    async def get_by_id(self, employee_id: int) -> Employee | None:
        m = await self._s.get(EmployeeModel, employee_id, populate_existing=True)
        return _employee_to_domain(m) if m else None

    async def get_all(self) -> list[Employee]:
        result = await self._s.execute(select(EmployeeModel).order_by(EmployeeModel.id))
        return [_employee_to_domain(m) for m in result.scalars()]

    async def get_unassigned(self) -> list[Employee]:
        result = await self._s.execute(
            select(EmployeeModel)
            .where(EmployeeModel.route_id.is_(None))
            .order_by(EmployeeModel.id)
        )
        return [_employee_to_domain(m) for m in result.scalars()]

    async def set_route(self, employee_id: int, route_id: int | None) -> None:
        await self._s.execute(
            update(EmployeeModel)
            .where(EmployeeModel.id == employee_id)
            .values(route_id=route_id)
        )
        await self._s.flush()

    async def clear_route_for(self, route_id: int) -> int:
        result = await self._s.execute(
            update(EmployeeModel)
            .where(EmployeeModel.route_id == route_id)
            .values(route_id=None)
        )
        await self._s.flush()
        return result.rowcount

    async def delete(self, employee_id: int) -> bool:
        result = await self._s.execute(
            delete(EmployeeModel).where(EmployeeModel.id == employee_id)
        )
        await self._s.flush()
        return result.rowcount > 0

    async def count(self) -> int:
        return (await self._s.execute(select(func.count(EmployeeModel.id)))).scalar() or 0

    async def count_assigned(self) -> int:
        return (
            await self._s.execute(
                select(func.count(EmployeeModel.id)).where(EmployeeModel.route_id.is_not(None))
            )
        ).scalar() or 0


class SqlRouteRepository(RouteRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def save(self, route: Route) -> Route:
        m = RouteModel(
            name=route.name,
            driver=route.driver,
            capacity=route.capacity,
            departure_time=route.departure_time,
            stops=list(route.stops),
            stop_locations=[p.to_dict() for p in route.stop_locations],
            is_active=route.is_active,
        )
        self._s.add(m)
        await self._s.flush()
        route.id = m.id
        return route

    async def update(self, route: Route) -> Route:
        await self._s.execute(
            update(RouteModel)
            .where(RouteModel.id == route.id)
            .values(
                name=route.name,
                driver=route.driver,
                capacity=route.capacity,
                departure_time=route.departure_time,
                stops=list(route.stops),
                stop_locations=[p.to_dict() for p in route.stop_locations],
                is_active=route.is_active,
            )
        )
        await self._s.flush()
        return route

    async def set_stop_locations(self, route_id: int, locations: list[GeoPoint]) -> None:
        await self._s.execute(
            update(RouteModel)
            .where(RouteModel.id == route_id)
            .values(stop_locations=[p.to_dict() for p in locations])
        )
        await self._s.flush()

    async def get_by_id(self, route_id: int, for_update: bool = False) -> Route | None:
        stmt = select(RouteModel).where(RouteModel.id == route_id)
        if for_update:
            # Row lock held until commit: serializes concurrent seat changes
            stmt = stmt.with_for_update()
        m = (
            await self._s.execute(stmt.execution_options(populate_existing=True))
        ).scalar_one_or_none()
        if m is None:
            return None
        occupancy = (
            await self._s.execute(
                select(func.count(EmployeeModel.id)).where(EmployeeModel.route_id == route_id)
            )
        ).scalar() or 0
        return _route_to_domain(m, occupancy)

    async def get_all(self) -> list[Route]:
        result = await self._s.execute(select(RouteModel).order_by(RouteModel.id))
        models = result.scalars().all()
        occupancy = await _occupancy_by_route(self._s)
        return [_route_to_domain(m, occupancy.get(m.id, 0)) for m in models]

    async def get_active(self, for_update: bool = False) -> list[Route]:
        stmt = (
            select(RouteModel)
            .where(RouteModel.is_active.is_(True))
            .order_by(RouteModel.id)
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await self._s.execute(stmt.execution_options(populate_existing=True))
        models = result.scalars().all()
        occupancy = await _occupancy_by_route(self._s)
        return [_route_to_domain(m, occupancy.get(m.id, 0)) for m in models]

    async def get_riders(self, route_id: int) -> list[Employee]:
        result = await self._s.execute(
            select(EmployeeModel)
            .where(EmployeeModel.route_id == route_id)
            .order_by(EmployeeModel.id)
        )
        return [_employee_to_domain(m) for m in result.scalars()]

    async def delete(self, route_id: int) -> bool:
        result = await self._s.execute(delete(RouteModel).where(RouteModel.id == route_id))
        await self._s.flush()
        return result.rowcount > 0

    async def count_active(self) -> int:
        return (
            await self._s.execute(
                select(func.count(RouteModel.id)).where(RouteModel.is_active.is_(True))
            )
        ).scalar() or 0


class SqlVehicleRepository(VehicleRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def save(self, vehicle: Vehicle) -> Vehicle:
        m = VehicleModel(
            license_plate=vehicle.license_plate,
            model=vehicle.model,
            capacity=vehicle.capacity,
            route_id=vehicle.route_id,
            status=vehicle.status.value,
            notes=vehicle.notes,
        )
        self._s.add(m)
        await self._s.flush()
        vehicle.id = m.id
        return vehicle

    async def update(self, vehicle: Vehicle) -> Vehicle:
        await self._s.execute(
            update(VehicleModel)
            .where(VehicleModel.id == vehicle.id)
            .values(
                license_plate=vehicle.license_plate,
                model=vehicle.model,
                capacity=vehicle.capacity,
                route_id=vehicle.route_id,
                status=vehicle.status.value,
                notes=vehicle.notes,
            )
        )
        await self._s.flush()
        return vehicle

    async def get_by_id(self, vehicle_id: int) -> Vehicle | None:
        m = await self._s.get(VehicleModel, vehicle_id, populate_existing=True)
        return _vehicle_to_domain(m) if m else None

    async def get_by_route(self, route_id: int) -> list[Vehicle]:
        result = await self._s.execute(
            select(VehicleModel)
            .where(VehicleModel.route_id == route_id)
            .order_by(VehicleModel.id)
        )
        return [_vehicle_to_domain(m) for m in result.scalars()]

    async def get_all(self) -> list[Vehicle]:
        result = await self._s.execute(select(VehicleModel).order_by(VehicleModel.id))
        return [_vehicle_to_domain(m) for m in result.scalars()]

    async def clear_route_for(self, route_id: int) -> int:
        result = await self._s.execute(
            update(VehicleModel)
            .where(VehicleModel.route_id == route_id)
            .values(route_id=None)
        )
        await self._s.flush()
        return result.rowcount

    async def delete(self, vehicle_id: int) -> bool:
        result = await self._s.execute(delete(VehicleModel).where(VehicleModel.id == vehicle_id))
        await self._s.flush()
        return result.rowcount > 0

    async def count(self) -> int:
        return (await self._s.execute(select(func.count(VehicleModel.id)))).scalar() or 0


class SqlAssignmentRepository(AssignmentRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def save(self, assignment: Assignment) -> Assignment:
        m = AssignmentModel(
            employee_id=assignment.employee_id,
            route_id=assignment.route_id,
            assignment_type=assignment.assignment_type.value,
            assigned_at=assignment.assigned_at,
        )
        self._s.add(m)
        await self._s.flush()
        assignment.id = m.id
        return assignment

    async def delete(self, employee_id: int, route_id: int) -> bool:
        result = await self._s.execute(
            delete(AssignmentModel).where(
                AssignmentModel.employee_id == employee_id,
                AssignmentModel.route_id == route_id,
            )
        )
        await self._s.flush()
        return result.rowcount > 0

    async def delete_by_employee(self, employee_id: int) -> int:
        result = await self._s.execute(
            delete(AssignmentModel).where(AssignmentModel.employee_id == employee_id)
        )
        await self._s.flush()
        return result.rowcount

    async def delete_by_route(self, route_id: int) -> int:
        result = await self._s.execute(
            delete(AssignmentModel).where(AssignmentModel.route_id == route_id)
        )
        await self._s.flush()
        return result.rowcount

    async def get_details(self, route_id: int | None = None) -> list[AssignmentDetails]:
        stmt = (
            select(AssignmentModel)
            .options(
                joinedload(AssignmentModel.employee),
                joinedload(AssignmentModel.route),
            )
            .order_by(AssignmentModel.id)
        )
        if route_id is not None:
            stmt = stmt.where(AssignmentModel.route_id == route_id)
        result = await self._s.execute(stmt.execution_options(populate_existing=True))
        models = result.unique().scalars().all()
        occupancy = await _occupancy_by_route(self._s)

        return [
            AssignmentDetails(
                assignment=_assignment_to_domain(m),
                employee=_employee_to_domain(m.employee),
                route=_route_to_domain(m.route, occupancy.get(m.route_id, 0)),
            )
            for m in models
        ]
