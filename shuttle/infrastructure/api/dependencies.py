"""FastAPI dependency injection — wires adapters into use cases."""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shuttle.adapters.geocoder.nominatim_adapter import NominatimAdapter
from shuttle.adapters.persistence.database import get_session
from shuttle.adapters.persistence.repositories import (
    SqlAssignmentRepository,
    SqlEmployeeRepository,
    SqlRouteRepository,
    SqlVehicleRepository,
)
from shuttle.application.use_cases.auto_assign import AutoAssignUseCase
from shuttle.application.use_cases.delete_entities import (
    DeleteEmployeeUseCase,
    DeleteRouteUseCase,
)
from shuttle.application.use_cases.list_assignments import ListAssignmentsUseCase
from shuttle.application.use_cases.manual_assign import (
    ManualAssignUseCase,
    RemoveAssignmentUseCase,
)
from shuttle.application.use_cases.resolve_route_stops import ResolveRouteStopsUseCase
from shuttle.application.use_cases.statistics import StatisticsUseCase
from shuttle.config import settings

# Singleton adapter (internal caching)
_geocoder_adapter = NominatimAdapter()


def get_employee_repo(session: AsyncSession = Depends(get_session)) -> SqlEmployeeRepository:
    return SqlEmployeeRepository(session)


def get_route_repo(session: AsyncSession = Depends(get_session)) -> SqlRouteRepository:
    return SqlRouteRepository(session)


def get_vehicle_repo(session: AsyncSession = Depends(get_session)) -> SqlVehicleRepository:
    return SqlVehicleRepository(session)


def get_assignment_repo(session: AsyncSession = Depends(get_session)) -> SqlAssignmentRepository:
    return SqlAssignmentRepository(session)


def get_auto_assign_uc(session: AsyncSession = Depends(get_session)) -> AutoAssignUseCase:
    return AutoAssignUseCase(
        employee_repo=SqlEmployeeRepository(session),
        route_repo=SqlRouteRepository(session),
        assignment_repo=SqlAssignmentRepository(session),
        proximity_radius_km=settings.proximity_radius_km,
    )


def get_manual_assign_uc(session: AsyncSession = Depends(get_session)) -> ManualAssignUseCase:
    return ManualAssignUseCase(
        employee_repo=SqlEmployeeRepository(session),
        route_repo=SqlRouteRepository(session),
        assignment_repo=SqlAssignmentRepository(session),
    )


def get_remove_assignment_uc(
    session: AsyncSession = Depends(get_session),
) -> RemoveAssignmentUseCase:
    return RemoveAssignmentUseCase(
        employee_repo=SqlEmployeeRepository(session),
        assignment_repo=SqlAssignmentRepository(session),
    )


def get_list_assignments_uc(
    session: AsyncSession = Depends(get_session),
) -> ListAssignmentsUseCase:
    return ListAssignmentsUseCase(assignment_repo=SqlAssignmentRepository(session))


def get_statistics_uc(session: AsyncSession = Depends(get_session)) -> StatisticsUseCase:
    return StatisticsUseCase(
        employee_repo=SqlEmployeeRepository(session),
        route_repo=SqlRouteRepository(session),
        vehicle_repo=SqlVehicleRepository(session),
    )


def get_delete_route_uc(session: AsyncSession = Depends(get_session)) -> DeleteRouteUseCase:
    return DeleteRouteUseCase(
        route_repo=SqlRouteRepository(session),
        employee_repo=SqlEmployeeRepository(session),
        vehicle_repo=SqlVehicleRepository(session),
        assignment_repo=SqlAssignmentRepository(session),
    )


def get_delete_employee_uc(
    session: AsyncSession = Depends(get_session),
) -> DeleteEmployeeUseCase:
    return DeleteEmployeeUseCase(
        employee_repo=SqlEmployeeRepository(session),
        assignment_repo=SqlAssignmentRepository(session),
    )


def get_resolve_stops_uc(
    session: AsyncSession = Depends(get_session),
) -> ResolveRouteStopsUseCase:
    return ResolveRouteStopsUseCase(
        geocoder=_geocoder_adapter,
        route_repo=SqlRouteRepository(session),
    )
