"""Pytest configuration and shared fixtures.

``FakeStore`` keeps employees, routes, vehicles and assignments in memory and
hands out repositories implementing the application ports over that shared
state, so route occupancy is always derived from employee route_ids the way
the SQL repositories derive it.
"""

from __future__ import annotations

from dataclasses import replace

import pytest

from shuttle.application.ports.assignment_repo import AssignmentRepository
from shuttle.application.ports.employee_repo import EmployeeRepository
from shuttle.application.ports.geocoder_port import GeocoderPort
from shuttle.application.ports.route_repo import RouteRepository
from shuttle.application.ports.vehicle_repo import VehicleRepository
from shuttle.domain.entities.assignment import Assignment, AssignmentDetails
from shuttle.domain.entities.employee import Employee
from shuttle.domain.entities.route import Route
from shuttle.domain.entities.vehicle import Vehicle
from shuttle.domain.value_objects.enums import AssignmentType, Shift, VehicleStatus
from shuttle.domain.value_objects.geo_point import GeoPoint

# ─── In-memory fakes ────────────────────────────────────────────────


class FakeStore:
    def __init__(self):
        self.employees: dict[int, Employee] = {}
        self.routes: dict[int, Route] = {}
        self.vehicles: dict[int, Vehicle] = {}
        self.assignments: dict[int, Assignment] = {}
        self._next_id = {"employee": 1, "route": 1, "vehicle": 1, "assignment": 1}
        # Ordered log of lock and read calls across repos
        self.events: list[str] = []

        self.employee_repo = FakeEmployeeRepo(self)
        self.route_repo = FakeRouteRepo(self)
        self.vehicle_repo = FakeVehicleRepo(self)
        self.assignment_repo = FakeAssignmentRepo(self)

    def next_id(self, kind: str) -> int:
        value = self._next_id[kind]
        self._next_id[kind] = value + 1
        return value

    def occupancy(self, route_id: int) -> int:
        return sum(1 for e in self.employees.values() if e.route_id == route_id)

    def route_snapshot(self, route: Route) -> Route:
        return replace(
            route,
            stops=list(route.stops),
            stop_locations=list(route.stop_locations),
            occupancy=self.occupancy(route.id),
        )

    # Test helpers

    def add_employee(
        self,
        shift: Shift = Shift.MORNING,
        name: str | None = None,
        location: GeoPoint | None = None,
        route_id: int | None = None,
        employee_id: int | None = None,
    ) -> Employee:
        eid = employee_id if employee_id is not None else self.next_id("employee")
        employee = Employee(
            id=eid,
            name=name or f"E{eid}",
            address=f"ул. Абая, {eid}",
            shift=shift,
            location=location,
            route_id=route_id,
        )
        self.employees[eid] = employee
        return employee

    def add_route(
        self,
        capacity: int = 10,
        departure_time: str = "07:30",
        is_active: bool = True,
        stops: list[str] | None = None,
        stop_locations: list[GeoPoint] | None = None,
        route_id: int | None = None,
    ) -> Route:
        rid = route_id if route_id is not None else self.next_id("route")
        route = Route(
            id=rid,
            name=f"R{rid}",
            driver=f"Driver {rid}",
            capacity=capacity,
            departure_time=departure_time,
            stops=stops or [],
            is_active=is_active,
            stop_locations=stop_locations or [],
        )
        self.routes[rid] = route
        return route

    def add_vehicle(self, route_id: int | None = None, plate: str | None = None) -> Vehicle:
        vid = self.next_id("vehicle")
        vehicle = Vehicle(
            id=vid,
            license_plate=plate or f"{vid:03d}ABC02",
            model="Hyundai County",
            capacity=25,
            route_id=route_id,
            status=VehicleStatus.ACTIVE,
        )
        self.vehicles[vid] = vehicle
        return vehicle

    def add_assignment(
        self,
        employee_id: int,
        route_id: int,
        assignment_type: AssignmentType = AssignmentType.MANUAL,
    ) -> Assignment:
        """Seed a consistent assignment (record + employee route_id)."""
        aid = self.next_id("assignment")
        assignment = Assignment(
            id=aid, employee_id=employee_id, route_id=route_id,
            assignment_type=assignment_type,
        )
        self.assignments[aid] = assignment
        self.employees[employee_id].route_id = route_id
        return assignment


class FakeEmployeeRepo(EmployeeRepository):
    def __init__(self, store: FakeStore):
        self._store = store

    async def save(self, employee):
        employee.id = self._store.next_id("employee")
        self._store.employees[employee.id] = replace(employee)
        return employee

    async def update(self, employee):
        stored = self._store.employees[employee.id]
        self._store.employees[employee.id] = replace(employee, route_id=stored.route_id)
        return employee

    async def get_by_id(self, employee_id):
        self._store.events.append("read_employee")
        e = self._store.employees.get(employee_id)
        return replace(e) if e else None

    async def get_all(self):
        return [replace(e) for _, e in sorted(self._store.employees.items())]

    async def get_unassigned(self):
        self._store.events.append("read_unassigned")
        return [replace(e) for _, e in sorted(self._store.employees.items()) if e.route_id is None]

    async def set_route(self, employee_id, route_id):
        if employee_id in self._store.employees:
            self._store.employees[employee_id].route_id = route_id

    async def clear_route_for(self, route_id):
        cleared = 0
        for e in self._store.employees.values():
            if e.route_id == route_id:
                e.route_id = None
                cleared += 1
        return cleared

    async def delete(self, employee_id):
        return self._store.employees.pop(employee_id, None) is not None

    async def count(self):
        return len(self._store.employees)

    async def count_assigned(self):
        return sum(1 for e in self._store.employees.values() if e.route_id is not None)


class FakeRouteRepo(RouteRepository):
    def __init__(self, store: FakeStore):
        self._store = store
        self.lock_requests: list[int | None] = []
        self.rider_queries = 0

    async def save(self, route):
        route.id = self._store.next_id("route")
        self._store.routes[route.id] = replace(route, occupancy=0)
        return route

    async def update(self, route):
        self._store.routes[route.id] = replace(
            route, stops=list(route.stops), stop_locations=list(route.stop_locations)
        )
        return route

    async def set_stop_locations(self, route_id, locations):
        self._store.routes[route_id].stop_locations = list(locations)

    async def get_by_id(self, route_id, for_update=False):
        if for_update:
            self.lock_requests.append(route_id)
            self._store.events.append("lock_route")
        r = self._store.routes.get(route_id)
        return self._store.route_snapshot(r) if r else None

    async def get_all(self):
        return [self._store.route_snapshot(r) for _, r in sorted(self._store.routes.items())]

    async def get_active(self, for_update=False):
        if for_update:
            self.lock_requests.append(None)
            self._store.events.append("lock_routes")
        return [
            self._store.route_snapshot(r)
            for _, r in sorted(self._store.routes.items())
            if r.is_active
        ]

    async def get_riders(self, route_id):
        self.rider_queries += 1
        return [replace(e) for _, e in sorted(self._store.employees.items()) if e.route_id == route_id]

    async def delete(self, route_id):
        return self._store.routes.pop(route_id, None) is not None

    async def count_active(self):
        return sum(1 for r in self._store.routes.values() if r.is_active)


class FakeVehicleRepo(VehicleRepository):
    def __init__(self, store: FakeStore):
        self._store = store

    async def save(self, vehicle):
        vehicle.id = self._store.next_id("vehicle")
        self._store.vehicles[vehicle.id] = replace(vehicle)
        return vehicle

    async def update(self, vehicle):
        self._store.vehicles[vehicle.id] = replace(vehicle)
        return vehicle

    async def get_by_id(self, vehicle_id):
        v = self._store.vehicles.get(vehicle_id)
        return replace(v) if v else None

    async def get_by_route(self, route_id):
        return [replace(v) for v in self._store.vehicles.values() if v.route_id == route_id]

    async def get_all(self):
        return [replace(v) for _, v in sorted(self._store.vehicles.items())]

    async def clear_route_for(self, route_id):
        cleared = 0
        for v in self._store.vehicles.values():
            if v.route_id == route_id:
                v.route_id = None
                cleared += 1
        return cleared

    async def delete(self, vehicle_id):
        return self._store.vehicles.pop(vehicle_id, None) is not None

    async def count(self):
        return len(self._store.vehicles)


class FakeAssignmentRepo(AssignmentRepository):
    def __init__(self, store: FakeStore):
        self._store = store

    async def save(self, assignment):
        assignment.id = self._store.next_id("assignment")
        self._store.assignments[assignment.id] = replace(assignment)
        return assignment

    async def _delete_where(self, predicate) -> int:
        doomed = [aid for aid, a in self._store.assignments.items() if predicate(a)]
        for aid in doomed:
            del self._store.assignments[aid]
        return len(doomed)

    async def delete(self, employee_id, route_id):
        removed = await self._delete_where(
            lambda a: a.employee_id == employee_id and a.route_id == route_id
        )
        return removed > 0

    async def delete_by_employee(self, employee_id):
        return await self._delete_where(lambda a: a.employee_id == employee_id)

    async def delete_by_route(self, route_id):
        return await self._delete_where(lambda a: a.route_id == route_id)

    async def get_details(self, route_id=None):
        details = []
        for _, a in sorted(self._store.assignments.items()):
            if route_id is not None and a.route_id != route_id:
                continue
            details.append(
                AssignmentDetails(
                    assignment=replace(a),
                    employee=replace(self._store.employees[a.employee_id]),
                    route=self._store.route_snapshot(self._store.routes[a.route_id]),
                )
            )
        return details


class FakeGeocoder(GeocoderPort):
    def __init__(self, points: dict[str, GeoPoint] | None = None):
        self._points = points or {}
        self.queries: list[str] = []

    async def geocode(self, address):
        self.queries.append(address)
        return self._points.get(address)


# ─── Fixtures ────────────────────────────────────────────────────────


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def fake_geocoder_cls():
    return FakeGeocoder
