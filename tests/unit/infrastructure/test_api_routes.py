"""HTTP-level tests: routers wired to the in-memory fakes via dependency overrides."""

import pytest
from fastapi.testclient import TestClient

from shuttle.adapters.persistence.database import get_session
from shuttle.application.use_cases.manual_assign import ManualAssignUseCase
from shuttle.application.use_cases.statistics import StatisticsUseCase
from shuttle.domain.value_objects.enums import AssignmentType
from shuttle.infrastructure.api.dependencies import (
    get_employee_repo,
    get_manual_assign_uc,
    get_route_repo,
    get_statistics_uc,
    get_vehicle_repo,
)
from shuttle.main import create_app


class FakeSession:
    def __init__(self):
        self.commits = 0
        self.rollbacks = 0

    async def commit(self):
        self.commits += 1

    async def rollback(self):
        self.rollbacks += 1


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def client(store, session):
    app = create_app()
    app.dependency_overrides[get_session] = lambda: session
    app.dependency_overrides[get_employee_repo] = lambda: store.employee_repo
    app.dependency_overrides[get_route_repo] = lambda: store.route_repo
    app.dependency_overrides[get_vehicle_repo] = lambda: store.vehicle_repo
    app.dependency_overrides[get_manual_assign_uc] = lambda: ManualAssignUseCase(
        store.employee_repo, store.route_repo, store.assignment_repo
    )
    app.dependency_overrides[get_statistics_uc] = lambda: StatisticsUseCase(
        employee_repo=store.employee_repo,
        route_repo=store.route_repo,
        vehicle_repo=store.vehicle_repo,
    )
    return TestClient(app)


def test_manual_assign_accepts_assignment_type(client, store, session):
    employee = store.add_employee()
    route = store.add_route()

    resp = client.post(
        "/api/assignments",
        json={"employeeId": employee.id, "routeId": route.id, "assignmentType": "manual"},
    )

    assert resp.status_code == 201
    body = resp.json()
    assert body["employeeId"] == employee.id
    assert body["routeId"] == route.id
    assert body["assignmentType"] == AssignmentType.MANUAL.value
    assert "assignedAt" in body
    assert session.commits == 1


def test_manual_assign_full_route_rolls_back(client, store, session):
    route = store.add_route(capacity=1)
    store.add_employee(route_id=route.id)
    newcomer = store.add_employee()

    resp = client.post("/api/assignments", json={"employeeId": newcomer.id, "routeId": route.id})

    assert resp.status_code == 409
    assert session.rollbacks == 1
    assert session.commits == 0


def test_statistics_keys_are_camel_case(client, store):
    route = store.add_route()
    store.add_employee(route_id=route.id)
    store.add_employee()

    resp = client.get("/api/statistics")

    assert resp.status_code == 200
    assert resp.json() == {
        "totalEmployees": 2,
        "activeRoutes": 1,
        "totalVehicles": 0,
        "efficiency": 50,
    }


def test_list_routes_groups_riders_without_per_route_queries(client, store):
    r1 = store.add_route(departure_time="07:30")
    r2 = store.add_route(departure_time="19:00")
    store.add_route(departure_time="08:00")
    e1 = store.add_employee(route_id=r1.id)
    e2 = store.add_employee(route_id=r2.id)
    store.add_employee()
    vehicle = store.add_vehicle(route_id=r2.id)

    resp = client.get("/api/routes")

    assert resp.status_code == 200
    routes = {r["id"]: r for r in resp.json()}
    assert [e["id"] for e in routes[r1.id]["employees"]] == [e1.id]
    assert [e["id"] for e in routes[r2.id]["employees"]] == [e2.id]
    assert routes[r2.id]["vehicles"][0]["licensePlate"] == vehicle.license_plate
    assert routes[3]["employees"] == []
    assert routes[r1.id]["occupancy"] == 1
    assert routes[r1.id]["isActive"] is True
    assert store.route_repo.rider_queries == 0
