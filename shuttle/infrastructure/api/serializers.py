"""Domain entity → API response dict.

Keys are camelCase, the shape the web client reads.
"""

from __future__ import annotations

from shuttle.application.use_cases.statistics import Statistics
from shuttle.domain.entities.assignment import Assignment, AssignmentDetails
from shuttle.domain.entities.employee import Employee
from shuttle.domain.entities.route import Route
from shuttle.domain.entities.vehicle import Vehicle


def serialize_employee(e: Employee, route: Route | None = None) -> dict:
    data = {
        "id": e.id,
        "name": e.name,
        "phone": e.phone,
        "address": e.address,
        "coordinates": e.location.to_dict() if e.location else None,
        "shift": e.shift.value,
        "routeId": e.route_id,
    }
    if route is not None:
        data["route"] = serialize_route(route)
    return data


def serialize_route(
    r: Route,
    riders: list[Employee] | None = None,
    vehicles: list[Vehicle] | None = None,
) -> dict:
    data = {
        "id": r.id,
        "name": r.name,
        "driver": r.driver,
        "capacity": r.capacity,
        "departureTime": r.departure_time,
        "shift": r.shift.value if r.shift else None,
        "stops": list(r.stops),
        "stopCoordinates": [p.to_dict() for p in r.stop_locations],
        "isActive": r.is_active,
        "occupancy": r.occupancy,
    }
    if riders is not None:
        data["employees"] = [serialize_employee(e) for e in riders]
    if vehicles is not None:
        data["vehicles"] = [serialize_vehicle(v) for v in vehicles]
    return data


def serialize_vehicle(v: Vehicle) -> dict:
    return {
        "id": v.id,
        "licensePlate": v.license_plate,
        "model": v.model,
        "capacity": v.capacity,
        "routeId": v.route_id,
        "status": v.status.value,
        "notes": v.notes,
    }


def serialize_assignment(a: Assignment) -> dict:
    return {
        "id": a.id,
        "employeeId": a.employee_id,
        "routeId": a.route_id,
        "assignmentType": a.assignment_type.value,
        "assignedAt": a.assigned_at.isoformat() if a.assigned_at else None,
    }


def serialize_assignment_details(d: AssignmentDetails) -> dict:
    data = serialize_assignment(d.assignment)
    data["employee"] = serialize_employee(d.employee)
    data["route"] = serialize_route(d.route)
    return data


def serialize_statistics(s: Statistics) -> dict:
    return {
        "totalEmployees": s.total_employees,
        "activeRoutes": s.active_routes,
        "totalVehicles": s.total_vehicles,
        "efficiency": s.efficiency,
    }
