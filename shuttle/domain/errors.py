"""Domain errors raised by the assignment engine.

Validation errors are ``ValueError`` subclasses and not-found errors are
``LookupError`` subclasses, so callers that only know the builtin hierarchy
still classify them correctly.
"""

from __future__ import annotations


class AssignmentError(Exception):
    """Base class for every error the assignment engine raises."""


class ValidationError(AssignmentError, ValueError):
    """Malformed input, rejected before any state change."""


class WeightsValidationError(ValidationError):
    def __init__(self, field: str, value: object, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field}={value!r}: {reason}")


class InvalidIdentifierError(ValidationError):
    def __init__(self, field: str, value: object):
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field}={value!r}: must be a positive integer")


class CapacityExceededError(AssignmentError):
    """The target route has no free seat."""

    def __init__(self, route_id: int, capacity: int, occupancy: int):
        self.route_id = route_id
        self.capacity = capacity
        self.occupancy = occupancy
        super().__init__(
            f"Route {route_id} is full ({occupancy}/{capacity})"
        )


class NotFoundError(AssignmentError, LookupError):
    """A referenced entity or pairing does not exist."""


class EmployeeNotFoundError(NotFoundError):
    def __init__(self, employee_id: int):
        self.employee_id = employee_id
        super().__init__(f"Employee {employee_id} not found")


class RouteNotFoundError(NotFoundError):
    def __init__(self, route_id: int):
        self.route_id = route_id
        super().__init__(f"Route {route_id} not found")


class VehicleNotFoundError(NotFoundError):
    def __init__(self, vehicle_id: int):
        self.vehicle_id = vehicle_id
        super().__init__(f"Vehicle {vehicle_id} not found")


class AssignmentNotFoundError(NotFoundError):
    def __init__(self, employee_id: int, route_id: int):
        self.employee_id = employee_id
        self.route_id = route_id
        super().__init__(
            f"No assignment of employee {employee_id} to route {route_id}"
        )
