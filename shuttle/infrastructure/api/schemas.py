"""Request bodies for the HTTP API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from shuttle.domain.value_objects.enums import AssignmentType, Shift, VehicleStatus

HHMM_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class _Request(BaseModel):
    # Accept both snake_case and the camelCase used by the web client
    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class AutoAssignRequest(_Request):
    proximity_weight: float = Field(alias="proximityWeight", ge=0, le=100, strict=True, allow_inf_nan=False)
    capacity_weight: float = Field(alias="capacityWeight", ge=0, le=100, strict=True, allow_inf_nan=False)
    shift_weight: float = Field(alias="shiftWeight", ge=0, le=100, strict=True, allow_inf_nan=False)


class ManualAssignRequest(_Request):
    employee_id: int = Field(alias="employeeId", gt=0, strict=True)
    route_id: int = Field(alias="routeId", gt=0, strict=True)
    # Sent by the web client; manual assignments are always of type "manual"
    assignment_type: AssignmentType | None = Field(default=None, alias="assignmentType")


class EmployeeCreate(_Request):
    name: str = Field(min_length=1)
    phone: str | None = None
    address: str = Field(min_length=1)
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    shift: Shift


class EmployeeUpdate(_Request):
    name: str | None = Field(default=None, min_length=1)
    phone: str | None = None
    address: str | None = Field(default=None, min_length=1)
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    shift: Shift | None = None


class RouteCreate(_Request):
    name: str = Field(min_length=1)
    driver: str = Field(min_length=1)
    capacity: int = Field(gt=0)
    departure_time: str = Field(alias="departureTime", pattern=HHMM_PATTERN)
    stops: list[str] = Field(default_factory=list)
    is_active: bool = Field(default=True, alias="isActive")


class RouteUpdate(_Request):
    name: str | None = Field(default=None, min_length=1)
    driver: str | None = Field(default=None, min_length=1)
    capacity: int | None = Field(default=None, gt=0)
    departure_time: str | None = Field(default=None, alias="departureTime", pattern=HHMM_PATTERN)
    stops: list[str] | None = None
    is_active: bool | None = Field(default=None, alias="isActive")


class VehicleCreate(_Request):
    license_plate: str = Field(alias="licensePlate", min_length=1)
    model: str = Field(min_length=1)
    capacity: int = Field(gt=0)
    route_id: int | None = Field(default=None, alias="routeId", gt=0)
    status: VehicleStatus = VehicleStatus.ACTIVE
    notes: str | None = None


class VehicleUpdate(_Request):
    license_plate: str | None = Field(default=None, alias="licensePlate", min_length=1)
    model: str | None = Field(default=None, min_length=1)
    capacity: int | None = Field(default=None, gt=0)
    route_id: int | None = Field(default=None, alias="routeId", gt=0)
    status: VehicleStatus | None = None
    notes: str | None = None
