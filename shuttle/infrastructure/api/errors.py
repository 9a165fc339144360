"""Translate domain errors into HTTP responses."""

from fastapi import HTTPException

from shuttle.domain.errors import (
    AssignmentError,
    CapacityExceededError,
    NotFoundError,
    ValidationError,
)


def to_http_exception(exc: AssignmentError) -> HTTPException:
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, CapacityExceededError):
        return HTTPException(
            status_code=409,
            detail={
                "message": str(exc),
                "route_id": exc.route_id,
                "capacity": exc.capacity,
                "occupancy": exc.occupancy,
            },
        )
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=400, detail=str(exc))
    return HTTPException(status_code=500, detail=str(exc))
