"""Shuttle assignment service — FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from shuttle.adapters.persistence.database import engine
from shuttle.config import settings
from shuttle.infrastructure.api.routes_assignments import router as assignments_router
from shuttle.infrastructure.api.routes_employees import router as employees_router
from shuttle.infrastructure.api.routes_health import router as health_router
from shuttle.infrastructure.api.routes_routes import router as routes_router
from shuttle.infrastructure.api.routes_statistics import router as statistics_router
from shuttle.infrastructure.api.routes_vehicles import router as vehicles_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    try:
        async with engine.begin():
            pass  # Connection pool warmed up
        logger.info("Database connection established")
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Database not available on startup: %s", e)
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Shuttle Assignment Service",
        description="Employee-to-route assignment under shift, capacity and proximity constraints",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router, prefix="/api")
    app.include_router(employees_router, prefix="/api")
    app.include_router(routes_router, prefix="/api")
    app.include_router(vehicles_router, prefix="/api")
    app.include_router(assignments_router, prefix="/api")
    app.include_router(statistics_router, prefix="/api")

    return app


app = create_app()
