"""Seed database from CSV files.

Usage:
    python -m shuttle.tools.seed_db
    python -m shuttle.tools.seed_db --data-dir data  # overrides CSV_DATA_PATH
    python -m shuttle.tools.seed_db --drop  # drop existing data first
    python -m shuttle.tools.seed_db --no-geocode
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from shuttle.adapters.csv_loader.loader import load_employees, load_routes, load_vehicles
from shuttle.adapters.geocoder.nominatim_adapter import NominatimAdapter
from shuttle.adapters.persistence.database import async_session_factory
from shuttle.adapters.persistence.models import (
    AssignmentModel,
    EmployeeModel,
    RouteModel,
    VehicleModel,
)
from shuttle.config import settings

logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")
logger = logging.getLogger(__name__)


async def _drop_data(session: AsyncSession) -> None:
    """Delete all data in correct order (respecting FK constraints)."""
    for model in [AssignmentModel, VehicleModel, EmployeeModel, RouteModel]:
        await session.execute(delete(model))
    await session.commit()
    logger.info("Dropped all existing data")


async def seed(data_dir: Path, drop: bool = False, geocode: bool = True) -> dict[str, int]:
    """Main seed function. Returns counts of seeded records.

    Employees are imported unassigned; route membership is created through
    the assignment endpoints afterwards.
    """
    counts = {"routes": 0, "employees": 0, "vehicles": 0}

    route_csv = _find_csv(data_dir, ["routes", "маршруты"])
    employee_csv = _find_csv(data_dir, ["employees", "сотрудники", "қызметкерлер"])
    vehicle_csv = _find_csv(data_dir, ["vehicles", "транспорт", "автобусы"])

    if not employee_csv:
        raise FileNotFoundError(
            f"No employees CSV found in {data_dir}. Expected something like employees.csv"
        )

    geocoder = NominatimAdapter() if geocode else None

    async with async_session_factory() as session:
        if drop:
            await _drop_data(session)

        # 1. Routes
        route_name_to_id: dict[str, int] = {}
        if route_csv:
            for rd in load_routes(route_csv):
                existing = await session.execute(
                    select(RouteModel).where(RouteModel.name == rd["name"])
                )
                if existing.scalar_one_or_none():
                    logger.debug("Route '%s' already exists, skipping", rd["name"])
                    continue
                session.add(RouteModel(stop_locations=[], **rd))
                counts["routes"] += 1
            await session.commit()
        else:
            logger.info("No routes CSV found — skipping route import")

        for r in (await session.execute(select(RouteModel))).scalars():
            route_name_to_id[r.name] = r.id

        # 2. Employees
        for ed in load_employees(employee_csv):
            existing = await session.execute(
                select(EmployeeModel).where(
                    EmployeeModel.name == ed["name"],
                    EmployeeModel.address == ed["address"],
                )
            )
            if existing.scalar_one_or_none():
                logger.debug("Employee '%s' already exists, skipping", ed["name"])
                continue

            lat, lon = ed["latitude"], ed["longitude"]
            if (lat is None or lon is None) and geocoder and ed["address"]:
                point = await geocoder.geocode(ed["address"])
                if point:
                    lat, lon = point.latitude, point.longitude

            session.add(
                EmployeeModel(
                    name=ed["name"],
                    phone=ed["phone"],
                    address=ed["address"],
                    latitude=lat,
                    longitude=lon,
                    shift=ed["shift"].value,
                    route_id=None,
                )
            )
            counts["employees"] += 1
        await session.commit()

        # 3. Vehicles
        if vehicle_csv:
            for vd in load_vehicles(vehicle_csv):
                existing = await session.execute(
                    select(VehicleModel).where(VehicleModel.license_plate == vd["license_plate"])
                )
                if existing.scalar_one_or_none():
                    logger.debug("Vehicle '%s' already exists, skipping", vd["license_plate"])
                    continue

                route_id = None
                if vd["route_name"]:
                    route_id = route_name_to_id.get(vd["route_name"])
                    if route_id is None:
                        logger.warning(
                            "Vehicle '%s': route '%s' not found, left unattached",
                            vd["license_plate"], vd["route_name"],
                        )

                session.add(
                    VehicleModel(
                        license_plate=vd["license_plate"],
                        model=vd["model"],
                        capacity=vd["capacity"],
                        route_id=route_id,
                        status=vd["status"].value,
                        notes=vd["notes"],
                    )
                )
                counts["vehicles"] += 1
            await session.commit()
        else:
            logger.info("No vehicles CSV found — skipping vehicle import")

    logger.info(
        "Seed complete: %d routes, %d employees, %d vehicles",
        counts["routes"], counts["employees"], counts["vehicles"],
    )
    return counts


def _find_csv(data_dir: Path, name_hints: list[str]) -> Path | None:
    """Find a CSV file matching any of the name hints."""
    for f in sorted(data_dir.glob("*.csv")):
        fname_lower = f.stem.lower()
        for hint in name_hints:
            if hint in fname_lower:
                logger.info("Found CSV: %s (matched hint '%s')", f.name, hint)
                return f
    return None


async def _verify_data() -> None:
    """Print sanity checks after seeding."""
    async with async_session_factory() as session:
        routes = (await session.execute(select(RouteModel))).scalars().all()
        employees = (await session.execute(select(EmployeeModel))).scalars().all()
        vehicles = (await session.execute(select(VehicleModel))).scalars().all()

        print(f"\n{'='*50}")
        print("SEED VERIFICATION")
        print(f"{'='*50}")
        print(f"Routes:    {len(routes)} ({sum(1 for r in routes if r.is_active)} active)")
        print(f"Employees: {len(employees)}")
        print(f"Vehicles:  {len(vehicles)}")

        with_coords = sum(1 for e in employees if e.latitude is not None and e.longitude is not None)
        print(f"Employees with coordinates: {with_coords}/{len(employees)}")

        shifts: dict[str, int] = {}
        for e in employees:
            shifts[e.shift] = shifts.get(e.shift, 0) + 1
        print(f"Shift distribution: {shifts}")

        seats = sum(r.capacity for r in routes if r.is_active)
        print(f"Seats on active routes: {seats}")
        print(f"{'='*50}\n")


def main():
    parser = argparse.ArgumentParser(description="Seed shuttle database from CSV files")
    parser.add_argument(
        "--data-dir", type=str, default=settings.csv_data_path,
        help="Directory containing CSV files (default: CSV_DATA_PATH or data)",
    )
    parser.add_argument(
        "--drop", action="store_true",
        help="Drop existing data before seeding",
    )
    parser.add_argument(
        "--no-geocode", action="store_true",
        help="Do not geocode employee addresses without coordinates",
    )
    parser.add_argument(
        "--verify-only", action="store_true",
        help="Only run verification, don't seed",
    )
    args = parser.parse_args()

    data_dir = Path(args.data_dir)
    if not args.verify_only and not data_dir.exists():
        logger.error("Data directory not found: %s", data_dir)
        sys.exit(1)

    if args.verify_only:
        asyncio.run(_verify_data())
    else:
        async def run_all():
            await seed(data_dir, drop=args.drop, geocode=not args.no_geocode)
            await _verify_data()
        asyncio.run(run_all())


if __name__ == "__main__":
    main()
