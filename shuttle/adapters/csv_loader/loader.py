"""CSV loader — reads and normalizes CSV data files."""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from shuttle.adapters.csv_loader.normalizer import (
    clean_string,
    normalize_column_name,
    parse_bool,
    parse_shift,
    parse_status,
    parse_stops,
)
from shuttle.domain.value_objects.departure_time import normalize_departure_time

logger = logging.getLogger(__name__)


def _sniff_dialect(sample: str) -> type[csv.Dialect]:
    """Try to detect delimiter (comma/semicolon/tab) to support Excel RU exports."""
    if not sample:
        return csv.excel

    first_line = sample.splitlines()[0]
    delims = [";", ",", "\t"]
    counts = {d: first_line.count(d) for d in delims}
    best_delim = max(counts, key=counts.get)

    if counts[best_delim] > 0:
        class DynamicDialect(csv.excel):
            delimiter = best_delim
        return DynamicDialect

    return csv.excel


def _read_csv(file_path: Path, encoding: str = "utf-8-sig") -> list[dict[str, str]]:
    """Read a CSV file with BOM handling and column normalization.

    Args:
        file_path: path to the CSV file.
        encoding: file encoding (utf-8-sig strips BOM automatically).

    Returns:
        List of dicts with normalized column names.
    """
    with open(file_path, encoding=encoding, newline="") as f:
        sample = f.read(4096)
        f.seek(0)
        reader = csv.DictReader(f, dialect=_sniff_dialect(sample))
        if reader.fieldnames is None:
            raise ValueError(f"CSV file {file_path} has no header row")

        col_map = {col: normalize_column_name(col) for col in reader.fieldnames}
        rows = []
        for raw_row in reader:
            row = {col_map[k]: clean_string(v) for k, v in raw_row.items() if k is not None}
            rows.append(row)

    logger.info("Loaded %d rows from %s (columns: %s)", len(rows), file_path.name, list(col_map.values()))
    return rows


def _first(row: dict, *keys: str) -> str | None:
    for key in keys:
        value = clean_string(row.get(key))
        if value:
            return value
    return None


def load_employees(file_path: Path) -> list[dict]:
    """Load and normalize the employees CSV.

    Expected columns (after normalization):
        фио/name, телефон/phone, адрес/address, широта/latitude,
        долгота/longitude, смена/shift

    Rows with no name or an unknown shift are skipped.
    """
    employees = []
    for line_no, row in enumerate(_read_csv(file_path), start=2):
        name = _first(row, "фио", "имя", "name")
        shift = parse_shift(_first(row, "смена", "ауысым", "shift"))
        if not name or shift is None:
            logger.warning("%s line %d: missing name or unknown shift, skipping", file_path.name, line_no)
            continue
        employees.append({
            "name": name,
            "phone": _first(row, "телефон", "phone"),
            "address": _first(row, "адрес", "мекенжай", "address") or "",
            "latitude": _parse_float(_first(row, "широта", "latitude", "lat")),
            "longitude": _parse_float(_first(row, "долгота", "longitude", "lng", "lon")),
            "shift": shift,
        })
    logger.info("Parsed %d employees", len(employees))
    return employees


def load_routes(file_path: Path) -> list[dict]:
    """Load and normalize the routes CSV.

    Expected columns (after normalization):
        название/name, водитель/driver, вместимость/capacity,
        время_отправления/departure_time, остановки/stops (``|``-separated),
        активен/is_active
    """
    routes = []
    for line_no, row in enumerate(_read_csv(file_path), start=2):
        name = _first(row, "название", "маршрут", "name")
        capacity = _parse_int(_first(row, "вместимость", "capacity"))
        raw_time = _first(row, "время_отправления", "отправление", "departure_time", "departure")
        try:
            departure_time = normalize_departure_time(raw_time or "")
        except ValueError:
            departure_time = None
        if not name or capacity <= 0 or departure_time is None:
            logger.warning(
                "%s line %d: route needs a name, positive capacity and HH:MM departure, skipping",
                file_path.name, line_no,
            )
            continue
        routes.append({
            "name": name,
            "driver": _first(row, "водитель", "driver") or "",
            "capacity": capacity,
            "departure_time": departure_time,
            "stops": parse_stops(_first(row, "остановки", "stops")),
            "is_active": parse_bool(_first(row, "активен", "is_active", "active")),
        })
    logger.info("Parsed %d routes", len(routes))
    return routes


def load_vehicles(file_path: Path) -> list[dict]:
    """Load and normalize the vehicles CSV.

    Expected columns (after normalization):
        госномер/license_plate, модель/model, вместимость/capacity,
        маршрут/route (route name), статус/status, примечания/notes
    """
    vehicles = []
    for line_no, row in enumerate(_read_csv(file_path), start=2):
        plate = _first(row, "госномер", "номер", "license_plate", "plate")
        if not plate:
            logger.warning("%s line %d: missing license plate, skipping", file_path.name, line_no)
            continue
        vehicles.append({
            "license_plate": plate.upper(),
            "model": _first(row, "модель", "model") or "",
            "capacity": _parse_int(_first(row, "вместимость", "capacity")),
            "route_name": _first(row, "маршрут", "route"),
            "status": parse_status(_first(row, "статус", "status")),
            "notes": _first(row, "примечания", "notes"),
        })
    logger.info("Parsed %d vehicles", len(vehicles))
    return vehicles


def _parse_float(value: str | None) -> float | None:
    """Safely parse a float from a string."""
    if not value:
        return None
    try:
        return float(value.replace(",", ".").strip())
    except ValueError:
        return None


def _parse_int(value: str | None) -> int:
    if not value:
        return 0
    try:
        # handle "4", "4.0"
        return int(float(str(value).replace(",", ".").strip()))
    except ValueError:
        return 0
