"""Tests for CSV normalizer functions."""

from shuttle.adapters.csv_loader.normalizer import (
    clean_string,
    normalize_column_name,
    parse_bool,
    parse_shift,
    parse_status,
    parse_stops,
)
from shuttle.domain.value_objects.enums import Shift, VehicleStatus

# ─── normalize_column_name ───────────────────────────────────────────


def test_strip_trailing_spaces():
    assert normalize_column_name("  Смена  ") == "смена"


def test_remove_bom():
    assert normalize_column_name("\ufeffФИО") == "фио"


def test_replace_spaces_with_underscore():
    assert normalize_column_name("Время отправления") == "время_отправления"


def test_non_breaking_space():
    assert normalize_column_name("Время\u00a0отправления") == "время_отправления"


def test_lowercase():
    assert normalize_column_name("License Plate") == "license_plate"


def test_bom_plus_trailing_space():
    """Combined BOM + trailing spaces (common in real-world CSV)."""
    assert normalize_column_name("\ufeff  Адрес  ") == "адрес"


# ─── clean_string ────────────────────────────────────────────────────


def test_clean_string_strips():
    assert clean_string("  hello  ") == "hello"


def test_clean_string_empty_to_none():
    assert clean_string("   ") is None
    assert clean_string(None) is None


# ─── parse_stops ─────────────────────────────────────────────────────


def test_parse_stops_pipe_separated():
    assert parse_stops("ул. Абая, 10 | пр. Достык, 5") == ["ул. Абая, 10", "пр. Достык, 5"]


def test_parse_stops_drops_blanks():
    assert parse_stops(" | Сайран |  ") == ["Сайран"]
    assert parse_stops(None) == []


# ─── parse_shift / parse_status / parse_bool ─────────────────────────


def test_parse_shift_languages():
    assert parse_shift("Morning") is Shift.MORNING
    assert parse_shift("утро") is Shift.MORNING
    assert parse_shift("таңертеңгі") is Shift.MORNING
    assert parse_shift(" Вечер ") is Shift.EVENING
    assert parse_shift("кешкі") is Shift.EVENING


def test_parse_shift_unknown():
    assert parse_shift("night") is None
    assert parse_shift(None) is None


def test_parse_status_defaults_to_active():
    assert parse_status(None) is VehicleStatus.ACTIVE
    assert parse_status("???") is VehicleStatus.ACTIVE
    assert parse_status("Inactive") is VehicleStatus.INACTIVE


def test_parse_bool():
    assert parse_bool(None) is True
    assert parse_bool("", default=False) is False
    assert parse_bool("Да") is True
    assert parse_bool("no") is False
