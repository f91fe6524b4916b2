"""
Tests de utilidades: etiquetas de calendario, antigüedad, puestos y tipos de turno.
"""
from datetime import date

import pytest

from cuadrante.core.enums import UNRANKED, Role, ShiftType, fold, role_rank
from cuadrante.core.exceptions import InvalidLocation
from cuadrante.utils.calendar import (
    day_header,
    month_bounds,
    month_days,
    month_label,
    monday_of,
    seniority,
    short_date,
    week_days,
    week_label,
)
from cuadrante.utils.locations import check_location


# ── Calendario ────────────────────────────────────────────────────────────────

def test_week_helpers():
    assert monday_of(date(2024, 7, 4)) == date(2024, 7, 1)
    assert monday_of(date(2024, 7, 1)) == date(2024, 7, 1)
    days = week_days(date(2024, 7, 1))
    assert days[0] == date(2024, 7, 1) and days[-1] == date(2024, 7, 7)


@pytest.mark.parametrize("day, label", [
    (date(2024, 7, 1), "2024-27"),
    (date(2024, 1, 1), "2024-01"),
    (date(2024, 12, 30), "2025-01"),   # ISO week of the following year
    (date(2021, 1, 3), "2020-53"),
])
def test_week_label_iso(day, label):
    assert week_label(day) == label


def test_month_helpers():
    assert month_bounds(date(2024, 2, 17)) == (date(2024, 2, 1), date(2024, 2, 29))
    assert month_bounds(date(2024, 12, 5)) == (date(2024, 12, 1), date(2024, 12, 31))
    assert len(month_days(date(2023, 2, 1))) == 28
    assert month_label(date(2024, 7, 9)) == "julio 2024"


def test_spanish_labels():
    assert short_date(date(2024, 7, 1)) == "1 jul 2024"
    assert day_header(date(2024, 7, 3)) == "mié 3"
    assert day_header(date(2024, 7, 7)) == "dom 7"


@pytest.mark.parametrize("start, today, expected", [
    (None, date(2024, 7, 1), "-"),
    (date(2024, 6, 20), date(2024, 7, 1), "Menos de 1 mes"),
    (date(2024, 5, 1), date(2024, 7, 1), "2 meses"),
    (date(2023, 6, 1), date(2024, 7, 1), "1 Año 1 mes"),
    (date(2021, 7, 1), date(2024, 7, 1), "3 Años"),
    (date(2024, 8, 1), date(2024, 7, 1), "Menos de 1 mes"),   # future start date
])
def test_seniority(start, today, expected):
    assert seniority(start, today) == expected


# ── Puestos y turnos ──────────────────────────────────────────────────────────

def test_fold():
    assert fold("  Jefe de Cocina ") == "jefe de cocina"
    assert fold("Mañana") == "manana"
    assert fold(None) == ""


@pytest.mark.parametrize("label, role", [
    ("Camarero", Role.WAITER),
    ("camarera", Role.WAITER),
    ("ENCARGADA", Role.MANAGER),
    ("Cocinera", Role.COOK),
    ("Ayudante de cocina", Role.KITCHEN_ASSISTANT),
    ("Jefe de Cocina", Role.HEAD_COOK),
    ("Friegaplatos", None),
    (None, None),
])
def test_role_from_label(label, role):
    assert Role.from_label(label) == role


def test_role_rank_order():
    ranks = [role_rank(r.value) for r in Role]
    assert ranks == sorted(ranks) == [1, 2, 3, 4, 5]
    assert role_rank("Friegaplatos") == UNRANKED == 6


def test_shift_type_lenient_lookup():
    assert ShiftType("Mañana") is ShiftType.MORNING
    assert ShiftType("tarde") is ShiftType.AFTERNOON
    assert ShiftType.MORNING.label == "Mañana"
    with pytest.raises(ValueError):
        ShiftType("Noche")


# ── Locales ───────────────────────────────────────────────────────────────────

def test_check_location():
    assert check_location("brutal soul") == "Brutal Soul"
    assert check_location(" Stella Brutal ") == "Stella Brutal"
    with pytest.raises(InvalidLocation):
        check_location("Casa Pepe")
