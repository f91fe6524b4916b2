"""
Tests de PersonnelService: búsqueda, orden, vista de empleado y borrado en cascada.
"""
from datetime import date, datetime

import pytest

from cuadrante.core.enums import ShiftType
from cuadrante.core.exceptions import ValidationError
from cuadrante.services.payroll_service import PayrollService
from cuadrante.services.personnel_service import (
    PersonnelService, employee_view, search_employees, sort_employees,
)
from cuadrante.services.roster_service import RosterService
from cuadrante.store import EMPLOYEES, PAYSLIPS, SHIFT_ASSIGNMENTS
from tests.conftest import LOCATION, add_employee, add_extra

RECORDS = [
    {"name": "Jorge", "role": "Cocinero", "salary": 21000, "dni": "111A"},
    {"name": "Ana López", "role": "Camarera", "salary": 18000, "dni": "222B"},
    {"name": "Eva", "role": "Encargada", "salary": None, "dni": "333C"},
]


def names(records):
    return [r["name"] for r in records]


def test_search_employees():
    assert names(search_employees(RECORDS, "lopez")) == ["Ana López"]
    assert names(search_employees(RECORDS, "COCIN")) == ["Jorge"]
    assert names(search_employees(RECORDS, "333")) == ["Eva"]
    assert names(search_employees(RECORDS, "  ")) == names(RECORDS)


def test_sort_employees():
    assert names(sort_employees(RECORDS)) == ["Ana López", "Eva", "Jorge"]
    assert names(sort_employees(RECORDS, "name", descending=True)) == ["Jorge", "Eva", "Ana López"]
    # missing salary sorts as zero
    assert names(sort_employees(RECORDS, "salary")) == ["Eva", "Ana López", "Jorge"]


def test_employee_view_falls_back_to_created_at():
    record = {
        "id": "6a1f6b0e-8d5c-4c7e-9f51-0c3f1f2b7d11",
        "name": "Carmen",
        "location": LOCATION,
        "created_at": datetime(2024, 1, 15, 10, 30),
        "vacation_days": '["2024-06-01"]',
    }
    view = employee_view(record, today=date(2024, 7, 20))
    assert view.seniority == "6 meses"
    assert view.vacations.taken_count == 1
    assert view.vacations.remaining == 29


@pytest.mark.asyncio
async def test_create_employee_starts_with_empty_ledger(any_store):
    created = await PersonnelService(any_store).create_employee({"name": "Carmen", "location": "brutal soul"})
    assert created.location == LOCATION
    assert created.vacations.days == []
    assert created.vacations.remaining == 30


@pytest.mark.asyncio
async def test_delete_employee_cascades(any_store, files):
    emp = await add_employee(any_store, "Carmen", salary=18000)
    other = await add_employee(any_store, "Jorge")
    roster = RosterService(any_store)
    for person in (emp, other):
        p = await roster.find_person(LOCATION, person["id"])
        await roster.assign(LOCATION, p, date(2024, 7, 1), ShiftType.MORNING)
    payroll = PayrollService(any_store, files)
    await payroll.generate_pdf(emp["id"], date(2024, 7, 1))

    await PersonnelService(any_store, payroll).delete_employee(emp["id"])

    remaining = await any_store.list(SHIFT_ASSIGNMENTS)
    assert [r["person_name"] for r in remaining] == ["Jorge"]
    assert await any_store.list(PAYSLIPS) == []
    assert not (files.root / "nominas" / "Brutal_Soul" / "nomina_Carmen_2024-07.pdf").exists()


@pytest.mark.asyncio
async def test_delete_extra_cascades(any_store):
    luis = await add_extra(any_store, "Luis")
    roster = RosterService(any_store)
    person = await roster.find_person(LOCATION, luis["id"])
    await roster.assign(LOCATION, person, date(2024, 7, 1), ShiftType.EXTRA)

    service = PersonnelService(any_store)
    await service.delete_extra(luis["id"])

    assert await any_store.list(SHIFT_ASSIGNMENTS) == []
    assert await service.list_extras(LOCATION) == []


@pytest.mark.asyncio
@pytest.mark.parametrize("changes", [{"name": None}, {"name": "  "}, {"location": None}])
async def test_update_employee_cannot_clear_name_or_location(any_store, changes):
    emp = await add_employee(any_store, "Carmen")
    service = PersonnelService(any_store)

    with pytest.raises(ValidationError):
        await service.update_employee(emp["id"], changes)

    # nothing was written: the location still lists the employee
    assert names(await any_store.list(EMPLOYEES, where={"location": LOCATION})) == ["Carmen"]
    grid = await RosterService(any_store).list_week(LOCATION, date(2024, 7, 1))
    assert [row.person.name for row in grid.rows] == ["Carmen"]
