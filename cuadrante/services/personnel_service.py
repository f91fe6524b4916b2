"""
Employees and extras of a location.

Deleting a person also deletes their shift assignments (and, for employees,
their payslips); nothing else references them.
"""
from __future__ import annotations

import logging
import uuid
from datetime import date, datetime
from decimal import Decimal

from cuadrante.core.enums import fold, role_rank
from cuadrante.core.exceptions import ValidationError
from cuadrante.schemas.employee import EmployeeOut, ExtraOut
from cuadrante.services.payroll_service import PayrollService
from cuadrante.services.roster_service import RosterService
from cuadrante.services.vacation_service import VacationLedger
from cuadrante.store.base import RecordStore, EMPLOYEES, EXTRAS
from cuadrante.utils.calendar import seniority
from cuadrante.utils.locations import check_location

logger = logging.getLogger(__name__)

SORT_KEYS = ("name", "role", "salary")
# an update may change these but never clear them
REQUIRED_FIELDS = ("name", "location")


def _as_date(value) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value)
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return date.fromisoformat(text[:10])


def _salary(record: dict) -> Decimal:
    return Decimal(str(record.get("salary") or 0))


def employee_view(record: dict, today: date | None = None) -> EmployeeOut:
    """Employee record plus derived fields: seniority and vacation summary."""
    started = _as_date(record.get("start_date")) or _as_date(record.get("created_at"))
    ledger = VacationLedger.from_record(record)
    return EmployeeOut.model_validate({
        **record,
        "seniority": seniority(started, today),
        "vacations": ledger.summary(record["id"]),
    })


def search_employees(records: list[dict], term: str | None) -> list[dict]:
    needle = fold(term)
    if not needle:
        return list(records)
    return [
        r for r in records
        if needle in fold(r.get("name")) or needle in fold(r.get("role")) or needle in fold(r.get("dni"))
    ]


def sort_employees(records: list[dict], sort: str | None = None, descending: bool = False) -> list[dict]:
    """``sort`` is name | role | salary; None keeps the roster order (role rank, then name)."""
    if sort == "name":
        key = lambda r: fold(r.get("name"))
    elif sort == "role":
        key = lambda r: (fold(r.get("role")), fold(r.get("name")))
    elif sort == "salary":
        key = lambda r: (_salary(r), fold(r.get("name")))
    else:
        return sorted(records, key=lambda r: (role_rank(r.get("role")), fold(r.get("name"))))
    return sorted(records, key=key, reverse=descending)


class PersonnelService:

    def __init__(self, store: RecordStore, payroll: PayrollService | None = None):
        self.store = store
        self.roster = RosterService(store)
        self.payroll = payroll or PayrollService(store)

    # ── Employees ─────────────────────────────────────────────────────────────

    async def list_employees(
        self,
        location: str,
        search: str | None = None,
        role: str | None = None,
        sort: str | None = None,
        descending: bool = False,
    ) -> list[EmployeeOut]:
        records = await self.store.list(EMPLOYEES, where={"location": check_location(location)})
        records = search_employees(records, search)
        if role:
            records = [r for r in records if fold(r.get("role")) == fold(role)]
        return [employee_view(r) for r in sort_employees(records, sort, descending)]

    async def get_employee(self, employee_id: uuid.UUID) -> EmployeeOut:
        return employee_view(await self.store.get(EMPLOYEES, employee_id))

    async def create_employee(self, values: dict) -> EmployeeOut:
        values = {**values, "location": check_location(values["location"])}
        values.update(VacationLedger().to_record())
        record = await self.store.create(EMPLOYEES, values)
        logger.info("Created employee %s (%s)", record["name"], record["location"])
        return employee_view(record)

    async def update_employee(self, employee_id: uuid.UUID, changes: dict) -> EmployeeOut:
        for field in REQUIRED_FIELDS:
            if field in changes and not str(changes[field] or "").strip():
                raise ValidationError(f"El campo {field} no puede quedar vacío")
        if "location" in changes:
            changes = {**changes, "location": check_location(changes["location"])}
        record = await self.store.update(EMPLOYEES, employee_id, changes)
        return employee_view(record)

    async def delete_employee(self, employee_id: uuid.UUID) -> None:
        record = await self.store.get(EMPLOYEES, employee_id)
        removed = await self.roster.delete_person_assignments(record["id"])
        await self.payroll.delete_employee_payslips(record["id"])
        await self.store.delete(EMPLOYEES, employee_id)
        logger.info("Deleted employee %s and %d assignment(s)", record["name"], removed)

    # ── Extras ────────────────────────────────────────────────────────────────

    async def list_extras(self, location: str) -> list[ExtraOut]:
        records = await self.store.list(EXTRAS, where={"location": check_location(location)})
        records.sort(key=lambda r: (role_rank(r.get("role")), fold(r.get("name"))))
        return [ExtraOut.model_validate(r) for r in records]

    async def create_extra(self, values: dict) -> ExtraOut:
        values = {**values, "location": check_location(values["location"])}
        record = await self.store.create(EXTRAS, values)
        return ExtraOut.model_validate(record)

    async def delete_extra(self, extra_id: uuid.UUID) -> None:
        record = await self.store.get(EXTRAS, extra_id)
        removed = await self.roster.delete_person_assignments(record["id"])
        await self.store.delete(EXTRAS, extra_id)
        logger.info("Deleted extra %s and %d assignment(s)", record["name"], removed)
