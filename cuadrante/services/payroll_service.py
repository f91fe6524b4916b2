"""
PayrollService: monthly payslips per employee.

One payslip per (employee, calendar month). Saving a manual amount or
generating the PDF upserts it with status Subida; sending sets Enviada.
"""
from __future__ import annotations

import logging
import uuid
from datetime import date

from cuadrante.core.enums import PayslipStatus, fold, role_rank
from cuadrante.core.exceptions import NotFound, PersistenceError
from cuadrante.schemas.payroll import PayrollRow, PayslipOut
from cuadrante.services.file_storage import PAYSLIPS_PREFIX, FileStorage, safe_file_name
from cuadrante.services.pdf_service import calculate_payroll_details, generate_payslip_pdf
from cuadrante.store.base import RecordStore, EMPLOYEES, PAYSLIPS
from cuadrante.utils.calendar import month_bounds
from cuadrante.utils.locations import check_location

logger = logging.getLogger(__name__)


def month_period(d: date) -> tuple[date, date]:
    return month_bounds(d)


def payslip_path(location: str, employee_name: str, period_start: date) -> str:
    """nominas/Brutal_Soul/nomina_Luis_Perez_2024-07.pdf"""
    folder = safe_file_name(location.replace(" ", "_"))
    name = safe_file_name(employee_name.replace(" ", "_"))
    return f"{PAYSLIPS_PREFIX}/{folder}/nomina_{name}_{period_start:%Y-%m}.pdf"


class PayrollService:

    def __init__(self, store: RecordStore, files: FileStorage | None = None):
        self.store = store
        self.files = files

    async def _payslip_for(self, employee_id: uuid.UUID, start: date, end: date) -> dict | None:
        return await self.store.first(PAYSLIPS, {
            "employee_id": employee_id,
            "period_start": start,
            "period_end": end,
        })

    async def _upsert(self, employee: dict, start: date, end: date, values: dict) -> PayslipOut:
        existing = await self._payslip_for(employee["id"], start, end)
        values = {**values, "employee_name": employee["name"]}
        if existing:
            record = await self.store.update(PAYSLIPS, existing["id"], values)
        else:
            record = await self.store.create(PAYSLIPS, {
                "employee_id": employee["id"],
                "period_start": start,
                "period_end": end,
                **values,
            })
        return PayslipOut.model_validate(record)

    async def list_payslips(self, location: str, month: date) -> list[PayrollRow]:
        """Every employee of the location with the payslip for that month (None if missing)."""
        location = check_location(location)
        start, end = month_period(month)
        employees = await self.store.list(EMPLOYEES, where={"location": location})
        payslips = await self.store.list(PAYSLIPS, where={"period_start": start, "period_end": end})
        by_employee = {str(p["employee_id"]): p for p in payslips}

        employees.sort(key=lambda e: (role_rank(e.get("role")), fold(e["name"])))
        rows = []
        for e in employees:
            payslip = by_employee.get(str(e["id"]))
            rows.append(PayrollRow(
                employee_id=e["id"],
                employee_name=e["name"],
                role=e.get("role"),
                salary=e.get("salary"),
                payslip=PayslipOut.model_validate(payslip) if payslip else None,
            ))
        return rows

    async def save_manual(
        self, employee_id: uuid.UUID, month: date, amount_transfer: float = 0, amount_cash: float = 0
    ) -> PayslipOut:
        employee = await self.store.get(EMPLOYEES, employee_id)
        start, end = month_period(month)
        transfer = round(float(amount_transfer or 0), 2)
        cash = round(float(amount_cash or 0), 2)
        return await self._upsert(employee, start, end, {
            "amount": round(transfer + cash, 2),
            "amount_transfer": transfer,
            "amount_cash": cash,
            "status": PayslipStatus.UPLOADED.value,
        })

    async def generate_pdf(self, employee_id: uuid.UUID, month: date) -> tuple[PayslipOut, bytes]:
        """Renders the payslip, stores it and records the generated amounts."""
        employee = await self.store.get(EMPLOYEES, employee_id)
        start, end = month_period(month)
        pdf = generate_payslip_pdf(employee, start, employee["location"])

        file_url = None
        stored_path = payslip_path(employee["location"], employee["name"], start)
        if self.files is not None:
            file_url = await self.files.upload(stored_path, pdf)

        gross = calculate_payroll_details(employee.get("salary")).gross_monthly
        try:
            payslip = await self._upsert(employee, start, end, {
                "amount": gross,
                "amount_transfer": gross,
                "amount_cash": 0,
                "status": PayslipStatus.UPLOADED.value,
                "file_url": file_url,
            })
        except PersistenceError:
            if file_url is not None:
                logger.warning("Payslip record not saved, removing %s", stored_path)
                await self.files.delete(stored_path)
            raise
        logger.info("Generated payslip for %s (%s)", employee["name"], start.strftime("%Y-%m"))
        return payslip, pdf

    async def mark_sent(self, payslip_id: uuid.UUID) -> PayslipOut:
        record = await self.store.update(PAYSLIPS, payslip_id, {"status": PayslipStatus.SENT.value})
        return PayslipOut.model_validate(record)

    async def delete_payslip(self, payslip_id: uuid.UUID) -> None:
        record = await self.store.get(PAYSLIPS, payslip_id)
        if record.get("file_url") and self.files is not None:
            path = self.files.path_from_url(record["file_url"])
            if path:
                await self.files.delete(path)
        await self.store.delete(PAYSLIPS, payslip_id)

    async def delete_employee_payslips(self, employee_id: uuid.UUID) -> int:
        rows = await self.store.list(PAYSLIPS, where={"employee_id": employee_id})
        removed = 0
        for row in rows:
            try:
                await self.delete_payslip(row["id"])
                removed += 1
            except NotFound:
                pass
        return removed
