from pydantic import BaseModel, Field
import uuid
from datetime import date, datetime
from typing import Optional

from cuadrante.core.enums import PayslipStatus


class PayslipOut(BaseModel):
    id: uuid.UUID
    employee_id: uuid.UUID
    employee_name: str
    period_start: date
    period_end: date
    amount: Optional[float] = None
    amount_transfer: Optional[float] = None
    amount_cash: Optional[float] = None
    status: PayslipStatus
    file_url: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class PayslipManual(BaseModel):
    """Importe registrado a mano: transferencia + efectivo."""
    employee_id: uuid.UUID
    month: date  # any day of the month (e.g. 2025-03-01)
    amount_transfer: float = Field(default=0, ge=0)
    amount_cash: float = Field(default=0, ge=0)


class PayslipGenerate(BaseModel):
    employee_id: uuid.UUID
    month: date


class PayrollRow(BaseModel):
    """One employee of a location with the payslip of the requested month, if any."""
    employee_id: uuid.UUID
    employee_name: str
    role: Optional[str] = None
    salary: Optional[float] = None
    payslip: Optional[PayslipOut] = None
