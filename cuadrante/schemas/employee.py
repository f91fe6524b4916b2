from pydantic import BaseModel, field_validator
from typing import Optional
import uuid
from datetime import date, datetime, time

from cuadrante.core.enums import Role, ShiftType
from cuadrante.schemas.vacation import LedgerSummary


def _clean_name(value: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValueError("El nombre no puede estar vacío")
    return value


def _clean_role(value):
    # stored as the label; free text from old rows is mapped once here
    if value in (None, ""):
        return None
    if isinstance(value, Role):
        return value.value
    role = Role.from_label(value)
    if role is None:
        raise ValueError(f"Puesto desconocido: {value}")
    return role.value


def _clean_shift(value):
    if value in (None, ""):
        return None
    return ShiftType(value).value


# ── Empleados ─────────────────────────────────────────────────────────────────

class EmployeeCreate(BaseModel):
    name: str
    location: str
    role: Optional[str] = None
    dni: Optional[str] = None
    contract: Optional[str] = None
    salary: Optional[float] = None    # bruto anual
    default_shift: Optional[str] = None
    iban: Optional[str] = None
    food_handler: Optional[str] = None
    start_date: Optional[date] = None
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v):
        return _clean_name(v)

    @field_validator("role")
    @classmethod
    def known_role(cls, v):
        return _clean_role(v)

    @field_validator("default_shift")
    @classmethod
    def known_shift(cls, v):
        return _clean_shift(v)


class EmployeeUpdate(BaseModel):
    name: Optional[str] = None
    location: Optional[str] = None
    role: Optional[str] = None
    dni: Optional[str] = None
    contract: Optional[str] = None
    salary: Optional[float] = None
    default_shift: Optional[str] = None
    iban: Optional[str] = None
    food_handler: Optional[str] = None
    start_date: Optional[date] = None
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v):
        # only runs for values sent explicitly: null is not "unchanged"
        return _clean_name(v)

    @field_validator("location")
    @classmethod
    def location_not_null(cls, v):
        if v is None or not v.strip():
            raise ValueError("El local es obligatorio")
        return v

    @field_validator("role")
    @classmethod
    def known_role(cls, v):
        return _clean_role(v)

    @field_validator("default_shift")
    @classmethod
    def known_shift(cls, v):
        return _clean_shift(v)


class EmployeeOut(BaseModel):
    id: uuid.UUID
    name: str
    location: str
    role: Optional[str] = None
    dni: Optional[str] = None
    contract: Optional[str] = None
    salary: Optional[float] = None
    default_shift: Optional[str] = None
    iban: Optional[str] = None
    food_handler: Optional[str] = None
    start_date: Optional[date] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    seniority: str                 # "2 Años 3 meses"
    vacations: LedgerSummary

    model_config = {"from_attributes": True}


# ── Extras ────────────────────────────────────────────────────────────────────

class ExtraCreate(BaseModel):
    name: str
    location: str
    role: Optional[str] = None
    phone: Optional[str] = None
    default_shift: Optional[str] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v):
        return _clean_name(v)

    @field_validator("role")
    @classmethod
    def known_role(cls, v):
        return _clean_role(v)

    @field_validator("default_shift")
    @classmethod
    def known_shift(cls, v):
        return _clean_shift(v)


class ExtraOut(BaseModel):
    id: uuid.UUID
    name: str
    location: str
    role: Optional[str] = None
    phone: Optional[str] = None
    default_shift: Optional[str] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
