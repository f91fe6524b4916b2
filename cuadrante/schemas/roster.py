from __future__ import annotations

import re
import uuid
from datetime import date as Date, datetime as DateTime, time as Time
from typing import Optional

from pydantic import BaseModel, field_validator

from cuadrante.core.enums import PersonKind, ShiftType, role_rank
from cuadrante.core.exceptions import ValidationError

_WINDOW = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*[-–]\s*(\d{1,2}):(\d{2})\s*$")


class TimeWindow(BaseModel):
    """Start/end clock times; end < start means the shift crosses midnight."""
    start: Time
    end: Time

    @classmethod
    def parse(cls, text: str) -> TimeWindow:
        match = _WINDOW.match(text or "")
        if not match:
            raise ValidationError(f"Horario no válido: {text!r} (formato HH:MM - HH:MM)")
        h1, m1, h2, m2 = (int(g) for g in match.groups())
        try:
            return cls(start=Time(h1, m1), end=Time(h2, m2))
        except ValueError as e:
            raise ValidationError(f"Horario no válido: {text!r}") from e

    def __str__(self) -> str:
        return f"{self.start:%H:%M} - {self.end:%H:%M}"


class Person(BaseModel):
    """Employee or extra as seen by the roster."""
    id: uuid.UUID
    kind: PersonKind
    name: str
    role: Optional[str] = None
    location: str
    default_shift: Optional[ShiftType] = None
    start_time: Optional[Time] = None   # extras only
    end_time: Optional[Time] = None

    @field_validator("default_shift", mode="before")
    @classmethod
    def _lenient_shift(cls, value):
        if value in (None, ""):
            return None
        try:
            return ShiftType(value)
        except ValueError:
            return None

    @classmethod
    def from_record(cls, record: dict, kind: PersonKind) -> Person:
        return cls.model_validate({**record, "kind": kind})

    @property
    def rank(self) -> int:
        return role_rank(self.role)

    @property
    def explicit_window(self) -> Optional[TimeWindow]:
        if self.kind == PersonKind.EXTRA and self.start_time and self.end_time:
            return TimeWindow(start=self.start_time, end=self.end_time)
        return None


# ── Assignments ───────────────────────────────────────────────────────────────

class AssignmentCreate(BaseModel):
    person_id: uuid.UUID
    date: Date
    shift: ShiftType
    hours: Optional[str] = None  # "10:00 - 14:00", overrides the location default


class AssignmentOut(BaseModel):
    id: uuid.UUID
    person_id: uuid.UUID
    person_name: str
    location: str
    date: Date
    week: str
    shift: ShiftType
    hours: Optional[str] = None
    created_at: Optional[DateTime] = None

    model_config = {"from_attributes": True}


class WeekRow(BaseModel):
    person: Person
    hours: Optional[str] = None                    # the person's own default window
    cells: list[Optional[AssignmentOut]]    # 7 entries, Monday first if week_start is a Monday


class WeekGrid(BaseModel):
    location: str
    week_start: Date
    week: str
    days: list[Date]
    rows: list[WeekRow]


class MonthDay(BaseModel):
    date: Date
    assignments: list[AssignmentOut]
    hidden: int = 0   # entries cut by the display cap


class MonthView(BaseModel):
    location: str
    month: Date
    label: str
    days: list[MonthDay]


class RosterExport(BaseModel):
    title: str
    subtitle: str
    filename: str
    headers: list[str]
    rows: list[list[str]]


# ── Location schedule ─────────────────────────────────────────────────────────

class LocationScheduleUpdate(BaseModel):
    morning_start: Optional[Time] = None
    morning_end: Optional[Time] = None
    afternoon_start: Optional[Time] = None
    afternoon_end: Optional[Time] = None
    extra_start: Optional[Time] = None
    extra_end: Optional[Time] = None


class LocationScheduleOut(BaseModel):
    id: uuid.UUID
    location: str
    morning_start: Optional[Time] = None
    morning_end: Optional[Time] = None
    afternoon_start: Optional[Time] = None
    afternoon_end: Optional[Time] = None
    extra_start: Optional[Time] = None
    extra_end: Optional[Time] = None
    windows: dict[str, str]
