from pydantic import BaseModel
import uuid
from datetime import date as Date


class VacationDayToggle(BaseModel):
    date: Date


class LedgerSummary(BaseModel):
    employee_id: uuid.UUID
    days: list[Date]        # taken, ascending
    pending: list[Date]     # requested, ascending
    taken_count: int
    remaining: int
    allowance: int
