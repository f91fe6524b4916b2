from cuadrante.schemas.document import DocumentOut
from cuadrante.schemas.employee import EmployeeCreate, EmployeeUpdate, EmployeeOut, ExtraCreate, ExtraOut
from cuadrante.schemas.payroll import PayslipOut, PayslipManual, PayslipGenerate, PayrollRow
from cuadrante.schemas.roster import (
    TimeWindow, Person, AssignmentCreate, AssignmentOut, WeekRow, WeekGrid,
    MonthDay, MonthView, RosterExport, LocationScheduleUpdate, LocationScheduleOut,
)
from cuadrante.schemas.vacation import VacationDayToggle, LedgerSummary

__all__ = [
    "DocumentOut",
    "EmployeeCreate", "EmployeeUpdate", "EmployeeOut", "ExtraCreate", "ExtraOut",
    "PayslipOut", "PayslipManual", "PayslipGenerate", "PayrollRow",
    "TimeWindow", "Person", "AssignmentCreate", "AssignmentOut", "WeekRow", "WeekGrid",
    "MonthDay", "MonthView", "RosterExport", "LocationScheduleUpdate", "LocationScheduleOut",
    "VacationDayToggle", "LedgerSummary",
]
