from cuadrante.models.employee import Employee, Extra
from cuadrante.models.shift import ShiftAssignment, LocationSchedule
from cuadrante.models.payroll import Payslip

__all__ = [
    "Employee",
    "Extra",
    "ShiftAssignment",
    "LocationSchedule",
    "Payslip",
]
