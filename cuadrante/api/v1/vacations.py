"""
Vacations API – días de vacaciones por empleado
"""
import uuid
from datetime import date

from fastapi import APIRouter

from cuadrante.api.deps import Store
from cuadrante.schemas.vacation import LedgerSummary, VacationDayToggle
from cuadrante.services.vacation_service import VacationLedgerService

router = APIRouter(prefix="/employees/{employee_id}/vacations", tags=["vacations"])


@router.get("", response_model=LedgerSummary)
async def get_vacations(employee_id: uuid.UUID, store: Store):
    return await VacationLedgerService(store).summary(employee_id)


@router.get("/days", response_model=list[date])
async def list_vacation_days(employee_id: uuid.UUID, store: Store):
    return await VacationLedgerService(store).list_days(employee_id)


@router.post("/toggle", response_model=LedgerSummary)
async def toggle_vacation_day(employee_id: uuid.UUID, payload: VacationDayToggle, store: Store):
    """Marca el día como vacaciones, o lo desmarca si ya lo estaba."""
    return await VacationLedgerService(store).toggle_day(employee_id, payload.date)


@router.post("/pending/toggle", response_model=LedgerSummary)
async def toggle_pending_day(employee_id: uuid.UUID, payload: VacationDayToggle, store: Store):
    return await VacationLedgerService(store).toggle_pending(employee_id, payload.date)


@router.post("/pending/approve", response_model=LedgerSummary)
async def approve_pending_day(employee_id: uuid.UUID, payload: VacationDayToggle, store: Store):
    """Pasa una solicitud pendiente a días disfrutados."""
    return await VacationLedgerService(store).approve_pending(employee_id, payload.date)
