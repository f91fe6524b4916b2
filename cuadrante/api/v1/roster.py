"""
Roster API – cuadrante semanal / mensual por local
"""
import uuid
from datetime import date

from fastapi import APIRouter, Query, status
from fastapi.responses import Response

from cuadrante.api.deps import Store
from cuadrante.schemas.roster import (
    AssignmentCreate, AssignmentOut, LocationScheduleOut, LocationScheduleUpdate,
    MonthView, RosterExport, WeekGrid,
)
from cuadrante.services.pdf_service import render_table
from cuadrante.services.roster_service import MONTH_CELL_LIMIT, RosterService, schedule_windows
from cuadrante.utils.calendar import monday_of

router = APIRouter(prefix="/roster/{location}", tags=["roster"])


def _schedule_out(record: dict) -> LocationScheduleOut:
    windows = schedule_windows(record)
    return LocationScheduleOut.model_validate({
        **record,
        "windows": {shift.value: str(window) for shift, window in windows.items()},
    })


# ── Vistas ────────────────────────────────────────────────────────────────────

@router.get("/week", response_model=WeekGrid)
async def get_week(location: str, store: Store, start: date | None = None, search: str | None = None):
    """Semana de 7 días desde ``start`` (por defecto el lunes de la semana actual)."""
    return await RosterService(store).list_week(location, start or monday_of(date.today()), search)


@router.get("/month", response_model=MonthView)
async def get_month(
    location: str,
    store: Store,
    month: date | None = None,
    limit: int | None = Query(default=MONTH_CELL_LIMIT, ge=1),
):
    return await RosterService(store).list_month(location, month or date.today(), limit)


@router.get("/export", response_model=RosterExport)
async def export_week(location: str, store: Store, start: date | None = None, search: str | None = None):
    return await RosterService(store).export_week(location, start or monday_of(date.today()), search)


@router.get("/export.pdf")
async def export_week_pdf(location: str, store: Store, start: date | None = None, search: str | None = None):
    export = await RosterService(store).export_week(location, start or monday_of(date.today()), search)
    pdf_bytes = render_table(export.rows, export.headers, export.title, export.subtitle)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{export.filename}"',
            "Cache-Control": "no-cache",
        },
    )


# ── Turnos ────────────────────────────────────────────────────────────────────

@router.post("/assignments", response_model=AssignmentOut, status_code=status.HTTP_201_CREATED)
async def assign_shift(location: str, payload: AssignmentCreate, store: Store):
    """Asigna (o sustituye) el turno de una persona en un día."""
    service = RosterService(store)
    person = await service.find_person(location, payload.person_id)
    return await service.assign(location, person, payload.date, payload.shift, payload.hours)


@router.delete("/assignments", status_code=status.HTTP_204_NO_CONTENT)
async def unassign_shift(location: str, person_id: uuid.UUID, day: date, store: Store):
    """Deja libre el día; no falla si ya estaba libre."""
    await RosterService(store).unassign(location, person_id, day)


# ── Horario del local ─────────────────────────────────────────────────────────

@router.get("/schedule", response_model=LocationScheduleOut)
async def get_schedule(location: str, store: Store):
    return _schedule_out(await RosterService(store).get_or_create_schedule(location))


@router.put("/schedule", response_model=LocationScheduleOut)
async def update_schedule(location: str, payload: LocationScheduleUpdate, store: Store):
    changes = payload.model_dump(exclude_unset=True)
    return _schedule_out(await RosterService(store).update_schedule(location, changes))
