"""
Roster grid: at most one shift per (person, day, location).

``assign`` goes through ``RecordStore.replace``: every assignment already in
the slot is deleted and the new one inserted. The SQL and JSON stores do this
in one write; other stores fall back to delete-then-insert, where two
concurrent assigns can leave a duplicate behind (last write wins). Reads
tolerate duplicates and use the oldest entry of a slot.
"""
from __future__ import annotations

import logging
import uuid
from collections import defaultdict
from datetime import date, time

from cuadrante.core.enums import PersonKind, ShiftType, fold
from cuadrante.core.exceptions import NotFound
from cuadrante.schemas.roster import (
    AssignmentOut, MonthDay, MonthView, Person, RosterExport, TimeWindow, WeekGrid, WeekRow,
)
from cuadrante.store.base import RecordStore, EMPLOYEES, EXTRAS, SHIFT_ASSIGNMENTS, LOCATION_SCHEDULES
from cuadrante.utils.calendar import (
    day_header, month_bounds, month_days, month_label, short_date, week_days, week_label,
)
from cuadrante.utils.locations import check_location

logger = logging.getLogger(__name__)

# Used when a location has no schedule row yet (or a field of it is empty)
DEFAULT_WINDOWS: dict[ShiftType, TimeWindow] = {
    ShiftType.MORNING:   TimeWindow(start=time(9, 0), end=time(15, 0)),
    ShiftType.AFTERNOON: TimeWindow(start=time(16, 0), end=time(22, 0)),
    ShiftType.EXTRA:     TimeWindow(start=time(20, 0), end=time(2, 0)),
}

SCHEDULE_FIELDS: dict[ShiftType, tuple[str, str]] = {
    ShiftType.MORNING:   ("morning_start", "morning_end"),
    ShiftType.AFTERNOON: ("afternoon_start", "afternoon_end"),
    ShiftType.EXTRA:     ("extra_start", "extra_end"),
}

MONTH_CELL_LIMIT = 4
EMPTY_CELL = "-"


# ── Pure helpers ──────────────────────────────────────────────────────────────

def _as_time(value) -> time | None:
    if value is None or isinstance(value, time):
        return value
    return time.fromisoformat(str(value))


def schedule_windows(schedule: dict | None) -> dict[ShiftType, TimeWindow]:
    """Default window per shift type for a location schedule row (None → hardcoded defaults)."""
    windows = dict(DEFAULT_WINDOWS)
    if not schedule:
        return windows
    for shift, (start_field, end_field) in SCHEDULE_FIELDS.items():
        fallback = DEFAULT_WINDOWS[shift]
        windows[shift] = TimeWindow(
            start=_as_time(schedule.get(start_field)) or fallback.start,
            end=_as_time(schedule.get(end_field)) or fallback.end,
        )
    return windows


def resolve_hours(
    person: Person,
    shift: ShiftType,
    windows: dict[ShiftType, TimeWindow] | None = None,
) -> str | None:
    """Extras with their own window keep it; everybody else gets the location default.

    Rest days have no hours.
    """
    if shift == ShiftType.REST:
        return None
    explicit = person.explicit_window
    if explicit is not None:
        return str(explicit)
    window = (windows or DEFAULT_WINDOWS).get(shift)
    return str(window) if window else None


def sort_people(people: list[Person]) -> list[Person]:
    return sorted(people, key=lambda p: (p.rank, fold(p.name), p.name))


def filter_people(people: list[Person], term: str | None) -> list[Person]:
    """Name or role substring match, case and accent insensitive. Keeps the input order."""
    needle = fold(term)
    if not needle:
        return list(people)
    return [p for p in people if needle in fold(p.name) or needle in fold(p.role)]


def index_slots(assignments: list[AssignmentOut]) -> dict[tuple[uuid.UUID, date], AssignmentOut]:
    slots: dict[tuple[uuid.UUID, date], AssignmentOut] = {}
    for a in assignments:
        key = (a.person_id, a.date)
        if key in slots:
            logger.warning("Duplicate assignment for %s on %s (%s), keeping the oldest",
                           a.person_name, a.date, a.location)
            continue
        slots[key] = a
    return slots


def cell_text(assignment: AssignmentOut | None, windows: dict[ShiftType, TimeWindow]) -> str:
    if assignment is None:
        return EMPTY_CELL
    hours = assignment.hours
    if not hours:
        window = windows.get(assignment.shift)
        hours = str(window) if window else ""
    return f"{assignment.shift.label}\n{hours}" if hours else assignment.shift.label


# ── Service ───────────────────────────────────────────────────────────────────

class RosterService:

    def __init__(self, store: RecordStore):
        self.store = store

    # People

    async def people(self, location: str, search: str | None = None) -> list[Person]:
        location = check_location(location)
        employees = await self.store.list(EMPLOYEES, where={"location": location})
        extras = await self.store.list(EXTRAS, where={"location": location})
        people = [Person.from_record(r, PersonKind.EMPLOYEE) for r in employees]
        people += [Person.from_record(r, PersonKind.EXTRA) for r in extras]
        return filter_people(sort_people(people), search)

    async def find_person(self, location: str, person_id: uuid.UUID) -> Person:
        location = check_location(location)
        for table, kind in ((EMPLOYEES, PersonKind.EMPLOYEE), (EXTRAS, PersonKind.EXTRA)):
            try:
                record = await self.store.get(table, person_id)
            except NotFound:
                continue
            person = Person.from_record(record, kind)
            if person.location == location:
                return person
        raise NotFound("people", person_id)

    # Location schedule

    async def schedule(self, location: str) -> dict | None:
        return await self.store.first(LOCATION_SCHEDULES, {"location": check_location(location)})

    async def get_or_create_schedule(self, location: str) -> dict:
        location = check_location(location)
        existing = await self.schedule(location)
        if existing:
            return existing
        values = {"location": location}
        for shift, (start_field, end_field) in SCHEDULE_FIELDS.items():
            values[start_field] = DEFAULT_WINDOWS[shift].start
            values[end_field] = DEFAULT_WINDOWS[shift].end
        logger.info("Creating default schedule for %s", location)
        return await self.store.create(LOCATION_SCHEDULES, values)

    async def update_schedule(self, location: str, changes: dict) -> dict:
        current = await self.get_or_create_schedule(location)
        return await self.store.update(LOCATION_SCHEDULES, current["id"], changes)

    async def windows(self, location: str) -> dict[ShiftType, TimeWindow]:
        return schedule_windows(await self.schedule(location))

    # Assignments

    async def slot(self, location: str, person_id: uuid.UUID, day: date) -> list[AssignmentOut]:
        rows = await self.store.list(
            SHIFT_ASSIGNMENTS,
            where={"person_id": person_id, "date": day, "location": check_location(location)},
        )
        return [AssignmentOut.model_validate(r) for r in rows]

    async def _delete_all(self, assignments: list[AssignmentOut]) -> int:
        removed = 0
        for a in assignments:
            try:
                await self.store.delete(SHIFT_ASSIGNMENTS, a.id)
                removed += 1
            except NotFound:
                pass  # already gone (concurrent unassign)
        return removed

    async def assign(
        self,
        location: str,
        person: Person,
        day: date,
        shift: ShiftType,
        explicit_hours: str | TimeWindow | None = None,
    ) -> AssignmentOut:
        location = check_location(location)
        shift = ShiftType(shift)
        if explicit_hours:
            window = explicit_hours if isinstance(explicit_hours, TimeWindow) else TimeWindow.parse(explicit_hours)
            hours = str(window)
        else:
            hours = resolve_hours(person, shift, await self.windows(location))

        slot = {"person_id": person.id, "date": day, "location": location}
        record = await self.store.replace(SHIFT_ASSIGNMENTS, slot, {
            **slot,
            "person_name": person.name,
            "week": week_label(day),
            "shift": shift.value,
            "hours": hours,
        })
        return AssignmentOut.model_validate(record)

    async def unassign(self, location: str, person_id: uuid.UUID, day: date) -> int:
        """Clears the slot. Returns how many entries were removed (0 if it was empty)."""
        return await self._delete_all(await self.slot(location, person_id, day))

    async def delete_person_assignments(self, person_id: uuid.UUID) -> int:
        rows = await self.store.list(SHIFT_ASSIGNMENTS, where={"person_id": person_id})
        return await self._delete_all([AssignmentOut.model_validate(r) for r in rows])

    async def assignments(self, location: str, start: date, end: date) -> list[AssignmentOut]:
        rows = await self.store.list(
            SHIFT_ASSIGNMENTS,
            where={"location": check_location(location)},
            ranges={"date": (start, end)},
        )
        return [AssignmentOut.model_validate(r) for r in rows]

    # Views

    async def list_week(self, location: str, week_start: date, search: str | None = None) -> WeekGrid:
        location = check_location(location)
        days = week_days(week_start)
        people = await self.people(location, search)
        windows = await self.windows(location)
        slots = index_slots(await self.assignments(location, days[0], days[-1]))

        rows = [
            WeekRow(
                person=person,
                hours=resolve_hours(person, person.default_shift or ShiftType.MORNING, windows),
                cells=[slots.get((person.id, d)) for d in days],
            )
            for person in people
        ]
        return WeekGrid(
            location=location,
            week_start=week_start,
            week=week_label(week_start),
            days=days,
            rows=rows,
        )

    async def list_month(self, location: str, month: date, limit_per_day: int | None = None) -> MonthView:
        location = check_location(location)
        start, end = month_bounds(month)
        buckets: dict[date, list[AssignmentOut]] = defaultdict(list)
        for a in await self.assignments(location, start, end):
            buckets[a.date].append(a)

        days = []
        for d in month_days(start):
            entries = buckets.get(d, [])
            shown = entries if limit_per_day is None else entries[:limit_per_day]
            days.append(MonthDay(date=d, assignments=shown, hidden=len(entries) - len(shown)))
        return MonthView(location=location, month=start, label=month_label(start), days=days)

    async def export_week(self, location: str, week_start: date, search: str | None = None) -> RosterExport:
        """Printable projection of the week grid: one row per person, "-" for empty days."""
        grid = await self.list_week(location, week_start, search)
        windows = await self.windows(grid.location)
        last_day = grid.days[-1]
        return RosterExport(
            title=f"Horario - {grid.location}",
            subtitle=f"{short_date(week_start)} - {short_date(last_day)}",
            filename=f"horario_{grid.location.replace(' ', '_')}_{week_start.isoformat()}.pdf",
            headers=["Empleado"] + [day_header(d) for d in grid.days],
            rows=[
                [row.person.name] + [cell_text(cell, windows) for cell in row.cells]
                for row in grid.rows
            ],
        )
