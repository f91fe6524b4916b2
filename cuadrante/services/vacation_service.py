"""
Vacation ledger: which days an employee has taken off and which are pending.

Storage keeps the taken set as a JSON array of ISO dates. Older rows hold a
pipe/comma separated text blob instead; such rows are read as a
``LegacyBlob`` and normalized to ``TakenDates``; they are never written back
in that form. ``vacation_taken`` / ``vacation_remaining`` are still written on
every mutation for readers of the old schema, but always derived here from
the date set.
"""
from __future__ import annotations

import json
import logging
import re
import uuid
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Union

from cuadrante.core.exceptions import MalformedLedgerError
from cuadrante.schemas.vacation import LedgerSummary
from cuadrante.store.base import RecordStore, EMPLOYEES

logger = logging.getLogger(__name__)

ANNUAL_VACATION_ALLOWANCE = 30

_LEGACY_SEPARATORS = re.compile(r"[|,;\s]+")


# ── Storage boundary ──────────────────────────────────────────────────────────

@dataclass(frozen=True)
class TakenDates:
    days: frozenset[date]


@dataclass(frozen=True)
class LegacyBlob:
    raw: str


Ledger = Union[TakenDates, LegacyBlob]


def _parse_day(value: Any, raw: str) -> date:
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise MalformedLedgerError(raw)
    try:
        return date.fromisoformat(value.strip())
    except ValueError as e:
        raise MalformedLedgerError(raw) from e


def decode_ledger(raw: Any) -> Ledger:
    """Classifies a stored payload. Raises MalformedLedgerError for a JSON array of non-dates."""
    if raw is None:
        return TakenDates(frozenset())
    if isinstance(raw, (list, tuple, set, frozenset)):
        text = json.dumps([str(v) for v in raw])
        return TakenDates(frozenset(_parse_day(v, text) for v in raw))

    text = str(raw).strip()
    if not text:
        return TakenDates(frozenset())
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        return LegacyBlob(text)
    if isinstance(parsed, list):
        return TakenDates(frozenset(_parse_day(v, text) for v in parsed))
    return LegacyBlob(text)


def normalize(ledger: Ledger) -> TakenDates:
    if isinstance(ledger, TakenDates):
        return ledger
    tokens = [t for t in _LEGACY_SEPARATORS.split(ledger.raw) if t]
    return TakenDates(frozenset(_parse_day(t, ledger.raw) for t in tokens))


def parse_legacy(raw: Any) -> frozenset[date]:
    """Taken-date set from a JSON array or legacy text; empty set (logged) if unparsable."""
    try:
        return normalize(decode_ledger(raw)).days
    except MalformedLedgerError as e:
        logger.warning("%s – treating as empty", e)
        return frozenset()


def serialize(days) -> str:
    return json.dumps(sorted(d.isoformat() for d in days))


# ── Pure ledger ───────────────────────────────────────────────────────────────

def remaining_days(taken_count: int, allowance: int = ANNUAL_VACATION_ALLOWANCE) -> int:
    return max(0, allowance - taken_count)


def toggle(days: frozenset[date], day: date) -> frozenset[date]:
    return days - {day} if day in days else days | {day}


@dataclass(frozen=True)
class VacationLedger:
    taken: frozenset[date] = field(default_factory=frozenset)
    pending: frozenset[date] = field(default_factory=frozenset)

    @classmethod
    def from_record(cls, record: dict) -> "VacationLedger":
        return cls(
            taken=parse_legacy(record.get("vacation_days")),
            pending=parse_legacy(record.get("vacation_pending")),
        )

    @property
    def taken_count(self) -> int:
        return len(self.taken)

    @property
    def remaining(self) -> int:
        return remaining_days(self.taken_count)

    def days(self) -> list[date]:
        return sorted(self.taken)

    def toggle_day(self, day: date) -> "VacationLedger":
        return VacationLedger(taken=toggle(self.taken, day), pending=self.pending)

    def toggle_pending(self, day: date) -> "VacationLedger":
        return VacationLedger(taken=self.taken, pending=toggle(self.pending, day))

    def approve(self, day: date) -> "VacationLedger":
        """Moves a pending request into the taken set (no-op if not pending)."""
        if day not in self.pending:
            return self
        return VacationLedger(taken=self.taken | {day}, pending=self.pending - {day})

    def to_record(self) -> dict:
        return {
            "vacation_days": serialize(self.taken),
            "vacation_pending": serialize(self.pending),
            "vacation_taken": self.taken_count,
            "vacation_remaining": self.remaining,
        }

    def summary(self, employee_id) -> LedgerSummary:
        return LedgerSummary(
            employee_id=employee_id,
            days=self.days(),
            pending=sorted(self.pending),
            taken_count=self.taken_count,
            remaining=self.remaining,
            allowance=ANNUAL_VACATION_ALLOWANCE,
        )


# ── Service ───────────────────────────────────────────────────────────────────

class VacationLedgerService:
    """Read-modify-write of a ledger through the record store."""

    def __init__(self, store: RecordStore):
        self.store = store

    async def load(self, employee_id: uuid.UUID) -> VacationLedger:
        record = await self.store.get(EMPLOYEES, employee_id)
        return VacationLedger.from_record(record)

    async def persist(self, employee_id: uuid.UUID, ledger: VacationLedger) -> None:
        # one update: date sets and counters never drift apart
        await self.store.update(EMPLOYEES, employee_id, ledger.to_record())

    async def list_days(self, employee_id: uuid.UUID) -> list[date]:
        return (await self.load(employee_id)).days()

    async def summary(self, employee_id: uuid.UUID) -> LedgerSummary:
        return (await self.load(employee_id)).summary(employee_id)

    async def toggle_day(self, employee_id: uuid.UUID, day: date) -> LedgerSummary:
        ledger = (await self.load(employee_id)).toggle_day(day)
        await self.persist(employee_id, ledger)
        return ledger.summary(employee_id)

    async def toggle_pending(self, employee_id: uuid.UUID, day: date) -> LedgerSummary:
        ledger = (await self.load(employee_id)).toggle_pending(day)
        await self.persist(employee_id, ledger)
        return ledger.summary(employee_id)

    async def approve_pending(self, employee_id: uuid.UUID, day: date) -> LedgerSummary:
        ledger = (await self.load(employee_id)).approve(day)
        await self.persist(employee_id, ledger)
        return ledger.summary(employee_id)
