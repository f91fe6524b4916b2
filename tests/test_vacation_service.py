"""
Tests del registro de vacaciones: codec (JSON / texto antiguo), operaciones puras
y VacationLedgerService contra ambos record stores.
"""
import json
from datetime import date

import pytest

from cuadrante.core.exceptions import MalformedLedgerError
from cuadrante.services.vacation_service import (
    ANNUAL_VACATION_ALLOWANCE,
    LegacyBlob,
    TakenDates,
    VacationLedger,
    VacationLedgerService,
    decode_ledger,
    normalize,
    parse_legacy,
    remaining_days,
    serialize,
)
from cuadrante.store import EMPLOYEES
from tests.conftest import add_employee

JUNE = [date(2024, 6, 1), date(2024, 6, 2), date(2024, 6, 3)]


# ── Codec ─────────────────────────────────────────────────────────────────────

def test_decode_empty_values():
    assert decode_ledger(None) == TakenDates(frozenset())
    assert decode_ledger("") == TakenDates(frozenset())
    assert decode_ledger("   ") == TakenDates(frozenset())


def test_decode_json_array():
    ledger = decode_ledger('["2024-06-01", "2024-06-02"]')
    assert ledger == TakenDates(frozenset(JUNE[:2]))


def test_decode_legacy_text_is_tagged():
    ledger = decode_ledger("2024-06-01|2024-06-02")
    assert isinstance(ledger, LegacyBlob)
    assert normalize(ledger) == TakenDates(frozenset(JUNE[:2]))


def test_decode_json_array_of_garbage_raises():
    with pytest.raises(MalformedLedgerError):
        decode_ledger('["yesterday"]')


def test_normalize_legacy_separators():
    """Pipes, commas, semicolons and whitespace are all accepted."""
    blob = LegacyBlob("2024-06-01 | 2024-06-02, 2024-06-03;")
    assert normalize(blob).days == frozenset(JUNE)


def test_parse_legacy_round_trip():
    taken = frozenset(JUNE)
    assert parse_legacy(serialize(taken)) == taken


def test_parse_legacy_equivalent_formats():
    assert parse_legacy("2024-06-01,2024-06-02,2024-06-03") == parse_legacy(serialize(JUNE))


def test_parse_legacy_unparsable_is_empty(caplog):
    assert parse_legacy("vacaciones en agosto") == frozenset()
    assert "Unparsable vacation ledger" in caplog.text


def test_serialize_is_sorted_json():
    assert json.loads(serialize([JUNE[2], JUNE[0]])) == ["2024-06-01", "2024-06-03"]


# ── Pure ledger ───────────────────────────────────────────────────────────────

def test_toggle_twice_restores_set():
    ledger = VacationLedger(taken=frozenset(JUNE[:2]))
    assert ledger.toggle_day(JUNE[2]).toggle_day(JUNE[2]) == ledger
    assert ledger.toggle_day(JUNE[0]).toggle_day(JUNE[0]) == ledger


@pytest.mark.parametrize("taken", [0, 1, 29, 30, 31, 45])
def test_remaining_never_negative(taken):
    assert remaining_days(taken) == max(0, ANNUAL_VACATION_ALLOWANCE - taken)
    assert remaining_days(taken) >= 0


def test_approve_moves_pending_to_taken():
    ledger = VacationLedger(pending=frozenset({JUNE[0]}))
    approved = ledger.approve(JUNE[0])
    assert approved.taken == frozenset({JUNE[0]})
    assert approved.pending == frozenset()
    # not pending → unchanged
    assert approved.approve(JUNE[1]) == approved


def test_to_record_derives_counters():
    record = VacationLedger(taken=frozenset(JUNE)).to_record()
    assert record["vacation_taken"] == 3
    assert record["vacation_remaining"] == 27
    assert json.loads(record["vacation_days"]) == ["2024-06-01", "2024-06-02", "2024-06-03"]
    assert json.loads(record["vacation_pending"]) == []


def test_from_record_ignores_stale_counters():
    ledger = VacationLedger.from_record({
        "vacation_days": '["2024-06-01"]',
        "vacation_taken": 12,
        "vacation_remaining": 18,
    })
    assert ledger.taken_count == 1
    assert ledger.remaining == 29


# ── Service (both backends) ───────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_ana_lopez_toggle_scenario(any_store):
    ana = await add_employee(any_store, "Ana López", vacation_days='["2024-06-01","2024-06-02"]')
    service = VacationLedgerService(any_store)

    summary = await service.toggle_day(ana["id"], date(2024, 6, 3))

    assert summary.taken_count == 3
    assert summary.remaining == 27
    assert summary.days == JUNE

    stored = await any_store.get(EMPLOYEES, ana["id"])
    assert json.loads(stored["vacation_days"]) == ["2024-06-01", "2024-06-02", "2024-06-03"]
    assert stored["vacation_taken"] == 3
    assert stored["vacation_remaining"] == 27


@pytest.mark.asyncio
async def test_toggle_rewrites_legacy_blob_as_json(any_store):
    emp = await add_employee(any_store, "Carmen", vacation_days="2024-06-01 | 2024-06-02")
    service = VacationLedgerService(any_store)

    await service.toggle_day(emp["id"], date(2024, 6, 2))

    stored = await any_store.get(EMPLOYEES, emp["id"])
    assert json.loads(stored["vacation_days"]) == ["2024-06-01"]
    assert await service.list_days(emp["id"]) == [date(2024, 6, 1)]


@pytest.mark.asyncio
async def test_pending_request_flow(any_store):
    emp = await add_employee(any_store, "Luis")
    service = VacationLedgerService(any_store)

    summary = await service.toggle_pending(emp["id"], date(2024, 8, 5))
    assert summary.pending == [date(2024, 8, 5)]
    assert summary.taken_count == 0

    summary = await service.approve_pending(emp["id"], date(2024, 8, 5))
    assert summary.pending == []
    assert summary.days == [date(2024, 8, 5)]
    assert summary.remaining == 29


@pytest.mark.asyncio
async def test_unparsable_stored_ledger_reads_as_empty(any_store):
    emp = await add_employee(any_store, "Marta", vacation_days="???")
    summary = await VacationLedgerService(any_store).summary(emp["id"])
    assert summary.days == []
    assert summary.remaining == ANNUAL_VACATION_ALLOWANCE
