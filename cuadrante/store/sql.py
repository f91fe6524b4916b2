from __future__ import annotations

import logging
import uuid
from datetime import date, datetime, time
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.inspection import inspect

from cuadrante.core.exceptions import NotFound, PersistenceError
from cuadrante.models import Employee, Extra, ShiftAssignment, LocationSchedule, Payslip
from cuadrante.store.base import (
    RecordStore, Record, Ranges, check_table,
    EMPLOYEES, EXTRAS, SHIFT_ASSIGNMENTS, LOCATION_SCHEDULES, PAYSLIPS,
)

logger = logging.getLogger(__name__)

MODELS = {
    EMPLOYEES: Employee,
    EXTRAS: Extra,
    SHIFT_ASSIGNMENTS: ShiftAssignment,
    LOCATION_SCHEDULES: LocationSchedule,
    PAYSLIPS: Payslip,
}

_PARSERS = {
    uuid.UUID: uuid.UUID,
    date: date.fromisoformat,
    time: time.fromisoformat,
    datetime: datetime.fromisoformat,
}


def _coerce(column, value: Any) -> Any:
    """ISO strings coming from JSON payloads → the column's python type."""
    if value is None or not isinstance(value, str):
        return value
    try:
        python_type = column.type.python_type
    except NotImplementedError:
        return value
    parser = _PARSERS.get(python_type)
    return parser(value) if parser else value


def _to_record(obj) -> Record:
    return {attr.key: getattr(obj, attr.key) for attr in inspect(obj).mapper.column_attrs}


class SqlRecordStore(RecordStore):
    """RecordStore over the SQLAlchemy models, one commit per mutation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _model(self, table: str):
        return MODELS[check_table(table)]

    def _column(self, model, field: str):
        column = model.__table__.columns.get(field)
        if column is None:
            raise ValueError(f"{model.__tablename__} has no field {field!r}")
        return column

    async def list(
        self,
        table: str,
        where: dict[str, Any] | None = None,
        ranges: Ranges | None = None,
    ) -> list[Record]:
        model = self._model(table)
        query = select(model)
        for field, value in (where or {}).items():
            column = self._column(model, field)
            query = query.where(column == _coerce(column, value))
        for field, (low, high) in (ranges or {}).items():
            column = self._column(model, field)
            if low is not None:
                query = query.where(column >= _coerce(column, low))
            if high is not None:
                query = query.where(column <= _coerce(column, high))

        try:
            result = await self.db.execute(query.order_by(model.created_at))
        except SQLAlchemyError as e:
            logger.error("list %s failed: %s", table, e)
            raise PersistenceError(f"Could not read {table}") from e
        return [_to_record(obj) for obj in result.scalars().all()]

    async def _load(self, table: str, record_id: Any):
        model = self._model(table)
        try:
            obj = await self.db.get(model, _coerce(self._column(model, "id"), record_id))
        except (SQLAlchemyError, ValueError) as e:
            raise NotFound(table, record_id) from e
        if obj is None:
            raise NotFound(table, record_id)
        return obj

    async def get(self, table: str, record_id: Any) -> Record:
        return _to_record(await self._load(table, record_id))

    async def create(self, table: str, record: Record) -> Record:
        model = self._model(table)
        values = {
            field: _coerce(self._column(model, field), value)
            for field, value in record.items()
        }
        obj = model(**values)
        self.db.add(obj)
        await self._commit(table, "create")
        await self.db.refresh(obj)
        return _to_record(obj)

    async def update(self, table: str, record_id: Any, changes: Record) -> Record:
        obj = await self._load(table, record_id)
        model = type(obj)
        for field, value in changes.items():
            if field == "id":
                continue
            setattr(obj, field, _coerce(self._column(model, field), value))
        await self._commit(table, "update")
        await self.db.refresh(obj)
        return _to_record(obj)

    async def delete(self, table: str, record_id: Any) -> None:
        obj = await self._load(table, record_id)
        await self.db.delete(obj)
        await self._commit(table, "delete")

    async def replace(self, table: str, where: dict[str, Any], record: Record) -> Record:
        """Bulk delete of the matching rows plus the insert, one transaction."""
        model = self._model(table)
        stmt = delete(model)
        for field, value in where.items():
            column = self._column(model, field)
            stmt = stmt.where(column == _coerce(column, value))
        obj = model(**{
            field: _coerce(self._column(model, field), value)
            for field, value in record.items()
        })
        try:
            await self.db.execute(stmt)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("replace on %s failed: %s", table, e)
            raise PersistenceError(f"Could not replace record in {table}") from e
        self.db.add(obj)
        await self._commit(table, "replace")
        await self.db.refresh(obj)
        return _to_record(obj)

    async def _commit(self, table: str, action: str) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("%s on %s failed: %s", action, table, e)
            raise PersistenceError(f"Could not {action} record in {table}") from e
