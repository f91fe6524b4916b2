"""
Record store contract.

Every table is a flat collection of dict records with an opaque ``id`` and a
``created_at`` timestamp. Listing returns records in insertion order.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from cuadrante.core.exceptions import NotFound

EMPLOYEES = "employees"
EXTRAS = "extras"
SHIFT_ASSIGNMENTS = "shift_assignments"
LOCATION_SCHEDULES = "location_schedules"
PAYSLIPS = "payslips"

TABLES = (EMPLOYEES, EXTRAS, SHIFT_ASSIGNMENTS, LOCATION_SCHEDULES, PAYSLIPS)

Record = dict[str, Any]
# field -> (low, high), both inclusive, either side may be None
Ranges = dict[str, tuple[Any, Any]]


class RecordStore(ABC):

    @abstractmethod
    async def list(
        self,
        table: str,
        where: dict[str, Any] | None = None,
        ranges: Ranges | None = None,
    ) -> list[Record]:
        """Records matching all equality filters and range bounds."""

    @abstractmethod
    async def get(self, table: str, record_id: Any) -> Record:
        """Raises NotFound if absent."""

    @abstractmethod
    async def create(self, table: str, record: Record) -> Record:
        """Inserts and returns the record with its generated id."""

    @abstractmethod
    async def update(self, table: str, record_id: Any, changes: Record) -> Record:
        """Merges ``changes`` into the record. Raises NotFound if absent."""

    @abstractmethod
    async def delete(self, table: str, record_id: Any) -> None:
        """Raises NotFound if absent."""

    async def replace(self, table: str, where: dict[str, Any], record: Record) -> Record:
        """Deletes every record matching ``where`` and inserts ``record``.

        Not atomic here: the slot is empty between the deletes and the insert.
        Backends that can do both in one write override this.
        """
        for row in await self.list(table, where=where):
            try:
                await self.delete(table, row["id"])
            except NotFound:
                pass  # removed concurrently
        return await self.create(table, record)

    async def first(self, table: str, where: dict[str, Any]) -> Record | None:
        rows = await self.list(table, where=where)
        return rows[0] if rows else None


def check_table(table: str) -> str:
    if table not in TABLES:
        raise ValueError(f"Unknown table: {table}")
    return table
