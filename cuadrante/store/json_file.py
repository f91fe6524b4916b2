"""
File-backed record store: one pretty-printed JSON array per table in DATA_DIR.

Writes go through a temporary file and ``os.replace`` so a crash mid-write
leaves the previous content intact. Writes to the same file are serialized
with an asyncio.Lock (single process only).
"""
from __future__ import annotations

import asyncio
import json
import logging
import os
import uuid
from datetime import date, datetime, time, timezone
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any

from cuadrante.core.exceptions import NotFound, PersistenceError
from cuadrante.store.base import RecordStore, Record, Ranges, check_table

logger = logging.getLogger(__name__)


def to_jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    return value


class JsonRecordStore(RecordStore):
    _locks: dict[Path, asyncio.Lock] = {}

    def __init__(self, data_dir: str | Path):
        self.data_dir = Path(data_dir)

    def _path(self, table: str) -> Path:
        return self.data_dir / f"{check_table(table)}.json"

    def _lock(self, path: Path) -> asyncio.Lock:
        lock = self._locks.get(path)
        if lock is None:
            lock = self._locks[path] = asyncio.Lock()
        return lock

    def _load_rows(self, table: str) -> list[Record]:
        path = self._path(table)
        if not path.exists():
            return []
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            raise PersistenceError(f"Could not read {path}") from e
        if not content.strip():
            return []
        try:
            rows = json.loads(content)
        except json.JSONDecodeError as e:
            # never fall back to [] here: the next save would wipe the table
            logger.error("Corrupt data file %s: %s", path, e)
            raise PersistenceError(f"Corrupt data file {path.name}") from e
        if not isinstance(rows, list):
            raise PersistenceError(f"{path.name} does not contain a JSON array")
        return rows

    def _save_rows(self, table: str, rows: list[Record]) -> None:
        path = self._path(table)
        tmp = path.with_suffix(".json.tmp")
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(rows, indent=2, ensure_ascii=False), encoding="utf-8")
            os.replace(tmp, path)
        except OSError as e:
            logger.error("Writing %s failed: %s", path, e)
            raise PersistenceError(f"Could not write {path.name}") from e

    @staticmethod
    def _matches(row: Record, where: dict[str, Any], ranges: Ranges) -> bool:
        for field, value in where.items():
            if row.get(field) != to_jsonable(value):
                return False
        for field, (low, high) in ranges.items():
            current = row.get(field)
            if current is None:
                return False
            if low is not None and current < to_jsonable(low):
                return False
            if high is not None and current > to_jsonable(high):
                return False
        return True

    @staticmethod
    def _index(rows: list[Record], table: str, record_id: Any) -> int:
        wanted = to_jsonable(record_id)
        for idx, row in enumerate(rows):
            if row.get("id") == wanted:
                return idx
        raise NotFound(table, record_id)

    async def list(
        self,
        table: str,
        where: dict[str, Any] | None = None,
        ranges: Ranges | None = None,
    ) -> list[Record]:
        rows = self._load_rows(table)
        return [row for row in rows if self._matches(row, where or {}, ranges or {})]

    async def get(self, table: str, record_id: Any) -> Record:
        rows = self._load_rows(table)
        return rows[self._index(rows, table, record_id)]

    async def create(self, table: str, record: Record) -> Record:
        row = {field: to_jsonable(value) for field, value in record.items()}
        row["id"] = to_jsonable(row.get("id") or uuid.uuid4())
        row.setdefault("created_at", datetime.now(timezone.utc).isoformat())
        path = self._path(table)
        async with self._lock(path):
            rows = self._load_rows(table)
            rows.append(row)
            self._save_rows(table, rows)
        return row

    async def update(self, table: str, record_id: Any, changes: Record) -> Record:
        path = self._path(table)
        async with self._lock(path):
            rows = self._load_rows(table)
            idx = self._index(rows, table, record_id)
            updated = {**rows[idx], **{f: to_jsonable(v) for f, v in changes.items()}}
            updated["id"] = rows[idx]["id"]
            rows[idx] = updated
            self._save_rows(table, rows)
        return updated

    async def replace(self, table: str, where: dict[str, Any], record: Record) -> Record:
        row = {field: to_jsonable(value) for field, value in record.items()}
        row["id"] = to_jsonable(row.get("id") or uuid.uuid4())
        row.setdefault("created_at", datetime.now(timezone.utc).isoformat())
        path = self._path(table)
        async with self._lock(path):
            rows = [r for r in self._load_rows(table) if not self._matches(r, where, {})]
            rows.append(row)
            self._save_rows(table, rows)
        return row

    async def delete(self, table: str, record_id: Any) -> None:
        path = self._path(table)
        async with self._lock(path):
            rows = self._load_rows(table)
            idx = self._index(rows, table, record_id)
            del rows[idx]
            self._save_rows(table, rows)
