from cuadrante.store.base import (
    RecordStore, Record,
    EMPLOYEES, EXTRAS, SHIFT_ASSIGNMENTS, LOCATION_SCHEDULES, PAYSLIPS, TABLES,
)
from cuadrante.store.json_file import JsonRecordStore
from cuadrante.store.sql import SqlRecordStore

__all__ = [
    "RecordStore",
    "Record",
    "JsonRecordStore",
    "SqlRecordStore",
    "EMPLOYEES",
    "EXTRAS",
    "SHIFT_ASSIGNMENTS",
    "LOCATION_SCHEDULES",
    "PAYSLIPS",
    "TABLES",
]
