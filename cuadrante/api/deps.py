from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cuadrante.core.config import settings
from cuadrante.core.database import get_db
from cuadrante.services.file_storage import FileStorage, LocalFileStorage
from cuadrante.store.base import RecordStore
from cuadrante.store.json_file import JsonRecordStore
from cuadrante.store.sql import SqlRecordStore

DB = Annotated[AsyncSession, Depends(get_db)]


async def get_store(db: DB) -> RecordStore:
    """Record store selected by STORE_BACKEND ("sql" | "json")."""
    if settings.STORE_BACKEND == "json":
        return JsonRecordStore(settings.DATA_DIR)
    return SqlRecordStore(db)


def get_file_storage() -> FileStorage:
    return LocalFileStorage(settings.MEDIA_DIR, settings.MEDIA_URL)


Store = Annotated[RecordStore, Depends(get_store)]
Files = Annotated[FileStorage, Depends(get_file_storage)]
