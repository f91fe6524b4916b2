"""
Employee documents: files in the ``empleados-docs`` bucket, listed as a JSON
array of {name, url, size} on the employee record.

Old rows hold ``"nombre | url, nombre2 | url2"``; that form is read but
always rewritten as JSON.
"""
from __future__ import annotations

import json
import logging
import uuid

from pydantic import ValidationError as PydanticValidationError

from cuadrante.core.exceptions import NotFound
from cuadrante.schemas.document import DocumentOut
from cuadrante.services.file_storage import DOCUMENTS_BUCKET, FileStorage, safe_file_name
from cuadrante.store.base import RecordStore, EMPLOYEES

logger = logging.getLogger(__name__)


def _parse_legacy(raw: str) -> list[DocumentOut]:
    docs = []
    for item in raw.split(","):
        parts = item.strip().split("|")
        if len(parts) >= 2 and parts[1].strip():
            docs.append(DocumentOut(name=parts[0].strip(), url=parts[1].strip()))
    return docs


def parse_documents(raw) -> list[DocumentOut]:
    if not raw:
        return []
    if isinstance(raw, list):
        parsed = raw
    else:
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError:
            return _parse_legacy(str(raw))
    if not isinstance(parsed, list):
        logger.warning("Unexpected documents payload %r, ignoring", raw)
        return []
    docs = []
    for entry in parsed:
        try:
            docs.append(DocumentOut.model_validate(entry))
        except PydanticValidationError:
            logger.warning("Skipping malformed document entry %r", entry)
    return docs


def serialize_documents(docs: list[DocumentOut]) -> str:
    return json.dumps([d.model_dump(exclude_none=True) for d in docs], ensure_ascii=False)


def merge_documents(current: list[DocumentOut], new: list[DocumentOut]) -> list[DocumentOut]:
    """Appends ``new`` keeping order; an entry whose URL is already listed replaces it in place."""
    merged = list(current)
    position = {d.url: i for i, d in enumerate(merged)}
    for doc in new:
        if doc.url in position:
            # same stored path: the file on disk was overwritten
            merged[position[doc.url]] = doc
            continue
        position[doc.url] = len(merged)
        merged.append(doc)
    return merged


class DocumentService:

    def __init__(self, store: RecordStore, files: FileStorage):
        self.store = store
        self.files = files

    async def list_documents(self, employee_id: uuid.UUID) -> list[DocumentOut]:
        record = await self.store.get(EMPLOYEES, employee_id)
        return parse_documents(record.get("documents"))

    async def add_documents(self, employee_id: uuid.UUID, uploads: list[tuple[str, bytes]]) -> list[DocumentOut]:
        """``uploads`` is a list of (original file name, content)."""
        record = await self.store.get(EMPLOYEES, employee_id)
        stored = []
        for name, data in uploads:
            file_name = safe_file_name(name)
            url = await self.files.upload(f"{DOCUMENTS_BUCKET}/{record['id']}/{file_name}", data)
            stored.append(DocumentOut(name=file_name, url=url, size=len(data)))

        docs = merge_documents(parse_documents(record.get("documents")), stored)
        await self.store.update(EMPLOYEES, employee_id, {"documents": serialize_documents(docs)})
        return docs

    async def remove_document(self, employee_id: uuid.UUID, url: str) -> list[DocumentOut]:
        record = await self.store.get(EMPLOYEES, employee_id)
        docs = parse_documents(record.get("documents"))
        target = next((d for d in docs if d.url == url), None)
        if target is None:
            raise NotFound("documents", url, message="Documento no encontrado")

        path = self.files.path_from_url(url) or f"{DOCUMENTS_BUCKET}/{record['id']}/{target.name}"
        await self.files.delete(path)

        remaining = [d for d in docs if d.url != url]
        await self.store.update(EMPLOYEES, employee_id, {"documents": serialize_documents(remaining)})
        return remaining
