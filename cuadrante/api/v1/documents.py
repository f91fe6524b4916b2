"""
Documents API – contratos, DNI y demás ficheros de cada empleado
"""
import uuid

from fastapi import APIRouter, File, UploadFile, status

from cuadrante.api.deps import Store, Files
from cuadrante.schemas.document import DocumentOut
from cuadrante.services.document_service import DocumentService

router = APIRouter(prefix="/employees/{employee_id}/documents", tags=["documents"])


@router.get("", response_model=list[DocumentOut])
async def list_documents(employee_id: uuid.UUID, store: Store, files: Files):
    return await DocumentService(store, files).list_documents(employee_id)


@router.post("", response_model=list[DocumentOut], status_code=status.HTTP_201_CREATED)
async def upload_documents(employee_id: uuid.UUID, store: Store, files: Files, uploads: list[UploadFile] = File(...)):
    contents = [(u.filename, await u.read()) for u in uploads]
    return await DocumentService(store, files).add_documents(employee_id, contents)


@router.delete("", response_model=list[DocumentOut])
async def delete_document(employee_id: uuid.UUID, url: str, store: Store, files: Files):
    """Borra el fichero y lo quita de la ficha. Devuelve la lista restante."""
    return await DocumentService(store, files).remove_document(employee_id, url)
