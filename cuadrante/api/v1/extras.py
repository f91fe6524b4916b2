"""
Extras API – personal eventual con horario propio
"""
import uuid

from fastapi import APIRouter, status

from cuadrante.api.deps import Store
from cuadrante.schemas.employee import ExtraCreate, ExtraOut
from cuadrante.services.personnel_service import PersonnelService

router = APIRouter(prefix="/extras", tags=["extras"])


@router.get("", response_model=list[ExtraOut])
async def list_extras(store: Store, location: str):
    return await PersonnelService(store).list_extras(location)


@router.post("", response_model=ExtraOut, status_code=status.HTTP_201_CREATED)
async def create_extra(payload: ExtraCreate, store: Store):
    return await PersonnelService(store).create_extra(payload.model_dump())


@router.delete("/{extra_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_extra(extra_id: uuid.UUID, store: Store):
    await PersonnelService(store).delete_extra(extra_id)
