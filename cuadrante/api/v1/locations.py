from fastapi import APIRouter

from cuadrante.core.config import settings

router = APIRouter(prefix="/locations", tags=["locations"])


@router.get("", response_model=list[str])
async def list_locations():
    return settings.locations
