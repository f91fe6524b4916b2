"""
Employees API – fichas de personal por local
"""
import uuid

from fastapi import APIRouter, Query, status

from cuadrante.api.deps import Store, Files
from cuadrante.schemas.employee import EmployeeCreate, EmployeeUpdate, EmployeeOut
from cuadrante.services.payroll_service import PayrollService
from cuadrante.services.personnel_service import PersonnelService, SORT_KEYS

router = APIRouter(prefix="/employees", tags=["employees"])


@router.get("", response_model=list[EmployeeOut])
async def list_employees(
    store: Store,
    location: str,
    search: str | None = None,
    role: str | None = None,
    sort: str | None = Query(default=None, pattern=f"^({'|'.join(SORT_KEYS)})$"),
    desc: bool = False,
):
    """Empleados del local. Sin ``sort`` se devuelven en el orden del cuadrante (puesto, nombre)."""
    return await PersonnelService(store).list_employees(location, search, role, sort, desc)


@router.post("", response_model=EmployeeOut, status_code=status.HTTP_201_CREATED)
async def create_employee(payload: EmployeeCreate, store: Store):
    return await PersonnelService(store).create_employee(payload.model_dump())


@router.get("/{employee_id}", response_model=EmployeeOut)
async def get_employee(employee_id: uuid.UUID, store: Store):
    return await PersonnelService(store).get_employee(employee_id)


@router.put("/{employee_id}", response_model=EmployeeOut)
async def update_employee(employee_id: uuid.UUID, payload: EmployeeUpdate, store: Store):
    return await PersonnelService(store).update_employee(employee_id, payload.model_dump(exclude_unset=True))


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_employee(employee_id: uuid.UUID, store: Store, files: Files):
    """Borra la ficha junto con sus turnos y nóminas."""
    await PersonnelService(store, PayrollService(store, files)).delete_employee(employee_id)
