"""
Payroll API – nóminas mensuales por local
"""
import uuid
from datetime import date

from fastapi import APIRouter, status
from fastapi.responses import Response

from cuadrante.api.deps import Store, Files
from cuadrante.schemas.payroll import PayrollRow, PayslipGenerate, PayslipManual, PayslipOut
from cuadrante.services.file_storage import safe_file_name
from cuadrante.services.payroll_service import PayrollService

router = APIRouter(prefix="/payslips", tags=["payroll"])


@router.get("", response_model=list[PayrollRow])
async def list_payslips(store: Store, location: str, month: date | None = None):
    """Todos los empleados del local con su nómina del mes (o null si aún no existe)."""
    return await PayrollService(store).list_payslips(location, month or date.today())


@router.post("/manual", response_model=PayslipOut)
async def save_manual_payslip(payload: PayslipManual, store: Store):
    """Registra el importe pagado (transferencia + efectivo) sin generar PDF."""
    return await PayrollService(store).save_manual(
        payload.employee_id, payload.month, payload.amount_transfer, payload.amount_cash
    )


@router.post("/generate")
async def generate_payslip(payload: PayslipGenerate, store: Store, files: Files):
    """Genera la nómina en PDF, la guarda y la devuelve para descargar."""
    payslip, pdf_bytes = await PayrollService(store, files).generate_pdf(payload.employee_id, payload.month)
    filename = safe_file_name(f"nomina_{payslip.employee_name}_{payslip.period_start:%Y-%m}.pdf")
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
            "Cache-Control": "no-cache",
            "X-Payslip-Id": str(payslip.id),
        },
    )


@router.post("/{payslip_id}/sent", response_model=PayslipOut)
async def mark_payslip_sent(payslip_id: uuid.UUID, store: Store):
    return await PayrollService(store).mark_sent(payslip_id)


@router.delete("/{payslip_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_payslip(payslip_id: uuid.UUID, store: Store, files: Files):
    await PayrollService(store, files).delete_payslip(payslip_id)
