"""
Tests de generación de PDF (horario semanal y nómina).
"""
from datetime import date

import pytest

from cuadrante.services.pdf_service import calculate_payroll_details, generate_payslip_pdf, render_table


def test_render_table_returns_pdf():
    pdf = render_table(
        rows=[["Carmen", "-", "Tarde\n16:00 - 22:00"], ["Jorge & Luis", "<b>", "-"]],
        headers=["Empleado", "lun 1", "mar 2"],
        title="Horario - Brutal Soul",
        subtitle="1 jul 2024 - 7 jul 2024",
    )
    assert pdf.startswith(b"%PDF")
    assert len(pdf) > 1000


def test_render_table_without_rows():
    pdf = render_table(rows=[], headers=["Empleado"], title="Horario - Stella Brutal")
    assert pdf.startswith(b"%PDF")


def test_payroll_details():
    details = calculate_payroll_details(24000)
    assert details.gross_monthly == pytest.approx(2000.00)
    assert details.social_security == pytest.approx(127.00)
    assert details.irpf == pytest.approx(300.00)
    assert details.deductions == pytest.approx(427.00)
    assert details.net == pytest.approx(1573.00)


def test_payroll_details_without_salary():
    details = calculate_payroll_details(None)
    assert details.gross_monthly == 0
    assert details.net == 0


def test_generate_payslip_pdf():
    employee = {
        "name": "Ana López",
        "dni": "12345678Z",
        "role": "Camarera",
        "contract": "Indefinido",
        "salary": 18000,
        "iban": None,
    }
    pdf = generate_payslip_pdf(employee, date(2024, 7, 1), "Brutal Soul")
    assert pdf.startswith(b"%PDF")
