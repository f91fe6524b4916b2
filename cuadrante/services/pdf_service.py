"""
Generación de PDF: horario semanal y nóminas.
Devuelve bytes; el almacenamiento lo decide quien llama.
"""
from __future__ import annotations

import io
from dataclasses import dataclass
from datetime import date, datetime
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import cm
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer, HRFlowable

from cuadrante.utils.calendar import month_label


# ── Colores (sobrios, aptos para impresión) ───────────────────────────────────

_NAVY   = colors.HexColor("#1E3A5F")   # cabeceras
_LIGHT  = colors.HexColor("#F0F4F8")   # filas alternas
_WHITE  = colors.white
_GRAY   = colors.HexColor("#6B7280")
_GRID   = colors.HexColor("#E5E7EB")

SOCIAL_SECURITY_RATE = 0.0635
IRPF_RATE = 0.15


# ── Helpers ───────────────────────────────────────────────────────────────────

def _fmt_euro(val: float | None) -> str:
    if val is None:
        return "–"
    return f"{val:,.2f} €".replace(",", "X").replace(".", ",").replace("X", ".")


def _cell(text: str, style: ParagraphStyle) -> Paragraph:
    # Paragraph keeps the "\n" between shift and hours
    return Paragraph(escape(text).replace("\n", "<br/>"), style)


def _styles() -> tuple[ParagraphStyle, ParagraphStyle, ParagraphStyle]:
    styles = getSampleStyleSheet()
    normal = ParagraphStyle("normal_es", parent=styles["Normal"], fontName="Helvetica", fontSize=9, leading=12)
    heading = ParagraphStyle(
        "heading_es",
        parent=normal,
        fontSize=11,
        fontName="Helvetica-Bold",
        textColor=_NAVY,
        spaceAfter=4,
    )
    small_gray = ParagraphStyle("small_gray", parent=normal, fontSize=8, textColor=_GRAY)
    return normal, heading, small_gray


# ── Horario semanal ───────────────────────────────────────────────────────────

def render_table(rows: list[list[str]], headers: list[str], title: str, subtitle: str = "") -> bytes:
    """A4 apaisado: título, subtítulo y una tabla con cabecera azul marino."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=landscape(A4),
        leftMargin=1.5 * cm,
        rightMargin=1.5 * cm,
        topMargin=1.5 * cm,
        bottomMargin=1.5 * cm,
        title=title,
    )
    normal, heading, small_gray = _styles()
    header_style = ParagraphStyle("th", parent=normal, textColor=_WHITE, fontName="Helvetica-Bold")

    story = [Paragraph(escape(title), ParagraphStyle("title", parent=heading, fontSize=16, leading=20))]
    if subtitle:
        story.append(Paragraph(escape(subtitle), small_gray))
    story.append(Spacer(1, 0.4 * cm))

    page_w = landscape(A4)[0] - 3 * cm
    n_cols = max(len(headers), 1)
    first_w = page_w * 0.2 if n_cols > 1 else page_w
    other_w = (page_w - first_w) / (n_cols - 1) if n_cols > 1 else 0
    col_widths = [first_w] + [other_w] * (n_cols - 1)

    data = [[_cell(h, header_style) for h in headers]]
    data += [[_cell(str(c), normal) for c in row] for row in rows]

    tbl = Table(data, colWidths=col_widths, repeatRows=1)
    style = [
        ("BACKGROUND",    (0, 0), (-1, 0),  _NAVY),
        ("VALIGN",        (0, 0), (-1, -1), "MIDDLE"),
        ("TOPPADDING",    (0, 0), (-1, -1), 4),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
        ("LEFTPADDING",   (0, 0), (-1, -1), 5),
        ("RIGHTPADDING",  (0, 0), (-1, -1), 5),
        ("GRID",          (0, 0), (-1, -1), 0.25, _GRID),
    ]
    if rows:
        style.append(("ROWBACKGROUNDS", (0, 1), (-1, -1), [_WHITE, _LIGHT]))
    tbl.setStyle(TableStyle(style))
    story.append(tbl)

    doc.build(story)
    return buf.getvalue()


# ── Nómina ────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PayrollDetails:
    gross_monthly: float
    social_security: float
    irpf: float

    @property
    def deductions(self) -> float:
        return round(self.social_security + self.irpf, 2)

    @property
    def net(self) -> float:
        return round(self.gross_monthly - self.social_security - self.irpf, 2)


def calculate_payroll_details(annual_salary: float | None) -> PayrollDetails:
    """Simplified monthly breakdown: gross / 12, 6.35 % Seguridad Social, 15 % IRPF."""
    gross = float(annual_salary or 0) / 12
    return PayrollDetails(
        gross_monthly=round(gross, 2),
        social_security=round(gross * SOCIAL_SECURITY_RATE, 2),
        irpf=round(gross * IRPF_RATE, 2),
    )


def generate_payslip_pdf(employee: dict, period_start: date, company: str) -> bytes:
    """Nómina mensual de un empleado (registro con name, dni, role, contract, salary, iban)."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=A4,
        leftMargin=2 * cm,
        rightMargin=2 * cm,
        topMargin=2 * cm,
        bottomMargin=2 * cm,
        title="Nómina",
    )
    normal, heading, small_gray = _styles()
    details = calculate_payroll_details(employee.get("salary"))
    page_w = A4[0] - 4 * cm

    story = []

    # ── Cabecera ──────────────────────────────────────────────────────────────
    header_tbl = Table(
        [[Paragraph("<font color='white'><b>NÓMINA</b></font>", normal),
          Paragraph(f"<font color='white'>{escape(company)}</font>", normal)]],
        colWidths=[page_w * 0.6, page_w * 0.4],
    )
    header_tbl.setStyle(TableStyle([
        ("BACKGROUND",    (0, 0), (-1, -1), _NAVY),
        ("FONTSIZE",      (0, 0), (-1, -1), 11),
        ("ALIGN",         (1, 0), (1, 0),   "RIGHT"),
        ("TOPPADDING",    (0, 0), (-1, -1), 8),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 8),
        ("LEFTPADDING",   (0, 0), (-1, -1), 10),
        ("RIGHTPADDING",  (0, 0), (-1, -1), 10),
    ]))
    story.append(header_tbl)
    story.append(Spacer(1, 0.4 * cm))
    story.append(Paragraph(f"<b>Empresa:</b> {escape(company)}", normal))
    story.append(Paragraph(f"<b>Periodo:</b> {month_label(period_start)}", normal))
    story.append(Spacer(1, 0.4 * cm))

    # ── Datos del trabajador ──────────────────────────────────────────────────
    story.append(Paragraph("DATOS DEL TRABAJADOR", heading))
    info_rows = [
        ["Nombre", employee.get("name") or ""],
        ["DNI", employee.get("dni") or ""],
        ["Puesto", employee.get("role") or "N/A"],
        ["Contrato", employee.get("contract") or ""],
    ]
    info_tbl = Table(info_rows, colWidths=[page_w * 0.25, page_w * 0.75])
    info_tbl.setStyle(TableStyle([
        ("FONTNAME",      (0, 0), (0, -1),  "Helvetica-Bold"),
        ("FONTSIZE",      (0, 0), (-1, -1), 9),
        ("TOPPADDING",    (0, 0), (-1, -1), 3),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
        ("ROWBACKGROUNDS", (0, 0), (-1, -1), [_WHITE, _LIGHT]),
    ]))
    story.append(info_tbl)
    story.append(Spacer(1, 0.4 * cm))

    # ── Conceptos ─────────────────────────────────────────────────────────────
    wage_rows = [
        ["CONCEPTOS", "DEVENGOS", "DEDUCCIONES"],
        ["Sueldo Base", _fmt_euro(details.gross_monthly), ""],
        ["Seguridad Social (6.35%)", "", _fmt_euro(details.social_security)],
        ["IRPF (15%)", "", _fmt_euro(details.irpf)],
        ["TOTAL", _fmt_euro(details.gross_monthly), _fmt_euro(details.deductions)],
        ["LÍQUIDO A PERCIBIR", _fmt_euro(details.net), ""],
    ]
    total_idx = len(wage_rows) - 2
    wage_tbl = Table(wage_rows, colWidths=[page_w * 0.5, page_w * 0.25, page_w * 0.25])
    wage_tbl.setStyle(TableStyle([
        ("BACKGROUND",    (0, 0),         (-1, 0),         _NAVY),
        ("TEXTCOLOR",     (0, 0),         (-1, 0),         _WHITE),
        ("FONTNAME",      (0, 0),         (-1, 0),         "Helvetica-Bold"),
        ("FONTSIZE",      (0, 0),         (-1, -1),        9),
        ("ALIGN",         (1, 0),         (-1, -1),        "RIGHT"),
        ("BACKGROUND",    (0, total_idx), (-1, total_idx), _LIGHT),
        ("FONTNAME",      (0, total_idx), (-1, -1),        "Helvetica-Bold"),
        ("LINEABOVE",     (0, total_idx), (-1, total_idx), 0.5, _NAVY),
        ("TOPPADDING",    (0, 0),         (-1, -1),        4),
        ("BOTTOMPADDING", (0, 0),         (-1, -1),        4),
        ("GRID",          (0, 0),         (-1, -1),        0.25, _GRID),
    ]))
    story.append(wage_tbl)

    # ── Pie ───────────────────────────────────────────────────────────────────
    story.append(Spacer(1, 0.5 * cm))
    story.append(HRFlowable(width="100%", thickness=0.5, color=_GRAY))
    story.append(Spacer(1, 0.15 * cm))
    story.append(Paragraph(f"Generado: {datetime.now():%d/%m/%Y %H:%M}", small_gray))
    story.append(Paragraph(f"IBAN: {escape(employee.get('iban') or 'No especificado')}", small_gray))

    doc.build(story)
    return buf.getvalue()
