"""Date helpers and Spanish calendar labels used by roster, payslips and PDFs."""
from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

MONTH_NAMES = [
    "", "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
]

MONTH_ABBR = ["", "ene", "feb", "mar", "abr", "may", "jun", "jul", "ago", "sep", "oct", "nov", "dic"]

DAY_ABBR = ["lun", "mar", "mié", "jue", "vie", "sáb", "dom"]


def monday_of(d: date) -> date:
    return d - timedelta(days=d.weekday())


def week_days(week_start: date) -> list[date]:
    return [week_start + timedelta(days=i) for i in range(7)]


def week_label(d: date) -> str:
    """ISO week label, e.g. "2024-27"."""
    year, week, _ = d.isocalendar()
    return f"{year}-{week:02d}"


def month_bounds(d: date) -> tuple[date, date]:
    start = d.replace(day=1)
    end = start + relativedelta(months=1) - timedelta(days=1)
    return start, end


def month_days(d: date) -> list[date]:
    start, end = month_bounds(d)
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


def month_label(d: date) -> str:
    return f"{MONTH_NAMES[d.month]} {d.year}"


def short_date(d: date) -> str:
    """"1 jul 2024"."""
    return f"{d.day} {MONTH_ABBR[d.month]} {d.year}"


def day_header(d: date) -> str:
    """Column header of a week grid: "lun 1"."""
    return f"{DAY_ABBR[d.weekday()]} {d.day}"


def seniority(start: date | None, today: date | None = None) -> str:
    """Antigüedad as shown on the employee card: "2 Años 3 meses"."""
    if start is None:
        return "-"
    today = today or date.today()
    delta = relativedelta(today, start)
    years = max(0, delta.years)
    months = max(0, delta.months) if delta.years >= 0 else 0

    parts = []
    if years > 0:
        parts.append(f"{years} {'Año' if years == 1 else 'Años'}")
    if months > 0:
        parts.append(f"{months} {'mes' if months == 1 else 'meses'}")
    if not parts:
        return "Menos de 1 mes"
    return " ".join(parts)
