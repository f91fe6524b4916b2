import uuid
from datetime import date, datetime, timezone

from sqlalchemy import String, DateTime, ForeignKey, Numeric, Date
from sqlalchemy.orm import Mapped, mapped_column

from cuadrante.core.database import Base


class Payslip(Base):
    __tablename__ = "payslips"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    employee_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("employees.id", ondelete="CASCADE"), nullable=False)
    employee_name: Mapped[str] = mapped_column(String(255), nullable=False)

    period_start: Mapped[date] = mapped_column(Date, nullable=False)
    period_end: Mapped[date] = mapped_column(Date, nullable=False)

    amount: Mapped[float | None] = mapped_column(Numeric(10, 2), nullable=True)
    amount_transfer: Mapped[float | None] = mapped_column(Numeric(10, 2), nullable=True)  # ingresado
    amount_cash: Mapped[float | None] = mapped_column(Numeric(10, 2), nullable=True)  # efectivo

    status: Mapped[str] = mapped_column(String(20), default="Pendiente")  # Pendiente | Subida | Enviada
    file_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
