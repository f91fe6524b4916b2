import uuid
from datetime import date, datetime, time, timezone

from sqlalchemy import String, DateTime, Numeric, Integer, Text, Date, Time
from sqlalchemy.orm import Mapped, mapped_column

from cuadrante.core.database import Base


class Employee(Base):
    __tablename__ = "employees"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    dni: Mapped[str | None] = mapped_column(String(20), nullable=True)
    contract: Mapped[str | None] = mapped_column(String(100), nullable=True)
    role: Mapped[str | None] = mapped_column(String(100), nullable=True)  # Role label, legacy free text tolerated
    salary: Mapped[float | None] = mapped_column(Numeric(10, 2), nullable=True)
    location: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    default_shift: Mapped[str | None] = mapped_column(String(20), nullable=True)  # Manana | Tarde
    iban: Mapped[str | None] = mapped_column(String(34), nullable=True)
    food_handler: Mapped[str | None] = mapped_column(String(100), nullable=True)  # carnet de manipulador
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Vacation ledger – JSON-encoded ISO date arrays; legacy rows may hold "a|b|c" text
    vacation_days: Mapped[str | None] = mapped_column(Text, nullable=True)
    vacation_pending: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Redundant counters kept for older readers, rewritten on every ledger mutation
    vacation_taken: Mapped[int] = mapped_column(Integer, default=0)
    vacation_remaining: Mapped[int] = mapped_column(Integer, default=30)

    # JSON array of {name, url, size}
    documents: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )


class Extra(Base):
    """Ad-hoc staff, schedulable with a personal time window."""
    __tablename__ = "extras"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str | None] = mapped_column(String(100), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    default_shift: Mapped[str | None] = mapped_column(String(20), nullable=True)  # Manana | Tarde | Extra
    location: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    start_time: Mapped[time | None] = mapped_column(Time, nullable=True)
    end_time: Mapped[time | None] = mapped_column(Time, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
