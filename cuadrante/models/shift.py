import uuid
from datetime import date, datetime, time, timezone

from sqlalchemy import String, DateTime, Date, Time
from sqlalchemy.orm import Mapped, mapped_column

from cuadrante.core.database import Base


class LocationSchedule(Base):
    """Default shift windows of one location."""
    __tablename__ = "location_schedules"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    location: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)

    morning_start: Mapped[time | None] = mapped_column(Time, nullable=True)
    morning_end: Mapped[time | None] = mapped_column(Time, nullable=True)
    afternoon_start: Mapped[time | None] = mapped_column(Time, nullable=True)
    afternoon_end: Mapped[time | None] = mapped_column(Time, nullable=True)
    extra_start: Mapped[time | None] = mapped_column(Time, nullable=True)
    extra_end: Mapped[time | None] = mapped_column(Time, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )


class ShiftAssignment(Base):
    """One roster cell: (person, date, location) -> shift.

    No unique constraint on (person_id, date, location); assigning goes
    through the store's replace (bulk delete + insert in one commit).
    """
    __tablename__ = "shift_assignments"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    person_id: Mapped[uuid.UUID] = mapped_column(nullable=False, index=True)  # employee or extra
    person_name: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[str] = mapped_column(String(100), nullable=False)

    date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    week: Mapped[str] = mapped_column(String(10), nullable=False)  # ISO "2024-27"
    shift: Mapped[str] = mapped_column(String(20), nullable=False)  # Manana | Tarde | Extra | Descanso
    hours: Mapped[str | None] = mapped_column(String(20), nullable=True)  # "09:00 - 15:00"

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
