"""Event ORM — park events and their many-to-many park associations."""

from datetime import date

from sqlalchemy import (
    String, Text, Integer, Boolean, Date, Numeric, ForeignKey, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from parks_backoffice.db.base import Base, TimestampMixin


class Event(TimestampMixin, Base):
    __tablename__ = "events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    event_type: Mapped[str] = mapped_column(
        String(50), nullable=False, default="other",
    )
    target_audience: Mapped[str] = mapped_column(
        String(50), nullable=False, default="all",
    )
    status: Mapped[str] = mapped_column(String(30), nullable=False, default="draft")
    start_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    start_time: Mapped[str | None] = mapped_column(String(10), nullable=True)
    end_time: Mapped[str | None] = mapped_column(String(10), nullable=True)
    is_recurring: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    recurrence_pattern: Mapped[str | None] = mapped_column(String(50), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    capacity: Mapped[int | None] = mapped_column(Integer, nullable=True)
    registration_type: Mapped[str] = mapped_column(
        String(30), nullable=False, default="free",
    )
    price: Mapped[float | None] = mapped_column(
        Numeric(10, 2, asdecimal=False), nullable=True,
    )
    organizer_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    organizer_email: Mapped[str | None] = mapped_column(String(200), nullable=True)
    organizer_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)


class EventPark(Base):
    __tablename__ = "event_parks"
    __table_args__ = (UniqueConstraint("event_id", "park_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    event_id: Mapped[int] = mapped_column(
        ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    park_id: Mapped[int] = mapped_column(
        ForeignKey("parks.id"), nullable=False, index=True,
    )
