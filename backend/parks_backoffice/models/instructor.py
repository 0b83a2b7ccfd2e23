"""Instructor ORM — activity instructors, their park assignments and evaluations.

Invariants:
    - full_name is always "<first_name> <last_name>" unless given explicitly
    - rating is the mean of the instructor's evaluation scores (1-5), NULL before any
"""

from datetime import date, datetime

from sqlalchemy import (
    String, Text, Integer, Float, Boolean, Date, DateTime, JSON, ForeignKey,
)
from sqlalchemy.orm import Mapped, mapped_column

from parks_backoffice.db.base import Base, TimestampMixin, utcnow


class Instructor(TimestampMixin, Base):
    __tablename__ = "instructors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    specialties: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    experience_years: Mapped[int | None] = mapped_column(Integer, nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    preferred_park_id: Mapped[int | None] = mapped_column(
        ForeignKey("parks.id"), nullable=True,
    )
    hourly_rate: Mapped[float | None] = mapped_column(Float, nullable=True)
    status: Mapped[str] = mapped_column(String(30), nullable=False, default="active")
    rating: Mapped[float | None] = mapped_column(Float, nullable=True)


class InstructorAssignment(Base):
    __tablename__ = "instructor_assignments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    instructor_id: Mapped[int] = mapped_column(
        ForeignKey("instructors.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    park_id: Mapped[int | None] = mapped_column(ForeignKey("parks.id"), nullable=True)
    activity_name: Mapped[str] = mapped_column(String(200), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    hours_assigned: Mapped[float | None] = mapped_column(Float, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )


class InstructorEvaluation(Base):
    __tablename__ = "instructor_evaluations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    instructor_id: Mapped[int] = mapped_column(
        ForeignKey("instructors.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    assignment_id: Mapped[int | None] = mapped_column(
        ForeignKey("instructor_assignments.id"), nullable=True,
    )
    evaluator_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    comments: Mapped[str | None] = mapped_column(Text, nullable=True)
    evaluation_date: Mapped[date] = mapped_column(
        Date, nullable=False, default=lambda: utcnow().date(),
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
