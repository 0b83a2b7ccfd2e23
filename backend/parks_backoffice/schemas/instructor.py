"""Instructor Schemas — instructors, assignments and evaluations."""

from datetime import date, datetime

from pydantic import Field, field_validator

from parks_backoffice.schemas.common import ORMModel, RequestModel

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class InstructorFields(RequestModel):
    phone: str | None = Field(None, max_length=50)
    specialties: list[str] | None = None
    experience_years: int | None = Field(None, ge=0, le=80)
    bio: str | None = None
    preferred_park_id: int | None = None
    hourly_rate: float | None = Field(None, ge=0)


class InstructorCreate(InstructorFields):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    full_name: str | None = Field(None, max_length=200)
    email: str = Field(pattern=EMAIL_PATTERN, max_length=200)
    status: str = "active"

    @field_validator("specialties")
    @classmethod
    def drop_blank_specialties(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return v
        return [s.strip() for s in v if s and s.strip()]


class InstructorUpdate(InstructorFields):
    first_name: str | None = Field(None, min_length=1, max_length=100)
    last_name: str | None = Field(None, min_length=1, max_length=100)
    full_name: str | None = Field(None, max_length=200)
    email: str | None = Field(None, pattern=EMAIL_PATTERN, max_length=200)
    status: str | None = None


class InstructorResponse(ORMModel):
    id: int
    first_name: str
    last_name: str
    full_name: str
    email: str
    phone: str | None
    specialties: list[str]
    experience_years: int | None
    bio: str | None
    preferred_park_id: int | None
    preferred_park_name: str | None = None
    hourly_rate: float | None
    status: str
    rating: float | None
    created_at: datetime
    updated_at: datetime


class AssignmentCreate(RequestModel):
    activity_name: str = Field(min_length=1, max_length=200)
    park_id: int | None = None
    start_date: date
    end_date: date | None = None
    hours_assigned: float | None = Field(None, ge=0)
    notes: str | None = None


class AssignmentResponse(ORMModel):
    id: int
    instructor_id: int
    park_id: int | None
    activity_name: str
    start_date: date
    end_date: date | None
    hours_assigned: float | None
    is_active: bool
    notes: str | None


class EvaluationCreate(RequestModel):
    score: int = Field(ge=1, le=5)
    assignment_id: int | None = None
    evaluator_name: str | None = Field(None, max_length=200)
    comments: str | None = Field(None, max_length=2000)
    evaluation_date: date | None = None


class EvaluationResponse(ORMModel):
    id: int
    instructor_id: int
    assignment_id: int | None
    evaluator_name: str | None
    score: int
    comments: str | None
    evaluation_date: date
