"""Event Schemas — events with their park associations."""

from datetime import date, datetime

from pydantic import BaseModel, Field, model_validator

from parks_backoffice.core.domain_types import EventStatus, RegistrationType
from parks_backoffice.schemas.common import ORMModel, RequestModel


class EventFields(RequestModel):
    description: str | None = None
    end_date: date | None = None
    start_time: str | None = Field(None, pattern=r"^\d{2}:\d{2}$")
    end_time: str | None = Field(None, pattern=r"^\d{2}:\d{2}$")
    is_recurring: bool | None = None
    recurrence_pattern: str | None = Field(None, max_length=50)
    location: str | None = Field(None, max_length=255)
    capacity: int | None = Field(None, ge=0)
    price: float | None = Field(None, ge=0)
    organizer_name: str | None = Field(None, max_length=200)
    organizer_email: str | None = Field(None, max_length=200)
    organizer_phone: str | None = Field(None, max_length=50)


class EventCreate(EventFields):
    title: str = Field(min_length=1, max_length=200)
    start_date: date
    event_type: str = Field("other", max_length=50)
    target_audience: str = Field("all", max_length=50)
    status: EventStatus = EventStatus.DRAFT
    registration_type: RegistrationType = RegistrationType.FREE
    park_ids: list[int] = []

    @model_validator(mode="after")
    def check_date_range(self):
        if self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date cannot be before start_date")
        return self


class EventUpdate(EventFields):
    title: str | None = Field(None, min_length=1, max_length=200)
    start_date: date | None = None
    event_type: str | None = Field(None, max_length=50)
    target_audience: str | None = Field(None, max_length=50)
    status: EventStatus | None = None
    registration_type: RegistrationType | None = None
    park_ids: list[int] | None = None


class EventParkRef(BaseModel):
    id: int
    name: str


class EventResponse(ORMModel):
    id: int
    title: str
    description: str | None
    event_type: str
    target_audience: str
    status: str
    start_date: date
    end_date: date | None
    start_time: str | None
    end_time: str | None
    is_recurring: bool
    recurrence_pattern: str | None
    location: str | None
    capacity: int | None
    registration_type: str
    price: float | None
    organizer_name: str | None
    organizer_email: str | None
    organizer_phone: str | None
    parks: list[EventParkRef] = []
    created_at: datetime
    updated_at: datetime


class EventBulkDelete(RequestModel):
    ids: list[int] = Field(min_length=1, max_length=500)
