"""Park Schemas — municipalities and parks."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from parks_backoffice.schemas.common import ORMModel


class MunicipalityCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    state: str | None = Field(None, max_length=100)
    active: bool = True


class MunicipalityResponse(ORMModel):
    id: int
    name: str
    state: str | None
    active: bool


class ParkBase(BaseModel):
    municipality_id: int | None = None
    park_type: str | None = Field(None, max_length=50)
    address: str | None = None
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)
    area: float | None = Field(None, ge=0)
    green_area: float | None = Field(None, ge=0)
    conservation_status: str | None = Field(None, max_length=50)
    description: str | None = None


class ParkCreate(ParkBase):
    name: str = Field(min_length=2, max_length=200)
    status: str = "en_funcionamiento"
    code_prefix: str | None = Field(None, pattern=r"^[A-Z]{2,10}$")

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class ParkUpdate(ParkBase):
    name: str | None = Field(None, min_length=2, max_length=200)
    status: str | None = None
    code_prefix: str | None = Field(None, pattern=r"^[A-Z]{2,10}$")


class ParkResponse(ORMModel):
    id: int
    name: str
    municipality_id: int | None
    park_type: str | None
    address: str | None
    latitude: float | None
    longitude: float | None
    area: float | None
    green_area: float | None
    status: str
    conservation_status: str | None
    description: str | None
    code_prefix: str | None
    created_at: datetime
    updated_at: datetime
