"""Sponsorship Schemas — packages, benefits, sponsors, contracts and their links."""

from datetime import date, datetime

from pydantic import Field, model_validator

from parks_backoffice.core.domain_types import ContractStatus
from parks_backoffice.schemas.common import ORMModel, RequestModel


# ─── Packages & Benefits ─────────────────────────────────────────

class PackageCreate(RequestModel):
    name: str = Field(min_length=1, max_length=100)
    category: str | None = Field(None, max_length=50)
    level: int | None = Field(None, ge=1)
    price: float | None = Field(None, ge=0)
    duration_months: int | None = Field(None, ge=1)
    description: str | None = None
    is_active: bool = True


class PackageUpdate(RequestModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    category: str | None = Field(None, max_length=50)
    level: int | None = Field(None, ge=1)
    price: float | None = Field(None, ge=0)
    duration_months: int | None = Field(None, ge=1)
    description: str | None = None
    is_active: bool | None = None


class PackageResponse(ORMModel):
    id: int
    name: str
    category: str | None
    level: int | None
    price: float | None
    duration_months: int | None
    description: str | None
    is_active: bool


class BenefitCreate(RequestModel):
    name: str = Field(min_length=1, max_length=200)
    description: str | None = None
    category: str | None = Field(None, max_length=50)
    is_active: bool = True


class BenefitUpdate(RequestModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    category: str | None = Field(None, max_length=50)
    is_active: bool | None = None


class BenefitResponse(ORMModel):
    id: int
    name: str
    description: str | None
    category: str | None
    is_active: bool


class PackageBenefitCreate(RequestModel):
    benefit_id: int
    quantity: int = Field(1, ge=1)
    frequency: str | None = Field(None, max_length=50)
    custom_value: str | None = None


class PackageBenefitResponse(ORMModel):
    id: int
    package_id: int
    benefit_id: int
    benefit_name: str | None = None
    quantity: int
    frequency: str | None
    custom_value: str | None


# ─── Sponsors ────────────────────────────────────────────────────

class SponsorCreate(RequestModel):
    name: str = Field(min_length=1, max_length=200)
    sector: str | None = Field(None, max_length=100)
    contact_name: str | None = Field(None, max_length=200)
    contact_email: str | None = Field(None, max_length=200)
    contact_phone: str | None = Field(None, max_length=50)
    website: str | None = Field(None, max_length=255)
    status: str = "activo"
    notes: str | None = None


class SponsorUpdate(RequestModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    sector: str | None = Field(None, max_length=100)
    contact_name: str | None = Field(None, max_length=200)
    contact_email: str | None = Field(None, max_length=200)
    contact_phone: str | None = Field(None, max_length=50)
    website: str | None = Field(None, max_length=255)
    status: str | None = None
    notes: str | None = None


class SponsorResponse(ORMModel):
    id: int
    name: str
    sector: str | None
    contact_name: str | None
    contact_email: str | None
    contact_phone: str | None
    website: str | None
    status: str
    notes: str | None


# ─── Contracts ───────────────────────────────────────────────────

class ContractCreate(RequestModel):
    sponsor_id: int
    package_id: int | None = None
    contract_number: str | None = Field(None, max_length=50)
    contract_type: str = Field("paquete", max_length=30)
    start_date: date
    end_date: date
    total_amount: float | None = Field(None, ge=0)
    status: ContractStatus = ContractStatus.EN_NEGOCIACION
    terms: str | None = None
    notes: str | None = None

    @model_validator(mode="after")
    def check_date_range(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date cannot be before start_date")
        return self


class ContractUpdate(RequestModel):
    package_id: int | None = None
    contract_number: str | None = Field(None, max_length=50)
    contract_type: str | None = Field(None, max_length=30)
    start_date: date | None = None
    end_date: date | None = None
    total_amount: float | None = Field(None, ge=0)
    status: ContractStatus | None = None
    terms: str | None = None
    notes: str | None = None


class ContractResponse(ORMModel):
    id: int
    sponsor_id: int
    sponsor_name: str | None = None
    package_id: int | None
    contract_number: str | None
    contract_type: str
    start_date: date
    end_date: date
    total_amount: float | None
    status: str
    terms: str | None
    notes: str | None
    created_at: datetime


# ─── Links ───────────────────────────────────────────────────────

class EventLinkCreate(RequestModel):
    contract_id: int
    event_id: int
    sponsorship_level: str | None = Field(None, max_length=50)
    logo_placement: str | None = Field(None, max_length=100)
    exposure_minutes: int | None = Field(None, ge=0)
    visibility: bool = True


class EventLinkUpdate(RequestModel):
    sponsorship_level: str | None = Field(None, max_length=50)
    logo_placement: str | None = Field(None, max_length=100)
    exposure_minutes: int | None = Field(None, ge=0)
    visibility: bool | None = None


class EventLinkResponse(ORMModel):
    id: int
    contract_id: int
    event_id: int
    event_title: str | None = None
    sponsorship_level: str | None
    logo_placement: str | None
    exposure_minutes: int | None
    visibility: bool


class AssetLinkCreate(RequestModel):
    contract_id: int
    asset_id: int
    branding_type: str | None = Field(None, max_length=50)
    signage_details: str | None = None
    installation_date: date | None = None


class AssetLinkResponse(ORMModel):
    id: int
    contract_id: int
    asset_id: int
    asset_name: str | None = None
    branding_type: str | None
    signage_details: str | None
    installation_date: date | None
