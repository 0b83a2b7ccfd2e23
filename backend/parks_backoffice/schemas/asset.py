"""Asset Schemas — categories, assets, maintenance records and history entries."""

from datetime import date, datetime

from pydantic import BaseModel, Field

from parks_backoffice.core.domain_types import AssetStatus, AssetCondition
from parks_backoffice.schemas.common import ORMModel, PaginationMeta, RequestModel


# ─── Categories ──────────────────────────────────────────────────

class CategoryCreate(RequestModel):
    name: str = Field(min_length=1, max_length=100)
    description: str | None = None
    icon: str | None = Field(None, max_length=50)
    color: str | None = Field(None, max_length=20)
    parent_id: int | None = None


class CategoryUpdate(RequestModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = None
    icon: str | None = Field(None, max_length=50)
    color: str | None = Field(None, max_length=20)
    parent_id: int | None = None


class CategoryResponse(ORMModel):
    id: int
    name: str
    description: str | None
    icon: str | None
    color: str | None
    parent_id: int | None


class CategoryNode(CategoryResponse):
    children: list[CategoryResponse] = []


# ─── Assets ──────────────────────────────────────────────────────

class AssetFields(RequestModel):
    description: str | None = None
    serial_number: str | None = Field(None, max_length=100)
    amenity_id: int | None = None
    location_description: str | None = None
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)
    manufacturer: str | None = Field(None, max_length=100)
    model: str | None = Field(None, max_length=100)
    acquisition_date: date | None = None
    acquisition_cost: float | None = Field(None, ge=0)
    current_value: float | None = Field(None, ge=0)
    maintenance_frequency: str | None = Field(None, max_length=30)
    last_maintenance_date: date | None = None
    next_maintenance_date: date | None = None
    expected_lifespan: int | None = Field(None, ge=0)
    notes: str | None = None
    responsible_person_id: int | None = None


class AssetCreate(AssetFields):
    name: str = Field(min_length=1, max_length=200)
    category_id: int
    park_id: int
    status: AssetStatus = AssetStatus.ACTIVE
    condition: AssetCondition = AssetCondition.GOOD


class AssetUpdate(AssetFields):
    name: str | None = Field(None, min_length=1, max_length=200)
    category_id: int | None = None
    park_id: int | None = None
    status: AssetStatus | None = None
    condition: AssetCondition | None = None


class AssetResponse(ORMModel):
    id: int
    name: str
    description: str | None
    serial_number: str | None
    category_id: int
    park_id: int
    amenity_id: int | None
    status: str
    condition: str
    location_description: str | None
    latitude: float | None
    longitude: float | None
    manufacturer: str | None
    model: str | None
    acquisition_date: date | None
    acquisition_cost: float | None
    current_value: float | None
    maintenance_frequency: str | None
    last_maintenance_date: date | None
    next_maintenance_date: date | None
    expected_lifespan: int | None
    notes: str | None
    responsible_person_id: int | None
    created_at: datetime
    updated_at: datetime


class AssetPage(BaseModel):
    data: list[AssetResponse]
    pagination: PaginationMeta


class BulkDeleteRequest(RequestModel):
    ids: list[int] = Field(min_length=1, max_length=500)


class BulkDeleteResponse(BaseModel):
    deleted: list[int]
    not_found: list[int]


# ─── History ─────────────────────────────────────────────────────

class HistoryEntryCreate(RequestModel):
    change_type: str = Field(min_length=1, max_length=50)
    description: str = Field(min_length=1, max_length=2000)
    notes: str | None = Field(None, max_length=2000)


class HistoryEntryResponse(ORMModel):
    id: int
    asset_id: int
    change_type: str
    field_name: str | None
    previous_value: str | None
    new_value: str | None
    description: str
    changed_by: str
    notes: str | None
    entry_date: date
    created_at: datetime


# ─── Maintenance ─────────────────────────────────────────────────

class MaintenanceCreate(RequestModel):
    maintenance_type: str = Field(min_length=1, max_length=50)
    description: str | None = None
    maintenance_date: date
    cost: float | None = Field(None, ge=0)
    performed_by: str | None = Field(None, max_length=200)
    next_maintenance_date: date | None = None
    status: str = "completed"


class MaintenanceResponse(ORMModel):
    id: int
    asset_id: int
    maintenance_type: str
    description: str | None
    maintenance_date: date
    cost: float | None
    performed_by: str | None
    next_maintenance_date: date | None
    status: str
