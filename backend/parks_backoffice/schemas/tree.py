"""Tree Inventory Schemas — areas, species, trees and area-link requests.

Invariants:
    - Polygons have at least 3 vertices when provided
    - Tree coordinates are required on create (area detection depends on them)
    - Bulk link requests name a method; "manual" also needs an area_id
"""

from datetime import date, datetime

from pydantic import BaseModel, Field, model_validator

from parks_backoffice.core.domain_types import LinkMethod, AreaStatus, TreeHealthStatus
from parks_backoffice.schemas.common import ORMModel, PaginationMeta, RequestModel


# ─── Areas ───────────────────────────────────────────────────────

class PolygonPoint(RequestModel):
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)


class AreaCreate(RequestModel):
    park_id: int
    name: str = Field(min_length=2, max_length=200)
    code: str | None = Field(None, min_length=2, max_length=20)
    description: str | None = None
    dimensions: str | None = Field(None, max_length=100)
    polygon: list[PolygonPoint] | None = Field(None, min_length=3)
    status: AreaStatus = AreaStatus.ACTIVA


class AreaUpdate(RequestModel):
    name: str | None = Field(None, min_length=2, max_length=200)
    code: str | None = Field(None, min_length=2, max_length=20)
    description: str | None = None
    dimensions: str | None = Field(None, max_length=100)
    polygon: list[PolygonPoint] | None = Field(None, min_length=3)
    status: AreaStatus | None = None


class AreaResponse(ORMModel):
    id: int
    park_id: int
    name: str
    code: str
    description: str | None
    dimensions: str | None
    polygon: list[PolygonPoint] | None
    status: str
    tree_count: int = 0
    created_at: datetime
    updated_at: datetime


class AreaSummary(ORMModel):
    id: int
    name: str
    code: str


# ─── Species ─────────────────────────────────────────────────────

class SpeciesCreate(RequestModel):
    common_name: str = Field(min_length=2, max_length=200)
    scientific_name: str = Field(min_length=2, max_length=200)
    family: str | None = Field(None, max_length=100)
    origin: str | None = Field(None, max_length=50)
    growth_rate: str | None = Field(None, max_length=30)
    is_endangered: bool = False
    description: str | None = None
    species_code: str | None = Field(None, pattern=r"^[A-Z0-9]{2,10}$")


class SpeciesUpdate(RequestModel):
    common_name: str | None = Field(None, min_length=2, max_length=200)
    scientific_name: str | None = Field(None, min_length=2, max_length=200)
    family: str | None = Field(None, max_length=100)
    origin: str | None = Field(None, max_length=50)
    growth_rate: str | None = Field(None, max_length=30)
    is_endangered: bool | None = None
    description: str | None = None
    species_code: str | None = Field(None, pattern=r"^[A-Z0-9]{2,10}$")


class SpeciesResponse(ORMModel):
    id: int
    common_name: str
    scientific_name: str
    family: str | None
    origin: str | None
    growth_rate: str | None
    is_endangered: bool
    description: str | None
    species_code: str | None


# ─── Trees ───────────────────────────────────────────────────────

class TreeFields(RequestModel):
    planting_date: date | None = None
    development_stage: str | None = Field(None, max_length=50)
    age_estimate: int | None = Field(None, ge=0)
    height: float | None = Field(None, ge=0)
    trunk_diameter: float | None = Field(None, ge=0)
    canopy_coverage: float | None = Field(None, ge=0)
    condition: str | None = Field(None, max_length=50)
    has_hollows: bool | None = None
    has_exposed_roots: bool | None = None
    has_pests: bool | None = None
    is_protected: bool | None = None
    location_description: str | None = Field(None, max_length=255)
    notes: str | None = None


class TreeCreate(TreeFields):
    species_id: int
    park_id: int
    area_id: int | None = None
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    health_status: TreeHealthStatus = TreeHealthStatus.BUENO


class TreeUpdate(TreeFields):
    species_id: int | None = None
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)
    health_status: TreeHealthStatus | None = None


class TreeRemove(RequestModel):
    reason: str | None = Field(None, max_length=1000)
    removal_date: date | None = None


class TreeResponse(ORMModel):
    id: int
    code: str | None
    species_id: int
    park_id: int
    area_id: int | None
    latitude: float | None
    longitude: float | None
    planting_date: date | None
    development_stage: str | None
    age_estimate: int | None
    height: float | None
    trunk_diameter: float | None
    canopy_coverage: float | None
    health_status: str
    condition: str | None
    has_hollows: bool
    has_exposed_roots: bool
    has_pests: bool
    is_protected: bool
    location_description: str | None
    notes: str | None
    is_removed: bool
    removal_date: date | None
    removal_reason: str | None
    created_at: datetime
    updated_at: datetime


class TreePage(BaseModel):
    data: list[TreeResponse]
    pagination: PaginationMeta


# ─── Area Links ──────────────────────────────────────────────────

class ManualLinkRequest(RequestModel):
    tree_id: int
    area_id: int | None = None


class TreeLinkRequest(RequestModel):
    tree_id: int


class BulkLinkRequest(RequestModel):
    tree_ids: list[int] = Field(min_length=1, max_length=1000)
    method: LinkMethod
    area_id: int | None = None

    @model_validator(mode="after")
    def check_manual_has_area(self):
        if self.method == LinkMethod.MANUAL and self.area_id is None:
            raise ValueError("area_id is required for manual linking")
        return self


class LinkResult(BaseModel):
    tree: TreeResponse
    matched_area: AreaSummary | None = None
    message: str


class BulkLinkFailure(BaseModel):
    tree_id: int
    reason: str


class BulkLinkSummary(BaseModel):
    total: int
    successful: int
    failed: int


class BulkLinkResults(BaseModel):
    success: list[int]
    failed: list[BulkLinkFailure]


class BulkLinkResponse(BaseModel):
    summary: BulkLinkSummary
    results: BulkLinkResults


class UnlinkedTrees(BaseModel):
    count: int
    trees: list[TreeResponse]
