"""Warehouse Schemas — categories, consumables, stock levels and movements."""

from datetime import date, datetime

from pydantic import BaseModel, Field

from parks_backoffice.core.domain_types import MovementType
from parks_backoffice.schemas.common import ORMModel, PaginationMeta, RequestModel


class WarehouseCategoryCreate(RequestModel):
    name: str = Field(min_length=1, max_length=100)
    code: str | None = Field(None, max_length=20)
    description: str | None = None
    parent_id: int | None = None
    is_active: bool = True


class WarehouseCategoryUpdate(RequestModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    code: str | None = Field(None, max_length=20)
    description: str | None = None
    parent_id: int | None = None
    is_active: bool | None = None


class WarehouseCategoryResponse(ORMModel):
    id: int
    name: str
    code: str | None
    description: str | None
    parent_id: int | None
    is_active: bool


class ConsumableCreate(RequestModel):
    code: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=1, max_length=200)
    description: str | None = None
    category_id: int | None = None
    unit_of_measure: str = Field("pieza", max_length=30)
    minimum_stock: float = Field(0, ge=0)
    maximum_stock: float | None = Field(None, ge=0)
    unit_cost: float | None = Field(None, ge=0)
    is_active: bool = True


class ConsumableUpdate(RequestModel):
    code: str | None = Field(None, min_length=1, max_length=50)
    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    category_id: int | None = None
    unit_of_measure: str | None = Field(None, max_length=30)
    minimum_stock: float | None = Field(None, ge=0)
    maximum_stock: float | None = Field(None, ge=0)
    unit_cost: float | None = Field(None, ge=0)
    is_active: bool | None = None


class ConsumableResponse(ORMModel):
    id: int
    code: str
    name: str
    description: str | None
    category_id: int | None
    unit_of_measure: str
    minimum_stock: float
    maximum_stock: float | None
    unit_cost: float | None
    is_active: bool


class StockCreate(RequestModel):
    consumable_id: int
    park_id: int | None = None
    warehouse_location: str | None = Field(None, max_length=100)
    quantity: float = Field(0, ge=0)
    reserved_quantity: float = Field(0, ge=0)


class StockUpdate(RequestModel):
    warehouse_location: str | None = Field(None, max_length=100)
    reserved_quantity: float | None = Field(None, ge=0)


class StockResponse(ORMModel):
    id: int
    consumable_id: int
    consumable_name: str | None = None
    minimum_stock: float | None = None
    park_id: int | None
    warehouse_location: str | None
    quantity: float
    reserved_quantity: float
    available_quantity: float
    last_movement_date: datetime | None


class MovementCreate(RequestModel):
    consumable_id: int
    stock_id: int
    movement_type: MovementType
    quantity: float = Field(gt=0)
    unit_cost: float | None = Field(None, ge=0)
    movement_date: date | None = None
    reference_document: str | None = Field(None, max_length=100)
    notes: str | None = None
    performed_by: str | None = Field(None, max_length=200)


class MovementResponse(ORMModel):
    id: int
    consumable_id: int
    stock_id: int
    movement_type: str
    quantity: float
    quantity_before: float
    quantity_after: float
    unit_cost: float | None
    movement_date: date
    reference_document: str | None
    notes: str | None
    performed_by: str | None
    created_at: datetime


class MovementCreated(BaseModel):
    movement: MovementResponse
    stock: StockResponse


class MovementPage(BaseModel):
    data: list[MovementResponse]
    pagination: PaginationMeta
