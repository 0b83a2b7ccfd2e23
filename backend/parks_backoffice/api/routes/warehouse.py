"""Warehouse — consumable catalogue, stock per location and stock movements.

Invariants:
    - Consumable codes are unique (409)
    - available_quantity = quantity - reserved_quantity after every write
    - Stock quantity only changes through movements (POST /movements)
    - low_stock lists rows whose quantity is at or below the consumable's minimum
"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func, or_, select, true
from sqlalchemy.ext.asyncio import AsyncSession

from parks_backoffice.api.deps import PageParams, apply_update, get_or_404, page_params
from parks_backoffice.core.domain_types import MovementType
from parks_backoffice.core.errors import (
    BusinessRuleError, ConflictError, InvalidInputError,
)
from parks_backoffice.core.inventory import available_quantity
from parks_backoffice.infrastructure.database import get_db
from parks_backoffice.models.park import Park
from parks_backoffice.models.warehouse import (
    Consumable, InventoryMovement, InventoryStock, WarehouseCategory,
)
from parks_backoffice.schemas.common import pagination_meta
from parks_backoffice.schemas.warehouse import (
    ConsumableCreate, ConsumableResponse, ConsumableUpdate, MovementCreate,
    MovementCreated, MovementPage, MovementResponse, StockCreate, StockResponse,
    StockUpdate, WarehouseCategoryCreate, WarehouseCategoryResponse,
    WarehouseCategoryUpdate,
)
from parks_backoffice.services.inventory_service import record_movement

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/warehouse", tags=["warehouse"])


async def _ensure_unique(
    db: AsyncSession, model, field: str, value: str, exclude_id: int | None = None,
) -> None:
    query = select(model.id).where(getattr(model, field) == value)
    if exclude_id is not None:
        query = query.where(model.id != exclude_id)
    if (await db.execute(query.limit(1))).first():
        raise ConflictError(f"{field} '{value}' already in use", field)


async def _check_category(db: AsyncSession, category_id: int | None) -> None:
    if category_id is not None and await db.get(WarehouseCategory, category_id) is None:
        raise InvalidInputError(f"Category {category_id} does not exist", "category_id")


# ─── Categories ──────────────────────────────────────────────────

@router.get("/categories", response_model=list[WarehouseCategoryResponse])
async def list_categories(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(WarehouseCategory).order_by(WarehouseCategory.name))
    return result.scalars().all()


@router.post(
    "/categories", response_model=WarehouseCategoryResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_category(
    body: WarehouseCategoryCreate, db: AsyncSession = Depends(get_db),
):
    await _ensure_unique(db, WarehouseCategory, "name", body.name)
    if body.code:
        await _ensure_unique(db, WarehouseCategory, "code", body.code)
    await _check_category(db, body.parent_id)
    category = WarehouseCategory(**body.model_dump())
    db.add(category)
    await db.commit()
    await db.refresh(category)
    return category


@router.put("/categories/{category_id}", response_model=WarehouseCategoryResponse)
async def update_category(
    category_id: int, body: WarehouseCategoryUpdate, db: AsyncSession = Depends(get_db),
):
    category = await get_or_404(db, WarehouseCategory, category_id)
    changes = body.model_dump(exclude_unset=True)
    if changes.get("name"):
        await _ensure_unique(db, WarehouseCategory, "name", changes["name"], category_id)
    if changes.get("code"):
        await _ensure_unique(db, WarehouseCategory, "code", changes["code"], category_id)
    if changes.get("parent_id") == category_id:
        raise InvalidInputError("A category cannot be its own parent", "parent_id")
    apply_update(category, changes)
    await db.commit()
    await db.refresh(category)
    return category


@router.delete("/categories/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(category_id: int, db: AsyncSession = Depends(get_db)):
    category = await get_or_404(db, WarehouseCategory, category_id)
    in_use = await db.scalar(
        select(func.count(Consumable.id)).where(Consumable.category_id == category_id),
    )
    if in_use:
        raise BusinessRuleError(
            f"Category holds {in_use} consumable(s)", code="CATEGORY_IN_USE",
        )
    await db.delete(category)
    await db.commit()


# ─── Consumables ─────────────────────────────────────────────────

@router.get("/consumables", response_model=list[ConsumableResponse])
async def list_consumables(
    category_id: int | None = None,
    is_active: bool | None = None,
    search: str | None = Query(None, max_length=200),
    db: AsyncSession = Depends(get_db),
):
    query = select(Consumable).order_by(Consumable.name)
    if category_id is not None:
        query = query.where(Consumable.category_id == category_id)
    if is_active is not None:
        query = query.where(Consumable.is_active.is_(is_active))
    if search:
        pattern = f"%{search}%"
        query = query.where(or_(Consumable.name.ilike(pattern), Consumable.code.ilike(pattern)))
    return (await db.execute(query)).scalars().all()


@router.get("/consumables/{consumable_id}", response_model=ConsumableResponse)
async def get_consumable(consumable_id: int, db: AsyncSession = Depends(get_db)):
    return await get_or_404(db, Consumable, consumable_id)


@router.post(
    "/consumables", response_model=ConsumableResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_consumable(body: ConsumableCreate, db: AsyncSession = Depends(get_db)):
    await _ensure_unique(db, Consumable, "code", body.code)
    await _check_category(db, body.category_id)
    consumable = Consumable(**body.model_dump())
    db.add(consumable)
    await db.commit()
    await db.refresh(consumable)
    logger.info(
        f"Consumable {consumable.code} created", extra={"consumable_id": consumable.id},
    )
    return consumable


@router.put("/consumables/{consumable_id}", response_model=ConsumableResponse)
async def update_consumable(
    consumable_id: int, body: ConsumableUpdate, db: AsyncSession = Depends(get_db),
):
    consumable = await get_or_404(db, Consumable, consumable_id)
    changes = body.model_dump(exclude_unset=True)
    if changes.get("code"):
        await _ensure_unique(db, Consumable, "code", changes["code"], consumable_id)
    if "category_id" in changes:
        await _check_category(db, changes["category_id"])
    apply_update(consumable, changes)
    await db.commit()
    await db.refresh(consumable)
    return consumable


@router.delete("/consumables/{consumable_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_consumable(consumable_id: int, db: AsyncSession = Depends(get_db)):
    consumable = await get_or_404(db, Consumable, consumable_id)
    stocked = await db.scalar(
        select(func.count(InventoryStock.id))
        .where(InventoryStock.consumable_id == consumable_id),
    )
    if stocked:
        raise BusinessRuleError(
            f"Consumable has {stocked} stock record(s)", code="CONSUMABLE_IN_USE",
        )
    await db.delete(consumable)
    await db.commit()


# ─── Stock ───────────────────────────────────────────────────────

async def _ensure_stock_slot_free(
    db: AsyncSession, consumable_id: int, park_id: int | None, location: str | None,
    exclude_id: int | None = None,
) -> None:
    query = select(InventoryStock.id).where(
        InventoryStock.id != exclude_id if exclude_id is not None else true(),
        InventoryStock.consumable_id == consumable_id,
        InventoryStock.park_id.is_(None) if park_id is None
        else InventoryStock.park_id == park_id,
        InventoryStock.warehouse_location.is_(None) if location is None
        else InventoryStock.warehouse_location == location,
    )
    if (await db.execute(query.limit(1))).first():
        raise ConflictError(
            "A stock record for this consumable and location already exists",
            "warehouse_location",
        )


def _stock_query():
    return (
        select(InventoryStock, Consumable.name, Consumable.minimum_stock)
        .join(Consumable, Consumable.id == InventoryStock.consumable_id)
    )


def _stock_response(stock: InventoryStock, name: str, minimum: float) -> StockResponse:
    return StockResponse.model_validate(stock).model_copy(
        update={"consumable_name": name, "minimum_stock": minimum},
    )


async def _stock_by_id(db: AsyncSession, stock_id: int) -> StockResponse:
    row = (await db.execute(_stock_query().where(InventoryStock.id == stock_id))).one()
    return _stock_response(*row)


@router.get("/stock", response_model=list[StockResponse])
async def list_stock(
    park_id: int | None = None,
    consumable_id: int | None = None,
    low_stock: bool = False,
    db: AsyncSession = Depends(get_db),
):
    query = _stock_query().order_by(Consumable.name, InventoryStock.id)
    if park_id is not None:
        query = query.where(InventoryStock.park_id == park_id)
    if consumable_id is not None:
        query = query.where(InventoryStock.consumable_id == consumable_id)
    if low_stock:
        query = query.where(InventoryStock.quantity <= Consumable.minimum_stock)
    result = await db.execute(query)
    return [_stock_response(*row) for row in result.all()]


@router.post("/stock", response_model=StockResponse, status_code=status.HTTP_201_CREATED)
async def create_stock(body: StockCreate, db: AsyncSession = Depends(get_db)):
    if await db.get(Consumable, body.consumable_id) is None:
        raise InvalidInputError(
            f"Consumable {body.consumable_id} does not exist", "consumable_id",
        )
    if body.park_id is not None and await db.get(Park, body.park_id) is None:
        raise InvalidInputError(f"Park {body.park_id} does not exist", "park_id")
    await _ensure_stock_slot_free(db, body.consumable_id, body.park_id, body.warehouse_location)
    if body.reserved_quantity > body.quantity:
        raise InvalidInputError("Reserved quantity exceeds quantity", "reserved_quantity")
    stock = InventoryStock(
        **body.model_dump(),
        available_quantity=available_quantity(body.quantity, body.reserved_quantity),
    )
    db.add(stock)
    await db.commit()
    return await _stock_by_id(db, stock.id)


@router.put("/stock/{stock_id}", response_model=StockResponse)
async def update_stock(
    stock_id: int, body: StockUpdate, db: AsyncSession = Depends(get_db),
):
    stock = await get_or_404(db, InventoryStock, stock_id)
    changes = body.model_dump(exclude_unset=True)
    if "warehouse_location" in changes and changes["warehouse_location"] != stock.warehouse_location:
        await _ensure_stock_slot_free(
            db, stock.consumable_id, stock.park_id, changes["warehouse_location"], stock_id,
        )
    reserved = changes.get("reserved_quantity")
    if reserved is not None and reserved > stock.quantity:
        raise InvalidInputError("Reserved quantity exceeds quantity", "reserved_quantity")
    apply_update(stock, changes)
    stock.available_quantity = available_quantity(stock.quantity, stock.reserved_quantity)
    await db.commit()
    return await _stock_by_id(db, stock_id)


# ─── Movements ───────────────────────────────────────────────────

@router.get("/movements", response_model=MovementPage)
async def list_movements(
    consumable_id: int | None = None,
    stock_id: int | None = None,
    movement_type: MovementType | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    paging: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db),
):
    query = select(InventoryMovement)
    if consumable_id is not None:
        query = query.where(InventoryMovement.consumable_id == consumable_id)
    if stock_id is not None:
        query = query.where(InventoryMovement.stock_id == stock_id)
    if movement_type is not None:
        query = query.where(InventoryMovement.movement_type == movement_type.value)
    if date_from is not None:
        query = query.where(InventoryMovement.movement_date >= date_from)
    if date_to is not None:
        query = query.where(InventoryMovement.movement_date <= date_to)

    total = await db.scalar(select(func.count()).select_from(query.subquery()))
    result = await db.execute(
        query.order_by(InventoryMovement.movement_date.desc(), InventoryMovement.id.desc())
        .limit(paging.limit).offset(paging.offset),
    )
    return MovementPage(
        data=[MovementResponse.model_validate(m) for m in result.scalars()],
        pagination=pagination_meta(paging.page, paging.limit, total or 0),
    )


@router.post(
    "/movements", response_model=MovementCreated, status_code=status.HTTP_201_CREATED,
)
async def create_movement(body: MovementCreate, db: AsyncSession = Depends(get_db)):
    movement, stock = await record_movement(db, **body.model_dump())
    await db.refresh(movement)
    return MovementCreated(
        movement=MovementResponse.model_validate(movement),
        stock=await _stock_by_id(db, stock.id),
    )
