"""Assets — park asset inventory with a transactional audit history.

Invariants:
    - Every asset mutation and its history rows commit together (atomic) or not at all
    - Update writes one history row per tracked field whose normalized value changed
    - Deleting an asset deletes its maintenances; its history rows are kept
    - Creating a maintenance record bumps last/next maintenance dates on the asset

Design Decisions:
    - History rows carry no FK to assets so the audit trail survives deletion
    - /history/recent is declared before /{asset_id} routes
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from parks_backoffice.api.deps import (
    PageParams, apply_update, caller_id, get_or_404, page_params,
)
from parks_backoffice.core.domain_types import AssetCondition, AssetStatus
from parks_backoffice.core.errors import InvalidInputError
from parks_backoffice.infrastructure.database import atomic, get_db
from parks_backoffice.models.asset import (
    Asset, AssetCategory, AssetHistory, AssetMaintenance,
)
from parks_backoffice.models.park import Park
from parks_backoffice.schemas.asset import (
    AssetCreate, AssetPage, AssetResponse, AssetUpdate, BulkDeleteRequest,
    BulkDeleteResponse, HistoryEntryCreate, HistoryEntryResponse,
    MaintenanceCreate, MaintenanceResponse,
)
from parks_backoffice.schemas.common import pagination_meta
from parks_backoffice.services import asset_history

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/assets", tags=["assets"])


async def _check_references(
    db: AsyncSession, category_id: int | None, park_id: int | None,
) -> None:
    if category_id is not None and await db.get(AssetCategory, category_id) is None:
        raise InvalidInputError(f"Category {category_id} does not exist", "category_id")
    if park_id is not None:
        park = await db.get(Park, park_id)
        if park is None or park.is_deleted:
            raise InvalidInputError(f"Park {park_id} does not exist", "park_id")


async def _delete_asset(db: AsyncSession, asset: Asset, user_id: int | None) -> None:
    await asset_history.log_deletion(db, asset, user_id)
    await db.execute(
        delete(AssetMaintenance).where(AssetMaintenance.asset_id == asset.id),
    )
    await db.delete(asset)
    await db.flush()


# ─── Assets ──────────────────────────────────────────────────────

@router.get("", response_model=AssetPage)
async def list_assets(
    park_id: int | None = None,
    category_id: int | None = None,
    status_filter: AssetStatus | None = Query(None, alias="status"),
    condition: AssetCondition | None = None,
    search: str | None = Query(None, max_length=200),
    paging: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db),
):
    query = select(Asset)
    if park_id is not None:
        query = query.where(Asset.park_id == park_id)
    if category_id is not None:
        query = query.where(Asset.category_id == category_id)
    if status_filter is not None:
        query = query.where(Asset.status == status_filter.value)
    if condition is not None:
        query = query.where(Asset.condition == condition.value)
    if search:
        pattern = f"%{search}%"
        query = query.where(or_(
            Asset.name.ilike(pattern),
            Asset.serial_number.ilike(pattern),
            Asset.description.ilike(pattern),
        ))

    total = await db.scalar(select(func.count()).select_from(query.subquery()))
    result = await db.execute(
        query.order_by(Asset.name, Asset.id).limit(paging.limit).offset(paging.offset),
    )
    return AssetPage(
        data=[AssetResponse.model_validate(a) for a in result.scalars()],
        pagination=pagination_meta(paging.page, paging.limit, total or 0),
    )


@router.get("/history/recent", response_model=list[HistoryEntryResponse])
async def recent_history(
    limit: int = Query(20, ge=1, le=200), db: AsyncSession = Depends(get_db),
):
    result = await db.execute(
        select(AssetHistory)
        .order_by(AssetHistory.created_at.desc(), AssetHistory.id.desc())
        .limit(limit),
    )
    return result.scalars().all()


@router.post("/bulk-delete", response_model=BulkDeleteResponse)
async def bulk_delete_assets(
    body: BulkDeleteRequest,
    user_id: int | None = Depends(caller_id),
    db: AsyncSession = Depends(get_db),
):
    deleted: list[int] = []
    not_found: list[int] = []
    async with atomic(db):
        for asset_id in dict.fromkeys(body.ids):
            asset = await db.get(Asset, asset_id)
            if asset is None:
                not_found.append(asset_id)
                continue
            await _delete_asset(db, asset, user_id)
            deleted.append(asset_id)
    logger.info(f"Bulk-deleted {len(deleted)} asset(s)", extra={"user_id": user_id})
    return BulkDeleteResponse(deleted=deleted, not_found=not_found)


@router.get("/{asset_id}", response_model=AssetResponse)
async def get_asset(asset_id: int, db: AsyncSession = Depends(get_db)):
    return await get_or_404(db, Asset, asset_id)


@router.post("", response_model=AssetResponse, status_code=status.HTTP_201_CREATED)
async def create_asset(
    body: AssetCreate,
    user_id: int | None = Depends(caller_id),
    db: AsyncSession = Depends(get_db),
):
    await _check_references(db, body.category_id, body.park_id)
    asset = Asset(**body.model_dump(exclude_none=True))
    async with atomic(db):
        db.add(asset)
        await db.flush()
        await asset_history.log_creation(db, asset, user_id)
    await db.refresh(asset)
    logger.info(f"Asset {asset.name} created", extra={"asset_id": asset.id})
    return asset


@router.put("/{asset_id}", response_model=AssetResponse)
async def update_asset(
    asset_id: int,
    body: AssetUpdate,
    user_id: int | None = Depends(caller_id),
    db: AsyncSession = Depends(get_db),
):
    asset = await get_or_404(db, Asset, asset_id)
    changes = body.model_dump(exclude_unset=True)
    await _check_references(db, changes.get("category_id"), changes.get("park_id"))
    async with atomic(db):
        previous = asset_history.snapshot(asset)
        apply_update(asset, changes)
        await db.flush()
        await asset_history.log_update(
            db, asset.id, previous, asset_history.snapshot(asset), user_id,
        )
    await db.refresh(asset)
    return asset


@router.delete("/{asset_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_asset(
    asset_id: int,
    user_id: int | None = Depends(caller_id),
    db: AsyncSession = Depends(get_db),
):
    asset = await get_or_404(db, Asset, asset_id)
    async with atomic(db):
        await _delete_asset(db, asset, user_id)
    logger.info("Asset deleted", extra={"asset_id": asset_id})


# ─── History ─────────────────────────────────────────────────────

@router.get("/{asset_id}/history", response_model=list[HistoryEntryResponse])
async def asset_history_entries(asset_id: int, db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(AssetHistory)
        .where(AssetHistory.asset_id == asset_id)
        .order_by(AssetHistory.created_at.desc(), AssetHistory.id.desc()),
    )
    return result.scalars().all()


@router.post(
    "/{asset_id}/history", response_model=HistoryEntryResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_history_entry(
    asset_id: int,
    body: HistoryEntryCreate,
    user_id: int | None = Depends(caller_id),
    db: AsyncSession = Depends(get_db),
):
    await get_or_404(db, Asset, asset_id)
    async with atomic(db):
        entry = await asset_history.log_custom(
            db, asset_id, body.change_type, body.description, body.notes, user_id,
        )
    await db.refresh(entry)
    return entry


# ─── Maintenances ────────────────────────────────────────────────

@router.get("/{asset_id}/maintenances", response_model=list[MaintenanceResponse])
async def list_maintenances(asset_id: int, db: AsyncSession = Depends(get_db)):
    await get_or_404(db, Asset, asset_id)
    result = await db.execute(
        select(AssetMaintenance)
        .where(AssetMaintenance.asset_id == asset_id)
        .order_by(AssetMaintenance.maintenance_date.desc()),
    )
    return result.scalars().all()


@router.post(
    "/{asset_id}/maintenances", response_model=MaintenanceResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_maintenance(
    asset_id: int,
    body: MaintenanceCreate,
    user_id: int | None = Depends(caller_id),
    db: AsyncSession = Depends(get_db),
):
    asset = await get_or_404(db, Asset, asset_id)
    maintenance = AssetMaintenance(asset_id=asset_id, **body.model_dump())
    async with atomic(db):
        db.add(maintenance)
        if (
            asset.last_maintenance_date is None
            or body.maintenance_date >= asset.last_maintenance_date
        ):
            asset.last_maintenance_date = body.maintenance_date
        if body.next_maintenance_date is not None:
            asset.next_maintenance_date = body.next_maintenance_date
        await db.flush()
        await asset_history.log_maintenance(
            db, asset_id, body.maintenance_type, body.description, body.cost, user_id,
        )
    await db.refresh(maintenance)
    logger.info(
        f"Maintenance {body.maintenance_type} recorded", extra={"asset_id": asset_id},
    )
    return maintenance
