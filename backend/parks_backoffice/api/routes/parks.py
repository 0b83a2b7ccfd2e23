"""Parks — municipalities, parks and park code prefixes.

Invariants:
    - Soft-deleted parks are invisible to list/get and cannot be updated
    - A park always leaves create with a code prefix (explicit or generated)
    - Explicit code prefixes must be unique (409 otherwise)

Design Decisions:
    - POST /{id}/generate-prefix backfills legacy parks created before prefixes existed
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from parks_backoffice.api.deps import apply_update, get_or_404
from parks_backoffice.core.errors import ConflictError, ResourceNotFoundError
from parks_backoffice.infrastructure.database import get_db
from parks_backoffice.models.asset import Asset
from parks_backoffice.models.park import Municipality, Park
from parks_backoffice.schemas.asset import AssetResponse
from parks_backoffice.schemas.park import (
    MunicipalityCreate, MunicipalityResponse, ParkCreate, ParkUpdate, ParkResponse,
)
from parks_backoffice.services.code_service import generate_park_prefix

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["parks"])


async def get_park_or_404(db: AsyncSession, park_id: int) -> Park:
    """Live (not soft-deleted) park or 404. Shared by park-scoped routes."""
    park = await db.get(Park, park_id)
    if park is None or park.is_deleted:
        raise ResourceNotFoundError("Park", park_id)
    return park


async def _ensure_prefix_free(
    db: AsyncSession, prefix: str, exclude_id: int | None = None,
) -> None:
    query = select(Park.id).where(Park.code_prefix == prefix)
    if exclude_id is not None:
        query = query.where(Park.id != exclude_id)
    if (await db.execute(query.limit(1))).first():
        raise ConflictError(f"Code prefix '{prefix}' already in use", "code_prefix")


# ─── Municipalities ──────────────────────────────────────────────

@router.get("/municipalities", response_model=list[MunicipalityResponse])
async def list_municipalities(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(Municipality).order_by(Municipality.name))
    return result.scalars().all()


@router.post(
    "/municipalities", response_model=MunicipalityResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_municipality(
    body: MunicipalityCreate, db: AsyncSession = Depends(get_db),
):
    municipality = Municipality(**body.model_dump())
    db.add(municipality)
    await db.commit()
    await db.refresh(municipality)
    return municipality


# ─── Parks ───────────────────────────────────────────────────────

@router.get("/parks", response_model=list[ParkResponse])
async def list_parks(
    search: str | None = Query(None, max_length=200),
    municipality_id: int | None = None,
    db: AsyncSession = Depends(get_db),
):
    query = select(Park).where(Park.is_deleted.is_(False)).order_by(Park.name)
    if search:
        query = query.where(Park.name.ilike(f"%{search}%"))
    if municipality_id is not None:
        query = query.where(Park.municipality_id == municipality_id)
    result = await db.execute(query)
    return result.scalars().all()


@router.get("/parks/{park_id}", response_model=ParkResponse)
async def get_park(park_id: int, db: AsyncSession = Depends(get_db)):
    return await get_park_or_404(db, park_id)


@router.post(
    "/parks", response_model=ParkResponse, status_code=status.HTTP_201_CREATED,
)
async def create_park(body: ParkCreate, db: AsyncSession = Depends(get_db)):
    if body.municipality_id is not None:
        await get_or_404(db, Municipality, body.municipality_id)
    data = body.model_dump()
    if data["code_prefix"]:
        await _ensure_prefix_free(db, data["code_prefix"])
    else:
        data["code_prefix"] = await generate_park_prefix(db, body.name)
    park = Park(**data)
    db.add(park)
    await db.commit()
    await db.refresh(park)
    logger.info(
        f"Park created with prefix {park.code_prefix}", extra={"park_id": park.id},
    )
    return park


@router.put("/parks/{park_id}", response_model=ParkResponse)
async def update_park(
    park_id: int, body: ParkUpdate, db: AsyncSession = Depends(get_db),
):
    park = await get_park_or_404(db, park_id)
    changes = body.model_dump(exclude_unset=True)
    if changes.get("code_prefix"):
        await _ensure_prefix_free(db, changes["code_prefix"], exclude_id=park_id)
    else:
        changes.pop("code_prefix", None)
    if changes.get("municipality_id") is not None:
        await get_or_404(db, Municipality, changes["municipality_id"])
    apply_update(park, changes)
    await db.commit()
    await db.refresh(park)
    return park


@router.delete("/parks/{park_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_park(park_id: int, db: AsyncSession = Depends(get_db)):
    """Soft delete: the park and its code prefix stay reserved."""
    park = await get_park_or_404(db, park_id)
    park.is_deleted = True
    await db.commit()
    logger.info("Park soft-deleted", extra={"park_id": park_id})


@router.post("/parks/{park_id}/generate-prefix", response_model=ParkResponse)
async def generate_prefix(park_id: int, db: AsyncSession = Depends(get_db)):
    park = await get_park_or_404(db, park_id)
    if park.code_prefix:
        raise ConflictError(
            f"Park {park_id} already has prefix '{park.code_prefix}'", "code_prefix",
        )
    park.code_prefix = await generate_park_prefix(db, park.name)
    await db.commit()
    await db.refresh(park)
    return park


@router.get("/parks/{park_id}/assets", response_model=list[AssetResponse])
async def list_park_assets(park_id: int, db: AsyncSession = Depends(get_db)):
    await get_park_or_404(db, park_id)
    result = await db.execute(
        select(Asset).where(Asset.park_id == park_id).order_by(Asset.name),
    )
    return result.scalars().all()
