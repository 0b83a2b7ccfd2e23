"""Tree Areas — park sub-areas that group trees and seed their codes.

Invariants:
    - Area codes are unique; omitted codes are generated from the park prefix + name
    - An area with trees assigned cannot be deleted (400)
    - tree_count counts non-removed trees only

Design Decisions:
    - Registered before the trees router: /api/trees/areas must win over /api/trees/{id}
    - code-preview is side-effect free; it shows the natural code even if taken
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from parks_backoffice.api.deps import apply_update, get_or_404
from parks_backoffice.api.routes.parks import get_park_or_404
from parks_backoffice.core.code_generator import area_code_preview
from parks_backoffice.core.errors import BusinessRuleError, ConflictError
from parks_backoffice.infrastructure.database import get_db
from parks_backoffice.models.tree import ParkArea, Tree
from parks_backoffice.schemas.tree import (
    AreaCreate, AreaUpdate, AreaResponse, TreeResponse,
)
from parks_backoffice.services.code_service import generate_area_code

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/trees/areas", tags=["tree-areas"])


def _live_trees():
    return Tree.is_removed.is_(False)


async def _tree_counts(db: AsyncSession, area_ids: list[int]) -> dict[int, int]:
    if not area_ids:
        return {}
    result = await db.execute(
        select(Tree.area_id, func.count(Tree.id))
        .where(Tree.area_id.in_(area_ids), _live_trees())
        .group_by(Tree.area_id),
    )
    return {area_id: n for area_id, n in result.all()}


def _with_count(area: ParkArea, count: int) -> AreaResponse:
    return AreaResponse.model_validate(area).model_copy(update={"tree_count": count})


async def _ensure_code_free(
    db: AsyncSession, code: str, exclude_id: int | None = None,
) -> None:
    query = select(ParkArea.id).where(ParkArea.code == code)
    if exclude_id is not None:
        query = query.where(ParkArea.id != exclude_id)
    if (await db.execute(query.limit(1))).first():
        raise ConflictError(f"Area code '{code}' already in use", "code")


@router.get("", response_model=list[AreaResponse])
async def list_areas(
    park_id: int | None = None, db: AsyncSession = Depends(get_db),
):
    query = select(ParkArea).order_by(ParkArea.park_id, ParkArea.code)
    if park_id is not None:
        query = query.where(ParkArea.park_id == park_id)
    areas = (await db.execute(query)).scalars().all()
    counts = await _tree_counts(db, [a.id for a in areas])
    return [_with_count(a, counts.get(a.id, 0)) for a in areas]


@router.get("/code-preview")
async def preview_area_code(
    park_id: int,
    name: str = Query("", max_length=200),
    db: AsyncSession = Depends(get_db),
):
    park = await get_park_or_404(db, park_id)
    return {"code": area_code_preview(name, park.code_prefix)}


@router.get("/{area_id}", response_model=AreaResponse)
async def get_area(area_id: int, db: AsyncSession = Depends(get_db)):
    area = await get_or_404(db, ParkArea, area_id, "ParkArea")
    counts = await _tree_counts(db, [area.id])
    return _with_count(area, counts.get(area.id, 0))


@router.post("", response_model=AreaResponse, status_code=status.HTTP_201_CREATED)
async def create_area(body: AreaCreate, db: AsyncSession = Depends(get_db)):
    await get_park_or_404(db, body.park_id)
    data = body.model_dump()
    if data["code"]:
        data["code"] = data["code"].upper()
        await _ensure_code_free(db, data["code"])
    else:
        data["code"] = await generate_area_code(db, body.name, body.park_id)
    area = ParkArea(**data)
    db.add(area)
    await db.commit()
    await db.refresh(area)
    logger.info(
        f"Area {area.code} created",
        extra={"park_id": area.park_id, "area_id": area.id},
    )
    return _with_count(area, 0)


@router.put("/{area_id}", response_model=AreaResponse)
async def update_area(
    area_id: int, body: AreaUpdate, db: AsyncSession = Depends(get_db),
):
    area = await get_or_404(db, ParkArea, area_id, "ParkArea")
    changes = body.model_dump(exclude_unset=True)
    if changes.get("code"):
        changes["code"] = changes["code"].upper()
        await _ensure_code_free(db, changes["code"], exclude_id=area_id)
    apply_update(area, changes)
    await db.commit()
    await db.refresh(area)
    counts = await _tree_counts(db, [area.id])
    return _with_count(area, counts.get(area.id, 0))


@router.delete("/{area_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_area(area_id: int, db: AsyncSession = Depends(get_db)):
    area = await get_or_404(db, ParkArea, area_id, "ParkArea")
    assigned = await db.scalar(
        select(func.count(Tree.id)).where(Tree.area_id == area_id),
    )
    if assigned:
        raise BusinessRuleError(
            f"Area {area.code} still has {assigned} tree(s) assigned",
            code="AREA_HAS_TREES",
        )
    await db.delete(area)
    await db.commit()


@router.get("/{area_id}/trees", response_model=list[TreeResponse])
async def list_area_trees(area_id: int, db: AsyncSession = Depends(get_db)):
    await get_or_404(db, ParkArea, area_id, "ParkArea")
    result = await db.execute(
        select(Tree)
        .where(Tree.area_id == area_id, _live_trees())
        .order_by(Tree.code),
    )
    return result.scalars().all()
