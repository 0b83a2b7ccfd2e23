"""Trees — tree inventory CRUD with automatic area detection and code generation.

Invariants:
    - Species and park must exist on create (400 otherwise, they are body references)
    - Without an explicit area, the area is detected from the tree's coordinates
    - Every created tree gets a code: <area>-<species>-NNNN, or <park>-XX-<species>-NNNN
    - DELETE soft-removes: the row and its code stay, is_removed/removal_* are set
    - Listing hides removed trees unless include_removed=true

Design Decisions:
    - Paginated list returns {data, pagination} like the dashboard tables expect
"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from parks_backoffice.api.deps import PageParams, apply_update, get_or_404, page_params
from parks_backoffice.core.domain_types import TreeHealthStatus
from parks_backoffice.core.errors import InvalidInputError
from parks_backoffice.infrastructure.database import get_db
from parks_backoffice.models.park import Park
from parks_backoffice.models.tree import ParkArea, Tree, TreeSpecies
from parks_backoffice.schemas.common import pagination_meta
from parks_backoffice.schemas.tree import (
    TreeCreate, TreePage, TreeRemove, TreeResponse, TreeUpdate,
)
from parks_backoffice.services.code_service import (
    detect_area_by_coordinates, generate_tree_code,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/trees", tags=["trees"])


async def _require_reference(db: AsyncSession, model, row_id: int, field: str):
    row = await db.get(model, row_id)
    if row is None or getattr(row, "is_deleted", False):
        raise InvalidInputError(f"{field} {row_id} does not exist", field)
    return row


@router.get("", response_model=TreePage)
async def list_trees(
    park_id: int | None = None,
    species_id: int | None = None,
    area_id: int | None = None,
    health_status: TreeHealthStatus | None = None,
    search: str | None = Query(None, max_length=200),
    include_removed: bool = False,
    paging: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db),
):
    query = select(Tree).join(TreeSpecies, TreeSpecies.id == Tree.species_id)
    if not include_removed:
        query = query.where(Tree.is_removed.is_(False))
    if park_id is not None:
        query = query.where(Tree.park_id == park_id)
    if species_id is not None:
        query = query.where(Tree.species_id == species_id)
    if area_id is not None:
        query = query.where(Tree.area_id == area_id)
    if health_status is not None:
        query = query.where(Tree.health_status == health_status.value)
    if search:
        pattern = f"%{search}%"
        query = query.where(or_(
            Tree.code.ilike(pattern),
            Tree.notes.ilike(pattern),
            Tree.location_description.ilike(pattern),
            TreeSpecies.common_name.ilike(pattern),
            TreeSpecies.scientific_name.ilike(pattern),
        ))

    total = await db.scalar(select(func.count()).select_from(query.subquery()))
    result = await db.execute(
        query.order_by(Tree.id.desc()).limit(paging.limit).offset(paging.offset),
    )
    return TreePage(
        data=[TreeResponse.model_validate(t) for t in result.scalars()],
        pagination=pagination_meta(paging.page, paging.limit, total or 0),
    )


@router.get("/{tree_id}", response_model=TreeResponse)
async def get_tree(tree_id: int, db: AsyncSession = Depends(get_db)):
    return await get_or_404(db, Tree, tree_id)


@router.post("", response_model=TreeResponse, status_code=status.HTTP_201_CREATED)
async def create_tree(body: TreeCreate, db: AsyncSession = Depends(get_db)):
    await _require_reference(db, TreeSpecies, body.species_id, "species_id")
    await _require_reference(db, Park, body.park_id, "park_id")

    data = body.model_dump(exclude_none=True)
    if body.area_id is not None:
        area = await _require_reference(db, ParkArea, body.area_id, "area_id")
        if area.park_id != body.park_id:
            raise InvalidInputError(
                f"Area {area.id} does not belong to park {body.park_id}", "area_id",
            )
    else:
        area = await detect_area_by_coordinates(
            db, body.latitude, body.longitude, body.park_id,
        )
        if area is not None:
            data["area_id"] = area.id

    data["code"] = await generate_tree_code(
        db, body.species_id,
        area_id=area.id if area else None,
        park_id=body.park_id,
    )
    tree = Tree(**data)
    db.add(tree)
    await db.commit()
    await db.refresh(tree)
    logger.info(
        f"Tree {tree.code} created",
        extra={"tree_id": tree.id, "park_id": tree.park_id, "area_id": tree.area_id},
    )
    return tree


@router.put("/{tree_id}", response_model=TreeResponse)
async def update_tree(
    tree_id: int, body: TreeUpdate, db: AsyncSession = Depends(get_db),
):
    tree = await get_or_404(db, Tree, tree_id)
    changes = body.model_dump(exclude_unset=True)
    if changes.get("species_id") is not None:
        await _require_reference(db, TreeSpecies, changes["species_id"], "species_id")
    apply_update(tree, changes)
    await db.commit()
    await db.refresh(tree)
    return tree


@router.delete("/{tree_id}", response_model=TreeResponse)
async def remove_tree(
    tree_id: int,
    body: TreeRemove | None = None,
    db: AsyncSession = Depends(get_db),
):
    """Soft removal: the tree stays in the inventory flagged as removed.

    The body is optional; removal_date defaults to today and the reason to
    "No especificado".
    """
    body = body or TreeRemove()
    tree = await get_or_404(db, Tree, tree_id)
    tree.is_removed = True
    tree.removal_date = body.removal_date or date.today()
    tree.removal_reason = body.reason or "No especificado"
    await db.commit()
    await db.refresh(tree)
    logger.info(f"Tree {tree.code} removed", extra={"tree_id": tree_id})
    return tree
