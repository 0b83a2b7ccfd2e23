"""Tree Area Links — attach trees to park areas manually, by GPS or by code prefix.

Invariants:
    - A tree is only ever linked to an area of its own park
    - auto-gps needs tree coordinates (400) and a containing polygon (404)
    - auto-prefix needs a tree code (400) and an area whose code prefixes it (404)
    - Bulk linking never aborts on a single tree: each failure is reported per tree

Design Decisions:
    - Linking does not rewrite tree codes; codes are stable identifiers once issued
    - Registered before the trees router so /api/trees/link/* is not read as a tree id
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from parks_backoffice.api.deps import get_or_404
from parks_backoffice.core.code_generator import match_area_by_prefix
from parks_backoffice.core.domain_types import LinkMethod
from parks_backoffice.core.errors import (
    InvalidInputError, ParksError, ResourceNotFoundError,
)
from parks_backoffice.infrastructure.database import get_db
from parks_backoffice.models.tree import ParkArea, Tree
from parks_backoffice.schemas.tree import (
    AreaSummary, BulkLinkFailure, BulkLinkRequest, BulkLinkResponse,
    BulkLinkResults, BulkLinkSummary, LinkResult, ManualLinkRequest,
    TreeLinkRequest, TreeResponse, UnlinkedTrees,
)
from parks_backoffice.services.code_service import detect_area_by_coordinates

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/trees/link", tags=["tree-links"])


# ─── Link Strategies ─────────────────────────────────────────────

async def _manual_area(
    db: AsyncSession, tree: Tree, area_id: int | None,
) -> ParkArea | None:
    if area_id is None:
        return None
    area = await get_or_404(db, ParkArea, area_id, "ParkArea")
    if area.park_id != tree.park_id:
        raise InvalidInputError(
            f"Area {area.code} does not belong to the tree's park", "area_id",
        )
    return area


async def _gps_area(db: AsyncSession, tree: Tree) -> ParkArea:
    if tree.latitude is None or tree.longitude is None:
        raise InvalidInputError(f"Tree {tree.id} has no coordinates", "tree_id")
    area = await detect_area_by_coordinates(
        db, tree.latitude, tree.longitude, tree.park_id,
    )
    if area is None:
        raise ResourceNotFoundError(
            "ParkArea", f"containing ({tree.latitude}, {tree.longitude})",
        )
    return area


async def _prefix_area(db: AsyncSession, tree: Tree) -> ParkArea:
    if not tree.code:
        raise InvalidInputError(f"Tree {tree.id} has no code", "tree_id")
    result = await db.execute(
        select(ParkArea).where(ParkArea.park_id == tree.park_id),
    )
    area = match_area_by_prefix(tree.code, result.scalars().all())
    if area is None:
        raise ResourceNotFoundError("ParkArea", f"matching code {tree.code}")
    return area


async def _resolve_area(
    db: AsyncSession, tree: Tree, method: str, area_id: int | None = None,
) -> ParkArea | None:
    if method == LinkMethod.GPS.value:
        return await _gps_area(db, tree)
    if method == LinkMethod.PREFIX.value:
        return await _prefix_area(db, tree)
    return await _manual_area(db, tree, area_id)


def _link(tree: Tree, area: ParkArea | None) -> str:
    tree.area_id = area.id if area else None
    if area is None:
        return f"Tree {tree.code or tree.id} unlinked from its area"
    return f"Tree {tree.code or tree.id} linked to area {area.code}"


async def _link_one(
    db: AsyncSession, tree_id: int, method: str, area_id: int | None = None,
) -> LinkResult:
    tree = await get_or_404(db, Tree, tree_id)
    area = await _resolve_area(db, tree, method, area_id)
    message = _link(tree, area)
    await db.commit()
    await db.refresh(tree)
    logger.info(
        message, extra={"tree_id": tree.id, "area_id": tree.area_id},
    )
    return LinkResult(
        tree=TreeResponse.model_validate(tree),
        matched_area=AreaSummary.model_validate(area) if area else None,
        message=message,
    )


# ─── Endpoints ───────────────────────────────────────────────────

@router.post("/manual", response_model=LinkResult)
async def link_manual(body: ManualLinkRequest, db: AsyncSession = Depends(get_db)):
    return await _link_one(db, body.tree_id, LinkMethod.MANUAL.value, body.area_id)


@router.post("/auto-gps", response_model=LinkResult)
async def link_by_gps(body: TreeLinkRequest, db: AsyncSession = Depends(get_db)):
    return await _link_one(db, body.tree_id, LinkMethod.GPS.value)


@router.post("/auto-prefix", response_model=LinkResult)
async def link_by_prefix(body: TreeLinkRequest, db: AsyncSession = Depends(get_db)):
    return await _link_one(db, body.tree_id, LinkMethod.PREFIX.value)


@router.post("/bulk", response_model=BulkLinkResponse)
async def link_bulk(body: BulkLinkRequest, db: AsyncSession = Depends(get_db)):
    """Link many trees with one method; failures are collected, not raised."""
    success: list[int] = []
    failed: list[BulkLinkFailure] = []
    for tree_id in body.tree_ids:
        try:
            tree = await get_or_404(db, Tree, tree_id)
            area = await _resolve_area(db, tree, body.method, body.area_id)
        except ParksError as e:
            failed.append(BulkLinkFailure(tree_id=tree_id, reason=e.message))
            continue
        _link(tree, area)
        success.append(tree_id)
    await db.commit()

    logger.info(
        f"Bulk {body.method} link: {len(success)} linked, {len(failed)} failed",
    )
    return BulkLinkResponse(
        summary=BulkLinkSummary(
            total=len(body.tree_ids), successful=len(success), failed=len(failed),
        ),
        results=BulkLinkResults(success=success, failed=failed),
    )


@router.get("/unlinked", response_model=UnlinkedTrees)
async def list_unlinked(
    park_id: int | None = None, db: AsyncSession = Depends(get_db),
):
    query = (
        select(Tree)
        .where(Tree.area_id.is_(None), Tree.is_removed.is_(False))
        .order_by(Tree.id)
    )
    if park_id is not None:
        query = query.where(Tree.park_id == park_id)
    trees = [TreeResponse.model_validate(t) for t in (await db.execute(query)).scalars()]
    return UnlinkedTrees(count=len(trees), trees=trees)
