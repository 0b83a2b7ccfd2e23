"""Asset Categories — two-level category catalogue for park assets.

Invariants:
    - Category names are unique (409)
    - A category referenced by assets or by child categories cannot be deleted (400)
    - A category cannot be its own parent
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from parks_backoffice.api.deps import apply_update, get_or_404
from parks_backoffice.core.errors import (
    BusinessRuleError, ConflictError, InvalidInputError,
)
from parks_backoffice.infrastructure.database import get_db
from parks_backoffice.models.asset import Asset, AssetCategory
from parks_backoffice.schemas.asset import (
    CategoryCreate, CategoryNode, CategoryResponse, CategoryUpdate,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/asset-categories", tags=["asset-categories"])


async def _ensure_name_free(
    db: AsyncSession, name: str, exclude_id: int | None = None,
) -> None:
    query = select(AssetCategory.id).where(AssetCategory.name == name)
    if exclude_id is not None:
        query = query.where(AssetCategory.id != exclude_id)
    if (await db.execute(query.limit(1))).first():
        raise ConflictError(f"Category '{name}' already exists", "name")


async def _check_parent(
    db: AsyncSession, parent_id: int | None, category_id: int | None = None,
) -> None:
    if parent_id is None:
        return
    if parent_id == category_id:
        raise InvalidInputError("A category cannot be its own parent", "parent_id")
    if await db.get(AssetCategory, parent_id) is None:
        raise InvalidInputError(f"Parent category {parent_id} does not exist", "parent_id")


@router.get("", response_model=list[CategoryResponse])
async def list_categories(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(AssetCategory).order_by(AssetCategory.name))
    return result.scalars().all()


@router.get("/tree/structure", response_model=list[CategoryNode])
async def category_tree(db: AsyncSession = Depends(get_db)):
    """Top-level categories, each with its direct children."""
    result = await db.execute(select(AssetCategory).order_by(AssetCategory.name))
    categories = result.scalars().all()
    children: dict[int, list[CategoryResponse]] = {}
    for category in categories:
        if category.parent_id is not None:
            children.setdefault(category.parent_id, []).append(
                CategoryResponse.model_validate(category),
            )
    return [
        CategoryNode.model_validate(c).model_copy(
            update={"children": children.get(c.id, [])},
        )
        for c in categories
        if c.parent_id is None
    ]


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(category_id: int, db: AsyncSession = Depends(get_db)):
    return await get_or_404(db, AssetCategory, category_id)


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(body: CategoryCreate, db: AsyncSession = Depends(get_db)):
    await _ensure_name_free(db, body.name)
    await _check_parent(db, body.parent_id)
    category = AssetCategory(**body.model_dump())
    db.add(category)
    await db.commit()
    await db.refresh(category)
    return category


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: int, body: CategoryUpdate, db: AsyncSession = Depends(get_db),
):
    category = await get_or_404(db, AssetCategory, category_id)
    changes = body.model_dump(exclude_unset=True)
    if changes.get("name"):
        await _ensure_name_free(db, changes["name"], exclude_id=category_id)
    if "parent_id" in changes:
        await _check_parent(db, changes["parent_id"], category_id)
    apply_update(category, changes)
    await db.commit()
    await db.refresh(category)
    return category


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(category_id: int, db: AsyncSession = Depends(get_db)):
    category = await get_or_404(db, AssetCategory, category_id)
    assets = await db.scalar(
        select(func.count(Asset.id)).where(Asset.category_id == category_id),
    )
    if assets:
        raise BusinessRuleError(
            f"Category is used by {assets} asset(s)", code="CATEGORY_IN_USE",
        )
    children = await db.scalar(
        select(func.count(AssetCategory.id))
        .where(AssetCategory.parent_id == category_id),
    )
    if children:
        raise BusinessRuleError(
            f"Category has {children} child categories", code="CATEGORY_HAS_CHILDREN",
        )
    await db.delete(category)
    await db.commit()
    logger.info(f"Asset category {category.name} deleted")
