"""Tree Species — species catalogue with generated species codes.

Invariants:
    - species_code is unique; omitted codes are generated from the common name
      (scientific name as fallback)
    - A species referenced by trees cannot be deleted (400)
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from parks_backoffice.api.deps import apply_update, get_or_404
from parks_backoffice.core.errors import BusinessRuleError, ConflictError
from parks_backoffice.infrastructure.database import get_db
from parks_backoffice.models.tree import Tree, TreeSpecies
from parks_backoffice.schemas.tree import SpeciesCreate, SpeciesUpdate, SpeciesResponse
from parks_backoffice.services.code_service import generate_species_code

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/tree-species", tags=["tree-species"])


async def _ensure_code_free(
    db: AsyncSession, code: str, exclude_id: int | None = None,
) -> None:
    query = select(TreeSpecies.id).where(TreeSpecies.species_code == code)
    if exclude_id is not None:
        query = query.where(TreeSpecies.id != exclude_id)
    if (await db.execute(query.limit(1))).first():
        raise ConflictError(f"Species code '{code}' already in use", "species_code")


@router.get("", response_model=list[SpeciesResponse])
async def list_species(
    search: str | None = Query(None, max_length=200),
    db: AsyncSession = Depends(get_db),
):
    query = select(TreeSpecies).order_by(TreeSpecies.common_name)
    if search:
        pattern = f"%{search}%"
        query = query.where(or_(
            TreeSpecies.common_name.ilike(pattern),
            TreeSpecies.scientific_name.ilike(pattern),
        ))
    return (await db.execute(query)).scalars().all()


@router.get("/{species_id}", response_model=SpeciesResponse)
async def get_species(species_id: int, db: AsyncSession = Depends(get_db)):
    return await get_or_404(db, TreeSpecies, species_id, "TreeSpecies")


@router.post("", response_model=SpeciesResponse, status_code=status.HTTP_201_CREATED)
async def create_species(body: SpeciesCreate, db: AsyncSession = Depends(get_db)):
    data = body.model_dump()
    if data["species_code"]:
        await _ensure_code_free(db, data["species_code"])
    else:
        data["species_code"] = await generate_species_code(
            db, body.common_name, body.scientific_name,
        )
    species = TreeSpecies(**data)
    db.add(species)
    await db.commit()
    await db.refresh(species)
    logger.info(
        f"Species {species.species_code} created", extra={"species_id": species.id},
    )
    return species


@router.put("/{species_id}", response_model=SpeciesResponse)
async def update_species(
    species_id: int, body: SpeciesUpdate, db: AsyncSession = Depends(get_db),
):
    species = await get_or_404(db, TreeSpecies, species_id, "TreeSpecies")
    changes = body.model_dump(exclude_unset=True)
    if changes.get("species_code"):
        await _ensure_code_free(db, changes["species_code"], exclude_id=species_id)
    else:
        changes.pop("species_code", None)
    apply_update(species, changes)
    await db.commit()
    await db.refresh(species)
    return species


@router.delete("/{species_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_species(species_id: int, db: AsyncSession = Depends(get_db)):
    species = await get_or_404(db, TreeSpecies, species_id, "TreeSpecies")
    in_use = await db.scalar(
        select(func.count(Tree.id)).where(Tree.species_id == species_id),
    )
    if in_use:
        raise BusinessRuleError(
            f"Species is used by {in_use} tree(s)", code="SPECIES_IN_USE",
        )
    await db.delete(species)
    await db.commit()


@router.post("/{species_id}/generate-code", response_model=SpeciesResponse)
async def generate_code(species_id: int, db: AsyncSession = Depends(get_db)):
    """Assign a species code to a legacy species that has none."""
    species = await get_or_404(db, TreeSpecies, species_id, "TreeSpecies")
    if species.species_code:
        raise ConflictError(
            f"Species already has code '{species.species_code}'", "species_code",
        )
    species.species_code = await generate_species_code(
        db, species.common_name, species.scientific_name,
    )
    await db.commit()
    await db.refresh(species)
    return species
