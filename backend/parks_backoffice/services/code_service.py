"""Code Service — collision-free hierarchical codes and spatial area detection against the DB.

Invariants:
    - A returned code was free at probe time (SELECT ... LIMIT 1 found no row)
    - Probing stops at the configured cap: 26 attempts for park prefixes and area
      codes, 50 for species codes; past the cap CodeGenerationError is raised
    - Tree sequences continue from the highest existing sequence under the same prefix
    - Area detection only considers areas of the given park that have a polygon

Design Decisions:
    - Candidate order comes from core/code_generator.py; this module only probes
      (ADR: impureim sandwich — pure candidates, impure collision check)
    - Uniqueness is also enforced by DB constraints; a concurrent insert of the same
      code surfaces as an IntegrityError rather than a duplicate
"""

import logging
from itertools import islice
from typing import Iterator

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from parks_backoffice.config import get_settings
from parks_backoffice.core.code_generator import (
    park_prefix_candidates, area_code_candidates, species_code_candidates,
    tree_code_prefix, next_tree_sequence, format_tree_code,
)
from parks_backoffice.core.errors import CodeGenerationError, ResourceNotFoundError
from parks_backoffice.core.geometry import find_containing_area
from parks_backoffice.models.park import Park
from parks_backoffice.models.tree import ParkArea, TreeSpecies, Tree

logger = logging.getLogger(__name__)


async def _is_taken(db: AsyncSession, column, code: str) -> bool:
    result = await db.execute(select(column).where(column == code).limit(1))
    return result.first() is not None


async def _first_free(
    db: AsyncSession, column, candidates: Iterator[str], max_attempts: int, label: str,
) -> str:
    for attempt, candidate in enumerate(islice(candidates, max_attempts), start=1):
        if not await _is_taken(db, column, candidate):
            logger.info(
                f"Generated {label} code {candidate}", extra={"attempt": attempt},
            )
            return candidate
    raise CodeGenerationError(
        f"Could not generate a unique {label} code after {max_attempts} attempts",
    )


async def generate_park_prefix(db: AsyncSession, name: str) -> str:
    settings = get_settings()
    return await _first_free(
        db, Park.code_prefix, park_prefix_candidates(name),
        settings.prefix_max_attempts, "park",
    )


async def generate_area_code(db: AsyncSession, name: str, park_id: int) -> str:
    park = await db.get(Park, park_id)
    if park is None:
        raise ResourceNotFoundError("Park", park_id)
    if not park.code_prefix:
        raise CodeGenerationError(
            f"Park {park_id} has no code prefix; generate one before adding areas",
        )
    settings = get_settings()
    return await _first_free(
        db, ParkArea.code, area_code_candidates(name, park.code_prefix),
        settings.prefix_max_attempts, "area",
    )


async def generate_species_code(
    db: AsyncSession, common_name: str | None, scientific_name: str | None = None,
) -> str:
    settings = get_settings()
    return await _first_free(
        db, TreeSpecies.species_code,
        species_code_candidates(common_name, scientific_name),
        settings.species_code_max_attempts, "species",
    )


async def generate_tree_code(
    db: AsyncSession,
    species_id: int,
    area_id: int | None = None,
    park_id: int | None = None,
) -> str:
    """Next free tree code: <area>-<species>-NNNN, or <park>-XX-<species>-NNNN without an area."""
    species = await db.get(TreeSpecies, species_id)
    if species is None:
        raise ResourceNotFoundError("TreeSpecies", species_id)
    if not species.species_code:
        raise CodeGenerationError(
            f"Species {species_id} has no species code",
        )

    if area_id is not None:
        area = await db.get(ParkArea, area_id)
        if area is None:
            raise ResourceNotFoundError("ParkArea", area_id)
        prefix = tree_code_prefix(species.species_code, area_code=area.code)
        query = select(Tree.code).where(Tree.code.like(f"{prefix}%"))
    elif park_id is not None:
        park = await db.get(Park, park_id)
        if park is None:
            raise ResourceNotFoundError("Park", park_id)
        prefix = tree_code_prefix(
            species.species_code, park_prefix=park.code_prefix,
        )
        # Linked trees keep their XX code, so the prefix alone scopes the sequence.
        query = select(Tree.code).where(Tree.code.like(f"{prefix}%"))
    else:
        raise CodeGenerationError(
            "A tree code needs either an area or a park",
        )

    result = await db.execute(query)
    sequence = next_tree_sequence(result.scalars().all())
    return format_tree_code(prefix, sequence, get_settings().tree_sequence_width)


async def park_areas_with_polygon(db: AsyncSession, park_id: int) -> list[ParkArea]:
    result = await db.execute(
        select(ParkArea)
        .where(ParkArea.park_id == park_id, ParkArea.polygon.is_not(None))
        .order_by(ParkArea.id),
    )
    return list(result.scalars().all())


async def detect_area_by_coordinates(
    db: AsyncSession, lat: float, lng: float, park_id: int,
) -> ParkArea | None:
    """First area of the park whose polygon contains (lat, lng), or None."""
    areas = await park_areas_with_polygon(db, park_id)
    area = find_containing_area(lat, lng, areas)
    if area is not None:
        logger.info(
            f"Point ({lat}, {lng}) falls in area {area.code}",
            extra={"park_id": park_id, "area_id": area.id},
        )
    return area
