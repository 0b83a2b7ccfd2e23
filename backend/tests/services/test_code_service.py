"""Code Service tests — collision probing against the database and area detection.

Invariants:
    - Returned codes are free at probe time
    - Probing gives up after the configured attempt cap
    - Tree sequences are scoped to their code prefix only, including XX codes of
      trees that were linked to an area afterwards
"""

import pytest

from parks_backoffice.config import Settings
from parks_backoffice.core.errors import CodeGenerationError, ResourceNotFoundError
from parks_backoffice.models.park import Park
from parks_backoffice.models.tree import ParkArea, Tree, TreeSpecies
from parks_backoffice.services import code_service

SQUARE = [
    {"lat": 20.0, "lng": -103.1}, {"lat": 20.0, "lng": -103.0},
    {"lat": 20.1, "lng": -103.0}, {"lat": 20.1, "lng": -103.1},
]


@pytest.fixture
async def colomos(test_db):
    park = Park(name="Parque Los Colomos", code_prefix="CO")
    test_db.add(park)
    await test_db.commit()
    return park


@pytest.fixture
async def jacaranda(test_db):
    species = TreeSpecies(
        common_name="Jacaranda", scientific_name="Jacaranda mimosifolia", species_code="JA",
    )
    test_db.add(species)
    await test_db.commit()
    return species


@pytest.fixture
async def garden(test_db, colomos):
    area = ParkArea(park_id=colomos.id, name="Jardín", code="CO-JA", polygon=SQUARE)
    test_db.add(area)
    await test_db.commit()
    return area


async def test_park_prefix_skips_taken_prefix(test_db, colomos):
    assert await code_service.generate_park_prefix(test_db, "Colomos Norte") == "CL"


async def test_park_prefix_gives_up_after_cap(test_db, colomos, monkeypatch):
    monkeypatch.setattr(
        code_service, "get_settings", lambda: Settings(prefix_max_attempts=1),
    )
    with pytest.raises(CodeGenerationError):
        await code_service.generate_park_prefix(test_db, "Colomos Norte")


async def test_area_code_uses_park_prefix(test_db, colomos):
    assert await code_service.generate_area_code(test_db, "Zona Deportiva Norte", colomos.id) == "CO-DN"


async def test_area_code_skips_taken_code(test_db, garden):
    assert await code_service.generate_area_code(test_db, "Jardín", garden.park_id) == "CO-JR"


async def test_area_code_unknown_park(test_db):
    with pytest.raises(ResourceNotFoundError):
        await code_service.generate_area_code(test_db, "Jardín", 999)


async def test_area_code_requires_park_prefix(test_db):
    park = Park(name="Parque Viejo")
    test_db.add(park)
    await test_db.commit()
    with pytest.raises(CodeGenerationError):
        await code_service.generate_area_code(test_db, "Jardín", park.id)


async def test_species_code_skips_taken_code(test_db, jacaranda):
    assert await code_service.generate_species_code(test_db, "Jazmín") == "JAZ"


async def test_tree_code_in_area_continues_sequence(test_db, garden, jacaranda):
    test_db.add(Tree(
        species_id=jacaranda.id, park_id=garden.park_id, area_id=garden.id,
        code="CO-JA-JA-0004",
    ))
    await test_db.commit()
    code = await code_service.generate_tree_code(test_db, jacaranda.id, area_id=garden.id)
    assert code == "CO-JA-JA-0005"


async def test_park_level_tree_code(test_db, colomos, jacaranda):
    code = await code_service.generate_tree_code(test_db, jacaranda.id, park_id=colomos.id)
    assert code == "CO-XX-JA-0001"


async def test_park_level_sequence_counts_trees_linked_later(test_db, garden, jacaranda):
    test_db.add(Tree(
        species_id=jacaranda.id, park_id=garden.park_id, area_id=garden.id,
        code="CO-XX-JA-0009",
    ))
    await test_db.commit()
    code = await code_service.generate_tree_code(
        test_db, jacaranda.id, park_id=garden.park_id,
    )
    assert code == "CO-XX-JA-0010"


async def test_tree_code_requires_species_code(test_db, colomos):
    species = TreeSpecies(common_name="Ceiba", scientific_name="Ceiba pentandra")
    test_db.add(species)
    await test_db.commit()
    with pytest.raises(CodeGenerationError):
        await code_service.generate_tree_code(test_db, species.id, park_id=colomos.id)


async def test_tree_code_requires_area_or_park(test_db, jacaranda):
    with pytest.raises(CodeGenerationError):
        await code_service.generate_tree_code(test_db, jacaranda.id)


async def test_detect_area_inside_polygon(test_db, garden):
    area = await code_service.detect_area_by_coordinates(
        test_db, 20.05, -103.05, garden.park_id,
    )
    assert area.id == garden.id


async def test_detect_area_outside_polygon(test_db, garden):
    area = await code_service.detect_area_by_coordinates(
        test_db, 21.0, -103.05, garden.park_id,
    )
    assert area is None


async def test_detect_area_ignores_areas_without_polygon(test_db, colomos):
    test_db.add(ParkArea(park_id=colomos.id, name="Vivero", code="CO-VI"))
    await test_db.commit()
    areas = await code_service.park_areas_with_polygon(test_db, colomos.id)
    assert areas == []
