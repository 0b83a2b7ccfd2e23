"""Asset History service tests — audit rows share the caller's transaction.

Invariants:
    - History rows are flushed, never committed, by the service
    - A failure inside atomic() discards the asset write and its history together
"""

import pytest
from sqlalchemy import select

from parks_backoffice.infrastructure.database import atomic
from parks_backoffice.models.asset import Asset, AssetCategory, AssetHistory
from parks_backoffice.models.park import Park
from parks_backoffice.services import asset_history


@pytest.fixture
async def swing(test_db):
    park = Park(name="Parque Los Colomos", code_prefix="CO")
    category = AssetCategory(name="Juegos infantiles")
    test_db.add_all([park, category])
    await test_db.flush()
    asset = Asset(
        name="Columpio doble", category_id=category.id, park_id=park.id,
        manufacturer="Juegos GDL",
    )
    test_db.add(asset)
    await test_db.commit()
    return asset


async def _history(test_db, asset_id):
    rows = await test_db.execute(
        select(AssetHistory).where(AssetHistory.asset_id == asset_id).order_by(AssetHistory.id)
    )
    return rows.scalars().all()


async def test_creation_entry_names_category_and_park(test_db, swing):
    async with atomic(test_db):
        entry = await asset_history.log_creation(test_db, swing, user_id=3)
    assert entry.description == "Activo creado: Columpio doble"
    assert entry.changed_by == "Usuario 3"
    assert entry.notes.startswith("Categoría: Juegos infantiles, Parque: Parque Los Colomos")


async def test_update_logs_only_changed_fields(test_db, swing):
    before = asset_history.snapshot(swing)
    swing.manufacturer = "Parques MX"
    swing.location_description = ""
    async with atomic(test_db):
        entries = await asset_history.log_update(
            test_db, swing.id, before, asset_history.snapshot(swing),
        )
    assert [e.field_name for e in entries] == ["manufacturer"]
    assert entries[0].previous_value == "Juegos GDL"
    assert entries[0].new_value == "Parques MX"
    assert entries[0].changed_by == "Sistema"


async def test_failed_transaction_leaves_no_history(test_db, swing):
    with pytest.raises(RuntimeError):
        async with atomic(test_db):
            swing.status = "maintenance"
            await asset_history.log_custom(
                test_db, swing.id, "status_change", "Estado cambiado",
            )
            raise RuntimeError("boom")

    assert await _history(test_db, swing.id) == []
    await test_db.refresh(swing)
    assert swing.status == "active"
