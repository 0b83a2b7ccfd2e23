"""Asset History Service — writes audit rows inside the caller's open transaction.

Invariants:
    - Never commits: the caller owns the transaction (infrastructure.database.atomic),
      so an asset row and its history rows land together or not at all
    - Any failure propagates so the surrounding transaction rolls back
    - Update logging compares full before/after snapshots of tracked fields

Design Decisions:
    - Reference names (category, park, responsible user) resolved here, wording in
      core/asset_changes.py (ADR: impureim sandwich)
    - changed_by defaults to "Sistema" when the caller is anonymous
"""

import logging
from typing import Any, Mapping

from sqlalchemy.ext.asyncio import AsyncSession

from parks_backoffice.core import asset_changes
from parks_backoffice.core.domain_types import AssetChangeType
from parks_backoffice.models.asset import Asset, AssetCategory, AssetHistory
from parks_backoffice.models.park import Park
from parks_backoffice.models.role import User

logger = logging.getLogger(__name__)

_REFERENCE_MODELS = {
    "category_id": (AssetCategory, "name"),
    "park_id": (Park, "name"),
    "responsible_person_id": (User, "full_name"),
}


def changed_by_label(user_id: int | None) -> str:
    return f"Usuario {user_id}" if user_id else "Sistema"


def snapshot(asset: Asset) -> dict[str, Any]:
    """Tracked field values of an asset, taken before mutating it."""
    return {f: getattr(asset, f, None) for f in asset_changes.TRACKED_FIELDS}


async def _name_of(db: AsyncSession, field: str, ref_id: Any) -> str | None:
    if not ref_id:
        return None
    model, attr = _REFERENCE_MODELS[field]
    row = await db.get(model, ref_id)
    return getattr(row, attr, None) if row else None


def _entry(
    asset_id: int, change_type: str, description: str, user_id: int | None,
    **fields,
) -> AssetHistory:
    return AssetHistory(
        asset_id=asset_id,
        change_type=change_type,
        description=description,
        changed_by=changed_by_label(user_id),
        **fields,
    )


async def log_creation(
    db: AsyncSession, asset: Asset, user_id: int | None = None,
) -> AssetHistory:
    category_name = await _name_of(db, "category_id", asset.category_id)
    park_name = await _name_of(db, "park_id", asset.park_id)
    entry = _entry(
        asset.id, AssetChangeType.CREATION.value,
        asset_changes.creation_description(asset.name), user_id,
        notes=asset_changes.creation_notes(category_name, park_name, asset.status),
    )
    db.add(entry)
    await db.flush()
    return entry


async def log_update(
    db: AsyncSession,
    asset_id: int,
    previous: Mapping[str, Any],
    current: Mapping[str, Any],
    user_id: int | None = None,
) -> list[AssetHistory]:
    """One "update" row per tracked field that effectively changed."""
    entries = []
    for change in asset_changes.diff_fields(previous, current):
        if change.field in _REFERENCE_MODELS:
            description = asset_changes.describe_change(
                change,
                await _name_of(db, change.field, change.previous),
                await _name_of(db, change.field, change.new),
            )
        else:
            description = asset_changes.describe_change(change)
        entries.append(_entry(
            asset_id, AssetChangeType.UPDATE.value, description, user_id,
            field_name=change.field,
            previous_value=asset_changes.stored_value(change.previous),
            new_value=asset_changes.stored_value(change.new),
        ))
    db.add_all(entries)
    await db.flush()
    if entries:
        logger.info(
            f"Logged {len(entries)} field change(s)", extra={"asset_id": asset_id},
        )
    return entries


async def log_deletion(
    db: AsyncSession, asset: Asset, user_id: int | None = None,
) -> AssetHistory:
    entry = _entry(
        asset.id, AssetChangeType.DELETION.value,
        asset_changes.deletion_description(asset.name), user_id,
        notes=asset_changes.deletion_notes(asset.status, asset.condition),
    )
    db.add(entry)
    await db.flush()
    return entry


async def log_maintenance(
    db: AsyncSession,
    asset_id: int,
    maintenance_type: str | None,
    description: str | None,
    cost: Any,
    user_id: int | None = None,
) -> AssetHistory:
    entry = _entry(
        asset_id, AssetChangeType.MAINTENANCE.value,
        asset_changes.maintenance_description(maintenance_type), user_id,
        field_name="maintenance_type",
        new_value=maintenance_type,
        notes=asset_changes.maintenance_notes(description, cost),
    )
    db.add(entry)
    await db.flush()
    return entry


async def log_custom(
    db: AsyncSession,
    asset_id: int,
    change_type: str,
    description: str,
    notes: str | None = None,
    user_id: int | None = None,
) -> AssetHistory:
    entry = _entry(asset_id, change_type, description, user_id, notes=notes)
    db.add(entry)
    await db.flush()
    return entry
