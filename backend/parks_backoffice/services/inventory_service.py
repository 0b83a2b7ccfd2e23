"""Inventory Service — records warehouse movements and adjusts stock in one transaction.

Invariants:
    - The movement row and the stock update commit together or not at all
    - The stock row must belong to the movement's consumable
    - available_quantity is recomputed from quantity and reserved on every write
"""

import logging
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from parks_backoffice.core.domain_types import MovementType
from parks_backoffice.core.errors import InvalidInputError, ResourceNotFoundError
from parks_backoffice.core.inventory import StockLevel, apply_movement
from parks_backoffice.db.base import utcnow
from parks_backoffice.infrastructure.database import atomic
from parks_backoffice.models.warehouse import (
    Consumable, InventoryMovement, InventoryStock,
)

logger = logging.getLogger(__name__)


async def record_movement(
    db: AsyncSession,
    *,
    consumable_id: int,
    stock_id: int,
    movement_type: MovementType,
    quantity: float,
    unit_cost: float | None = None,
    movement_date: date | None = None,
    reference_document: str | None = None,
    notes: str | None = None,
    performed_by: str | None = None,
) -> tuple[InventoryMovement, InventoryStock]:
    async with atomic(db):
        consumable = await db.get(Consumable, consumable_id)
        if consumable is None:
            raise ResourceNotFoundError("Consumable", consumable_id)
        stock = await db.get(InventoryStock, stock_id)
        if stock is None:
            raise ResourceNotFoundError("InventoryStock", stock_id)
        if stock.consumable_id != consumable_id:
            raise InvalidInputError(
                f"Stock {stock_id} does not hold consumable {consumable_id}",
                "stock_id",
            )

        before = StockLevel(stock.quantity, stock.reserved_quantity)
        after = apply_movement(before, movement_type, quantity)

        stock.quantity = after.quantity
        stock.available_quantity = after.available
        stock.last_movement_date = utcnow()

        movement = InventoryMovement(
            consumable_id=consumable_id,
            stock_id=stock_id,
            movement_type=MovementType(movement_type).value,
            quantity=quantity,
            quantity_before=before.quantity,
            quantity_after=after.quantity,
            unit_cost=unit_cost,
            reference_document=reference_document,
            notes=notes,
            performed_by=performed_by,
        )
        if movement_date is not None:
            movement.movement_date = movement_date
        db.add(movement)
        await db.flush()

    logger.info(
        f"Movement {movement.movement_type}: {before.quantity} -> {after.quantity}",
        extra={"consumable_id": consumable_id},
    )
    return movement, stock
