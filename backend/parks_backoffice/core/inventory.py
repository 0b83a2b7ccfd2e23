"""Inventory Arithmetic — movement direction and stock level transitions.

Invariants:
    - available = quantity - reserved, always recomputed, never stored independently
    - Incoming movements: every entrada_*, ajuste_positivo and conteo_fisico
    - An outgoing movement may not take quantity below zero, nor below the
      reserved amount (available never goes negative through a movement)
"""

from dataclasses import dataclass

from parks_backoffice.core.domain_types import MovementType
from parks_backoffice.core.errors import BusinessRuleError, InvalidInputError

INCOMING_EXTRA = frozenset({MovementType.AJUSTE_POSITIVO, MovementType.CONTEO_FISICO})


def is_incoming(movement_type: MovementType | str) -> bool:
    movement_type = MovementType(movement_type)
    return (
        movement_type.value.startswith("entrada_")
        or movement_type in INCOMING_EXTRA
    )


def available_quantity(quantity: float, reserved: float) -> float:
    return quantity - (reserved or 0)


@dataclass(frozen=True)
class StockLevel:
    quantity: float
    reserved: float = 0

    @property
    def available(self) -> float:
        return available_quantity(self.quantity, self.reserved)


def apply_movement(
    level: StockLevel, movement_type: MovementType | str, quantity: float,
) -> StockLevel:
    """Stock level after a movement of `quantity` units."""
    if quantity <= 0:
        raise InvalidInputError("Movement quantity must be positive", "quantity")
    if is_incoming(movement_type):
        return StockLevel(level.quantity + quantity, level.reserved)
    remaining = level.quantity - quantity
    if remaining < 0:
        raise BusinessRuleError(
            f"Insufficient stock: {level.quantity} on hand, {quantity} requested",
            code="INSUFFICIENT_STOCK",
        )
    if remaining < (level.reserved or 0):
        raise BusinessRuleError(
            f"Insufficient available stock: {level.available} free "
            f"({level.reserved} reserved), {quantity} requested",
            code="INSUFFICIENT_STOCK",
        )
    return StockLevel(remaining, level.reserved)
