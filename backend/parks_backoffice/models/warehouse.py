"""Warehouse ORM — consumables, per-park stock levels and the movement ledger.

Invariants:
    - InventoryStock.available_quantity == quantity - reserved_quantity after every write
    - InventoryMovement rows are append-only and record the stock level before and after
"""

from datetime import date, datetime

from sqlalchemy import (
    String, Text, Integer, Float, Boolean, Date, DateTime, Numeric, ForeignKey,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from parks_backoffice.db.base import Base, TimestampMixin, utcnow


class WarehouseCategory(TimestampMixin, Base):
    __tablename__ = "warehouse_categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    code: Mapped[str | None] = mapped_column(String(20), nullable=True, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    parent_id: Mapped[int | None] = mapped_column(
        ForeignKey("warehouse_categories.id"), nullable=True,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class Consumable(TimestampMixin, Base):
    __tablename__ = "consumables"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category_id: Mapped[int | None] = mapped_column(
        ForeignKey("warehouse_categories.id"), nullable=True, index=True,
    )
    unit_of_measure: Mapped[str] = mapped_column(
        String(30), nullable=False, default="pieza",
    )
    minimum_stock: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    maximum_stock: Mapped[float | None] = mapped_column(Float, nullable=True)
    unit_cost: Mapped[float | None] = mapped_column(
        Numeric(12, 2, asdecimal=False), nullable=True,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class InventoryStock(TimestampMixin, Base):
    __tablename__ = "inventory_stock"
    __table_args__ = (UniqueConstraint("consumable_id", "park_id", "warehouse_location"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    consumable_id: Mapped[int] = mapped_column(
        ForeignKey("consumables.id"), nullable=False, index=True,
    )
    park_id: Mapped[int | None] = mapped_column(
        ForeignKey("parks.id"), nullable=True, index=True,
    )
    warehouse_location: Mapped[str | None] = mapped_column(
        String(100), nullable=True,
    )
    quantity: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    reserved_quantity: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    available_quantity: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    last_movement_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )


class InventoryMovement(Base):
    __tablename__ = "inventory_movements"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    consumable_id: Mapped[int] = mapped_column(
        ForeignKey("consumables.id"), nullable=False, index=True,
    )
    stock_id: Mapped[int] = mapped_column(
        ForeignKey("inventory_stock.id"), nullable=False, index=True,
    )
    movement_type: Mapped[str] = mapped_column(String(40), nullable=False)
    quantity: Mapped[float] = mapped_column(Float, nullable=False)
    quantity_before: Mapped[float] = mapped_column(Float, nullable=False)
    quantity_after: Mapped[float] = mapped_column(Float, nullable=False)
    unit_cost: Mapped[float | None] = mapped_column(
        Numeric(12, 2, asdecimal=False), nullable=True,
    )
    movement_date: Mapped[date] = mapped_column(
        Date, nullable=False, default=lambda: utcnow().date(),
    )
    reference_document: Mapped[str | None] = mapped_column(String(100), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    performed_by: Mapped[str | None] = mapped_column(String(200), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
