"""Asset ORM — categorized park assets, their maintenance records and audit history.

Invariants:
    - AssetCategory forms a two-level hierarchy through parent_id
    - AssetHistory is append-only; asset_id carries no FK so deletion entries
      outlive the asset they describe
    - Every asset create/update/delete writes history in the same transaction
      (services/asset_history.py)

Design Decisions:
    - Money as Numeric(12, 2) read back as float: JSON responses stay numeric
    - changed_by is free text ("Sistema" or "Usuario <id>") as recorded by the dashboard
"""

from datetime import date, datetime

from sqlalchemy import (
    String, Text, Float, Integer, Numeric, Date, DateTime, ForeignKey,
)
from sqlalchemy.orm import Mapped, mapped_column

from parks_backoffice.db.base import Base, TimestampMixin, utcnow


class AssetCategory(TimestampMixin, Base):
    __tablename__ = "asset_categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    icon: Mapped[str | None] = mapped_column(String(50), nullable=True)
    color: Mapped[str | None] = mapped_column(String(20), nullable=True)
    parent_id: Mapped[int | None] = mapped_column(
        ForeignKey("asset_categories.id"), nullable=True,
    )


class Asset(TimestampMixin, Base):
    __tablename__ = "assets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    serial_number: Mapped[str | None] = mapped_column(String(100), nullable=True)
    category_id: Mapped[int] = mapped_column(
        ForeignKey("asset_categories.id"), nullable=False, index=True,
    )
    park_id: Mapped[int] = mapped_column(
        ForeignKey("parks.id"), nullable=False, index=True,
    )
    amenity_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    status: Mapped[str] = mapped_column(
        String(30), nullable=False, default="active",
    )
    condition: Mapped[str] = mapped_column(
        String(30), nullable=False, default="good",
    )
    location_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    manufacturer: Mapped[str | None] = mapped_column(String(100), nullable=True)
    model: Mapped[str | None] = mapped_column(String(100), nullable=True)
    acquisition_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    acquisition_cost: Mapped[float | None] = mapped_column(
        Numeric(12, 2, asdecimal=False), nullable=True,
    )
    current_value: Mapped[float | None] = mapped_column(
        Numeric(12, 2, asdecimal=False), nullable=True,
    )
    maintenance_frequency: Mapped[str | None] = mapped_column(
        String(30), nullable=True,
    )
    last_maintenance_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    next_maintenance_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    expected_lifespan: Mapped[int | None] = mapped_column(Integer, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    responsible_person_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id"), nullable=True,
    )


class AssetHistory(Base):
    __tablename__ = "asset_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    asset_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    change_type: Mapped[str] = mapped_column(String(50), nullable=False)
    field_name: Mapped[str | None] = mapped_column(String(50), nullable=True)
    previous_value: Mapped[str | None] = mapped_column(Text, nullable=True)
    new_value: Mapped[str | None] = mapped_column(Text, nullable=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    changed_by: Mapped[str] = mapped_column(
        String(100), nullable=False, default="Sistema",
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    entry_date: Mapped[date] = mapped_column(
        "date", Date, nullable=False, default=lambda: utcnow().date(),
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )


class AssetMaintenance(TimestampMixin, Base):
    __tablename__ = "asset_maintenances"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    asset_id: Mapped[int] = mapped_column(
        ForeignKey("assets.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    maintenance_type: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    maintenance_date: Mapped[date] = mapped_column(Date, nullable=False)
    cost: Mapped[float | None] = mapped_column(
        Numeric(12, 2, asdecimal=False), nullable=True,
    )
    performed_by: Mapped[str | None] = mapped_column(String(200), nullable=True)
    next_maintenance_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    status: Mapped[str] = mapped_column(
        String(30), nullable=False, default="completed",
    )
