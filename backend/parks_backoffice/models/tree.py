"""Tree Inventory ORM — park areas, tree species and individual trees.

Invariants:
    - ParkArea.code, TreeSpecies.species_code and Tree.code are unique when set
    - ParkArea.polygon is a JSON list of {"lat", "lng"} vertices or NULL
    - Tree.area_id is optional: a tree without an area is coded at park level (<prefix>-XX-...)
    - Trees are soft-removed (is_removed + removal_date/reason), never deleted

Design Decisions:
    - JSON(none_as_null=True) for polygon: "no polygon" is SQL NULL, so
      `polygon IS NOT NULL` filters areas eligible for GPS matching
    - Plain FK columns without relationship(): async sessions never lazy-load
"""

from datetime import date

from sqlalchemy import (
    String, Text, Float, Integer, Boolean, Date, JSON, ForeignKey,
)
from sqlalchemy.orm import Mapped, mapped_column

from parks_backoffice.db.base import Base, TimestampMixin


class ParkArea(TimestampMixin, Base):
    __tablename__ = "park_areas"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    park_id: Mapped[int] = mapped_column(
        ForeignKey("parks.id"), nullable=False, index=True,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    code: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    dimensions: Mapped[str | None] = mapped_column(String(100), nullable=True)
    polygon: Mapped[list | None] = mapped_column(
        JSON(none_as_null=True), nullable=True,
    )
    status: Mapped[str] = mapped_column(
        String(30), nullable=False, default="activa",
    )


class TreeSpecies(TimestampMixin, Base):
    __tablename__ = "tree_species"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    common_name: Mapped[str] = mapped_column(String(200), nullable=False)
    scientific_name: Mapped[str] = mapped_column(String(200), nullable=False)
    family: Mapped[str | None] = mapped_column(String(100), nullable=True)
    origin: Mapped[str | None] = mapped_column(String(50), nullable=True)
    growth_rate: Mapped[str | None] = mapped_column(String(30), nullable=True)
    is_endangered: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    species_code: Mapped[str | None] = mapped_column(
        String(10), nullable=True, unique=True,
    )


class Tree(TimestampMixin, Base):
    __tablename__ = "trees"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    species_id: Mapped[int] = mapped_column(
        ForeignKey("tree_species.id"), nullable=False, index=True,
    )
    park_id: Mapped[int] = mapped_column(
        ForeignKey("parks.id"), nullable=False, index=True,
    )
    area_id: Mapped[int | None] = mapped_column(
        ForeignKey("park_areas.id"), nullable=True, index=True,
    )
    code: Mapped[str | None] = mapped_column(
        String(40), nullable=True, unique=True,
    )
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    planting_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    development_stage: Mapped[str | None] = mapped_column(String(50), nullable=True)
    age_estimate: Mapped[int | None] = mapped_column(Integer, nullable=True)
    height: Mapped[float | None] = mapped_column(Float, nullable=True)
    trunk_diameter: Mapped[float | None] = mapped_column(Float, nullable=True)
    canopy_coverage: Mapped[float | None] = mapped_column(Float, nullable=True)
    health_status: Mapped[str] = mapped_column(
        String(30), nullable=False, default="bueno",
    )
    condition: Mapped[str | None] = mapped_column(String(50), nullable=True)
    has_hollows: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    has_exposed_roots: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    has_pests: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_protected: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    location_description: Mapped[str | None] = mapped_column(
        String(255), nullable=True,
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_removed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    removal_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    removal_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
