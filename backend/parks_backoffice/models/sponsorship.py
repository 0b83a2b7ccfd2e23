"""Sponsorship ORM — packages, benefits, sponsors, contracts and what contracts sponsor.

Invariants:
    - A contract links one sponsor to (optionally) one package
    - (contract_id, event_id) and (contract_id, asset_id) pairs are unique
    - Only contracts in status "activo" may be attached to physical assets

Design Decisions:
    - Join tables carry their own attributes (quantity, visibility, signage) so they
      are full models rather than bare association tables
"""

from datetime import date, datetime

from sqlalchemy import (
    String, Text, Integer, Boolean, Date, DateTime, Numeric, ForeignKey,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from parks_backoffice.db.base import Base, TimestampMixin, utcnow


class SponsorshipPackage(TimestampMixin, Base):
    __tablename__ = "sponsorship_packages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    category: Mapped[str | None] = mapped_column(String(50), nullable=True)
    level: Mapped[int | None] = mapped_column(Integer, nullable=True)
    price: Mapped[float | None] = mapped_column(
        Numeric(12, 2, asdecimal=False), nullable=True,
    )
    duration_months: Mapped[int | None] = mapped_column(Integer, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class SponsorshipBenefit(TimestampMixin, Base):
    __tablename__ = "sponsorship_benefits"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str | None] = mapped_column(String(50), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class SponsorshipPackageBenefit(Base):
    __tablename__ = "sponsorship_package_benefits"
    __table_args__ = (UniqueConstraint("package_id", "benefit_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    package_id: Mapped[int] = mapped_column(
        ForeignKey("sponsorship_packages.id", ondelete="CASCADE"), nullable=False,
    )
    benefit_id: Mapped[int] = mapped_column(
        ForeignKey("sponsorship_benefits.id", ondelete="CASCADE"), nullable=False,
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    frequency: Mapped[str | None] = mapped_column(String(50), nullable=True)
    custom_value: Mapped[str | None] = mapped_column(Text, nullable=True)


class Sponsor(TimestampMixin, Base):
    __tablename__ = "sponsors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    sector: Mapped[str | None] = mapped_column(String(100), nullable=True)
    contact_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    contact_email: Mapped[str | None] = mapped_column(String(200), nullable=True)
    contact_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    website: Mapped[str | None] = mapped_column(String(255), nullable=True)
    status: Mapped[str] = mapped_column(String(30), nullable=False, default="activo")
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)


class SponsorshipContract(TimestampMixin, Base):
    __tablename__ = "sponsorship_contracts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    sponsor_id: Mapped[int] = mapped_column(
        ForeignKey("sponsors.id"), nullable=False, index=True,
    )
    package_id: Mapped[int | None] = mapped_column(
        ForeignKey("sponsorship_packages.id"), nullable=True,
    )
    contract_number: Mapped[str | None] = mapped_column(
        String(50), nullable=True, unique=True,
    )
    contract_type: Mapped[str] = mapped_column(
        String(30), nullable=False, default="paquete",
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    total_amount: Mapped[float | None] = mapped_column(
        Numeric(12, 2, asdecimal=False), nullable=True,
    )
    status: Mapped[str] = mapped_column(
        String(30), nullable=False, default="en_negociacion",
    )
    terms: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)


class SponsorshipEventLink(Base):
    __tablename__ = "sponsorship_event_links"
    __table_args__ = (UniqueConstraint("contract_id", "event_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    contract_id: Mapped[int] = mapped_column(
        ForeignKey("sponsorship_contracts.id", ondelete="CASCADE"), nullable=False,
    )
    event_id: Mapped[int] = mapped_column(
        ForeignKey("events.id", ondelete="CASCADE"), nullable=False,
    )
    sponsorship_level: Mapped[str | None] = mapped_column(String(50), nullable=True)
    logo_placement: Mapped[str | None] = mapped_column(String(100), nullable=True)
    exposure_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    visibility: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )


class SponsorshipAssetLink(Base):
    __tablename__ = "sponsorship_asset_links"
    __table_args__ = (UniqueConstraint("contract_id", "asset_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    contract_id: Mapped[int] = mapped_column(
        ForeignKey("sponsorship_contracts.id", ondelete="CASCADE"), nullable=False,
    )
    asset_id: Mapped[int] = mapped_column(
        ForeignKey("assets.id", ondelete="CASCADE"), nullable=False,
    )
    branding_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    signage_details: Mapped[str | None] = mapped_column(Text, nullable=True)
    installation_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
