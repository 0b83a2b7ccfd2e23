"""Park ORM — municipalities and the parks they administer.

Invariants:
    - code_prefix is unique when set; it seeds every area and tree code in the park
    - Parks are soft-deleted (is_deleted) so historical codes never get reused
"""

from sqlalchemy import String, Text, Float, Integer, Boolean, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from parks_backoffice.db.base import Base, TimestampMixin


class Municipality(TimestampMixin, Base):
    __tablename__ = "municipalities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    state: Mapped[str | None] = mapped_column(String(100), nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class Park(TimestampMixin, Base):
    """A managed park. Location and surface figures are optional for legacy records."""
    __tablename__ = "parks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    municipality_id: Mapped[int | None] = mapped_column(
        ForeignKey("municipalities.id"), nullable=True,
    )
    park_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    area: Mapped[float | None] = mapped_column(Float, nullable=True)
    green_area: Mapped[float | None] = mapped_column(Float, nullable=True)
    status: Mapped[str] = mapped_column(
        String(50), nullable=False, default="en_funcionamiento",
    )
    conservation_status: Mapped[str | None] = mapped_column(
        String(50), nullable=True,
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    code_prefix: Mapped[str | None] = mapped_column(
        String(10), nullable=True, unique=True,
    )
    is_deleted: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
