"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Every table is reachable through Base.metadata once this package is imported

Design Decisions:
    - One file per functional area (parks, trees, assets, events, ...) for locality
    - All models imported here so create_all() and Alembic autogenerate see every
      table regardless of which route module was imported first
"""

from parks_backoffice.models.park import Municipality, Park  # noqa: F401
from parks_backoffice.models.tree import ParkArea, TreeSpecies, Tree  # noqa: F401
from parks_backoffice.models.asset import (  # noqa: F401
    AssetCategory, Asset, AssetHistory, AssetMaintenance,
)
from parks_backoffice.models.event import Event, EventPark  # noqa: F401
from parks_backoffice.models.instructor import (  # noqa: F401
    Instructor, InstructorAssignment, InstructorEvaluation,
)
from parks_backoffice.models.sponsorship import (  # noqa: F401
    SponsorshipPackage, SponsorshipBenefit, SponsorshipPackageBenefit,
    Sponsor, SponsorshipContract, SponsorshipEventLink, SponsorshipAssetLink,
)
from parks_backoffice.models.warehouse import (  # noqa: F401
    WarehouseCategory, Consumable, InventoryStock, InventoryMovement,
)
from parks_backoffice.models.role import Role, User, UserRole  # noqa: F401
