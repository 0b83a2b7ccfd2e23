"""Initial schema — parks, tree inventory, assets, events, instructors,
sponsorships, warehouse, roles and users.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def _created_at() -> sa.Column:
    return sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now())


def _money(name: str, precision: int = 12) -> sa.Column:
    return sa.Column(name, sa.Numeric(precision, 2), nullable=True)


def upgrade() -> None:
    # ─── Parks ──────────────────────────────────────────────────
    op.create_table(
        "municipalities",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("state", sa.String(100), nullable=True),
        sa.Column("active", sa.Boolean, nullable=False, server_default="true"),
        *_timestamps(),
    )

    op.create_table(
        "parks",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("municipality_id", sa.Integer, sa.ForeignKey("municipalities.id"), nullable=True),
        sa.Column("park_type", sa.String(50), nullable=True),
        sa.Column("address", sa.Text, nullable=True),
        sa.Column("latitude", sa.Float, nullable=True),
        sa.Column("longitude", sa.Float, nullable=True),
        sa.Column("area", sa.Float, nullable=True),
        sa.Column("green_area", sa.Float, nullable=True),
        sa.Column("status", sa.String(50), nullable=False, server_default="en_funcionamiento"),
        sa.Column("conservation_status", sa.String(50), nullable=True),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("code_prefix", sa.String(10), nullable=True, unique=True),
        sa.Column("is_deleted", sa.Boolean, nullable=False, server_default="false"),
        *_timestamps(),
    )

    # ─── Users & Roles ──────────────────────────────────────────
    op.create_table(
        "roles",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("slug", sa.String(100), nullable=False, unique=True),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("level", sa.Integer, nullable=False, server_default="5"),
        sa.Column("color", sa.String(20), nullable=True),
        sa.Column("permissions", sa.JSON, nullable=False),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
        *_timestamps(),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(100), nullable=False, unique=True),
        sa.Column("email", sa.String(200), nullable=False, unique=True),
        sa.Column("full_name", sa.String(200), nullable=True),
        sa.Column("municipality_id", sa.Integer, sa.ForeignKey("municipalities.id"), nullable=True),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
        *_timestamps(),
    )

    op.create_table(
        "user_roles",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("role_id", sa.Integer, sa.ForeignKey("roles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("is_primary", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("assigned_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("assigned_by", sa.Integer, nullable=True),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
        sa.UniqueConstraint("user_id", "role_id"),
    )
    op.create_index("ix_user_roles_user_id", "user_roles", ["user_id"])
    op.create_index("ix_user_roles_role_id", "user_roles", ["role_id"])

    # ─── Tree Inventory ─────────────────────────────────────────
    op.create_table(
        "park_areas",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("park_id", sa.Integer, sa.ForeignKey("parks.id"), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("code", sa.String(20), nullable=False, unique=True),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("dimensions", sa.String(100), nullable=True),
        sa.Column("polygon", sa.JSON, nullable=True),
        sa.Column("status", sa.String(30), nullable=False, server_default="activa"),
        *_timestamps(),
    )
    op.create_index("ix_park_areas_park_id", "park_areas", ["park_id"])

    op.create_table(
        "tree_species",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("common_name", sa.String(200), nullable=False),
        sa.Column("scientific_name", sa.String(200), nullable=False),
        sa.Column("family", sa.String(100), nullable=True),
        sa.Column("origin", sa.String(50), nullable=True),
        sa.Column("growth_rate", sa.String(30), nullable=True),
        sa.Column("is_endangered", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("species_code", sa.String(10), nullable=True, unique=True),
        *_timestamps(),
    )

    op.create_table(
        "trees",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("species_id", sa.Integer, sa.ForeignKey("tree_species.id"), nullable=False),
        sa.Column("park_id", sa.Integer, sa.ForeignKey("parks.id"), nullable=False),
        sa.Column("area_id", sa.Integer, sa.ForeignKey("park_areas.id"), nullable=True),
        sa.Column("code", sa.String(40), nullable=True, unique=True),
        sa.Column("latitude", sa.Float, nullable=True),
        sa.Column("longitude", sa.Float, nullable=True),
        sa.Column("planting_date", sa.Date, nullable=True),
        sa.Column("development_stage", sa.String(50), nullable=True),
        sa.Column("age_estimate", sa.Integer, nullable=True),
        sa.Column("height", sa.Float, nullable=True),
        sa.Column("trunk_diameter", sa.Float, nullable=True),
        sa.Column("canopy_coverage", sa.Float, nullable=True),
        sa.Column("health_status", sa.String(30), nullable=False, server_default="bueno"),
        sa.Column("condition", sa.String(50), nullable=True),
        sa.Column("has_hollows", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("has_exposed_roots", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("has_pests", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("is_protected", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("location_description", sa.String(255), nullable=True),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("is_removed", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("removal_date", sa.Date, nullable=True),
        sa.Column("removal_reason", sa.Text, nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_trees_species_id", "trees", ["species_id"])
    op.create_index("ix_trees_park_id", "trees", ["park_id"])
    op.create_index("ix_trees_area_id", "trees", ["area_id"])

    # ─── Assets ─────────────────────────────────────────────────
    op.create_table(
        "asset_categories",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("icon", sa.String(50), nullable=True),
        sa.Column("color", sa.String(20), nullable=True),
        sa.Column("parent_id", sa.Integer, sa.ForeignKey("asset_categories.id"), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "assets",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("serial_number", sa.String(100), nullable=True),
        sa.Column("category_id", sa.Integer, sa.ForeignKey("asset_categories.id"), nullable=False),
        sa.Column("park_id", sa.Integer, sa.ForeignKey("parks.id"), nullable=False),
        sa.Column("amenity_id", sa.Integer, nullable=True),
        sa.Column("status", sa.String(30), nullable=False, server_default="active"),
        sa.Column("condition", sa.String(30), nullable=False, server_default="good"),
        sa.Column("location_description", sa.Text, nullable=True),
        sa.Column("latitude", sa.Float, nullable=True),
        sa.Column("longitude", sa.Float, nullable=True),
        sa.Column("manufacturer", sa.String(100), nullable=True),
        sa.Column("model", sa.String(100), nullable=True),
        sa.Column("acquisition_date", sa.Date, nullable=True),
        _money("acquisition_cost"),
        _money("current_value"),
        sa.Column("maintenance_frequency", sa.String(30), nullable=True),
        sa.Column("last_maintenance_date", sa.Date, nullable=True),
        sa.Column("next_maintenance_date", sa.Date, nullable=True),
        sa.Column("expected_lifespan", sa.Integer, nullable=True),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("responsible_person_id", sa.Integer, sa.ForeignKey("users.id"), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_assets_category_id", "assets", ["category_id"])
    op.create_index("ix_assets_park_id", "assets", ["park_id"])

    # No FK to assets: history outlives deleted assets
    op.create_table(
        "asset_history",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("asset_id", sa.Integer, nullable=False),
        sa.Column("change_type", sa.String(50), nullable=False),
        sa.Column("field_name", sa.String(50), nullable=True),
        sa.Column("previous_value", sa.Text, nullable=True),
        sa.Column("new_value", sa.Text, nullable=True),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("changed_by", sa.String(100), nullable=False, server_default="Sistema"),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("date", sa.Date, nullable=False, server_default=sa.func.current_date()),
        _created_at(),
    )
    op.create_index("ix_asset_history_asset_id", "asset_history", ["asset_id"])

    op.create_table(
        "asset_maintenances",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("asset_id", sa.Integer, sa.ForeignKey("assets.id", ondelete="CASCADE"), nullable=False),
        sa.Column("maintenance_type", sa.String(50), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("maintenance_date", sa.Date, nullable=False),
        _money("cost"),
        sa.Column("performed_by", sa.String(200), nullable=True),
        sa.Column("next_maintenance_date", sa.Date, nullable=True),
        sa.Column("status", sa.String(30), nullable=False, server_default="completed"),
        *_timestamps(),
    )
    op.create_index("ix_asset_maintenances_asset_id", "asset_maintenances", ["asset_id"])

    # ─── Events ─────────────────────────────────────────────────
    op.create_table(
        "events",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("event_type", sa.String(50), nullable=False, server_default="other"),
        sa.Column("target_audience", sa.String(50), nullable=False, server_default="all"),
        sa.Column("status", sa.String(30), nullable=False, server_default="draft"),
        sa.Column("start_date", sa.Date, nullable=False),
        sa.Column("end_date", sa.Date, nullable=True),
        sa.Column("start_time", sa.String(10), nullable=True),
        sa.Column("end_time", sa.String(10), nullable=True),
        sa.Column("is_recurring", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("recurrence_pattern", sa.String(50), nullable=True),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("capacity", sa.Integer, nullable=True),
        sa.Column("registration_type", sa.String(30), nullable=False, server_default="free"),
        _money("price", 10),
        sa.Column("organizer_name", sa.String(200), nullable=True),
        sa.Column("organizer_email", sa.String(200), nullable=True),
        sa.Column("organizer_phone", sa.String(50), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_events_start_date", "events", ["start_date"])

    op.create_table(
        "event_parks",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("event_id", sa.Integer, sa.ForeignKey("events.id", ondelete="CASCADE"), nullable=False),
        sa.Column("park_id", sa.Integer, sa.ForeignKey("parks.id"), nullable=False),
        sa.UniqueConstraint("event_id", "park_id"),
    )
    op.create_index("ix_event_parks_event_id", "event_parks", ["event_id"])
    op.create_index("ix_event_parks_park_id", "event_parks", ["park_id"])

    # ─── Instructors ────────────────────────────────────────────
    op.create_table(
        "instructors",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("full_name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(200), nullable=False, unique=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("specialties", sa.JSON, nullable=False),
        sa.Column("experience_years", sa.Integer, nullable=True),
        sa.Column("bio", sa.Text, nullable=True),
        sa.Column("preferred_park_id", sa.Integer, sa.ForeignKey("parks.id"), nullable=True),
        sa.Column("hourly_rate", sa.Float, nullable=True),
        sa.Column("status", sa.String(30), nullable=False, server_default="active"),
        sa.Column("rating", sa.Float, nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "instructor_assignments",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("instructor_id", sa.Integer, sa.ForeignKey("instructors.id", ondelete="CASCADE"), nullable=False),
        sa.Column("park_id", sa.Integer, sa.ForeignKey("parks.id"), nullable=True),
        sa.Column("activity_name", sa.String(200), nullable=False),
        sa.Column("start_date", sa.Date, nullable=False),
        sa.Column("end_date", sa.Date, nullable=True),
        sa.Column("hours_assigned", sa.Float, nullable=True),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
        sa.Column("notes", sa.Text, nullable=True),
        _created_at(),
    )
    op.create_index("ix_instructor_assignments_instructor_id", "instructor_assignments", ["instructor_id"])

    op.create_table(
        "instructor_evaluations",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("instructor_id", sa.Integer, sa.ForeignKey("instructors.id", ondelete="CASCADE"), nullable=False),
        sa.Column("assignment_id", sa.Integer, sa.ForeignKey("instructor_assignments.id"), nullable=True),
        sa.Column("evaluator_name", sa.String(200), nullable=True),
        sa.Column("score", sa.Integer, nullable=False),
        sa.Column("comments", sa.Text, nullable=True),
        sa.Column("evaluation_date", sa.Date, nullable=False, server_default=sa.func.current_date()),
        _created_at(),
    )
    op.create_index("ix_instructor_evaluations_instructor_id", "instructor_evaluations", ["instructor_id"])

    # ─── Sponsorships ───────────────────────────────────────────
    op.create_table(
        "sponsorship_packages",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("category", sa.String(50), nullable=True),
        sa.Column("level", sa.Integer, nullable=True),
        _money("price"),
        sa.Column("duration_months", sa.Integer, nullable=True),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
        *_timestamps(),
    )

    op.create_table(
        "sponsorship_benefits",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("category", sa.String(50), nullable=True),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
        *_timestamps(),
    )

    op.create_table(
        "sponsorship_package_benefits",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("package_id", sa.Integer, sa.ForeignKey("sponsorship_packages.id", ondelete="CASCADE"), nullable=False),
        sa.Column("benefit_id", sa.Integer, sa.ForeignKey("sponsorship_benefits.id", ondelete="CASCADE"), nullable=False),
        sa.Column("quantity", sa.Integer, nullable=False, server_default="1"),
        sa.Column("frequency", sa.String(50), nullable=True),
        sa.Column("custom_value", sa.Text, nullable=True),
        sa.UniqueConstraint("package_id", "benefit_id"),
    )

    op.create_table(
        "sponsors",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("sector", sa.String(100), nullable=True),
        sa.Column("contact_name", sa.String(200), nullable=True),
        sa.Column("contact_email", sa.String(200), nullable=True),
        sa.Column("contact_phone", sa.String(50), nullable=True),
        sa.Column("website", sa.String(255), nullable=True),
        sa.Column("status", sa.String(30), nullable=False, server_default="activo"),
        sa.Column("notes", sa.Text, nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "sponsorship_contracts",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("sponsor_id", sa.Integer, sa.ForeignKey("sponsors.id"), nullable=False),
        sa.Column("package_id", sa.Integer, sa.ForeignKey("sponsorship_packages.id"), nullable=True),
        sa.Column("contract_number", sa.String(50), nullable=True, unique=True),
        sa.Column("contract_type", sa.String(30), nullable=False, server_default="paquete"),
        sa.Column("start_date", sa.Date, nullable=False),
        sa.Column("end_date", sa.Date, nullable=False),
        _money("total_amount"),
        sa.Column("status", sa.String(30), nullable=False, server_default="en_negociacion"),
        sa.Column("terms", sa.Text, nullable=True),
        sa.Column("notes", sa.Text, nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_sponsorship_contracts_sponsor_id", "sponsorship_contracts", ["sponsor_id"])

    op.create_table(
        "sponsorship_event_links",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("contract_id", sa.Integer, sa.ForeignKey("sponsorship_contracts.id", ondelete="CASCADE"), nullable=False),
        sa.Column("event_id", sa.Integer, sa.ForeignKey("events.id", ondelete="CASCADE"), nullable=False),
        sa.Column("sponsorship_level", sa.String(50), nullable=True),
        sa.Column("logo_placement", sa.String(100), nullable=True),
        sa.Column("exposure_minutes", sa.Integer, nullable=True),
        sa.Column("visibility", sa.Boolean, nullable=False, server_default="true"),
        _created_at(),
        sa.UniqueConstraint("contract_id", "event_id"),
    )

    op.create_table(
        "sponsorship_asset_links",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("contract_id", sa.Integer, sa.ForeignKey("sponsorship_contracts.id", ondelete="CASCADE"), nullable=False),
        sa.Column("asset_id", sa.Integer, sa.ForeignKey("assets.id", ondelete="CASCADE"), nullable=False),
        sa.Column("branding_type", sa.String(50), nullable=True),
        sa.Column("signage_details", sa.Text, nullable=True),
        sa.Column("installation_date", sa.Date, nullable=True),
        _created_at(),
        sa.UniqueConstraint("contract_id", "asset_id"),
    )

    # ─── Warehouse ──────────────────────────────────────────────
    op.create_table(
        "warehouse_categories",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
        sa.Column("code", sa.String(20), nullable=True, unique=True),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("parent_id", sa.Integer, sa.ForeignKey("warehouse_categories.id"), nullable=True),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
        *_timestamps(),
    )

    op.create_table(
        "consumables",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("code", sa.String(50), nullable=False, unique=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("category_id", sa.Integer, sa.ForeignKey("warehouse_categories.id"), nullable=True),
        sa.Column("unit_of_measure", sa.String(30), nullable=False, server_default="pieza"),
        sa.Column("minimum_stock", sa.Float, nullable=False, server_default="0"),
        sa.Column("maximum_stock", sa.Float, nullable=True),
        _money("unit_cost"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
        *_timestamps(),
    )
    op.create_index("ix_consumables_category_id", "consumables", ["category_id"])

    op.create_table(
        "inventory_stock",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("consumable_id", sa.Integer, sa.ForeignKey("consumables.id"), nullable=False),
        sa.Column("park_id", sa.Integer, sa.ForeignKey("parks.id"), nullable=True),
        sa.Column("warehouse_location", sa.String(100), nullable=True),
        sa.Column("quantity", sa.Float, nullable=False, server_default="0"),
        sa.Column("reserved_quantity", sa.Float, nullable=False, server_default="0"),
        sa.Column("available_quantity", sa.Float, nullable=False, server_default="0"),
        sa.Column("last_movement_date", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("consumable_id", "park_id", "warehouse_location"),
    )
    op.create_index("ix_inventory_stock_consumable_id", "inventory_stock", ["consumable_id"])
    op.create_index("ix_inventory_stock_park_id", "inventory_stock", ["park_id"])

    op.create_table(
        "inventory_movements",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("consumable_id", sa.Integer, sa.ForeignKey("consumables.id"), nullable=False),
        sa.Column("stock_id", sa.Integer, sa.ForeignKey("inventory_stock.id"), nullable=False),
        sa.Column("movement_type", sa.String(40), nullable=False),
        sa.Column("quantity", sa.Float, nullable=False),
        sa.Column("quantity_before", sa.Float, nullable=False),
        sa.Column("quantity_after", sa.Float, nullable=False),
        _money("unit_cost"),
        sa.Column("movement_date", sa.Date, nullable=False, server_default=sa.func.current_date()),
        sa.Column("reference_document", sa.String(100), nullable=True),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("performed_by", sa.String(200), nullable=True),
        _created_at(),
    )
    op.create_index("ix_inventory_movements_consumable_id", "inventory_movements", ["consumable_id"])
    op.create_index("ix_inventory_movements_stock_id", "inventory_movements", ["stock_id"])


def downgrade() -> None:
    for table in (
        "inventory_movements", "inventory_stock", "consumables", "warehouse_categories",
        "sponsorship_asset_links", "sponsorship_event_links", "sponsorship_contracts",
        "sponsors", "sponsorship_package_benefits", "sponsorship_benefits",
        "sponsorship_packages", "instructor_evaluations", "instructor_assignments",
        "instructors", "event_parks", "events", "asset_maintenances", "asset_history",
        "assets", "asset_categories", "trees", "tree_species", "park_areas",
        "user_roles", "users", "roles", "parks", "municipalities",
    ):
        op.drop_table(table)
