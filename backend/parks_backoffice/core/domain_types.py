"""Domain Types — enumerations shared by models, schemas and pure core logic.

Invariants:
    - All valid states encoded as Enums — no raw string matching in core logic
    - Enum values are the literal strings persisted in the database

Design Decisions:
    - str Enums: serialize to JSON without custom encoders
    - Spanish values where the municipal data already uses them (tree health, area and
      contract status, warehouse movements); English where the asset module always did
"""

from enum import Enum


# ─── Tree Inventory ──────────────────────────────────────────────

class TreeHealthStatus(str, Enum):
    BUENO = "bueno"
    REGULAR = "regular"
    MALO = "malo"
    CRITICO = "critico"
    MUERTO = "muerto"


class AreaStatus(str, Enum):
    ACTIVA = "activa"
    INACTIVA = "inactiva"
    EN_MANTENIMIENTO = "en_mantenimiento"


class LinkMethod(str, Enum):
    """How a tree gets attached to a park area."""
    MANUAL = "manual"
    GPS = "gps"
    PREFIX = "prefix"


# ─── Assets ──────────────────────────────────────────────────────

class AssetStatus(str, Enum):
    ACTIVE = "active"
    MAINTENANCE = "maintenance"
    RETIRED = "retired"
    DAMAGED = "damaged"
    STORAGE = "storage"
    INACTIVE = "inactive"


class AssetCondition(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    CRITICAL = "critical"


class AssetChangeType(str, Enum):
    """Built-in history entry kinds. Custom entries may use any other label."""
    CREATION = "creation"
    UPDATE = "update"
    DELETION = "deletion"
    MAINTENANCE = "maintenance"


# ─── Events ──────────────────────────────────────────────────────

class EventStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class RegistrationType(str, Enum):
    FREE = "free"
    REGISTRATION = "registration"


# ─── Sponsorships ────────────────────────────────────────────────

class ContractStatus(str, Enum):
    ACTIVO = "activo"
    VENCIDO = "vencido"
    EN_NEGOCIACION = "en_negociacion"
    EN_REVISION = "en_revision"


# ─── Warehouse ───────────────────────────────────────────────────

class MovementType(str, Enum):
    """Inventory movement kinds. Prefix entrada_ adds stock, salida_ removes it."""
    ENTRADA_COMPRA = "entrada_compra"
    ENTRADA_DONACION = "entrada_donacion"
    ENTRADA_TRANSFERENCIA = "entrada_transferencia"
    ENTRADA_DEVOLUCION = "entrada_devolucion"
    SALIDA_CONSUMO = "salida_consumo"
    SALIDA_TRANSFERENCIA = "salida_transferencia"
    SALIDA_MERMA = "salida_merma"
    SALIDA_ROBO = "salida_robo"
    AJUSTE_POSITIVO = "ajuste_positivo"
    AJUSTE_NEGATIVO = "ajuste_negativo"
    CONTEO_FISICO = "conteo_fisico"
