"""Asset Change Tracking — pure diffing and wording for the asset audit log.

Invariants:
    - Only TRACKED_FIELDS produce update entries
    - None, "" and missing are the same value; numeric strings equal their numbers;
      dates compare by ISO form — so re-saving an unchanged form logs nothing
    - Descriptions are human-readable Spanish, matching what staff see in the dashboard
    - Stored previous/new values are strings (or None), whatever the column type

Design Decisions:
    - Reference fields (category, park, responsible person) are described by name;
      the caller resolves names because that needs the database (ADR: functional core)
"""

import math
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping

FIELD_LABELS: dict[str, str] = {
    "name": "Nombre",
    "status": "Estado",
    "condition": "Condición",
    "park_id": "Parque",
    "category_id": "Categoría",
    "manufacturer": "Fabricante",
    "model": "Modelo",
    "serial_number": "Número de Serie",
    "acquisition_cost": "Costo de Adquisición",
    "current_value": "Valor Actual",
    "responsible_person_id": "Responsable",
    "location_description": "Descripción de Ubicación",
    "notes": "Notas",
    "description": "Descripción",
    "acquisition_date": "Fecha de Adquisición",
    "latitude": "Latitud",
    "longitude": "Longitud",
    "amenity_id": "Amenidad",
    "maintenance_frequency": "Frecuencia de Mantenimiento",
    "expected_lifespan": "Vida Útil Estimada",
}

TRACKED_FIELDS: tuple[str, ...] = tuple(FIELD_LABELS)

STATUS_TRANSLATIONS: dict[str, str] = {
    "active": "Activo",
    "maintenance": "Mantenimiento",
    "retired": "Retirado",
    "damaged": "Dañado",
    "storage": "Almacenado",
    "inactive": "Inactivo",
}

CONDITION_TRANSLATIONS: dict[str, str] = {
    "excellent": "Excelente",
    "good": "Bueno",
    "fair": "Regular",
    "poor": "Malo",
    "critical": "Crítico",
}

CURRENCY_FIELDS = frozenset({"acquisition_cost", "current_value"})

# field -> (sentence subject, placeholder when unset)
REFERENCE_FIELDS: dict[str, tuple[str, str]] = {
    "category_id": ("Categoría cambiada", "No especificada"),
    "park_id": ("Parque cambiado", "No especificado"),
    "responsible_person_id": ("Responsable cambiado", "No asignado"),
}


@dataclass(frozen=True)
class FieldChange:
    field: str
    previous: Any
    new: Any


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    return value


def normalize_value(value: Any) -> Any:
    value = _plain(value)
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float, Decimal)):
        return float(value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, str) and value.strip():
        try:
            number = float(value)
        except ValueError:
            return value
        return number if math.isfinite(number) else value
    return value


def values_equal(old: Any, new: Any) -> bool:
    return normalize_value(old) == normalize_value(new)


def diff_fields(
    previous: Mapping[str, Any],
    current: Mapping[str, Any],
    fields: tuple[str, ...] = TRACKED_FIELDS,
) -> list[FieldChange]:
    """One FieldChange per tracked field whose normalized value differs."""
    return [
        FieldChange(f, previous.get(f), current.get(f))
        for f in fields
        if not values_equal(previous.get(f), current.get(f))
    ]


def format_value(value: Any, field: str) -> str:
    value = _plain(value)
    if value is None or value == "":
        return "N/A"
    if field == "status":
        return STATUS_TRANSLATIONS.get(str(value), str(value))
    if field == "condition":
        return CONDITION_TRANSLATIONS.get(str(value), str(value))
    if field in CURRENCY_FIELDS:
        try:
            return f"${float(value):,.2f} MXN"
        except (TypeError, ValueError):
            return str(value)
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def stored_value(value: Any) -> str | None:
    """History rows keep values as text."""
    value = _plain(value)
    if value is None or value == "":
        return None
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def describe_change(
    change: FieldChange,
    previous_name: str | None = None,
    new_name: str | None = None,
) -> str:
    if change.field in REFERENCE_FIELDS:
        subject, placeholder = REFERENCE_FIELDS[change.field]
        return (
            f"{subject} de '{previous_name or placeholder}' "
            f"a '{new_name or placeholder}'"
        )
    label = FIELD_LABELS.get(change.field, change.field)
    return (
        f"{label} cambiado de '{format_value(change.previous, change.field)}' "
        f"a '{format_value(change.new, change.field)}'"
    )


def creation_description(name: str) -> str:
    return f"Activo creado: {name}"


def creation_notes(
    category_name: str | None, park_name: str | None, status: Any,
) -> str:
    return (
        f"Categoría: {category_name or 'No especificada'}, "
        f"Parque: {park_name or 'No especificado'}, "
        f"Estado: {format_value(status, 'status')}"
    )


def deletion_description(name: str) -> str:
    return f"Activo eliminado: {name}"


def deletion_notes(status: Any, condition: Any) -> str:
    return (
        f"Estado al momento de eliminación: {format_value(status, 'status')}, "
        f"Condición: {format_value(condition, 'condition')}"
    )


def maintenance_description(maintenance_type: str | None) -> str:
    return f"Mantenimiento registrado: {maintenance_type or 'Tipo no especificado'}"


def maintenance_notes(description: str | None, cost: Any) -> str:
    cost_text = format_value(cost, "acquisition_cost") if cost is not None else "N/A"
    return f"Descripción: {description or 'N/A'}, Costo: {cost_text}"
