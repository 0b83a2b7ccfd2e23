"""Asset change tracking tests — value normalization, diffing and Spanish wording."""

from datetime import date

from parks_backoffice.core.asset_changes import (
    FieldChange, creation_notes, deletion_notes, describe_change, diff_fields,
    format_value, maintenance_description, maintenance_notes, stored_value,
    values_equal,
)
from parks_backoffice.core.domain_types import AssetStatus


def test_blank_values_are_equal():
    assert values_equal(None, "")


def test_numeric_strings_equal_numbers():
    assert values_equal("10", 10)
    assert values_equal("1500.00", 1500)


def test_dates_compare_by_iso_form():
    assert values_equal(date(2024, 1, 1), "2024-01-01")


def test_enum_equals_its_value():
    assert values_equal(AssetStatus.ACTIVE, "active")


def test_different_values_are_not_equal():
    assert not values_equal("active", "retired")
    assert not values_equal(None, 0)


def test_diff_reports_only_changed_tracked_fields():
    previous = {"name": "Columpio", "status": "active", "acquisition_cost": 100.0}
    current = {"name": "Columpio", "status": "maintenance", "acquisition_cost": "100"}
    changes = diff_fields(previous, current)
    assert changes == [FieldChange("status", "active", "maintenance")]


def test_diff_ignores_untracked_fields():
    assert diff_fields({"updated_at": 1}, {"updated_at": 2}) == []


def test_status_change_is_translated():
    text = describe_change(FieldChange("status", "active", "maintenance"))
    assert text == "Estado cambiado de 'Activo' a 'Mantenimiento'"


def test_condition_change_is_translated():
    text = describe_change(FieldChange("condition", "good", "poor"))
    assert text == "Condición cambiado de 'Bueno' a 'Malo'"


def test_currency_change_is_formatted():
    text = describe_change(FieldChange("current_value", None, 1500))
    assert text == "Valor Actual cambiado de 'N/A' a '$1,500.00 MXN'"


def test_reference_change_uses_names():
    change = FieldChange("park_id", 1, 2)
    assert describe_change(change, "Colomos", "Agua Azul") == (
        "Parque cambiado de 'Colomos' a 'Agua Azul'"
    )


def test_reference_change_uses_placeholder_when_unset():
    change = FieldChange("responsible_person_id", None, 4)
    assert describe_change(change, None, "Ana") == (
        "Responsable cambiado de 'No asignado' a 'Ana'"
    )


def test_format_value_unknown_status_passes_through():
    assert format_value("custom", "status") == "custom"
    assert format_value("", "notes") == "N/A"


def test_stored_value_is_text():
    assert stored_value(12.5) == "12.5"
    assert stored_value(date(2024, 3, 1)) == "2024-03-01"
    assert stored_value(AssetStatus.RETIRED) == "retired"
    assert stored_value("") is None


def test_creation_and_deletion_notes():
    assert creation_notes("Juegos", None, "active") == (
        "Categoría: Juegos, Parque: No especificado, Estado: Activo"
    )
    assert deletion_notes("retired", "critical") == (
        "Estado al momento de eliminación: Retirado, Condición: Crítico"
    )


def test_maintenance_wording():
    assert maintenance_description(None) == "Mantenimiento registrado: Tipo no especificado"
    assert maintenance_notes("Pintura", 250) == "Descripción: Pintura, Costo: $250.00 MXN"
    assert maintenance_notes(None, None) == "Descripción: N/A, Costo: N/A"
