"""Assets API — asset CRUD with transactional history, maintenances and categories."""

import pytest


async def _history(client, asset_id):
    res = await client.get(f"/api/assets/{asset_id}/history")
    assert res.status_code == 200
    return sorted(res.json(), key=lambda e: e["id"])


# ─── Create / Update / Delete ────────────────────────────────────

async def test_create_logs_creation_entry(client, asset):
    entries = await _history(client, asset["id"])
    assert len(entries) == 1
    entry = entries[0]
    assert entry["change_type"] == "creation"
    assert entry["description"] == "Activo creado: Columpio doble"
    assert entry["changed_by"] == "Sistema"
    assert "Juegos infantiles" in entry["notes"]
    assert "Parque Los Colomos" in entry["notes"]


async def test_caller_header_attributes_history(client, park, category):
    res = await client.post("/api/assets", json={
        "name": "Banca", "category_id": category["id"], "park_id": park["id"],
    }, headers={"X-User-Id": "7"})
    entries = await _history(client, res.json()["id"])
    assert entries[0]["changed_by"] == "Usuario 7"


async def test_create_with_unknown_category_is_400(client, park):
    res = await client.post("/api/assets", json={
        "name": "Banca", "category_id": 999, "park_id": park["id"],
    })
    assert res.status_code == 400
    assert (await client.get("/api/assets/history/recent")).json() == []


async def test_update_logs_one_entry_per_changed_field(client, asset):
    res = await client.put(f"/api/assets/{asset['id']}", json={
        "status": "maintenance", "manufacturer": "Juegos MX", "acquisition_cost": 12500,
    })
    assert res.status_code == 200
    assert res.json()["status"] == "maintenance"

    updates = [e for e in await _history(client, asset["id"]) if e["change_type"] == "update"]
    assert {e["field_name"] for e in updates} == {"status", "manufacturer"}
    status_entry = next(e for e in updates if e["field_name"] == "status")
    assert status_entry["previous_value"] == "active"
    assert status_entry["new_value"] == "maintenance"
    assert status_entry["description"] == "Estado cambiado de 'Activo' a 'Mantenimiento'"


async def test_unchanged_update_logs_nothing(client, asset):
    res = await client.put(f"/api/assets/{asset['id']}", json={
        "name": "Columpio doble", "description": "", "acquisition_cost": 12500.0,
    })
    assert res.status_code == 200
    assert len(await _history(client, asset["id"])) == 1


async def test_park_change_is_described_by_name(client, asset, other_park):
    await client.put(f"/api/assets/{asset['id']}", json={"park_id": other_park["id"]})
    entry = (await _history(client, asset["id"]))[-1]
    assert entry["field_name"] == "park_id"
    assert entry["description"] == (
        "Parque cambiado de 'Parque Los Colomos' a 'Parque Agua Azul'"
    )


async def test_delete_keeps_history(client, asset):
    await client.post(f"/api/assets/{asset['id']}/maintenances", json={
        "maintenance_type": "preventivo", "maintenance_date": "2024-03-01",
    })
    res = await client.delete(f"/api/assets/{asset['id']}")
    assert res.status_code == 204

    assert (await client.get(f"/api/assets/{asset['id']}")).status_code == 404
    entries = await _history(client, asset["id"])
    assert entries[-1]["change_type"] == "deletion"
    assert entries[-1]["description"] == "Activo eliminado: Columpio doble"


async def test_bulk_delete_reports_missing_ids(client, asset):
    res = await client.post("/api/assets/bulk-delete", json={"ids": [asset["id"], 999]})
    assert res.status_code == 200
    assert res.json() == {"deleted": [asset["id"]], "not_found": [999]}


# ─── Listing ─────────────────────────────────────────────────────

async def test_list_filters(client, park, category, asset):
    await client.post("/api/assets", json={
        "name": "Luminaria", "category_id": category["id"], "park_id": park["id"],
        "status": "damaged", "serial_number": "LUM-001",
    })
    res = await client.get("/api/assets", params={"status": "damaged"})
    assert [a["name"] for a in res.json()["data"]] == ["Luminaria"]

    res = await client.get("/api/assets", params={"search": "lum-0"})
    assert res.json()["pagination"]["total"] == 1

    res = await client.get("/api/assets", params={"park_id": park["id"]})
    assert [a["name"] for a in res.json()["data"]] == ["Columpio doble", "Luminaria"]


# ─── History & Maintenance ───────────────────────────────────────

async def test_custom_history_entry(client, asset):
    res = await client.post(f"/api/assets/{asset['id']}/history", json={
        "change_type": "inspeccion", "description": "Revisión anual sin hallazgos",
    }, headers={"X-User-Id": "3"})
    assert res.status_code == 201
    assert res.json()["change_type"] == "inspeccion"
    assert res.json()["changed_by"] == "Usuario 3"

    recent = (await client.get("/api/assets/history/recent", params={"limit": 1})).json()
    assert len(recent) == 1


async def test_history_for_missing_asset_is_404(client):
    res = await client.post("/api/assets/999/history", json={
        "change_type": "nota", "description": "x",
    })
    assert res.status_code == 404


async def test_maintenance_updates_dates_and_history(client, asset):
    res = await client.post(f"/api/assets/{asset['id']}/maintenances", json={
        "maintenance_type": "correctivo", "description": "Cambio de cadenas",
        "maintenance_date": "2024-05-10", "next_maintenance_date": "2024-11-10",
        "cost": 850,
    })
    assert res.status_code == 201

    updated = (await client.get(f"/api/assets/{asset['id']}")).json()
    assert updated["last_maintenance_date"] == "2024-05-10"
    assert updated["next_maintenance_date"] == "2024-11-10"

    entry = (await _history(client, asset["id"]))[-1]
    assert entry["change_type"] == "maintenance"
    assert entry["new_value"] == "correctivo"
    assert "$850.00 MXN" in entry["notes"]

    listed = (await client.get(f"/api/assets/{asset['id']}/maintenances")).json()
    assert [m["maintenance_type"] for m in listed] == ["correctivo"]


async def test_older_maintenance_keeps_latest_date(client, asset):
    for day in ("2024-05-10", "2024-01-02"):
        await client.post(f"/api/assets/{asset['id']}/maintenances", json={
            "maintenance_type": "preventivo", "maintenance_date": day,
        })
    updated = (await client.get(f"/api/assets/{asset['id']}")).json()
    assert updated["last_maintenance_date"] == "2024-05-10"


# ─── Categories ──────────────────────────────────────────────────

@pytest.fixture
async def child_category(client, category):
    res = await client.post("/api/asset-categories", json={
        "name": "Columpios", "parent_id": category["id"],
    })
    assert res.status_code == 201
    return res.json()


async def test_category_tree_structure(client, category, child_category):
    res = await client.get("/api/asset-categories/tree/structure")
    tree = res.json()
    assert [c["name"] for c in tree] == ["Juegos infantiles"]
    assert [c["name"] for c in tree[0]["children"]] == ["Columpios"]


async def test_duplicate_category_name(client, category):
    res = await client.post("/api/asset-categories", json={"name": "Juegos infantiles"})
    assert res.status_code == 409


async def test_category_cannot_be_own_parent(client, category):
    res = await client.put(f"/api/asset-categories/{category['id']}", json={
        "parent_id": category["id"],
    })
    assert res.status_code == 400


async def test_category_delete_protection(client, category, child_category, asset):
    res = await client.delete(f"/api/asset-categories/{category['id']}")
    assert res.json()["error"]["code"] == "CATEGORY_IN_USE"

    await client.delete(f"/api/assets/{asset['id']}")
    res = await client.delete(f"/api/asset-categories/{category['id']}")
    assert res.json()["error"]["code"] == "CATEGORY_HAS_CHILDREN"

    assert (await client.delete(f"/api/asset-categories/{child_category['id']}")).status_code == 204
