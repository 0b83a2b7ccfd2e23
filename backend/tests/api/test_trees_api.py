"""Trees API — code generation on create, area auto-detection, filters and soft removal."""

from datetime import date

from parks_backoffice.api.routes import trees as trees_routes
from tests.api.area_shapes import INSIDE, OUTSIDE


async def _plant(client, species, park, **extra):
    res = await client.post("/api/trees", json={
        "species_id": species["id"], "park_id": park["id"], **INSIDE, **extra,
    })
    assert res.status_code == 201, res.text
    return res.json()


async def test_tree_inside_area_gets_area_code(client, park, area, species):
    tree = await _plant(client, species, park)
    assert tree["area_id"] == area["id"]
    assert tree["code"] == "CO-JA-JA-0001"
    assert tree["health_status"] == "bueno"


async def test_tree_outside_areas_gets_park_level_code(client, park, area, species):
    res = await client.post("/api/trees", json={
        "species_id": species["id"], "park_id": park["id"], **OUTSIDE,
    })
    tree = res.json()
    assert tree["area_id"] is None
    assert tree["code"] == "CO-XX-JA-0001"


async def test_sequence_continues_per_prefix(client, park, area, species):
    await _plant(client, species, park)
    second = await _plant(client, species, park)
    assert second["code"] == "CO-JA-JA-0002"

    res = await client.post("/api/trees", json={
        "species_id": species["id"], "park_id": park["id"], **OUTSIDE,
    })
    assert res.json()["code"] == "CO-XX-JA-0001"


async def test_unknown_species_or_park_is_400(client, park, species):
    res = await client.post("/api/trees", json={
        "species_id": 999, "park_id": park["id"], **INSIDE,
    })
    assert res.status_code == 400
    assert res.json()["error"]["context"]["field"] == "species_id"

    res = await client.post("/api/trees", json={
        "species_id": species["id"], "park_id": 999, **INSIDE,
    })
    assert res.status_code == 400


async def test_explicit_area_must_belong_to_park(client, area, other_park, species):
    res = await client.post("/api/trees", json={
        "species_id": species["id"], "park_id": other_park["id"],
        "area_id": area["id"], **INSIDE,
    })
    assert res.status_code == 400


async def test_coordinates_are_required(client, park, species):
    res = await client.post("/api/trees", json={
        "species_id": species["id"], "park_id": park["id"],
    })
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_list_filters_and_pagination(client, park, area, species):
    for _ in range(3):
        await _plant(client, species, park)
    await _plant(client, species, park, health_status="malo", notes="rama seca")

    res = await client.get("/api/trees", params={"limit": 2})
    body = res.json()
    assert len(body["data"]) == 2
    assert body["pagination"] == {"page": 1, "limit": 2, "total": 4, "total_pages": 2}

    res = await client.get("/api/trees", params={"health_status": "malo"})
    assert [t["notes"] for t in res.json()["data"]] == ["rama seca"]

    res = await client.get("/api/trees", params={"search": "mimosifolia"})
    assert res.json()["pagination"]["total"] == 4


async def test_update_is_partial(client, park, species):
    tree = await _plant(client, species, park)
    res = await client.put(f"/api/trees/{tree['id']}", json={"height": 7.5})
    assert res.status_code == 200
    body = res.json()
    assert body["height"] == 7.5
    assert body["code"] == tree["code"]
    assert body["latitude"] == INSIDE["latitude"]


async def test_remove_is_soft(client, park, species):
    tree = await _plant(client, species, park)
    res = await client.request(
        "DELETE", f"/api/trees/{tree['id']}",
        json={"reason": "Plaga", "removal_date": "2024-03-15"},
    )
    assert res.status_code == 200
    assert res.json()["is_removed"] is True
    assert res.json()["removal_reason"] == "Plaga"
    assert res.json()["removal_date"] == "2024-03-15"

    assert (await client.get("/api/trees")).json()["data"] == []
    res = await client.get("/api/trees", params={"include_removed": True})
    assert [t["id"] for t in res.json()["data"]] == [tree["id"]]
    assert (await client.get(f"/api/trees/{tree['id']}")).status_code == 200


async def test_remove_without_body_uses_defaults(client, park, species):
    tree = await _plant(client, species, park)
    res = await client.delete(f"/api/trees/{tree['id']}")
    assert res.status_code == 200
    assert res.json()["removal_reason"] == "No especificado"
    assert res.json()["removal_date"] == date.today().isoformat()


async def test_code_taken_between_probe_and_insert_is_409(client, park, area, species, monkeypatch):
    first = await _plant(client, species, park)

    async def stale_code(*args, **kwargs):
        return first["code"]

    monkeypatch.setattr(trees_routes, "generate_tree_code", stale_code)
    res = await client.post("/api/trees", json={
        "species_id": species["id"], "park_id": park["id"], **INSIDE,
    })
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "CONFLICT"
    assert (await client.get("/api/trees")).json()["pagination"]["total"] == 1


async def test_missing_tree_is_404(client):
    assert (await client.get("/api/trees/999")).status_code == 404
