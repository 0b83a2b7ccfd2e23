"""Tree Areas API — area codes, previews, tree counts and delete protection."""

from tests.api.area_shapes import INSIDE, SQUARE


async def test_area_code_generated_from_park_prefix(client, park):
    res = await client.post("/api/trees/areas", json={
        "park_id": park["id"], "name": "Zona Deportiva Norte",
    })
    assert res.status_code == 201
    body = res.json()
    assert body["code"] == "CO-DN"
    assert body["status"] == "activa"
    assert body["tree_count"] == 0
    assert body["polygon"] is None


async def test_area_code_collision_falls_back(client, area):
    res = await client.post("/api/trees/areas", json={
        "park_id": area["park_id"], "name": "Jardín Sur",
    })
    assert res.json()["code"] == "CO-JS"


async def test_explicit_area_code_is_uppercased_and_unique(client, park, area):
    res = await client.post("/api/trees/areas", json={
        "park_id": park["id"], "name": "Vivero", "code": "co-ja",
    })
    assert res.status_code == 409


async def test_polygon_needs_three_vertices(client, park):
    res = await client.post("/api/trees/areas", json={
        "park_id": park["id"], "name": "Vivero", "polygon": SQUARE[:2],
    })
    assert res.status_code == 400


async def test_area_for_deleted_park_is_404(client, park):
    await client.delete(f"/api/parks/{park['id']}")
    res = await client.post("/api/trees/areas", json={"park_id": park["id"], "name": "Vivero"})
    assert res.status_code == 404


async def test_code_preview(client, park):
    res = await client.get("/api/trees/areas/code-preview", params={
        "park_id": park["id"], "name": "Jardín",
    })
    assert res.json() == {"code": "CO-JA"}


async def test_list_areas_by_park(client, area, other_park):
    await client.post("/api/trees/areas", json={"park_id": other_park["id"], "name": "Lago"})
    res = await client.get("/api/trees/areas", params={"park_id": area["park_id"]})
    assert [a["code"] for a in res.json()] == ["CO-JA"]


async def test_tree_count_and_area_trees(client, area, species):
    await client.post("/api/trees", json={
        "species_id": species["id"], "park_id": area["park_id"], **INSIDE,
    })
    res = await client.get(f"/api/trees/areas/{area['id']}")
    assert res.json()["tree_count"] == 1

    res = await client.get(f"/api/trees/areas/{area['id']}/trees")
    assert [t["code"] for t in res.json()] == ["CO-JA-JA-0001"]


async def test_area_with_trees_cannot_be_deleted(client, area, species):
    await client.post("/api/trees", json={
        "species_id": species["id"], "park_id": area["park_id"], **INSIDE,
    })
    res = await client.delete(f"/api/trees/areas/{area['id']}")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "AREA_HAS_TREES"


async def test_update_and_delete_empty_area(client, area):
    res = await client.put(f"/api/trees/areas/{area['id']}", json={
        "name": "Jardín Botánico", "status": "en_mantenimiento",
    })
    assert res.status_code == 200
    assert res.json()["status"] == "en_mantenimiento"
    assert res.json()["code"] == "CO-JA"

    assert (await client.delete(f"/api/trees/areas/{area['id']}")).status_code == 204
    assert (await client.get(f"/api/trees/areas/{area['id']}")).status_code == 404
