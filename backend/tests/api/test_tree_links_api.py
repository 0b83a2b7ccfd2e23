"""Tree Links API — manual, GPS and prefix linking of trees to park areas."""

import pytest

from tests.api.area_shapes import INSIDE, OUTSIDE, SQUARE


async def _plant(client, species, park, point=INSIDE):
    res = await client.post("/api/trees", json={
        "species_id": species["id"], "park_id": park["id"], **point,
    })
    assert res.status_code == 201
    return res.json()


@pytest.fixture
async def early_trees(client, park, species):
    """Trees planted before any area existed: one inside the future square, one outside."""
    inside = await _plant(client, species, park, INSIDE)
    outside = await _plant(client, species, park, OUTSIDE)
    res = await client.post("/api/trees/areas", json={
        "park_id": park["id"], "name": "Jardín", "polygon": SQUARE,
    })
    assert res.status_code == 201
    return inside, outside, res.json()


async def test_manual_link_and_unlink(client, park, area, species):
    tree = await _plant(client, species, park, OUTSIDE)

    res = await client.post("/api/trees/link/manual", json={
        "tree_id": tree["id"], "area_id": area["id"],
    })
    assert res.status_code == 200
    body = res.json()
    assert body["tree"]["area_id"] == area["id"]
    assert body["matched_area"]["code"] == "CO-JA"
    assert body["tree"]["code"] == tree["code"]

    res = await client.post("/api/trees/link/manual", json={
        "tree_id": tree["id"], "area_id": None,
    })
    assert res.json()["tree"]["area_id"] is None
    assert res.json()["matched_area"] is None


async def test_linked_tree_keeps_its_park_level_sequence(client, park, area, species):
    first = await _plant(client, species, park, OUTSIDE)
    res = await client.post("/api/trees/link/manual", json={
        "tree_id": first["id"], "area_id": area["id"],
    })
    assert res.status_code == 200

    second = await _plant(client, species, park, OUTSIDE)
    assert first["code"] == "CO-XX-JA-0001"
    assert second["code"] == "CO-XX-JA-0002"


async def test_manual_link_rejects_area_of_another_park(client, area, other_park, species):
    tree = await _plant(client, species, other_park, OUTSIDE)
    res = await client.post("/api/trees/link/manual", json={
        "tree_id": tree["id"], "area_id": area["id"],
    })
    assert res.status_code == 400


async def test_manual_link_missing_rows(client, area):
    res = await client.post("/api/trees/link/manual", json={"tree_id": 999, "area_id": area["id"]})
    assert res.status_code == 404


async def test_gps_link(client, early_trees):
    inside, outside, area = early_trees
    assert inside["area_id"] is None

    res = await client.post("/api/trees/link/auto-gps", json={"tree_id": inside["id"]})
    assert res.status_code == 200
    assert res.json()["tree"]["area_id"] == area["id"]

    res = await client.post("/api/trees/link/auto-gps", json={"tree_id": outside["id"]})
    assert res.status_code == 404


async def test_prefix_link(client, park, area, species):
    tree = await _plant(client, species, park)
    await client.post("/api/trees/link/manual", json={"tree_id": tree["id"], "area_id": None})

    res = await client.post("/api/trees/link/auto-prefix", json={"tree_id": tree["id"]})
    assert res.status_code == 200
    assert res.json()["tree"]["area_id"] == area["id"]


async def test_prefix_link_without_matching_area(client, park, area, species):
    tree = await _plant(client, species, park, OUTSIDE)
    res = await client.post("/api/trees/link/auto-prefix", json={"tree_id": tree["id"]})
    assert res.status_code == 404


async def test_bulk_gps_reports_each_tree(client, early_trees):
    inside, outside, area = early_trees
    res = await client.post("/api/trees/link/bulk", json={
        "tree_ids": [inside["id"], outside["id"], 999], "method": "gps",
    })
    assert res.status_code == 200
    body = res.json()
    assert body["summary"] == {"total": 3, "successful": 1, "failed": 2}
    assert body["results"]["success"] == [inside["id"]]
    assert [f["tree_id"] for f in body["results"]["failed"]] == [outside["id"], 999]

    tree = (await client.get(f"/api/trees/{inside['id']}")).json()
    assert tree["area_id"] == area["id"]


async def test_bulk_manual_requires_area(client, early_trees):
    inside, _, _ = early_trees
    res = await client.post("/api/trees/link/bulk", json={
        "tree_ids": [inside["id"]], "method": "manual",
    })
    assert res.status_code == 400


async def test_unlinked_trees(client, early_trees, other_park, species):
    inside, outside, _ = early_trees
    await _plant(client, species, other_park, OUTSIDE)

    res = await client.get("/api/trees/link/unlinked", params={"park_id": inside["park_id"]})
    body = res.json()
    assert body["count"] == 2
    assert [t["id"] for t in body["trees"]] == [inside["id"], outside["id"]]

    res = await client.get("/api/trees/link/unlinked")
    assert res.json()["count"] == 3
