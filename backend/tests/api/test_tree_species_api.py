"""Tree Species API — generated species codes, uniqueness and delete protection."""

from parks_backoffice.models.tree import TreeSpecies
from tests.api.area_shapes import INSIDE


async def test_species_code_generated(client, species):
    assert species["species_code"] == "JA"


async def test_second_species_probes_next_code(client, species):
    res = await client.post("/api/tree-species", json={
        "common_name": "Jazmín", "scientific_name": "Jasminum officinale",
    })
    assert res.status_code == 201
    assert res.json()["species_code"] == "JAZ"


async def test_multiword_name_uses_initials(client):
    res = await client.post("/api/tree-species", json={
        "common_name": "Palma Washingtoniana", "scientific_name": "Washingtonia robusta",
    })
    assert res.json()["species_code"] == "PW"


async def test_explicit_code_conflict(client, species):
    res = await client.post("/api/tree-species", json={
        "common_name": "Fresno", "scientific_name": "Fraxinus uhdei", "species_code": "JA",
    })
    assert res.status_code == 409


async def test_search(client, species):
    await client.post("/api/tree-species", json={
        "common_name": "Fresno", "scientific_name": "Fraxinus uhdei",
    })
    res = await client.get("/api/tree-species", params={"search": "fraxinus"})
    assert [s["common_name"] for s in res.json()] == ["Fresno"]


async def test_update_keeps_code_when_omitted(client, species):
    res = await client.put(f"/api/tree-species/{species['id']}", json={"family": "Bignoniaceae"})
    assert res.status_code == 200
    assert res.json()["family"] == "Bignoniaceae"
    assert res.json()["species_code"] == "JA"


async def test_species_in_use_cannot_be_deleted(client, park, species):
    await client.post("/api/trees", json={
        "species_id": species["id"], "park_id": park["id"], **INSIDE,
    })
    res = await client.delete(f"/api/tree-species/{species['id']}")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "SPECIES_IN_USE"


async def test_delete_unused_species(client, species):
    assert (await client.delete(f"/api/tree-species/{species['id']}")).status_code == 204
    assert (await client.get(f"/api/tree-species/{species['id']}")).status_code == 404


async def test_generate_code_refused_when_present(client, species):
    res = await client.post(f"/api/tree-species/{species['id']}/generate-code")
    assert res.status_code == 409


async def test_generate_code_for_legacy_species(client, test_db):
    legacy = TreeSpecies(common_name="Fresno", scientific_name="Fraxinus uhdei")
    test_db.add(legacy)
    await test_db.commit()

    res = await client.post(f"/api/tree-species/{legacy.id}/generate-code")
    assert res.status_code == 200
    assert res.json()["species_code"] == "FR"
