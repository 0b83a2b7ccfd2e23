"""API test fixtures — parks, areas and species created through the public endpoints."""

import pytest

from tests.api.area_shapes import SQUARE


@pytest.fixture
async def park(client):
    res = await client.post("/api/parks", json={"name": "Parque Los Colomos"})
    assert res.status_code == 201
    return res.json()


@pytest.fixture
async def other_park(client, park):
    res = await client.post("/api/parks", json={"name": "Parque Agua Azul"})
    assert res.status_code == 201
    return res.json()


@pytest.fixture
async def area(client, park):
    res = await client.post("/api/trees/areas", json={
        "park_id": park["id"], "name": "Jardín", "polygon": SQUARE,
    })
    assert res.status_code == 201
    return res.json()


@pytest.fixture
async def species(client):
    res = await client.post("/api/tree-species", json={
        "common_name": "Jacaranda", "scientific_name": "Jacaranda mimosifolia",
    })
    assert res.status_code == 201
    return res.json()


@pytest.fixture
async def category(client):
    res = await client.post("/api/asset-categories", json={"name": "Juegos infantiles"})
    assert res.status_code == 201
    return res.json()


@pytest.fixture
async def asset(client, park, category):
    res = await client.post("/api/assets", json={
        "name": "Columpio doble", "category_id": category["id"], "park_id": park["id"],
        "acquisition_cost": 12500,
    })
    assert res.status_code == 201
    return res.json()


@pytest.fixture
async def event(client, park):
    res = await client.post("/api/events", json={
        "title": "Feria del árbol", "start_date": "2024-04-20", "park_ids": [park["id"]],
    })
    assert res.status_code == 201
    return res.json()
