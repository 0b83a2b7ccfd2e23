"""Sponsorships API — packages and benefits, contracts, and event/asset sponsorship links."""

import pytest


@pytest.fixture
async def sponsor(client):
    res = await client.post("/api/sponsors", json={"name": "Cervecería Occidente"})
    assert res.status_code == 201
    return res.json()


@pytest.fixture
async def package(client):
    res = await client.post("/api/sponsorship-packages", json={"name": "Oro", "level": 1})
    assert res.status_code == 201
    return res.json()


async def _contract(client, sponsor, **extra):
    body = {
        "sponsor_id": sponsor["id"], "start_date": "2024-01-01", "end_date": "2024-12-31",
        **extra,
    }
    res = await client.post("/api/sponsorship-contracts", json=body)
    assert res.status_code == 201, res.text
    return res.json()


# ─── Packages & Benefits ─────────────────────────────────────────

async def test_package_benefits(client, package):
    benefit = (await client.post("/api/sponsorship-benefits", json={
        "name": "Logo en señalética",
    })).json()

    res = await client.post(f"/api/sponsorship-packages/{package['id']}/benefits", json={
        "benefit_id": benefit["id"], "quantity": 4,
    })
    assert res.status_code == 201
    assert res.json()["benefit_name"] == "Logo en señalética"

    res = await client.post(f"/api/sponsorship-packages/{package['id']}/benefits", json={
        "benefit_id": benefit["id"],
    })
    assert res.status_code == 409

    listed = (await client.get(f"/api/sponsorship-packages/{package['id']}/benefits")).json()
    assert [(b["benefit_name"], b["quantity"]) for b in listed] == [("Logo en señalética", 4)]

    res = await client.delete(
        f"/api/sponsorship-packages/{package['id']}/benefits/{benefit['id']}",
    )
    assert res.status_code == 204


async def test_package_in_use_cannot_be_deleted(client, sponsor, package):
    await _contract(client, sponsor, package_id=package["id"])
    res = await client.delete(f"/api/sponsorship-packages/{package['id']}")
    assert res.json()["error"]["code"] == "PACKAGE_IN_USE"


# ─── Contracts ───────────────────────────────────────────────────

async def test_contract_includes_sponsor_name(client, sponsor):
    contract = await _contract(client, sponsor, contract_number="PAT-2024-001")
    assert contract["sponsor_name"] == "Cervecería Occidente"
    assert contract["status"] == "en_negociacion"

    listed = (await client.get(f"/api/sponsors/{sponsor['id']}/contracts")).json()
    assert [c["contract_number"] for c in listed] == ["PAT-2024-001"]


async def test_contract_number_unique(client, sponsor):
    await _contract(client, sponsor, contract_number="PAT-2024-001")
    res = await client.post("/api/sponsorship-contracts", json={
        "sponsor_id": sponsor["id"], "contract_number": "PAT-2024-001",
        "start_date": "2024-01-01", "end_date": "2024-12-31",
    })
    assert res.status_code == 409


async def test_contract_needs_existing_sponsor(client):
    res = await client.post("/api/sponsorship-contracts", json={
        "sponsor_id": 999, "start_date": "2024-01-01", "end_date": "2024-12-31",
    })
    assert res.status_code == 400


async def test_contract_date_range(client, sponsor):
    res = await client.post("/api/sponsorship-contracts", json={
        "sponsor_id": sponsor["id"], "start_date": "2024-06-01", "end_date": "2024-01-01",
    })
    assert res.status_code == 400

    contract = await _contract(client, sponsor)
    res = await client.put(f"/api/sponsorship-contracts/{contract['id']}", json={
        "end_date": "2023-12-31",
    })
    assert res.status_code == 400


async def test_sponsor_with_contracts_cannot_be_deleted(client, sponsor):
    await _contract(client, sponsor)
    res = await client.delete(f"/api/sponsors/{sponsor['id']}")
    assert res.status_code == 400


# ─── Event Links ─────────────────────────────────────────────────

async def test_event_link_lifecycle(client, sponsor, event):
    contract = await _contract(client, sponsor)
    res = await client.post("/api/sponsorship-events-links", json={
        "contract_id": contract["id"], "event_id": event["id"], "logo_placement": "escenario",
    })
    assert res.status_code == 201
    link = res.json()
    assert link["event_title"] == "Feria del árbol"
    assert link["visibility"] is True

    res = await client.post("/api/sponsorship-events-links", json={
        "contract_id": contract["id"], "event_id": event["id"],
    })
    assert res.status_code == 409

    res = await client.put(f"/api/sponsorship-events-links/{link['id']}", json={
        "visibility": False,
    })
    assert res.json()["visibility"] is False

    linked = (await client.get(
        f"/api/sponsorship-contracts/{contract['id']}/linked-events",
    )).json()
    assert [l["event_id"] for l in linked] == [event["id"]]

    res = await client.delete(f"/api/sponsorship-events-links/{link['id']}")
    assert res.status_code == 204


async def test_event_link_needs_existing_rows(client, sponsor, event):
    res = await client.post("/api/sponsorship-events-links", json={
        "contract_id": 999, "event_id": event["id"],
    })
    assert res.status_code == 404

    contract = await _contract(client, sponsor)
    res = await client.post("/api/sponsorship-events-links", json={
        "contract_id": contract["id"], "event_id": 999,
    })
    assert res.status_code == 404


# ─── Asset Links ─────────────────────────────────────────────────

async def test_asset_link_requires_active_contract(client, sponsor, asset):
    contract = await _contract(client, sponsor)
    res = await client.post("/api/sponsorship-assets", json={
        "contract_id": contract["id"], "asset_id": asset["id"],
    })
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "CONTRACT_NOT_ACTIVE"


async def test_asset_link_lifecycle(client, sponsor, asset):
    contract = await _contract(client, sponsor, status="activo")
    res = await client.post("/api/sponsorship-assets", json={
        "contract_id": contract["id"], "asset_id": asset["id"], "branding_type": "placa",
    })
    assert res.status_code == 201
    link = res.json()
    assert link["asset_name"] == "Columpio doble"

    res = await client.post("/api/sponsorship-assets", json={
        "contract_id": contract["id"], "asset_id": asset["id"],
    })
    assert res.status_code == 409

    res = await client.post("/api/sponsorship-assets", json={
        "contract_id": contract["id"], "asset_id": 999,
    })
    assert res.status_code == 404

    linked = (await client.get(
        f"/api/sponsorship-contracts/{contract['id']}/linked-assets",
    )).json()
    assert [l["asset_id"] for l in linked] == [asset["id"]]

    assert (await client.delete(f"/api/sponsorship-assets/{link['id']}")).status_code == 204
    assert (await client.get("/api/sponsorship-assets")).json() == []
