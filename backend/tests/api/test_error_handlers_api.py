"""Error handlers — envelope shape and request context on the logged record."""

import logging


async def test_domain_error_logs_request_path(client, caplog):
    with caplog.at_level(logging.WARNING, logger="parks_backoffice.api.error_handlers"):
        res = await client.get("/api/trees/999")

    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"
    record = next(r for r in caplog.records if r.name == "parks_backoffice.api.error_handlers")
    assert record.path == "/api/trees/999"
    assert record.method == "GET"
    assert record.error_code == "RESOURCE_NOT_FOUND"


async def test_validation_error_is_400_with_details(client):
    res = await client.post("/api/trees", json={"park_id": 1})
    assert res.status_code == 400
    body = res.json()["error"]
    assert body["code"] == "VALIDATION_ERROR"
    assert any(d["field"].endswith("species_id") for d in body["details"])
