"""Roles API — role catalogue, user-role assignments, merged permissions and route guards."""

import pytest


async def _role(client, slug, level, permissions, **headers):
    res = await client.post("/api/roles", json={
        "name": slug.title(), "slug": slug, "level": level, "permissions": permissions,
    }, headers=headers)
    assert res.status_code == 201, res.text
    return res.json()


async def _user(client, username, **headers):
    res = await client.post("/api/users", json={
        "username": username, "email": f"{username}@parques.mx",
    }, headers=headers)
    assert res.status_code == 201, res.text
    return res.json()


@pytest.fixture
async def roles(client):
    admin = await _role(client, "admin", 1, {"all": True})
    guard = await _role(client, "guardabosques", 4, {"trees": {"view": True, "edit": True}})
    clerk = await _role(client, "capturista", 5, {"trees": {"view": True}, "assets": {"view": True}})
    return admin, guard, clerk


async def test_roles_listed_by_level(client, roles):
    res = await client.get("/api/roles")
    assert [r["slug"] for r in res.json()] == ["admin", "guardabosques", "capturista"]


async def test_duplicate_slug(client, roles):
    res = await client.post("/api/roles", json={"name": "Otro", "slug": "admin"})
    assert res.status_code == 409


async def test_merged_permissions(client, roles):
    _, guard, clerk = roles
    user = await _user(client, "mgarcia")
    for role in (guard, clerk):
        res = await client.post(f"/api/users/{user['id']}/roles", json={"role_id": role["id"]})
        assert res.status_code == 201

    res = await client.get(f"/api/users/{user['id']}/permissions")
    body = res.json()
    assert body["roles"] == ["guardabosques", "capturista"]
    assert body["highest_level"] == 4
    assert body["permissions"] == {
        "trees": {"view": True, "edit": True}, "assets": {"view": True},
    }

    check = f"/api/users/{user['id']}/permissions/check"
    assert (await client.get(check, params={"permission": "trees:edit"})).json()["allowed"] is True
    assert (await client.get(check, params={"permission": "assets.edit"})).json()["allowed"] is False


async def test_assignment_conflict_and_removal(client, roles):
    _, guard, _ = roles
    user = await _user(client, "mgarcia")
    url = f"/api/users/{user['id']}/roles"
    await client.post(url, json={"role_id": guard["id"], "is_primary": True})
    assert (await client.post(url, json={"role_id": guard["id"]})).status_code == 409

    listed = (await client.get(url)).json()
    assert [(r["role_slug"], r["is_primary"]) for r in listed] == [("guardabosques", True)]

    assert (await client.delete(f"{url}/{guard['id']}")).status_code == 204
    assert (await client.get(url)).json() == []
    assert (await client.delete(f"{url}/{guard['id']}")).status_code == 404


async def test_expired_assignment_grants_nothing(client, roles):
    _, guard, _ = roles
    user = await _user(client, "mgarcia")
    await client.post(f"/api/users/{user['id']}/roles", json={
        "role_id": guard["id"], "expires_at": "2020-01-01T00:00:00Z",
    })
    body = (await client.get(f"/api/users/{user['id']}/permissions")).json()
    assert body["roles"] == []
    assert body["permissions"] == {}


async def test_assigned_role_cannot_be_deleted(client, roles):
    _, guard, _ = roles
    user = await _user(client, "mgarcia")
    await client.post(f"/api/users/{user['id']}/roles", json={"role_id": guard["id"]})
    res = await client.delete(f"/api/roles/{guard['id']}")
    assert res.json()["error"]["code"] == "ROLE_IN_USE"


# ─── Enforcement ─────────────────────────────────────────────────

@pytest.fixture
async def admin_user(client, roles):
    admin, _, _ = roles
    user = await _user(client, "superadmin")
    await client.post(f"/api/users/{user['id']}/roles", json={"role_id": admin["id"]})
    return user


async def test_enforced_route_requires_identity(client, admin_user, enforced):
    res = await client.post("/api/roles", json={"name": "Nuevo", "slug": "nuevo"})
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "AUTHENTICATION_REQUIRED"


async def test_enforced_route_checks_permission(client, roles, admin_user, enforced):
    _, _, clerk = roles
    # Enforcement is already on, so the clerk is provisioned by the admin.
    clerk_user = await _user(client, "capturista1", **{"X-User-Id": str(admin_user["id"])})
    res = await client.post(
        f"/api/users/{clerk_user['id']}/roles", json={"role_id": clerk["id"]},
        headers={"X-User-Id": str(admin_user["id"])},
    )
    assert res.status_code == 201

    res = await client.post(
        "/api/roles", json={"name": "Nuevo", "slug": "nuevo"},
        headers={"X-User-Id": str(clerk_user["id"])},
    )
    assert res.status_code == 403

    res = await client.post(
        "/api/roles", json={"name": "Nuevo", "slug": "nuevo"},
        headers={"X-User-Id": str(admin_user["id"])},
    )
    assert res.status_code == 201


async def test_reads_stay_open_under_enforcement(client, roles, enforced):
    assert (await client.get("/api/roles")).status_code == 200
