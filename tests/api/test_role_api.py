"""Role endpoint tests."""

from uuid import uuid4

from tenantrbac.domain.entities import ADMINISTRATOR_ROLE_NAME


def test_requires_actor(client, catalog) -> None:
    result = client.simulate_get("/v1/roles")
    assert result.status_code == 401
    assert result.json == {"success": False, "error": "unauthenticated", "message": "Unauthorized"}


def test_orphan_gets_403(client, auth, orphan, catalog) -> None:
    auth.actor = orphan
    result = client.simulate_get("/v1/roles")
    assert result.status_code == 403
    assert result.json["error"] == "tenant_required"


def test_list_envelope(client, auth, tenant_admin, catalog) -> None:
    auth.actor = tenant_admin
    result = client.simulate_get("/v1/roles", params={"per_page": "1"})
    assert result.status_code == 200
    body = result.json
    assert body["success"] is True
    assert [r["name"] for r in body["data"]] == [ADMINISTRATOR_ROLE_NAME]
    assert body["total"] == 2
    assert (body["current_page"], body["last_page"], body["per_page"]) == (1, 2, 1)
    assert (body["from"], body["to"]) == (1, 1)


def test_list_all(client, auth, super_admin, catalog) -> None:
    auth.actor = super_admin
    result = client.simulate_get("/v1/roles", params={"per_page": "all"})
    assert len(result.json["data"]) == 6
    assert result.json["per_page"] is None


def test_create_strips_tenant(client, auth, tenant_admin, tenant, other_tenant, catalog) -> None:
    auth.actor = tenant_admin
    result = client.simulate_post(
        "/v1/roles",
        json={"name": "Reader", "tenant_id": str(other_tenant.id), "is_custom": False},
    )
    assert result.status_code == 201
    data = result.json["data"]
    assert data["tenant_id"] == str(tenant.id)
    assert data["is_custom"] is True


def test_create_validation_errors(client, auth, tenant_admin, catalog) -> None:
    auth.actor = tenant_admin
    result = client.simulate_post("/v1/roles", json={"name": "", "level": 42})
    assert result.status_code == 422
    assert set(result.json["errors"]) == {"name", "level"}


def test_non_string_name_is_422(client, auth, tenant_admin, catalog) -> None:
    auth.actor = tenant_admin
    result = client.simulate_post("/v1/roles", json={"name": 123, "level": 5})
    assert result.status_code == 422
    assert result.json["errors"]["name"] == ["The name must be a string."]


def test_create_duplicate(client, auth, tenant_admin, catalog) -> None:
    auth.actor = tenant_admin
    result = client.simulate_post("/v1/roles", json={"name": "Catechist"})
    assert result.status_code == 422
    assert "name" in result.json["errors"]


def test_get_with_stats(client, auth, tenant_user, catalog) -> None:
    auth.actor = tenant_user
    result = client.simulate_get(f"/v1/roles/{catalog['alpha_role'].id}")
    assert result.status_code == 200
    assert result.json["data"]["stats"] == {"total_users": 0, "active_users": 0}


def test_foreign_and_malformed_ids_are_404(client, auth, tenant_admin, catalog) -> None:
    auth.actor = tenant_admin
    for role_id in (catalog["beta_role"].id, uuid4(), "not-a-uuid"):
        result = client.simulate_get(f"/v1/roles/{role_id}")
        assert result.status_code == 404
        assert result.json["error"] == "not_found"


def test_update_system_role_is_immutable(client, auth, super_admin, catalog) -> None:
    auth.actor = super_admin
    result = client.simulate_put(f"/v1/roles/{catalog['super_role'].id}", json={"name": "Root"})
    assert result.status_code == 403
    assert result.json["error"] == "immutable"


def test_patch_updates(client, auth, tenant_admin, catalog) -> None:
    auth.actor = tenant_admin
    result = client.simulate_patch(f"/v1/roles/{catalog['alpha_role'].id}", json={"level": 3})
    assert result.status_code == 200
    assert result.json["data"]["level"] == 3


def test_delete_with_users_is_409(client, auth, db, tenant_admin, tenant, catalog) -> None:
    role = catalog["alpha_role"]
    db.add_user(tenant.id, role.id)
    auth.actor = tenant_admin
    result = client.simulate_delete(f"/v1/roles/{role.id}")
    assert result.status_code == 409
    assert result.json["error"] == "has_dependents"


def test_delete_then_restore(client, auth, db, tenant_admin, catalog) -> None:
    role = catalog["alpha_role"]
    auth.actor = tenant_admin
    assert client.simulate_delete(f"/v1/roles/{role.id}").status_code == 200
    assert db.roles[role.id].deleted_at is not None

    result = client.simulate_post(f"/v1/roles/{role.id}/restore")
    assert result.status_code == 200
    assert result.json["data"]["deleted_at"] is None


def test_deactivate(client, auth, db, tenant_admin, catalog) -> None:
    role = catalog["alpha_role"]
    auth.actor = tenant_admin
    result = client.simulate_post(f"/v1/roles/{role.id}/deactivate")
    assert result.status_code == 200
    assert result.json["message"] == "Role deactivated successfully"
    assert db.roles[role.id].active is False


def test_role_permissions_put_and_get(client, auth, tenant_admin, catalog) -> None:
    role = catalog["alpha_role"]
    ids = [str(catalog["users_view"].id), str(catalog["alpha_perm"].id)]
    auth.actor = tenant_admin

    result = client.simulate_put(f"/v1/roles/{role.id}/permissions", json={"permission_ids": ids})
    assert result.status_code == 200
    assert result.json["data"]["granted_count"] == 2

    listed = client.simulate_get(f"/v1/roles/{role.id}/permissions")
    assert listed.json["total"] == 2
    assert {p["id"] for p in listed.json["data"]} == set(ids)


def test_role_permissions_bad_body(client, auth, tenant_admin, catalog) -> None:
    auth.actor = tenant_admin
    role_id = catalog["alpha_role"].id
    result = client.simulate_put(f"/v1/roles/{role_id}/permissions", json={"permission_ids": ["x"]})
    assert result.status_code == 422
    result = client.simulate_put(f"/v1/roles/{role_id}/permissions", json={})
    assert result.status_code == 422


def test_tenant_user_cannot_mutate(client, auth, tenant_user, catalog) -> None:
    auth.actor = tenant_user
    result = client.simulate_post("/v1/roles", json={"name": "Mine"})
    assert result.status_code == 403
    assert result.json["error"] == "forbidden"
