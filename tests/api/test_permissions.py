"""Tests for permission endpoints: catalogue, matrix, overrides, audit trail, access control."""

import pytest
from httpx import AsyncClient

from officeauth.domain.enums import Role


async def test_permissions_require_session(client: AsyncClient) -> None:
    for path in ("/api/v1/permissions", "/api/v1/permissions/me", "/api/v1/permissions/matrix"):
        assert (await client.get(path)).status_code == 401


async def test_catalogue_is_grouped(client: AsyncClient, make_user) -> None:
    _, headers = await make_user(Role.CLIENT)
    response = await client.get("/api/v1/permissions", headers=headers)
    assert response.status_code == 200
    groups = response.json()
    assert groups[0]["feature_group"] == "dashboard"
    assert sum(len(g["permissions"]) for g in groups) == 63


async def test_my_permissions(client: AsyncClient, make_user) -> None:
    _, headers = await make_user(Role.CLIENT)
    data = (await client.get("/api/v1/permissions/me", headers=headers)).json()
    assert data["role"] == "client"
    assert "documents.upload" in data["permissions"]
    assert "clients.view" not in data["permissions"]


async def test_matrix_requires_admin_permissions(client: AsyncClient, make_user) -> None:
    _, headers = await make_user(Role.TAX_OFFICE)
    response = await client.get("/api/v1/permissions/matrix", headers=headers)
    assert response.status_code == 403
    assert response.json()["details"] == {"permission": "admin.permissions"}


async def test_matrix(client: AsyncClient, admin_headers) -> None:
    response = await client.get("/api/v1/permissions/matrix", headers=admin_headers)
    assert response.status_code == 200
    data = response.json()
    assert set(data["matrix"]) == set(Role.values())
    assert data["matrix"]["agent"]["clients.view"] is True
    assert data["matrix"]["agent"]["clients.view_all"] is False
    assert all(data["matrix"]["admin"].values())


async def test_override_round_trip_and_audit(client: AsyncClient, admin_headers, make_user) -> None:
    _, agent_headers = await make_user(Role.AGENT)
    response = await client.put(
        "/api/v1/permissions/roles/agent/reports.export",
        json={"granted": True},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json() == {"changed": ["reports.export"]}

    mine = (await client.get("/api/v1/permissions/me", headers=agent_headers)).json()
    assert "reports.export" in mine["permissions"]

    overrides = await client.get("/api/v1/permissions/roles/agent/overrides", headers=admin_headers)
    assert overrides.json() == {"role": "agent", "overrides": {"reports.export": True}}

    cleared = await client.delete(
        "/api/v1/permissions/roles/agent/reports.export", headers=admin_headers
    )
    assert cleared.json() == {"changed": ["reports.export"]}

    audit = (await client.get("/api/v1/permissions/audit", headers=admin_headers)).json()
    assert [e["action"] for e in audit] == [
        "permission.override_cleared",
        "permission.override",
    ]
    assert audit[1]["old_value"] == "revoked"
    assert audit[1]["new_value"] == "granted"


async def test_bulk_override(client: AsyncClient, admin_headers) -> None:
    response = await client.put(
        "/api/v1/permissions/roles/client",
        json={"overrides": {"documents.delete": True, "support.create": False}},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert sorted(response.json()["changed"]) == ["documents.delete", "support.create"]

    repeat = await client.put(
        "/api/v1/permissions/roles/client",
        json={"overrides": {"documents.delete": True}},
        headers=admin_headers,
    )
    assert repeat.json() == {"changed": []}


async def test_bulk_override_with_unknown_slug_changes_nothing(
    client: AsyncClient, admin_headers
) -> None:
    response = await client.put(
        "/api/v1/permissions/roles/agent",
        json={"overrides": {"clients.delete": True, "made.up": True}},
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert response.json()["error"] == "UNKNOWN_PERMISSION"
    overrides = await client.get("/api/v1/permissions/roles/agent/overrides", headers=admin_headers)
    assert overrides.json()["overrides"] == {}


@pytest.mark.parametrize("granted", ["yes", "true", 1, 0, None])
async def test_override_requires_json_boolean(client: AsyncClient, admin_headers, granted) -> None:
    response = await client.put(
        "/api/v1/permissions/roles/agent/clients.delete",
        json={"granted": granted},
        headers=admin_headers,
    )
    assert response.status_code == 422
    overrides = await client.get("/api/v1/permissions/roles/agent/overrides", headers=admin_headers)
    assert overrides.json()["overrides"] == {}


async def test_bulk_override_requires_json_booleans(client: AsyncClient, admin_headers) -> None:
    response = await client.put(
        "/api/v1/permissions/roles/agent",
        json={"overrides": {"clients.delete": 1, "clients.view": "false"}},
        headers=admin_headers,
    )
    assert response.status_code == 422
    overrides = await client.get("/api/v1/permissions/roles/agent/overrides", headers=admin_headers)
    assert overrides.json()["overrides"] == {}


async def test_override_on_privileged_role_returns_409(client: AsyncClient, admin_headers) -> None:
    response = await client.put(
        "/api/v1/permissions/roles/super_admin/clients.view",
        json={"granted": False},
        headers=admin_headers,
    )
    assert response.status_code == 409
    assert response.json()["error"] == "ROLE_NOT_CONFIGURABLE"


async def test_override_on_unknown_role_returns_422(client: AsyncClient, admin_headers) -> None:
    response = await client.put(
        "/api/v1/permissions/roles/owner/clients.view",
        json={"granted": True},
        headers=admin_headers,
    )
    assert response.status_code == 422


async def test_revoking_admin_permissions_from_tax_office_blocks_audit(
    client: AsyncClient, admin_headers, make_user
) -> None:
    _, office_headers = await make_user(Role.TAX_OFFICE)
    assert (await client.get("/api/v1/permissions/audit", headers=office_headers)).status_code == 200

    await client.put(
        "/api/v1/permissions/roles/tax_office/admin.audit",
        json={"granted": False},
        headers=admin_headers,
    )
    response = await client.get("/api/v1/permissions/audit", headers=office_headers)
    assert response.status_code == 403


async def test_audit_filter_by_role(client: AsyncClient, admin_headers) -> None:
    for role in ("agent", "client"):
        await client.put(
            f"/api/v1/permissions/roles/{role}/reports.export",
            json={"granted": True},
            headers=admin_headers,
        )
    response = await client.get(
        "/api/v1/permissions/audit", params={"role": "client"}, headers=admin_headers
    )
    entries = response.json()
    assert len(entries) == 1
    assert entries[0]["role"] == "client"
