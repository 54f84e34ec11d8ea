"""Tests for user administration."""
import uuid

import pytest
from httpx import AsyncClient

from ngo_api.core.security import create_session_token


def _bearer(user) -> dict[str, str]:
    token = create_session_token(user.id, user.role.name, user.token_version)
    return {"Authorization": f"Bearer {token}"}


@pytest.mark.asyncio
async def test_non_admin_cannot_list_users(client: AsyncClient, editor_user):
    response = await client.get("/users", headers=_bearer(editor_user))

    assert response.status_code == 403
    assert response.json()["error"] == "Role 'editor' not authorized for this action"


@pytest.mark.asyncio
async def test_admin_creates_and_lists_users(bearer_client: AsyncClient, admin_user):
    response = await bearer_client.post(
        "/users",
        json={
            "email": "coordinadora@example.org",
            "password": "clave123",
            "name": "Coordinadora",
            "role": "editor",
        },
    )

    assert response.status_code == 201
    created = response.json()
    assert created["role"]["name"] == "editor"
    assert created["is_active"] is True

    listed = await bearer_client.get("/users")
    assert {u["email"] for u in listed.json()} == {admin_user.email, "coordinadora@example.org"}


@pytest.mark.asyncio
async def test_create_user_duplicate_email(bearer_client: AsyncClient, editor_user):
    response = await bearer_client.post(
        "/users",
        json={"email": editor_user.email, "password": "clave123", "name": "Duplicado"},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Email already registered"


@pytest.mark.asyncio
async def test_get_unknown_user_is_404(bearer_client: AsyncClient):
    response = await bearer_client.get(f"/users/{uuid.uuid4()}")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_role_change_revokes_existing_sessions(bearer_client: AsyncClient, editor_user):
    old_headers = _bearer(editor_user)
    assert (await bearer_client.get("/auth/me", headers=old_headers)).status_code == 200

    response = await bearer_client.put(f"/users/{editor_user.id}", json={"role": "viewer"})

    assert response.status_code == 200
    assert response.json()["role"]["name"] == "viewer"

    revoked = await bearer_client.get("/auth/me", headers=old_headers)
    assert revoked.status_code == 401
    assert (await bearer_client.get("/auth/me", headers=_bearer(editor_user))).status_code == 200


@pytest.mark.asyncio
async def test_deactivated_user_cannot_authenticate(bearer_client: AsyncClient, viewer_user):
    old_headers = _bearer(viewer_user)

    response = await bearer_client.put(f"/users/{viewer_user.id}", json={"is_active": False})

    assert response.status_code == 200
    assert response.json()["is_active"] is False
    assert (await bearer_client.get("/auth/me", headers=old_headers)).status_code == 401


@pytest.mark.asyncio
async def test_admin_cannot_demote_self(bearer_client: AsyncClient, admin_user):
    response = await bearer_client.put(f"/users/{admin_user.id}", json={"role": "viewer"})

    assert response.status_code == 400
    assert response.json()["error"] == "Cannot demote or deactivate yourself"


@pytest.mark.asyncio
async def test_delete_user(bearer_client: AsyncClient, viewer_user):
    user_id = viewer_user.id

    response = await bearer_client.delete(f"/users/{user_id}")

    assert response.status_code == 200
    assert response.json() == {"deleted": True}
    assert (await bearer_client.get(f"/users/{user_id}")).status_code == 404


@pytest.mark.asyncio
async def test_admin_cannot_delete_self(bearer_client: AsyncClient, admin_user):
    response = await bearer_client.delete(f"/users/{admin_user.id}")

    assert response.status_code == 400
    assert response.json()["error"] == "Cannot delete yourself"
