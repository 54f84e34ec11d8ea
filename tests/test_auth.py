"""Tests for registration, login, session tokens and CSRF."""
import pytest
from httpx import AsyncClient

from ngo_api.core.deps import CSRF_HEADER, CSRF_HEADER_VALUE
from ngo_api.core.security import create_session_token

PASSWORD = "secreto123"


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def token_for(user) -> str:
    return create_session_token(user.id, user.role.name, user.token_version)


@pytest.mark.asyncio
async def test_register_creates_viewer(client: AsyncClient):
    response = await client.post(
        "/auth/register",
        json={"email": "Nueva@Example.org", "password": "clave123", "name": "  Nueva Persona "},
    )

    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "nueva@example.org"
    assert data["name"] == "Nueva Persona"
    assert data["role"]["name"] == "viewer"
    assert "password_hash" not in data


@pytest.mark.asyncio
async def test_register_duplicate_email(client: AsyncClient, admin_user):
    response = await client.post(
        "/auth/register",
        json={"email": admin_user.email, "password": "clave123", "name": "Otra"},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Email already registered"


@pytest.mark.asyncio
async def test_register_short_password_is_400(client: AsyncClient):
    response = await client.post(
        "/auth/register",
        json={"email": "corta@example.org", "password": "123", "name": "Corta"},
    )

    assert response.status_code == 400
    assert response.json()["error"].startswith("password:")


@pytest.mark.asyncio
async def test_login_wrong_password(client: AsyncClient, admin_user):
    response = await client.post(
        "/auth/login", json={"email": admin_user.email, "password": "incorrecta"}
    )

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid email or password"}


@pytest.mark.asyncio
async def test_login_inactive_user_rejected(client: AsyncClient, db, editor_user):
    editor_user.is_active = False
    db.commit()

    response = await client.post(
        "/auth/login", json={"email": editor_user.email, "password": PASSWORD}
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_login_sets_cookie_and_returns_token(client: AsyncClient, admin_user):
    response = await client.post(
        "/auth/login", json={"email": admin_user.email.upper(), "password": PASSWORD}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["user"]["id"] == str(admin_user.id)
    assert data["user"]["role"]["name"] == "admin"
    assert data["token"]

    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith("ngo_session=")
    assert "httponly" in set_cookie.lower()

    me = await client.get("/auth/me", headers=bearer(data["token"]))
    assert me.status_code == 200
    assert me.json()["email"] == admin_user.email


@pytest.mark.asyncio
async def test_me_via_cookie(authed_client: AsyncClient, admin_user):
    response = await authed_client.get("/auth/me")

    assert response.status_code == 200
    assert response.json()["id"] == str(admin_user.id)


@pytest.mark.asyncio
async def test_me_requires_token(client: AsyncClient):
    response = await client.get("/auth/me")
    assert response.status_code == 401
    assert response.json()["error"] == "Not authenticated"


@pytest.mark.asyncio
async def test_me_rejects_garbage_token(client: AsyncClient):
    response = await client.get("/auth/me", headers=bearer("no-es-un-jwt"))
    assert response.status_code == 401
    assert response.json()["error"] == "Invalid session"


@pytest.mark.asyncio
async def test_password_reset_revokes_old_tokens(bearer_client: AsyncClient, editor_user):
    old_token = token_for(editor_user)

    reset = await bearer_client.post(
        f"/users/{editor_user.id}/reset-password", json={"new_password": "nuevaclave"}
    )
    assert reset.status_code == 200
    assert reset.json() == {"status": "password_reset"}

    response = await bearer_client.get("/auth/me", headers=bearer(old_token))
    assert response.status_code == 401
    assert response.json()["error"] == "Session revoked"


@pytest.mark.asyncio
async def test_cookie_mutation_without_csrf_header_is_403(client: AsyncClient, admin_auth):
    client.cookies.set("ngo_session", admin_auth.token)

    response = await client.post("/auth/logout")

    assert response.status_code == 403
    assert "CSRF" in response.json()["error"]

    ok = await client.post("/auth/logout", headers={CSRF_HEADER: CSRF_HEADER_VALUE})
    assert ok.status_code == 200


@pytest.mark.asyncio
async def test_bearer_mutation_is_exempt_from_csrf(client: AsyncClient, admin_auth):
    client.cookies.set("ngo_session", admin_auth.token)

    response = await client.post(
        "/forms",
        headers=bearer(admin_auth.token),
        json={"name": "Sin CSRF", "section_location": "comunidades"},
    )

    assert response.status_code == 201


@pytest.mark.asyncio
async def test_logout_clears_cookie(authed_client: AsyncClient):
    response = await authed_client.post("/auth/logout")

    assert response.status_code == 200
    assert response.json() == {"status": "logged_out"}
    assert "Max-Age=0" in response.headers["set-cookie"]


@pytest.mark.asyncio
async def test_verify_returns_session_summary(client: AsyncClient, editor_user, editor_token):
    response = await client.get("/auth/verify", headers=bearer(editor_token))

    assert response.status_code == 200
    assert response.json() == {
        "valid": True,
        "user_id": str(editor_user.id),
        "email": editor_user.email,
        "role": "editor",
    }
