"""Tests for the volunteer shift registry."""
import uuid
from datetime import time

import pytest
from httpx import AsyncClient

from ngo_api.core.sections import SectionKey
from ngo_api.core.security import create_session_token
from ngo_api.services import section_permission_service
from ngo_api.services.volunteer_service import shift_hours


def _bearer(user) -> dict[str, str]:
    token = create_session_token(user.id, user.role.name, user.token_version)
    return {"Authorization": f"Bearer {token}"}


def _payload(**overrides) -> dict:
    payload = {
        "name": "Lucía Pérez",
        "volunteer_type": "Agrícola",
        "organization": "Colegio Monte María",
        "shift": "Mañana",
        "entry_time": "08:00",
        "exit_time": "12:30",
        "work_date": "2025-03-14",
        "agricultural_pounds": 120,
    }
    payload.update(overrides)
    return payload


async def _create(client: AsyncClient, **overrides) -> dict:
    response = await client.post("/volunteers", json=_payload(**overrides))
    assert response.status_code == 201, response.text
    return response.json()


def test_shift_hours():
    assert shift_hours(time(7, 15), time(16, 0)) == 8.75
    with pytest.raises(ValueError, match="exit_time must be after entry_time"):
        shift_hours(time(9, 0), time(9, 0))


# =============================================================================
# CRUD
# =============================================================================

@pytest.mark.asyncio
async def test_create_derives_total_hours(authed_client: AsyncClient, admin_user):
    data = await _create(authed_client)

    assert data["total_hours"] == 4.5
    assert data["entry_time"] == "08:00:00"
    assert data["volunteer_type"] == "Agrícola"
    assert data["is_active"] is True
    assert data["created_by"] == str(admin_user.id)


@pytest.mark.asyncio
async def test_create_keeps_explicit_total_hours(authed_client: AsyncClient):
    data = await _create(authed_client, total_hours=3)

    assert data["total_hours"] == 3


@pytest.mark.asyncio
async def test_create_rejects_exit_before_entry(authed_client: AsyncClient):
    response = await authed_client.post(
        "/volunteers", json=_payload(entry_time="14:00", exit_time="09:00")
    )

    assert response.status_code == 400
    assert response.json() == {"error": "exit_time must be after entry_time"}


@pytest.mark.parametrize(
    "overrides,field",
    [
        ({"name": "L"}, "name"),
        ({"volunteer_type": "Cocina"}, "volunteer_type"),
        ({"shift": "Noche"}, "shift"),
        ({"total_hours": 30}, "total_hours"),
        ({"work_date": "not-a-date"}, "work_date"),
    ],
)
@pytest.mark.asyncio
async def test_create_volunteer_validation(authed_client: AsyncClient, overrides, field):
    response = await authed_client.post("/volunteers", json=_payload(**overrides))

    assert response.status_code == 400
    assert response.json()["error"].startswith(f"{field}:")


@pytest.mark.asyncio
async def test_list_filters_and_pagination(authed_client: AsyncClient):
    await _create(authed_client)
    await _create(authed_client, name="Marco Tzul", volunteer_type="Víveres", shift="Tarde", work_date="2025-03-15")
    await _create(authed_client, name="Sofía López", volunteer_type="Picking", is_active=False, work_date="2025-03-16")

    everyone = (await authed_client.get("/volunteers")).json()
    assert [v["name"] for v in everyone["volunteers"]] == ["Sofía López", "Marco Tzul", "Lucía Pérez"]
    assert everyone["pagination"]["total"] == 3

    groceries = (await authed_client.get("/volunteers", params={"volunteer_type": "Víveres"})).json()
    assert [v["name"] for v in groceries["volunteers"]] == ["Marco Tzul"]

    afternoon = (await authed_client.get("/volunteers", params={"shift": "Tarde"})).json()
    assert [v["name"] for v in afternoon["volunteers"]] == ["Marco Tzul"]

    inactive = (await authed_client.get("/volunteers", params={"is_active": "false"})).json()
    assert [v["name"] for v in inactive["volunteers"]] == ["Sofía López"]

    searched = (await authed_client.get("/volunteers", params={"search": "lóp"})).json()
    assert [v["name"] for v in searched["volunteers"]] == ["Sofía López"]

    on_date = (await authed_client.get("/volunteers", params={"work_date": "2025-03-14"})).json()
    assert [v["name"] for v in on_date["volunteers"]] == ["Lucía Pérez"]

    page = (await authed_client.get("/volunteers", params={"page": 1, "limit": 2})).json()
    assert len(page["volunteers"]) == 2
    assert page["pagination"]["has_next"] is True
    assert page["pagination"]["total_pages"] == 2


@pytest.mark.asyncio
async def test_update_recomputes_hours_when_times_move(authed_client: AsyncClient):
    created = await _create(authed_client)

    moved = await authed_client.put(f"/volunteers/{created['id']}", json={"exit_time": "14:00"})
    assert moved.status_code == 200
    assert moved.json()["total_hours"] == 6

    explicit = await authed_client.put(
        f"/volunteers/{created['id']}", json={"entry_time": "09:00", "total_hours": 4}
    )
    assert explicit.json()["total_hours"] == 4

    renamed = await authed_client.put(f"/volunteers/{created['id']}", json={"organization": None})
    assert renamed.json()["organization"] is None
    assert renamed.json()["total_hours"] == 4


@pytest.mark.asyncio
async def test_update_rejects_inverted_times_and_nulls(authed_client: AsyncClient):
    created = await _create(authed_client)

    inverted = await authed_client.put(f"/volunteers/{created['id']}", json={"entry_time": "13:00"})
    assert inverted.status_code == 400
    assert inverted.json() == {"error": "exit_time must be after entry_time"}

    nulled = await authed_client.put(f"/volunteers/{created['id']}", json={"shift": None, "name": None})
    assert nulled.status_code == 400
    assert nulled.json() == {"error": "Fields cannot be null: name, shift"}


@pytest.mark.asyncio
async def test_soft_delete_hides_volunteer(authed_client: AsyncClient):
    created = await _create(authed_client)

    response = await authed_client.delete(f"/volunteers/{created['id']}")

    assert response.status_code == 200
    assert response.json() == {"deleted": True, "id": created["id"]}
    missing = await authed_client.get(f"/volunteers/{created['id']}")
    assert missing.status_code == 404
    assert missing.json() == {"error": "Volunteer not found"}
    assert (await authed_client.get(f"/volunteers/{uuid.uuid4()}")).status_code == 404


# =============================================================================
# Stats
# =============================================================================

@pytest.mark.asyncio
async def test_volunteer_registry_stats(authed_client: AsyncClient):
    await _create(authed_client, receives_benefit=True, benefit_number="B-01")
    await _create(authed_client, name="Marco Tzul", shift="Tarde", entry_time="13:00", exit_time="17:00")
    await _create(
        authed_client, name="Sofía López", volunteer_type="Picking", organization=None,
        is_active=False, work_date="2025-03-16", total_hours=2,
    )
    gone = await _create(authed_client, name="Borrado Uno")
    await authed_client.delete(f"/volunteers/{gone['id']}")

    stats = (await authed_client.get("/volunteers/stats")).json()

    assert (stats["total"], stats["active"], stats["inactive"]) == (3, 2, 1)
    assert stats["total_hours"] == 10.5
    assert stats["total_with_benefit"] == 1
    assert stats["by_type"] == {"Agrícola": 2, "Picking": 1}
    assert stats["by_organization"] == {"Colegio Monte María": 2}
    assert stats["by_shift"] == {"Mañana": 2, "Tarde": 1}
    assert stats["by_date"] == {
        "2025-03-14": {"volunteers": 2, "hours": 8.5},
        "2025-03-16": {"volunteers": 1, "hours": 2},
    }


# =============================================================================
# Section gate
# =============================================================================

@pytest.mark.asyncio
async def test_registry_requires_board_section(client: AsyncClient, db, admin_user, editor_user):
    headers = _bearer(editor_user)

    denied = await client.get("/volunteers", headers=headers)
    assert denied.status_code == 403
    assert denied.json()["error"] == "No access to section 'voluntariado-tablero'"

    section_permission_service.replace_permissions(
        db, editor_user, [SectionKey.VOLUNTARIADO_TABLERO.value], actor_user_id=admin_user.id
    )
    assert (await client.get("/volunteers/stats", headers=headers)).status_code == 200
