"""Tests for submitting forms and reviewing submissions."""
import uuid

import pytest
from httpx import AsyncClient

from ngo_api.core.sections import SectionKey
from ngo_api.core.security import create_session_token
from ngo_api.db.models import FormSubmission, SubmissionAnswer
from ngo_api.services import section_permission_service


def _bearer(user) -> dict[str, str]:
    token = create_session_token(user.id, user.role.name, user.token_version)
    return {"Authorization": f"Bearer {token}"}


def _survey(make_form, **kwargs):
    return make_form(
        questions=[
            {"type": "TEXT", "title": "Comunidad", "required": True},
            {"type": "NUMBER", "title": "Familias", "config": {"min": 0, "max": 500}},
            {"type": "RADIO", "title": "¿Agua potable?", "options": ["Sí", "No"]},
            {"type": "SECTION_HEADER", "title": "Fin"},
        ],
        **kwargs,
    )


def _questions(form):
    return sorted(form.questions, key=lambda q: q.order_index)


def _answers(values: dict) -> list[dict]:
    return [
        {"question_id": str(qid), "answer_value": {"value": value}} for qid, value in values.items()
    ]


async def _create(client: AsyncClient, form, answers: list[dict], **kwargs):
    return await client.post(
        "/submissions",
        json={"form_template_id": str(form.id), "answers": answers},
        **kwargs,
    )


async def _seed(client: AsyncClient, form, communities: list[str]) -> list[str]:
    name, families, _, _ = _questions(form)
    ids = []
    for idx, community in enumerate(communities):
        response = await _create(
            client, form, [
                {"question_id": str(name.id), "answer_value": {"value": community}},
                {"question_id": str(families.id), "answer_value": idx},
            ],
        )
        assert response.status_code == 201, response.text
        ids.append(response.json()["submission"]["id"])
    return ids


# =============================================================================
# Create
# =============================================================================

@pytest.mark.asyncio
async def test_create_submission(authed_client: AsyncClient, db, admin_user, make_form):
    form = _survey(make_form)
    name, families, water, _ = _questions(form)

    response = await authed_client.post(
        "/submissions",
        json={
            "form_template_id": str(form.id),
            "time_spent_seconds": 95,
            "answers": [
                {"question_id": str(name.id), "answer_value": {"value": "La Esperanza"}},
                {"question_id": str(families.id), "answer_value": "42"},
                {"question_id": str(water.id), "answer_value": {"value": "No"}},
            ],
        },
    )

    assert response.status_code == 201
    data = response.json()
    assert data["submission"]["user_id"] == str(admin_user.id)
    assert data["submission"]["section_location"] == "comunidades"
    assert data["submission"]["status"] == "completed"
    assert data["submission"]["time_spent_seconds"] == 95
    stored = {a["question_id"]: a["answer_value"] for a in data["answers"]}
    assert stored[str(families.id)] == {"value": 42}
    assert stored[str(name.id)] == {"value": "La Esperanza"}
    assert db.query(SubmissionAnswer).count() == 3


@pytest.mark.parametrize(
    "case,message",
    [
        ("missing_required", "Missing required answer: Comunidad"),
        ("unknown_question", "Unknown question"),
        ("bad_number", "Question 'Familias' must be at most 500"),
        ("bad_option", "Invalid option for '¿Agua potable?'"),
        ("header_value", "Question 'Fin' does not accept answers"),
    ],
)
@pytest.mark.asyncio
async def test_create_submission_rejects_bad_answers(authed_client: AsyncClient, db, make_form, case, message):
    form = _survey(make_form)
    name, families, water, header = _questions(form)
    answers = {
        "missing_required": _answers({str(families.id): 3}),
        "unknown_question": _answers({str(name.id): "x", str(uuid.uuid4()): "y"}),
        "bad_number": _answers({str(name.id): "x", str(families.id): 501}),
        "bad_option": _answers({str(name.id): "x", str(water.id): "Tal vez"}),
        "header_value": _answers({str(name.id): "x", str(header.id): "texto"}),
    }[case]

    response = await _create(authed_client, form, answers)

    assert response.status_code == 400
    assert response.json()["error"].startswith(message)
    assert db.query(FormSubmission).count() == 0


@pytest.mark.asyncio
async def test_create_submission_for_inactive_form_is_404(authed_client: AsyncClient, db, make_form):
    form = _survey(make_form)
    form.is_active = False
    db.commit()

    response = await _create(authed_client, form, [])

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_create_submission_requires_auth(client: AsyncClient, make_form):
    form = _survey(make_form)

    response = await _create(client, form, [])

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_public_submit_is_anonymous(client: AsyncClient, make_form):
    form = _survey(make_form, is_public=True)
    name, _, _, _ = _questions(form)

    response = await client.post(
        f"/public/forms/{form.slug}/submit",
        json={"answers": [{"question_id": str(name.id), "answer_value": "Los Pinos"}]},
    )

    assert response.status_code == 201
    assert response.json()["submission"]["user_id"] is None

    private = _survey(make_form, is_public=False)
    rejected = await client.post(f"/public/forms/{private.slug}/submit", json={"answers": []})
    assert rejected.status_code == 404


# =============================================================================
# Review
# =============================================================================

@pytest.mark.asyncio
async def test_submissions_table(authed_client: AsyncClient, admin_user, make_form):
    form = _survey(make_form)
    await _seed(authed_client, form, ["Uno", "Dos"])
    name, families, water, _ = _questions(form)

    response = await authed_client.get(f"/submissions/{form.id}")

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    assert [c["title"] for c in data["columns"]] == ["Comunidad", "Familias", "¿Agua potable?"]
    row = data["data"][0]
    assert set(row) == {
        "submission_id", "submitted_at", "updated_at", "user_name", "user_email",
        str(name.id), str(families.id), str(water.id),
    }
    assert row["user_email"] == admin_user.email
    assert {r[str(name.id)] for r in data["data"]} == {"Uno", "Dos"}
    assert all(r[str(water.id)] is None for r in data["data"])


@pytest.mark.asyncio
async def test_submissions_paginated(authed_client: AsyncClient, make_form):
    form = _survey(make_form)
    await _seed(authed_client, form, ["A", "B", "C", "D", "E"])

    response = await authed_client.get(f"/submissions/{form.id}/paginated", params={"page": 2, "limit": 2})

    assert response.status_code == 200
    data = response.json()
    assert len(data["data"]) == 2
    assert data["pagination"] == {
        "page": 2,
        "limit": 2,
        "total": 5,
        "total_pages": 3,
        "has_next": True,
        "has_prev": True,
    }

    too_big = await authed_client.get(f"/submissions/{form.id}/paginated", params={"limit": 101})
    assert too_big.status_code == 400


@pytest.mark.asyncio
async def test_submissions_count(authed_client: AsyncClient, make_form):
    form = _survey(make_form)
    await _seed(authed_client, form, ["A", "B", "C"])

    response = await authed_client.get(f"/submissions/{form.id}/count")

    assert response.json() == {"form_id": str(form.id), "count": 3}


@pytest.mark.asyncio
async def test_submission_detail(authed_client: AsyncClient, make_form):
    form = _survey(make_form)
    [submission_id] = await _seed(authed_client, form, ["Santa Rosa"])

    response = await authed_client.get(f"/submissions/{form.id}/{submission_id}")

    assert response.status_code == 200
    data = response.json()
    assert data["form"]["id"] == str(form.id)
    assert data["submission"]["id"] == submission_id
    assert [(a["question_title"], a["value"]) for a in data["answers"]] == [
        ("Comunidad", "Santa Rosa"),
        ("Familias", 0),
    ]

    missing = await authed_client.get(f"/submissions/{form.id}/{uuid.uuid4()}")
    assert missing.status_code == 404
    assert missing.json() == {"error": "Submission not found"}


@pytest.mark.asyncio
async def test_deactivated_form_submissions_stay_reviewable(authed_client: AsyncClient, make_form):
    form = _survey(make_form)
    await _seed(authed_client, form, ["A"])
    await authed_client.delete(f"/forms/{form.id}")

    response = await authed_client.get(f"/submissions/{form.id}/count")

    assert response.status_code == 200
    assert response.json()["count"] == 1


@pytest.mark.asyncio
async def test_update_submission_answers(authed_client: AsyncClient, make_form):
    form = _survey(make_form)
    [submission_id] = await _seed(authed_client, form, ["Vieja"])
    name, families, water, _ = _questions(form)

    response = await authed_client.put(
        f"/submissions/{form.id}/{submission_id}",
        json={
            "answers": _answers({str(name.id): "Nueva", str(water.id): "Sí", str(families.id): None}),
        },
    )

    assert response.status_code == 200
    detail = (await authed_client.get(f"/submissions/{form.id}/{submission_id}")).json()
    assert [(a["question_title"], a["value"]) for a in detail["answers"]] == [
        ("Comunidad", "Nueva"),
        ("¿Agua potable?", "Sí"),
    ]


@pytest.mark.asyncio
async def test_update_clears_only_empty_answerable_questions(authed_client: AsyncClient, db, make_form):
    form = _survey(make_form)
    [submission_id] = await _seed(authed_client, form, ["Vieja"])
    name, families, _, header = _questions(form)

    response = await authed_client.put(
        f"/submissions/{form.id}/{submission_id}",
        json={"answers": _answers({str(families.id): "", str(header.id): ""})},
    )

    assert response.status_code == 200
    remaining = {a.question_id for a in db.query(SubmissionAnswer).all()}
    assert remaining == {name.id}


@pytest.mark.asyncio
async def test_update_submission_rejects_invalid_values(authed_client: AsyncClient, make_form):
    form = _survey(make_form)
    [submission_id] = await _seed(authed_client, form, ["Vieja"])
    name, families, _, _ = _questions(form)

    response = await authed_client.put(
        f"/submissions/{form.id}/{submission_id}",
        json={"answers": _answers({str(families.id): -1})},
    )
    cleared_required = await authed_client.put(
        f"/submissions/{form.id}/{submission_id}",
        json={"answers": _answers({str(name.id): ""})},
    )

    assert response.status_code == 400
    assert cleared_required.status_code == 400
    assert cleared_required.json()["error"] == "Missing required answer: Comunidad"


@pytest.mark.asyncio
async def test_delete_submission_requires_permission(
    authed_client: AsyncClient, client: AsyncClient, db, admin_user, editor_user, make_form
):
    form = _survey(make_form)
    [submission_id] = await _seed(authed_client, form, ["A"])
    section_permission_service.replace_permissions(
        db, editor_user, [SectionKey.COMUNIDADES_FORMULARIOS.value], actor_user_id=admin_user.id
    )

    denied = await client.delete(f"/submissions/{form.id}/{submission_id}", headers=_bearer(editor_user))
    assert denied.status_code == 403

    response = await authed_client.delete(f"/submissions/{form.id}/{submission_id}")
    assert response.status_code == 200
    assert response.json() == {"deleted": True, "id": submission_id}
    assert db.query(SubmissionAnswer).count() == 0


@pytest.mark.asyncio
async def test_review_requires_forms_section(
    authed_client: AsyncClient, client: AsyncClient, db, admin_user, viewer_user, make_form
):
    form = _survey(make_form)
    await _seed(authed_client, form, ["A"])
    headers = _bearer(viewer_user)

    denied = await client.get(f"/submissions/{form.id}", headers=headers)
    assert denied.status_code == 403
    assert denied.json()["error"] == "No access to section 'comunidades-formularios'"

    section_permission_service.replace_permissions(
        db, viewer_user, [SectionKey.COMUNIDADES_FORMULARIOS.value], actor_user_id=admin_user.id
    )
    assert (await client.get(f"/submissions/{form.id}", headers=headers)).status_code == 200
