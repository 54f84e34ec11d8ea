"""Tests for extras projection on submit and the volunteer/board extras endpoints."""
import uuid
from datetime import datetime, timezone

import pytest
from httpx import AsyncClient

from ngo_api.core import extras_mapping
from ngo_api.core.extras_mapping import (
    BOARD_FORM_ID,
    VOLUNTEER_END_TIME_QUESTION_ID,
    VOLUNTEER_FORM_ID,
    VOLUNTEER_START_TIME_QUESTION_ID,
    ExtrasMapping,
)
from ngo_api.db.enums import ExtrasKind, FormSection
from ngo_api.db.models import FormSubmission, VolunteerExtras


def _volunteer_form(make_form):
    return make_form(
        section_location="voluntariado",
        form_id=uuid.UUID(VOLUNTEER_FORM_ID),
        name="Registro de Voluntariado",
        questions=[
            {"type": "TIME", "title": "Hora de inicio", "id": uuid.UUID(VOLUNTEER_START_TIME_QUESTION_ID)},
            {"type": "TIME", "title": "Hora de fin", "id": uuid.UUID(VOLUNTEER_END_TIME_QUESTION_ID)},
        ],
    )


def _board_form(make_form):
    return make_form(
        section_location="auditorias",
        form_id=uuid.UUID(BOARD_FORM_ID),
        name="Auditoría Comunitaria",
        questions=[{"type": "TEXT", "title": "Comunidad auditada"}],
    )


async def _submit(client: AsyncClient, form, answers: dict) -> dict:
    response = await client.post(
        "/submissions",
        json={
            "form_template_id": str(form.id),
            "answers": [
                {"question_id": str(qid), "answer_value": {"value": value}}
                for qid, value in answers.items()
            ],
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


# =============================================================================
# Projection on submit
# =============================================================================

@pytest.mark.asyncio
async def test_volunteer_submission_projects_hours(authed_client: AsyncClient, db, make_form):
    form = _volunteer_form(make_form)

    created = await _submit(
        authed_client,
        form,
        {VOLUNTEER_START_TIME_QUESTION_ID: "08:00", VOLUNTEER_END_TIME_QUESTION_ID: "12:30"},
    )

    assert created["extras"] == {
        "success": True,
        "created": True,
        "extras_table": "volunteer_extras",
        "error": None,
    }
    submission_id = created["submission"]["id"]
    response = await authed_client.get(f"/volunteer-extras/{submission_id}")
    assert response.status_code == 200
    data = response.json()
    assert data["total_hours"] == 4.5
    assert data["receives_benefit"] is False
    assert data["agricultural_pounds"] == 0


@pytest.mark.asyncio
async def test_volunteer_submission_accepts_times_with_seconds(authed_client: AsyncClient, db, make_form):
    form = _volunteer_form(make_form)

    created = await _submit(
        authed_client,
        form,
        {VOLUNTEER_START_TIME_QUESTION_ID: "08:00:00", VOLUNTEER_END_TIME_QUESTION_ID: "12:30:00"},
    )

    assert created["extras"]["success"] is True
    assert created["extras"]["error"] is None
    row = db.query(VolunteerExtras).one()
    assert str(row.submission_id) == created["submission"]["id"]
    assert row.total_hours == 4.5


@pytest.mark.asyncio
async def test_volunteer_submission_without_times_defaults_to_one_hour(authed_client: AsyncClient, make_form):
    form = _volunteer_form(make_form)

    created = await _submit(authed_client, form, {})

    response = await authed_client.get(f"/volunteer-extras/{created['submission']['id']}")
    assert response.json()["total_hours"] == 1


@pytest.mark.asyncio
async def test_board_submission_defaults_follow_up(authed_client: AsyncClient, make_form):
    form = _board_form(make_form)
    question = form.questions[0]

    created = await _submit(authed_client, form, {question.id: "San Juan"})

    assert created["extras"]["extras_table"] == "consolidated_board_extras"
    response = await authed_client.get(f"/board-extras/{created['submission']['id']}")
    assert response.status_code == 200
    assert response.json()["follow_up_given"] == "No iniciado"
    assert response.json()["traffic_light"] is None


@pytest.mark.asyncio
async def test_unmapped_form_reports_success_without_table(authed_client: AsyncClient, make_form):
    form = make_form(questions=[{"type": "NUMBER", "title": "Familias"}])

    created = await _submit(authed_client, form, {form.questions[0].id: 12})

    assert created["extras"] == {"success": True, "created": False, "extras_table": None, "error": None}


@pytest.mark.asyncio
async def test_projection_failure_keeps_submission(authed_client: AsyncClient, db, make_form, monkeypatch):
    form = make_form(section_location="voluntariado", questions=[{"type": "TEXT", "title": "Nombre"}])
    monkeypatch.setitem(
        extras_mapping.FORM_EXTRAS_MAPPINGS,
        str(form.id),
        ExtrasMapping(
            form_template_id=str(form.id),
            section=FormSection.VOLUNTARIADO,
            extras_table=ExtrasKind.VOLUNTEER,
            default_values={"total_hours": 2, "hours_typo": 1},
        ),
    )

    created = await _submit(authed_client, form, {form.questions[0].id: "Ana"})

    assert created["extras"]["success"] is False
    assert created["extras"]["extras_table"] == "volunteer_extras"
    assert "hours_typo" in created["extras"]["error"]
    submission_id = uuid.UUID(created["submission"]["id"])
    assert db.query(FormSubmission).filter(FormSubmission.id == submission_id).count() == 1
    assert db.query(VolunteerExtras).count() == 0


# =============================================================================
# Volunteer extras endpoints
# =============================================================================

@pytest.mark.asyncio
async def test_volunteer_upsert_keeps_one_row(authed_client: AsyncClient, db, make_form):
    form = _volunteer_form(make_form)
    created = await _submit(authed_client, form, {})
    submission_id = created["submission"]["id"]

    first = await authed_client.post(
        "/volunteer-extras",
        json={"submission_id": submission_id, "total_hours": 3, "receives_benefit": True, "viveres_bags": 2},
    )
    assert first.status_code == 200
    second = await authed_client.post(
        "/volunteer-extras",
        json={"submission_id": submission_id, "total_hours": 5.5, "group_number": 3},
    )

    assert second.status_code == 200
    assert second.json()["id"] == first.json()["id"]
    assert second.json()["total_hours"] == 5.5
    assert second.json()["group_number"] == 3
    assert db.query(VolunteerExtras).count() == 1


@pytest.mark.parametrize(
    "overrides",
    [{"total_hours": 0}, {"total_hours": 25}, {"group_number": 0}, {"agricultural_pounds": -1}],
)
@pytest.mark.asyncio
async def test_volunteer_upsert_validation(authed_client: AsyncClient, make_form, overrides):
    form = _volunteer_form(make_form)
    created = await _submit(authed_client, form, {})

    response = await authed_client.post(
        "/volunteer-extras",
        json={"submission_id": created["submission"]["id"], "total_hours": 2, **overrides},
    )

    assert response.status_code == 400
    assert response.json()["error"].startswith(next(iter(overrides)))


@pytest.mark.asyncio
async def test_volunteer_upsert_unknown_submission(authed_client: AsyncClient):
    response = await authed_client.post(
        "/volunteer-extras", json={"submission_id": str(uuid.uuid4()), "total_hours": 2}
    )

    assert response.status_code == 404
    assert response.json() == {"error": "Submission not found"}


@pytest.mark.asyncio
async def test_volunteer_upsert_rejects_other_sections(authed_client: AsyncClient, make_form):
    form = make_form(section_location="comunidades", questions=[{"type": "TEXT", "title": "Nombre"}])
    created = await _submit(authed_client, form, {form.questions[0].id: "x"})

    response = await authed_client.post(
        "/volunteer-extras", json={"submission_id": created["submission"]["id"], "total_hours": 2}
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Submission does not belong to a volunteering form"


@pytest.mark.asyncio
async def test_volunteer_extras_not_found(authed_client: AsyncClient):
    response = await authed_client.get(f"/volunteer-extras/{uuid.uuid4()}")

    assert response.status_code == 404
    assert response.json() == {"error": "Volunteer extras not found"}


@pytest.mark.asyncio
async def test_volunteer_stats(authed_client: AsyncClient, make_form):
    form = _volunteer_form(make_form)
    for start, end in (("08:00", "10:00"), ("09:00", "13:00")):
        await _submit(
            authed_client,
            form,
            {VOLUNTEER_START_TIME_QUESTION_ID: start, VOLUNTEER_END_TIME_QUESTION_ID: end},
        )

    response = await authed_client.get("/volunteer-extras/stats")

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    assert data["total_hours"] == 6
    assert data["average_hours"] == 3
    assert data["with_benefit"] == 0


# =============================================================================
# Board extras endpoints
# =============================================================================

@pytest.mark.asyncio
async def test_board_upsert_and_stats(authed_client: AsyncClient, make_form):
    form = _board_form(make_form)
    question = form.questions[0]
    red = await _submit(authed_client, form, {question.id: "A"})
    green = await _submit(authed_client, form, {question.id: "B"})
    await _submit(authed_client, form, {question.id: "C"})

    response = await authed_client.post(
        "/board-extras",
        json={
            "submission_id": red["submission"]["id"],
            "traffic_light": "Rojo",
            "follow_up_given": "En proceso",
            "concluded_result_red_or_no": "No",
            "recommendations": "  ",
            "full_report": "https://example.org/informe.pdf",
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert data["traffic_light"] == "Rojo"
    assert data["recommendations"] is None
    assert data["full_report"] == "https://example.org/informe.pdf"

    await authed_client.post(
        "/board-extras",
        json={"submission_id": green["submission"]["id"], "traffic_light": "Verde", "follow_up_given": "Completado"},
    )

    stats = (await authed_client.get("/board-extras/stats")).json()
    assert stats["total"] == 3
    assert (stats["rojo"], stats["amarillo"], stats["verde"], stats["sin_definir"]) == (1, 0, 1, 1)
    assert stats["seguimiento"] == {"no_iniciado": 1, "en_proceso": 1, "completado": 1, "sin_definir": 0}
    assert stats["concluidos"] == {"si": 0, "no": 1, "sin_definir": 2}

    assert len(stats["por_mes"]) == 6
    current = stats["por_mes"][-1]
    assert current["month"] == datetime.now(timezone.utc).strftime("%Y-%m")
    assert (current["rojo"], current["verde"]) == (1, 1)


@pytest.mark.asyncio
async def test_board_upsert_rejects_invalid_values(authed_client: AsyncClient, make_form):
    form = _board_form(make_form)
    created = await _submit(authed_client, form, {form.questions[0].id: "A"})
    submission_id = created["submission"]["id"]

    bad_light = await authed_client.post(
        "/board-extras", json={"submission_id": submission_id, "traffic_light": "Azul"}
    )
    bad_url = await authed_client.post(
        "/board-extras", json={"submission_id": submission_id, "preliminary_report": "no es url"}
    )

    assert bad_light.status_code == 400
    assert bad_url.status_code == 400


@pytest.mark.asyncio
async def test_board_upsert_rejects_volunteer_submission(authed_client: AsyncClient, make_form):
    created = await _submit(authed_client, _volunteer_form(make_form), {})

    response = await authed_client.post(
        "/board-extras", json={"submission_id": created["submission"]["id"], "traffic_light": "Rojo"}
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Submission does not belong to an audit form"


@pytest.mark.asyncio
async def test_board_extras_not_found(authed_client: AsyncClient):
    response = await authed_client.get(f"/board-extras/{uuid.uuid4()}")

    assert response.status_code == 404
    assert response.json() == {"error": "Board extras not found"}
