"""Tests for the form → extras mapping registry."""
import uuid

import pytest

from ngo_api.core.extras_mapping import (
    BOARD_FORM_ID,
    VOLUNTEER_END_TIME_QUESTION_ID,
    VOLUNTEER_FORM_ID,
    VOLUNTEER_START_TIME_QUESTION_ID,
    ExtrasMapping,
    FieldMapping,
    build_extras_values,
    calculate_hours_difference,
    get_answer_value,
    get_extras_mapping,
)
from ngo_api.db.enums import ExtrasKind, FormSection


def _answer(question_id: str, value) -> dict:
    return {"question_id": question_id, "answer_value": {"value": value}}


@pytest.mark.parametrize(
    "start,end,expected",
    [
        ("08:00", "12:30", 4.5),
        ("07:15", "08:00", 0.75),
        ("13:00", "09:00", 0.1),
        ("10:00", "10:00", 0.1),
        ("00:00", "25:00", 24.0),
        ("08:00:00", "12:30:00", 4.5),
        ("08:00", "09:15:59", 1.25),
    ],
)
def test_hours_difference_is_clamped(start, end, expected):
    assert calculate_hours_difference(start, end) == pytest.approx(expected)


@pytest.mark.parametrize("start,end", [(None, "10:00"), ("08:00", None), ("", ""), (None, None)])
def test_hours_difference_defaults_to_one_hour_when_time_missing(start, end):
    assert calculate_hours_difference(start, end) == 1


def test_get_answer_value_reads_envelope():
    answers = [_answer("a", 3), {"question_id": "b", "answer_value": "bare"}]
    assert get_answer_value(answers, "a") == 3
    assert get_answer_value(answers, "b") is None
    assert get_answer_value(answers, "missing") is None


def test_registry_lookup_accepts_uuid_and_str():
    assert get_extras_mapping(VOLUNTEER_FORM_ID).extras_table == ExtrasKind.VOLUNTEER
    assert get_extras_mapping(uuid.UUID(BOARD_FORM_ID)).extras_table == ExtrasKind.BOARD
    assert get_extras_mapping(str(uuid.uuid4())) is None


def test_volunteer_defaults_compute_hours_from_times():
    mapping = get_extras_mapping(VOLUNTEER_FORM_ID)
    values = build_extras_values(
        mapping,
        [
            _answer(VOLUNTEER_START_TIME_QUESTION_ID, "08:00"),
            _answer(VOLUNTEER_END_TIME_QUESTION_ID, "11:00"),
        ],
    )
    assert values == {"total_hours": 3.0, "receives_benefit": False, "agricultural_pounds": 0}


def test_volunteer_defaults_without_times():
    values = build_extras_values(get_extras_mapping(VOLUNTEER_FORM_ID), [])
    assert values["total_hours"] == 1


def test_board_defaults_follow_up_not_started():
    values = build_extras_values(get_extras_mapping(BOARD_FORM_ID), [])
    assert values == {"follow_up_given": "No iniciado"}


def test_mapped_answers_take_precedence_over_defaults():
    mapping = ExtrasMapping(
        form_template_id="x",
        section=FormSection.VOLUNTARIADO,
        extras_table=ExtrasKind.VOLUNTEER,
        field_mappings=(
            FieldMapping("q-hours", "total_hours", transform=float),
            FieldMapping("q-group", "group_number"),
        ),
        default_values={"total_hours": 1, "receives_benefit": False},
    )
    values = build_extras_values(mapping, [_answer("q-hours", "2.5")])

    assert values == {"total_hours": 2.5, "receives_benefit": False}
