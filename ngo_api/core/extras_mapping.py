"""
Declarative form → extras mapping registry.

A submission to a registered form template is projected into one extras row
(volunteer_extras or consolidated_board_extras). Mapped answers are copied
first; fields still unset are filled from default_values, where a callable
default receives the submitted answers.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Sequence

from ngo_api.db.enums import ExtrasKind, FollowUpStatus, FormSection


# Answers as submitted: [{"question_id": str, "answer_value": {"value": ...}}]
AnswerList = Sequence[Mapping[str, Any]]
DefaultValue = Any | Callable[[AnswerList], Any]

VOLUNTEER_FORM_ID = "f036d9ff-e51a-46ca-8744-6f8187966f5b"
VOLUNTEER_START_TIME_QUESTION_ID = "4e073bf3-ce31-4455-87eb-d9160c927479"
VOLUNTEER_END_TIME_QUESTION_ID = "d3150b11-4e55-4aa4-baea-134bfe2c64c8"
BOARD_FORM_ID = "5bd783b6-e52c-48de-ab3b-9e7ae8538bd2"

MIN_HOURS = 0.1
MAX_HOURS = 24.0
MISSING_TIME_HOURS = 1


@dataclass(frozen=True)
class FieldMapping:
    question_id: str
    extra_field: str
    transform: Callable[[Any], Any] | None = None


@dataclass(frozen=True)
class ExtrasMapping:
    form_template_id: str
    section: FormSection
    extras_table: ExtrasKind
    field_mappings: tuple[FieldMapping, ...] = ()
    default_values: Mapping[str, DefaultValue] = field(default_factory=dict)


def get_answer_value(answers: AnswerList, question_id: str) -> Any:
    """Return the value inside the answer envelope for question_id, or None."""
    for answer in answers:
        if str(answer.get("question_id")) != question_id:
            continue
        envelope = answer.get("answer_value")
        if isinstance(envelope, Mapping):
            return envelope.get("value")
        return None
    return None


def _minutes(clock: str) -> int:
    """Minutes since midnight for HH:MM or HH:MM:SS; seconds are ignored."""
    parts = str(clock).strip().split(":")
    return int(parts[0]) * 60 + int(parts[1] if len(parts) > 1 else 0)


def calculate_hours_difference(start_time: str | None, end_time: str | None) -> float:
    """
    Hours between two HH:MM or HH:MM:SS times, clamped to [0.1, 24].

    Returns 1 when either time is missing.
    """
    if not start_time or not end_time:
        return MISSING_TIME_HOURS
    diff_minutes = _minutes(end_time) - _minutes(start_time)
    hours = diff_minutes / 60
    return max(MIN_HOURS, min(MAX_HOURS, hours))


def _volunteer_total_hours(answers: AnswerList) -> float:
    start = get_answer_value(answers, VOLUNTEER_START_TIME_QUESTION_ID)
    end = get_answer_value(answers, VOLUNTEER_END_TIME_QUESTION_ID)
    return calculate_hours_difference(start, end)


FORM_EXTRAS_MAPPINGS: dict[str, ExtrasMapping] = {
    VOLUNTEER_FORM_ID: ExtrasMapping(
        form_template_id=VOLUNTEER_FORM_ID,
        section=FormSection.VOLUNTARIADO,
        extras_table=ExtrasKind.VOLUNTEER,
        default_values={
            "total_hours": _volunteer_total_hours,
            "receives_benefit": False,
            "agricultural_pounds": 0,
        },
    ),
    BOARD_FORM_ID: ExtrasMapping(
        form_template_id=BOARD_FORM_ID,
        section=FormSection.AUDITORIAS,
        extras_table=ExtrasKind.BOARD,
        default_values={
            "follow_up_given": FollowUpStatus.NOT_STARTED.value,
        },
    ),
}


def get_extras_mapping(form_template_id: str) -> ExtrasMapping | None:
    return FORM_EXTRAS_MAPPINGS.get(str(form_template_id))


def build_extras_values(mapping: ExtrasMapping, answers: AnswerList) -> dict[str, Any]:
    """Resolve mapped answers, then defaults for fields still unset."""
    values: dict[str, Any] = {}
    answered = {str(a.get("question_id")) for a in answers}
    for fm in mapping.field_mappings:
        if fm.question_id not in answered:
            continue
        value = get_answer_value(answers, fm.question_id)
        if fm.transform is not None:
            value = fm.transform(value)
        values[fm.extra_field] = value

    for name, default in mapping.default_values.items():
        if name in values:
            continue
        values[name] = default(answers) if callable(default) else default
    return values
