"""Statistics service: per-form question aggregates and per-section counts."""

import uuid
from collections import Counter
from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Session

from ngo_api.core.sections import get_section_views
from ngo_api.db.enums import (
    MULTI_CHOICE_TYPES,
    SINGLE_CHOICE_TYPES,
    ExtrasKind,
    FormSection,
    QuestionTypeCode,
)
from ngo_api.db.models import FormSubmission, FormTemplate, Question, SubmissionAnswer
from ngo_api.services import extras_service, form_service, submission_service

NUMERIC_TYPES = {
    QuestionTypeCode.NUMBER.value,
    QuestionTypeCode.LINEAR_SCALE.value,
    QuestionTypeCode.RATING.value,
}
CHOICE_TYPES = {t.value for t in SINGLE_CHOICE_TYPES} | {QuestionTypeCode.YES_NO.value}
MULTI_TYPES = {t.value for t in MULTI_CHOICE_TYPES}


def _numeric(values: list[Any]) -> list[float]:
    numbers = []
    for value in values:
        if isinstance(value, bool):
            continue
        try:
            numbers.append(float(value))
        except (TypeError, ValueError):
            continue
    return numbers


def _choice_key(item: Any) -> str:
    if isinstance(item, bool):
        return "Sí" if item else "No"
    return str(item)


def _question_stats(question: Question, values: list[Any]) -> dict[str, Any]:
    code = question.question_type.code
    stats: dict[str, Any] = {
        "question_id": str(question.id),
        "title": question.title,
        "type": code,
        "answered": len(values),
    }

    if code in CHOICE_TYPES or code in MULTI_TYPES:
        counts: Counter = Counter()
        for option in question.options:
            counts[option.value] = 0
        for value in values:
            items = value if isinstance(value, list) else [value]
            for item in items:
                counts[_choice_key(item)] += 1
        stats["options"] = dict(counts)

    elif code in NUMERIC_TYPES:
        numbers = _numeric(values)
        stats["sum"] = round(sum(numbers), 2) if numbers else 0
        stats["avg"] = round(sum(numbers) / len(numbers), 2) if numbers else None
        stats["min"] = min(numbers) if numbers else None
        stats["max"] = max(numbers) if numbers else None

    return stats


def form_statistics(db: Session, form: FormTemplate) -> dict[str, Any]:
    """Per-question aggregates plus the extras summary of the form's section."""
    columns = submission_service.table_columns(form)
    values_by_question: dict[uuid.UUID, list[Any]] = {q.id: [] for q in columns}

    answers = (
        db.query(SubmissionAnswer.question_id, SubmissionAnswer.answer_value)
        .join(FormSubmission, FormSubmission.id == SubmissionAnswer.submission_id)
        .filter(FormSubmission.form_template_id == form.id)
        .all()
    )
    for question_id, answer_value in answers:
        if question_id in values_by_question:
            values_by_question[question_id].append(submission_service.unwrap_answer(answer_value))

    extras_summary = None
    views = get_section_views(form.section_location)
    if views is not None and views.extras == ExtrasKind.VOLUNTEER:
        extras_summary = extras_service.volunteer_stats(db, form_id=form.id)
    elif views is not None and views.extras == ExtrasKind.BOARD:
        extras_summary = extras_service.board_stats(db, form_id=form.id)

    return {
        "form_id": str(form.id),
        "form_name": form.name,
        "section_location": form.section_location,
        "total_submissions": form_service.count_submissions(db, form.id),
        "questions": [_question_stats(q, values_by_question[q.id]) for q in columns],
        "extras": extras_summary,
    }


def section_statistics(db: Session) -> list[dict[str, Any]]:
    """Active form and submission counts for every form section."""
    form_counts = dict(
        db.query(FormTemplate.section_location, func.count(FormTemplate.id))
        .filter(FormTemplate.is_active.is_(True))
        .group_by(FormTemplate.section_location)
        .all()
    )
    submission_counts = submission_service.count_by_section(db)
    return [
        {
            "section": section.value,
            "forms": int(form_counts.get(section.value, 0)),
            "submissions": int(submission_counts.get(section.value, 0)),
        }
        for section in FormSection
    ]
