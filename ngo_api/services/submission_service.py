"""Submission service: answer validation, storage, tables, and edits."""

import logging
import math
import re
import uuid
from datetime import date, datetime, timezone
from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Session

from ngo_api.core.pagination import PaginationParams, pagination_meta
from ngo_api.db.enums import (
    DISPLAY_ONLY_TYPES,
    MULTI_CHOICE_TYPES,
    SINGLE_CHOICE_TYPES,
    FormSubmissionStatus,
    QuestionTypeCode,
)
from ngo_api.db.models import FormSubmission, FormTemplate, Question, SubmissionAnswer, User
from ngo_api.services import extras_service, form_service
from ngo_api.services.extras_service import ProjectionResult

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
PHONE_PATTERN = re.compile(r"^\+?[0-9()\-\s]{7,20}$")
TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d(:[0-5]\d)?$")
YES_NO_VALUES = {"Sí", "Si", "No"}
DEFAULT_SCALE_MIN = 1
DEFAULT_SCALE_MAX = 5


# =============================================================================
# Answer validation
# =============================================================================

def unwrap_answer(raw: Any) -> Any:
    """Accept either the stored envelope {"value": x} or a bare x."""
    if isinstance(raw, dict) and set(raw.keys()) == {"value"}:
        return raw["value"]
    return raw


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or value == [] or value == {}


def _allowed_options(question: Question) -> set[str]:
    if question.options:
        return {opt.value for opt in question.options}
    # Templates built before the options table keep choices in config
    allowed: set[str] = set()
    for opt in (question.config or {}).get("options") or []:
        if isinstance(opt, dict):
            allowed.add(str(opt.get("value") or opt.get("text") or ""))
        else:
            allowed.add(str(opt))
    allowed.discard("")
    return allowed


def _as_number(question: Question, value: Any) -> float | int:
    if isinstance(value, bool):
        raise ValueError(f"Question '{question.title}' must be a number")
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value) if any(c in value for c in ".eE") else int(value)
        except ValueError:
            raise ValueError(f"Question '{question.title}' must be a number")
    else:
        raise ValueError(f"Question '{question.title}' must be a number")
    if isinstance(number, float) and not math.isfinite(number):
        raise ValueError(f"Question '{question.title}' must be a number")
    return number


def _require_str(question: Question, value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError(f"Question '{question.title}' must be a string")
    return value


def validate_answer_value(question: Question, value: Any) -> Any:
    """
    Check one non-empty value against its question type; return the value to store.

    Raises:
        ValueError: Value does not fit the question type or config
    """
    code = question.question_type.code
    config = question.config or {}

    if code in (QuestionTypeCode.TEXT.value, QuestionTypeCode.PARAGRAPH_TEXT.value):
        text = _require_str(question, value)
        max_length = config.get("maxLength")
        if max_length is not None and len(text) > int(max_length):
            raise ValueError(f"Question '{question.title}' must be at most {max_length} characters")
        return text

    if code == QuestionTypeCode.NUMBER.value:
        number = _as_number(question, value)
        if config.get("min") is not None and number < config["min"]:
            raise ValueError(f"Question '{question.title}' must be at least {config['min']}")
        if config.get("max") is not None and number > config["max"]:
            raise ValueError(f"Question '{question.title}' must be at most {config['max']}")
        return number

    if code == QuestionTypeCode.EMAIL.value:
        if not EMAIL_PATTERN.match(_require_str(question, value).strip()):
            raise ValueError(f"Question '{question.title}' must be a valid email")
        return value.strip()

    if code == QuestionTypeCode.PHONE.value:
        if not PHONE_PATTERN.match(_require_str(question, value).strip()):
            raise ValueError(f"Question '{question.title}' must be a valid phone number")
        return value.strip()

    if code == QuestionTypeCode.URL.value:
        url = _require_str(question, value).strip()
        if not url.startswith(("http://", "https://")):
            raise ValueError(f"Question '{question.title}' must be a valid URL")
        return url

    if code == QuestionTypeCode.DATE.value:
        try:
            date.fromisoformat(_require_str(question, value))
        except ValueError:
            raise ValueError(f"Question '{question.title}' must be a date (YYYY-MM-DD)")
        return value

    if code == QuestionTypeCode.TIME.value:
        if not TIME_PATTERN.match(_require_str(question, value)):
            raise ValueError(f"Question '{question.title}' must be a time (HH:MM)")
        return value

    if code in {t.value for t in SINGLE_CHOICE_TYPES}:
        choice = _require_str(question, value)
        allowed = _allowed_options(question)
        if allowed and choice not in allowed:
            raise ValueError(f"Invalid option for '{question.title}'")
        return choice

    if code in {t.value for t in MULTI_CHOICE_TYPES}:
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ValueError(f"Question '{question.title}' must be a list of strings")
        allowed = _allowed_options(question)
        if allowed and any(v not in allowed for v in value):
            raise ValueError(f"Invalid option for '{question.title}'")
        return value

    if code == QuestionTypeCode.YES_NO.value:
        if isinstance(value, bool) or value in YES_NO_VALUES:
            return value
        raise ValueError(f"Question '{question.title}' must be yes or no")

    if code in (QuestionTypeCode.LINEAR_SCALE.value, QuestionTypeCode.RATING.value):
        number = _as_number(question, value)
        if int(number) != number:
            raise ValueError(f"Question '{question.title}' must be a whole number")
        low = DEFAULT_SCALE_MIN if code == QuestionTypeCode.RATING.value else config.get("min", DEFAULT_SCALE_MIN)
        high = config.get("max", DEFAULT_SCALE_MAX)
        if not low <= number <= high:
            raise ValueError(f"Question '{question.title}' must be between {low} and {high}")
        return int(number)

    if code == QuestionTypeCode.GRID.value:
        if not isinstance(value, dict):
            raise ValueError(f"Question '{question.title}' must be an object of row → column")
        rows = {r.get("text") for r in config.get("rows") or [] if isinstance(r, dict)}
        columns = {c.get("text") for c in config.get("columns") or [] if isinstance(c, dict)}
        for row, column in value.items():
            if rows and row not in rows:
                raise ValueError(f"Unknown row '{row}' for '{question.title}'")
            if columns and column not in columns:
                raise ValueError(f"Unknown column '{column}' for '{question.title}'")
        return value

    if code == QuestionTypeCode.FILE_UPLOAD.value:
        if isinstance(value, str) or (
            isinstance(value, list) and all(isinstance(v, str) for v in value)
        ):
            return value
        raise ValueError(f"Question '{question.title}' must reference uploaded files")

    raise ValueError(f"Unsupported question type: {code}")


def validate_answers(
    form: FormTemplate, answers: list[dict[str, Any]], partial: bool = False
) -> list[tuple[Question, Any]]:
    """
    Validate answers against the template.

    answers: [{"question_id": UUID|str, "answer_value": envelope or bare value}]
    partial: skip the missing-required check (edits of an existing submission).

    Raises:
        ValueError: Unknown/duplicate question, missing required answer, bad value
    """
    questions = {q.id: q for q in form.questions}
    seen: set[uuid.UUID] = set()
    validated: list[tuple[Question, Any]] = []

    for answer in answers:
        try:
            question_id = uuid.UUID(str(answer.get("question_id")))
        except ValueError:
            raise ValueError(f"Invalid question id: {answer.get('question_id')}")
        question = questions.get(question_id)
        if question is None:
            raise ValueError(f"Unknown question: {question_id}")
        if question_id in seen:
            raise ValueError(f"Duplicate answer for question: {question_id}")
        seen.add(question_id)

        value = unwrap_answer(answer.get("answer_value"))
        if question.question_type.code in {t.value for t in DISPLAY_ONLY_TYPES}:
            if not _is_empty(value):
                raise ValueError(f"Question '{question.title}' does not accept answers")
            continue
        if _is_empty(value):
            if question.is_required:
                raise ValueError(f"Missing required answer: {question.title}")
            continue
        validated.append((question, validate_answer_value(question, value)))

    if not partial:
        for question in questions.values():
            if question.is_required and question.id not in seen:
                raise ValueError(f"Missing required answer: {question.title}")
    return validated


# =============================================================================
# Create
# =============================================================================

def create_submission(
    db: Session,
    form: FormTemplate,
    user_id: uuid.UUID | None,
    answers: list[dict[str, Any]],
    time_spent_seconds: int | None = None,
) -> tuple[FormSubmission, list[SubmissionAnswer], ProjectionResult]:
    """
    Store a submission with its answers, then project extras, in one transaction.

    A projection failure is reported in the result; the submission is still committed.

    Raises:
        ValueError: Answers do not match the template
    """
    validated = validate_answers(form, answers)

    submission = FormSubmission(
        form_template_id=form.id,
        section_location=form.section_location,
        user_id=user_id,
        status=FormSubmissionStatus.COMPLETED.value,
        time_spent_seconds=time_spent_seconds,
    )
    db.add(submission)
    db.flush()

    answer_rows = [
        SubmissionAnswer(
            submission_id=submission.id,
            question_id=question.id,
            answer_value={"value": value},
        )
        for question, value in validated
    ]
    db.add_all(answer_rows)
    db.flush()

    projection = extras_service.project_submission_extras(
        db,
        form.id,
        submission.id,
        [{"question_id": str(row.question_id), "answer_value": row.answer_value} for row in answer_rows],
    )
    db.commit()
    db.refresh(submission)
    for row in answer_rows:
        db.refresh(row)

    logger.info(
        "Submission created",
        extra={
            "form_template_id": str(form.id),
            "submission_id": str(submission.id),
            "answers": len(answer_rows),
            "extras_success": projection.success,
        },
    )
    return submission, answer_rows, projection


# =============================================================================
# Read
# =============================================================================

def get_submission(
    db: Session, form_id: uuid.UUID, submission_id: uuid.UUID
) -> FormSubmission | None:
    return (
        db.query(FormSubmission)
        .filter(FormSubmission.id == submission_id, FormSubmission.form_template_id == form_id)
        .first()
    )


def get_submission_by_id(db: Session, submission_id: uuid.UUID) -> FormSubmission | None:
    return db.query(FormSubmission).filter(FormSubmission.id == submission_id).first()


def count_submissions(db: Session, form_id: uuid.UUID) -> int:
    return form_service.count_submissions(db, form_id)


def table_columns(form: FormTemplate) -> list[Question]:
    display_only = {t.value for t in DISPLAY_ONLY_TYPES}
    return [
        q for q in form_service.ordered_questions(form)
        if q.question_type.code not in display_only
    ]


def build_table(
    db: Session,
    form: FormTemplate,
    page: int | None = None,
    limit: int | None = None,
) -> dict[str, Any]:
    """
    Table view: one row per submission (newest first), one key per question id.

    Without page/limit every submission is returned.
    """
    columns = table_columns(form)
    total = count_submissions(db, form.id)

    query = (
        db.query(FormSubmission, User.name, User.email)
        .outerjoin(User, User.id == FormSubmission.user_id)
        .filter(FormSubmission.form_template_id == form.id)
        .order_by(FormSubmission.submitted_at.desc(), FormSubmission.id)
    )
    if page is not None and limit is not None:
        query = query.offset((page - 1) * limit).limit(limit)
    rows = query.all()

    submission_ids = [submission.id for submission, _, _ in rows]
    answers_by_submission: dict[uuid.UUID, dict[str, Any]] = {sid: {} for sid in submission_ids}
    if submission_ids:
        for answer in (
            db.query(SubmissionAnswer)
            .filter(SubmissionAnswer.submission_id.in_(submission_ids))
            .all()
        ):
            answers_by_submission[answer.submission_id][str(answer.question_id)] = unwrap_answer(
                answer.answer_value
            )

    data = []
    for submission, user_name, user_email in rows:
        record: dict[str, Any] = {
            "submission_id": str(submission.id),
            "submitted_at": submission.submitted_at.isoformat() if submission.submitted_at else None,
            "updated_at": submission.updated_at.isoformat() if submission.updated_at else None,
            "user_name": user_name,
            "user_email": user_email,
        }
        answered = answers_by_submission.get(submission.id, {})
        for question in columns:
            record[str(question.id)] = answered.get(str(question.id))
        data.append(record)

    return {
        "form_id": form.id,
        "form_name": form.name,
        "section_location": form.section_location,
        "columns": [
            {
                "id": q.id,
                "title": q.title,
                "type": q.question_type.code,
                "order_index": q.order_index,
            }
            for q in columns
        ],
        "data": data,
        "total": total,
    }


def build_paginated_table(
    db: Session, form: FormTemplate, pagination: PaginationParams
) -> dict[str, Any]:
    table = build_table(db, form, page=pagination.page, limit=pagination.limit)
    table["pagination"] = pagination_meta(pagination, table["total"])
    return table


def build_detail(db: Session, form: FormTemplate, submission: FormSubmission) -> dict[str, Any]:
    answers = {a.question_id: a for a in submission.answers}
    detail_answers = []
    for question in form_service.ordered_questions(form):
        answer = answers.get(question.id)
        if answer is None:
            continue
        detail_answers.append(
            {
                "question_id": question.id,
                "question_title": question.title,
                "question_type": question.question_type.code,
                "order_index": question.order_index,
                "value": unwrap_answer(answer.answer_value),
            }
        )
    user = submission.user
    return {
        "form": {
            "id": str(form.id),
            "name": form.name,
            "slug": form.slug,
            "section_location": form.section_location,
            "version": form.version,
        },
        "submission": submission,
        "user_name": user.name if user else None,
        "user_email": user.email if user else None,
        "answers": detail_answers,
    }


# =============================================================================
# Update / delete
# =============================================================================

def update_submission_answers(
    db: Session,
    form: FormTemplate,
    submission: FormSubmission,
    answers: list[dict[str, Any]],
) -> FormSubmission:
    """
    Update answers by question id (insert when the question had no answer yet).

    Clearing an optional answer removes its row.

    Raises:
        ValueError: Answers do not match the template
    """
    validated = {q.id: value for q, value in validate_answers(form, answers, partial=True)}
    questions = {q.id: q for q in form.questions}
    display_only = {t.value for t in DISPLAY_ONLY_TYPES}
    cleared = set()
    for answer in answers:
        if not _is_empty(unwrap_answer(answer.get("answer_value"))):
            continue
        question_id = uuid.UUID(str(answer.get("question_id")))
        if questions[question_id].question_type.code not in display_only:
            cleared.add(question_id)

    existing = {a.question_id: a for a in submission.answers}
    for question_id, value in validated.items():
        row = existing.get(question_id)
        if row is None:
            submission.answers.append(
                SubmissionAnswer(question_id=question_id, answer_value={"value": value})
            )
        else:
            row.answer_value = {"value": value}
    for question_id in cleared:
        row = existing.get(question_id)
        if row is not None:
            submission.answers.remove(row)

    submission.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(submission)
    logger.info("Submission updated", extra={"submission_id": str(submission.id)})
    return submission


def delete_submission(db: Session, submission: FormSubmission) -> None:
    db.delete(submission)
    db.commit()
    logger.info("Submission deleted", extra={"submission_id": str(submission.id)})


def count_by_section(db: Session) -> dict[str, int]:
    rows = (
        db.query(FormSubmission.section_location, func.count(FormSubmission.id))
        .group_by(FormSubmission.section_location)
        .all()
    )
    return {section: int(count) for section, count in rows}
