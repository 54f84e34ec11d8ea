"""Form service for the form builder: templates, sections, questions, options."""

import logging
import re
import secrets
import unicodedata
import uuid

from sqlalchemy import func
from sqlalchemy.orm import Session

from ngo_api.db.enums import FormSection as FormSectionLocation
from ngo_api.db.models import (
    FormSection,
    FormSubmission,
    FormTemplate,
    Question,
    QuestionOption,
    QuestionType,
    SubmissionAnswer,
)
from ngo_api.schemas.forms import FormCreate, FormSectionWrite, FormUpdate, QuestionWrite

logger = logging.getLogger(__name__)

SLUG_SUFFIX_BYTES = 3
MAX_SLUG_ATTEMPTS = 10


# =============================================================================
# Slugs
# =============================================================================

def slugify(name: str) -> str:
    """
    Build a URL slug: accents stripped, non-alphanumerics removed, spaces → dashes.

    "Auditoría Año 2024" -> "auditoria-ano-2024"
    """
    normalized = unicodedata.normalize("NFKD", name)
    ascii_only = "".join(ch for ch in normalized if not unicodedata.combining(ch))
    cleaned = re.sub(r"[^a-z0-9\s-]", "", ascii_only.lower())
    slug = re.sub(r"[\s-]+", "-", cleaned).strip("-")
    return slug or "formulario"


def generate_unique_slug(db: Session, name: str) -> str:
    base = slugify(name)
    for _ in range(MAX_SLUG_ATTEMPTS):
        candidate = f"{base}-{secrets.token_hex(SLUG_SUFFIX_BYTES)}"
        if not db.query(FormTemplate.id).filter(FormTemplate.slug == candidate).first():
            return candidate
    raise ValueError("Could not generate a unique slug")


# =============================================================================
# Queries
# =============================================================================

def parse_section_location(value: str | None) -> FormSectionLocation | None:
    """
    Raises:
        ValueError: Unknown section location
    """
    if value is None or value == "":
        return None
    if not FormSectionLocation.has_value(value):
        raise ValueError(f"Invalid section_location: {value}")
    return FormSectionLocation(value)


def list_forms(
    db: Session, section_location: FormSectionLocation | None = None
) -> list[tuple[FormTemplate, int]]:
    """Active forms with their submission counts, newest first."""
    counts = (
        db.query(
            FormSubmission.form_template_id.label("form_id"),
            func.count(FormSubmission.id).label("submission_count"),
        )
        .group_by(FormSubmission.form_template_id)
        .subquery()
    )
    query = (
        db.query(FormTemplate, func.coalesce(counts.c.submission_count, 0))
        .outerjoin(counts, counts.c.form_id == FormTemplate.id)
        .filter(FormTemplate.is_active.is_(True))
    )
    if section_location is not None:
        query = query.filter(FormTemplate.section_location == section_location.value)
    rows = query.order_by(FormTemplate.created_at.desc(), FormTemplate.name).all()
    return [(form, int(count)) for form, count in rows]


def count_submissions(db: Session, form_id: uuid.UUID) -> int:
    return (
        db.query(func.count(FormSubmission.id))
        .filter(FormSubmission.form_template_id == form_id)
        .scalar()
        or 0
    )


def get_form(
    db: Session, form_id: uuid.UUID, include_inactive: bool = False
) -> FormTemplate | None:
    query = db.query(FormTemplate).filter(FormTemplate.id == form_id)
    if not include_inactive:
        query = query.filter(FormTemplate.is_active.is_(True))
    return query.first()


def get_public_form_by_slug(db: Session, slug: str) -> FormTemplate | None:
    """Only public, active forms are reachable by slug."""
    return (
        db.query(FormTemplate)
        .filter(
            FormTemplate.slug == slug,
            FormTemplate.is_public.is_(True),
            FormTemplate.is_active.is_(True),
        )
        .first()
    )


# =============================================================================
# Structure
# =============================================================================

def _resolve_question_type(db: Session, data: QuestionWrite) -> QuestionType:
    qtype = None
    if data.question_type_id is not None:
        qtype = db.query(QuestionType).filter(QuestionType.id == data.question_type_id).first()
    elif data.question_type_code:
        qtype = (
            db.query(QuestionType)
            .filter(QuestionType.code == data.question_type_code.upper())
            .first()
        )
    else:
        raise ValueError(f"Question '{data.title}' needs question_type_id or question_type_code")
    if qtype is None:
        raise ValueError(f"Unknown question type for question '{data.title}'")
    return qtype


def _build_options(data: QuestionWrite) -> list[QuestionOption]:
    return [
        QuestionOption(label=opt.label, value=opt.value or opt.label, order_index=idx)
        for idx, opt in enumerate(data.options)
    ]


def _apply_structure(
    db: Session, form: FormTemplate, sections_data: list[FormSectionWrite]
) -> None:
    """
    Make the form's sections/questions match sections_data.

    Rows whose id appears in the payload are updated in place so their answers
    survive; everything else is recreated. Answers to removed questions are deleted.
    """
    existing_sections = {s.id: s for s in form.sections}
    existing_questions = {q.id: q for q in form.questions}

    new_sections: list[FormSection] = []
    new_questions: list[Question] = []
    question_order = 0

    for s_idx, s_data in enumerate(sections_data):
        section = existing_sections.get(s_data.id) if s_data.id else None
        if section is None:
            section = FormSection(form_template=form)
        section.title = s_data.title
        section.description = s_data.description
        section.order_index = s_idx

        section_questions: list[Question] = []
        for q_data in s_data.questions:
            qtype = _resolve_question_type(db, q_data)
            question = existing_questions.get(q_data.id) if q_data.id else None
            if question is None:
                question = Question(form_template=form)
            question.question_type = qtype
            question.title = q_data.title
            question.help_text = q_data.help_text
            question.is_required = q_data.is_required
            question.config = q_data.config
            question.order_index = question_order
            question.options = _build_options(q_data)
            question_order += 1
            section_questions.append(question)

        section.questions = section_questions
        new_sections.append(section)
        new_questions.extend(section_questions)

    kept_ids = {q.id for q in new_questions if q.id is not None}
    removed_ids = [qid for qid in existing_questions if qid not in kept_ids]
    if removed_ids:
        db.query(SubmissionAnswer).filter(
            SubmissionAnswer.question_id.in_(removed_ids)
        ).delete(synchronize_session=False)

    form.sections = new_sections
    form.questions = new_questions


def create_form(db: Session, user_id: uuid.UUID | None, data: FormCreate) -> FormTemplate:
    """
    Create a template with nested sections, questions and options.

    Raises:
        ValueError: Unknown question type
    """
    form = FormTemplate(
        name=data.name.strip(),
        slug=generate_unique_slug(db, data.name),
        description=data.description,
        section_location=data.section_location.value,
        is_public=data.is_public,
        version=1,
        created_by=user_id,
    )
    db.add(form)
    try:
        _apply_structure(db, form, data.sections)
        db.commit()
    except ValueError:
        db.rollback()
        raise
    db.refresh(form)
    logger.info("Form created", extra={"form_template_id": str(form.id)})
    return form


def update_form(db: Session, form: FormTemplate, data: FormUpdate) -> FormTemplate:
    """
    Update metadata; when sections are supplied replace the structure and bump version.

    Raises:
        ValueError: Unknown question type
    """
    if data.name is not None:
        form.name = data.name.strip()
    if data.description is not None:
        form.description = data.description
    if data.section_location is not None:
        form.section_location = data.section_location.value
    if data.is_public is not None:
        form.is_public = data.is_public
    if data.is_active is not None:
        form.is_active = data.is_active
    try:
        if data.sections is not None:
            _apply_structure(db, form, data.sections)
            form.version = (form.version or 1) + 1
        db.commit()
    except ValueError:
        db.rollback()
        raise
    db.refresh(form)
    return form


def soft_delete_form(db: Session, form: FormTemplate) -> FormTemplate:
    form.is_active = False
    db.commit()
    db.refresh(form)
    logger.info("Form deactivated", extra={"form_template_id": str(form.id)})
    return form


def ordered_questions(form: FormTemplate) -> list[Question]:
    """Questions ordered by section position, then question position."""
    section_order = {s.id: s.order_index for s in form.sections}
    return sorted(
        form.questions,
        key=lambda q: (section_order.get(q.section_id, 0), q.order_index),
    )
