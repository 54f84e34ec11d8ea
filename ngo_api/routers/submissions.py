"""Form submission endpoints: create, table views, detail, edit, delete."""

from dataclasses import asdict
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ngo_api.core.deps import (
    ensure_section_access,
    get_current_session,
    get_db,
    require_csrf_header,
    require_permission,
)
from ngo_api.core.pagination import PaginationParams, get_pagination
from ngo_api.core.sections import get_section_views
from ngo_api.db.models import FormTemplate
from ngo_api.schemas.auth import UserSession
from ngo_api.schemas.submission import (
    PaginatedSubmissionTable,
    SubmissionCount,
    SubmissionCreate,
    SubmissionCreateResponse,
    SubmissionDetail,
    SubmissionRead,
    SubmissionTable,
    SubmissionUpdate,
)
from ngo_api.services import form_service, submission_service

router = APIRouter(prefix="/submissions", tags=["submissions"])


def _get_form_for_review(db: Session, session: UserSession, form_id: UUID) -> FormTemplate:
    """Load a template (deactivated ones included) and check its section's forms view."""
    form = form_service.get_form(db, form_id, include_inactive=True)
    if not form:
        raise HTTPException(status_code=404, detail="Form not found")
    views = get_section_views(form.section_location)
    if views is None:
        raise HTTPException(status_code=400, detail=f"Unknown section '{form.section_location}'")
    ensure_section_access(db, session, views.forms)
    return form


def _get_submission_or_404(db: Session, form_id: UUID, submission_id: UUID):
    submission = submission_service.get_submission(db, form_id, submission_id)
    if not submission:
        raise HTTPException(status_code=404, detail="Submission not found")
    return submission


@router.post(
    "",
    response_model=SubmissionCreateResponse,
    status_code=201,
    dependencies=[Depends(require_csrf_header)],
)
def create_submission(
    body: SubmissionCreate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """
    Validate answers against the template, store them, and project extras.

    The response reports the extras projection separately: a failed projection
    does not fail the request.
    """
    form = form_service.get_form(db, body.form_template_id)
    if not form:
        raise HTTPException(status_code=404, detail="Form not found")
    try:
        submission, answers, projection = submission_service.create_submission(
            db,
            form,
            user_id=session.user_id,
            answers=[a.model_dump() for a in body.answers],
            time_spent_seconds=body.time_spent_seconds,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"submission": submission, "answers": answers, "extras": asdict(projection)}


@router.get("/{form_id}", response_model=SubmissionTable)
def get_submissions_table(
    form_id: UUID,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    form = _get_form_for_review(db, session, form_id)
    return submission_service.build_table(db, form)


@router.get("/{form_id}/paginated", response_model=PaginatedSubmissionTable)
def get_submissions_page(
    form_id: UUID,
    pagination: PaginationParams = Depends(get_pagination),
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    form = _get_form_for_review(db, session, form_id)
    return submission_service.build_paginated_table(db, form, pagination)


@router.get("/{form_id}/count", response_model=SubmissionCount)
def count_submissions(
    form_id: UUID,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    form = _get_form_for_review(db, session, form_id)
    return {"form_id": form.id, "count": submission_service.count_submissions(db, form.id)}


@router.get("/{form_id}/{submission_id}", response_model=SubmissionDetail)
def get_submission_detail(
    form_id: UUID,
    submission_id: UUID,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    form = _get_form_for_review(db, session, form_id)
    submission = _get_submission_or_404(db, form.id, submission_id)
    return submission_service.build_detail(db, form, submission)


@router.put(
    "/{form_id}/{submission_id}",
    response_model=SubmissionRead,
    dependencies=[Depends(require_csrf_header)],
)
def update_submission(
    form_id: UUID,
    submission_id: UUID,
    body: SubmissionUpdate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Update answers by question id. Extras are edited through their own endpoints."""
    form = _get_form_for_review(db, session, form_id)
    submission = _get_submission_or_404(db, form.id, submission_id)
    try:
        return submission_service.update_submission_answers(
            db, form, submission, [a.model_dump() for a in body.answers]
        )
    except ValueError as exc:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.delete("/{form_id}/{submission_id}", dependencies=[Depends(require_csrf_header)])
def delete_submission(
    form_id: UUID,
    submission_id: UUID,
    session: UserSession = Depends(require_permission("submissions.delete")),
    db: Session = Depends(get_db),
):
    form = _get_form_for_review(db, session, form_id)
    submission = _get_submission_or_404(db, form.id, submission_id)
    submission_service.delete_submission(db, submission)
    return {"deleted": True, "id": str(submission_id)}
