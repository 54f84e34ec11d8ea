"""Public form endpoints for anonymous respondents."""

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from ngo_api.core.deps import get_db
from ngo_api.core.rate_limit import PUBLIC_SUBMIT_LIMIT, limiter
from ngo_api.schemas.forms import FormRead
from ngo_api.schemas.submission import PublicSubmissionCreate, SubmissionCreateResponse
from ngo_api.services import form_service, submission_service

router = APIRouter(prefix="/public/forms", tags=["forms-public"])


@router.get("/{slug}", response_model=FormRead)
def get_public_form(slug: str, db: Session = Depends(get_db)):
    """Only forms that are both public and active are visible."""
    form = form_service.get_public_form_by_slug(db, slug)
    if not form:
        raise HTTPException(status_code=404, detail="Form not found")
    return FormRead.model_validate(form)


@router.post("/{slug}/submit", response_model=SubmissionCreateResponse, status_code=201)
@limiter.limit(PUBLIC_SUBMIT_LIMIT)
def submit_public_form(
    request: Request,
    slug: str,
    body: PublicSubmissionCreate,
    db: Session = Depends(get_db),
):
    form = form_service.get_public_form_by_slug(db, slug)
    if not form:
        raise HTTPException(status_code=404, detail="Form not found")
    try:
        submission, answers, projection = submission_service.create_submission(
            db,
            form,
            user_id=None,
            answers=[a.model_dump() for a in body.answers],
            time_spent_seconds=body.time_spent_seconds,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"submission": submission, "answers": answers, "extras": asdict(projection)}
