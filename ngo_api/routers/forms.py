"""Form builder endpoints: templates with nested sections, questions and options."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ngo_api.core.deps import get_db, require_csrf_header, require_permission
from ngo_api.db.models import FormTemplate
from ngo_api.schemas.auth import UserSession
from ngo_api.schemas.forms import FormCreate, FormRead, FormSummary, FormUpdate
from ngo_api.services import form_service

router = APIRouter(prefix="/forms", tags=["forms"])


def _form_read(db: Session, form: FormTemplate) -> FormRead:
    read = FormRead.model_validate(form)
    read.submission_count = form_service.count_submissions(db, form.id)
    return read


def _get_form_or_404(db: Session, form_id: UUID) -> FormTemplate:
    form = form_service.get_form(db, form_id)
    if not form:
        raise HTTPException(status_code=404, detail="Form not found")
    return form


@router.get(
    "",
    response_model=list[FormSummary],
    dependencies=[Depends(require_permission("forms.read"))],
)
def list_forms(
    section_location: str | None = Query(default=None),
    db: Session = Depends(get_db),
):
    """Active forms, optionally filtered by section, with submission counts."""
    try:
        location = form_service.parse_section_location(section_location)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    summaries = []
    for form, count in form_service.list_forms(db, location):
        summary = FormSummary.model_validate(form)
        summary.submission_count = count
        summaries.append(summary)
    return summaries


@router.post(
    "",
    response_model=FormRead,
    status_code=201,
    dependencies=[Depends(require_csrf_header)],
)
def create_form(
    body: FormCreate,
    session: UserSession = Depends(require_permission("forms.create")),
    db: Session = Depends(get_db),
):
    try:
        form = form_service.create_form(db, session.user_id, body)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _form_read(db, form)


@router.get(
    "/{form_id}",
    response_model=FormRead,
    dependencies=[Depends(require_permission("forms.read"))],
)
def get_form(form_id: UUID, db: Session = Depends(get_db)):
    return _form_read(db, _get_form_or_404(db, form_id))


@router.put(
    "/{form_id}",
    response_model=FormRead,
    dependencies=[
        Depends(require_permission("forms.update")),
        Depends(require_csrf_header),
    ],
)
def update_form(form_id: UUID, body: FormUpdate, db: Session = Depends(get_db)):
    """
    Update metadata. When `sections` is present the structure is replaced
    (matched by id, new rows created, missing rows removed) and the version bumped.
    """
    form = _get_form_or_404(db, form_id)
    try:
        form = form_service.update_form(db, form, body)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _form_read(db, form)


@router.delete(
    "/{form_id}",
    dependencies=[
        Depends(require_permission("forms.delete")),
        Depends(require_csrf_header),
    ],
)
def delete_form(form_id: UUID, db: Session = Depends(get_db)):
    """Soft delete: the template is deactivated, submissions are kept."""
    form = _get_form_or_404(db, form_id)
    form_service.soft_delete_form(db, form)
    return {"deleted": True, "id": str(form.id)}
