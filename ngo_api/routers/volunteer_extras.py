"""Volunteer extras: hours, benefits and amounts attached to volunteering submissions."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ngo_api.core.deps import get_db, require_csrf_header, require_section
from ngo_api.core.sections import SectionKey, get_section_views
from ngo_api.db.enums import ExtrasKind
from ngo_api.schemas.extras import VolunteerExtrasRead, VolunteerExtrasWrite, VolunteerStats
from ngo_api.services import extras_service, submission_service

router = APIRouter(
    prefix="/volunteer-extras",
    tags=["extras"],
    dependencies=[Depends(require_section(SectionKey.VOLUNTARIADO_TABLERO))],
)


@router.post("", response_model=VolunteerExtrasRead, dependencies=[Depends(require_csrf_header)])
def upsert_volunteer_extras(body: VolunteerExtrasWrite, db: Session = Depends(get_db)):
    """Create or update the extras row of a submission (one row per submission)."""
    submission = submission_service.get_submission_by_id(db, body.submission_id)
    if not submission:
        raise HTTPException(status_code=404, detail="Submission not found")
    views = get_section_views(submission.section_location)
    if views is None or views.extras != ExtrasKind.VOLUNTEER:
        raise HTTPException(
            status_code=400, detail="Submission does not belong to a volunteering form"
        )

    try:
        row, _ = extras_service.upsert_volunteer_extras(
            db, body.submission_id, body.model_dump(exclude={"submission_id"})
        )
    except ValueError as exc:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return row


@router.get("/stats", response_model=VolunteerStats)
def get_volunteer_stats(db: Session = Depends(get_db)):
    return extras_service.volunteer_stats(db)


@router.get("/{submission_id}", response_model=VolunteerExtrasRead)
def get_volunteer_extras(submission_id: UUID, db: Session = Depends(get_db)):
    row = extras_service.get_extras(db, ExtrasKind.VOLUNTEER, submission_id)
    if not row:
        raise HTTPException(status_code=404, detail="Volunteer extras not found")
    return row
