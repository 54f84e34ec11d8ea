"""Statistics endpoints: per-form aggregates, per-section counts, community demographics."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ngo_api.core.deps import (
    ensure_section_access,
    get_current_session,
    get_db,
    require_section,
)
from ngo_api.core.sections import SectionKey, get_section_views
from ngo_api.schemas.auth import UserSession
from ngo_api.schemas.community import CommunityDemographics
from ngo_api.services import community_service, form_service, statistics_service

router = APIRouter(prefix="/statistics", tags=["statistics"])


@router.get("/forms/{form_id}")
def get_form_statistics(
    form_id: UUID,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    form = form_service.get_form(db, form_id, include_inactive=True)
    if not form:
        raise HTTPException(status_code=404, detail="Form not found")
    views = get_section_views(form.section_location)
    if views is None:
        raise HTTPException(status_code=400, detail=f"Unknown section '{form.section_location}'")
    ensure_section_access(db, session, views.statistics)
    return statistics_service.form_statistics(db, form)


@router.get("/sections")
def get_section_statistics(
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    return {"sections": statistics_service.section_statistics(db)}


@router.get(
    "/communities",
    response_model=CommunityDemographics,
    dependencies=[Depends(require_section(SectionKey.COMUNIDADES_ESTADISTICA))],
)
def get_community_statistics(db: Session = Depends(get_db)):
    """Headcounts by age cohort and gender over the community registry."""
    return community_service.community_demographics(db)
