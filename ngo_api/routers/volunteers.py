"""Volunteer shift registry of the Voluntariado board."""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ngo_api.core.deps import get_db, require_csrf_header, require_section
from ngo_api.core.pagination import PaginationParams, get_pagination, pagination_meta
from ngo_api.core.sections import SectionKey
from ngo_api.db.enums import VolunteerShift, VolunteerType
from ngo_api.schemas.auth import UserSession
from ngo_api.schemas.volunteer import (
    VolunteerCreate,
    VolunteerListResponse,
    VolunteerRead,
    VolunteerRegistryStats,
    VolunteerUpdate,
)
from ngo_api.services import volunteer_service

router = APIRouter(prefix="/volunteers", tags=["volunteers"])

require_board_section = require_section(SectionKey.VOLUNTARIADO_TABLERO)


def _get_volunteer_or_404(db: Session, volunteer_id: UUID):
    volunteer = volunteer_service.get_volunteer(db, volunteer_id)
    if not volunteer:
        raise HTTPException(status_code=404, detail="Volunteer not found")
    return volunteer


@router.get(
    "",
    response_model=VolunteerListResponse,
    dependencies=[Depends(require_board_section)],
)
def list_volunteers(
    search: str | None = Query(default=None, max_length=255),
    volunteer_type: VolunteerType | None = Query(default=None),
    organization: str | None = Query(default=None, max_length=255),
    shift: VolunteerShift | None = Query(default=None),
    is_active: bool | None = Query(default=None),
    work_date: date | None = Query(default=None),
    year: int | None = Query(default=None, ge=2000, le=2100),
    month: int | None = Query(default=None, ge=1, le=12),
    pagination: PaginationParams = Depends(get_pagination),
    db: Session = Depends(get_db),
):
    rows, total = volunteer_service.list_volunteers(
        db,
        pagination,
        search=search,
        volunteer_type=volunteer_type,
        organization=organization,
        shift=shift,
        is_active=is_active,
        work_date=work_date,
        year=year,
        month=month,
    )
    return {"volunteers": rows, "pagination": pagination_meta(pagination, total)}


@router.get(
    "/stats",
    response_model=VolunteerRegistryStats,
    dependencies=[Depends(require_board_section)],
)
def get_volunteer_stats(db: Session = Depends(get_db)):
    return volunteer_service.volunteer_registry_stats(db)


@router.post(
    "",
    response_model=VolunteerRead,
    status_code=201,
    dependencies=[Depends(require_csrf_header)],
)
def create_volunteer(
    body: VolunteerCreate,
    session: UserSession = Depends(require_board_section),
    db: Session = Depends(get_db),
):
    try:
        return volunteer_service.create_volunteer(db, body, session.user_id)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.get(
    "/{volunteer_id}",
    response_model=VolunteerRead,
    dependencies=[Depends(require_board_section)],
)
def get_volunteer(volunteer_id: UUID, db: Session = Depends(get_db)):
    return _get_volunteer_or_404(db, volunteer_id)


@router.put(
    "/{volunteer_id}",
    response_model=VolunteerRead,
    dependencies=[Depends(require_board_section), Depends(require_csrf_header)],
)
def update_volunteer(
    volunteer_id: UUID,
    body: VolunteerUpdate,
    db: Session = Depends(get_db),
):
    """Partial update: omitted fields keep their value."""
    volunteer = _get_volunteer_or_404(db, volunteer_id)
    try:
        return volunteer_service.update_volunteer(db, volunteer, body)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.delete(
    "/{volunteer_id}",
    dependencies=[Depends(require_board_section), Depends(require_csrf_header)],
)
def delete_volunteer(volunteer_id: UUID, db: Session = Depends(get_db)):
    volunteer = _get_volunteer_or_404(db, volunteer_id)
    volunteer_service.soft_delete_volunteer(db, volunteer)
    return {"deleted": True, "id": str(volunteer_id)}
