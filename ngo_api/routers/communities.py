"""Community registry of the Comunidades section."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ngo_api.core.deps import get_db, require_csrf_header, require_section
from ngo_api.core.pagination import PaginationParams, get_pagination, pagination_meta
from ngo_api.core.sections import SectionKey
from ngo_api.db.enums import CommunityClassification, CommunityStatus
from ngo_api.schemas.auth import UserSession
from ngo_api.schemas.community import (
    CommunityCreate,
    CommunityListResponse,
    CommunityRead,
    CommunityStats,
    CommunityUpdate,
)
from ngo_api.services import community_service

router = APIRouter(prefix="/communities", tags=["communities"])

require_list_section = require_section(SectionKey.COMUNIDADES_LISTA)


def _get_community_or_404(db: Session, community_id: UUID):
    community = community_service.get_community(db, community_id)
    if not community:
        raise HTTPException(status_code=404, detail="Community not found")
    return community


@router.get(
    "",
    response_model=CommunityListResponse,
    dependencies=[Depends(require_list_section)],
)
def list_communities(
    department: str | None = Query(default=None, max_length=100),
    municipality: str | None = Query(default=None, max_length=100),
    status: CommunityStatus | None = Query(default=None),
    classification: CommunityClassification | None = Query(default=None),
    search: str | None = Query(default=None, max_length=255),
    year: int | None = Query(default=None, ge=2000, le=2100),
    month: int | None = Query(default=None, ge=1, le=12),
    pagination: PaginationParams = Depends(get_pagination),
    db: Session = Depends(get_db),
):
    rows, total = community_service.list_communities(
        db,
        pagination,
        department=department,
        municipality=municipality,
        status=status,
        classification=classification.value if classification else None,
        search=search,
        year=year,
        month=month,
    )
    return {"communities": rows, "pagination": pagination_meta(pagination, total)}


@router.get(
    "/stats",
    response_model=CommunityStats,
    dependencies=[Depends(require_list_section)],
)
def get_community_stats(db: Session = Depends(get_db)):
    return community_service.community_stats(db)


@router.post(
    "",
    response_model=CommunityRead,
    status_code=201,
    dependencies=[Depends(require_csrf_header)],
)
def create_community(
    body: CommunityCreate,
    session: UserSession = Depends(require_list_section),
    db: Session = Depends(get_db),
):
    return community_service.create_community(db, body, session.user_id)


@router.get(
    "/{community_id}",
    response_model=CommunityRead,
    dependencies=[Depends(require_list_section)],
)
def get_community(community_id: UUID, db: Session = Depends(get_db)):
    return _get_community_or_404(db, community_id)


@router.put(
    "/{community_id}",
    response_model=CommunityRead,
    dependencies=[Depends(require_list_section), Depends(require_csrf_header)],
)
def update_community(
    community_id: UUID,
    body: CommunityUpdate,
    db: Session = Depends(get_db),
):
    """Partial update: omitted fields keep their value."""
    community = _get_community_or_404(db, community_id)
    try:
        return community_service.update_community(db, community, body)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.delete(
    "/{community_id}",
    dependencies=[Depends(require_list_section), Depends(require_csrf_header)],
)
def delete_community(community_id: UUID, db: Session = Depends(get_db)):
    community = _get_community_or_404(db, community_id)
    community_service.soft_delete_community(db, community)
    return {"deleted": True, "id": str(community_id)}
