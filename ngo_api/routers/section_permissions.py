"""Section permission router - which dashboard sections each user may open.

Endpoints for:
- Reading and replacing a user's section set (admin)
- The current user's allowed sections
- The section registry used to build navigation
"""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ngo_api.core.deps import get_current_session, get_db, require_csrf_header, require_roles
from ngo_api.core.sections import ALL_SECTIONS, SECTION_GROUPS, SECTION_LABELS
from ngo_api.db.enums import Role
from ngo_api.db.models import User
from ngo_api.schemas.auth import UserSession
from ngo_api.schemas.sections import (
    SectionPermissionsResponse,
    SectionPermissionsUpdate,
    SectionRegistryResponse,
    UserPermissionsResponse,
)
from ngo_api.services import section_permission_service, user_service

router = APIRouter(tags=["sections"])

require_admin = require_roles([Role.ADMIN])


def _get_user_or_404(db: Session, user_id: UUID) -> User:
    user = user_service.get_user_by_id(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.get(
    "/admin/users/{user_id}/section-permissions",
    response_model=SectionPermissionsResponse,
)
def get_section_permissions(
    user_id: UUID,
    db: Session = Depends(get_db),
    session: UserSession = Depends(require_admin),
):
    _get_user_or_404(db, user_id)
    return {"permissions": section_permission_service.list_permissions(db, user_id)}


@router.put(
    "/admin/users/{user_id}/section-permissions",
    response_model=SectionPermissionsResponse,
    dependencies=[Depends(require_csrf_header)],
)
def replace_section_permissions(
    user_id: UUID,
    body: SectionPermissionsUpdate,
    db: Session = Depends(get_db),
    session: UserSession = Depends(require_admin),
):
    """Replace the whole section set of a user. Unknown keys are rejected."""
    user = _get_user_or_404(db, user_id)
    try:
        rows = section_permission_service.replace_permissions(
            db, user, body.section_keys, actor_user_id=session.user_id
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"permissions": rows}


@router.get("/me/permissions", response_model=UserPermissionsResponse)
def get_my_permissions(
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    user = _get_user_or_404(db, session.user_id)
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "is_active": user.is_active,
        "role": user.role,
        "allowed_sections": section_permission_service.get_allowed_sections(
            db, user.id, session.role.value
        ),
    }


@router.get("/sections", response_model=SectionRegistryResponse)
def list_sections(session: UserSession = Depends(get_current_session)):
    return {
        "sections": [
            {"key": key.value, "label": SECTION_LABELS[key]} for key in ALL_SECTIONS
        ],
        "groups": [
            {
                "name": name,
                "sections": [
                    {"key": key.value, "label": SECTION_LABELS[key]} for key in keys
                ],
            }
            for name, keys in SECTION_GROUPS.items()
        ],
    }
