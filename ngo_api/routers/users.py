"""User administration router (admin role only)."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ngo_api.core.deps import get_db, require_csrf_header, require_roles
from ngo_api.db.enums import Role
from ngo_api.schemas.auth import UserSession
from ngo_api.schemas.user import PasswordReset, UserCreate, UserRead, UserUpdate
from ngo_api.services import user_service

router = APIRouter(prefix="/users", tags=["users"])

require_admin = require_roles([Role.ADMIN])


def _get_user_or_404(db: Session, user_id: UUID):
    user = user_service.get_user_by_id(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.get("", response_model=list[UserRead])
def list_users(
    db: Session = Depends(get_db),
    session: UserSession = Depends(require_admin),
):
    return user_service.list_users(db)


@router.post(
    "",
    response_model=UserRead,
    status_code=201,
    dependencies=[Depends(require_csrf_header)],
)
def create_user(
    body: UserCreate,
    db: Session = Depends(get_db),
    session: UserSession = Depends(require_admin),
):
    try:
        return user_service.create_user(
            db,
            email=body.email,
            password=body.password,
            name=body.name,
            role=body.role,
            is_active=body.is_active,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.get("/{user_id}", response_model=UserRead)
def get_user(
    user_id: UUID,
    db: Session = Depends(get_db),
    session: UserSession = Depends(require_admin),
):
    return _get_user_or_404(db, user_id)


@router.put("/{user_id}", response_model=UserRead, dependencies=[Depends(require_csrf_header)])
def update_user(
    user_id: UUID,
    body: UserUpdate,
    db: Session = Depends(get_db),
    session: UserSession = Depends(require_admin),
):
    """
    Update name, email, role or active flag.

    Role changes and deactivation revoke the user's existing sessions.
    Admins cannot demote or deactivate themselves.
    """
    user = _get_user_or_404(db, user_id)
    if user.id == session.user_id and (
        (body.role is not None and body.role != Role.ADMIN) or body.is_active is False
    ):
        raise HTTPException(status_code=400, detail="Cannot demote or deactivate yourself")
    try:
        return user_service.update_user(
            db,
            user,
            email=body.email,
            name=body.name,
            role=body.role,
            is_active=body.is_active,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.delete("/{user_id}", dependencies=[Depends(require_csrf_header)])
def delete_user(
    user_id: UUID,
    db: Session = Depends(get_db),
    session: UserSession = Depends(require_admin),
):
    user = _get_user_or_404(db, user_id)
    if user.id == session.user_id:
        raise HTTPException(status_code=400, detail="Cannot delete yourself")
    user_service.delete_user(db, user)
    return {"deleted": True}


@router.post(
    "/{user_id}/reset-password",
    dependencies=[Depends(require_csrf_header)],
)
def reset_password(
    user_id: UUID,
    body: PasswordReset,
    db: Session = Depends(get_db),
    session: UserSession = Depends(require_admin),
):
    """Set a new password. Every session issued before the reset is revoked."""
    user = _get_user_or_404(db, user_id)
    user_service.reset_password(db, user, body.new_password)
    return {"status": "password_reset"}
