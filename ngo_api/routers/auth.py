"""Authentication router: email/password login and session management."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.orm import Session

from ngo_api.core.config import settings
from ngo_api.core.deps import (
    COOKIE_NAME,
    get_current_session,
    get_db,
    require_csrf_header,
)
from ngo_api.core.rate_limit import AUTH_LIMIT, limiter
from ngo_api.db.models import User
from ngo_api.schemas.auth import LoginRequest, LoginResponse, MeResponse, RegisterRequest, UserSession
from ngo_api.services import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=COOKIE_NAME,
        value=token,
        max_age=settings.JWT_EXPIRES_HOURS * 3600,
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
        path="/",
    )


# =============================================================================
# Credentials
# =============================================================================

@router.post("/register", response_model=MeResponse, status_code=201)
@limiter.limit(AUTH_LIMIT)
def register(request: Request, body: RegisterRequest, db: Session = Depends(get_db)):
    """Self-registration. New accounts get the default (viewer) role."""
    try:
        user = auth_service.register_user(db, body.email, body.password, body.name)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return user


@router.post("/login", response_model=LoginResponse)
@limiter.limit(AUTH_LIMIT)
def login(
    request: Request,
    response: Response,
    body: LoginRequest,
    db: Session = Depends(get_db),
):
    """
    Verify credentials and open a session.

    The token is returned in the body (for Bearer clients) and set as an
    httpOnly cookie (for the browser dashboard).
    """
    user = auth_service.authenticate(db, body.email, body.password)
    if not user:
        logger.info("Login rejected", extra={"route": "/auth/login"})
        raise HTTPException(status_code=401, detail="Invalid email or password")

    token = auth_service.create_session_for_user(db, user)
    _set_session_cookie(response, token)
    return {"user": user, "token": token}


# =============================================================================
# Session Endpoints
# =============================================================================

@router.post("/logout", dependencies=[Depends(require_csrf_header)])
def logout(response: Response):
    """Clear the session cookie. Bearer tokens stay valid until they expire."""
    response.delete_cookie(COOKIE_NAME, path="/")
    return {"status": "logged_out"}


@router.get("/me", response_model=MeResponse)
def get_me(
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Current user with role. Used by the dashboard to bootstrap auth state."""
    return db.query(User).filter(User.id == session.user_id).first()


@router.get("/verify")
def verify(session: UserSession = Depends(get_current_session)):
    return {
        "valid": True,
        "user_id": str(session.user_id),
        "email": session.email,
        "role": session.role.value,
    }
