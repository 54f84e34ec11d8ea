"""FastAPI dependencies for authentication, authorization, and database access."""

from typing import Generator
from uuid import UUID

import jwt
from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from ngo_api.core.config import settings
from ngo_api.core.permissions import has_permission, is_valid_permission
from ngo_api.core.security import decode_session_token
from ngo_api.db.session import SessionLocal


# Cookie and header names
COOKIE_NAME = settings.SESSION_COOKIE_NAME
CSRF_HEADER = "X-Requested-With"
CSRF_HEADER_VALUE = "XMLHttpRequest"
MUTATION_METHODS = {"POST", "PUT", "PATCH", "DELETE"}


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency.

    Yields a database session and ensures it's closed after the request.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _bearer_token(request: Request) -> str | None:
    header = request.headers.get("Authorization", "")
    scheme, _, value = header.partition(" ")
    if scheme.lower() == "bearer" and value.strip():
        return value.strip()
    return None


def get_current_user(request: Request, db: Session = Depends(get_db)):
    """
    Get authenticated user from the bearer header or the session cookie.

    Validates:
    - Token exists (Authorization header first, then cookie)
    - JWT is valid and not expired
    - User exists and is active
    - Token version matches (for revocation support)

    Raises:
        HTTPException 401: Authentication failed
    """
    # Import here to avoid circular imports
    from ngo_api.db.models import User

    token = _bearer_token(request) or request.cookies.get(COOKIE_NAME)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    try:
        payload = decode_session_token(token)
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=401, detail="Invalid session")

    user = db.query(User).filter(User.id == _parse_subject(payload)).first()
    if not user:
        raise HTTPException(status_code=401, detail="User not found")

    if not user.is_active:
        raise HTTPException(status_code=401, detail="Account disabled")

    # Token version check (revocation support)
    if user.token_version != payload.get("token_version"):
        raise HTTPException(status_code=401, detail="Session revoked")

    return user


def _parse_subject(payload: dict) -> UUID:
    try:
        return UUID(str(payload.get("sub")))
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid session")


def get_current_session(request: Request, db: Session = Depends(get_db)):
    """
    Get full session context: user_id, role, permissions document.

    This is the PRIMARY auth dependency for most endpoints.

    Raises:
        HTTPException 401: Not authenticated
        HTTPException 403: Unknown role
    """
    from ngo_api.db.enums import Role
    from ngo_api.schemas.auth import UserSession

    user = get_current_user(request, db)

    # Validate role is a known enum value - return 403 not 500
    if not Role.has_value(user.role.name):
        raise HTTPException(
            status_code=403,
            detail=f"Unknown role '{user.role.name}'. Contact administrator.",
        )

    return UserSession(
        user_id=user.id,
        role=Role(user.role.name),
        email=user.email,
        name=user.name,
        permissions=user.role.permissions or {},
        via_cookie=_bearer_token(request) is None,
    )


def require_roles(allowed_roles: list):
    """
    Dependency factory for role-based authorization.

    Usage:
        @router.get("/users", dependencies=[Depends(require_roles([Role.ADMIN]))])
    """
    def dependency(request: Request, db: Session = Depends(get_db)):
        session = get_current_session(request, db)
        if session.role not in allowed_roles:
            raise HTTPException(
                status_code=403,
                detail=f"Role '{session.role.value}' not authorized for this action",
            )
        return session
    return dependency


def require_permission(key: str):
    """Dependency factory checking a dotted key of the role permissions document."""
    if not is_valid_permission(key):
        raise ValueError(f"Unknown permission: {key}")

    def dependency(request: Request, db: Session = Depends(get_db)):
        session = get_current_session(request, db)
        if not has_permission(session.role.value, session.permissions, key):
            raise HTTPException(status_code=403, detail=f"Missing permission '{key}'")
        return session
    return dependency


def require_section(section_key):
    """
    Dependency factory for section-level authorization.

    Admins pass for every section; other roles need a user_section_permissions row.
    The check re-reads the table on each request.
    """
    from ngo_api.services import section_permission_service

    key = getattr(section_key, "value", section_key)

    def dependency(request: Request, db: Session = Depends(get_db)):
        session = get_current_session(request, db)
        if not section_permission_service.is_section_allowed(
            db, session.user_id, session.role.value, key
        ):
            raise HTTPException(status_code=403, detail=f"No access to section '{key}'")
        return session
    return dependency


def ensure_section_access(db: Session, session, section_key) -> None:
    """Inline variant of require_section for keys only known after a lookup."""
    from ngo_api.services import section_permission_service

    key = getattr(section_key, "value", section_key)
    if not section_permission_service.is_section_allowed(
        db, session.user_id, session.role.value, key
    ):
        raise HTTPException(status_code=403, detail=f"No access to section '{key}'")


def require_csrf_header(request: Request) -> None:
    """
    Verify CSRF header on cookie-authenticated mutations.

    Bearer-authenticated and cookieless requests are exempt.

    Raises:
        HTTPException 403: Missing or invalid CSRF header
    """
    if request.method not in MUTATION_METHODS:
        return
    if _bearer_token(request) or not request.cookies.get(COOKIE_NAME):
        return
    if request.headers.get(CSRF_HEADER) != CSRF_HEADER_VALUE:
        raise HTTPException(
            status_code=403,
            detail=f"Missing CSRF header. Include '{CSRF_HEADER}: {CSRF_HEADER_VALUE}'",
        )
