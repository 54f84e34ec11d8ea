"""Authentication service - role seeding, registration, credential checks, session creation."""

import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from ngo_api.core.permissions import ROLE_DEFAULTS, ROLE_DESCRIPTIONS, build_permissions_document
from ngo_api.core.security import create_session_token, hash_password, verify_password
from ngo_api.db.enums import DEFAULT_ROLE, Role
from ngo_api.db.models import Role as RoleModel
from ngo_api.db.models import User

logger = logging.getLogger(__name__)


def ensure_roles(db: Session) -> dict[str, RoleModel]:
    """Create missing role rows with their default permissions documents."""
    existing = {r.name: r for r in db.query(RoleModel).all()}
    created = False
    for role in Role:
        if role.value in existing:
            continue
        row = RoleModel(
            name=role.value,
            description=ROLE_DESCRIPTIONS[role],
            permissions=build_permissions_document(ROLE_DEFAULTS[role]),
        )
        db.add(row)
        existing[role.value] = row
        created = True
    if created:
        db.flush()
    return existing


def get_role(db: Session, name: str) -> RoleModel | None:
    return db.query(RoleModel).filter(RoleModel.name == name).first()


def get_or_create_role(db: Session, role: Role) -> RoleModel:
    return ensure_roles(db)[role.value]


def register_user(db: Session, email: str, password: str, name: str) -> User:
    """
    Create a self-registered user with the default role.

    Raises:
        ValueError: Email already registered
    """
    email = email.strip().lower()
    if db.query(User.id).filter(User.email == email).first():
        raise ValueError("Email already registered")

    user = User(
        email=email,
        name=name.strip(),
        password_hash=hash_password(password),
        role=get_or_create_role(db, DEFAULT_ROLE),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("User registered", extra={"user_id": str(user.id)})
    return user


def authenticate(db: Session, email: str, password: str) -> User | None:
    """Return the active user matching the credentials, or None."""
    user = db.query(User).filter(User.email == email.strip().lower()).first()
    if not user or not verify_password(password, user.password_hash):
        return None
    if not user.is_active:
        return None
    return user


def create_session_for_user(db: Session, user: User) -> str:
    """Stamp last login and issue a session token."""
    user.last_login_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(user)
    return create_session_token(user.id, user.role.name, user.token_version)
