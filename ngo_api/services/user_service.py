"""User service - admin user management and session revocation."""

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from ngo_api.core.security import hash_password
from ngo_api.db.enums import Role
from ngo_api.db.models import User
from ngo_api.services import auth_service

logger = logging.getLogger(__name__)


def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.created_at.desc(), User.email).all()


def get_user_by_id(db: Session, user_id: UUID) -> User | None:
    """Get user by ID."""
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get user by email (case-insensitive)."""
    return db.query(User).filter(User.email == email.strip().lower()).first()


def create_user(
    db: Session,
    email: str,
    password: str,
    name: str,
    role: Role,
    is_active: bool = True,
) -> User:
    """
    Create a user with an explicit role.

    Raises:
        ValueError: Email already registered
    """
    if get_user_by_email(db, email):
        raise ValueError("Email already registered")
    user = User(
        email=email.strip().lower(),
        name=name.strip(),
        password_hash=hash_password(password),
        role=auth_service.get_or_create_role(db, role),
        is_active=is_active,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def update_user(
    db: Session,
    user: User,
    email: str | None = None,
    name: str | None = None,
    role: Role | None = None,
    is_active: bool | None = None,
) -> User:
    """
    Update user fields. Disabling or changing role revokes existing sessions.

    Raises:
        ValueError: Email taken by another user
    """
    if email is not None:
        normalized = email.strip().lower()
        other = get_user_by_email(db, normalized)
        if other and other.id != user.id:
            raise ValueError("Email already registered")
        user.email = normalized
    if name is not None:
        user.name = name.strip()
    if role is not None and role.value != user.role.name:
        user.role = auth_service.get_or_create_role(db, role)
        user.token_version += 1
    if is_active is not None and is_active != user.is_active:
        user.is_active = is_active
        if not is_active:
            user.token_version += 1
    db.commit()
    db.refresh(user)
    return user


def delete_user(db: Session, user: User) -> None:
    db.delete(user)
    db.commit()
    logger.info("User deleted", extra={"user_id": str(user.id)})


def revoke_all_sessions(db: Session, user_id: UUID) -> bool:
    """
    Revoke all sessions for a user by bumping token_version.

    Existing tokens with old version will fail validation.

    Returns:
        True if user found and sessions revoked, False if user not found
    """
    user = get_user_by_id(db, user_id)
    if not user:
        return False

    user.token_version += 1
    db.commit()
    return True


def reset_password(db: Session, user: User, new_password: str) -> User:
    """Set a new password and revoke every session issued before the reset."""
    user.password_hash = hash_password(new_password)
    user.token_version += 1
    db.commit()
    db.refresh(user)
    logger.info("Password reset", extra={"user_id": str(user.id)})
    return user
