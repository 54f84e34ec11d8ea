"""Section permission service: which dashboard sections a user may open.

Admin role: always the full registry, no lookup.
Other roles: exactly the user_section_permissions rows, read on every call.
"""

import logging
import uuid

from sqlalchemy.orm import Session

from ngo_api.core.sections import ALL_SECTIONS, SectionKey
from ngo_api.db.enums import Role
from ngo_api.db.models import User, UserSectionPermission

logger = logging.getLogger(__name__)


def get_allowed_sections(db: Session, user_id: uuid.UUID, role_name: str) -> list[str]:
    """Return allowed section keys (registry order for admins, insertion order otherwise)."""
    if role_name == Role.ADMIN.value:
        return [key.value for key in ALL_SECTIONS]

    rows = (
        db.query(UserSectionPermission.section_key)
        .filter(UserSectionPermission.user_id == user_id)
        .order_by(UserSectionPermission.created_at, UserSectionPermission.section_key)
        .all()
    )
    return [row.section_key for row in rows]


def is_section_allowed(
    db: Session, user_id: uuid.UUID, role_name: str, section_key: str
) -> bool:
    if role_name == Role.ADMIN.value:
        return True
    return (
        db.query(UserSectionPermission.id)
        .filter(
            UserSectionPermission.user_id == user_id,
            UserSectionPermission.section_key == section_key,
        )
        .first()
        is not None
    )


def list_permissions(db: Session, user_id: uuid.UUID) -> list[UserSectionPermission]:
    return (
        db.query(UserSectionPermission)
        .filter(UserSectionPermission.user_id == user_id)
        .order_by(UserSectionPermission.created_at, UserSectionPermission.section_key)
        .all()
    )


def replace_permissions(
    db: Session,
    user: User,
    section_keys: list[str],
    actor_user_id: uuid.UUID,
) -> list[UserSectionPermission]:
    """
    Replace the user's section set (delete then insert).

    Raises:
        ValueError: Unknown section key
    """
    unknown = [key for key in section_keys if not SectionKey.has_value(key)]
    if unknown:
        raise ValueError(f"Unknown section keys: {', '.join(unknown)}")

    # Preserve first occurrence order, drop duplicates
    keys = list(dict.fromkeys(section_keys))

    db.query(UserSectionPermission).filter(
        UserSectionPermission.user_id == user.id
    ).delete(synchronize_session=False)
    db.flush()

    rows = [
        UserSectionPermission(user_id=user.id, section_key=key, created_by=actor_user_id)
        for key in keys
    ]
    db.add_all(rows)
    db.commit()

    logger.info(
        "Section permissions replaced",
        extra={"user_id": str(user.id), "count": len(rows), "actor": str(actor_user_id)},
    )
    return list_permissions(db, user.id)
